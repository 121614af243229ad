"""Helpers turning typed user input into raw datagram bytes.

This module provides hex-string parsing and C-style escape handling for the
interactive client's text and hex input modes.
"""

from __future__ import annotations

import string

from ..exceptions import ParseError

_SIMPLE_ESCAPES = {
    "n": b"\n",
    "r": b"\r",
    "t": b"\t",
    "0": b"\x00",
    "\\": b"\\",
}


def parse_hex(text: str) -> bytes:
    """Parse a string of hex digits into bytes.

    Whitespace anywhere in the input is ignored.

    Args:
        text: Hex digits, e.g. "de ad be ef"

    Returns:
        Decoded bytes

    Raises:
        ParseError: If the digit count is odd or a character is not hex

    Example:
        >>> parse_hex("de ad BE ef")
        b'\\xde\\xad\\xbe\\xef'
    """
    digits = "".join(text.split())
    if len(digits) % 2 != 0:
        raise ParseError("odd number of hex digits")

    try:
        return bytes.fromhex(digits)
    except ValueError as err:
        raise ParseError(f"invalid hex digits: {digits!r}") from err


def parse_text_with_escapes(text: str) -> bytes:
    """Encode text as UTF-8, expanding backslash escapes.

    Supported escapes are ``\\xHH``, ``\\n``, ``\\r``, ``\\t``, ``\\0`` and
    ``\\\\``. A ``\\x`` not followed by two hex digits is kept literally along
    with the characters it consumed, and any other backslash is kept as is.

    Args:
        text: User input

    Returns:
        Encoded bytes

    Example:
        >>> parse_text_with_escapes("hi\\\\n\\\\x00")
        b'hi\\n\\x00'
    """
    result = bytearray()
    i = 0
    while i < len(text):
        char = text[i]
        i += 1

        if char != "\\":
            result.extend(char.encode("utf-8"))
            continue

        escape = text[i : i + 1]
        if escape in ("x", "X"):
            hex_digits = text[i + 1 : i + 3]
            i += 1 + len(hex_digits)
            if len(hex_digits) == 2 and all(c in string.hexdigits for c in hex_digits):
                result.append(int(hex_digits, 16))
            else:
                result.extend(b"\\x")
                result.extend(hex_digits.encode("utf-8"))
        elif escape in _SIMPLE_ESCAPES:
            result.extend(_SIMPLE_ESCAPES[escape])
            i += 1
        else:
            result.extend(b"\\")

    return bytes(result)
