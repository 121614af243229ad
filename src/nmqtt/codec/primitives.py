"""Byte-level field readers and writers.

This module provides the primitive codecs every packet is built from:
fixed-width big-endian integers and u16 length-prefixed byte strings.

Readers take the buffer and an offset, check bounds before touching any byte,
and raise BufferTooShortError with the exact length they needed. Writers only
ever append to a bytearray.
"""

from __future__ import annotations

import struct

from ..exceptions import BufferTooShortError, InvalidUtf8Error

_U16 = struct.Struct(">H")


def _require(buf: bytes, end: int) -> None:
    if len(buf) < end:
        raise BufferTooShortError(expected=end, actual=len(buf))


def read_u8(buf: bytes, offset: int) -> int:
    """Read a single unsigned byte.

    Args:
        buf: Buffer to read from
        offset: Position of the byte

    Returns:
        Byte value (0-255)

    Raises:
        BufferTooShortError: If the buffer holds fewer than offset + 1 bytes
    """
    _require(buf, offset + 1)
    return buf[offset]


def read_u16(buf: bytes, offset: int) -> int:
    """Read a big-endian unsigned 16-bit integer.

    Args:
        buf: Buffer to read from
        offset: Position of the high byte

    Returns:
        Integer value (0-65535)

    Raises:
        BufferTooShortError: If the buffer holds fewer than offset + 2 bytes

    Example:
        >>> read_u16(b"\\x00\\x78", 0)
        120
    """
    _require(buf, offset + 2)
    return _U16.unpack_from(buf, offset)[0]


def read_binary(buf: bytes, offset: int) -> tuple[bytes, int]:
    """Read a u16 length prefix followed by that many raw bytes.

    Args:
        buf: Buffer to read from
        offset: Position of the length prefix

    Returns:
        Tuple of (data, offset immediately after the data)

    Raises:
        BufferTooShortError: If the prefix or the data runs past the buffer
    """
    length = read_u16(buf, offset)
    start = offset + 2
    end = start + length
    _require(buf, end)
    return bytes(buf[start:end]), end


def read_string(buf: bytes, offset: int) -> tuple[str, int]:
    """Read a u16 length-prefixed UTF-8 string.

    Returns the string and the offset immediately following it, so fields
    can be parsed one after another.

    Args:
        buf: Buffer to read from
        offset: Position of the length prefix

    Returns:
        Tuple of (text, offset immediately after the string)

    Raises:
        BufferTooShortError: If the prefix or the text runs past the buffer
        InvalidUtf8Error: If the bytes are not valid UTF-8

    Example:
        >>> read_string(b"\\x00\\x02hi!", 0)
        ('hi', 4)
    """
    data, end = read_binary(buf, offset)
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as err:
        raise InvalidUtf8Error() from err
    return text, end


def write_u8(buf: bytearray, value: int) -> None:
    """Append a single unsigned byte."""
    buf.append(value)


def write_u16(buf: bytearray, value: int) -> None:
    """Append a big-endian unsigned 16-bit integer."""
    buf.extend(_U16.pack(value))


def write_binary(buf: bytearray, data: bytes) -> None:
    """Append a u16 length prefix followed by the raw bytes.

    No length validation is performed; callers keep data under 65536 bytes
    and within the frame ceiling.
    """
    write_u16(buf, len(data))
    buf.extend(data)


def write_string(buf: bytearray, text: str) -> None:
    """Append a u16 byte-length prefix followed by the UTF-8 bytes of text.

    Args:
        buf: Output buffer
        text: String to write

    Example:
        >>> buf = bytearray()
        >>> write_string(buf, "hi")
        >>> bytes(buf)
        b'\\x00\\x02hi'
    """
    write_binary(buf, text.encode("utf-8"))


def binary_len(data: bytes) -> int:
    """Return the encoded size of a length-prefixed byte string."""
    return 2 + len(data)


def string_len(text: str) -> int:
    """Return the encoded size of a length-prefixed string (UTF-8 bytes, not characters)."""
    return 2 + len(text.encode("utf-8"))
