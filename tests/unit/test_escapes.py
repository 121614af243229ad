"""Unit tests for hex and escape input parsing."""

from __future__ import annotations

import pytest

from nmqtt.exceptions import ParseError
from nmqtt.utils import parse_hex, parse_text_with_escapes


class TestParseHex:
    """Test hex-string parsing."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("deadbeef", b"\xde\xad\xbe\xef"),
            ("de ad BE ef", b"\xde\xad\xbe\xef"),
            ("  0a\t0b\n", b"\x0a\x0b"),
            ("", b""),
        ],
    )
    def test_valid(self, text: str, expected: bytes) -> None:
        """Test whitespace is ignored and case does not matter."""
        assert parse_hex(text) == expected

    def test_odd_digit_count(self) -> None:
        """Test an odd number of digits."""
        with pytest.raises(ParseError, match="odd number"):
            parse_hex("abc")

    def test_non_hex_characters(self) -> None:
        """Test characters outside 0-9a-f."""
        with pytest.raises(ParseError, match="invalid hex"):
            parse_hex("zz")

    def test_parse_error_is_value_error(self) -> None:
        """Test ParseError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_hex("0")


class TestParseTextWithEscapes:
    """Test C-style escape expansion."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("hello", b"hello"),
            ("a\\nb", b"a\nb"),
            ("\\r\\t\\0", b"\r\t\x00"),
            ("\\\\", b"\\"),
            ("\\x41\\X42", b"AB"),
            ("\\xff", b"\xff"),
        ],
    )
    def test_escapes(self, text: str, expected: bytes) -> None:
        """Test each supported escape."""
        assert parse_text_with_escapes(text) == expected

    def test_invalid_hex_escape_kept_literally(self) -> None:
        """Test a bad \\x sequence is emitted with the characters it consumed."""
        assert parse_text_with_escapes("\\xZZ!") == b"\\xZZ!"

    def test_short_hex_escape_at_end(self) -> None:
        """Test \\x with fewer than two characters left."""
        assert parse_text_with_escapes("ab\\x4") == b"ab\\x4"
        assert parse_text_with_escapes("\\x") == b"\\x"

    def test_unknown_escape_keeps_backslash(self) -> None:
        """Test an unrecognised escape leaves the backslash and next character."""
        assert parse_text_with_escapes("\\q") == b"\\q"

    def test_trailing_backslash(self) -> None:
        """Test a lone backslash at the end."""
        assert parse_text_with_escapes("end\\") == b"end\\"

    def test_non_ascii_encoded_as_utf8(self) -> None:
        """Test characters outside ASCII keep every byte."""
        assert parse_text_with_escapes("é\\n") == b"\xc3\xa9\n"
