"""Exception hierarchy for nmqtt.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from NmqttError for easy catching of any nmqtt-specific error.

Decode failures carry their diagnostic values as attributes so callers can
report exactly why a datagram was rejected.
"""

from __future__ import annotations


class NmqttError(Exception):
    """Base exception for all nmqtt errors."""

    pass


class DecodeError(NmqttError):
    """Raised when decoding binary data fails.

    Examples:
        - Truncated data (insufficient bytes)
        - Invalid enumeration value (unknown message type, QoS, return code)
        - String field that is not valid UTF-8
        - Structurally invalid frame
    """

    pass


class BufferTooShortError(DecodeError):
    """Raised when a field needs more bytes than the buffer holds.

    Attributes:
        expected: Buffer length required to read the field
        actual: Buffer length actually available
    """

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"buffer too short: expected {expected}, got {actual}")


class InvalidMessageTypeError(DecodeError):
    """Raised when the frame type byte is not a known message type."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"invalid message type: 0x{value:02X}")


class InvalidQoSError(DecodeError):
    """Raised when a QoS field holds a value other than 0, 1 or 2."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"invalid QoS: {value}")


class InvalidReturnCodeError(DecodeError):
    """Raised when a ConnAck or SubAck return code is unknown."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"invalid return code: 0x{value:02X}")


class InvalidUtf8Error(DecodeError):
    """Raised when a length-prefixed string field is not valid UTF-8."""

    def __init__(self) -> None:
        super().__init__("invalid UTF-8 string")


class MalformedPacketError(DecodeError):
    """Raised for structural violations not covered by the other decode errors.

    Attributes:
        reason: Short description of the violation
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"malformed packet: {reason}")


class EncodeError(NmqttError):
    """Raised when encoding a frame fails."""

    pass


class PayloadTooLargeError(EncodeError):
    """Raised when a frame would not fit in the one-byte length header.

    Attributes:
        size: Encoded frame length that was requested
        limit: Maximum frame length
    """

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"payload exceeds maximum size: frame is {size} bytes, limit is {limit}")


class ParseError(NmqttError, ValueError):
    """Raised when user input (commands, hex strings) cannot be parsed.

    Examples:
        - Unknown command word
        - Odd number of hex digits
        - QoS option outside 0-2
    """

    pass


class TransportError(NmqttError):
    """Raised when a transport is misused.

    Examples:
        - Sending before open()
        - Datagram larger than max_datagram_size
    """

    pass
