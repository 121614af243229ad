"""Enumerated wire values.

Each enumeration maps one-to-one onto a single wire byte. ``from_byte``
converts a raw byte and rejects anything outside the closed set with the
matching decode error; no value is ever coerced to a default.
"""

from __future__ import annotations

import enum

from ..exceptions import (
    InvalidMessageTypeError,
    InvalidQoSError,
    InvalidReturnCodeError,
)


class MessageType(enum.IntEnum):
    """Frame type byte, one per packet kind."""

    CONNECT = 0x01
    CONNACK = 0x02
    PUBLISH = 0x03
    PUBACK = 0x04
    SUBSCRIBE = 0x05
    SUBACK = 0x06
    PINGREQ = 0x07
    PINGRESP = 0x08
    DISCONNECT = 0x09

    @classmethod
    def from_byte(cls, value: int) -> MessageType:
        """Convert a raw type byte.

        Raises:
            InvalidMessageTypeError: If value is not 0x01-0x09
        """
        try:
            return cls(value)
        except ValueError as err:
            raise InvalidMessageTypeError(value) from err


class QoS(enum.IntEnum):
    """Quality-of-service level carried on Publish and Subscribe filters."""

    AT_MOST_ONCE = 0
    AT_LEAST_ONCE = 1
    EXACTLY_ONCE = 2

    @classmethod
    def from_byte(cls, value: int) -> QoS:
        """Convert a raw QoS value.

        Raises:
            InvalidQoSError: If value is not 0, 1 or 2
        """
        try:
            return cls(value)
        except ValueError as err:
            raise InvalidQoSError(value) from err


class ConnectReturnCode(enum.IntEnum):
    """Outcome of a Connect, carried in ConnAck."""

    ACCEPTED = 0x00
    UNACCEPTABLE_PROTOCOL = 0x01
    IDENTIFIER_REJECTED = 0x02
    SERVER_UNAVAILABLE = 0x03
    BAD_CREDENTIALS = 0x04
    NOT_AUTHORIZED = 0x05

    @classmethod
    def from_byte(cls, value: int) -> ConnectReturnCode:
        """Convert a raw return code.

        Raises:
            InvalidReturnCodeError: If value is not 0x00-0x05
        """
        try:
            return cls(value)
        except ValueError as err:
            raise InvalidReturnCodeError(value) from err


class SubAckReturnCode(enum.IntEnum):
    """Per-filter outcome of a Subscribe, carried in SubAck."""

    SUCCESS_QOS0 = 0x00
    SUCCESS_QOS1 = 0x01
    SUCCESS_QOS2 = 0x02
    FAILURE = 0x80

    @classmethod
    def from_byte(cls, value: int) -> SubAckReturnCode:
        """Convert a raw return code.

        Raises:
            InvalidReturnCodeError: If value is not 0x00-0x02 or 0x80
        """
        try:
            return cls(value)
        except ValueError as err:
            raise InvalidReturnCodeError(value) from err
