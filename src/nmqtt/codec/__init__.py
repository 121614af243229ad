"""Primitive codecs and enumerated wire values for nmqtt.

This module provides the byte-level building blocks used by every packet:
bounds-checked readers, append-only writers and the closed enumerations
carried on the wire.
"""

from __future__ import annotations

from .enums import ConnectReturnCode, MessageType, QoS, SubAckReturnCode
from .primitives import (
    binary_len,
    read_binary,
    read_string,
    read_u8,
    read_u16,
    string_len,
    write_binary,
    write_string,
    write_u8,
    write_u16,
)

__all__ = [
    # Enumerations
    "MessageType",
    "QoS",
    "ConnectReturnCode",
    "SubAckReturnCode",
    # Readers
    "read_u8",
    "read_u16",
    "read_binary",
    "read_string",
    # Writers
    "write_u8",
    "write_u16",
    "write_binary",
    "write_string",
    # Sizes
    "binary_len",
    "string_len",
]
