"""Interactive command-line client for nmqtt."""

from __future__ import annotations

from .commands import parse_command
from .display import DisplayMode, format_datagram, format_packet
from .session import InteractiveSession, encode_input

__all__ = [
    "parse_command",
    "DisplayMode",
    "format_datagram",
    "format_packet",
    "InteractiveSession",
    "encode_input",
]
