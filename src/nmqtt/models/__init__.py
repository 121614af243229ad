"""Pydantic model base classes and field helpers for nmqtt packets."""

from __future__ import annotations

from .base import BasePacket, EmptyPacket
from .fields import COUNT_MAX, U16, U16_MAX, CountPrefixed

__all__ = [
    "BasePacket",
    "EmptyPacket",
    "U16",
    "CountPrefixed",
    "U16_MAX",
    "COUNT_MAX",
]
