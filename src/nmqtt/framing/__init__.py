"""Frame envelope and message id utilities for nmqtt.

This module provides the Frame model that wraps one packet per datagram,
helpers to frame and unframe packets, and the message id allocator.
"""

from __future__ import annotations

from .frame import Frame, frame_packet, unframe_packet
from .msgid import MessageIdAllocator, next_msg_id

__all__ = [
    "Frame",
    "frame_packet",
    "unframe_packet",
    "MessageIdAllocator",
    "next_msg_id",
]
