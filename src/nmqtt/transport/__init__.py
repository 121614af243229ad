"""Datagram transports for nmqtt.

This module provides a small transport abstraction that moves whole
datagrams, with two implementations:

- **UdpTransport**: connected UDP socket with a background receive thread
- **LoopbackTransport**: in-process echo, for tests and demos

Both share ``send_frame`` / ``send_packet`` from the ``Transport`` base,
which encode frames and allocate message ids.
"""

from __future__ import annotations

from .config import MAX_UDP_PAYLOAD, TransportConfig, parse_address
from .driver import RxCallback, Transport
from .mock import LoopbackTransport
from .udp import UdpTransport

__all__ = [
    "Transport",
    "RxCallback",
    "UdpTransport",
    "LoopbackTransport",
    "TransportConfig",
    "parse_address",
    "MAX_UDP_PAYLOAD",
]
