"""Abstract interface for datagram transports.

This module provides the transport abstraction the client sends frames
through. A transport moves whole datagrams: one send() is one datagram, and
each received datagram is handed to the RX callbacks exactly once. Framing,
encoding and message ids sit above it.

Implementations:
- UdpTransport: a connected UDP socket with a background receive thread
- LoopbackTransport: in-process echo for tests
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..framing.frame import Frame
from ..framing.msgid import MessageIdAllocator
from ..packets import Packet

logger = logging.getLogger(__name__)

RxCallback = Callable[[bytes, str], None]


class Transport(ABC):
    """Abstract datagram transport.

    Examples:
        ```python
        from nmqtt.packets import Publish
        from nmqtt.transport import LoopbackTransport

        def on_receive(data: bytes, source: str) -> None:
            print(f"Received {len(data)} bytes from {source}")

        with LoopbackTransport() as transport:
            transport.attach_rx_callback(on_receive)
            transport.send_packet(Publish(topic="a/b", payload=b"1"))
        ```
    """

    def __init__(self, msg_ids: Optional[MessageIdAllocator] = None) -> None:
        self.msg_ids = msg_ids if msg_ids is not None else MessageIdAllocator()
        self.rx_callbacks: list[RxCallback] = []

    @abstractmethod
    def open(self) -> None:
        """Start the transport and its receive loop.

        Raises:
            OSError: If the underlying socket cannot be set up
        """

    @abstractmethod
    def close(self) -> None:
        """Stop the receive loop and release resources. Safe to call twice."""

    @abstractmethod
    def send(self, data: bytes) -> int:
        """Send one datagram.

        Args:
            data: Datagram bytes

        Returns:
            Number of bytes sent

        Raises:
            TransportError: If the transport is not open or data is too large
            OSError: If the socket send fails
        """

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """True between open() and close()."""

    def attach_rx_callback(self, callback: RxCallback) -> None:
        """Register a callback for received datagrams.

        Callbacks run on the receive thread with ``(data, source)`` where
        source is the sender as ``host:port``.
        """
        self.rx_callbacks.append(callback)
        logger.debug("Registered RX callback (total: %d)", len(self.rx_callbacks))

    def send_frame(self, frame: Frame) -> bytes:
        """Encode and send a frame.

        Returns:
            The encoded datagram

        Raises:
            PayloadTooLargeError: If the frame exceeds 255 bytes
        """
        data = frame.encode()
        self.send(data)
        logger.debug("Sent %s frame #%d (%d bytes)", frame.msg_type().name, frame.msg_id, len(data))
        return data

    def send_packet(self, packet: Packet) -> Frame:
        """Wrap a packet in a frame with the next message id and send it.

        Returns:
            The frame that was sent
        """
        frame = Frame(msg_id=self.msg_ids.allocate(), packet=packet)
        self.send_frame(frame)
        return frame

    def _dispatch(self, data: bytes, source: str) -> None:
        """Hand a received datagram to every callback.

        A failing callback is logged and does not stop the others.
        """
        logger.debug("Received %d bytes from %s", len(data), source)
        for callback in self.rx_callbacks:
            try:
                callback(data, source)
            except Exception:
                logger.exception("RX callback %r failed", callback)

    def __enter__(self) -> Transport:
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
