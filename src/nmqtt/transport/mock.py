"""In-process loopback transport for tests.

Every datagram sent is echoed back to the RX callbacks from a background
thread, so the full encode -> send -> receive -> decode path can be exercised
without a network. An optional drop probability simulates datagram loss.
"""

from __future__ import annotations

import logging
import random
from queue import Empty, Queue
from threading import Thread
from typing import Optional

from ..exceptions import TransportError
from ..framing.msgid import MessageIdAllocator
from .config import TransportConfig
from .driver import Transport

logger = logging.getLogger(__name__)

LOOPBACK_SOURCE = "loopback:0"


class LoopbackTransport(Transport):
    """Echoes sent datagrams back to the local RX callbacks.

    Attributes:
        config: Transport configuration (only max_datagram_size and
            poll_interval are used)
        drop_probability: Probability of silently dropping a sent datagram
        rx_queue: Datagrams waiting for delivery

    Examples:
        ```python
        from nmqtt.framing import Frame
        from nmqtt.packets import PingReq
        from nmqtt.transport import LoopbackTransport

        received = []
        with LoopbackTransport() as transport:
            transport.attach_rx_callback(lambda data, source: received.append(Frame.decode(data)))
            transport.send_packet(PingReq())
        ```
    """

    def __init__(
        self,
        config: Optional[TransportConfig] = None,
        drop_probability: float = 0.0,
        msg_ids: Optional[MessageIdAllocator] = None,
    ) -> None:
        super().__init__(msg_ids)
        if not 0.0 <= drop_probability <= 1.0:
            raise ValueError(f"drop_probability must be 0.0-1.0, got {drop_probability}")

        self.config = (
            config if config is not None else TransportConfig(target="127.0.0.1:0", poll_interval=0.05)
        )
        self.drop_probability = drop_probability
        self.rx_queue: Queue[bytes] = Queue()
        self._rx_thread: Optional[Thread] = None
        self._running = False

    @property
    def is_open(self) -> bool:
        return self._running

    def open(self) -> None:
        if self._running:
            logger.debug("LoopbackTransport already open")
            return

        self._running = True
        self._rx_thread = Thread(target=self._rx_loop, daemon=True, name="Loopback-RX")
        self._rx_thread.start()
        logger.info("Loopback transport opened (drop probability %.1f%%)", self.drop_probability * 100)

    def close(self) -> None:
        if not self._running:
            return

        self._running = False
        if self._rx_thread is not None:
            self._rx_thread.join(timeout=self.config.poll_interval * 2)
            self._rx_thread = None

        # Undelivered datagrams must not surface after a later open()
        discarded = 0
        while True:
            try:
                self.rx_queue.get_nowait()
            except Empty:
                break
            discarded += 1
        if discarded:
            logger.debug("Discarded %d undelivered datagram(s)", discarded)
        logger.info("Loopback transport closed")

    def send(self, data: bytes) -> int:
        if not self._running:
            raise TransportError("LoopbackTransport not open. Call open() before send().")

        if len(data) > self.config.max_datagram_size:
            raise TransportError(
                f"Datagram size {len(data)} exceeds max_datagram_size "
                f"{self.config.max_datagram_size}"
            )

        if random.random() < self.drop_probability:
            logger.info("Datagram dropped (%d bytes)", len(data))
            return len(data)

        self.rx_queue.put(bytes(data))
        return len(data)

    def _rx_loop(self) -> None:
        """Deliver queued datagrams until close()."""
        while self._running:
            try:
                data = self.rx_queue.get(timeout=self.config.poll_interval)
            except Empty:
                continue
            self._dispatch(data, LOOPBACK_SOURCE)
