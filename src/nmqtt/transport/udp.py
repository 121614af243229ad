"""UDP datagram transport.

The socket is bound to the configured local address and connected to the
target, so send() needs no address and the kernel filters out datagrams
from anyone else. A daemon thread receives datagrams and hands them to the
registered callbacks.
"""

from __future__ import annotations

import logging
import socket
from threading import Thread
from typing import Optional

from ..exceptions import TransportError
from ..framing.msgid import MessageIdAllocator
from .config import TransportConfig
from .driver import Transport

logger = logging.getLogger(__name__)


class UdpTransport(Transport):
    """Connected UDP socket with a background receive loop.

    Attributes:
        config: Transport configuration

    Examples:
        ```python
        from nmqtt.packets import Connect
        from nmqtt.transport import TransportConfig, UdpTransport

        transport = UdpTransport(TransportConfig(target="127.0.0.1:1883"))
        transport.attach_rx_callback(lambda data, source: print(data.hex()))
        transport.open()
        transport.send_packet(Connect(client_id="probe"))
        transport.close()
        ```
    """

    def __init__(
        self, config: TransportConfig, msg_ids: Optional[MessageIdAllocator] = None
    ) -> None:
        super().__init__(msg_ids)
        self.config = config
        self._sock: Optional[socket.socket] = None
        self._rx_thread: Optional[Thread] = None
        self._running = False

    @property
    def is_open(self) -> bool:
        return self._running

    @property
    def local_address(self) -> tuple[str, int]:
        """Address the socket is bound to, with the ephemeral port resolved."""
        if self._sock is None:
            raise TransportError("UdpTransport is not open")
        host, port = self._sock.getsockname()[:2]
        return host, port

    def open(self) -> None:
        if self._running:
            logger.debug("UdpTransport already open")
            return

        target = self.config.target_address
        bind = self.config.bind_address
        family = socket.AF_INET
        if ":" in target[0]:
            family = socket.AF_INET6
            if bind[0] == "0.0.0.0":
                bind = ("::", bind[1])

        sock = socket.socket(family, socket.SOCK_DGRAM)
        try:
            sock.bind(bind)
            sock.connect(target)
            sock.settimeout(self.config.poll_interval)
        except OSError:
            sock.close()
            raise

        self._sock = sock
        self._running = True
        self._rx_thread = Thread(target=self._rx_loop, daemon=True, name="UdpTransport-RX")
        self._rx_thread.start()
        logger.info("UDP transport bound to %s:%d, sending to %s", *self.local_address, self.config.target)

    def close(self) -> None:
        if not self._running:
            return

        self._running = False
        if self._rx_thread is not None:
            self._rx_thread.join(timeout=self.config.poll_interval * 2)
            self._rx_thread = None
        if self._sock is not None:
            self._sock.close()
            self._sock = None
        logger.info("UDP transport closed")

    def send(self, data: bytes) -> int:
        if not self._running or self._sock is None:
            raise TransportError("UdpTransport not open. Call open() before send().")

        if len(data) > self.config.max_datagram_size:
            raise TransportError(
                f"Datagram size {len(data)} exceeds max_datagram_size "
                f"{self.config.max_datagram_size}"
            )

        return self._sock.send(data)

    def _rx_loop(self) -> None:
        """Receive datagrams until close() clears the running flag."""
        logger.debug("RX thread started")
        sock = self._sock
        while self._running and sock is not None:
            try:
                data, address = sock.recvfrom(self.config.recv_buffer_size)
            except socket.timeout:
                continue
            except ConnectionRefusedError:
                # ICMP port unreachable from an earlier send
                logger.warning("Connection refused by %s (port unreachable)", self.config.target)
                continue
            except OSError:
                if self._running:
                    logger.exception("UDP receive failed, stopping RX thread")
                    self._running = False
                break

            self._dispatch(data, f"{address[0]}:{address[1]}")
        logger.debug("RX thread stopped")
