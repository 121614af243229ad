"""Configuration for datagram transports.

This module provides the TransportConfig dataclass shared by the UDP and
loopback transports, plus address parsing for ``host:port`` strings.
"""

from __future__ import annotations

from dataclasses import dataclass

# Largest UDP payload over IPv4
MAX_UDP_PAYLOAD = 65507


def parse_address(address: str) -> tuple[str, int]:
    """Split a ``host:port`` string.

    Args:
        address: Address such as "127.0.0.1:1883" or "[::1]:1883"

    Returns:
        Tuple of (host, port)

    Raises:
        ValueError: If the port is missing or not 0-65535

    Example:
        >>> parse_address("localhost:1883")
        ('localhost', 1883)
    """
    host, sep, port_text = address.rpartition(":")
    if not sep or not port_text:
        raise ValueError(f"address must be host:port, got {address!r}")

    try:
        port = int(port_text)
    except ValueError as err:
        raise ValueError(f"invalid port in address {address!r}") from err
    if not 0 <= port <= 65535:
        raise ValueError(f"port must be 0-65535, got {port}")

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host, port


@dataclass
class TransportConfig:
    """Settings for a datagram transport.

    Attributes:
        target: Peer address as ``host:port``. Every datagram is sent there,
            and only datagrams from there are received.

        bind: Local address as ``host:port`` (default "0.0.0.0:0", any
            interface and an ephemeral port).

        recv_buffer_size: Receive buffer in bytes (default 4096). Datagrams
            longer than this are truncated by the socket; a frame is never
            longer than 255 bytes.

        poll_interval: Receive timeout in seconds (default 1.0). The receive
            thread checks for shutdown at this interval.

        max_datagram_size: Largest datagram send() accepts (default 65507).

    Examples:
        ```python
        from nmqtt.transport import TransportConfig, UdpTransport

        config = TransportConfig(target="127.0.0.1:1883", poll_interval=0.2)
        with UdpTransport(config) as transport:
            transport.send(b"hello")
        ```
    """

    target: str
    bind: str = "0.0.0.0:0"
    recv_buffer_size: int = 4096
    poll_interval: float = 1.0
    max_datagram_size: int = MAX_UDP_PAYLOAD

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        parse_address(self.target)
        parse_address(self.bind)

        if self.recv_buffer_size <= 0:
            raise ValueError(f"recv_buffer_size must be > 0, got {self.recv_buffer_size}")

        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be > 0, got {self.poll_interval}")

        if not 0 < self.max_datagram_size <= MAX_UDP_PAYLOAD:
            raise ValueError(
                f"max_datagram_size must be 1-{MAX_UDP_PAYLOAD}, got {self.max_datagram_size}"
            )

    @property
    def target_address(self) -> tuple[str, int]:
        return parse_address(self.target)

    @property
    def bind_address(self) -> tuple[str, int]:
        return parse_address(self.bind)
