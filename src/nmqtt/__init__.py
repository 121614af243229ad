"""nmqtt: MQTT-style messaging over single UDP datagrams

A Python library for a compact, length-prefixed binary publish/subscribe
protocol in which every datagram carries exactly one frame of at most 255
bytes.

Key Features:
- Pydantic-based, immutable packet models
- Exact, bounds-checked binary codec with a structured error taxonomy
- UDP and loopback transports with background receive threads
- Interactive command-line client (``nmqtt HOST:PORT``)

Quick Start:
    >>> from nmqtt import Frame, Publish, QoS
    >>>
    >>> msg = Publish(topic="sensor/temp", payload=b"25.5").with_qos(QoS.AT_LEAST_ONCE)
    >>> data = Frame(msg_id=42, packet=msg).encode()
    >>> Frame.decode(data).packet == msg
    True
"""

from __future__ import annotations

__version__ = "0.1.0"

from .codec import ConnectReturnCode, MessageType, QoS, SubAckReturnCode
from .exceptions import (
    BufferTooShortError,
    DecodeError,
    EncodeError,
    InvalidMessageTypeError,
    InvalidQoSError,
    InvalidReturnCodeError,
    InvalidUtf8Error,
    MalformedPacketError,
    NmqttError,
    ParseError,
    PayloadTooLargeError,
    TransportError,
)
from .framing import Frame, MessageIdAllocator, frame_packet, next_msg_id, unframe_packet
from .models import BasePacket
from .packets import (
    ConnAck,
    Connect,
    Disconnect,
    Packet,
    PingReq,
    PingResp,
    PubAck,
    Publish,
    SubAck,
    Subscribe,
    SubscribeFilter,
)
from .registry import PACKET_REGISTRY, packet_class

__all__ = [
    # Enumerations
    "MessageType",
    "QoS",
    "ConnectReturnCode",
    "SubAckReturnCode",
    # Packets
    "BasePacket",
    "Packet",
    "Connect",
    "ConnAck",
    "Publish",
    "PubAck",
    "Subscribe",
    "SubscribeFilter",
    "SubAck",
    "PingReq",
    "PingResp",
    "Disconnect",
    # Framing
    "Frame",
    "frame_packet",
    "unframe_packet",
    "MessageIdAllocator",
    "next_msg_id",
    # Registry
    "PACKET_REGISTRY",
    "packet_class",
    # Exceptions
    "NmqttError",
    "DecodeError",
    "BufferTooShortError",
    "InvalidMessageTypeError",
    "InvalidQoSError",
    "InvalidReturnCodeError",
    "InvalidUtf8Error",
    "MalformedPacketError",
    "EncodeError",
    "PayloadTooLargeError",
    "ParseError",
    "TransportError",
    # Version
    "__version__",
]
