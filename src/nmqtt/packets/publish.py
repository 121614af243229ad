"""Publish and PubAck packets.

Publish wire layout::

    flags(1) | topic(str) | payload(remaining bytes)

Flags: bits 1-2 = QoS, bit 0 = retain. The payload has no length prefix;
everything after the topic belongs to it.
"""

from __future__ import annotations

from typing import ClassVar

from ..codec.enums import MessageType, QoS
from ..codec.primitives import read_string, read_u8, string_len, write_string, write_u8
from ..models.base import BasePacket, EmptyPacket

RETAIN_FLAG = 0x01
QOS_SHIFT = 1
QOS_MASK = 0x03


class Publish(BasePacket):
    """Application message on a topic.

    Example:
        >>> msg = Publish(topic="sensor/temp", payload=b"25.5").with_qos(QoS.AT_LEAST_ONCE)
        >>> msg.with_retain(True).flags()
        3
    """

    packet_type: ClassVar[MessageType] = MessageType.PUBLISH

    topic: str
    qos: QoS = QoS.AT_MOST_ONCE
    retain: bool = False
    payload: bytes = b""

    def with_qos(self, qos: QoS) -> Publish:
        """Return a copy with the given QoS."""
        return self.model_copy(update={"qos": QoS(qos)})

    def with_retain(self, retain: bool) -> Publish:
        """Return a copy with the given retain flag."""
        return self.model_copy(update={"retain": retain})

    def flags(self) -> int:
        """Return the packed flags byte."""
        flags = int(self.qos) << QOS_SHIFT
        if self.retain:
            flags |= RETAIN_FLAG
        return flags

    def encode(self, buf: bytearray) -> None:
        write_u8(buf, self.flags())
        write_string(buf, self.topic)
        buf.extend(self.payload)

    def encoded_len(self) -> int:
        return 1 + string_len(self.topic) + len(self.payload)

    @classmethod
    def decode(cls, payload: bytes) -> Publish:
        flags = read_u8(payload, 0)
        qos = QoS.from_byte((flags >> QOS_SHIFT) & QOS_MASK)
        topic, offset = read_string(payload, 1)

        return cls(
            topic=topic,
            qos=qos,
            retain=bool(flags & RETAIN_FLAG),
            payload=bytes(payload[offset:]),
        )


class PubAck(EmptyPacket):
    """Acknowledgement of a Publish."""

    packet_type: ClassVar[MessageType] = MessageType.PUBACK
