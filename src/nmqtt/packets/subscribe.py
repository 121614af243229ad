"""Subscribe and SubAck packets.

Wire layouts::

    Subscribe:  count(1) | count x { topic(str) | qos(1) }
    SubAck:     count(1) | count x { return_code(1) }

A SubAck carries one return code per filter of the Subscribe it answers,
in the same order.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from ..codec.enums import MessageType, QoS, SubAckReturnCode
from ..codec.primitives import read_string, read_u8, string_len, write_string, write_u8
from ..exceptions import BufferTooShortError
from ..models.base import BasePacket
from ..models.fields import CountPrefixed


class SubscribeFilter(BaseModel):
    """A (topic, QoS) pair inside a Subscribe."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    topic: str
    qos: QoS = QoS.AT_MOST_ONCE

    def encoded_len(self) -> int:
        return string_len(self.topic) + 1


class Subscribe(BasePacket):
    """Ordered list of topic filters to subscribe to.

    Example:
        >>> Subscribe(filters=[SubscribeFilter(topic="home/+/temp", qos=QoS.AT_LEAST_ONCE)])
        >>> Subscribe.single("office/#")
    """

    packet_type: ClassVar[MessageType] = MessageType.SUBSCRIBE

    filters: tuple[SubscribeFilter, ...] = CountPrefixed(default=())

    @classmethod
    def single(cls, topic: str, qos: QoS = QoS.AT_MOST_ONCE) -> Subscribe:
        """Build a Subscribe with one filter."""
        return cls(filters=(SubscribeFilter(topic=topic, qos=qos),))

    def encode(self, buf: bytearray) -> None:
        write_u8(buf, len(self.filters))
        for topic_filter in self.filters:
            write_string(buf, topic_filter.topic)
            write_u8(buf, topic_filter.qos)

    def encoded_len(self) -> int:
        return 1 + sum(topic_filter.encoded_len() for topic_filter in self.filters)

    @classmethod
    def decode(cls, payload: bytes) -> Subscribe:
        count = read_u8(payload, 0)
        offset = 1

        filters = []
        for _ in range(count):
            topic, offset = read_string(payload, offset)
            qos = QoS.from_byte(read_u8(payload, offset))
            offset += 1
            filters.append(SubscribeFilter(topic=topic, qos=qos))

        return cls(filters=filters)


class SubAck(BasePacket):
    """Per-filter results of a Subscribe."""

    packet_type: ClassVar[MessageType] = MessageType.SUBACK

    return_codes: tuple[SubAckReturnCode, ...] = CountPrefixed(default=())

    def encode(self, buf: bytearray) -> None:
        write_u8(buf, len(self.return_codes))
        for code in self.return_codes:
            write_u8(buf, code)

    def encoded_len(self) -> int:
        return 1 + len(self.return_codes)

    @classmethod
    def decode(cls, payload: bytes) -> SubAck:
        count = read_u8(payload, 0)
        if len(payload) < 1 + count:
            raise BufferTooShortError(expected=1 + count, actual=len(payload))

        return cls(
            return_codes=[SubAckReturnCode.from_byte(code) for code in payload[1 : 1 + count]]
        )
