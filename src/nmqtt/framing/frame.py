"""Datagram frame: the outer wire envelope.

This module provides the Frame model that carries one packet per UDP
datagram, adding a four-byte header in front of the packet payload.

The frame structure is:
- [Length (1 byte)] [Type (1 byte)] [Message ID (2 bytes)] [Payload]

Length counts the whole frame including the header, so a frame can never
exceed 255 bytes.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, field_validator

from ..codec.enums import MessageType
from ..codec.primitives import read_u16, write_u8, write_u16
from ..exceptions import BufferTooShortError, MalformedPacketError, PayloadTooLargeError
from ..models.base import BasePacket
from ..models.fields import U16
from ..packets import Packet
from ..registry import packet_class


class Frame(BaseModel):
    """A message id and the one packet it carries.

    Example:
        >>> from nmqtt.packets import Publish
        >>> frame = Frame(msg_id=42, packet=Publish(topic="sensor/temp", payload=b"25.5"))
        >>> data = frame.encode()
        >>> Frame.decode(data) == frame
        True
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    HEADER_LEN: ClassVar[int] = 4
    MAX_LEN: ClassVar[int] = 255

    msg_id: int = U16()
    packet: Packet

    @field_validator("packet", mode="before")
    @classmethod
    def _require_packet_instance(cls, value: Any) -> Any:
        # Variants carry no tag field; only instances are accepted
        if not isinstance(value, BasePacket):
            raise ValueError(f"packet must be a packet instance, got {type(value).__name__}")
        return value

    def msg_type(self) -> MessageType:
        """Return the type tag of the carried packet."""
        return self.packet.msg_type()

    def encoded_len(self) -> int:
        """Return the total frame length, header included."""
        return self.HEADER_LEN + self.packet.encoded_len()

    def encode(self) -> bytes:
        """Encode the frame for transmission.

        Returns:
            Header followed by the packet payload

        Raises:
            PayloadTooLargeError: If the frame would exceed MAX_LEN bytes
        """
        total_len = self.encoded_len()
        if total_len > self.MAX_LEN:
            raise PayloadTooLargeError(size=total_len, limit=self.MAX_LEN)

        buf = bytearray()
        write_u8(buf, total_len)
        write_u8(buf, self.packet.msg_type())
        write_u16(buf, self.msg_id)
        self.packet.encode(buf)
        return bytes(buf)

    @classmethod
    def decode(cls, data: bytes) -> Frame:
        """Decode one frame from a received datagram.

        Bytes past the declared length are ignored, so a padded receive
        buffer decodes the same as an exact one.

        Args:
            data: Datagram bytes

        Returns:
            Decoded frame

        Raises:
            BufferTooShortError: If the header or the declared length is missing
            MalformedPacketError: If the declared length is shorter than the header
            InvalidMessageTypeError: If the type byte is unknown
            DecodeError: Any error raised by the packet decoder
        """
        if len(data) < cls.HEADER_LEN:
            raise BufferTooShortError(expected=cls.HEADER_LEN, actual=len(data))

        length = data[0]
        if len(data) < length:
            raise BufferTooShortError(expected=length, actual=len(data))
        if length < cls.HEADER_LEN:
            raise MalformedPacketError(
                f"declared length {length} is shorter than the {cls.HEADER_LEN}-byte header"
            )

        msg_type = MessageType.from_byte(data[1])
        msg_id = read_u16(data, 2)
        payload = bytes(data[cls.HEADER_LEN : length])

        packet = packet_class(msg_type).decode(payload)
        return cls(msg_id=msg_id, packet=packet)


def frame_packet(packet: Packet, msg_id: int) -> bytes:
    """Wrap a packet in a frame and encode it.

    Args:
        packet: Packet to send
        msg_id: Message id (0-65535)

    Returns:
        Encoded frame

    Raises:
        pydantic.ValidationError: If msg_id is out of range
        PayloadTooLargeError: If the frame would exceed 255 bytes

    Example:
        >>> from nmqtt.packets import PingReq
        >>> frame_packet(PingReq(), msg_id=7)
        b'\\x04\\x07\\x00\\x07'
    """
    return Frame(msg_id=msg_id, packet=packet).encode()


def unframe_packet(data: bytes) -> Frame:
    """Decode a received datagram into a frame.

    Example:
        >>> frame = unframe_packet(b"\\x04\\x07\\x00\\x07")
        >>> frame.msg_id, frame.msg_type()
        (7, <MessageType.PINGREQ: 7>)
    """
    return Frame.decode(data)
