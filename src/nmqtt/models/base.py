"""Base packet class and nmqtt-specific Pydantic configuration.

This module provides the BasePacket class every packet variant inherits from.
It fixes the encode/decode contract and registers each concrete variant with
the frame dispatcher.
"""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict

from ..codec.enums import MessageType
from ..registry import register_packet

P = TypeVar("P", bound="BasePacket")


class BasePacket(BaseModel):
    """Base class for all nmqtt packets.

    Subclasses declare their wire tag as a ClassVar and implement the three
    codec methods. ``encode`` must append exactly ``encoded_len()`` bytes, and
    ``decode`` receives only the payload slice (the frame header is already
    stripped). Defining a subclass with its own ``packet_type`` registers it
    in PACKET_REGISTRY, and each MessageType may be claimed only once.

    Example:
        >>> from nmqtt.packets import Publish
        >>> msg = Publish(topic="a/b", payload=b"1")
        >>> msg.msg_type()
        <MessageType.PUBLISH: 3>
        >>> msg.encoded_len() == len(msg.to_bytes())
        True

    Attributes:
        packet_type: MessageType written in the frame header for this variant
    """

    model_config = ConfigDict(
        # Packets are values: immutable once built, compared by content
        frozen=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    packet_type: ClassVar[MessageType]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Register concrete variants for frame dispatch.

        Intermediate bases that do not set packet_type themselves are skipped.
        """
        super().__init_subclass__(**kwargs)

        if "packet_type" in cls.__dict__:
            register_packet(cls)

    def msg_type(self) -> MessageType:
        """Return the MessageType tag of this packet."""
        return self.packet_type

    def encode(self, buf: bytearray) -> None:
        """Append the payload bytes of this packet to buf."""
        raise NotImplementedError

    def encoded_len(self) -> int:
        """Return the exact number of bytes encode() appends."""
        raise NotImplementedError

    @classmethod
    def decode(cls: type[P], payload: bytes) -> P:
        """Parse a packet from its payload slice.

        Raises:
            DecodeError: If the payload is truncated or holds invalid values
        """
        raise NotImplementedError

    def to_bytes(self) -> bytes:
        """Encode the payload into a fresh bytes object."""
        buf = bytearray()
        self.encode(buf)
        return bytes(buf)


class EmptyPacket(BasePacket):
    """Base for packets whose identity is carried entirely by the type byte.

    The payload is empty on encode; any bytes in the payload slice are
    ignored on decode.
    """

    def encode(self, buf: bytearray) -> None:
        pass

    def encoded_len(self) -> int:
        return 0

    @classmethod
    def decode(cls: type[P], payload: bytes) -> P:
        return cls()
