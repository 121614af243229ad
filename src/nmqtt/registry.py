"""Packet type registry.

Maps every MessageType to the packet class that decodes it. Packet classes
register themselves when they are defined (see BasePacket.__init_subclass__),
so the frame layer can dispatch on the type byte without a hand-written
switch.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .codec.enums import MessageType

if TYPE_CHECKING:
    from .models.base import BasePacket

# Global registry: message type -> packet class
PACKET_REGISTRY: dict[MessageType, type[BasePacket]] = {}


def register_packet(packet_class: type[BasePacket]) -> None:
    """Register a packet class for frame dispatch.

    Args:
        packet_class: BasePacket subclass with a packet_type attribute

    Raises:
        ValueError: If the class has no packet_type or the type is already
            registered to a different class
    """
    msg_type = getattr(packet_class, "packet_type", None)
    if not isinstance(msg_type, MessageType):
        raise ValueError(
            f"{packet_class.__name__} has no packet_type attribute. Cannot register for dispatch."
        )

    existing = PACKET_REGISTRY.get(msg_type)
    if existing is not None and existing is not packet_class:
        raise ValueError(
            f"Message type {msg_type.name} already registered to {existing.__name__}. "
            f"Cannot register {packet_class.__name__} with the same type."
        )

    PACKET_REGISTRY[msg_type] = packet_class


def packet_class(msg_type: MessageType) -> type[BasePacket]:
    """Return the packet class registered for a message type.

    Raises:
        LookupError: If no class is registered (packet modules not imported)
    """
    try:
        return PACKET_REGISTRY[msg_type]
    except KeyError:
        raise LookupError(f"No packet class registered for {msg_type.name}") from None
