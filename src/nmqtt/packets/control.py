"""Zero-payload control packets."""

from __future__ import annotations

from typing import ClassVar

from ..codec.enums import MessageType
from ..models.base import EmptyPacket


class PingReq(EmptyPacket):
    """Keep-alive probe."""

    packet_type: ClassVar[MessageType] = MessageType.PINGREQ


class PingResp(EmptyPacket):
    """Answer to a PingReq."""

    packet_type: ClassVar[MessageType] = MessageType.PINGRESP


class Disconnect(EmptyPacket):
    """Orderly end of a session."""

    packet_type: ClassVar[MessageType] = MessageType.DISCONNECT
