"""One-line rendering of datagrams for the interactive client."""

from __future__ import annotations

import enum
from typing import Optional

from ..exceptions import DecodeError
from ..framing.frame import Frame
from ..packets import (
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
)

HEX_PREVIEW_BYTES = 24
TEXT_PREVIEW_CHARS = 50
PAYLOAD_PREVIEW_CHARS = 30


class DisplayMode(str, enum.Enum):
    """How datagrams are rendered, and how typed input is encoded."""

    AUTO = "auto"
    TEXT = "text"
    HEX = "hex"
    MQTT = "mqtt"


def _truncate(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def format_hex(data: bytes) -> str:
    """Render up to the first 24 bytes as spaced hex pairs."""
    hex_text = " ".join(f"{byte:02x}" for byte in data[:HEX_PREVIEW_BYTES])
    if len(data) > HEX_PREVIEW_BYTES:
        return hex_text + "..."
    return hex_text


def format_text(data: bytes) -> Optional[str]:
    """Render data as text, or None if it is not valid UTF-8."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return None
    return _truncate(text, TEXT_PREVIEW_CHARS)


def format_packet(packet: Packet) -> str:
    """Summarise a packet in one line."""
    if isinstance(packet, Connect):
        return f"CONNECT client={packet.client_id} ka={packet.keep_alive}"
    if isinstance(packet, ConnAck):
        return f"CONNACK {packet.return_code.name} session={str(packet.session_present).lower()}"
    if isinstance(packet, Publish):
        preview = _truncate(packet.payload.decode("utf-8", errors="replace"), PAYLOAD_PREVIEW_CHARS)
        return f'PUBLISH {packet.topic} qos={packet.qos.name} "{preview}"'
    if isinstance(packet, Subscribe):
        topics = ", ".join(topic_filter.topic for topic_filter in packet.filters)
        return f"SUBSCRIBE [{topics}]"
    if isinstance(packet, SubAck):
        codes = ", ".join(code.name for code in packet.return_codes)
        return f"SUBACK [{codes}]"
    if isinstance(packet, (PubAck, PingReq, PingResp, Disconnect)):
        return packet.msg_type().name
    raise TypeError(f"Not a packet: {type(packet).__name__}")


def format_frame(data: bytes) -> Optional[str]:
    """Render data as ``#<msg_id> <summary>``, or None if it is not a frame."""
    try:
        frame = Frame.decode(data)
    except DecodeError:
        return None
    return f"#{frame.msg_id} {format_packet(frame.packet)}"


def format_datagram(data: bytes, mode: DisplayMode = DisplayMode.AUTO) -> str:
    """Render a datagram for display.

    AUTO tries a frame, then text, then hex. MQTT and TEXT fall back to hex
    when the data does not fit the mode.

    Example:
        >>> format_datagram(b"\\x04\\x07\\x00\\x01")
        '#1 PINGREQ'
        >>> format_datagram(b"\\xff\\x00", DisplayMode.TEXT)
        'ff 00'
    """
    if mode is DisplayMode.HEX:
        return format_hex(data)
    if mode is DisplayMode.MQTT:
        rendered = format_frame(data)
    elif mode is DisplayMode.TEXT:
        rendered = format_text(data)
    else:
        rendered = format_frame(data)
        if rendered is None:
            rendered = format_text(data)
    return rendered if rendered is not None else format_hex(data)
