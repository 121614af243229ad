"""Packet variants for nmqtt.

``Packet`` is the closed union of the nine variants. Every variant exposes
``msg_type()``, which the frame layer uses both to write the type byte and to
pick the decoder on the way back.
"""

from __future__ import annotations

from typing import Union

from .connect import ConnAck, Connect
from .control import Disconnect, PingReq, PingResp
from .publish import PubAck, Publish
from .subscribe import SubAck, Subscribe, SubscribeFilter

Packet = Union[
    Connect,
    ConnAck,
    Publish,
    PubAck,
    Subscribe,
    SubAck,
    PingReq,
    PingResp,
    Disconnect,
]

__all__ = [
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
]
