"""Text command parser for the interactive client.

Translates commands such as ``pub sensor/temp 25.5 qos=1 retain`` into
packets. Command words are case-insensitive; options are ``key=value``
tokens.

Commands:
  connect <client_id> [keepalive=N] [user=X] [pass=X] [clean=true|false]
  pub <topic> <payload...> [qos=0|1|2] [retain]
  sub <topic>[,<topic>...] [qos=0|1|2]
  ping | pingresp | puback | disconnect
  connack [accepted|rejected|unauthorized|unavailable] [session=true|false]
  suback <0|1|2|fail>...
"""

from __future__ import annotations

from typing import Callable

from ..codec.enums import ConnectReturnCode, QoS, SubAckReturnCode
from ..exceptions import ParseError
from ..models.fields import COUNT_MAX, U16_MAX
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
    SubscribeFilter,
)

DEFAULT_CLIENT_ID = "id1"
PUBLISH_USAGE = "pub|publish <topic> <payload> [qos=0|1|2] [retain]"

_QOS_VALUES = {"0": QoS.AT_MOST_ONCE, "1": QoS.AT_LEAST_ONCE, "2": QoS.EXACTLY_ONCE}

_SUBACK_CODES = {
    "0": SubAckReturnCode.SUCCESS_QOS0,
    "1": SubAckReturnCode.SUCCESS_QOS1,
    "2": SubAckReturnCode.SUCCESS_QOS2,
    "fail": SubAckReturnCode.FAILURE,
    "failure": SubAckReturnCode.FAILURE,
}

_CONNACK_CODES = {
    "accepted": ConnectReturnCode.ACCEPTED,
    "rejected": ConnectReturnCode.NOT_AUTHORIZED,
    "unauthorized": ConnectReturnCode.NOT_AUTHORIZED,
    "unavailable": ConnectReturnCode.SERVER_UNAVAILABLE,
}


def _parse_qos(value: str) -> QoS:
    try:
        return _QOS_VALUES[value]
    except KeyError:
        raise ParseError("qos must be 0, 1, or 2") from None


def _is_true(value: str) -> bool:
    return value in ("true", "1")


def _parse_connect(rest: str) -> Packet:
    parts = rest.split()
    client_id = parts[0] if parts else DEFAULT_CLIENT_ID

    fields: dict[str, object] = {"client_id": client_id}
    for part in parts[1:]:
        key, sep, value = part.partition("=")
        if not sep:
            continue
        if key in ("keepalive", "ka"):
            try:
                keep_alive = int(value)
            except ValueError:
                raise ParseError("invalid keepalive") from None
            if not 0 <= keep_alive <= U16_MAX:
                raise ParseError("invalid keepalive")
            fields["keep_alive"] = keep_alive
        elif key == "user":
            fields["username"] = value
        elif key == "pass":
            fields["password"] = value.encode("utf-8")
        elif key == "clean":
            fields["clean_session"] = _is_true(value)
        else:
            raise ParseError(f"unknown option: {key}")

    return Connect(**fields)


def _parse_publish(rest: str) -> Packet:
    topic, sep, remainder = rest.partition(" ")
    if not sep:
        raise ParseError(PUBLISH_USAGE)

    qos = QoS.AT_MOST_ONCE
    retain = False
    payload_parts = []
    for part in remainder.split():
        key, sep, value = part.partition("=")
        if sep and key == "qos":
            qos = _parse_qos(value)
        elif part == "retain":
            retain = True
        else:
            payload_parts.append(part)

    return Publish(
        topic=topic,
        qos=qos,
        retain=retain,
        payload=" ".join(payload_parts).encode("utf-8"),
    )


def _parse_subscribe(rest: str) -> Packet:
    qos = QoS.AT_MOST_ONCE
    topics: list[str] = []
    for part in rest.split():
        key, sep, value = part.partition("=")
        if sep:
            if key == "qos":
                qos = _parse_qos(value)
        else:
            topics.extend(topic for topic in part.split(",") if topic)

    if not topics:
        raise ParseError("subscribe requires at least one topic")
    if len(topics) > COUNT_MAX:
        raise ParseError(f"subscribe accepts at most {COUNT_MAX} topics, got {len(topics)}")

    return Subscribe(filters=[SubscribeFilter(topic=topic, qos=qos) for topic in topics])


def _parse_connack(rest: str) -> Packet:
    code = ConnectReturnCode.ACCEPTED
    session = False
    for part in rest.split():
        if part in _CONNACK_CODES:
            code = _CONNACK_CODES[part]
        elif part.startswith("session="):
            session = part.endswith("true") or part.endswith("1")

    return ConnAck(session_present=session, return_code=code)


def _parse_suback(rest: str) -> Packet:
    codes = []
    for part in rest.split():
        if part not in _SUBACK_CODES:
            raise ParseError(f"invalid suback code: {part}")
        codes.append(_SUBACK_CODES[part])
    if len(codes) > COUNT_MAX:
        raise ParseError(f"suback accepts at most {COUNT_MAX} codes, got {len(codes)}")
    return SubAck(return_codes=codes)


_COMMANDS: dict[str, Callable[[str], Packet]] = {
    "connect": _parse_connect,
    "pub": _parse_publish,
    "publish": _parse_publish,
    "sub": _parse_subscribe,
    "subscribe": _parse_subscribe,
    "connack": _parse_connack,
    "suback": _parse_suback,
    "ping": lambda rest: PingReq(),
    "pingresp": lambda rest: PingResp(),
    "pong": lambda rest: PingResp(),
    "puback": lambda rest: PubAck(),
    "disconnect": lambda rest: Disconnect(),
    "disc": lambda rest: Disconnect(),
}


def parse_command(text: str) -> Packet:
    """Parse one command line into a packet.

    Args:
        text: Command line, e.g. "sub home/+/temp,office/# qos=1"

    Returns:
        The packet the command describes

    Raises:
        ParseError: If the command or one of its options is invalid

    Example:
        >>> parse_command("pub sensor/temp 25.5 qos=1 retain")
        Publish(topic='sensor/temp', qos=<QoS.AT_LEAST_ONCE: 1>, retain=True, payload=b'25.5')
    """
    text = text.strip()
    command, _, rest = text.partition(" ")
    parser = _COMMANDS.get(command.lower())
    if parser is None:
        raise ParseError(f"unknown command: {command}")
    return parser(rest.strip())
