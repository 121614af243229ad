"""Connect and ConnAck packets.

Wire layouts::

    Connect:  flags(1) | keep_alive(2) | client_id(str) | [username(str)] | [password(bin)]
    ConnAck:  session_present(1) | return_code(1)

Connect flags: bit 1 = clean session, bit 6 = password present,
bit 7 = username present. Bit 0 is reserved and ignored.
"""

from __future__ import annotations

from typing import ClassVar, Optional

from ..codec.enums import ConnectReturnCode, MessageType
from ..codec.primitives import (
    binary_len,
    read_binary,
    read_string,
    read_u8,
    read_u16,
    string_len,
    write_binary,
    write_string,
    write_u8,
    write_u16,
)
from ..exceptions import BufferTooShortError
from ..models.base import BasePacket
from ..models.fields import U16

CLEAN_SESSION_FLAG = 0x02
PASSWORD_FLAG = 0x40
USERNAME_FLAG = 0x80

# flags(1) + keep_alive(2)
_CONNECT_FIXED_LEN = 3


class Connect(BasePacket):
    """Client session request.

    Username and password presence is carried in the flags byte, so an empty
    username is distinct from no username.

    Example:
        >>> Connect(client_id="sensor-7", keep_alive=30).with_credentials("user", b"pw")
    """

    packet_type: ClassVar[MessageType] = MessageType.CONNECT

    client_id: str
    keep_alive: int = U16(default=60)
    clean_session: bool = True
    username: Optional[str] = None
    password: Optional[bytes] = None

    def with_credentials(self, username: Optional[str], password: Optional[bytes] = None) -> Connect:
        """Return a copy carrying the given username and password."""
        return self.model_copy(update={"username": username, "password": password})

    def flags(self) -> int:
        """Return the packed flags byte."""
        flags = 0
        if self.clean_session:
            flags |= CLEAN_SESSION_FLAG
        if self.username is not None:
            flags |= USERNAME_FLAG
        if self.password is not None:
            flags |= PASSWORD_FLAG
        return flags

    def encode(self, buf: bytearray) -> None:
        write_u8(buf, self.flags())
        write_u16(buf, self.keep_alive)
        write_string(buf, self.client_id)
        if self.username is not None:
            write_string(buf, self.username)
        if self.password is not None:
            write_binary(buf, self.password)

    def encoded_len(self) -> int:
        length = _CONNECT_FIXED_LEN + string_len(self.client_id)
        if self.username is not None:
            length += string_len(self.username)
        if self.password is not None:
            length += binary_len(self.password)
        return length

    @classmethod
    def decode(cls, payload: bytes) -> Connect:
        if len(payload) < _CONNECT_FIXED_LEN:
            raise BufferTooShortError(expected=_CONNECT_FIXED_LEN, actual=len(payload))

        flags = payload[0]
        keep_alive = read_u16(payload, 1)
        client_id, offset = read_string(payload, _CONNECT_FIXED_LEN)

        username = None
        if flags & USERNAME_FLAG:
            username, offset = read_string(payload, offset)

        password = None
        if flags & PASSWORD_FLAG:
            password, offset = read_binary(payload, offset)

        return cls(
            client_id=client_id,
            keep_alive=keep_alive,
            clean_session=bool(flags & CLEAN_SESSION_FLAG),
            username=username,
            password=password,
        )


class ConnAck(BasePacket):
    """Server answer to a Connect."""

    packet_type: ClassVar[MessageType] = MessageType.CONNACK

    session_present: bool = False
    return_code: ConnectReturnCode = ConnectReturnCode.ACCEPTED

    @classmethod
    def accepted(cls, session_present: bool = False) -> ConnAck:
        """Build an acknowledgement for an accepted connection."""
        return cls(session_present=session_present, return_code=ConnectReturnCode.ACCEPTED)

    def encode(self, buf: bytearray) -> None:
        write_u8(buf, 1 if self.session_present else 0)
        write_u8(buf, self.return_code)

    def encoded_len(self) -> int:
        return 2

    @classmethod
    def decode(cls, payload: bytes) -> ConnAck:
        if len(payload) < 2:
            raise BufferTooShortError(expected=2, actual=len(payload))

        return cls(
            session_present=read_u8(payload, 0) != 0,
            return_code=ConnectReturnCode.from_byte(read_u8(payload, 1)),
        )
