"""Unit tests for per-packet encoding/decoding."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from nmqtt import (
    ConnAck,
    Connect,
    ConnectReturnCode,
    Disconnect,
    MessageType,
    PingReq,
    PingResp,
    PubAck,
    Publish,
    QoS,
    SubAck,
    SubAckReturnCode,
    Subscribe,
    SubscribeFilter,
)
from nmqtt.exceptions import (
    BufferTooShortError,
    InvalidQoSError,
    InvalidReturnCodeError,
    InvalidUtf8Error,
)


class TestConnect:
    """Test Connect packet codec."""

    def test_defaults(self) -> None:
        """Test default keep-alive and clean session."""
        connect = Connect(client_id="id1")

        assert connect.keep_alive == 60
        assert connect.clean_session is True
        assert connect.username is None
        assert connect.password is None

    def test_encode_with_credentials(self, connect_with_credentials: Connect) -> None:
        """Test exact bytes for a Connect with username and password."""
        data = connect_with_credentials.to_bytes()

        assert data == (
            b"\xc2"  # clean session | has password | has username
            b"\x00\x78"  # keep alive 120
            b"\x00\x0btest-client"
            b"\x00\x04user"
            b"\x00\x04pass"
        )
        assert connect_with_credentials.encoded_len() == len(data) == 28

    def test_encode_minimal(self) -> None:
        """Test flags are clear when no options are set."""
        data = Connect(client_id="c", keep_alive=0, clean_session=False).to_bytes()

        assert data == b"\x00\x00\x00\x00\x01c"

    def test_decode_roundtrip(self, connect_with_credentials: Connect) -> None:
        """Test decode of encoded Connect."""
        assert Connect.decode(connect_with_credentials.to_bytes()) == connect_with_credentials

    def test_empty_username_is_not_missing(self) -> None:
        """Test presence comes from the flags byte, not the content."""
        connect = Connect(client_id="c", username="", password=b"")
        decoded = Connect.decode(connect.to_bytes())

        assert decoded.username == ""
        assert decoded.password == b""

    def test_password_only(self) -> None:
        """Test password without username."""
        connect = Connect(client_id="c").with_credentials(None, b"\x00\xff")
        data = connect.to_bytes()

        assert data[0] == 0x42
        assert Connect.decode(data) == connect

    def test_reserved_flag_ignored(self) -> None:
        """Test bit 0 of the flags byte is ignored on decode."""
        decoded = Connect.decode(b"\x03\x00\x3c\x00\x01c")

        assert decoded == Connect(client_id="c")

    def test_decode_too_short_for_header(self) -> None:
        """Test fewer than 3 bytes."""
        with pytest.raises(BufferTooShortError) as exc_info:
            Connect.decode(b"\x02\x00")

        assert (exc_info.value.expected, exc_info.value.actual) == (3, 2)

    def test_decode_missing_username(self) -> None:
        """Test username flag set but no username bytes."""
        with pytest.raises(BufferTooShortError) as exc_info:
            Connect.decode(b"\x80\x00\x3c\x00\x01c")

        assert (exc_info.value.expected, exc_info.value.actual) == (8, 6)

    def test_decode_truncated_password(self) -> None:
        """Test password length larger than the remaining bytes."""
        with pytest.raises(BufferTooShortError) as exc_info:
            Connect.decode(b"\x40\x00\x3c\x00\x01c\x00\x05ab")

        assert (exc_info.value.expected, exc_info.value.actual) == (13, 10)

    def test_decode_invalid_client_id(self) -> None:
        """Test non-UTF-8 client id."""
        with pytest.raises(InvalidUtf8Error):
            Connect.decode(b"\x02\x00\x3c\x00\x01\xff")

    def test_keep_alive_bounds(self) -> None:
        """Test keep alive must fit in 16 bits."""
        with pytest.raises(ValidationError):
            Connect(client_id="c", keep_alive=65536)

    def test_frozen(self) -> None:
        """Test packets are immutable."""
        connect = Connect(client_id="c")

        with pytest.raises(ValidationError):
            connect.client_id = "d"  # type: ignore[misc]


class TestConnAck:
    """Test ConnAck packet codec."""

    def test_encode(self) -> None:
        """Test session flag and return code bytes."""
        packet = ConnAck(session_present=True, return_code=ConnectReturnCode.BAD_CREDENTIALS)

        assert packet.to_bytes() == b"\x01\x04"
        assert packet.encoded_len() == 2

    def test_accepted_helper(self) -> None:
        """Test the accepted() constructor."""
        assert ConnAck.accepted(True) == ConnAck(
            session_present=True, return_code=ConnectReturnCode.ACCEPTED
        )

    def test_decode_nonzero_session_byte(self) -> None:
        """Test any non-zero session byte reads as True."""
        assert ConnAck.decode(b"\x07\x00").session_present is True

    def test_decode_short(self) -> None:
        """Test a one-byte payload."""
        with pytest.raises(BufferTooShortError) as exc_info:
            ConnAck.decode(b"\x00")

        assert (exc_info.value.expected, exc_info.value.actual) == (2, 1)

    def test_decode_invalid_return_code(self) -> None:
        """Test unknown return code keeps the raw byte."""
        with pytest.raises(InvalidReturnCodeError) as exc_info:
            ConnAck.decode(b"\x00\x06")

        assert exc_info.value.value == 0x06


class TestPublish:
    """Test Publish packet codec."""

    def test_flags_packing(self) -> None:
        """Test QoS in bits 1-2 and retain in bit 0."""
        base = Publish(topic="t")

        assert base.flags() == 0x00
        assert base.with_retain(True).flags() == 0x01
        assert base.with_qos(QoS.AT_LEAST_ONCE).flags() == 0x02
        assert base.with_qos(QoS.EXACTLY_ONCE).with_retain(True).flags() == 0x05

    def test_builders_return_copies(self) -> None:
        """Test builder helpers leave the original unchanged."""
        base = Publish(topic="t")
        changed = base.with_qos(QoS.EXACTLY_ONCE)

        assert base.qos is QoS.AT_MOST_ONCE
        assert changed.qos is QoS.EXACTLY_ONCE

    def test_encode(self, sample_publish: Publish) -> None:
        """Test exact bytes."""
        assert sample_publish.to_bytes() == b"\x03\x00\x0bsensor/temp25.5"
        assert sample_publish.encoded_len() == 18

    def test_payload_is_remaining_bytes(self) -> None:
        """Test the payload has no length prefix."""
        decoded = Publish.decode(b"\x00\x00\x01a\x00\xff\x00")

        assert decoded.topic == "a"
        assert decoded.payload == b"\x00\xff\x00"

    def test_empty_payload(self) -> None:
        """Test a publish with nothing after the topic."""
        decoded = Publish.decode(b"\x00\x00\x01a")

        assert decoded.payload == b""

    def test_decode_empty(self) -> None:
        """Test empty payload slice."""
        with pytest.raises(BufferTooShortError) as exc_info:
            Publish.decode(b"")

        assert (exc_info.value.expected, exc_info.value.actual) == (1, 0)

    def test_decode_invalid_qos(self) -> None:
        """Test QoS field value 3 is rejected before the topic is read."""
        with pytest.raises(InvalidQoSError) as exc_info:
            Publish.decode(b"\x06")

        assert exc_info.value.value == 3

    def test_decode_truncated_topic(self) -> None:
        """Test topic length past the payload."""
        with pytest.raises(BufferTooShortError) as exc_info:
            Publish.decode(b"\x00\x00\x09abc")

        assert (exc_info.value.expected, exc_info.value.actual) == (12, 6)

    def test_str_payload_is_utf8_encoded(self) -> None:
        """Test text payloads are accepted and stored as bytes."""
        assert Publish(topic="t", payload="héllo").payload == "héllo".encode()  # type: ignore[arg-type]


class TestSubscribe:
    """Test Subscribe packet codec."""

    def test_encode(self, sample_subscribe: Subscribe) -> None:
        """Test exact bytes for two filters."""
        data = sample_subscribe.to_bytes()

        assert data == b"\x02\x00\x0bhome/+/temp\x01\x00\x08office/#\x00"
        assert sample_subscribe.encoded_len() == len(data)

    def test_order_preserved(self, sample_subscribe: Subscribe) -> None:
        """Test filters decode in wire order."""
        decoded = Subscribe.decode(sample_subscribe.to_bytes())

        assert [f.topic for f in decoded.filters] == ["home/+/temp", "office/#"]
        assert decoded == sample_subscribe

    def test_single(self) -> None:
        """Test single-filter helper."""
        packet = Subscribe.single("a/#", QoS.EXACTLY_ONCE)

        assert packet.filters == (SubscribeFilter(topic="a/#", qos=QoS.EXACTLY_ONCE),)

    def test_zero_filters(self) -> None:
        """Test an empty filter list."""
        assert Subscribe().to_bytes() == b"\x00"
        assert Subscribe.decode(b"\x00") == Subscribe()

    def test_decode_empty(self) -> None:
        """Test missing count byte."""
        with pytest.raises(BufferTooShortError) as exc_info:
            Subscribe.decode(b"")

        assert (exc_info.value.expected, exc_info.value.actual) == (1, 0)

    def test_decode_missing_qos(self) -> None:
        """Test a topic without its QoS byte."""
        with pytest.raises(BufferTooShortError) as exc_info:
            Subscribe.decode(b"\x01\x00\x01a")

        assert (exc_info.value.expected, exc_info.value.actual) == (5, 4)

    def test_decode_count_exceeds_filters(self) -> None:
        """Test a count larger than the filters present."""
        with pytest.raises(BufferTooShortError):
            Subscribe.decode(b"\x02\x00\x01a\x00")

    def test_decode_invalid_qos(self) -> None:
        """Test a filter QoS outside 0-2."""
        with pytest.raises(InvalidQoSError) as exc_info:
            Subscribe.decode(b"\x01\x00\x01a\x03")

        assert exc_info.value.value == 3

    def test_filter_count_limit(self) -> None:
        """Test more than 255 filters is rejected at construction."""
        with pytest.raises(ValidationError):
            Subscribe(filters=[SubscribeFilter(topic="t")] * 256)


class TestSubAck:
    """Test SubAck packet codec."""

    def test_encode(self) -> None:
        """Test count byte and codes."""
        packet = SubAck(
            return_codes=[SubAckReturnCode.SUCCESS_QOS1, SubAckReturnCode.FAILURE]
        )

        assert packet.to_bytes() == b"\x02\x01\x80"
        assert packet.encoded_len() == 3

    def test_decode(self) -> None:
        """Test codes decode in order."""
        decoded = SubAck.decode(b"\x03\x00\x02\x80")

        assert decoded.return_codes == (
            SubAckReturnCode.SUCCESS_QOS0,
            SubAckReturnCode.SUCCESS_QOS2,
            SubAckReturnCode.FAILURE,
        )

    def test_decode_short(self) -> None:
        """Test fewer codes than the count."""
        with pytest.raises(BufferTooShortError) as exc_info:
            SubAck.decode(b"\x03\x00")

        assert (exc_info.value.expected, exc_info.value.actual) == (4, 2)

    def test_decode_invalid_code(self) -> None:
        """Test an unknown code never defaults."""
        with pytest.raises(InvalidReturnCodeError) as exc_info:
            SubAck.decode(b"\x02\x00\x03")

        assert exc_info.value.value == 0x03


class TestEmptyPackets:
    """Test zero-payload packets."""

    @pytest.mark.parametrize(
        ("cls", "msg_type"),
        [
            (PubAck, MessageType.PUBACK),
            (PingReq, MessageType.PINGREQ),
            (PingResp, MessageType.PINGRESP),
            (Disconnect, MessageType.DISCONNECT),
        ],
    )
    def test_empty_codec(self, cls: type, msg_type: MessageType) -> None:
        """Test encode is empty and decode ignores the slice."""
        packet = cls()

        assert packet.to_bytes() == b""
        assert packet.encoded_len() == 0
        assert packet.msg_type() is msg_type
        assert cls.decode(b"") == packet
        assert cls.decode(b"\x01\x02") == packet

    def test_distinct_kinds_not_equal(self) -> None:
        """Test identity comes from the type, not the (empty) content."""
        assert PingReq() != PingResp()
        assert PubAck() != Disconnect()
