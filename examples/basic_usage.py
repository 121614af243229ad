#!/usr/bin/env python3
"""Basic usage example for nmqtt.

This example demonstrates:
1. Building packets as pydantic models
2. Framing them with a message id
3. Decoding a datagram back into a frame
4. Exchanging frames through the loopback transport
"""

from __future__ import annotations

import threading

from nmqtt import Connect, Frame, Publish, QoS, Subscribe
from nmqtt.cli import format_packet
from nmqtt.exceptions import DecodeError, PayloadTooLargeError
from nmqtt.transport import LoopbackTransport


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("nmqtt Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Building packets...")
    connect = Connect(client_id="sensor-01", keep_alive=30).with_credentials("alice", b"secret")
    publish = Publish(topic="sensor/temp", payload=b"25.5").with_qos(QoS.AT_LEAST_ONCE)
    subscribe = Subscribe.single("control/#", QoS.AT_LEAST_ONCE)
    for packet in (connect, publish, subscribe):
        print(f"   {format_packet(packet):<40} payload {packet.encoded_len()} bytes")
    print()

    print("2. Framing the publish with msg id 42...")
    frame = Frame(msg_id=42, packet=publish)
    data = frame.encode()
    print(f"   Frame: {data.hex(' ')}")
    print(f"   Header: length={data[0]} type={data[1]} msg_id={int.from_bytes(data[2:4], 'big')}")
    print()

    print("3. Decoding...")
    decoded = Frame.decode(data)
    print(f"   Round trip OK: {decoded == frame}")
    try:
        Frame.decode(data[:10])
    except DecodeError as e:
        print(f"   Truncated frame rejected: {e}")
    try:
        Frame(msg_id=1, packet=Publish(topic="big", payload=bytes(300))).encode()
    except PayloadTooLargeError as e:
        print(f"   Oversized frame rejected: {e}")
    print()

    print("4. Loopback exchange...")
    received = threading.Event()

    def on_receive(datagram: bytes, source: str) -> None:
        frame = Frame.decode(datagram)
        print(f"   ← #{frame.msg_id} {format_packet(frame.packet)} from {source}")
        received.set()

    with LoopbackTransport() as transport:
        transport.attach_rx_callback(on_receive)
        sent = transport.send_packet(connect)
        print(f"   → #{sent.msg_id} {format_packet(sent.packet)}")
        received.wait(timeout=2.0)

    print()
    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
