"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from nmqtt import Connect, Publish, QoS, Subscribe, SubscribeFilter
from nmqtt.transport import LoopbackTransport


@pytest.fixture
def connect_with_credentials() -> Connect:
    """Connect packet carrying every optional field."""
    return Connect(
        client_id="test-client",
        keep_alive=120,
        clean_session=True,
        username="user",
        password=b"pass",
    )


@pytest.fixture
def sample_publish() -> Publish:
    """QoS 1 retained publish."""
    return Publish(topic="sensor/temp", payload=b"25.5").with_qos(QoS.AT_LEAST_ONCE).with_retain(True)


@pytest.fixture
def sample_subscribe() -> Subscribe:
    """Subscribe with two filters in a fixed order."""
    return Subscribe(
        filters=[
            SubscribeFilter(topic="home/+/temp", qos=QoS.AT_LEAST_ONCE),
            SubscribeFilter(topic="office/#", qos=QoS.AT_MOST_ONCE),
        ]
    )


@pytest.fixture
def loopback():
    """Open loopback transport, closed after the test."""
    transport = LoopbackTransport()
    transport.open()
    yield transport
    transport.close()
