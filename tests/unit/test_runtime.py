from __future__ import annotations

import pytest

from amzdb_py.mocks import FakeTransport
from amzdb_py.runtime import (
    AwsCallMetric,
    ClientSettings,
    create_boto3_config,
    endpoint_for_region,
    instrument_transport,
)


def test_client_settings_from_environ() -> None:
    got = ClientSettings.from_environ({"AWS_REGION": "eu-west-1", "DYNAMODB_ENDPOINT": "http://localhost:8000"})
    assert got.region == "eu-west-1"
    assert got.endpoint_url == "http://localhost:8000"

    assert ClientSettings.from_environ({"AWS_DEFAULT_REGION": "us-west-2"}).region == "us-west-2"
    assert ClientSettings.from_environ({}) == ClientSettings()


def test_create_boto3_config() -> None:
    cfg = create_boto3_config(connect_timeout=2.0, read_timeout=4.0, max_attempts=3)
    assert cfg.connect_timeout == 2.0
    assert cfg.read_timeout == 4.0
    assert cfg.retries["max_attempts"] == 3

    from_settings = ClientSettings(connect_timeout=5.0, read_timeout=6.0).boto3_config()
    assert from_settings.connect_timeout == 5.0
    assert from_settings.read_timeout == 6.0


def test_endpoint_for_region() -> None:
    assert endpoint_for_region("eu-west-1") == "https://dynamodb.eu-west-1.amazonaws.com"
    assert endpoint_for_region("cn-north-1") == "https://dynamodb.cn-north-1.amazonaws.com.cn"
    with pytest.raises(ValueError):
        endpoint_for_region("")


def test_instrument_transport_records_calls() -> None:
    metrics: list[AwsCallMetric] = []

    transport = FakeTransport()
    transport.expect("PutItem", response={})
    wrapped = instrument_transport(transport, on_call=metrics.append)
    assert wrapped.send("PutItem", {"TableName": "t"}) == b"{}"
    assert len(metrics) == 1
    assert metrics[0].operation == "PutItem"
    assert metrics[0].service == "dynamodb"
    assert metrics[0].ok is True

    transport2 = FakeTransport()
    transport2.expect("GetItem", error=RuntimeError("boom"))
    wrapped2 = instrument_transport(transport2, on_call=metrics.append)
    with pytest.raises(RuntimeError, match="boom"):
        wrapped2.send("GetItem", {})
    assert len(metrics) == 2
    assert metrics[1].ok is False
