from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import pytest
from botocore.credentials import Credentials
from botocore.exceptions import EndpointConnectionError

from amzdb_py import ClientSettings, SignedTransport, TransportError


class _FakeSession:
    def __init__(self, *, credentials: Credentials | None, region_name: str | None = "eu-west-1") -> None:
        self._credentials = credentials
        self.region_name = region_name

    def get_credentials(self) -> Credentials | None:
        return self._credentials


@dataclass
class _FakeResponse:
    status_code: int
    content: bytes


@dataclass
class _FakeHttp:
    response: _FakeResponse | None = None
    error: Exception | None = None
    sent: list[Any] = field(default_factory=list)

    def send(self, request: Any) -> _FakeResponse:
        self.sent.append(request)
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


def _transport(http: _FakeHttp, **settings: Any) -> SignedTransport:
    return SignedTransport(
        ClientSettings(**settings),
        session=_FakeSession(credentials=Credentials("AKIDEXAMPLE", "secret")),
        http=http,
    )


def test_send_posts_signed_json() -> None:
    http = _FakeHttp(response=_FakeResponse(200, b'{"Item": {}}'))
    transport = _transport(http, region="us-east-1")

    body = transport.send("GetItem", {"TableName": "t", "Key": {"id": {"S": "a"}}})

    assert body == b'{"Item": {}}'
    (req,) = http.sent
    assert req.method == "POST"
    assert req.url == "https://dynamodb.us-east-1.amazonaws.com"
    assert req.headers["X-Amz-Target"] == "DynamoDB_20120810.GetItem"
    assert req.headers["Content-Type"] == "application/x-amz-json-1.0"
    assert "AWS4-HMAC-SHA256" in req.headers["Authorization"]
    assert "us-east-1/dynamodb/aws4_request" in req.headers["Authorization"]
    assert json.loads(req.body) == {"TableName": "t", "Key": {"id": {"S": "a"}}}


def test_endpoint_override_and_session_region() -> None:
    http = _FakeHttp(response=_FakeResponse(200, b"{}"))
    transport = _transport(http, endpoint_url="http://localhost:8000")

    assert transport.region == "eu-west-1"
    transport.send("DeleteItem", {})
    assert http.sent[0].url == "http://localhost:8000"


def test_error_status_maps_to_transport_error() -> None:
    body = json.dumps(
        {"__type": "com.amazonaws.dynamodb.v20120810#ResourceNotFoundException", "message": "no table"}
    ).encode()
    http = _FakeHttp(response=_FakeResponse(400, body))

    with pytest.raises(TransportError) as exc:
        _transport(http, region="us-east-1").send("GetItem", {})

    assert exc.value.code == "ResourceNotFoundException"
    assert exc.value.message == "no table"
    assert exc.value.status_code == 400


def test_connection_failure_maps_to_transport_error() -> None:
    http = _FakeHttp(error=EndpointConnectionError(endpoint_url="https://x"))

    with pytest.raises(TransportError) as exc:
        _transport(http, region="us-east-1").send("GetItem", {})
    assert exc.value.code == "EndpointConnectionError"


def test_missing_credentials_is_transport_error() -> None:
    transport = SignedTransport(
        ClientSettings(region="us-east-1"),
        session=_FakeSession(credentials=None),
        http=_FakeHttp(),
    )

    with pytest.raises(TransportError) as exc:
        transport.send("GetItem", {})
    assert exc.value.code == "NoCredentialsError"


def test_region_is_required() -> None:
    with pytest.raises(ValueError):
        SignedTransport(
            ClientSettings(),
            session=_FakeSession(credentials=None, region_name=None),
            http=_FakeHttp(),
        )
