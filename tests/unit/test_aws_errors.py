from __future__ import annotations

from botocore.exceptions import ClientError, ReadTimeoutError

from amzdb_py import TransportError
from amzdb_py.aws_errors import map_client_error, map_error_response
from amzdb_py.testkit import error_body


def test_map_error_response_uses_short_code() -> None:
    err = map_error_response(400, error_body("ConditionalCheckFailedException", "The conditional request failed"))

    assert isinstance(err, TransportError)
    assert err.code == "ConditionalCheckFailedException"
    assert err.message == "The conditional request failed"
    assert err.status_code == 400


def test_map_error_response_non_json_body() -> None:
    err = map_error_response(503, b"Service Unavailable")

    assert err.code == "HTTP503"
    assert err.message == "Service Unavailable"


def test_map_error_response_empty_body() -> None:
    err = map_error_response(500, b"")
    assert err.code == "HTTP500"


def test_map_client_error() -> None:
    err = map_client_error(
        ClientError(
            {
                "Error": {"Code": "ProvisionedThroughputExceededException", "Message": "slow down"},
                "ResponseMetadata": {"HTTPStatusCode": 400},
            },
            "BatchWriteItem",
        )
    )

    assert err.code == "ProvisionedThroughputExceededException"
    assert err.message == "slow down"
    assert err.status_code == 400


def test_map_botocore_error() -> None:
    err = map_client_error(ReadTimeoutError(endpoint_url="https://x"))
    assert err.code == "ReadTimeoutError"
    assert err.status_code is None


def test_map_unknown_error() -> None:
    err = map_client_error(RuntimeError("boom"))
    assert err.code == "UnknownError"
    assert "boom" in str(err)
