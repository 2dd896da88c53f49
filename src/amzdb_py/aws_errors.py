from __future__ import annotations

import json

from botocore.exceptions import BotoCoreError, ClientError

from .errors import TransportError


def _short_code(error_type: str) -> str:
    # "com.amazonaws.dynamodb.v20120810#ResourceNotFoundException" -> "ResourceNotFoundException"
    return error_type.rsplit("#", 1)[-1]


def map_error_response(status_code: int, body: bytes) -> TransportError:
    code = ""
    message = ""
    try:
        data = json.loads(body.decode("utf-8")) if body else {}
    except (UnicodeDecodeError, ValueError):
        data = {}

    if isinstance(data, dict):
        code = _short_code(str(data.get("__type", "")))
        message = str(data.get("message") or data.get("Message") or "")

    return TransportError(
        code=code or f"HTTP{status_code}",
        message=message or body.decode("utf-8", errors="replace"),
        status_code=status_code,
    )


def map_client_error(err: Exception) -> TransportError:
    if isinstance(err, ClientError):
        code = str(err.response.get("Error", {}).get("Code", ""))
        message = str(err.response.get("Error", {}).get("Message", ""))
        status = err.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        return TransportError(
            code=code or "UnknownError",
            message=message or str(err),
            status_code=status if isinstance(status, int) else None,
        )

    if isinstance(err, BotoCoreError):
        return TransportError(code=type(err).__name__, message=str(err))

    return TransportError(code="UnknownError", message=str(err))
