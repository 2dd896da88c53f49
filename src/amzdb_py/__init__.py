from __future__ import annotations

import json
import re
from importlib.resources import files
from typing import TYPE_CHECKING, Any

from .attribute import (
    TYPE_BINARY,
    TYPE_BINARY_SET,
    TYPE_NUMBER,
    TYPE_NUMBER_SET,
    TYPE_STRING,
    TYPE_STRING_SET,
    Attribute,
    AttributeType,
    binary_attribute,
    binary_set_attribute,
    decode_attribute,
    encode_attribute,
    number_attribute,
    number_set_attribute,
    parse_attributes,
    string_attribute,
    string_set_attribute,
)
from .batch import (
    MAX_BATCH_WRITE_ITEMS,
    MAX_ITEM_SIZE_BYTES,
    MAX_REQUEST_SIZE_BYTES,
    BatchGetItem,
    BatchWriteItemOperations,
    BatchWriteItemRequest,
    parse_batch_get_response,
    parse_batch_write_response,
)
from .errors import (
    AmzdbPyError,
    EmptyRequestError,
    ItemTooLargeError,
    MalformedResponseError,
    NotFoundError,
    RequestTooLargeError,
    TooManyItemsError,
    TransportError,
    ValidationError,
)
from .item import Item
from .key import Key, PrimaryKey

if TYPE_CHECKING:
    from .runtime import AwsCallMetric, ClientSettings, create_boto3_config, instrument_transport
    from .table import Server, Table
    from .transport import SignedTransport, Transport


def _read_repo_version() -> str:
    try:
        data = json.loads(files(__package__).joinpath("version.json").read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return "0.0.0"

    version = data.get("version")
    return version if isinstance(version, str) and version else "0.0.0"


def _normalize_repo_version(repo_version: str) -> str:
    match = re.match(r"^(\d+\.\d+\.\d+)-rc\.?([0-9]+)$", repo_version)
    if match:
        return f"{match.group(1)}rc{match.group(2)}"
    return repo_version


__repo_version__ = _read_repo_version()
__version__ = _normalize_repo_version(__repo_version__)


def __getattr__(name: str) -> Any:
    if name in {"Server", "Table"}:
        from . import table

        return getattr(table, name)
    if name in {"SignedTransport", "Transport"}:
        from . import transport

        return getattr(transport, name)
    if name in {"AwsCallMetric", "ClientSettings", "create_boto3_config", "instrument_transport"}:
        from . import runtime

        return getattr(runtime, name)
    raise AttributeError(name)


__all__ = [
    "AmzdbPyError",
    "Attribute",
    "AttributeType",
    "AwsCallMetric",
    "BatchGetItem",
    "BatchWriteItemOperations",
    "BatchWriteItemRequest",
    "ClientSettings",
    "EmptyRequestError",
    "Item",
    "ItemTooLargeError",
    "Key",
    "MAX_BATCH_WRITE_ITEMS",
    "MAX_ITEM_SIZE_BYTES",
    "MAX_REQUEST_SIZE_BYTES",
    "MalformedResponseError",
    "NotFoundError",
    "PrimaryKey",
    "RequestTooLargeError",
    "Server",
    "SignedTransport",
    "TYPE_BINARY",
    "TYPE_BINARY_SET",
    "TYPE_NUMBER",
    "TYPE_NUMBER_SET",
    "TYPE_STRING",
    "TYPE_STRING_SET",
    "Table",
    "TooManyItemsError",
    "Transport",
    "TransportError",
    "ValidationError",
    "__repo_version__",
    "__version__",
    "binary_attribute",
    "binary_set_attribute",
    "create_boto3_config",
    "decode_attribute",
    "encode_attribute",
    "instrument_transport",
    "number_attribute",
    "number_set_attribute",
    "parse_attributes",
    "parse_batch_get_response",
    "parse_batch_write_response",
    "string_attribute",
    "string_set_attribute",
]
