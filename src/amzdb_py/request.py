from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Literal, TypeAlias

from .attribute import Attribute, encode_attribute
from .errors import MalformedResponseError, ValidationError
from .key import Key, PrimaryKey, encode_key

if TYPE_CHECKING:
    from .batch import BatchWriteItemRequest
    from .item import Item

UpdateAction: TypeAlias = Literal["ADD", "PUT", "DELETE"]

API_VERSION = "20120810"
TARGET_PREFIX = f"DynamoDB_{API_VERSION}"


def target(operation: str) -> str:
    return f"{TARGET_PREFIX}.{operation}"


def key_request(table_name: str, primary_key: PrimaryKey, key: Key) -> dict[str, Any]:
    return {"TableName": table_name, "Key": encode_key(primary_key, key)}


def put_item_request(table_name: str, item: Item) -> dict[str, Any]:
    return {"TableName": table_name, "Item": item.to_wire()}


def update_item_request(
    table_name: str,
    primary_key: PrimaryKey,
    key: Key,
    attributes: Sequence[Attribute],
    action: UpdateAction,
) -> dict[str, Any]:
    if action not in ("ADD", "PUT", "DELETE"):
        raise ValidationError(f"unsupported update action: {action}")

    updates: dict[str, Any] = {}
    for attr in attributes:
        update: dict[str, Any] = {"Action": action}
        # DELETE of a whole attribute carries no value.
        if not (action == "DELETE" and not attr.value and not attr.set_values):
            update["Value"] = encode_attribute(attr)
        updates[attr.name] = update

    req = key_request(table_name, primary_key, key)
    req["AttributeUpdates"] = updates
    return req


def batch_get_request(keys: Mapping[Any, Sequence[Key]]) -> dict[str, Any]:
    """Build a BatchGetItem payload from ``{table: [Key, ...]}``.

    Tables only need ``name`` and ``primary_key`` attributes.
    """
    request_items: dict[str, Any] = {}
    for table, table_keys in keys.items():
        request_items[table.name] = {"Keys": [encode_key(table.primary_key, k) for k in table_keys]}
    return {"RequestItems": request_items}


def batch_write_request(request: BatchWriteItemRequest) -> dict[str, Any]:
    request_items: dict[str, list[dict[str, Any]]] = {}
    for table_name, operations in request.operations.items():
        entries: list[dict[str, Any]] = []
        for item in operations.delete_requests:
            entries.append({"DeleteRequest": {"Key": item.to_wire()}})
        for item in operations.put_requests:
            entries.append({"PutRequest": {"Item": item.to_wire()}})
        request_items[table_name] = entries

    req: dict[str, Any] = {"RequestItems": request_items}
    if request.return_consumed_capacity:
        req["ReturnConsumedCapacity"] = "TOTAL"
    if request.return_item_collection_metrics:
        req["ReturnItemCollectionMetrics"] = "SIZE"
    return req


def parse_response(body: bytes | str) -> dict[str, Any]:
    try:
        data = json.loads(body)
    except ValueError as err:
        raise MalformedResponseError("response is not valid JSON", fragment=body) from err

    if not isinstance(data, dict):
        raise MalformedResponseError("response must be a JSON object", fragment=body)
    return data
