from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from .errors import (
    EmptyRequestError,
    ItemTooLargeError,
    MalformedResponseError,
    RequestTooLargeError,
    TooManyItemsError,
)
from .item import Item
from .key import Key
from .request import batch_get_request, parse_response

if TYPE_CHECKING:
    from .table import Server, Table

logger = logging.getLogger(__name__)

MAX_BATCH_WRITE_ITEMS = 25
MAX_ITEM_SIZE_BYTES = 65536
MAX_REQUEST_SIZE_BYTES = 1048576

UnprocessedItems: TypeAlias = dict[str, dict[str, list[Item]]]
BatchGetResult: TypeAlias = dict[str, list[Item]]


@dataclass
class BatchWriteItemOperations:
    delete_requests: list[Item] = field(default_factory=list)
    put_requests: list[Item] = field(default_factory=list)


class BatchWriteItemRequest:
    """Put and delete operations for one or more tables, sent as one BatchWriteItem call.

    Not safe for concurrent mutation.
    """

    def __init__(self) -> None:
        self.operations: dict[str, BatchWriteItemOperations] = {}
        self._return_consumed_capacity = False
        self._return_item_collection_metrics = False

    @property
    def return_consumed_capacity(self) -> bool:
        return self._return_consumed_capacity

    @return_consumed_capacity.setter
    def return_consumed_capacity(self, value: bool) -> None:
        self._return_consumed_capacity = value
        if value:
            logger.warning("ReturnConsumedCapacity is sent but not parsed from the response")

    @property
    def return_item_collection_metrics(self) -> bool:
        return self._return_item_collection_metrics

    @return_item_collection_metrics.setter
    def return_item_collection_metrics(self, value: bool) -> None:
        self._return_item_collection_metrics = value
        if value:
            logger.warning("ReturnItemCollectionMetrics is sent but not parsed from the response")

    def add_delete_request(self, table: str, item: Item) -> None:
        self.operations.setdefault(table, BatchWriteItemOperations()).delete_requests.append(item)

    def add_put_request(self, table: str, item: Item) -> None:
        self.operations.setdefault(table, BatchWriteItemOperations()).put_requests.append(item)

    def items(self) -> list[Item]:
        out: list[Item] = []
        for operations in self.operations.values():
            out.extend(operations.delete_requests)
            out.extend(operations.put_requests)
        return out

    def validate(self) -> None:
        items = self.items()
        if not items:
            raise EmptyRequestError("the request must contain at least 1 item")
        if len(items) > MAX_BATCH_WRITE_ITEMS:
            raise TooManyItemsError(count=len(items), limit=MAX_BATCH_WRITE_ITEMS)

        total = 0
        for item in items:
            size = item.size()
            if size > MAX_ITEM_SIZE_BYTES:
                raise ItemTooLargeError(size=size, limit=MAX_ITEM_SIZE_BYTES)
            total += size

        if total > MAX_REQUEST_SIZE_BYTES:
            raise RequestTooLargeError(size=total, limit=MAX_REQUEST_SIZE_BYTES)


class BatchGetItem:
    def __init__(self, server: Server) -> None:
        self.server = server
        self.keys: dict[Table, list[Key]] = {}

    def add_table(self, table: Table, keys: Sequence[Key]) -> BatchGetItem:
        self.keys[table] = list(keys)
        return self

    def execute(self) -> BatchGetResult:
        body = self.server.send("BatchGetItem", batch_get_request(self.keys))
        return parse_batch_get_response(body)


def parse_batch_write_response(body: bytes | str) -> UnprocessedItems:
    """Decode the ``UnprocessedItems`` of a BatchWriteItem response.

    An empty map means every operation was applied. Each unprocessed entry is
    rebuilt as an ``Item`` and grouped by table and operation kind
    (``PutRequest``/``DeleteRequest``), keeping response order.
    """
    data = parse_response(body)

    tables = data.get("UnprocessedItems")
    if not isinstance(tables, Mapping):
        raise MalformedResponseError("UnprocessedItems must be a map", fragment=body)

    results: UnprocessedItems = {}
    for table, containers in tables.items():
        if not isinstance(containers, list):
            raise MalformedResponseError(f"unprocessed items for {table!r} must be a list", fragment=containers)

        table_result: dict[str, list[Item]] = {}
        for container in containers:
            if not isinstance(container, Mapping):
                raise MalformedResponseError("unprocessed request must be a map", fragment=container)

            for op_kind, request in container.items():
                if not isinstance(request, Mapping):
                    raise MalformedResponseError(f"{op_kind} must be a map", fragment=request)

                # {"Item": {...}} for puts, {"Key": {...}} for deletes
                for record in request.values():
                    if not isinstance(record, Mapping):
                        raise MalformedResponseError(f"{op_kind} attributes must be a map", fragment=record)
                    table_result.setdefault(op_kind, []).append(Item.from_wire(record))

        results[table] = table_result

    return results


def parse_batch_get_response(body: bytes | str) -> BatchGetResult:
    data = parse_response(body)

    tables = data.get("Responses")
    if not isinstance(tables, Mapping):
        raise MalformedResponseError("Responses must be a map", fragment=body)

    results: BatchGetResult = {}
    for table, entries in tables.items():
        if not isinstance(entries, list):
            raise MalformedResponseError(f"responses for {table!r} must be a list", fragment=entries)

        results[table] = [Item.from_wire(entry) for entry in entries]

    return results


def unprocessed_count(result: UnprocessedItems) -> int:
    return sum(len(items) for kinds in result.values() for items in kinds.values())
