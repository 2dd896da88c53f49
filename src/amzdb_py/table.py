from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from .attribute import Attribute
from .aws_errors import map_client_error as _map_client_error
from .batch import (
    BatchGetItem,
    BatchWriteItemRequest,
    UnprocessedItems,
    parse_batch_write_response,
    unprocessed_count,
)
from .errors import MalformedResponseError, NotFoundError, ValidationError
from .item import Item
from .key import Key, PrimaryKey
from .request import (
    UpdateAction,
    batch_write_request,
    key_request,
    parse_response,
    put_item_request,
    update_item_request,
)
from .runtime import ClientSettings
from .transport import SignedTransport, Transport

logger = logging.getLogger(__name__)


class Server:
    def __init__(self, transport: Transport | None = None, *, settings: ClientSettings | None = None) -> None:
        self.transport: Transport = transport or SignedTransport(settings)

    def new_table(self, name: str, primary_key: PrimaryKey) -> Table:
        return Table(self, name, primary_key)

    def send(self, operation: str, payload: Mapping[str, Any]) -> bytes:
        logger.debug("sending %s", operation)
        try:
            return self.transport.send(operation, payload)
        except (ClientError, BotoCoreError) as err:
            raise _map_client_error(err) from err


class Table:
    def __init__(self, server: Server, name: str, primary_key: PrimaryKey) -> None:
        if not name:
            raise ValueError("table name is required")
        self.server = server
        self.name = name
        self.primary_key = primary_key

    def __repr__(self) -> str:
        return f"Table(name={self.name!r})"

    def get_item(self, key: Key) -> Item:
        body = self.server.send("GetItem", key_request(self.name, self.primary_key, key))
        resp = parse_response(body)

        if "Item" not in resp:
            raise NotFoundError("item not found")

        item = resp["Item"]
        if not isinstance(item, Mapping):
            raise MalformedResponseError("Item must be a map", fragment=body)
        return Item.from_wire(item)

    def put_item(self, item: Item) -> bool:
        if len(item) == 0:
            raise ValidationError("at least one attribute is required")

        body = self.server.send("PutItem", put_item_request(self.name, item))
        parse_response(body)
        return True

    def delete_item(self, key: Key) -> bool:
        body = self.server.send("DeleteItem", key_request(self.name, self.primary_key, key))
        parse_response(body)
        return True

    def add_attributes(self, key: Key, attributes: Sequence[Attribute]) -> bool:
        return self._modify_attributes(key, attributes, "ADD")

    def update_attributes(self, key: Key, attributes: Sequence[Attribute]) -> bool:
        return self._modify_attributes(key, attributes, "PUT")

    def delete_attributes(self, key: Key, attributes: Sequence[Attribute]) -> bool:
        return self._modify_attributes(key, attributes, "DELETE")

    def _modify_attributes(self, key: Key, attributes: Sequence[Attribute], action: UpdateAction) -> bool:
        if not attributes:
            raise ValidationError("at least one attribute is required")

        req = update_item_request(self.name, self.primary_key, key, attributes, action)
        body = self.server.send("UpdateItem", req)
        parse_response(body)
        return True

    def batch_get_items(self, keys: Sequence[Key]) -> BatchGetItem:
        return BatchGetItem(self.server).add_table(self, keys)

    def batch_write_item(self, request: BatchWriteItemRequest) -> UnprocessedItems:
        """Validate and send a batch write.

        Limit violations raise before anything is sent. The result lists the
        operations the service did not apply; retrying them is up to the caller.
        """
        request.validate()

        body = self.server.send("BatchWriteItem", batch_write_request(request))
        unprocessed = parse_batch_write_response(body)
        if unprocessed:
            logger.debug("batch write left %d unprocessed items", unprocessed_count(unprocessed))
        return unprocessed
