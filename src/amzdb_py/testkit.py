from __future__ import annotations

import json

from .attribute import Attribute
from .item import Item
from .mocks import ANY, FakeTransport


def make_item(*attributes: Attribute) -> Item:
    item = Item()
    for attribute in attributes:
        item.add_attribute(attribute)
    return item


def error_body(code: str, message: str) -> bytes:
    return json.dumps({"__type": f"com.amazonaws.dynamodb.v20120810#{code}", "message": message}).encode("utf-8")


__all__ = [
    "ANY",
    "FakeTransport",
    "error_body",
    "make_item",
]
