from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from .attribute import Attribute, encode_attribute, parse_attributes


@dataclass
class Item:
    """An ordered collection of attributes making up one record."""

    attributes: list[Attribute] = field(default_factory=list)

    @classmethod
    def from_wire(cls, record: Any) -> Item:
        item = cls()
        item.add_attributes_from_map(parse_attributes(record))
        return item

    def add_attribute(self, attribute: Attribute) -> None:
        self.attributes.append(attribute)

    def add_attributes_from_map(self, attributes: Mapping[str, Attribute]) -> None:
        for attribute in attributes.values():
            self.add_attribute(attribute)

    def get(self, name: str) -> Attribute | None:
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None

    def size(self) -> int:
        # UTF-8 byte length of scalar values; set-valued attributes do not count.
        return sum(len(attribute.value.encode("utf-8")) for attribute in self.attributes)

    def to_wire(self) -> dict[str, Any]:
        return {attribute.name: encode_attribute(attribute) for attribute in self.attributes}

    def __len__(self) -> int:
        return len(self.attributes)

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self.attributes)
