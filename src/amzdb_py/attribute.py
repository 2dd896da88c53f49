from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias, cast

from .errors import MalformedResponseError, ValidationError

logger = logging.getLogger(__name__)

AttributeType: TypeAlias = Literal["S", "N", "B", "SS", "NS", "BS"]

TYPE_STRING: AttributeType = "S"
TYPE_NUMBER: AttributeType = "N"
TYPE_BINARY: AttributeType = "B"
TYPE_STRING_SET: AttributeType = "SS"
TYPE_NUMBER_SET: AttributeType = "NS"
TYPE_BINARY_SET: AttributeType = "BS"

SCALAR_TYPES: tuple[AttributeType, ...] = (TYPE_STRING, TYPE_NUMBER, TYPE_BINARY)
SET_TYPES: tuple[AttributeType, ...] = (TYPE_STRING_SET, TYPE_NUMBER_SET, TYPE_BINARY_SET)

# Probe order when decoding; well-formed input carries exactly one tag.
_DECODE_ORDER: tuple[AttributeType, ...] = SCALAR_TYPES + SET_TYPES


@dataclass(frozen=True)
class Attribute:
    """One named, typed DynamoDB value.

    Scalar types use ``value``; set types use ``set_values``. Numbers stay
    decimal strings and binary values stay the base64 text seen on the wire.
    """

    type: AttributeType
    name: str
    value: str = ""
    set_values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.type not in _DECODE_ORDER:
            raise ValidationError(f"unsupported attribute type: {self.type!r}")
        if not isinstance(self.set_values, tuple):
            object.__setattr__(self, "set_values", tuple(self.set_values))

    @property
    def is_set(self) -> bool:
        return self.type in SET_TYPES


def string_attribute(name: str, value: str) -> Attribute:
    return Attribute(type=TYPE_STRING, name=name, value=value)


def number_attribute(name: str, value: str) -> Attribute:
    return Attribute(type=TYPE_NUMBER, name=name, value=value)


def binary_attribute(name: str, value: str) -> Attribute:
    return Attribute(type=TYPE_BINARY, name=name, value=value)


def string_set_attribute(name: str, values: Iterable[str]) -> Attribute:
    return Attribute(type=TYPE_STRING_SET, name=name, set_values=tuple(values))


def number_set_attribute(name: str, values: Iterable[str]) -> Attribute:
    return Attribute(type=TYPE_NUMBER_SET, name=name, set_values=tuple(values))


def binary_set_attribute(name: str, values: Iterable[str]) -> Attribute:
    return Attribute(type=TYPE_BINARY_SET, name=name, set_values=tuple(values))


def encode_attribute(attr: Attribute) -> dict[str, Any]:
    if attr.is_set:
        return {attr.type: list(attr.set_values)}
    return {attr.type: attr.value}


def decode_attribute(name: str, wire: Any) -> Attribute | None:
    if not isinstance(wire, Mapping):
        raise MalformedResponseError("attribute value must be a map", fragment=wire)

    for kind in _DECODE_ORDER:
        raw = wire.get(kind)
        if kind in SCALAR_TYPES:
            if isinstance(raw, str):
                return Attribute(type=kind, name=name, value=raw)
            continue

        if isinstance(raw, list):
            values = tuple(v if isinstance(v, str) else "" for v in raw)
            return Attribute(type=kind, name=name, set_values=values)

    return None


def parse_attributes(record: Any) -> dict[str, Attribute]:
    if not isinstance(record, Mapping):
        raise MalformedResponseError("item must be a map of attributes", fragment=record)

    out: dict[str, Attribute] = {}
    for name, wire in cast(Mapping[str, Any], record).items():
        if not isinstance(wire, Mapping):
            logger.warning("skipping attribute %r: expected a map, got %r", name, wire)
            continue

        attr = decode_attribute(name, wire)
        if attr is None:
            logger.warning("skipping attribute %r: no supported type in %r", name, wire)
            continue
        out[name] = attr

    return out
