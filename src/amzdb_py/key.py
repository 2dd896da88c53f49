from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .attribute import SCALAR_TYPES, Attribute, encode_attribute
from .errors import ValidationError


@dataclass(frozen=True)
class PrimaryKey:
    """Key schema of a table: a hash attribute and an optional range attribute.

    Only the ``type`` and ``name`` of the attributes are used.
    """

    key_attribute: Attribute
    range_attribute: Attribute | None = None

    def __post_init__(self) -> None:
        for attr in (self.key_attribute, self.range_attribute):
            if attr is not None and attr.type not in SCALAR_TYPES:
                raise ValidationError(f"key attribute {attr.name!r} must be a scalar type")

    def has_range(self) -> bool:
        return self.range_attribute is not None


@dataclass(frozen=True)
class Key:
    hash_key: str
    range_key: str | None = None


def encode_key(primary_key: PrimaryKey, key: Key) -> dict[str, Any]:
    if not key.hash_key:
        raise ValidationError("hash_key is required")

    hash_attr = primary_key.key_attribute
    out: dict[str, Any] = {
        hash_attr.name: encode_attribute(Attribute(type=hash_attr.type, name=hash_attr.name, value=key.hash_key))
    }

    range_attr = primary_key.range_attribute
    if range_attr is None:
        if key.range_key is not None:
            raise ValidationError("range_key given for a table without a range key")
        return out

    if key.range_key is None:
        raise ValidationError("range_key is required for this table")
    out[range_attr.name] = encode_attribute(
        Attribute(type=range_attr.type, name=range_attr.name, value=key.range_key)
    )
    return out
