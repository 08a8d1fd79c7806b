"""
Post documents:
an mf2 item plus the storage path and canonical URL it lives at.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeAlias, cast

from indiepub.domain.errors import TypeMismatch

if TYPE_CHECKING:
    from collections.abc import Mapping

PropertyValues: TypeAlias = list[Any]
Properties: TypeAlias = dict[str, PropertyValues]


def is_value_list(value: object) -> bool:
    """mf2 values travel as JSON arrays; a bare string is a scalar, not a list."""
    return isinstance(value, list | tuple)


def normalize_properties(properties: Mapping[str, object]) -> Properties:
    """Return a detached copy of ``properties`` with empty lists dropped.

    Raises ``TypeMismatch`` for any value that is not a list.
    """

    normalized: Properties = {}
    for name, values in properties.items():
        if not is_value_list(values):
            raise TypeMismatch(name)
        items = list(cast("list[Any] | tuple[Any, ...]", values))
        if items:
            normalized[name] = copy.deepcopy(items)
    return normalized


@dataclass(frozen=True, slots=True)
class Mf2:
    """A microformats2 item: vocabulary types and list-valued properties."""

    type: list[str] = field(default_factory=lambda: ["h-entry"])
    properties: Properties = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", list(self.type))
        object.__setattr__(self, "properties", normalize_properties(self.properties))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Mf2:
        raw_type = data.get("type") or ["h-entry"]
        types = [raw_type] if isinstance(raw_type, str) else list(raw_type)
        return cls(type=types, properties=dict(data.get("properties") or {}))

    def to_dict(self) -> dict[str, Any]:
        return {"type": list(self.type), "properties": copy.deepcopy(self.properties)}

    def get(self, name: str) -> PropertyValues | None:
        return self.properties.get(name)


@dataclass(frozen=True, slots=True)
class Document:
    """A post as stored: post type, storage path, canonical URL and content."""

    type: str
    path: str
    url: str
    mf2: Mf2 = field(default_factory=Mf2)

    @property
    def properties(self) -> Properties:
        return self.mf2.properties

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Document:
        return cls(
            type=data["type"],
            path=data["path"],
            url=data["url"],
            mf2=Mf2.from_dict(data.get("mf2") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "path": self.path, "url": self.url, "mf2": self.mf2.to_dict()}
