"""Update instruction DTOs (transport-agnostic)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, cast

from indiepub.domain.errors import InvalidInstruction, TypeMismatch
from indiepub.domain.model import is_value_list

if TYPE_CHECKING:
    from collections.abc import Mapping

    from indiepub.domain.model import Properties

UPDATE_ACTION = "update"


@dataclass(frozen=True, slots=True)
class UpdateInstruction:
    """A validated Micropub ``action=update`` request.

    ``delete`` keeps the caller's shape: a list of property names removes
    those properties, a mapping removes individual values.
    """

    url: str | None = None
    replace: Properties = field(default_factory=dict)
    add: Properties = field(default_factory=dict)
    delete: list[str] | Properties = field(default_factory=list)
    action: str = UPDATE_ACTION

    @classmethod
    def from_body(cls, body: Mapping[str, Any]) -> UpdateInstruction:
        """Validate a deserialized request body.

        Every shape check runs here so that a rejected instruction never
        reaches the document. ``url`` is optional; when present it must be a
        non-empty string.
        """

        action = body.get("action", UPDATE_ACTION)
        if action != UPDATE_ACTION:
            raise InvalidInstruction(f"Unsupported action for update: {action}")
        replace = _values_by_property(body.get("replace"), operation="replace")
        add = _values_by_property(body.get("add"), operation="add")
        delete = _delete_targets(body.get("delete"))
        url = body.get("url")
        if url is not None and (not isinstance(url, str) or not url):
            raise InvalidInstruction("url should be a non-empty string")
        return cls(url=url, replace=replace, add=add, delete=delete)


def _values_by_property(raw: object, *, operation: str) -> Properties:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise InvalidInstruction(f"{operation} should be an object")
    values: Properties = {}
    for name, items in cast("dict[str, object]", raw).items():
        if not is_value_list(items):
            raise TypeMismatch(name)
        values[name] = list(cast("list[Any]", items))
    return values


def _delete_targets(raw: object) -> list[str] | Properties:
    if raw is None:
        return []
    if isinstance(raw, dict):
        return _values_by_property(raw, operation="delete")
    if is_value_list(raw):
        names = list(cast("list[object]", raw))
        if not all(isinstance(name, str) for name in names):
            raise InvalidInstruction("delete should list property names")
        return cast("list[str]", names)
    raise InvalidInstruction("delete should be an array or an object")
