"""Normalise Micropub create requests into post documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from indiepub.domain.errors import InvalidInstruction
from indiepub.domain.model import Document, Mf2, is_value_list

if TYPE_CHECKING:
    from collections.abc import Mapping

# form fields that steer the request rather than describe the post
RESERVED_FIELDS = frozenset({"h", "action", "url", "access_token", "q"})


def clean_values(values: list[Any]) -> list[Any]:
    """Drop ``None``, ``False`` and empty strings, keeping zero."""

    return [value for value in values if value is not None and value is not False and value != ""]


def properties_from_form(fields: Mapping[str, Any]) -> dict[str, list[Any]]:
    """Collect form-encoded fields as list-valued mf2 properties.

    ``category[]=a&category[]=b`` and ``category=a`` both yield lists.
    """

    properties: dict[str, list[Any]] = {}
    for key, raw in fields.items():
        name = key.removesuffix("[]")
        if name in RESERVED_FIELDS or name.startswith("mp-"):
            continue
        values = list(cast("list[Any]", raw)) if is_value_list(raw) else [raw]
        values = clean_values(values)
        if values:
            properties.setdefault(name, []).extend(values)
    return properties


def mf2_from_body(body: Mapping[str, Any]) -> Mf2:
    """Read either a JSON mf2 item or a form-style body."""

    if "properties" in body:
        raw_properties = body.get("properties")
        if not isinstance(raw_properties, dict):
            raise InvalidInstruction("properties should be an object")
        properties = {
            name: clean_values(list(values)) if is_value_list(values) else values
            for name, values in cast("dict[str, Any]", raw_properties).items()
        }
        return Mf2.from_dict({"type": body.get("type"), "properties": properties})

    h = body.get("h", "entry")
    if not isinstance(h, str) or not h:
        raise InvalidInstruction("h should name a microformats vocabulary")
    return Mf2(type=[f"h-{h}"], properties=properties_from_form(body))


def document_from_body(body: Mapping[str, Any], *, post_type: str, path: str, url: str) -> Document:
    """Build the document a create request describes, at a caller-chosen location."""

    return Document(type=post_type, path=path, url=url, mf2=mf2_from_body(body))
