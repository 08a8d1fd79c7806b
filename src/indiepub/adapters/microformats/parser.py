"""Parse microformats2 items out of HTML.

Covers the explicit property prefixes (``p-``, ``u-``, ``dt-``, ``e-``)
and nested items. Implied properties and the ``value-class`` pattern are
not parsed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import urljoin

from lxml import etree, html

if TYPE_CHECKING:
    from lxml.html import HtmlElement

_PREFIXES = ("p-", "u-", "dt-", "e-")
_URL_ATTRIBUTES = {
    "a": "href",
    "area": "href",
    "link": "href",
    "img": "src",
    "audio": "src",
    "video": "src",
    "source": "src",
    "iframe": "src",
    "object": "data",
}


def _classes(element: HtmlElement) -> list[str]:
    return (element.get("class") or "").split()


def _root_types(element: HtmlElement) -> list[str]:
    return sorted(
        {name for name in _classes(element) if name.startswith("h-") and len(name) > 2}
    )


def _property_classes(element: HtmlElement) -> list[tuple[str, str]]:
    found: list[tuple[str, str]] = []
    for name in _classes(element):
        for prefix in _PREFIXES:
            if name.startswith(prefix) and len(name) > len(prefix):
                found.append((prefix, name[len(prefix) :]))
                break
    return found


def _text(element: HtmlElement) -> str:
    return " ".join(element.text_content().split())


def _plain_value(element: HtmlElement) -> str:
    if element.tag == "abbr" and element.get("title"):
        return element.get("title", "")
    if element.tag in {"img", "area"} and element.get("alt") is not None:
        return element.get("alt", "")
    if element.tag in {"data", "input"} and element.get("value") is not None:
        return element.get("value", "")
    return _text(element)


def _url_value(element: HtmlElement, base_url: str) -> str:
    attribute = _URL_ATTRIBUTES.get(element.tag)
    if attribute and element.get(attribute):
        return urljoin(base_url, element.get(attribute, ""))
    return _plain_value(element)


def _datetime_value(element: HtmlElement) -> str:
    for attribute in ("datetime", "title", "value"):
        if element.get(attribute):
            return element.get(attribute, "")
    return _text(element)


def _embedded_value(element: HtmlElement) -> dict[str, str]:
    inner = (element.text or "") + "".join(
        etree.tostring(child, encoding="unicode", method="html") for child in element
    )
    return {"html": inner.strip(), "value": _text(element)}


def _property_value(prefix: str, element: HtmlElement, base_url: str) -> Any:
    if prefix == "u-":
        return _url_value(element, base_url)
    if prefix == "dt-":
        return _datetime_value(element)
    if prefix == "e-":
        return _embedded_value(element)
    return _plain_value(element)


def _parse_item(element: HtmlElement, base_url: str) -> dict[str, Any]:
    properties: dict[str, list[Any]] = {}
    children: list[dict[str, Any]] = []
    for child in element.iterchildren(tag=etree.Element):
        _collect(child, properties, children, base_url)
    item: dict[str, Any] = {"type": _root_types(element), "properties": properties}
    if children:
        item["children"] = children
    return item


def _collect(
    element: HtmlElement,
    properties: dict[str, list[Any]],
    children: list[dict[str, Any]],
    base_url: str,
) -> None:
    property_classes = _property_classes(element)

    if _root_types(element):
        nested = _parse_item(element, base_url)
        if not property_classes:
            children.append(nested)
            return
        for prefix, name in property_classes:
            value = dict(nested)
            value["value"] = _property_value(prefix, element, base_url)
            properties.setdefault(name, []).append(value)
        return

    for prefix, name in property_classes:
        properties.setdefault(name, []).append(_property_value(prefix, element, base_url))
    for child in element.iterchildren(tag=etree.Element):
        _collect(child, properties, children, base_url)


def parse_items(document: str, *, base_url: str = "") -> list[dict[str, Any]]:
    """Return the top-level mf2 items found in ``document``."""

    if not document.strip():
        return []
    root = html.document_fromstring(document)
    items: list[dict[str, Any]] = []

    def walk(element: HtmlElement) -> None:
        if _root_types(element):
            items.append(_parse_item(element, base_url))
            return
        for child in element.iterchildren(tag=etree.Element):
            walk(child)

    walk(root)
    return items
