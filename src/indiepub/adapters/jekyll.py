"""Markdown with YAML front matter, as kept in a Jekyll-style repository."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any, Final, cast

import frontmatter
import yaml

from indiepub.domain.model import Document, Mf2, is_value_list
from indiepub.domain.ports.store import PostFormatter

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)

POST_TYPE_KEY: Final[str] = "post-type"
URL_KEY: Final[str] = "url"
MF2_TYPE_KEY: Final[str] = "h"
PROPERTIES_KEY: Final[str] = "properties"
CONTENT_PROPERTY: Final[str] = "content"


def _body_text(values: list[Any]) -> str | None:
    """Return the content that can live in the file body alone, if any."""

    if len(values) != 1 or not isinstance(values[0], str):
        return None
    text = values[0]
    # the body is stripped on read
    return text if text and text == text.strip() else None


def _rendered_text(values: list[Any]) -> str:
    first = values[0]
    if isinstance(first, dict):
        item = cast("dict[str, Any]", first)
        return str(item.get("html") or item.get("value") or "")
    return str(first)


class FrontmatterFormatter:
    """Maps a document to front matter plus a Markdown body and back.

    The document's identity (``post-type``, ``url`` and the ``h`` vocabulary)
    sits at the top level of the front matter, apart from the mf2
    properties, which are nested under ``properties``. A single plain-text
    ``content`` value becomes the body. Any other ``content`` is kept in the
    front matter as-is and the body only carries a rendering of its first
    value.
    """

    def format(self, document: Document) -> str:
        properties = dict(document.properties)
        body = ""
        content = properties.get(CONTENT_PROPERTY)
        if content:
            text = _body_text(content)
            if text is not None:
                body = text
                del properties[CONTENT_PROPERTY]
            else:
                body = _rendered_text(content)

        metadata: dict[str, Any] = {
            POST_TYPE_KEY: document.type,
            URL_KEY: document.url,
            MF2_TYPE_KEY: list(document.mf2.type),
        }
        if properties:
            metadata[PROPERTIES_KEY] = properties
        post = frontmatter.Post(body)
        post.metadata.update(metadata)
        return frontmatter.dumps(post, sort_keys=False) + "\n"

    def parse(self, content: str, *, path: str) -> Document:
        try:
            post = frontmatter.loads(content)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid front matter in {path}: {exc}") from exc

        metadata = dict(post.metadata)
        post_type = metadata.pop(POST_TYPE_KEY, None)
        url = metadata.pop(URL_KEY, None)
        if not isinstance(post_type, str) or not isinstance(url, str) or not post_type or not url:
            raise ValueError(f"{path} is missing {POST_TYPE_KEY} or {URL_KEY} front matter")
        raw_type = metadata.pop(MF2_TYPE_KEY, None) or ["h-entry"]
        mf2_type = [raw_type] if isinstance(raw_type, str) else [str(t) for t in raw_type]

        nested = metadata.pop(PROPERTIES_KEY, None)
        if nested is not None and not isinstance(nested, dict):
            raise ValueError(f"{path} has malformed {PROPERTIES_KEY} front matter")

        # hand-edited posts may keep properties at the top level
        properties = _as_properties(metadata)
        properties.update(_as_properties(cast("dict[str, Any]", nested or {})))
        if CONTENT_PROPERTY not in properties and post.content.strip():
            properties[CONTENT_PROPERTY] = [post.content.strip()]
        return Document(
            type=post_type,
            path=path,
            url=url,
            mf2=Mf2(type=mf2_type, properties=properties),
        )


def _as_properties(metadata: Mapping[str, Any]) -> dict[str, list[Any]]:
    properties: dict[str, list[Any]] = {}
    for name, value in metadata.items():
        if value is None:
            continue
        if is_value_list(value):
            properties[str(name)] = list(value)
        else:
            log.debug("Wrapping scalar front matter %r in a list", name)
            properties[str(name)] = [value]
    return properties


if TYPE_CHECKING:
    _formatter_check: PostFormatter = FrontmatterFormatter()
