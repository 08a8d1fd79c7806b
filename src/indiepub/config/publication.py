"""Publication configuration: media endpoint, syndication targets and post types."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable

log = getLogger(__name__)

CONFIG_PATH_ENV: Final[str] = "INDIEPUB_CONFIG"


class _ConfigModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class SyndicationTarget(_ConfigModel):
    uid: str
    name: str


class PostType(_ConfigModel):
    type: str
    name: str
    icon: str | None = None


class PublicationFile(_ConfigModel):
    me: str | None = None
    media_endpoint: str | None = Field(default=None, alias="media-endpoint")
    syndicate_to: list[SyndicationTarget] = Field(default_factory=list, alias="syndicate-to")
    post_types: list[PostType] = Field(default_factory=list, alias="post-types")


DEFAULT_POST_TYPES: Final[tuple[PostType, ...]] = (
    PostType(type="article", name="Article"),
    PostType(type="note", name="Note"),
    PostType(type="photo", name="Photo"),
    PostType(type="bookmark", name="Bookmark"),
    PostType(type="like", name="Like"),
    PostType(type="reply", name="Reply"),
    PostType(type="repost", name="Repost"),
)


@dataclass(frozen=True, slots=True)
class PublicationConfig:
    """Read-only publication settings handed to queries and actions."""

    me: str | None = None
    media_endpoint: str | None = None
    syndicate_to: tuple[SyndicationTarget, ...] = ()
    post_types: tuple[PostType, ...] = field(default=DEFAULT_POST_TYPES)

    def syndication_targets(self) -> list[dict[str, Any]]:
        return [target.model_dump(by_alias=True) for target in self.syndicate_to]

    def post_type(self, name: str) -> PostType | None:
        for post_type in self.post_types:
            if post_type.type == name:
                return post_type
        return None

    @classmethod
    def from_mapping(
        cls,
        data: dict[str, Any],
        *,
        defaults: Iterable[PostType] = DEFAULT_POST_TYPES,
    ) -> PublicationConfig:
        try:
            parsed = PublicationFile.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid publication configuration: {exc}") from exc
        return cls(
            me=parsed.me,
            media_endpoint=parsed.media_endpoint,
            syndicate_to=tuple(parsed.syndicate_to),
            post_types=tuple(merge_post_types(defaults, parsed.post_types)),
        )


def merge_post_types(defaults: Iterable[PostType], overrides: Iterable[PostType]) -> list[PostType]:
    """Combine default and user post types.

    A user entry for an existing type overrides only the fields it sets;
    unknown types are appended in the order given.
    """

    merged: dict[str, PostType] = {post_type.type: post_type for post_type in defaults}
    for override in overrides:
        base = merged.get(override.type)
        if base is None:
            merged[override.type] = override
            continue
        updates = override.model_dump(exclude_unset=True)
        merged[override.type] = base.model_copy(update=updates)
    return list(merged.values())


def load_publication_config(path: Path | None = None) -> PublicationConfig:
    """Load publication settings from ``path`` or ``$INDIEPUB_CONFIG``.

    Without either, the defaults apply.
    """

    if path is None:
        env_path = os.getenv(CONFIG_PATH_ENV)
        if not env_path:
            return PublicationConfig()
        path = Path(env_path)

    try:
        with path.expanduser().open(encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Unable to read publication configuration {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Publication configuration {path} must be a JSON object")
    log.debug("Loaded publication configuration from %s", path)
    return PublicationConfig.from_mapping(data)
