"""Resolve published URLs to their mf2 source by fetching and parsing the page."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any

from indiepub.adapters.http_resilience import ResilientClient, default_client_factory
from indiepub.config.http_resilience import CacheConfig, ResilienceConfig
from indiepub.domain.errors import InvalidTarget
from indiepub.domain.ports.resolver import SourceResolver

from .parser import parse_items

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

log = getLogger(__name__)


def _default_resilience_config() -> ResilienceConfig:
    return ResilienceConfig(
        name="source",
        timeout_seconds=10.0,
        cache=CacheConfig(backend="memory", default_ttl_seconds=60.0),
        default_headers={"Accept": "text/html"},
    )


def select_properties(item: dict[str, Any], properties: Sequence[str] | None) -> dict[str, Any]:
    """Shape an mf2 item as a ``q=source`` response body."""

    if not properties:
        return {"type": item.get("type", []), "properties": item.get("properties", {})}
    available = item.get("properties", {})
    return {"properties": {name: available[name] for name in properties if name in available}}


@dataclass(slots=True)
class HttpSourceResolver:
    resilience: ResilienceConfig = field(default_factory=_default_resilience_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )

    def __call__(
        self,
        url: str,
        properties: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        page = asyncio.run(self._fetch(url))
        items = parse_items(page, base_url=url)
        if not items:
            raise InvalidTarget(f"No microformats found at {url}")
        return select_properties(items[0], properties)

    async def _fetch(self, url: str) -> str:
        async with self.client_factory(self.resilience) as client:
            response = await client.get(url)
        response.raise_for_status()
        log.debug("Fetched %s (%s bytes)", url, len(response.content))
        return response.text


if TYPE_CHECKING:
    _resolver_check: SourceResolver = HttpSourceResolver()
