"""Answer Micropub ``q=`` queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any, cast

from indiepub.domain.errors import ERROR_STATUS

if TYPE_CHECKING:
    from collections.abc import Mapping

    from indiepub.config.publication import PublicationConfig
    from indiepub.domain.ports.resolver import SourceResolver

log = getLogger(__name__)

SUPPORTED_QUERIES = ("config", "source", "syndicate-to")


@dataclass(frozen=True, slots=True)
class QueryRequest:
    q: str | None
    url: str | None = None
    properties: list[str] | None = None

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> QueryRequest:
        """Build a request from decoded query-string parameters.

        ``properties`` may arrive as ``properties`` or ``properties[]``, and
        as a single string or a list.
        """

        raw = params.get("properties[]", params.get("properties"))
        properties: list[str] | None
        if raw is None:
            properties = None
        elif isinstance(raw, str):
            properties = [raw]
        else:
            properties = [str(name) for name in cast("list[object]", raw)]
        return cls(q=params.get("q"), url=params.get("url"), properties=properties or None)


@dataclass(frozen=True, slots=True)
class QueryResponse:
    body: dict[str, Any] = field(default_factory=dict)
    status: int = 200

    @property
    def ok(self) -> bool:
        return self.status < 400


def error_response(error: str, description: str | None = None) -> QueryResponse:
    body = {"error": error}
    if description:
        body["error_description"] = description
    return QueryResponse(body=body, status=ERROR_STATUS.get(error, 400))


def answer_query(
    query: QueryRequest,
    config: PublicationConfig,
    app_url: str,
    resolver: SourceResolver | None = None,
) -> QueryResponse:
    """Dispatch ``query.q`` to its response.

    Unsupported queries answer ``invalid_request`` rather than raising.
    Errors from ``resolver`` propagate unchanged.
    """

    media_endpoint = config.media_endpoint or f"{app_url.rstrip('/')}/media"
    syndicate_to = config.syndication_targets()

    if query.q == "config":
        return QueryResponse(
            body={"media-endpoint": media_endpoint, "syndicate-to": syndicate_to}
        )

    if query.q == "source":
        if not query.url:
            return error_response("invalid_request", "Source query requires a url")
        if resolver is None:
            return error_response("invalid_request", "Source queries are not supported")
        log.debug("Resolving source of %s (properties=%s)", query.url, query.properties)
        return QueryResponse(body=resolver(query.url, query.properties))

    if query.q == "syndicate-to":
        return QueryResponse(body={"syndicate-to": syndicate_to})

    log.info("Rejected unsupported query q=%r", query.q)
    return error_response("invalid_request", f"Unsupported query: {query.q}")
