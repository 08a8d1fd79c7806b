"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING, Any

from indiepub.adapters.github import GitHubContentStore
from indiepub.adapters.jekyll import FrontmatterFormatter
from indiepub.adapters.microformats import HttpSourceResolver
from indiepub.adapters.sqlalchemy import SqlAlchemyHistoryUnitOfWork, startup
from indiepub.config import load_publication_config, optional_env_var
from indiepub.domain.errors import InvalidInstruction, InvalidTarget
from indiepub.domain.lifecycle import delete_post, undelete_post, update_post
from indiepub.domain.model import Document
from indiepub.domain.ports.history import HistoryEntry, HistoryUnitOfWork
from indiepub.domain.query import QueryRequest, QueryResponse, answer_query
from indiepub.domain.updates import UpdateInstruction

if TYPE_CHECKING:
    from collections.abc import Mapping

    from indiepub.config import PublicationConfig
    from indiepub.domain.ports import ContentStore, PostFormatter, SourceResolver

HistoryUnitOfWorkFactory = Callable[[], HistoryUnitOfWork]

DEFAULT_APP_URL = "http://localhost:3000"

log = getLogger(__name__)


def _history_factory(factory: HistoryUnitOfWorkFactory | None) -> HistoryUnitOfWorkFactory:
    if factory is not None:
        return factory
    startup()
    return SqlAlchemyHistoryUnitOfWork


def _record(factory: HistoryUnitOfWorkFactory, action: str, document: Document) -> None:
    with factory() as uow:
        uow.history.add(HistoryEntry(action=action, url=document.url, data=document.to_dict()))
        uow.commit()


def run_query(
    params: Mapping[str, Any],
    *,
    config: PublicationConfig | None = None,
    app_url: str | None = None,
    resolver: SourceResolver | None = None,
) -> QueryResponse:
    """Answer a ``q=`` query with the configured publication and resolver."""

    return answer_query(
        QueryRequest.from_params(params),
        config or load_publication_config(),
        app_url or optional_env_var("INDIEPUB_APP_URL", DEFAULT_APP_URL) or DEFAULT_APP_URL,
        resolver or HttpSourceResolver(),
    )


def read_post(
    path: str,
    *,
    store: ContentStore | None = None,
    formatter: PostFormatter | None = None,
) -> Document:
    effective_store = store or GitHubContentStore()
    effective_formatter = formatter or FrontmatterFormatter()
    return effective_formatter.parse(effective_store.read_file(path), path=path)


def update_post_at(
    path: str,
    body: Mapping[str, Any],
    *,
    store: ContentStore | None = None,
    formatter: PostFormatter | None = None,
    history_factory: HistoryUnitOfWorkFactory | None = None,
) -> Document:
    """Read the post at ``path``, apply the update request and write it back.

    The request must name the post it targets; a ``url`` that does not match
    the stored post raises ``InvalidTarget`` before anything is written.
    """

    effective_store = store or GitHubContentStore()
    effective_formatter = formatter or FrontmatterFormatter()
    factory = _history_factory(history_factory)

    instruction = UpdateInstruction.from_body(body)
    if instruction.url is None:
        raise InvalidInstruction("Update requires a target url")

    document = read_post(path, store=effective_store, formatter=effective_formatter)
    if instruction.url != document.url:
        raise InvalidTarget(f"{path} holds {document.url}, not {instruction.url}")
    log.info(f"Updating {document.url} ({path})")
    updated = update_post(document, instruction, effective_store, effective_formatter)
    _record(factory, "update", updated)
    return updated


def delete_post_at(
    path: str,
    *,
    store: ContentStore | None = None,
    formatter: PostFormatter | None = None,
    history_factory: HistoryUnitOfWorkFactory | None = None,
) -> Document:
    """Delete the post at ``path``, keeping its data in history for undelete."""

    effective_store = store or GitHubContentStore()
    factory = _history_factory(history_factory)

    document = read_post(path, store=effective_store, formatter=formatter)
    log.info(f"Deleting {document.url} ({path})")
    deleted = delete_post(document, effective_store)
    _record(factory, "delete", deleted)
    return deleted


def undelete_post_by_url(
    url: str,
    *,
    store: ContentStore | None = None,
    formatter: PostFormatter | None = None,
    history_factory: HistoryUnitOfWorkFactory | None = None,
) -> Document:
    """Restore the most recently deleted post at ``url``."""

    effective_store = store or GitHubContentStore()
    effective_formatter = formatter or FrontmatterFormatter()
    factory = _history_factory(history_factory)

    with factory() as uow:
        entry = uow.history.latest(action="delete", url=url)
    if entry is None:
        raise InvalidTarget(f"No deleted post found at {url}")

    restored = undelete_post(Document.from_dict(entry.data), effective_store, effective_formatter)
    log.info(f"Restored {restored.url} at {restored.path}")
    _record(factory, "undelete", restored)
    return restored


def list_history(*, history_factory: HistoryUnitOfWorkFactory | None = None) -> list[HistoryEntry]:
    factory = _history_factory(history_factory)
    with factory() as uow:
        return list(uow.history.entries())
