"""Create, update, delete and undelete posts through a content store."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

from indiepub.domain.errors import InvalidTarget
from indiepub.domain.updates import apply_update

if TYPE_CHECKING:
    from collections.abc import Mapping

    from indiepub.domain.model import Document
    from indiepub.domain.ports.store import CommitResult, ContentStore, PostFormatter
    from indiepub.domain.updates import UpdateInstruction

log = getLogger(__name__)


def commit_message(document: Document, action: str) -> str:
    return f"{document.type}: {action} post"


def create_post(document: Document, store: ContentStore, formatter: PostFormatter) -> Document:
    """Write a new post at its path."""

    _write(document, store, formatter, action="create")
    return document


def update_post(
    document: Document | None,
    instruction: UpdateInstruction | Mapping[str, Any],
    store: ContentStore,
    formatter: PostFormatter,
) -> Document:
    """Apply ``instruction`` and persist the result over the existing file."""

    updated = apply_update(document, instruction)
    message = commit_message(updated, "update")
    try:
        result = store.update_file(updated.path, formatter.format(updated), message=message)
    except Exception:
        log.exception("Store rejected update of %s", updated.path)
        raise
    _log_commit(result)
    return updated


def delete_post(document: Document | None, store: ContentStore) -> Document:
    """Remove the post's file; the returned document can later be undeleted."""

    if document is None:
        raise InvalidTarget("No post found to delete")
    try:
        result = store.delete_file(document.path, message=commit_message(document, "delete"))
    except Exception:
        log.exception("Store rejected delete of %s", document.path)
        raise
    _log_commit(result)
    return document


def undelete_post(
    document: Document | None,
    store: ContentStore,
    formatter: PostFormatter,
) -> Document:
    """Restore a deleted post by writing its content back at its original path.

    Store failures are raised unchanged. On success the same document is
    returned so callers can report where it was restored.
    """

    if document is None:
        raise InvalidTarget("No deleted post found to restore")
    _write(document, store, formatter, action="undelete")
    return document


def _write(document: Document, store: ContentStore, formatter: PostFormatter, *, action: str) -> None:
    message = commit_message(document, action)
    try:
        result = store.create_file(document.path, formatter.format(document), message=message)
    except Exception:
        log.exception("Store rejected %s of %s", action, document.path)
        raise
    _log_commit(result)


def _log_commit(result: CommitResult) -> None:
    log.info("Committed %s: %s", result.path, result.message)
