"""Ports for recording the actions applied to posts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(slots=True)
class HistoryEntry:
    """One action taken against a post, with the post data at that point."""

    action: str
    url: str
    data: dict[str, Any]
    timestamp: datetime = field(default_factory=_utcnow)


@runtime_checkable
class HistoryRepository(Protocol):
    """Append-only log of post actions."""

    def add(self, entry: HistoryEntry) -> None: ...

    def entries(self) -> Sequence[HistoryEntry]: ...

    def latest(self, *, action: str, url: str) -> HistoryEntry | None: ...


@runtime_checkable
class HistoryUnitOfWork(Protocol):
    """Session boundary around the history log."""

    history: HistoryRepository

    def __enter__(self) -> HistoryUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
