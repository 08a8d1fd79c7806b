"""Domain port definitions for adapters."""

from __future__ import annotations

from .history import HistoryEntry, HistoryRepository, HistoryUnitOfWork
from .resolver import SourceResolver
from .store import CommitResult, ContentStore, PostFormatter

__all__ = [
    "CommitResult",
    "ContentStore",
    "HistoryEntry",
    "HistoryRepository",
    "HistoryUnitOfWork",
    "PostFormatter",
    "SourceResolver",
]
