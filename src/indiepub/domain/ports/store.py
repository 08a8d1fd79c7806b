"""Ports for persisting post content in a content store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from indiepub.domain.model import Document


@dataclass(frozen=True, slots=True)
class CommitResult:
    """Outcome of a write to the content store."""

    path: str
    message: str
    sha: str | None = None


@runtime_checkable
class ContentStore(Protocol):
    """A file store where each write is recorded with a commit message.

    Transport errors are raised as-is so callers see the original text.
    """

    def create_file(self, path: str, content: str, *, message: str) -> CommitResult: ...

    def read_file(self, path: str) -> str: ...

    def update_file(self, path: str, content: str, *, message: str) -> CommitResult: ...

    def delete_file(self, path: str, *, message: str) -> CommitResult: ...


@runtime_checkable
class PostFormatter(Protocol):
    """Converts between documents and the text kept in the content store."""

    def format(self, document: Document) -> str: ...

    def parse(self, content: str, *, path: str) -> Document: ...
