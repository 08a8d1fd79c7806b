"""In-memory content stores for lifecycle and application tests."""

from __future__ import annotations

from dataclasses import dataclass, field

from indiepub.domain.ports.store import CommitResult, ContentStore


@dataclass
class InMemoryContentStore(ContentStore):
    """Dict-backed store recording every commit message."""

    files: dict[str, str] = field(default_factory=dict)
    messages: list[str] = field(default_factory=list)

    def create_file(self, path: str, content: str, *, message: str) -> CommitResult:
        self.files[path] = content
        return self._commit(path, message)

    def read_file(self, path: str) -> str:
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None

    def update_file(self, path: str, content: str, *, message: str) -> CommitResult:
        if path not in self.files:
            raise FileNotFoundError(path)
        self.files[path] = content
        return self._commit(path, message)

    def delete_file(self, path: str, *, message: str) -> CommitResult:
        if self.files.pop(path, None) is None:
            raise FileNotFoundError(path)
        return self._commit(path, message)

    def _commit(self, path: str, message: str) -> CommitResult:
        self.messages.append(message)
        return CommitResult(path=path, message=message, sha=f"sha-{len(self.messages)}")


@dataclass
class FailingContentStore(InMemoryContentStore):
    """Store whose writes fail the way a network transport does."""

    error: Exception = field(default_factory=lambda: ConnectionError("not found"))

    def create_file(self, path: str, content: str, *, message: str) -> CommitResult:
        raise self.error

    def update_file(self, path: str, content: str, *, message: str) -> CommitResult:
        raise self.error

    def delete_file(self, path: str, *, message: str) -> CommitResult:
        raise self.error
