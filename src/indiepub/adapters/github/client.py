"""Content store backed by the GitHub contents API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from indiepub.adapters.http_resilience import ResilientClient, default_client_factory
from indiepub.config.github import GitHubConfig, get_github_config
from indiepub.domain.ports.store import CommitResult, ContentStore

from .schema import CommitResponse, ErrorResponse, FileContent, encode_content

if TYPE_CHECKING:
    from collections.abc import Callable

    from indiepub.config.http_resilience import ResilienceConfig

log = getLogger(__name__)


class GitHubAPIError(RuntimeError):
    """Raised when GitHub answers a contents request with an error status."""

    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class GitHubContentStore:
    """Sync facade over the async contents API.

    Network errors from httpx propagate untouched; HTTP error statuses raise
    ``GitHubAPIError`` carrying GitHub's own message.
    """

    config: GitHubConfig = field(default_factory=get_github_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )

    def create_file(self, path: str, content: str, *, message: str) -> CommitResult:
        return asyncio.run(self._put_file(path, content, message=message, sha=None))

    def read_file(self, path: str) -> str:
        return asyncio.run(self._read_file(path)).decoded()

    def update_file(self, path: str, content: str, *, message: str) -> CommitResult:
        async def run() -> CommitResult:
            existing = await self._read_file(path)
            return await self._put_file(path, content, message=message, sha=existing.sha)

        return asyncio.run(run())

    def delete_file(self, path: str, *, message: str) -> CommitResult:
        async def run() -> CommitResult:
            existing = await self._read_file(path)
            payload = {"message": message, "sha": existing.sha, "branch": self.config.branch}
            async with self.client_factory(self.config.resilience_config()) as client:
                response = await client.delete(self._contents_url(path), json=payload)
            return _commit_result(path, self._parse(response, path))

        return asyncio.run(run())

    async def _read_file(self, path: str) -> FileContent:
        async with self.client_factory(self.config.resilience_config()) as client:
            response = await client.get(
                self._contents_url(path), params={"ref": self.config.branch}
            )
        return FileContent.model_validate(self._parse(response, path))

    async def _put_file(
        self,
        path: str,
        content: str,
        *,
        message: str,
        sha: str | None,
    ) -> CommitResult:
        payload: dict[str, Any] = {
            "message": message,
            "content": encode_content(content),
            "branch": self.config.branch,
        }
        if sha is not None:
            payload["sha"] = sha
        async with self.client_factory(self.config.resilience_config()) as client:
            response = await client.put(self._contents_url(path), json=payload)
        return _commit_result(path, self._parse(response, path))

    def _contents_url(self, path: str) -> str:
        return f"/repos/{self.config.user}/{self.config.repo}/contents/{quote(path.lstrip('/'))}"

    @staticmethod
    def _parse(response: httpx.Response, path: str) -> dict[str, Any]:
        if response.is_error:
            try:
                detail = ErrorResponse.model_validate(response.json()).message
            except ValueError:
                detail = response.reason_phrase
            log.error(f"GitHub API error {response.status_code} for {path}: {detail}")
            raise GitHubAPIError(detail, status_code=response.status_code)

        payload = response.json()
        if not isinstance(payload, dict):
            raise GitHubAPIError(
                f"Unexpected GitHub response payload for {path}",
                status_code=response.status_code,
            )
        return payload


def _commit_result(path: str, payload: dict[str, Any]) -> CommitResult:
    parsed = CommitResponse.model_validate(payload)
    return CommitResult(
        path=parsed.content.path if parsed.content else path,
        message=parsed.commit.message,
        sha=parsed.commit.sha,
    )


if TYPE_CHECKING:
    _store_check: ContentStore = GitHubContentStore()
