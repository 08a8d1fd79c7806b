"""Public interface for the GitHub content store adapter."""

from __future__ import annotations

from .client import GitHubAPIError, GitHubContentStore
from .schema import CommitResponse, FileContent

__all__ = [
    "CommitResponse",
    "FileContent",
    "GitHubAPIError",
    "GitHubContentStore",
]
