"""Pydantic models describing GitHub contents API payloads."""

from __future__ import annotations

import base64
import binascii

from pydantic import BaseModel, ConfigDict


class GitHubBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class FileContent(GitHubBaseModel):
    name: str
    path: str
    sha: str
    content: str = ""
    encoding: str = "base64"

    def decoded(self) -> str:
        if self.encoding != "base64":
            return self.content
        try:
            # the API wraps base64 at 60 columns
            return base64.b64decode("".join(self.content.split())).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise ValueError(f"Undecodable content for {self.path}") from exc


class CommitPayload(GitHubBaseModel):
    sha: str
    message: str


class ContentRef(GitHubBaseModel):
    path: str
    sha: str


class CommitResponse(GitHubBaseModel):
    content: ContentRef | None = None
    commit: CommitPayload


class ErrorResponse(GitHubBaseModel):
    message: str
    documentation_url: str | None = None


def encode_content(content: str) -> str:
    return base64.b64encode(content.encode("utf-8")).decode("ascii")
