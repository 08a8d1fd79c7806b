from __future__ import annotations

import base64
import json

import httpx
import pytest

from indiepub.adapters.github import GitHubAPIError, GitHubContentStore
from indiepub.config import GitHubConfig, MissingConfigurationError
from indiepub.config.github import get_github_config
from tests.helpers.http import make_client_factory

CONFIG = GitHubConfig(token="abc123", user="user", repo="repo")


def _store(handler: object) -> GitHubContentStore:
    return GitHubContentStore(config=CONFIG, client_factory=make_client_factory(handler))  # type: ignore[arg-type]


def _commit(path: str, message: str) -> dict[str, object]:
    return {
        "content": {"path": path, "sha": "blob-sha"},
        "commit": {"sha": "commit-sha", "message": message},
    }


def _file(path: str, text: str) -> dict[str, object]:
    encoded = base64.b64encode(text.encode()).decode()
    # GitHub wraps long base64 payloads
    wrapped = "\n".join(encoded[i : i + 8] for i in range(0, len(encoded), 8))
    return {"name": path.rsplit("/", 1)[-1], "path": path, "sha": "old-sha", "content": wrapped}


def test_create_file_puts_encoded_content() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(201, json=_commit("bar/foo.txt", "Create message"))

    result = _store(handler).create_file("bar/foo.txt", "foo", message="Create message")

    assert result.message == "Create message"
    assert result.path == "bar/foo.txt"
    request = requests[0]
    assert request.method == "PUT"
    assert request.url.path == "/repos/user/repo/contents/bar/foo.txt"
    assert request.headers["Authorization"] == "token abc123"
    payload = json.loads(request.content)
    assert base64.b64decode(payload["content"]).decode() == "foo"
    assert payload["branch"] == "main"
    assert "sha" not in payload


def test_create_file_passes_transport_error_through() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("not found", request=request)

    with pytest.raises(httpx.ConnectError, match=r"\bnot found\b"):
        _store(handler).create_file("bar/foo.txt", "foo", message="Create message")


def test_read_file_decodes_wrapped_content() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["ref"] == "main"
        return httpx.Response(200, json=_file("config.json", '{"syndicate-to": []}'))

    assert _store(handler).read_file("config.json") == '{"syndicate-to": []}'


def test_read_file_raises_github_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Not Found"})

    with pytest.raises(GitHubAPIError, match="Not Found") as excinfo:
        _store(handler).read_file("missing.md")

    assert excinfo.value.status_code == 404


def test_update_file_sends_existing_sha() -> None:
    payloads: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json=_file("foo.md", "old"))
        payloads.append(json.loads(request.content))
        return httpx.Response(200, json=_commit("foo.md", "note: update post"))

    result = _store(handler).update_file("foo.md", "new", message="note: update post")

    assert result.sha == "commit-sha"
    assert payloads[0]["sha"] == "old-sha"


def test_delete_file_sends_sha_in_body() -> None:
    seen: list[tuple[str, bytes]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.content))
        if request.method == "GET":
            return httpx.Response(200, json=_file("foo.md", "old"))
        return httpx.Response(
            200, json={"content": None, "commit": {"sha": "c", "message": "note: delete post"}}
        )

    result = _store(handler).delete_file("foo.md", message="note: delete post")

    assert result.path == "foo.md"
    assert [method for method, _ in seen] == ["GET", "DELETE"]
    assert json.loads(seen[1][1])["sha"] == "old-sha"


def test_get_github_config_requires_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GITHUB_TOKEN", "GITHUB_USER", "GITHUB_REPO"):
        monkeypatch.delenv(name, raising=False)

    with pytest.raises(MissingConfigurationError, match="GITHUB_TOKEN"):
        get_github_config()


def test_get_github_config_reads_branch(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "abc123")
    monkeypatch.setenv("GITHUB_USER", "user")
    monkeypatch.setenv("GITHUB_REPO", "repo")
    monkeypatch.setenv("GITHUB_BRANCH", "gh-pages")

    config = get_github_config()

    assert config.branch == "gh-pages"
    assert config.resilience_config().base_url == "https://api.github.com"
