from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import pytest

from indiepub.domain.errors import InvalidTarget
from indiepub.domain.ports.history import HistoryEntry
from indiepub.domain.query import QueryResponse, error_response
from indiepub.ui import cli as cli_module

if TYPE_CHECKING:
    from pathlib import Path

    from indiepub.domain.model import Document


def test_cli_query_passes_properties(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, Any] = {}

    def fake_query(params: dict[str, Any]) -> QueryResponse:
        captured.update(params)
        return QueryResponse(body={"properties": {}})

    monkeypatch.setattr(cli_module, "run_query", fake_query)

    cli_module.main(
        ["query", "source", "--url", "https://website.example/foo", "--property", "category"]
    )

    assert captured == {
        "q": "source",
        "url": "https://website.example/foo",
        "properties": ["category"],
    }
    assert json.loads(capsys.readouterr().out) == {"properties": {}}


def test_cli_query_error_exits_nonzero(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(cli_module, "run_query", lambda params: error_response("invalid_request"))

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["query", "nonsense"])

    assert excinfo.value.code == 1
    assert json.loads(capsys.readouterr().out) == {"error": "invalid_request"}


def test_cli_update_reads_request_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, post: Document
) -> None:
    captured: dict[str, Any] = {}

    def fake_update(path: str, body: dict[str, Any]) -> Document:
        captured["path"] = path
        captured["body"] = body
        return post

    monkeypatch.setattr(cli_module, "update_post_at", fake_update)
    request = tmp_path / "update.json"
    body = {"action": "update", "url": post.url, "delete": ["category"]}
    request.write_text(json.dumps(body), encoding="utf-8")

    cli_module.main(["update", "foo.md", "--request", str(request)])

    assert captured == {"path": "foo.md", "body": body}


def test_cli_update_invalid_request_file(tmp_path: Path) -> None:
    request = tmp_path / "update.json"
    request.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["update", "foo.md", "--request", str(request)])

    assert excinfo.value.code == 2


def test_cli_undelete_reports_micropub_error(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def fake_undelete(url: str) -> Document:
        raise InvalidTarget(f"No deleted post found at {url}")

    monkeypatch.setattr(cli_module, "undelete_post_by_url", fake_undelete)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["undelete", "https://website.example/foo"])

    assert excinfo.value.code == 1
    body = json.loads(capsys.readouterr().out)
    assert body["error"] == "not_found"


def test_cli_history_lists_entries(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    stamp = datetime(2019, 8, 17, 22, 56, tzinfo=UTC)
    entries = [HistoryEntry("delete", "https://website.example/foo", {"type": "note"}, stamp)]
    monkeypatch.setattr(cli_module, "list_history", lambda: entries)

    cli_module.main(["history"])

    assert json.loads(capsys.readouterr().out) == [
        {"timestamp": "2019-08-17T22:56:00+00:00", "delete": {"type": "note"}}
    ]
