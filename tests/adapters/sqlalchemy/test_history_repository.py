from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from indiepub.adapters.sqlalchemy import SqlAlchemyHistoryUnitOfWork, StartupError, shutdown
from indiepub.domain.ports.history import HistoryEntry

if TYPE_CHECKING:
    from collections.abc import Callable


def test_history_entries_are_kept_in_order(
    history_factory: Callable[[], SqlAlchemyHistoryUnitOfWork],
) -> None:
    with history_factory() as uow:
        uow.history.add(HistoryEntry(action="update", url="https://x.example/1", data={"a": 1}))
        uow.history.add(HistoryEntry(action="delete", url="https://x.example/1", data={"a": 2}))
        uow.commit()

    with history_factory() as uow:
        entries = uow.history.entries()

    assert [entry.action for entry in entries] == ["update", "delete"]
    assert entries[1].data == {"a": 2}
    assert entries[0].timestamp.tzinfo is not None


def test_latest_matches_action_and_url(
    history_factory: Callable[[], SqlAlchemyHistoryUnitOfWork],
) -> None:
    stamp = datetime(2019, 8, 17, tzinfo=UTC)
    with history_factory() as uow:
        uow.history.add(HistoryEntry("delete", "https://x.example/1", {"v": 1}, stamp))
        uow.history.add(HistoryEntry("delete", "https://x.example/2", {"v": 2}, stamp))
        uow.history.add(HistoryEntry("delete", "https://x.example/1", {"v": 3}, stamp))
        uow.commit()

    with history_factory() as uow:
        latest = uow.history.latest(action="delete", url="https://x.example/1")
        missing = uow.history.latest(action="update", url="https://x.example/1")

    assert latest is not None
    assert latest.data == {"v": 3}
    assert latest.timestamp == stamp
    assert missing is None


def test_uncommitted_entries_are_discarded(
    history_factory: Callable[[], SqlAlchemyHistoryUnitOfWork],
) -> None:
    with pytest.raises(RuntimeError), history_factory() as uow:
        uow.history.add(HistoryEntry(action="update", url="https://x.example/1", data={}))
        raise RuntimeError("boom")

    with history_factory() as uow:
        assert uow.history.entries() == []


def test_unit_of_work_requires_startup() -> None:
    shutdown()

    with pytest.raises(StartupError):
        SqlAlchemyHistoryUnitOfWork()
