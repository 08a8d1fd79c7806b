"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import insert, select

from indiepub.adapters.sqlalchemy.tables import history_table
from indiepub.domain.ports.history import HistoryEntry

if TYPE_CHECKING:
    from sqlalchemy import Row
    from sqlalchemy.orm import Session


class SqlAlchemyHistoryRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entry: HistoryEntry) -> None:
        self.session.execute(
            insert(history_table).values(
                timestamp=entry.timestamp,
                action=entry.action,
                url=entry.url,
                data=entry.data,
            )
        )

    def entries(self) -> list[HistoryEntry]:
        stmt = select(history_table).order_by(history_table.c.id)
        return [_to_entry(row) for row in self.session.execute(stmt)]

    def latest(self, *, action: str, url: str) -> HistoryEntry | None:
        stmt = (
            select(history_table)
            .where(history_table.c.action == action)
            .where(history_table.c.url == url)
            .order_by(history_table.c.id.desc())
            .limit(1)
        )
        row = self.session.execute(stmt).first()
        return _to_entry(row) if row is not None else None


def _to_entry(row: Row[Any]) -> HistoryEntry:
    return HistoryEntry(
        action=row.action,
        url=row.url,
        data=dict(row.data),
        timestamp=row.timestamp,
    )
