"""SQLAlchemy adapter package for the history log."""

from __future__ import annotations

from .repositories import SqlAlchemyHistoryRepository
from .tables import create_all_tables, history_table
from .unit_of_work import SqlAlchemyHistoryUnitOfWork, StartupError, shutdown, startup

__all__ = [
    "SqlAlchemyHistoryRepository",
    "SqlAlchemyHistoryUnitOfWork",
    "StartupError",
    "create_all_tables",
    "history_table",
    "shutdown",
    "startup",
]
