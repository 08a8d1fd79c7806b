from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from indiepub.adapters.sqlalchemy import SqlAlchemyHistoryUnitOfWork, shutdown, startup
from indiepub.config import PublicationConfig, SyndicationTarget
from indiepub.domain.model import Document, Mf2
from tests.helpers.stores import InMemoryContentStore

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def post() -> Document:
    return Document(
        type="note",
        path="foo.md",
        url="https://website.example/foo",
        mf2=Mf2(
            type=["h-entry"],
            properties={
                "content": ["hello world"],
                "published": ["2019-08-17T23:56:38.977+01:00"],
                "category": ["foo", "bar"],
                "slug": ["baz"],
            },
        ),
    )


@pytest.fixture
def publication() -> PublicationConfig:
    return PublicationConfig(
        me="https://website.example",
        syndicate_to=(
            SyndicationTarget(uid="https://twitter.com/username/", name="@username on Twitter"),
            SyndicationTarget(
                uid="https://mastodon.social/@username", name="@username on Mastodon"
            ),
        ),
    )


@pytest.fixture
def store() -> InMemoryContentStore:
    return InMemoryContentStore()


@pytest.fixture
def history_factory() -> Iterator[Callable[[], SqlAlchemyHistoryUnitOfWork]]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    startup(engine=engine, force=True)
    try:
        yield SqlAlchemyHistoryUnitOfWork
    finally:
        shutdown()
