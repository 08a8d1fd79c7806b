from __future__ import annotations

import pytest

from indiepub.adapters.jekyll import FrontmatterFormatter
from indiepub.domain.errors import InvalidTarget, TypeMismatch
from indiepub.domain.lifecycle import create_post, delete_post, undelete_post, update_post
from indiepub.domain.model import Document, Mf2
from tests.helpers.stores import FailingContentStore, InMemoryContentStore


@pytest.fixture
def deleted_post() -> Document:
    return Document(
        type="note",
        path="_notes/2019-08-17-baz.md",
        url="https://website.example/notes/2019/08/17/baz",
        mf2=Mf2(type=["h-entry"], properties={"content": ["Baz"]}),
    )


def test_undelete_writes_post_back(deleted_post: Document, store: InMemoryContentStore) -> None:
    formatter = FrontmatterFormatter()

    restored = undelete_post(deleted_post, store, formatter)

    assert restored.url == deleted_post.url
    assert store.messages == ["note: undelete post"]
    assert formatter.parse(store.files[deleted_post.path], path=deleted_post.path) == deleted_post


def test_undelete_surfaces_store_error(deleted_post: Document) -> None:
    with pytest.raises(ConnectionError, match=r"\bnot found\b"):
        undelete_post(deleted_post, FailingContentStore(), FrontmatterFormatter())


def test_undelete_requires_document(store: InMemoryContentStore) -> None:
    with pytest.raises(InvalidTarget):
        undelete_post(None, store, FrontmatterFormatter())


def test_create_then_update_then_delete(post: Document, store: InMemoryContentStore) -> None:
    formatter = FrontmatterFormatter()
    create_post(post, store, formatter)

    updated = update_post(
        post,
        {"action": "update", "url": post.url, "replace": {"content": ["hello moon"]}},
        store,
        formatter,
    )
    stored = formatter.parse(store.files[post.path], path=post.path)
    assert stored.properties["content"] == ["hello moon"]
    assert updated == stored

    delete_post(updated, store)

    assert post.path not in store.files
    assert store.messages == ["note: create post", "note: update post", "note: delete post"]


def test_update_does_not_write_on_invalid_instruction(
    post: Document, store: InMemoryContentStore
) -> None:
    formatter = FrontmatterFormatter()
    create_post(post, store, formatter)
    before = store.files[post.path]

    with pytest.raises(TypeMismatch, match="category should be an array"):
        update_post(post, {"url": post.url, "delete": {"category": "foo"}}, store, formatter)

    assert store.files[post.path] == before
    assert store.messages == ["note: create post"]


def test_delete_requires_document(store: InMemoryContentStore) -> None:
    with pytest.raises(InvalidTarget):
        delete_post(None, store)
