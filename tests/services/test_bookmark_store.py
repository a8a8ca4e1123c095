"""Tests for the bookmark store implementations (run against every backend)."""
import pytest
from sqlalchemy import Text

from models import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate, StoredBookmark
from services.bookmark_store import DEMO_BOOKMARKS, BookmarkStore, InMemoryBookmarkStore
from services.exceptions import BookmarkNotFoundError
from services.sql_bookmark_store import SqlBookmarkStore


async def test_list_all_empty(store: BookmarkStore) -> None:
    assert await store.list_all() == []


async def test_insert_assigns_unique_ids(store: BookmarkStore) -> None:
    first = await store.insert(BookmarkCreate(title="a", url="u1", rating=1))
    second = await store.insert(BookmarkCreate(title="b", url="u2", rating=2))
    assert first.id != second.id
    assert first.title == "a"
    assert first.description is None


async def test_list_all_insertion_order(
    store: BookmarkStore, test_bookmarks: list[StoredBookmark],
) -> None:
    assert await store.list_all() == test_bookmarks


async def test_get_by_id(store: BookmarkStore, test_bookmarks: list[StoredBookmark]) -> None:
    target = test_bookmarks[2]
    assert await store.get_by_id(target.id) == target


async def test_get_by_id_accepts_string_form(
    store: BookmarkStore, test_bookmarks: list[StoredBookmark],
) -> None:
    """Ids from route paths are strings; lookup compares by value."""
    target = test_bookmarks[0]
    assert await store.get_by_id(str(target.id)) == target


@pytest.mark.parametrize("bookmark_id", ["123456", "not-an-id", "", "-1", 99999999999999999999])
async def test_get_by_id_missing_returns_none(
    store: BookmarkStore,
    test_bookmarks: list[StoredBookmark],  # noqa: ARG001
    bookmark_id: str | int,
) -> None:
    assert await store.get_by_id(bookmark_id) is None


async def test_update_merges_only_set_fields(
    store: BookmarkStore, test_bookmarks: list[StoredBookmark],
) -> None:
    target = test_bookmarks[1]
    await store.update(str(target.id), BookmarkUpdate(title="renamed", rating=5))

    updated = await store.get_by_id(target.id)
    assert updated == target.model_copy(update={"title": "renamed", "rating": 5})


async def test_update_missing_raises(store: BookmarkStore) -> None:
    with pytest.raises(BookmarkNotFoundError) as exc_info:
        await store.update("123456", BookmarkUpdate(title="x"))
    assert exc_info.value.status_code == 404


async def test_delete(store: BookmarkStore, test_bookmarks: list[StoredBookmark]) -> None:
    target = test_bookmarks[3]
    await store.delete(str(target.id))
    assert await store.get_by_id(target.id) is None
    assert await store.list_all() == [b for b in test_bookmarks if b.id != target.id]


async def test_delete_twice_raises(
    store: BookmarkStore, test_bookmarks: list[StoredBookmark],
) -> None:
    target = test_bookmarks[0]
    await store.delete(target.id)
    with pytest.raises(BookmarkNotFoundError):
        await store.delete(target.id)


async def test_ping(store: BookmarkStore) -> None:
    assert await store.ping() is True


async def test_insert_long_title(store: BookmarkStore) -> None:
    title = "x" * 1000
    bookmark = await store.insert(BookmarkCreate(title=title, url="u", rating=4))
    assert (await store.get_by_id(bookmark.id)).title == title


class TestInMemoryBookmarkStore:
    """Tests specific to the in-memory store."""

    async def test_ids_are_strings(self) -> None:
        store = InMemoryBookmarkStore()
        bookmark = await store.insert(BookmarkCreate(title="a", url="u", rating=1))
        assert isinstance(bookmark.id, str)

    async def test_seed(self) -> None:
        store = InMemoryBookmarkStore(seed=True)
        bookmarks = await store.list_all()
        assert [b.title for b in bookmarks] == [b.title for b in DEMO_BOOKMARKS]

    async def test_instances_do_not_share_state(self) -> None:
        first = InMemoryBookmarkStore()
        second = InMemoryBookmarkStore()
        await first.insert(BookmarkCreate(title="a", url="u", rating=1))
        assert await second.list_all() == []


class TestSqlBookmarkStore:
    """Tests specific to the relational store."""

    async def test_normalize_id(self, store: BookmarkStore) -> None:
        if not isinstance(store, SqlBookmarkStore):
            pytest.skip("relational store only")
        assert store.normalize_id("42") == 42
        assert store.normalize_id(" 7 ") == 7
        assert store.normalize_id("abc") is None
        assert store.normalize_id("0") is None

    async def test_ids_are_integers(self, store: BookmarkStore) -> None:
        if not isinstance(store, SqlBookmarkStore):
            pytest.skip("relational store only")
        bookmark = await store.insert(BookmarkCreate(title="a", url="u", rating=1))
        assert isinstance(bookmark.id, int)

    def test_title_column_unbounded(self) -> None:
        assert isinstance(Bookmark.__table__.c.title.type, Text)
        assert getattr(Bookmark.__table__.c.title.type, "length", None) is None
