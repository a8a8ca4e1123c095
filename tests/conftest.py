"""Pytest fixtures for testing."""
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from api.main import create_app
from core.config import Settings
from schemas.bookmark import BookmarkCreate, StoredBookmark
from services.bookmark_store import BookmarkStore, InMemoryBookmarkStore
from services.sql_bookmark_store import SqlBookmarkStore

API_TOKEN = "test-api-token"

BOOKMARK_FIXTURES = [
    BookmarkCreate(title="bookmark1", url="url1", description="adlfjl", rating=1),
    BookmarkCreate(title="bookmark2", url="url2", description="adlfjlafdd", rating=2),
    BookmarkCreate(title="bookmark3", url="url3", description="adlfafdffdfdjl", rating=3),
    BookmarkCreate(title="bookmark4", url="url4", description="adlfdfddfdffjl", rating=4),
    BookmarkCreate(title="bookmark5", url="url5", description="adfdfdfdfdfdttttlfjl", rating=5),
]

MALICIOUS_BOOKMARK = BookmarkCreate(
    title='Naughty naughty very naughty <script>alert("xss");</script>',
    url="https://www.hackers.com",
    description=(
        'Bad image <img src="https://url.to.file.which/does-not.exist" '
        'onerror="alert(document.cookie);">. But not <strong>all</strong> bad.'
    ),
    rating=1,
)


@pytest.fixture
def settings() -> Settings:
    """Settings for a development-mode app with a known API token."""
    return Settings(
        _env_file=None,
        api_token=API_TOKEN,
        environment="development",
        store_backend="memory",
        validate_urls=False,
    )


async def make_sqlite_store() -> SqlBookmarkStore:
    """Create a relational store on a private in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    store = SqlBookmarkStore(engine)
    await store.create_schema()
    return store


@pytest.fixture(params=["memory", "database"])
async def store(request: pytest.FixtureRequest) -> AsyncGenerator[BookmarkStore]:
    """Each test using this fixture runs once per store backend."""
    if request.param == "memory":
        yield InMemoryBookmarkStore()
        return

    sql_store = await make_sqlite_store()
    try:
        yield sql_store
    finally:
        await sql_store.shutdown()


@pytest.fixture
async def test_bookmarks(store: BookmarkStore) -> list[StoredBookmark]:
    """Insert the five fixture bookmarks and return them as stored."""
    return [await store.insert(data) for data in BOOKMARK_FIXTURES]


@pytest.fixture
async def malicious_bookmark(store: BookmarkStore) -> StoredBookmark:
    """Insert a bookmark whose title and description carry XSS payloads."""
    return await store.insert(MALICIOUS_BOOKMARK)


@pytest.fixture
async def client(
    settings: Settings,
    store: BookmarkStore,
) -> AsyncGenerator[AsyncClient]:
    """Create an authenticated test client for an app built on `store`."""
    app = create_app(settings, store=store)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": f"Bearer {API_TOKEN}"},
    ) as test_client:
        yield test_client


@pytest.fixture
async def anonymous_client(
    settings: Settings,
    store: BookmarkStore,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client that sends no Authorization header."""
    app = create_app(settings, store=store)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client
