"""Relational bookmark store backed by async SQLAlchemy."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from core.config import Settings
from db.session import create_engine_from_settings, create_session_factory
from models.base import Base
from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate, StoredBookmark
from services.bookmark_store import BookmarkStore
from services.exceptions import BookmarkNotFoundError

logger = logging.getLogger(__name__)

# Largest value a BIGINT / SQLite INTEGER primary key can hold
MAX_ROW_ID = 2**63 - 1


class SqlBookmarkStore(BookmarkStore):
    """
    Bookmarks stored in the `bookmarks` table.

    Each operation runs in its own session and commits when it returns, so
    a write is visible to the next request as soon as the response is sent.
    """

    backend = "database"

    def __init__(self, engine: AsyncEngine, create_schema: bool = False) -> None:
        self._engine = engine
        self._session_factory = create_session_factory(engine)
        self._create_schema = create_schema

    @classmethod
    def from_settings(cls, settings: Settings) -> "SqlBookmarkStore":
        """Build a store with a new engine for `settings.database_url`."""
        return cls(
            create_engine_from_settings(settings),
            create_schema=settings.db_create_schema,
        )

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession]:
        """
        Yield a session that commits on success and rolls back on error.

        Store methods use flush() to obtain generated ids; the commit happens
        once here when the operation finishes.
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_schema(self) -> None:
        """Create the bookmarks table if it does not exist."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def startup(self) -> None:
        if self._create_schema:
            await self.create_schema()
        logger.info("Database bookmark store ready (%s)", self._engine.url.render_as_string())

    async def shutdown(self) -> None:
        await self._engine.dispose()
        logger.info("Database bookmark store closed")

    async def ping(self) -> bool:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception:
            logger.exception("Database health check failed")
            return False
        return True

    def normalize_id(self, bookmark_id: str | int) -> int | None:
        try:
            value = int(str(bookmark_id).strip())
        except ValueError:
            return None
        if not 0 < value <= MAX_ROW_ID:
            return None
        return value

    async def _get_row(self, session: AsyncSession, bookmark_id: str | int) -> Bookmark | None:
        key = self.normalize_id(bookmark_id)
        if key is None:
            return None
        return await session.get(Bookmark, key)

    async def list_all(self) -> list[StoredBookmark]:
        async with self._session() as session:
            result = await session.execute(select(Bookmark).order_by(Bookmark.id))
            return [StoredBookmark.model_validate(row) for row in result.scalars().all()]

    async def get_by_id(self, bookmark_id: str | int) -> StoredBookmark | None:
        async with self._session() as session:
            row = await self._get_row(session, bookmark_id)
            if row is None:
                return None
            return StoredBookmark.model_validate(row)

    async def insert(self, data: BookmarkCreate) -> StoredBookmark:
        async with self._session() as session:
            row = Bookmark(**data.model_dump())
            session.add(row)
            await session.flush()
            await session.refresh(row)
            return StoredBookmark.model_validate(row)

    async def update(self, bookmark_id: str | int, data: BookmarkUpdate) -> None:
        async with self._session() as session:
            row = await self._get_row(session, bookmark_id)
            if row is None:
                raise BookmarkNotFoundError(bookmark_id)

            update_data = data.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                setattr(row, field, value)

    async def delete(self, bookmark_id: str | int) -> None:
        async with self._session() as session:
            row = await self._get_row(session, bookmark_id)
            if row is None:
                raise BookmarkNotFoundError(bookmark_id)
            await session.delete(row)
