"""
Store access facade for bookmarks.

`BookmarkStore` is the CRUD contract the router talks to. Two implementations
exist: `InMemoryBookmarkStore` here and `SqlBookmarkStore` in
`services.sql_bookmark_store`. Every id crossing the store boundary goes
through `normalize_id`, so route-path strings and stored ids compare by value.
"""
import logging
import uuid
from abc import ABC, abstractmethod

from schemas.bookmark import BookmarkCreate, BookmarkUpdate, StoredBookmark
from services.exceptions import BookmarkNotFoundError

logger = logging.getLogger(__name__)


class BookmarkStore(ABC):
    """CRUD contract over a single collection of bookmarks keyed by id."""

    backend: str = ""

    async def startup(self) -> None:  # noqa: B027
        """Acquire resources at application startup."""

    async def shutdown(self) -> None:  # noqa: B027
        """Release resources at application shutdown."""

    async def ping(self) -> bool:
        """Return True if the store can serve requests."""
        return True

    @abstractmethod
    def normalize_id(self, bookmark_id: str | int) -> str | int | None:
        """
        Convert an incoming id to the store's canonical form.

        Returns None when the id can never match a stored record.
        """

    @abstractmethod
    async def list_all(self) -> list[StoredBookmark]:
        """Return all bookmarks; an empty list when there are none."""

    @abstractmethod
    async def get_by_id(self, bookmark_id: str | int) -> StoredBookmark | None:
        """Return the bookmark, or None if it does not exist."""

    @abstractmethod
    async def insert(self, data: BookmarkCreate) -> StoredBookmark:
        """Store a new bookmark under a freshly assigned id and return it."""

    @abstractmethod
    async def update(self, bookmark_id: str | int, data: BookmarkUpdate) -> None:
        """
        Merge the fields set on `data` into an existing bookmark.

        Raises:
            BookmarkNotFoundError: If the id does not exist.
        """

    @abstractmethod
    async def delete(self, bookmark_id: str | int) -> None:
        """
        Remove a bookmark.

        Raises:
            BookmarkNotFoundError: If the id does not exist.
        """


DEMO_BOOKMARKS = (
    BookmarkCreate(
        title="Google",
        url="http://www.google.com",
        rating=3,
        description="Internet-related services and products.",
    ),
    BookmarkCreate(
        title="Thinkful",
        url="http://www.thinkful.com",
        rating=5,
        description="1-on-1 learning to accelerate your way to a new high-growth tech career!",
    ),
    BookmarkCreate(
        title="Github",
        url="http://www.github.com",
        rating=4,
        description="brings together the world's largest community of developers.",
    ),
)


class InMemoryBookmarkStore(BookmarkStore):
    """
    Bookmarks held in a dict, in insertion order, with UUID4 string ids.

    Not safe for concurrent writers across processes; each process owns its
    own collection for its lifetime.
    """

    backend = "memory"

    def __init__(self, seed: bool = False) -> None:
        self._bookmarks: dict[str, StoredBookmark] = {}
        if seed:
            for data in DEMO_BOOKMARKS:
                self._add(data)

    def normalize_id(self, bookmark_id: str | int) -> str:
        return str(bookmark_id).strip()

    def _add(self, data: BookmarkCreate) -> StoredBookmark:
        bookmark = StoredBookmark(id=str(uuid.uuid4()), **data.model_dump())
        self._bookmarks[bookmark.id] = bookmark
        return bookmark

    async def startup(self) -> None:
        logger.info("In-memory bookmark store ready with %d bookmarks", len(self._bookmarks))

    async def list_all(self) -> list[StoredBookmark]:
        return list(self._bookmarks.values())

    async def get_by_id(self, bookmark_id: str | int) -> StoredBookmark | None:
        return self._bookmarks.get(self.normalize_id(bookmark_id))

    async def insert(self, data: BookmarkCreate) -> StoredBookmark:
        return self._add(data)

    async def update(self, bookmark_id: str | int, data: BookmarkUpdate) -> None:
        key = self.normalize_id(bookmark_id)
        bookmark = self._bookmarks.get(key)
        if bookmark is None:
            raise BookmarkNotFoundError(bookmark_id)
        self._bookmarks[key] = bookmark.model_copy(
            update=data.model_dump(exclude_unset=True),
        )

    async def delete(self, bookmark_id: str | int) -> None:
        key = self.normalize_id(bookmark_id)
        if key not in self._bookmarks:
            raise BookmarkNotFoundError(bookmark_id)
        del self._bookmarks[key]
