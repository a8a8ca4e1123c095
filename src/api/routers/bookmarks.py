"""Bookmark CRUD endpoints."""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response

from api.dependencies import get_app_settings, get_store
from core.config import Settings
from schemas.bookmark import BookmarkResponse, validate_create, validate_update
from services.bookmark_store import BookmarkStore
from services.exceptions import BookmarkNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


async def _require_bookmark(store: BookmarkStore, bookmark_id: str) -> None:
    if await store.get_by_id(bookmark_id) is None:
        logger.warning("Bookmark with id %s not found", bookmark_id)
        raise BookmarkNotFoundError(bookmark_id)


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    store: BookmarkStore = Depends(get_store),
) -> list[BookmarkResponse]:
    """List all bookmarks."""
    bookmarks = await store.list_all()
    return [BookmarkResponse.from_record(b) for b in bookmarks]


@router.post("", response_model=BookmarkResponse, status_code=201)
async def create_bookmark(
    request: Request,
    response: Response,
    payload: Any = Body(default=None),
    store: BookmarkStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> BookmarkResponse:
    """
    Create a new bookmark.

    - **title**, **url**, **rating** are required; rating is an integer 0-5
    - **description** is optional

    The response carries a `Location` header pointing at the new bookmark.
    """
    data = validate_create(payload, check_url=settings.validate_urls)
    bookmark = await store.insert(data)
    logger.info("Bookmark with id %s created", bookmark.id)

    response.headers["Location"] = str(
        request.app.url_path_for("get_bookmark", bookmark_id=str(bookmark.id)),
    )
    return BookmarkResponse.from_record(bookmark)


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark_id: str,
    store: BookmarkStore = Depends(get_store),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    bookmark = await store.get_by_id(bookmark_id)
    if bookmark is None:
        logger.warning("Bookmark with id %s not found", bookmark_id)
        raise BookmarkNotFoundError(bookmark_id)
    return BookmarkResponse.from_record(bookmark)


@router.patch("/{bookmark_id}", status_code=204)
async def update_bookmark(
    bookmark_id: str,
    payload: Any = Body(default=None),
    store: BookmarkStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """
    Update some fields of a bookmark.

    Empty values are treated as not supplied; at least one of title, url,
    description or rating must be present.
    """
    await _require_bookmark(store, bookmark_id)
    data = validate_update(payload, check_url=settings.validate_urls)
    await store.update(bookmark_id, data)
    logger.info(
        "Bookmark with id %s updated (%s)",
        bookmark_id,
        ", ".join(sorted(data.model_dump(exclude_unset=True))),
    )


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark_id: str,
    store: BookmarkStore = Depends(get_store),
) -> None:
    """Delete a bookmark."""
    await store.delete(bookmark_id)
    logger.info("Bookmark with id %s deleted", bookmark_id)
