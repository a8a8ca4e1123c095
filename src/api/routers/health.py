"""Health check endpoints."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.dependencies import get_store
from services.bookmark_store import BookmarkStore

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    store: str
    backend: str


@router.get("/health", response_model=HealthResponse)
async def health_check(
    store: BookmarkStore = Depends(get_store),
) -> HealthResponse:
    """Check application and bookmark store health."""
    store_status = "healthy" if await store.ping() else "unhealthy"
    return HealthResponse(
        status="healthy" if store_status == "healthy" else "degraded",
        store=store_status,
        backend=store.backend,
    )
