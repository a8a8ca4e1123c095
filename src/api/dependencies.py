"""FastAPI dependencies for injection."""
from fastapi import Request

from core.config import Settings
from services.bookmark_store import BookmarkStore


def get_store(request: Request) -> BookmarkStore:
    """Return the bookmark store the application was built with."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was built with."""
    return request.app.state.settings
