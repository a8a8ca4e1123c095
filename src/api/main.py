"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import bookmarks, health
from core.auth import BearerTokenMiddleware
from core.config import Settings, get_settings
from core.logging_config import configure_logging
from services.bookmark_store import BookmarkStore, InMemoryBookmarkStore
from services.exceptions import BookmarkError
from services.sql_bookmark_store import SqlBookmarkStore

logger = logging.getLogger(__name__)


# Sent on every response, including 401s from the bearer-token gate.
SECURITY_HEADERS = {
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp SECURITY_HEADERS onto responses, leaving any a route already set."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


def create_store(settings: Settings) -> BookmarkStore:
    """Build the bookmark store selected by STORE_BACKEND."""
    if settings.store_backend == "database":
        return SqlBookmarkStore.from_settings(settings)
    return InMemoryBookmarkStore(seed=settings.memory_seed)


async def bookmark_error_handler(_request: Request, exc: BookmarkError) -> JSONResponse:
    """Render validation and not-found errors as `{"error": {"message": ...}}`."""
    logger.warning("%s: %s", type(exc).__name__, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"message": exc.message}},
    )


async def request_validation_error_handler(
    _request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Malformed JSON bodies are client errors, reported like other 400s."""
    logger.warning("Malformed request body: %s", exc.errors())
    return JSONResponse(
        status_code=400,
        content={"error": {"message": "Request body must be valid JSON"}},
    )


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Render unhandled exceptions as 500.

    Production hides the exception; other environments include its message
    and type to help debugging.
    """
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    settings: Settings = request.app.state.settings
    if settings.expose_error_details:
        content = {"message": str(exc), "error": {"type": type(exc).__name__}}
    else:
        content = {"error": {"message": "server error"}}
    return JSONResponse(status_code=500, content=content)


def create_app(
    settings: Settings | None = None,
    store: BookmarkStore | None = None,
) -> FastAPI:
    """
    Build the application.

    The store is an explicit handle: pass one in (tests do), or let it be
    built from settings. It is opened and closed by the app lifespan.
    """
    app_settings = settings if settings is not None else get_settings()
    configure_logging(app_settings.log_level)
    bookmark_store = store if store is not None else create_store(app_settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
        """Open the bookmark store on startup, close it on shutdown."""
        await bookmark_store.startup()
        yield
        await bookmark_store.shutdown()

    app = FastAPI(
        title="Bookmarks API",
        description="Store and retrieve rated bookmarks.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.store = bookmark_store

    app.add_exception_handler(BookmarkError, bookmark_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    # Bearer token check (innermost, runs before routing and body parsing)
    app.add_middleware(BearerTokenMiddleware, settings=app_settings)

    # Security headers middleware (runs after CORS, adds headers to responses)
    app.add_middleware(SecurityHeadersMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix="/api")
    app.include_router(bookmarks.router, prefix="/api")
    return app


def run() -> None:
    """Entry point for `bookmarks-api`: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )
