"""Bearer token authentication for every API request."""
import logging
import secrets

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from core.config import Settings

logger = logging.getLogger(__name__)

UNAUTHORIZED_BODY = {"error": "Unauthorized request"}


def extract_bearer_token(authorization: str | None) -> str | None:
    """
    Return the token from an `Authorization: Bearer <token>` header.

    Returns None when the header is missing, uses another scheme, or has no
    token segment.
    """
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def is_authorized(authorization: str | None, api_token: str) -> bool:
    """Check the header against the configured token. An empty token never matches."""
    if not api_token:
        return False
    token = extract_bearer_token(authorization)
    if token is None:
        return False
    return secrets.compare_digest(token.encode(), api_token.encode())


class BearerTokenMiddleware(BaseHTTPMiddleware):
    """
    Reject requests without the configured bearer token.

    Runs before routing and body parsing, so unauthenticated requests get a
    401 regardless of path, verb or payload.
    """

    def __init__(self, app: ASGIApp, settings: Settings) -> None:
        super().__init__(app)
        self.api_token = settings.api_token

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Return 401 unless the Authorization header carries the API token."""
        if not is_authorized(request.headers.get("Authorization"), self.api_token):
            logger.error("Unauthorized request to path: %s", request.url.path)
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content=UNAUTHORIZED_BODY,
                headers={"WWW-Authenticate": "Bearer"},
            )
        return await call_next(request)
