"""API-key gate — rejects unauthenticated requests before any route code runs."""

import logging
import secrets
from collections.abc import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from starlette.middleware.base import BaseHTTPMiddleware

from buildings_api.core.config import settings

logger = logging.getLogger(__name__)

FORBIDDEN_BODY = {
    "statusCode": 403,
    "error": "Forbidden",
    "message": "Invalid API key",
}

# Declares the header in the OpenAPI document; enforcement is the middleware's job.
api_key_scheme = APIKeyHeader(name=settings.api_key_header, auto_error=False)

def is_exempt(path: str) -> bool:
    return any(path.startswith(prefix) for prefix in settings.auth_exempt_paths)

def is_valid_key(candidate: str | None) -> bool:
    if candidate is None:
        return False
    return secrets.compare_digest(candidate.encode(), settings.api_key.encode())

class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Short-circuits with 403 unless the request carries the configured key.

    The docs tree and the status check are reachable without a key.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if is_exempt(path) or is_valid_key(request.headers.get(settings.api_key_header)):
            return await call_next(request)

        logger.warning("Rejected %s %s: missing or invalid API key", request.method, path)
        return JSONResponse(status_code=403, content=FORBIDDEN_BODY)
