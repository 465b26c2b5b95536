"""Request logging middleware — one log line per request with status and timing."""


import logging
import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# Methods that mutate state
_WRITE_METHODS = {"POST", "PUT", "PATCH", "DELETE"}

class RequestLogMiddleware(BaseHTTPMiddleware):
    """Logs writes at INFO and reads at DEBUG.

    Outermost layer, so rejected (403) requests are logged too.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.monotonic()
        try:
            response = await call_next(request)
        except Exception:
            # The generic 500 body is rendered further out, by ServerErrorMiddleware
            self._log(request, 500, start, logging.ERROR)
            raise

        level = logging.INFO if request.method in _WRITE_METHODS else logging.DEBUG
        self._log(request, response.status_code, start, level)
        return response

    @staticmethod
    def _log(request: Request, status_code: int, start: float, level: int) -> None:
        duration_ms = round((time.monotonic() - start) * 1000)
        logger.log(
            level,
            "%s %s → %s (%dms)",
            request.method, request.url.path, status_code, duration_ms,
        )
