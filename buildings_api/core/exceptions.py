"""Domain exceptions and the FastAPI handlers that map them to the ApiError body.

Every error response has the shape
``{"statusCode": int, "error": str, "message": str, "details"?: any}``.
"""

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from buildings_api.core.validation import collect_violations, join_violations

logger = logging.getLogger(__name__)

class ApiError(Exception):
    """Base for every error kind the API reports on purpose."""

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(self, message: str, details: Any = None):
        self.message = message
        self.details = details
        super().__init__(message)

# ---------------------------------------------------------------------------
# Buildings
# ---------------------------------------------------------------------------

class DuplicateBuildingId(ApiError):
    status_code = 409
    error = "Conflict"

    def __init__(self, building_id: str):
        self.building_id = building_id
        super().__init__(f'Building with ID "{building_id}" already exists.')

class BuildingNotFound(ApiError):
    status_code = 404
    error = "Not Found"

    def __init__(self, building_id: str):
        self.building_id = building_id
        super().__init__(f'Building with ID "{building_id}" not found.')

class InvalidBuildingUpdate(ApiError):
    status_code = 400
    error = "Bad Request"

    def __init__(self, details: Any = None):
        super().__init__("Invalid building update payload.", details)

class EmptyUpdatePayload(ApiError):
    status_code = 400
    error = "Bad Request"

    def __init__(self):
        super().__init__("Request body must include at least one field to update.")

# ---------------------------------------------------------------------------
# Geocoding
# ---------------------------------------------------------------------------

class InvalidGeocodeRequest(ApiError):
    status_code = 400
    error = "Bad Request"

    def __init__(self, details: Any = None):
        super().__init__("Invalid geocode request payload.", details)

class GeocodeResultNotFound(ApiError):
    status_code = 404
    error = "Not Found"

    def __init__(self, query: str):
        self.query = query
        super().__init__(f'No geocoding results found for "{query}".')

class InvalidGeocodeResponseFormat(ApiError):
    status_code = 500
    error = "Internal Server Error"

    def __init__(self):
        super().__init__("Invalid response format for geocoding result.")

class GeocoderUpstreamError(ApiError):
    """Raised when the live geocoding service fails or cannot be reached."""

    status_code = 502
    error = "Bad Gateway"

    def __init__(self):
        super().__init__("Geocoding service is unavailable.")

# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

UNEXPECTED_ERROR_BODY = {
    "statusCode": 500,
    "error": "Internal Server Error",
    "message": "Unexpected server error",
}

def _body(status_code: int, error: str, message: str, details: Any = None) -> dict:
    body = {"statusCode": status_code, "error": error, "message": message}
    if details:
        body["details"] = details
    return body

def error_body(exc: BaseException) -> dict:
    """Map any caught exception to the ApiError wire shape."""
    if isinstance(exc, ApiError):
        return _body(exc.status_code, exc.error, exc.message, exc.details)
    return dict(UNEXPECTED_ERROR_BODY)

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = join_violations(collect_violations(exc.errors()))
        return JSONResponse(status_code=400, content=_body(400, "Bad Request", message))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        error = HTTPStatus(exc.status_code).phrase
        return JSONResponse(
            status_code=exc.status_code,
            content=_body(exc.status_code, error, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=error_body(exc))
