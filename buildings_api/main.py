"""Buildings Geocoding API — FastAPI application factory."""


import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from buildings_api.core.config import settings
from buildings_api.core.exceptions import register_exception_handlers
from buildings_api.middleware.auth import ApiKeyMiddleware
from buildings_api.middleware.request_log import RequestLogMiddleware
from buildings_api.schemas.common import StatusResponse

from buildings_api.routers.v1.buildings import router as buildings_v1_router
from buildings_api.routers.v1.geocoding import router as geocoding_v1_router


def _configure_logging() -> None:
    """Set up structured logging for the application."""
    level = logging.DEBUG if settings.app_env == "development" else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def create_app() -> FastAPI:
    _configure_logging()

    app = FastAPI(
        title=settings.app_name,
        description="API for geocoding building addresses and managing building data.",
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
    )

    # --- API key gate (inside CORS) ---
    app.add_middleware(ApiKeyMiddleware)

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Request log (outermost) ---
    app.add_middleware(RequestLogMiddleware)

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- v1 API routes (/v1/*) ---
    app.include_router(geocoding_v1_router, prefix=settings.api_prefix)
    app.include_router(buildings_v1_router, prefix=settings.api_prefix)

    # --- Health check ---
    @app.get(settings.status_path, response_model=StatusResponse, tags=["Health"])
    async def status():
        return StatusResponse()

    return app


app = create_app()
