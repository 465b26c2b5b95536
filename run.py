"""Start the Buildings Geocoding API with Uvicorn.

Host and port come from ``HOST`` / ``PORT`` (see ``buildings_api.core.config``).

Usage:
    python run.py
"""
import uvicorn

from buildings_api.core.config import settings


def main() -> None:
    uvicorn.run(
        "buildings_api.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "development",
        log_level="info",
    )


if __name__ == "__main__":
    main()
