from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Buildings Geocoding API"
    app_env: str = "development"
    app_host: str = Field(default="localhost", alias="HOST")
    app_port: int = Field(default=3000, alias="PORT")
    frontend_url: str = Field(default="http://localhost:3000", alias="FRONTEND_URL")

    # Routing
    api_prefix: str = "/v1"
    docs_url: str = "/docs"
    redoc_url: str = "/redoc"
    openapi_url: str = "/openapi.json"
    status_path: str = "/status"

    # Auth (single static key)
    api_key: str = Field(default="api-key", alias="API_KEY")
    api_key_header: str = "x-api-key"

    # Geocoding
    geocoder_backend: Literal["static", "swisstopo"] = Field(
        default="static", alias="GEOCODER_BACKEND",
    )
    geocoder_url: str = Field(
        default="https://api3.geo.admin.ch/rest/services/api/SearchServer",
        alias="GEOCODER_URL",
    )
    geocoder_timeout: float = Field(default=10.0, alias="GEOCODER_TIMEOUT")
    geocoder_country_code: str = "CH"  # the live service only covers Switzerland
    geocode_default_limit: int = 5
    geocode_max_limit: int = 10

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def auth_exempt_paths(self) -> tuple[str, ...]:
        """Path prefixes reachable without an API key (docs tree + health check)."""
        return (self.docs_url, self.redoc_url, self.openapi_url, self.status_path)

settings = Settings()
