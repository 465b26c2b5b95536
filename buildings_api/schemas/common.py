"""Shared Pydantic schema base with camelCase aliases, plus embedded value types."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, StrictFloat
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """All API schemas inherit from this to auto-generate camelCase aliases."""

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "from_attributes": True,
    }


class StrictCamelModel(CamelModel):
    """Closed object: unknown keys are rejected instead of ignored."""

    model_config = {**CamelModel.model_config, "extra": "forbid"}


class Address(CamelModel):
    line1: str = Field(min_length=1, description="Street address line 1.")
    post_code: str = Field(min_length=1, description="Postal or ZIP code.")
    city: str = Field(min_length=1, description="City name.")
    country_code: str = Field(
        pattern=r"^[A-Za-z]{2}$", description='ISO 2-letter country code (e.g., "US", "CH").',
    )


class Coordinates(CamelModel):
    lat: StrictFloat = Field(ge=-90, le=90, description="Latitude in decimal degrees.")
    lon: StrictFloat = Field(ge=-180, le=180, description="Longitude in decimal degrees.")


class ApiErrorOut(CamelModel):
    """Error body returned by every failing request (documentation only)."""

    status_code: int = Field(description="HTTP status code")
    error: str = Field(description='Error type, e.g. "Bad Request"')
    message: str = Field(description="Human-readable error message")
    details: Any = Field(default=None, description="Optional additional error details")


class StatusResponse(BaseModel):
    """Health-check response returned by /status."""
    status: str = "ok"
