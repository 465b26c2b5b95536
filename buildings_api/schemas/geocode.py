"""Geocoding request / response schemas."""

from __future__ import annotations

from pydantic import Field, StrictInt

from buildings_api.schemas.common import Address, CamelModel, Coordinates, StrictCamelModel


class GeocodeRequest(StrictCamelModel):
    search_text: str = Field(
        min_length=1, description="Text to search for geocoding, e.g., street or place name.",
    )
    limit: StrictInt | None = Field(
        default=None, ge=1, le=10, description="Maximum number of results to return.",
    )


class GeocodeResult(CamelModel):
    address: Address = Field(description="Full address details of the geocoded location.")
    coordinates: Coordinates = Field(description="Latitude and longitude of the location.")
