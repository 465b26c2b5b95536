"""Building Pydantic schemas (request DTOs and response models)."""

from __future__ import annotations

import re
from enum import Enum

from pydantic import Field, StrictFloat, StrictInt, field_validator

from buildings_api.schemas.common import Address, Coordinates, StrictCamelModel

BUILDING_ID_PATTERN = re.compile(r"^CH-\d+$")


class AttachmentType(str, Enum):
    DETACHED = "detached"
    ATTACHED = "attached"


class HeatingType(str, Enum):
    GAS = "gas"
    OIL = "oil"
    HEAT_PUMP_AIR = "heatPumpAir"


class Building(StrictCamelModel):
    id: str | None = Field(
        default=None, description='Optional unique building ID starting with "CH-".',
    )
    address: Address = Field(description="Street address and postal information of the building.")
    coordinates: Coordinates = Field(description="Geographic location of the building.")
    attachment_type: AttachmentType = Field(description="Whether the building is detached or attached.")
    basement_ceiling_renovation_year: StrictInt = Field(description="Year basement ceiling was renovated.")
    construction_year: StrictInt = Field(description="Year building was constructed.")
    floor_count: StrictInt = Field(ge=1, description="Number of floors in the building.")
    heated_area: StrictFloat = Field(ge=1, description="Heated surface area in square meters.")
    facade_renovation_year: StrictInt = Field(description="Year building facade was last renovated.")
    heating_installation_year: StrictInt = Field(description="Year current heating system was installed.")
    heating_type: HeatingType = Field(description="Heating system type.")
    photovoltaic_nominal_power: StrictFloat = Field(description="Nominal power of photovoltaic installation (kWp).")
    roof_renovation_year: StrictInt = Field(description="Year roof was renovated.")
    windows_renovation_year: StrictInt = Field(description="Year windows were renovated.")

    @field_validator("id")
    @classmethod
    def _check_id(cls, value: str | None) -> str | None:
        if value is not None and not BUILDING_ID_PATTERN.match(value):
            raise ValueError('ID must start with "CH-" followed by digits')
        return value


class BuildingUpdate(StrictCamelModel):
    """Partial update: every field optional, the id cannot be changed."""

    address: Address | None = None
    coordinates: Coordinates | None = None
    attachment_type: AttachmentType | None = None
    basement_ceiling_renovation_year: StrictInt | None = None
    construction_year: StrictInt | None = None
    floor_count: StrictInt | None = Field(default=None, ge=1)
    heated_area: StrictFloat | None = Field(default=None, ge=1)
    facade_renovation_year: StrictInt | None = None
    heating_installation_year: StrictInt | None = None
    heating_type: HeatingType | None = None
    photovoltaic_nominal_power: StrictFloat | None = None
    roof_renovation_year: StrictInt | None = None
    windows_renovation_year: StrictInt | None = None

    def changes(self) -> dict:
        """Fields the client actually sent, keyed by their wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
