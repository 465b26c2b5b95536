"""Building repository with the seed record every fresh store starts with."""

from __future__ import annotations

from buildings_api.repositories.base import InMemoryRepository
from buildings_api.schemas.building import Building

SEED_BUILDINGS: list[dict] = [
    {
        "id": "CH-12345",
        "address": {
            "line1": "Wyden 1",
            "postCode": "8475",
            "city": "Ossingen",
            "countryCode": "CH",
        },
        "coordinates": {"lat": 47.607623, "lon": 8.715901},
        "attachmentType": "detached",
        "constructionYear": 1650,
        "floorCount": 2,
        "heatedArea": 286,
        "heatingType": "gas",
        "heatingInstallationYear": 1980,
        "photovoltaicNominalPower": 12,
        "basementCeilingRenovationYear": 1996,
        "facadeRenovationYear": 1992,
        "roofRenovationYear": 1990,
        "windowsRenovationYear": 1994,
    },
]


class BuildingRepository(InMemoryRepository[Building]):

    @classmethod
    def seeded(cls) -> "BuildingRepository":
        buildings = [Building.model_validate(raw) for raw in SEED_BUILDINGS]
        return cls({b.id: b for b in buildings})
