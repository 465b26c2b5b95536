from __future__ import annotations

import copy

import pytest
from fastapi.testclient import TestClient

from buildings_api.core.config import settings
from buildings_api.db.store import get_building_repository
from buildings_api.main import create_app
from buildings_api.repositories.building import BuildingRepository
from buildings_api.services.geocoding import StaticGeocoder, get_geocoder

VALID_BUILDING = {
    "id": "CH-54321",
    "address": {
        "line1": "456 Oak St",
        "postCode": "67890",
        "city": "Sampletown",
        "countryCode": "CA",
    },
    "coordinates": {"lat": 30.123, "lon": -90.456},
    "attachmentType": "detached",
    "basementCeilingRenovationYear": 2010,
    "constructionYear": 1995,
    "facadeRenovationYear": 2015,
    "floorCount": 3,
    "heatedArea": 1500.5,
    "heatingInstallationYear": 2018,
    "heatingType": "gas",
    "photovoltaicNominalPower": 5.2,
    "roofRenovationYear": 2020,
    "windowsRenovationYear": 2019,
}


def make_geocode_results(count: int) -> list[dict]:
    return [
        {
            "address": {
                "line1": f"Main St {n}",
                "postCode": f"{8000 + n}",
                "city": "Zürich",
                "countryCode": "CH",
            },
            "coordinates": {"lat": 47.0 + n / 100, "lon": 8.5},
        }
        for n in range(1, count + 1)
    ]


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def building_payload() -> dict:
    return copy.deepcopy(VALID_BUILDING)


@pytest.fixture
def building_payload_without_id(building_payload) -> dict:
    building_payload.pop("id")
    return building_payload


@pytest.fixture
def repo() -> BuildingRepository:
    return BuildingRepository.seeded()


@pytest.fixture
def geocoder() -> StaticGeocoder:
    return StaticGeocoder()


@pytest.fixture
def app(repo, geocoder):
    application = create_app()
    application.dependency_overrides[get_building_repository] = lambda: repo
    application.dependency_overrides[get_geocoder] = lambda: geocoder
    return application


@pytest.fixture
def client(app) -> TestClient:
    # Unhandled errors are answered by the generic 500 handler instead of re-raised
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def api_headers() -> dict:
    return {settings.api_key_header: settings.api_key}


@pytest.fixture
def geocode_results():
    """Factory for ``count`` distinct, well-formed geocoding results."""
    return make_geocode_results
