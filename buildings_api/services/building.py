"""Building service — create / read / update / delete over the building store.

Rule: No FastAPI here. Pure Python business logic; rule violations are
raised as ApiError subclasses and mapped to HTTP by the exception handlers.
"""

import logging
import secrets
from collections.abc import Callable

from buildings_api.core.exceptions import (
    BuildingNotFound,
    DuplicateBuildingId,
    InvalidBuildingUpdate,
)
from buildings_api.core.validation import PayloadValidationError, validate_payload
from buildings_api.repositories.base import BaseRepository
from buildings_api.schemas.building import Building

logger = logging.getLogger(__name__)

BUILDING_ID_PREFIX = "CH-"
_ID_MIN = 100_000
_ID_MAX = 999_999

def generate_building_id() -> str:
    """Random candidate id such as ``CH-482913``. May already be taken."""
    return f"{BUILDING_ID_PREFIX}{_ID_MIN + secrets.randbelow(_ID_MAX - _ID_MIN + 1)}"

class BuildingService:
    def __init__(
        self,
        repo: BaseRepository[Building],
        id_factory: Callable[[], str] = generate_building_id,
    ):
        self._repo = repo
        self._new_id = id_factory

    def _unused_id(self) -> str:
        candidate = self._new_id()
        while candidate in self._repo:
            logger.debug("Generated building id %s is taken, drawing again", candidate)
            candidate = self._new_id()
        return candidate

    def list(self) -> list[Building]:
        return self._repo.list()

    def get(self, building_id: str) -> Building | None:
        return self._repo.get(building_id)

    def create(self, data: Building) -> Building:
        building_id = data.id
        if building_id and building_id in self._repo:
            raise DuplicateBuildingId(building_id)
        if not building_id:
            building_id = self._unused_id()

        building = data.model_copy(update={"id": building_id})
        self._repo.put(building_id, building)
        logger.info("Created building %s", building_id)
        return building

    def update(self, building_id: str, changes: dict) -> Building:
        """Overlay *changes* (camelCase keys) on the stored record.

        The merge is flat: a nested object such as ``address`` replaces the
        stored one wholesale.
        """
        existing = self._repo.get(building_id)
        if existing is None:
            raise BuildingNotFound(building_id)

        merged = {**existing.model_dump(mode="json", by_alias=True), **changes}
        merged["id"] = building_id  # records are never re-keyed
        try:
            building = validate_payload(Building, merged)
        except PayloadValidationError as exc:
            raise InvalidBuildingUpdate(exc.details) from exc

        self._repo.put(building_id, building)
        logger.info("Updated building %s (%s)", building_id, ", ".join(changes) or "no fields")
        return building

    def delete(self, building_id: str) -> None:
        if not self._repo.delete(building_id):
            raise BuildingNotFound(building_id)
        logger.info("Deleted building %s", building_id)
