"""Process-wide building store and the FastAPI dependency that hands it out."""

from buildings_api.repositories.building import BuildingRepository

# ---------------------------------------------------------------------------
# Store (lives as long as the process; nothing survives a restart)
# ---------------------------------------------------------------------------
building_store = BuildingRepository.seeded()

# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------
def get_building_repository() -> BuildingRepository:
    """Return the shared building repository (override in tests)."""
    return building_store
