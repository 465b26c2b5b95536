"""Storage package — the in-memory building store and its FastAPI dependency."""
from buildings_api.db.store import building_store, get_building_repository

__all__ = ["building_store", "get_building_repository"]
