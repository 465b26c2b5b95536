"""Services package — all business logic lives here, never in routers.

Files:
  building.py   — Building create / read / update / delete and id generation
  geocoding.py  — Geocoder backends (static table, swisstopo) and the lookup service

Rule: routers call services, services call repositories.
      No FastAPI imports in services.
"""
