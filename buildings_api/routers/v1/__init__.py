"""v1 router package — all /v1/* endpoints live here.

Files:
  buildings.py  — Building CRUD (/v1/buildings)
  geocoding.py  — Address search (/v1/geocoding)

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to buildings_api/services/.
"""
