"""Pydantic schemas package.

Folder intent:
  common.py    — CamelModel base, Address/Coordinates value types, ApiErrorOut, StatusResponse
  building.py  — Building resource and its partial-update DTO
  geocode.py   — Geocoding request and result
"""
