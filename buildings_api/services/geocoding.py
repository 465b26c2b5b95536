"""Geocoding — turn free-text address queries into address + coordinate pairs.

Two interchangeable backends implement :class:`GeocoderBackend`:

* :class:`StaticGeocoder` — a fixed, case-insensitive lookup table. No network.
* :class:`SwisstopoGeocoder` — the swisstopo ``SearchServer`` REST API; result
  labels such as ``"Berninastrasse 1 <b>4313 Möhlin</b>"`` are split into
  address line, postcode and city.

:class:`GeocodingService` validates the request, asks the configured backend
and trims the answer to the caller's limit.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Any

import httpx

from buildings_api.core.config import settings
from buildings_api.core.exceptions import (
    GeocodeResultNotFound,
    GeocoderUpstreamError,
    InvalidGeocodeRequest,
    InvalidGeocodeResponseFormat,
)
from buildings_api.core.validation import PayloadValidationError, validate_payload
from buildings_api.schemas.geocode import GeocodeRequest, GeocodeResult

logger = logging.getLogger(__name__)

# ── Backends ──────────────────────────────────────────────────────────────


class GeocoderBackend(ABC):
    @abstractmethod
    async def lookup(self, query: str, limit: int) -> list[dict[str, Any]]:
        """Return raw ``{address, coordinates}`` dicts; empty when nothing matched."""


STATIC_RESULTS: dict[str, list[dict[str, Any]]] = {
    "berninastrasse": [
        {
            "address": {
                "line1": "Berninastrasse 1",
                "postCode": "4313",
                "city": "Möhlin",
                "countryCode": "CH",
            },
            "coordinates": {"lat": 47.55795669555664, "lon": 7.850382328033447},
        },
        {
            "address": {
                "line1": "Berninastrasse 2",
                "postCode": "8057",
                "city": "Zürich",
                "countryCode": "CH",
            },
            "coordinates": {"lat": 47.402687072753906, "lon": 8.55298900604248},
        },
        {
            "address": {
                "line1": "Berninastrasse 2",
                "postCode": "5430",
                "city": "Wettingen",
                "countryCode": "CH",
            },
            "coordinates": {"lat": 47.462093353271484, "lon": 8.314849853515625},
        },
    ],
}


class StaticGeocoder(GeocoderBackend):
    def __init__(self, table: dict[str, list[dict[str, Any]]] | None = None):
        table = STATIC_RESULTS if table is None else table
        self._table = {key.casefold(): results for key, results in table.items()}

    async def lookup(self, query: str, limit: int) -> list[dict[str, Any]]:
        return list(self._table.get(query.strip().casefold(), []))


# "<line1> <b><postcode> <city></b>" — the <b> markup is optional
_LABEL_RE = re.compile(
    r"^(?P<line1>.+?)\s*(?:<b>)?\s*(?P<post_code>\d{4,})\s+(?P<city>[^<]+?)\s*(?:</b>)?$"
)


def parse_label(label: str) -> tuple[str, str, str]:
    """Split a swisstopo location label into ``(line1, postcode, city)``."""
    match = _LABEL_RE.match(label.strip())
    if not match:
        logger.warning("Unparseable geocoder label: %r", label)
        raise InvalidGeocodeResponseFormat()
    return match["line1"], match["post_code"], match["city"]


class SwisstopoGeocoder(GeocoderBackend):
    def __init__(
        self,
        url: str = settings.geocoder_url,
        timeout: float = settings.geocoder_timeout,
        country_code: str = settings.geocoder_country_code,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._url = url
        self._timeout = httpx.Timeout(timeout)
        self._country_code = country_code
        self._transport = transport

    async def _search(self, query: str, limit: int) -> dict[str, Any]:
        params = {"searchText": query, "type": "locations", "limit": limit}
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.get(self._url, params=params)
                resp.raise_for_status()
                return resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Geocoder request for %r failed: %s", query, exc)
            raise GeocoderUpstreamError() from exc

    def _to_result(self, entry: dict[str, Any]) -> dict[str, Any]:
        attrs = entry.get("attrs") or {}
        label = attrs.get("label")
        if not label:
            logger.warning("Geocoder result without label: %r", entry)
            raise InvalidGeocodeResponseFormat()
        line1, post_code, city = parse_label(label)
        return {
            "address": {
                "line1": line1,
                "postCode": post_code,
                "city": city,
                "countryCode": self._country_code,
            },
            "coordinates": {"lat": attrs.get("lat"), "lon": attrs.get("lon")},
        }

    async def lookup(self, query: str, limit: int) -> list[dict[str, Any]]:
        body = await self._search(query, limit)
        results = body.get("results") if isinstance(body, dict) else None
        if not isinstance(results, list):
            raise InvalidGeocodeResponseFormat()
        return [self._to_result(entry) for entry in results[:limit]]


# ── Service ───────────────────────────────────────────────────────────────


class GeocodingService:
    def __init__(
        self,
        backend: GeocoderBackend,
        default_limit: int = settings.geocode_default_limit,
        max_limit: int = settings.geocode_max_limit,
    ):
        self._backend = backend
        self._default_limit = default_limit
        self._max_limit = max_limit

    async def geocode(self, search_text: str, limit: int | None = None) -> list[GeocodeResult]:
        try:
            request = validate_payload(
                GeocodeRequest, {"searchText": search_text, "limit": limit}
            )
        except PayloadValidationError as exc:
            raise InvalidGeocodeRequest(exc.details) from exc

        effective = min(request.limit or self._default_limit, self._max_limit)
        logger.debug("Geocoding %r (limit=%d)", request.search_text, effective)

        raw = await self._backend.lookup(request.search_text, effective)
        if not raw:
            raise GeocodeResultNotFound(request.search_text)

        try:
            return [GeocodeResult.model_validate(item) for item in raw[:effective]]
        except (ValueError, TypeError) as exc:
            raise InvalidGeocodeResponseFormat() from exc


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

def get_geocoder() -> GeocoderBackend:
    """Pick the backend named by ``settings.geocoder_backend``."""
    if settings.geocoder_backend == "swisstopo":
        return SwisstopoGeocoder()
    return StaticGeocoder()
