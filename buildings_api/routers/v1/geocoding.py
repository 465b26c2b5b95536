"""Geocoding router — address search backed by the configured geocoder."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Security, status

from buildings_api.middleware.auth import api_key_scheme
from buildings_api.schemas.common import ApiErrorOut
from buildings_api.schemas.geocode import GeocodeRequest, GeocodeResult
from buildings_api.services.geocoding import GeocoderBackend, GeocodingService, get_geocoder

router = APIRouter(
    prefix="/geocoding",
    tags=["Geocoding"],
    dependencies=[Security(api_key_scheme)],
)


def get_geocoding_service(backend: GeocoderBackend = Depends(get_geocoder)) -> GeocodingService:
    return GeocodingService(backend)


@router.post(
    "",
    response_model=list[GeocodeResult],
    operation_id="geocode",
    summary="Geocode an address",
    responses={
        code: {"model": ApiErrorOut}
        for code in (
            status.HTTP_400_BAD_REQUEST,
            status.HTTP_403_FORBIDDEN,
            status.HTTP_404_NOT_FOUND,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            status.HTTP_502_BAD_GATEWAY,
        )
    },
)
async def geocode(
    body: GeocodeRequest,
    svc: GeocodingService = Depends(get_geocoding_service),
):
    """Return up to ``limit`` (default 5, never more than 10) matches for ``searchText``."""
    return await svc.geocode(body.search_text, body.limit)
