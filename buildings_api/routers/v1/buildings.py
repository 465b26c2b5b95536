"""Building CRUD router.

Routers only handle HTTP: the body is parsed and validated by FastAPI, the
work is delegated to :class:`BuildingService`, and any ApiError it raises is
turned into the error body by the global exception handlers.
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Response, Security, status

from buildings_api.core.exceptions import BuildingNotFound, EmptyUpdatePayload
from buildings_api.db.store import get_building_repository
from buildings_api.middleware.auth import api_key_scheme
from buildings_api.repositories.building import BuildingRepository
from buildings_api.schemas.building import Building, BuildingUpdate
from buildings_api.schemas.common import ApiErrorOut
from buildings_api.services.building import BuildingService

_ERRORS = {
    code: {"model": ApiErrorOut}
    for code in (
        status.HTTP_400_BAD_REQUEST,
        status.HTTP_403_FORBIDDEN,
        status.HTTP_404_NOT_FOUND,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
}

router = APIRouter(
    prefix="/buildings",
    tags=["Building"],
    dependencies=[Security(api_key_scheme)],
    responses=_ERRORS,
)


# ------------------------------------------------------------------
# Helper — instantiate service with the shared store
# ------------------------------------------------------------------

def get_building_service(
    repo: BuildingRepository = Depends(get_building_repository),
) -> BuildingService:
    return BuildingService(repo)


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.post(
    "",
    response_model=Building,
    status_code=status.HTTP_201_CREATED,
    operation_id="createBuilding",
    summary="Create a building",
    responses={status.HTTP_409_CONFLICT: {"model": ApiErrorOut}},
)
async def create_building(
    body: Building,
    svc: BuildingService = Depends(get_building_service),
):
    """Store a building. Without an ``id`` one of the form ``CH-<digits>`` is generated."""
    return svc.create(body)


@router.get("", response_model=list[Building], operation_id="listBuildings", summary="List all buildings")
async def list_buildings(svc: BuildingService = Depends(get_building_service)):
    return svc.list()


@router.get("/{building_id}", response_model=Building, operation_id="getBuilding", summary="Get a building by ID")
async def get_building(
    building_id: str,
    svc: BuildingService = Depends(get_building_service),
):
    building = svc.get(building_id)
    if building is None:
        raise BuildingNotFound(building_id)
    return building


@router.patch(
    "/{building_id}",
    response_model=Building,
    operation_id="updateBuilding",
    summary="Update a building by ID",
)
async def update_building(
    building_id: str,
    body: BuildingUpdate | None = Body(default=None),
    svc: BuildingService = Depends(get_building_service),
):
    """Merge the given fields into the stored building; omitted fields keep their value."""
    changes = body.changes() if body is not None else {}
    if not changes:
        raise EmptyUpdatePayload()
    return svc.update(building_id, changes)


@router.delete(
    "/{building_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    operation_id="deleteBuilding",
    summary="Delete a building by ID",
)
async def delete_building(
    building_id: str,
    svc: BuildingService = Depends(get_building_service),
):
    svc.delete(building_id)
