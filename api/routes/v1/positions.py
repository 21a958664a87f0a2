"""Position endpoints."""

from fastapi import APIRouter, Depends, Path

from api.dependencies import get_store
from api.schemas.common import envelope
from api.schemas.positions import PositionUpdate
from api.services import aggregation, positions as position_service
from core.middleware.authentication import Principal
from core.middleware.authorization import Permission, require_permission
from database.store import EntityStore

router = APIRouter(prefix="/positions", tags=["positions"])


@router.get(
    "",
    summary="List Positions",
    description="List all positions ordered by title. Public.",
)
async def list_positions(store: EntityStore = Depends(get_store)):
    return envelope(await position_service.list_positions(store))


@router.get(
    "/skills",
    summary="List Skills",
    description="Distinct skills across all positions, case-insensitively deduplicated and sorted.",
)
async def list_skills(store: EntityStore = Depends(get_store)):
    return envelope(await aggregation.distinct_skills(store))


@router.get(
    "/{position_id}",
    summary="Get Position",
    description="Get a single position with a summary of its company. Public.",
)
async def get_position(
    position_id: str = Path(..., description="Position ID"),
    store: EntityStore = Depends(get_store),
):
    return envelope(await position_service.get_position(store, position_id))


@router.put(
    "/{position_id}",
    summary="Update Position",
    description="Update a position. Requires position:update permission.",
)
async def update_position(
    request: PositionUpdate,
    position_id: str = Path(..., description="Position ID"),
    principal: Principal = Depends(require_permission(Permission.POSITION_UPDATE)),
    store: EntityStore = Depends(get_store),
):
    return envelope(
        await position_service.update_position(store, principal, position_id, request.to_fields())
    )


@router.delete(
    "/{position_id}",
    summary="Delete Position",
    description=(
        "Delete a position. Refused while any interview references it. "
        "Requires position:delete permission."
    ),
)
async def delete_position(
    position_id: str = Path(..., description="Position ID"),
    principal: Principal = Depends(require_permission(Permission.POSITION_DELETE)),
    store: EntityStore = Depends(get_store),
):
    return envelope(await position_service.delete_position(store, principal, position_id))
