"""Floor endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.database import get_db
from garden_api.dependencies import get_current_user
from garden_api.repositories import floor as floor_repo
from garden_api.schemas import FloorPurchaseResponse, FloorView

router = APIRouter(prefix="/floors", tags=["floors"])


@router.get("", response_model=list[FloorView])
async def list_floors(
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> list[FloorView]:
    """List the current player's floors with their plots."""
    return await floor_repo.list_floors(db, player_id)


@router.post("", response_model=FloorPurchaseResponse, status_code=status.HTTP_201_CREATED)
async def buy_floor(
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> FloorPurchaseResponse:
    """Buy the next floor. Floor N costs N * 1000 coins (floor 1 is free)."""
    return await floor_repo.buy_floor(db, player_id)
