"""Gacha endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.database import get_db
from garden_api.dependencies import get_current_user
from garden_api.repositories import gacha as gacha_repo
from garden_api.schemas import GachaRollRecord, GachaState, RollResponse

router = APIRouter(prefix="/gacha", tags=["gacha"])


@router.get("", response_model=GachaState)
async def get_state(
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> GachaState:
    """Current requirement, the next few requirements and mature seed counts."""
    return await gacha_repo.get_state(db, player_id)


@router.post("/roll", response_model=RollResponse)
async def roll(
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> RollResponse:
    """
    Consume the current requirement's mature seeds and pull once.

    Returns 400 NOT_ENOUGH_MATERIALS when short of seeds and 409
    INV_CHANGED_RETRY when the inventory changed mid-roll.
    """
    return await gacha_repo.roll(db, player_id)


@router.get("/history", response_model=list[GachaRollRecord])
async def history(
    limit: int = Query(default=50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> list[GachaRollRecord]:
    return await gacha_repo.history(db, player_id, limit)
