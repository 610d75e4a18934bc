"""Seed endpoints: breeding and selling to the shop."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.database import get_db
from garden_api.dependencies import get_current_user
from garden_api.repositories import inventory as inventory_repo
from garden_api.schemas import BreedRequest, BreedResponse, SeedView, SellResponse

router = APIRouter(prefix="/seeds", tags=["seeds"])


@router.get("", response_model=list[SeedView])
async def list_seeds(
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> list[SeedView]:
    return await inventory_repo.list_seeds(db, player_id)


@router.post("/breed", response_model=BreedResponse)
async def breed(
    request: BreedRequest,
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> BreedResponse:
    """Breed two mature seeds into one new immature seed."""
    return await inventory_repo.breed(db, player_id, request.seed_a_id, request.seed_b_id)


@router.post("/{seed_id}/sell", response_model=SellResponse)
async def sell(
    seed_id: UUID,
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> SellResponse:
    """Sell a mature seed to the shop for 110% of its value."""
    return await inventory_repo.sell_to_shop(db, player_id, seed_id)
