"""Shop endpoints: seeds, pots and traps."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.database import get_db
from garden_api.dependencies import get_current_user
from garden_api.repositories import floor as floor_repo
from garden_api.repositories import inventory as inventory_repo
from garden_api.schemas import ShopBuyRequest, ShopBuyResponse, TrapBuyRequest, TrapBuyResponse

router = APIRouter(prefix="/shop", tags=["shop"])


@router.post("/buy", response_model=ShopBuyResponse)
async def buy(
    request: ShopBuyRequest,
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> ShopBuyResponse:
    """Buy 1-50 immature seeds of a class or pots of a type."""
    return await inventory_repo.shop_buy(db, player_id, request)


@router.post("/traps", response_model=TrapBuyResponse)
async def buy_traps(
    request: TrapBuyRequest,
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> TrapBuyResponse:
    """
    Buy traps. The unit price is 1000 per owned floor.

    Traps fill floors in index order, at most five per floor.
    """
    return await floor_repo.buy_traps(db, player_id, request.qty)
