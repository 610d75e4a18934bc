"""Market endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.database import get_db
from garden_api.dependencies import get_current_user
from garden_api.repositories import market as market_repo
from garden_api.schemas import (
    ListingCancelResponse,
    ListingCreate,
    ListingPurchaseResponse,
    ListingView,
)

router = APIRouter(prefix="/market", tags=["market"])


@router.get("", response_model=list[ListingView])
async def list_open(
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> list[ListingView]:
    """Open listings, newest first."""
    return await market_repo.list_open(db)


@router.post("/listings", response_model=ListingView, status_code=status.HTTP_201_CREATED)
async def create_listing(
    request: ListingCreate,
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> ListingView:
    """
    List a mature seed for sale.

    The ask must be within 90%-150% of the seed's mutation-adjusted value.
    """
    return await market_repo.create_listing(db, player_id, request)


@router.post("/listings/{listing_id}/buy", response_model=ListingPurchaseResponse)
async def buy_listing(
    listing_id: UUID,
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> ListingPurchaseResponse:
    return await market_repo.buy_listing(db, player_id, listing_id)


@router.post("/listings/{listing_id}/cancel", response_model=ListingCancelResponse)
async def cancel_listing(
    listing_id: UUID,
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> ListingCancelResponse:
    return await market_repo.cancel_listing(db, player_id, listing_id)
