"""Market repository - listing, buying and cancelling escrowed seeds."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.config import settings
from garden_api.database import transaction
from garden_api.errors import (
    ConcurrencyConflict,
    InvalidRequest,
    NotFound,
    NotOwner,
    PreconditionFailed,
)
from garden_api.game.economy import market_ask_bounds
from garden_api.models import ListingStatus, MarketListing
from garden_api.repositories import action_log, inventory
from garden_api.repositories import coins as coins_repo
from garden_api.schemas import (
    ListingCancelResponse,
    ListingCreate,
    ListingPurchaseResponse,
    ListingView,
    SeedView,
)


def _ensure_utc(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (UTC). SQLite returns naive datetimes."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def _to_schema(listing: MarketListing) -> ListingView:
    view = ListingView.model_validate(listing)
    return view.model_copy(update={"created_at": _ensure_utc(listing.created_at)})


async def list_open(db: AsyncSession, limit: int | None = None) -> list[ListingView]:
    """Open listings, newest first."""
    result = await db.execute(
        select(MarketListing)
        .where(MarketListing.status == ListingStatus.OPEN.value)
        .order_by(MarketListing.created_at.desc())
        .limit(limit or settings.market_page_size)
        .execution_options(populate_existing=True)
    )
    return [_to_schema(listing) for listing in result.scalars().all()]


async def get_listing(db: AsyncSession, listing_id: UUID) -> MarketListing:
    listing = await db.get(MarketListing, listing_id, populate_existing=True)
    if listing is None:
        raise NotFound(f"Listing {listing_id} not found")
    return listing


async def _close_listing(
    db: AsyncSession, listing_id: UUID, status: ListingStatus, buyer_id: UUID | None = None
) -> None:
    """Move an open listing to ``status``; fails if it is no longer open."""
    result = await db.execute(
        update(MarketListing)
        .where(MarketListing.id == listing_id, MarketListing.status == ListingStatus.OPEN.value)
        .values(status=status.value, buyer_id=buyer_id)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise ConcurrencyConflict("Listing is no longer open")


async def create_listing(
    db: AsyncSession, player_id: UUID, request: ListingCreate
) -> ListingView:
    """Escrow a mature seed into an open listing.

    The ask must lie within [floor(eff * 0.9), floor(eff * 1.5)] of the
    seed's mutation-adjusted value.
    """
    async with transaction(db):
        seed = await inventory.get_owned_seed(db, player_id, request.seed_id)
        if not seed.is_mature:
            raise PreconditionFailed("Only mature seeds can be listed")

        ask_min, ask_max = market_ask_bounds(seed.base_price, seed.mutation)
        if not ask_min <= request.ask_price <= ask_max:
            raise InvalidRequest(
                f"Ask must be within {ask_min}-{ask_max}", min=ask_min, max=ask_max
            )

        await inventory.consume_seeds(db, player_id, [seed.id])
        listing = MarketListing(
            seller_id=player_id,
            seed_class=seed.seed_class,
            base_price=seed.base_price,
            mutation=seed.mutation,
            ask_price=request.ask_price,
            status=ListingStatus.OPEN.value,
        )
        db.add(listing)
        await db.flush()

        await action_log.record_action(
            db,
            player_id,
            "market_list",
            {"listing_id": listing.id, "seed_class": seed.seed_class, "ask_price": request.ask_price},
        )

    return _to_schema(listing)


async def buy_listing(
    db: AsyncSession, player_id: UUID, listing_id: UUID
) -> ListingPurchaseResponse:
    """Pay the seller the ask price and receive the seed as mature."""
    async with transaction(db):
        listing = await get_listing(db, listing_id)
        if listing.status != ListingStatus.OPEN:
            raise NotFound("Listing is not open")
        if listing.seller_id == player_id:
            raise InvalidRequest("Cannot buy your own listing; cancel it instead")

        coins = await coins_repo.debit_coins(db, player_id, listing.ask_price)
        await coins_repo.credit_coins(db, listing.seller_id, listing.ask_price)
        await _close_listing(db, listing.id, ListingStatus.SOLD, buyer_id=player_id)
        seed = await inventory.add_seed(
            db,
            player_id,
            listing.seed_class,
            listing.base_price,
            is_mature=True,
            mutation=listing.mutation,
        )

        await action_log.record_action(
            db,
            player_id,
            "market_buy",
            {"listing_id": listing.id, "seller_id": listing.seller_id, "paid": listing.ask_price},
        )

    await db.refresh(listing)
    return ListingPurchaseResponse(
        listing=_to_schema(listing), seed=SeedView.model_validate(seed), coins=coins
    )


async def cancel_listing(
    db: AsyncSession, player_id: UUID, listing_id: UUID
) -> ListingCancelResponse:
    """Seller takes an open listing back; the seed returns as mature."""
    async with transaction(db):
        listing = await get_listing(db, listing_id)
        if listing.seller_id != player_id:
            raise NotOwner("Not your listing")
        if listing.status != ListingStatus.OPEN:
            raise PreconditionFailed("Listing is not open", status=listing.status)

        await _close_listing(db, listing.id, ListingStatus.CANCELLED)
        seed = await inventory.add_seed(
            db,
            player_id,
            listing.seed_class,
            listing.base_price,
            is_mature=True,
            mutation=listing.mutation,
        )

        await action_log.record_action(db, player_id, "market_cancel", {"listing_id": listing.id})

    await db.refresh(listing)
    return ListingCancelResponse(listing=_to_schema(listing), seed=SeedView.model_validate(seed))
