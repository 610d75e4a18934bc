"""Floor repository - floors, floor purchases and trap stock."""

from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from garden_api.database import transaction
from garden_api.errors import CapacityExceeded, ConcurrencyConflict, InvalidRequest, NotFound
from garden_api.game.economy import (
    MAX_PURCHASE_QTY,
    MIN_PURCHASE_QTY,
    PLOTS_PER_FLOOR,
    TRAPS_PER_FLOOR,
    distribute_traps,
    floor_purchase_price,
    trap_max,
    trap_unit_price,
)
from garden_api.models import Floor, Plot
from garden_api.repositories import action_log
from garden_api.repositories import coins as coins_repo
from garden_api.schemas import FloorPurchaseResponse, FloorTraps, FloorView, TrapBuyResponse


async def create_floor(db: AsyncSession, player_id: UUID, idx: int) -> Floor:
    """Insert a floor with its empty plots. Caller owns the transaction."""
    floor = Floor(
        player_id=player_id,
        idx=idx,
        unlocked=True,
        trap_count=0,
        plots=[Plot(slot=slot) for slot in range(1, PLOTS_PER_FLOOR + 1)],
    )
    db.add(floor)
    await db.flush()
    return floor


async def count_floors(db: AsyncSession, player_id: UUID) -> int:
    result = await db.execute(
        select(func.count(Floor.id)).where(Floor.player_id == player_id, Floor.unlocked.is_(True))
    )
    return result.scalar_one()


async def list_floor_models(db: AsyncSession, player_id: UUID) -> list[Floor]:
    """A player's floors (with plots) ordered by index, freshly read."""
    result = await db.execute(
        select(Floor)
        .options(selectinload(Floor.plots))
        .where(Floor.player_id == player_id)
        .order_by(Floor.idx.asc())
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def list_floors(db: AsyncSession, player_id: UUID) -> list[FloorView]:
    return [FloorView.model_validate(f) for f in await list_floor_models(db, player_id)]


async def get_floor(db: AsyncSession, floor_id: UUID) -> Floor:
    result = await db.execute(
        select(Floor)
        .options(selectinload(Floor.plots))
        .where(Floor.id == floor_id)
        .execution_options(populate_existing=True)
    )
    floor = result.scalar_one_or_none()
    if floor is None:
        raise NotFound(f"Floor {floor_id} not found")
    return floor


async def buy_floor(db: AsyncSession, player_id: UUID) -> FloorPurchaseResponse:
    """Buy the next floor (index = highest owned + 1) with its ten empty plots."""
    async with transaction(db):
        result = await db.execute(
            select(func.coalesce(func.max(Floor.idx), 0)).where(Floor.player_id == player_id)
        )
        next_idx = result.scalar_one() + 1
        price = floor_purchase_price(next_idx)

        coins = await coins_repo.debit_coins(db, player_id, price)
        floor = await create_floor(db, player_id, next_idx)
        await action_log.record_action(
            db, player_id, "buy_floor", {"idx": next_idx, "paid": price}
        )

    return FloorPurchaseResponse(
        floor=FloorView.model_validate(floor), price=price, coins=coins
    )


async def trap_pricing(db: AsyncSession, player_id: UUID) -> tuple[int, int]:
    """(unit price, max traps) for a player, both scaled by unlocked floor count."""
    floor_count = await count_floors(db, player_id)
    return trap_unit_price(floor_count), trap_max(floor_count)


async def buy_traps(db: AsyncSession, player_id: UUID, qty: int) -> TrapBuyResponse:
    """Buy trap units and spread them over floors in index order.

    Each floor holds at most five. Payment and placement are one unit.
    """
    if not MIN_PURCHASE_QTY <= qty <= MAX_PURCHASE_QTY:
        raise InvalidRequest(
            f"qty must be between {MIN_PURCHASE_QTY} and {MAX_PURCHASE_QTY}", qty=qty
        )

    async with transaction(db):
        floors = await list_floor_models(db, player_id)
        unit_price = trap_unit_price(len(floors))
        free_slots = [max(0, TRAPS_PER_FLOOR - f.trap_count) for f in floors]
        capacity_left = sum(free_slots)

        if capacity_left <= 0:
            raise CapacityExceeded("Trap capacity reached", capacity_left=0)
        if qty > capacity_left:
            raise CapacityExceeded("Not enough capacity", capacity_left=capacity_left)

        total = unit_price * qty
        coins = await coins_repo.debit_coins(db, player_id, total)

        for floor, add in zip(floors, distribute_traps(free_slots, qty), strict=True):
            if add == 0:
                continue
            result = await db.execute(
                update(Floor)
                .where(Floor.id == floor.id, Floor.trap_count + add <= TRAPS_PER_FLOOR)
                .values(trap_count=Floor.trap_count + add)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise ConcurrencyConflict("Trap stock changed, please retry")

        await action_log.record_action(
            db, player_id, "buy_traps", {"qty": qty, "price_each": unit_price, "total": total}
        )

    floors = await list_floor_models(db, player_id)
    return TrapBuyResponse(
        coins=coins,
        qty=qty,
        price_each=unit_price,
        total=total,
        trap_max=trap_max(len(floors)),
        floors=[FloorTraps(floor_id=f.id, idx=f.idx, trap_count=f.trap_count) for f in floors],
    )
