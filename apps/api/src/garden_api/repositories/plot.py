"""Plot repository - pots, planting, harvesting and plot locks.

Every write to a plot is a conditional UPDATE on the state it was validated
against (stage, pot, lock). A zero rowcount means another request or the
growth scheduler changed the plot first.
"""

from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.database import transaction
from garden_api.errors import (
    ConcurrencyConflict,
    InvalidRequest,
    NotFound,
    NotOwner,
    PlotLocked,
    PreconditionFailed,
)
from garden_api.game.mutations import is_valid_tier
from garden_api.models import Floor, InventoryPot, InventorySeed, Plot
from garden_api.repositories import action_log
from garden_api.schemas import (
    HarvestAllResponse,
    HarvestResponse,
    PlacePotRequest,
    PlantRequest,
    PlotAddress,
    PlotView,
    SeedView,
)
from garden_shared import PlotStage, growth_duration_ms, now_ms

# Fields set by planting and cleared by harvest/steal; the pot stays
_CLEARED_SEED_FIELDS = {
    "seed_class": None,
    "mutation": None,
    "base_price": None,
    "planted_at": None,
    "mature_at": None,
    "stage": PlotStage.EMPTY.value,
}


async def get_plot(db: AsyncSession, plot_id: UUID) -> Plot:
    result = await db.execute(
        select(Plot).where(Plot.id == plot_id).execution_options(populate_existing=True)
    )
    plot = result.scalar_one_or_none()
    if plot is None:
        raise NotFound(f"Plot {plot_id} not found")
    return plot


async def get_owned_plot(db: AsyncSession, player_id: UUID, plot_id: UUID) -> Plot:
    plot = await get_plot(db, plot_id)
    owner = await db.scalar(select(Floor.player_id).where(Floor.id == plot.floor_id))
    if owner != player_id:
        raise NotOwner("Not your plot")
    return plot


async def get_owned_plot_at(db: AsyncSession, player_id: UUID, address: PlotAddress) -> Plot:
    """Resolve (floor, slot) to a plot, checking floor ownership."""
    owner = await db.scalar(select(Floor.player_id).where(Floor.id == address.floor_id))
    if owner is None:
        raise NotFound(f"Floor {address.floor_id} not found")
    if owner != player_id:
        raise NotOwner("Not your floor")

    result = await db.execute(
        select(Plot)
        .where(Plot.floor_id == address.floor_id, Plot.slot == address.slot)
        .execution_options(populate_existing=True)
    )
    plot = result.scalar_one_or_none()
    if plot is None:
        raise NotFound(f"Plot {address.slot} not found on floor {address.floor_id}")
    return plot


async def place_pot(db: AsyncSession, player_id: UUID, request: PlacePotRequest) -> PlotView:
    """Move a pot from inventory onto an empty-potted plot."""
    async with transaction(db):
        pot = await db.get(InventoryPot, request.pot_id, populate_existing=True)
        if pot is None or pot.player_id != player_id:
            raise NotFound("Pot not found in inventory")

        plot = await get_owned_plot_at(db, player_id, request)
        if plot.pot_id is not None:
            raise PreconditionFailed("Plot already has a pot")

        result = await db.execute(
            update(Plot)
            .where(Plot.id == plot.id, Plot.pot_id.is_(None))
            .values(
                pot_id=pot.id,
                pot_type=pot.pot_type,
                pot_speed_mult=pot.speed_mult,
                pot_yield_mult=pot.yield_mult,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise ConcurrencyConflict("Plot changed, please retry")

        deleted = await db.execute(
            delete(InventoryPot)
            .where(InventoryPot.id == pot.id, InventoryPot.player_id == player_id)
            .execution_options(synchronize_session=False)
        )
        if deleted.rowcount != 1:
            raise ConcurrencyConflict()

        await action_log.record_action(
            db,
            player_id,
            "place_pot",
            {"floor_id": request.floor_id, "slot": request.slot, "pot_type": pot.pot_type},
        )

    await db.refresh(plot)
    return PlotView.model_validate(plot)


async def plant(
    db: AsyncSession, player_id: UUID, request: PlantRequest, now: int | None = None
) -> PlotView:
    """Plant an immature seed into an empty potted plot.

    ``mature_at`` is fixed here from the seed class and the pot's speed.
    """
    if not is_valid_tier(request.mutation):
        raise InvalidRequest(f"Unknown mutation tier {request.mutation!r}")

    async with transaction(db):
        seed = await db.get(InventorySeed, request.seed_id, populate_existing=True)
        if seed is None or seed.player_id != player_id:
            raise NotFound("Seed not found in inventory")
        if seed.is_mature:
            raise PreconditionFailed("Only unplanted (immature) seeds can be planted")

        plot = await get_owned_plot_at(db, player_id, request)
        if plot.pot_id is None:
            raise PreconditionFailed("Plot has no pot")
        if plot.stage != PlotStage.EMPTY:
            raise PreconditionFailed("Plot is busy", stage=plot.stage)

        planted_at = now if now is not None else now_ms()
        mature_at = planted_at + growth_duration_ms(seed.seed_class, plot.pot_speed_mult or 1.0)
        mutation = request.mutation or seed.mutation

        result = await db.execute(
            update(Plot)
            .where(
                Plot.id == plot.id,
                Plot.stage == PlotStage.EMPTY.value,
                Plot.pot_id.is_not(None),
            )
            .values(
                seed_class=seed.seed_class,
                mutation=mutation,
                base_price=seed.base_price,
                planted_at=planted_at,
                mature_at=mature_at,
                stage=PlotStage.PLANTED.value,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise ConcurrencyConflict("Plot changed, please retry")

        deleted = await db.execute(
            delete(InventorySeed)
            .where(
                InventorySeed.id == seed.id,
                InventorySeed.player_id == player_id,
                InventorySeed.is_mature.is_(False),
            )
            .execution_options(synchronize_session=False)
        )
        if deleted.rowcount != 1:
            raise ConcurrencyConflict()

        await action_log.record_action(
            db,
            player_id,
            "plant",
            {
                "floor_id": request.floor_id,
                "slot": request.slot,
                "seed_class": seed.seed_class,
                "mutation": mutation,
                "mature_at": mature_at,
            },
        )

    await db.refresh(plot)
    return PlotView.model_validate(plot)


async def take_mature_plot(db: AsyncSession, plot: Plot, player_id: UUID) -> InventorySeed | None:
    """Clear a mature, unlocked plot and give its seed to ``player_id``.

    Returns the new mature seed, or None if the plot was no longer mature
    and unlocked at write time. Caller owns the transaction.
    """
    result = await db.execute(
        update(Plot)
        .where(
            Plot.id == plot.id,
            Plot.stage == PlotStage.MATURE.value,
            Plot.locked.is_(False),
        )
        .values(**_CLEARED_SEED_FIELDS)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        return None

    seed = InventorySeed(
        player_id=player_id,
        seed_class=plot.seed_class,
        base_price=plot.base_price,
        is_mature=True,
        mutation=plot.mutation,
    )
    db.add(seed)
    await db.flush()
    return seed


async def harvest(db: AsyncSession, player_id: UUID, plot_id: UUID) -> HarvestResponse:
    async with transaction(db):
        plot = await get_owned_plot(db, player_id, plot_id)
        if plot.stage != PlotStage.MATURE:
            raise PreconditionFailed("Not mature yet", stage=plot.stage)
        if plot.locked:
            raise PlotLocked("Plot is locked")

        seed = await take_mature_plot(db, plot, player_id)
        if seed is None:
            raise ConcurrencyConflict("Plot changed, please retry")

        await action_log.record_action(
            db,
            player_id,
            "harvest",
            {"plot_id": plot_id, "seed_class": seed.seed_class, "mutation": seed.mutation},
        )

    await db.refresh(plot)
    return HarvestResponse(plot=PlotView.model_validate(plot), seed=SeedView.model_validate(seed))


async def harvest_all(db: AsyncSession, player_id: UUID) -> HarvestAllResponse:
    """Harvest every unlocked mature plot the player owns. Skips are not errors."""
    async with transaction(db):
        result = await db.execute(
            select(Plot)
            .join(Floor, Floor.id == Plot.floor_id)
            .where(
                Floor.player_id == player_id,
                Plot.stage == PlotStage.MATURE.value,
                Plot.locked.is_(False),
            )
            .order_by(Floor.idx, Plot.slot)
            .execution_options(populate_existing=True)
        )
        seeds = []
        for plot in result.scalars().all():
            seed = await take_mature_plot(db, plot, player_id)
            if seed is not None:
                seeds.append(seed)

        await action_log.record_action(db, player_id, "harvest_all", {"harvested": len(seeds)})

    return HarvestAllResponse(
        harvested=len(seeds), seeds=[SeedView.model_validate(s) for s in seeds]
    )


async def remove(db: AsyncSession, player_id: UUID, address: PlotAddress) -> PlotView:
    """Clear pot, occupant and lock from a plot. The pot and any seed are lost."""
    async with transaction(db):
        plot = await get_owned_plot_at(db, player_id, address)
        await db.execute(
            update(Plot)
            .where(Plot.id == plot.id)
            .values(
                pot_id=None,
                pot_type=None,
                pot_speed_mult=None,
                pot_yield_mult=None,
                locked=False,
                **_CLEARED_SEED_FIELDS,
            )
            .execution_options(synchronize_session=False)
        )
        await action_log.record_action(
            db, player_id, "remove_plot", {"floor_id": address.floor_id, "slot": address.slot}
        )

    await db.refresh(plot)
    return PlotView.model_validate(plot)


async def set_lock(db: AsyncSession, player_id: UUID, plot_id: UUID, locked: bool) -> PlotView:
    async with transaction(db):
        plot = await get_owned_plot(db, player_id, plot_id)
        await db.execute(
            update(Plot)
            .where(Plot.id == plot.id)
            .values(locked=locked)
            .execution_options(synchronize_session=False)
        )
        await action_log.record_action(
            db, player_id, "plot_lock", {"plot_id": plot_id, "locked": locked}
        )

    await db.refresh(plot)
    return PlotView.model_validate(plot)
