"""Visit repository - browsing other players' floors and stealing."""

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.database import transaction
from garden_api.errors import InvalidRequest, NotFound
from garden_api.game.economy import trap_penalty
from garden_api.models import Floor, Player
from garden_api.repositories import action_log
from garden_api.repositories import coins as coins_repo
from garden_api.repositories import floor as floor_repo
from garden_api.repositories import plot as plot_repo
from garden_api.schemas import (
    FloorDetail,
    PlotView,
    SeedView,
    StealOutcome,
    StealRequest,
    StealResponse,
    VisitFloor,
    VisitPlayer,
)
from garden_shared import PlotStage

VISIT_PLAYER_LIMIT = 50


async def list_players(db: AsyncSession, limit: int = VISIT_PLAYER_LIMIT) -> list[VisitPlayer]:
    """Most recently created players first."""
    result = await db.execute(
        select(Player.id, Player.username).order_by(Player.created_at.desc()).limit(limit)
    )
    return [VisitPlayer(id=row.id, username=row.username) for row in result]


async def list_player_floors(db: AsyncSession, player_id: UUID) -> list[VisitFloor]:
    if await db.get(Player, player_id) is None:
        raise NotFound(f"Player {player_id} not found")
    result = await db.execute(
        select(Floor.id, Floor.idx, Floor.trap_count)
        .where(Floor.player_id == player_id)
        .order_by(Floor.idx.asc())
    )
    return [VisitFloor(id=row.id, idx=row.idx, trap_count=row.trap_count) for row in result]


async def get_floor_detail(db: AsyncSession, floor_id: UUID) -> FloorDetail:
    floor = await floor_repo.get_floor(db, floor_id)
    owner = await db.scalar(select(Player.username).where(Player.id == floor.player_id))
    return FloorDetail(
        id=floor.id,
        idx=floor.idx,
        trap_count=floor.trap_count,
        player_id=floor.player_id,
        owner_username=owner,
        plots=[PlotView.model_validate(p) for p in floor.plots],
    )


async def _trigger_trap(db: AsyncSession, floor_id: UUID) -> bool:
    """Use one trap on the floor if any are left."""
    result = await db.execute(
        update(Floor)
        .where(Floor.id == floor_id, Floor.trap_count > 0)
        .values(trap_count=Floor.trap_count - 1)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


async def steal(db: AsyncSession, attacker_id: UUID, request: StealRequest) -> StealResponse:
    """Attempt to take a mature seed from another player's plot.

    A floor with traps left always springs one first: the attacker pays 5% of
    their coins (at least 1) and the plot is not looked at. Only an untrapped
    floor gets its plot inspected. Trapped and failed attempts are normal
    responses, not errors.
    """
    if request.target_player_id == attacker_id:
        raise InvalidRequest("Cannot steal from yourself")

    async with transaction(db):
        target_floor = await db.get(Floor, request.floor_id, populate_existing=True)
        if target_floor is None or target_floor.player_id != request.target_player_id:
            raise NotFound("Floor not found")

        log_payload = {
            "target_player_id": request.target_player_id,
            "floor_id": request.floor_id,
            "plot_id": request.plot_id,
        }

        if await _trigger_trap(db, target_floor.id):
            penalty = trap_penalty(await coins_repo.get_coins(db, attacker_id))
            coins = await coins_repo.apply_penalty(db, attacker_id, penalty)
            await action_log.record_action(
                db, attacker_id, "trap_triggered", {**log_payload, "penalty": penalty}
            )
            return StealResponse(
                ok=False,
                outcome=StealOutcome.TRAPPED,
                reason="trap",
                penalty=penalty,
                coins=coins,
            )

        plot = await plot_repo.get_plot(db, request.plot_id)
        if plot.floor_id != target_floor.id:
            raise NotFound("Plot not found")

        reason = None
        seed = None
        if plot.stage != PlotStage.MATURE:
            reason = "not mature"
        elif plot.locked:
            reason = "locked"
        else:
            seed = await plot_repo.take_mature_plot(db, plot, attacker_id)
            if seed is None:
                reason = "not mature"

        coins = await coins_repo.get_coins(db, attacker_id)
        if seed is None:
            await action_log.record_action(
                db, attacker_id, "steal_fail", {**log_payload, "reason": reason}
            )
            return StealResponse(
                ok=False, outcome=StealOutcome.FAILED, reason=reason, coins=coins
            )

        await action_log.record_action(
            db,
            attacker_id,
            "steal_success",
            {**log_payload, "seed_class": seed.seed_class, "mutation": seed.mutation},
        )
        return StealResponse(
            ok=True,
            outcome=StealOutcome.STOLEN,
            coins=coins,
            seed=SeedView.model_validate(seed),
        )
