"""Gacha repository - queue persistence, state snapshots and rolls.

A roll is one transaction: consume the exact mature seeds selected, issue
the reward, advance the profile and append the history record. The profile
row is version-checked so two rolls racing on the same profile cannot both
commit.
"""

import logging
import random
from collections.abc import Callable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.config import settings
from garden_api.database import transaction
from garden_api.errors import ConcurrencyConflict, NotEnoughMaterials
from garden_api.game.class_weights import get_class_weights
from garden_api.game.economy import standard_base_price
from garden_api.game.gacha import (
    Requirement,
    apply_pull,
    extend_queue,
    preview,
    queue_target_length,
    requirement_at,
)
from garden_api.models import GachaProfile, GachaRoll, InventorySeed
from garden_api.repositories import action_log, catalog, inventory
from garden_api.repositories import coins as coins_repo
from garden_api.schemas import (
    GachaRollRecord,
    GachaState,
    RequirementView,
    RewardView,
    RollResponse,
)

logger = logging.getLogger(__name__)


def _class_picker(rng: random.Random | None = None) -> Callable[[], str]:
    table = get_class_weights()
    return lambda: table.pick(rng)


def _requirement_view(requirement: Requirement) -> RequirementView:
    return RequirementView(
        step=requirement.step, seed_class=requirement.seed_class, count=requirement.count
    )


async def get_profile(db: AsyncSession, player_id: UUID) -> GachaProfile | None:
    return await db.get(GachaProfile, player_id, populate_existing=True)


def ensure_queue(
    profile: GachaProfile, need: int, pick_class: Callable[[], str]
) -> list[str]:
    """Grow the profile queue to cover ``need`` entries (and the lookahead).

    The profile is only marked dirty when entries were appended.
    """
    queue = list(profile.queue or [])
    target = queue_target_length(profile.step, need, settings.gacha_queue_lookahead)
    extended = extend_queue(queue, target, pick_class)
    if extended is not queue:
        profile.queue = extended
    return extended


async def ensure_profile(
    db: AsyncSession, player_id: UUID, rng: random.Random | None = None
) -> GachaProfile:
    """Load the player's profile, creating it with a starter queue if missing."""
    profile = await get_profile(db, player_id)
    if profile is None:
        profile = GachaProfile(
            player_id=player_id, total_pulls=0, pity10=0, pity90=0, step=0, queue=[]
        )
        ensure_queue(profile, settings.gacha_min_queue_length, _class_picker(rng))
        db.add(profile)
        await db.flush()
    return profile


def build_state(
    profile: GachaProfile,
    queue: list[str],
    counts: dict[str, int],
    pick_class: Callable[[], str],
) -> GachaState:
    step = profile.step
    return GachaState(
        total_pulls=profile.total_pulls,
        pity10=profile.pity10,
        pity90=profile.pity90,
        step=step,
        current=_requirement_view(requirement_at(queue, step, pick_class)),
        next=[
            _requirement_view(r)
            for r in preview(queue, step, settings.gacha_preview_size, pick_class)
        ],
        inv_counts=counts,
    )


async def get_state(
    db: AsyncSession, player_id: UUID, rng: random.Random | None = None
) -> GachaState:
    """Current requirement, upcoming preview and mature-seed counts.

    Extends the persisted queue first if the preview would run past its end.
    """
    pick_class = _class_picker(rng)
    async with transaction(db):
        profile = await ensure_profile(db, player_id, rng)
        queue = ensure_queue(profile, profile.step + settings.gacha_preview_size + 4, pick_class)
        counts = await inventory.mature_counts(db, player_id)
    return build_state(profile, queue, counts, pick_class)


async def _count_mature(db: AsyncSession, player_id: UUID, seed_class: str) -> int:
    counts = await inventory.mature_counts(db, player_id)
    return counts.get(seed_class, 0)


async def _pick_mature_seed_ids(
    db: AsyncSession, player_id: UUID, seed_class: str, count: int
) -> list[UUID]:
    result = await db.execute(
        select(InventorySeed.id)
        .where(
            InventorySeed.player_id == player_id,
            InventorySeed.is_mature.is_(True),
            InventorySeed.seed_class == seed_class,
        )
        .order_by(InventorySeed.base_price.asc())
        .limit(count)
    )
    return list(result.scalars().all())


async def roll(
    db: AsyncSession, player_id: UUID, rng: random.Random | None = None
) -> RollResponse:
    """Consume the current requirement and resolve one pull.

    Raises NotEnoughMaterials (need/have) if the player lacks the seeds, and
    ConcurrencyConflict if the selected seeds or the profile changed before
    commit. Nothing is written in either case.
    """
    pick_class = _class_picker(rng)

    async with transaction(db):
        profile = await ensure_profile(db, player_id, rng)
        queue = ensure_queue(profile, profile.step + settings.gacha_queue_lookahead, pick_class)
        requirement = requirement_at(queue, profile.step, pick_class)

        have = await _count_mature(db, player_id, requirement.seed_class)
        if have < requirement.count:
            raise NotEnoughMaterials(
                "Not enough mature seeds",
                need={"seed_class": requirement.seed_class, "count": requirement.count},
                have=have,
            )

        seed_ids = await _pick_mature_seed_ids(
            db, player_id, requirement.seed_class, requirement.count
        )
        if len(seed_ids) < requirement.count:
            raise ConcurrencyConflict()
        await inventory.consume_seeds(db, player_id, seed_ids)

        prices = await catalog.get_catalog_prices(db)
        pull = apply_pull(
            total_pulls=profile.total_pulls,
            pity10=profile.pity10,
            pity90=profile.pity90,
            step=profile.step,
            queue=queue,
            pick_class=pick_class,
            standard_price=lambda c: standard_base_price(c, prices.get(c)),
            fresh_queue_size=settings.gacha_fresh_queue_size,
            rng=rng,
            pity_enabled=settings.gacha_pity_enabled,
        )
        reward = pull.reward

        if reward.is_seed:
            await inventory.add_seed(
                db,
                player_id,
                reward.seed_class,
                reward.amount,
                is_mature=reward.is_mature,
                mutation=reward.mutation,
            )
            coins = await coins_repo.get_coins(db, player_id)
        else:
            coins = await coins_repo.credit_coins(db, player_id, reward.amount)

        profile.total_pulls = pull.pull_index
        profile.pity10 = pull.pity10
        profile.pity90 = pull.pity90
        profile.step = pull.step
        profile.queue = pull.queue

        db.add(
            GachaRoll(
                player_id=player_id,
                consumed_class=requirement.seed_class,
                consumed_count=requirement.count,
                reward_type=reward.reward_type.value,
                out_class=reward.seed_class,
                out_mutation=reward.mutation,
                out_base=reward.amount,
                pull_index=pull.pull_index,
                pity10_after=pull.pity10,
                pity90_after=pull.pity90,
                step_after=pull.step,
            )
        )
        await action_log.record_action(
            db,
            player_id,
            "gacha_roll",
            {
                "consumed": {"seed_class": requirement.seed_class, "count": requirement.count},
                "outcome": reward.outcome,
                "reward_type": reward.reward_type,
                "seed_class": reward.seed_class,
                "mutation": reward.mutation,
                "amount": reward.amount,
                "pull_index": pull.pull_index,
            },
        )
        await db.flush()

    if pull.queue_reset:
        logger.info("Gacha queue reset for player %s after rainbow at pull %d", player_id, pull.pull_index)

    return RollResponse(
        pull_index=pull.pull_index,
        consumed=_requirement_view(requirement),
        reward=RewardView(
            outcome=reward.outcome,
            type=reward.reward_type,
            seed_class=reward.seed_class,
            mutation=reward.mutation,
            amount=reward.amount,
        ),
        pity10=pull.pity10,
        pity90=pull.pity90,
        step=pull.step,
        queue_reset=pull.queue_reset,
        coins=coins,
        gacha=await get_state(db, player_id, rng),
    )


async def history(db: AsyncSession, player_id: UUID, limit: int = 50) -> list[GachaRollRecord]:
    """Roll records, newest first."""
    result = await db.execute(
        select(GachaRoll)
        .where(GachaRoll.player_id == player_id)
        .order_by(GachaRoll.pull_index.desc())
        .limit(limit)
    )
    return [GachaRollRecord.model_validate(r) for r in result.scalars().all()]


