"""Gacha rules: requirement queue, cost curve and reward resolution.

Two probability systems are layered here and kept apart:
- the reward-type table (``pick_outcome``) decides coins / planted seed /
  mature seed / forced red-gold / forced rainbow;
- the mutation roller (``garden_api.game.mutations``) decides the tier of a
  seed reward whose type does not force one, honoring pity counters.

Everything in this module is pure; persistence lives in the gacha repository.
"""

import random
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from garden_api.game.mutations import (
    RAINBOW,
    advance_pity,
    rainbow_due,
    roll_pity_mutation,
    roll_red_or_gold,
)

_rng = random.Random()

COIN_REWARD_MIN = 1
COIN_REWARD_MAX = 1_000_000
MATURE_VALUE_PER_PULL = 10_000
RAINBOW_VALUE_PER_PULL = 100_000


class GachaOutcome(StrEnum):
    """Entries of the fixed-rate reward-type table."""

    COINS = "coins"
    SEED_PLANTED = "seed_planted"
    SEED_MATURE = "seed_mature"
    REDGOLD = "redgold"
    RAINBOW = "rainbow"


class RewardType(StrEnum):
    """What the player actually receives."""

    COINS = "coins"
    SEED_PLANTED = "seed_planted"
    SEED_MATURE = "seed_mature"


# Drawn in this order by cumulative subtraction
GACHA_RATES: tuple[tuple[GachaOutcome, float], ...] = (
    (GachaOutcome.COINS, 0.30),
    (GachaOutcome.SEED_PLANTED, 0.30),
    (GachaOutcome.SEED_MATURE, 0.30),
    (GachaOutcome.REDGOLD, 0.09),
    (GachaOutcome.RAINBOW, 0.01),
)


@dataclass(frozen=True)
class Requirement:
    """What must be consumed to pull at a given step."""

    step: int
    seed_class: str
    count: int


@dataclass(frozen=True)
class GachaReward:
    outcome: GachaOutcome
    reward_type: RewardType
    seed_class: str | None
    mutation: str | None
    # Seed base price, or the coin amount for coin rewards
    amount: int

    @property
    def is_seed(self) -> bool:
        return self.reward_type != RewardType.COINS

    @property
    def is_mature(self) -> bool:
        return self.reward_type == RewardType.SEED_MATURE


@dataclass(frozen=True)
class PullResult:
    """Reward plus the profile fields to persist after the pull."""

    reward: GachaReward
    pull_index: int
    pity10: int
    pity90: int
    step: int
    queue: list[str]
    queue_reset: bool


def cost_for_step(step: int) -> int:
    """Mature seeds consumed at ``step``: 1, 3, 5, 7, ..."""
    return 2 * step + 1


def pick_outcome(rng: random.Random | None = None) -> GachaOutcome:
    r = (rng or _rng).random()
    for outcome, rate in GACHA_RATES:
        r -= rate
        if r <= 0:
            return outcome
    return GachaOutcome.SEED_PLANTED


def queue_target_length(step: int, need: int, lookahead: int) -> int:
    return max(need, step + lookahead)


def extend_queue(queue: list[str], target_len: int, pick_class: Callable[[], str]) -> list[str]:
    """Return ``queue`` padded with fresh draws up to ``target_len``.

    The input list is not modified; an already long enough queue comes back
    as the same object so callers can tell whether anything was appended.
    """
    if len(queue) >= target_len:
        return queue
    extended = list(queue)
    while len(extended) < target_len:
        extended.append(pick_class())
    return extended


def fresh_queue(size: int, pick_class: Callable[[], str]) -> list[str]:
    return [pick_class() for _ in range(size)]


def requirement_at(queue: list[str], step: int, pick_class: Callable[[], str]) -> Requirement:
    seed_class = queue[step] if step < len(queue) else pick_class()
    return Requirement(step=step, seed_class=seed_class, count=cost_for_step(step))


def preview(
    queue: list[str], step: int, size: int, pick_class: Callable[[], str]
) -> list[Requirement]:
    """The ``size`` requirements following the current one."""
    return [requirement_at(queue, step + i, pick_class) for i in range(1, size + 1)]


def mature_reward_value(pull_index: int, mutation: str | None) -> int:
    if mutation == RAINBOW:
        return pull_index * RAINBOW_VALUE_PER_PULL
    return pull_index * MATURE_VALUE_PER_PULL


def resolve_reward(
    outcome: GachaOutcome,
    pull_index: int,
    pity10: int,
    pity90: int,
    pick_class: Callable[[], str],
    standard_price: Callable[[str], int],
    rng: random.Random | None = None,
    pity_enabled: bool = True,
) -> GachaReward:
    """Turn a reward-type outcome into a concrete reward.

    ``pity10``/``pity90`` are the counters before this pull. With pity
    enabled, plain seed rewards take their tier from the pity-forced roller
    and a red/gold reward becomes rainbow when pity90 is due; otherwise
    plain seed rewards carry no tier.
    """
    rng = rng or _rng

    if outcome == GachaOutcome.COINS:
        amount = rng.randint(COIN_REWARD_MIN, COIN_REWARD_MAX)
        return GachaReward(outcome, RewardType.COINS, None, None, amount)

    seed_class = pick_class()

    if outcome == GachaOutcome.RAINBOW:
        mutation = RAINBOW
    elif outcome == GachaOutcome.REDGOLD:
        # A due pity90 rainbow outranks the red/gold tier
        if pity_enabled and rainbow_due(pity90):
            mutation = RAINBOW
        else:
            mutation = roll_red_or_gold(rng)
    elif pity_enabled:
        mutation = roll_pity_mutation(pity10, pity90, rng)
    else:
        mutation = None

    if outcome == GachaOutcome.SEED_PLANTED:
        return GachaReward(
            outcome, RewardType.SEED_PLANTED, seed_class, mutation, standard_price(seed_class)
        )

    return GachaReward(
        outcome,
        RewardType.SEED_MATURE,
        seed_class,
        mutation,
        mature_reward_value(pull_index, mutation),
    )


def apply_pull(
    total_pulls: int,
    pity10: int,
    pity90: int,
    step: int,
    queue: list[str],
    pick_class: Callable[[], str],
    standard_price: Callable[[str], int],
    fresh_queue_size: int,
    rng: random.Random | None = None,
    pity_enabled: bool = True,
) -> PullResult:
    """Resolve one pull against the current profile values.

    A rainbow-tier reward sends the player back to step 0 with a freshly
    drawn queue.
    """
    pull_index = total_pulls + 1
    reward = resolve_reward(
        pick_outcome(rng),
        pull_index,
        pity10,
        pity90,
        pick_class,
        standard_price,
        rng=rng,
        pity_enabled=pity_enabled,
    )
    new_pity10, new_pity90 = advance_pity(pity10, pity90, reward.mutation)

    if reward.mutation == RAINBOW:
        return PullResult(
            reward=reward,
            pull_index=pull_index,
            pity10=new_pity10,
            pity90=new_pity90,
            step=0,
            queue=fresh_queue(fresh_queue_size, pick_class),
            queue_reset=True,
        )

    return PullResult(
        reward=reward,
        pull_index=pull_index,
        pity10=new_pity10,
        pity90=new_pity90,
        step=step + 1,
        queue=list(queue),
        queue_reset=False,
    )
