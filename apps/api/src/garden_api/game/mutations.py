"""Mutation tier ladder and the tier roller.

Two modes:
- independent draw (breeding, and gacha seeds below the pity thresholds)
- pity-forced draw (gacha only): rainbow at 90 pulls, red/gold at 10.
"""

import random
from dataclasses import dataclass


@dataclass(frozen=True)
class MutationTier:
    """A rarity tier with its value multiplier and independent-draw probability."""

    key: str
    multiplier: float
    probability: float


# Ordered by increasing rarity
MUTATION_TIERS: tuple[MutationTier, ...] = (
    MutationTier("green", 1.20, 0.10),
    MutationTier("blue", 1.50, 0.05),
    MutationTier("yellow", 2.00, 0.025),
    MutationTier("pink", 3.00, 0.0125),
    MutationTier("red", 4.00, 0.01),
    MutationTier("gold", 6.00, 0.0075),
    MutationTier("rainbow", 11.0, 0.005),
)

TIER_KEYS: tuple[str, ...] = tuple(t.key for t in MUTATION_TIERS)

RAINBOW = "rainbow"
RED_GOLD: tuple[str, str] = ("red", "gold")
# Outcomes that reset pity10
RARE_TIERS: frozenset[str] = frozenset({"red", "gold", RAINBOW})

PITY10_THRESHOLD = 10
PITY90_THRESHOLD = 90

_MULTIPLIERS = {t.key: t.multiplier for t in MUTATION_TIERS}
_rng = random.Random()


def mutation_multiplier(key: str | None) -> float:
    """Value multiplier for a tier key; unknown or missing keys are 1.0."""
    if key is None:
        return 1.0
    return _MULTIPLIERS.get(key, 1.0)


def is_valid_tier(key: str | None) -> bool:
    return key is None or key in _MULTIPLIERS


def roll_mutation_tier(rng: random.Random | None = None) -> str | None:
    """Independent draw: walk the ladder accumulating probabilities.

    Returns the first tier whose cumulative probability exceeds the draw,
    or None (no tier) for the remaining ~79%.
    """
    r = (rng or _rng).random()
    acc = 0.0
    for tier in MUTATION_TIERS:
        acc += tier.probability
        if r < acc:
            return tier.key
    return None


def roll_red_or_gold(rng: random.Random | None = None) -> str:
    return RED_GOLD[0] if (rng or _rng).random() < 0.5 else RED_GOLD[1]


def rainbow_due(pity90: int) -> bool:
    """Whether the pull about to happen reaches the pity90 threshold."""
    return pity90 + 1 >= PITY90_THRESHOLD


def roll_pity_mutation(pity10: int, pity90: int, rng: random.Random | None = None) -> str | None:
    """Pity-forced draw for the pull about to happen.

    ``pity10``/``pity90`` are the counters before this pull; the pull counts
    toward both thresholds.
    """
    if rainbow_due(pity90):
        return RAINBOW
    if pity10 + 1 >= PITY10_THRESHOLD:
        return roll_red_or_gold(rng)
    return roll_mutation_tier(rng)


def advance_pity(pity10: int, pity90: int, mutation: str | None) -> tuple[int, int]:
    """Counters after a pull that produced ``mutation``.

    Both increment every pull; red/gold/rainbow reset pity10, rainbow also
    resets pity90.
    """
    pity10 += 1
    pity90 += 1
    if mutation in RARE_TIERS:
        pity10 = 0
    if mutation == RAINBOW:
        pity90 = 0
    return pity10, pity90
