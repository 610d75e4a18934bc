"""Plot growth timing used by the API (planting) and the worker (stage ticks).

Timestamps are integer epoch milliseconds throughout.
"""

import math
import time
from enum import StrEnum


class PlotStage(StrEnum):
    """Growth stage of a plot."""

    EMPTY = "empty"
    PLANTED = "planted"
    GROWING = "growing"
    MATURE = "mature"


# The four elemental classes sold in the shop at the base price
BASIC_CLASSES: frozenset[str] = frozenset({"fire", "water", "wind", "earth"})

BASIC_GROWTH_MS = 5 * 60 * 1000
DEFAULT_GROWTH_MS = 10 * 60 * 1000

ACTIVE_STAGES: tuple[PlotStage, ...] = (PlotStage.PLANTED, PlotStage.GROWING)


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def growth_duration_ms(seed_class: str, speed_mult: float = 1.0) -> int:
    """Growth duration for a class in a pot with the given speed multiplier."""
    base = BASIC_GROWTH_MS if seed_class in BASIC_CLASSES else DEFAULT_GROWTH_MS
    return math.floor(base * speed_mult)


def growing_threshold(planted_at: int, mature_at: int) -> int:
    """Timestamp at which a planted plot becomes growing (half-way)."""
    return planted_at + (mature_at - planted_at) // 2


def next_stage(stage: str, planted_at: int | None, mature_at: int | None, now: int) -> PlotStage:
    """Return the stage a plot should be in at ``now``.

    Advances at most one step per call so ``growing`` is never skipped;
    callers chain calls to catch up an overdue plot. Stages other than
    planted/growing are returned as-is.
    """
    current = PlotStage(stage)
    if current not in ACTIVE_STAGES or planted_at is None or mature_at is None:
        return current

    if current == PlotStage.PLANTED:
        if now >= growing_threshold(planted_at, mature_at):
            return PlotStage.GROWING
        return current

    if now >= mature_at:
        return PlotStage.MATURE
    return current
