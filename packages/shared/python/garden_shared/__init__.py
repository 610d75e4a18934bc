"""Shared growth rules for GardenBred."""

from garden_shared.growth import (
    ACTIVE_STAGES,
    BASIC_CLASSES,
    BASIC_GROWTH_MS,
    DEFAULT_GROWTH_MS,
    PlotStage,
    growing_threshold,
    growth_duration_ms,
    next_stage,
    now_ms,
)

__version__ = "0.1.0"
__all__ = [
    "ACTIVE_STAGES",
    "BASIC_CLASSES",
    "BASIC_GROWTH_MS",
    "DEFAULT_GROWTH_MS",
    "PlotStage",
    "growing_threshold",
    "growth_duration_ms",
    "next_stage",
    "now_ms",
]
