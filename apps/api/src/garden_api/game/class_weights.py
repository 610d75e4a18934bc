"""Configurable class-weight table feeding every weighted class draw.

The table is a JSON object ``{class: weight}`` on disk. It is re-read when
its mtime changes (checked at most every ``reload_seconds`` on access). A
reload that fails validation keeps the previous table in effect.
"""

import json
import logging
import math
import random
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_CLASS_WEIGHTS: dict[str, float] = {"fire": 1.0, "water": 1.0, "wind": 1.0, "earth": 1.0}

_rng = random.Random()


def parse_class_weights(raw: Any) -> dict[str, float]:
    """Validate a decoded table. Keys are lower-cased; non-positive weights dropped.

    Raises ValueError if nothing usable remains.
    """
    if not isinstance(raw, dict):
        raise ValueError("class weights must be a JSON object")

    weights: dict[str, float] = {}
    for key, value in raw.items():
        if isinstance(value, bool):
            continue
        try:
            weight = float(value)
        except (TypeError, ValueError):
            continue
        if math.isfinite(weight) and weight > 0:
            weights[str(key).lower()] = weight

    if not weights:
        raise ValueError("no positive weights")
    return weights


def pick_weighted_class(weights: dict[str, float], rng: random.Random | None = None) -> str:
    """Weighted draw by cumulative subtraction."""
    items = list(weights.items())
    total = sum(w for _, w in items)
    if not items or total <= 0:
        return "fire"
    r = (rng or _rng).random() * total
    for key, weight in items:
        r -= weight
        if r <= 0:
            return key
    return items[-1][0]


class ClassWeightTable:
    """Process-wide class weights with load/validate/swap semantics."""

    def __init__(
        self,
        path: str | Path,
        reload_seconds: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._path = Path(path)
        self._reload_seconds = reload_seconds
        self._clock = clock
        self._mtime: int | None = None
        self._checked_at: float | None = None
        self._weights = self._initial_load()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, float]:
        with self._path.open(encoding="utf-8") as f:
            return parse_class_weights(json.load(f))

    def _initial_load(self) -> dict[str, float]:
        try:
            self._mtime = self._path.stat().st_mtime_ns
            weights = self._read()
        except (OSError, ValueError) as exc:
            logger.error("Class weights load failed (%s), using defaults: %s", self._path, exc)
            return dict(DEFAULT_CLASS_WEIGHTS)
        logger.info("Loaded %d class weights from %s", len(weights), self._path)
        return weights

    def refresh(self, force: bool = False) -> bool:
        """Reload the file if it changed. Returns True if a new table was swapped in."""
        now = self._clock()
        if (
            not force
            and self._checked_at is not None
            and now - self._checked_at < self._reload_seconds
        ):
            return False
        self._checked_at = now

        try:
            mtime = self._path.stat().st_mtime_ns
        except OSError:
            return False
        if mtime == self._mtime and not force:
            return False
        self._mtime = mtime

        try:
            weights = self._read()
        except (OSError, ValueError) as exc:
            logger.error("Class weights reload failed, keeping previous table: %s", exc)
            return False

        self._weights = weights
        logger.info("Class weights reloaded: %d classes", len(weights))
        return True

    def snapshot(self) -> dict[str, float]:
        """Current weights (after a possible reload)."""
        self.refresh()
        return dict(self._weights)

    def classes(self) -> set[str]:
        return set(self.snapshot())

    def pick(self, rng: random.Random | None = None) -> str:
        return pick_weighted_class(self.snapshot(), rng)


_table: ClassWeightTable | None = None


def get_class_weights() -> ClassWeightTable:
    """Get or create the process-wide table from settings."""
    global _table
    if _table is None:
        from garden_api.config import settings

        _table = ClassWeightTable(
            settings.class_weights_path,
            reload_seconds=settings.class_weights_reload_seconds,
        )
    return _table


def set_class_weights(table: ClassWeightTable | None) -> None:
    """Replace the process-wide table (None re-creates it from settings on next use)."""
    global _table
    _table = table
