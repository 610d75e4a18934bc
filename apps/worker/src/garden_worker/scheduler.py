"""Growth scheduler - periodically advances planted and growing plots."""

import asyncio
import logging
import signal
from collections.abc import Callable
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from garden_shared import PlotStage, next_stage, now_ms
from garden_worker.config import settings
from garden_worker.database import get_session_factory

logger = logging.getLogger(__name__)


class GrowthScheduler:
    """Polls active plots and moves each through every stage it is due for.

    Every stage write is conditional on the stage that was read, so a plot
    harvested, stolen or removed in between is left alone. One failing plot
    does not stop the rest of the tick.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        tick_interval: float | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._session_factory = session_factory
        self._tick_interval = (
            tick_interval if tick_interval is not None else settings.tick_interval_seconds
        )
        self._clock = clock
        self._shutdown = False

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._session_factory = get_session_factory()
        return self._session_factory

    async def run(self) -> None:
        """Main run loop - tick until shutdown."""
        logger.info("Growth scheduler starting (tick every %.1fs)", self._tick_interval)
        self._setup_signal_handlers()

        while not self._shutdown:
            try:
                await self.tick()
            except Exception:
                logger.exception("Error in growth tick")

            if not self._shutdown:
                await asyncio.sleep(self._tick_interval)

        logger.info("Growth scheduler stopped")

    def _setup_signal_handlers(self) -> None:
        """Set up graceful shutdown on SIGINT/SIGTERM."""
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, self._handle_shutdown)

    def _handle_shutdown(self) -> None:
        """Handle shutdown signal."""
        logger.info("Shutdown signal received")
        self._shutdown = True

    async def tick(self, now: int | None = None) -> int:
        """Advance every active plot that is due. Returns how many plots moved."""
        now = now if now is not None else self._clock()
        advanced = 0

        for plot_id, stage, planted_at, mature_at in await self._load_active_plots():
            try:
                reached = await self._advance_due(plot_id, stage, planted_at, mature_at, now)
            except ValueError:
                logger.exception("Plot %s has an unknown stage %r", plot_id, stage)
                continue
            except Exception:
                logger.exception("Failed to advance plot %s", plot_id)
                continue
            if reached != stage:
                advanced += 1

        if advanced:
            logger.info("Advanced %d plot(s)", advanced)
        return advanced

    async def _advance_due(
        self,
        plot_id: Any,
        stage: str,
        planted_at: int | None,
        mature_at: int | None,
        now: int,
    ) -> str:
        """Apply every transition due at ``now`` in stage order.

        Each step is its own conditional write, so an overdue planted plot
        passes through growing on its way to mature. Returns the stage reached.
        """
        current = stage
        while True:
            new_stage = next_stage(current, planted_at, mature_at, now)
            if new_stage == current:
                return current
            if not await self._advance_plot(plot_id, current, new_stage):
                return current
            logger.debug("Plot %s: %s -> %s", plot_id, current, new_stage.value)
            current = new_stage.value

    async def _load_active_plots(self) -> list[tuple[Any, str, int | None, int | None]]:
        """Plots currently planted or growing."""
        async with self.session_factory() as session:
            result = await session.execute(
                text("""
                    SELECT id, stage, planted_at, mature_at
                    FROM plots
                    WHERE stage IN (:planted, :growing)
                """),
                {"planted": PlotStage.PLANTED.value, "growing": PlotStage.GROWING.value},
            )
            return [tuple(row) for row in result.fetchall()]

    async def _advance_plot(self, plot_id: Any, old_stage: str, new_stage: PlotStage) -> bool:
        """Write the new stage if the plot is still in ``old_stage``."""
        async with self.session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    text("""
                        UPDATE plots
                        SET stage = :new_stage
                        WHERE id = :plot_id AND stage = :old_stage
                    """),
                    {"new_stage": new_stage.value, "plot_id": plot_id, "old_stage": old_stage},
                )
        return result.rowcount == 1
