"""
Command execution counters backed by the global_stats table.
"""

import asyncio
import logging

from repositories.interfaces import IGlobalStatsRepository
from services.interfaces import ITelemetryCollector

logger = logging.getLogger("gate_bot.services.telemetry")


class TelemetryService(ITelemetryCollector):
    """
    Best-effort counters: persistence errors are logged, never raised.

    Failures are not counted in development mode.
    """

    def __init__(self, stats_repo: IGlobalStatsRepository, development_mode: bool = False):
        self.stats_repo = stats_repo
        self.development_mode = development_mode

    async def increment_executed(self) -> None:
        try:
            await asyncio.to_thread(self.stats_repo.increment_executed)
        except Exception as exc:
            logger.error(f"Failed to record executed command: {exc}", exc_info=True)

    async def increment_failed(self) -> None:
        if self.development_mode:
            return
        try:
            await asyncio.to_thread(self.stats_repo.increment_failed)
        except Exception as exc:
            logger.error(f"Failed to record failed command: {exc}", exc_info=True)

    async def get_stats(self) -> dict:
        return await asyncio.to_thread(self.stats_repo.get_stats)
