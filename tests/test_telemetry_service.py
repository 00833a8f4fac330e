"""
Tests for TelemetryService.
"""

from unittest.mock import MagicMock

import pytest

from repositories.global_stats_repository import GlobalStatsRepository
from services.telemetry_service import TelemetryService


@pytest.mark.asyncio
async def test_counts_persist(temp_db_path):
    service = TelemetryService(GlobalStatsRepository(temp_db_path))

    await service.increment_executed()
    await service.increment_executed()
    await service.increment_failed()

    assert await service.get_stats() == {"commands_executed": 2, "commands_failed": 1}


@pytest.mark.asyncio
async def test_development_mode_skips_failures_only(temp_db_path):
    service = TelemetryService(GlobalStatsRepository(temp_db_path), development_mode=True)

    await service.increment_executed()
    await service.increment_failed()

    assert await service.get_stats() == {"commands_executed": 1, "commands_failed": 0}


@pytest.mark.asyncio
async def test_repository_errors_are_logged_not_raised(caplog):
    repo = MagicMock()
    repo.increment_executed.side_effect = RuntimeError("disk full")
    repo.increment_failed.side_effect = RuntimeError("disk full")
    service = TelemetryService(repo)

    await service.increment_executed()
    await service.increment_failed()

    assert "Failed to record executed command" in caplog.text
    assert "Failed to record failed command" in caplog.text
