"""
Pytest fixtures for tests.

Every fixture builds fresh state (registry, rate limiter registry, database
file), so no rate-limit bucket or command toggle leaks between tests.
"""

import pytest

from domain.models.interaction import InteractionContext
from domain.models.permission import Permission
from infrastructure.service_container import ServiceConfig, ServiceContainer
from services.interfaces import IResponseChannel


# =============================================================================
# CENTRALIZED CONSTANTS
# =============================================================================

TEST_GUILD_ID = 12345
"""Standard guild ID for single-guild tests."""

TEST_GUILD_ID_SECONDARY = 67890
"""Secondary guild ID for multi-guild isolation tests."""

OWNER_ID = 1000
HELPER_ID = 2000
USER_ID = 3000
OTHER_USER_ID = 3001

ALL_PERMISSIONS = frozenset(Permission)


class RecordingChannel(IResponseChannel):
    """Response channel that records every reply instead of sending it."""

    def __init__(self, fail: bool = False):
        self.replies: list[tuple[str, bool]] = []
        self.fail = fail

    async def reply(self, text: str, *, ephemeral: bool = False) -> None:
        if self.fail:
            raise RuntimeError("transport down")
        self.replies.append((text, ephemeral))

    @property
    def last_text(self) -> str | None:
        return self.replies[-1][0] if self.replies else None

    @property
    def last_ephemeral(self) -> bool | None:
        return self.replies[-1][1] if self.replies else None


def make_context(
    command_name: str,
    user_id: int = USER_ID,
    *,
    guild_id: int | None = TEST_GUILD_ID,
    bot_permissions=ALL_PERMISSIONS,
    member_permissions=ALL_PERMISSIONS,
    channel: RecordingChannel | None = None,
    options: dict | None = None,
) -> InteractionContext:
    """Build an InteractionContext with a RecordingChannel."""
    return InteractionContext(
        command_name=command_name,
        user_id=user_id,
        user_tag=f"user{user_id}",
        guild_id=guild_id,
        bot_permissions=frozenset(bot_permissions),
        member_permissions=None if member_permissions is None else frozenset(member_permissions),
        options=dict(options or {}),
        channel=channel or RecordingChannel(),
    )


@pytest.fixture
def temp_db_path(tmp_path):
    """Create a temporary database path (no schema)."""
    path = str(tmp_path / "temp.db")
    yield path


@pytest.fixture
def container(temp_db_path):
    """Fully wired ServiceContainer backed by a fresh database."""
    container = ServiceContainer(
        ServiceConfig(
            db_path=temp_db_path,
            owner_ids=[OWNER_ID],
            helper_ids=[HELPER_ID],
        )
    )
    container.initialize()
    return container


@pytest.fixture
def dispatcher(container):
    return container.dispatcher


@pytest.fixture
def command_registry(container):
    return container.command_registry


class FakeClock:
    """Controllable stand-in for time.monotonic (seconds)."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def millis(self) -> int:
        return int(self.now * 1000)


@pytest.fixture
def clock(monkeypatch):
    """Freeze the rate limiter's clock. For synchronous tests only."""
    clock = FakeClock()
    monkeypatch.setattr("utils.rate_limiter.time.monotonic", clock)
    return clock


@pytest.fixture
def limiter_clock(monkeypatch):
    """
    Freeze only the rate limiter's millisecond clock, leaving time.monotonic
    (and so the event loop) untouched. Use in async tests.
    """
    clock = FakeClock()
    monkeypatch.setattr("utils.rate_limiter._now_ms", clock.millis)
    return clock
