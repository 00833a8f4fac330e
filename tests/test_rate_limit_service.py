"""
Tests for CommandRateLimitPolicy evaluation.
"""

import pytest

from domain.models.command import CommandRateLimitPolicy, ScopeLimit
from services import error_codes
from services.rate_limit_service import RateLimitService, format_wait_message
from tests.conftest import TEST_GUILD_ID, TEST_GUILD_ID_SECONDARY
from utils.rate_limiter import RateLimiterRegistry, RateLimitScope


@pytest.fixture
def registry():
    return RateLimiterRegistry()


@pytest.fixture
def service(registry):
    return RateLimitService(registry)


def _count(registry, command, scope, identifier):
    manager = registry.get(command, scope)
    if manager is None:
        return 0
    bucket = manager.get(identifier)
    return 0 if bucket is None else bucket.count


class TestNoPolicy:
    def test_none_policy_passes(self, service, registry):
        assert service.evaluate("ping", None, user_id=1, guild_id=TEST_GUILD_ID)
        assert registry.get("ping", RateLimitScope.USER) is None

    def test_empty_policy_passes_without_state(self, service, registry):
        assert service.evaluate("ping", CommandRateLimitPolicy(), user_id=1)
        assert registry.get("ping", RateLimitScope.GLOBAL) is None


class TestUserScope:
    def test_user_limit_one_per_minute(self, service, clock):
        """Second call within the window is rejected; a call after it proceeds."""
        policy = CommandRateLimitPolicy(user_scope=ScopeLimit(limit=1, window_ms=60_000))

        first = service.evaluate("cmd", policy, user_id=42, guild_id=TEST_GUILD_ID)
        clock.advance(10)
        second = service.evaluate("cmd", policy, user_id=42, guild_id=TEST_GUILD_ID)
        clock.advance(50)
        third = service.evaluate("cmd", policy, user_id=42, guild_id=TEST_GUILD_ID)

        assert first
        assert not second
        assert second.error_code == error_codes.RATE_LIMITED
        assert second.details["scope"] == "user"
        assert 0 < second.details["remaining_ms"] <= 60_000
        assert second.details["remaining_ms"] == 50_000
        assert third

    def test_user_message_includes_wait(self, service, clock):
        policy = CommandRateLimitPolicy(user_scope=ScopeLimit.per_seconds(1, 90))

        service.evaluate("cmd", policy, user_id=42)
        result = service.evaluate("cmd", policy, user_id=42)

        assert result.error == (
            "This command is currently rate-limited for you. "
            "Please try again in 1 minute 30 seconds."
        )

    def test_users_are_independent(self, service, clock):
        policy = CommandRateLimitPolicy(user_scope=ScopeLimit(limit=1, window_ms=60_000))

        assert service.evaluate("cmd", policy, user_id=1)
        assert service.evaluate("cmd", policy, user_id=2)
        assert not service.evaluate("cmd", policy, user_id=1)

    def test_commands_are_independent(self, service, clock):
        policy = CommandRateLimitPolicy(user_scope=ScopeLimit(limit=1, window_ms=60_000))

        assert service.evaluate("a", policy, user_id=1)
        assert service.evaluate("b", policy, user_id=1)


class TestGuildScope:
    def test_guild_scope_keyed_by_guild(self, service, registry, clock):
        policy = CommandRateLimitPolicy(guild_scope=ScopeLimit(limit=1, window_ms=60_000))

        assert service.evaluate("cmd", policy, user_id=1, guild_id=TEST_GUILD_ID)
        assert service.evaluate("cmd", policy, user_id=1, guild_id=TEST_GUILD_ID_SECONDARY)
        blocked = service.evaluate("cmd", policy, user_id=2, guild_id=TEST_GUILD_ID)

        assert not blocked
        assert blocked.details["scope"] == "guild"
        assert "in this guild" in blocked.error

    def test_guild_scope_skipped_outside_guild(self, service, registry, clock):
        policy = CommandRateLimitPolicy(guild_scope=ScopeLimit(limit=1, window_ms=60_000))

        for _ in range(3):
            assert service.evaluate("cmd", policy, user_id=1, guild_id=None)

        assert registry.get("cmd", RateLimitScope.GUILD) is None


class TestStrictShortCircuit:
    def test_limited_global_scope_skips_later_scopes(self, service, registry, clock):
        policy = CommandRateLimitPolicy(
            global_scope=ScopeLimit(limit=1, window_ms=60_000),
            guild_scope=ScopeLimit(limit=5, window_ms=60_000, strict=False),
            user_scope=ScopeLimit(limit=5, window_ms=60_000),
        )
        assert service.evaluate("cmd", policy, user_id=1, guild_id=TEST_GUILD_ID)
        guild_before = _count(registry, "cmd", RateLimitScope.GUILD, TEST_GUILD_ID)
        user_before = _count(registry, "cmd", RateLimitScope.USER, 2)

        result = service.evaluate("cmd", policy, user_id=2, guild_id=TEST_GUILD_ID)

        assert not result
        assert result.details["scope"] == "global"
        assert "globally" in result.error
        assert _count(registry, "cmd", RateLimitScope.GUILD, TEST_GUILD_ID) == guild_before
        assert _count(registry, "cmd", RateLimitScope.USER, 2) == user_before
        assert registry.get("cmd", RateLimitScope.USER).get(2) is None

    def test_global_scope_keyed_by_command_name(self, service, registry, clock):
        policy = CommandRateLimitPolicy(global_scope=ScopeLimit(limit=2, window_ms=60_000))

        service.evaluate("cmd", policy, user_id=1)
        service.evaluate("cmd", policy, user_id=2)

        assert _count(registry, "cmd", RateLimitScope.GLOBAL, "cmd") == 2

    def test_earlier_strict_scopes_not_committed_when_later_scope_rejects(
        self, service, registry, clock
    ):
        policy = CommandRateLimitPolicy(
            global_scope=ScopeLimit(limit=10, window_ms=60_000),
            user_scope=ScopeLimit(limit=1, window_ms=60_000),
        )
        service.evaluate("cmd", policy, user_id=1)
        assert _count(registry, "cmd", RateLimitScope.GLOBAL, "cmd") == 1

        assert not service.evaluate("cmd", policy, user_id=1)

        assert _count(registry, "cmd", RateLimitScope.GLOBAL, "cmd") == 1


class TestPassiveScopes:
    def test_passive_scope_consumes_every_evaluation(self, service, registry, clock):
        policy = CommandRateLimitPolicy(
            global_scope=ScopeLimit(limit=2, window_ms=60_000, strict=False),
        )

        for expected in range(1, 6):
            assert service.evaluate("cmd", policy, user_id=expected)
            assert _count(registry, "cmd", RateLimitScope.GLOBAL, "cmd") == expected

    def test_passive_scope_consumes_even_when_later_strict_scope_rejects(
        self, service, registry, clock
    ):
        policy = CommandRateLimitPolicy(
            global_scope=ScopeLimit(limit=100, window_ms=60_000, strict=False),
            user_scope=ScopeLimit(limit=1, window_ms=60_000),
        )

        service.evaluate("cmd", policy, user_id=1)
        rejected = service.evaluate("cmd", policy, user_id=1)

        assert not rejected
        assert _count(registry, "cmd", RateLimitScope.GLOBAL, "cmd") == 2


class TestStrictCommitMode:
    def test_strict_scopes_committed_by_default(self, service, registry, clock):
        policy = CommandRateLimitPolicy(user_scope=ScopeLimit(limit=3, window_ms=60_000))

        service.evaluate("cmd", policy, user_id=7)

        assert _count(registry, "cmd", RateLimitScope.USER, 7) == 1

    def test_uncommitted_strict_scope_never_accumulates(self, service, registry, clock):
        policy = CommandRateLimitPolicy(
            user_scope=ScopeLimit(limit=1, window_ms=60_000),
            commit_strict_scopes=False,
        )

        for _ in range(5):
            assert service.evaluate("cmd", policy, user_id=7)

        assert _count(registry, "cmd", RateLimitScope.USER, 7) == 0

    def test_uncommitted_mode_still_consumes_passive_scopes(self, service, registry, clock):
        policy = CommandRateLimitPolicy(
            global_scope=ScopeLimit(limit=1, window_ms=60_000, strict=False),
            user_scope=ScopeLimit(limit=1, window_ms=60_000),
            commit_strict_scopes=False,
        )

        service.evaluate("cmd", policy, user_id=7)
        service.evaluate("cmd", policy, user_id=7)

        assert _count(registry, "cmd", RateLimitScope.GLOBAL, "cmd") == 2
        assert _count(registry, "cmd", RateLimitScope.USER, 7) == 0


def test_format_wait_message_per_scope():
    assert format_wait_message(RateLimitScope.GLOBAL, 5_000) == (
        "This command is currently rate-limited globally. Please try again in 5 seconds."
    )
    assert format_wait_message(RateLimitScope.GUILD, 3_600_000).endswith("in 1 hour.")
