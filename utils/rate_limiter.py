"""
In-memory fixed-window rate limiting for slash commands.

State is process-local and ephemeral (restarts reset every bucket). Buckets are
grouped into one RateLimitManager per (command, scope), and all managers are
owned by a RateLimiterRegistry that is injected wherever limits are evaluated.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum


def _now_ms() -> int:
    """Monotonic clock in whole milliseconds."""
    return int(time.monotonic() * 1000)


class RateLimitScope(Enum):
    """Granularity at which a command is rate limited."""

    GLOBAL = "global"
    GUILD = "guild"
    USER = "user"


@dataclass(frozen=True)
class RateLimitState:
    limited: bool
    remaining_ms: int = 0


class RateLimitBucket:
    """
    Fixed-window counter for a single identifier.

    acquire() only reports; consume() is the only way to spend quota and it
    never refuses, callers decide whether to gate on a prior acquire().
    """

    def __init__(self, identifier: str, limit: int, window_ms: int) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        if window_ms < 1:
            raise ValueError("window_ms must be positive")
        self.identifier = identifier
        self.limit = limit
        self.window_ms = window_ms
        self.count = 0
        self.window_start = _now_ms()

    def _reset_if_expired(self, now: int) -> None:
        if now >= self.window_start + self.window_ms:
            self.count = 0
            self.window_start = now

    def expired(self, now: int | None = None) -> bool:
        """True when the current window has fully elapsed."""
        if now is None:
            now = _now_ms()
        return now >= self.window_start + self.window_ms

    def acquire(self) -> RateLimitState:
        now = _now_ms()
        self._reset_if_expired(now)
        if self.count >= self.limit:
            remaining = max(0, self.window_start + self.window_ms - now)
            return RateLimitState(limited=True, remaining_ms=remaining)
        return RateLimitState(limited=False)

    def consume(self) -> None:
        self._reset_if_expired(_now_ms())
        self.count += 1


@dataclass(frozen=True)
class RateLimitAcquisition:
    """Snapshot of a bucket at acquire time plus a handle to commit one unit."""

    identifier: str
    limited: bool
    remaining_ms: int
    bucket: RateLimitBucket = field(repr=False, compare=False)

    def consume(self) -> None:
        self.bucket.consume()


class RateLimitManager:
    """Identifier -> bucket map for one scope of one command."""

    def __init__(self, limit: int, window_ms: int) -> None:
        self.limit = limit
        self.window_ms = window_ms
        self._buckets: dict[str, RateLimitBucket] = {}

    def __len__(self) -> int:
        return len(self._buckets)

    def get(self, identifier: str | int) -> RateLimitBucket | None:
        return self._buckets.get(str(identifier))

    def acquire(self, identifier: str | int) -> RateLimitAcquisition:
        key = str(identifier)
        bucket = self._buckets.get(key)
        if bucket is None:
            bucket = RateLimitBucket(key, self.limit, self.window_ms)
            self._buckets[key] = bucket
        state = bucket.acquire()
        return RateLimitAcquisition(
            identifier=key,
            limited=state.limited,
            remaining_ms=state.remaining_ms,
            bucket=bucket,
        )

    def sweep(self) -> int:
        """Drop buckets whose window has elapsed. Returns the number removed."""
        now = _now_ms()
        stale = [key for key, bucket in self._buckets.items() if bucket.expired(now)]
        for key in stale:
            del self._buckets[key]
        return len(stale)


class RateLimiterRegistry:
    """
    Owns every RateLimitManager in the process, keyed by (command, scope).

    Managers are created on first use with the limit/window they were first
    requested with. Create a fresh registry per test for isolation.
    """

    def __init__(self) -> None:
        self._managers: dict[tuple[str, RateLimitScope], RateLimitManager] = {}

    def manager_for(
        self, command_name: str, scope: RateLimitScope, *, limit: int, window_ms: int
    ) -> RateLimitManager:
        key = (command_name, scope)
        manager = self._managers.get(key)
        if manager is None:
            manager = RateLimitManager(limit=limit, window_ms=window_ms)
            self._managers[key] = manager
        return manager

    def get(self, command_name: str, scope: RateLimitScope) -> RateLimitManager | None:
        return self._managers.get((command_name, scope))

    def reset(self, command_name: str | None = None) -> None:
        """Forget all buckets, or only those belonging to one command."""
        if command_name is None:
            self._managers.clear()
            return
        for key in [k for k in self._managers if k[0] == command_name]:
            del self._managers[key]

    def sweep(self) -> int:
        return sum(manager.sweep() for manager in self._managers.values())
