"""
Abstract repository interfaces for data access.

These interfaces define the contracts implemented by concrete repositories.
"""

from abc import ABC, abstractmethod


class IGlobalStatsRepository(ABC):
    @abstractmethod
    def increment_executed(self, amount: int = 1) -> None: ...

    @abstractmethod
    def increment_failed(self, amount: int = 1) -> None: ...

    @abstractmethod
    def get_stats(self) -> dict: ...


class IPremiumUserRepository(ABC):
    @abstractmethod
    def grant(self, discord_id: int, granted_by: int | None = None, expires_at: int | None = None) -> None: ...

    @abstractmethod
    def revoke(self, discord_id: int) -> bool: ...

    @abstractmethod
    def is_premium(self, discord_id: int, now: int | None = None) -> bool: ...
