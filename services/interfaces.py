"""
Service layer interfaces (ABCs).

These are the collaborators the interaction dispatcher depends on. Concrete
implementations live in services/ and utils/; tests substitute fakes.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.models.command import CommandDescriptor
    from domain.models.permission import Permission


class ICommandRegistry(ABC):
    """Name -> command descriptor lookup."""

    @abstractmethod
    def lookup(self, name: str) -> "CommandDescriptor | None":
        """Return the descriptor registered under name, or None."""
        ...


class IPermissionEvaluator(ABC):
    """Answers who the caller is and what they are allowed to do."""

    @abstractmethod
    def is_owner(self, user_id: int) -> bool:
        """Whether the user is a bot owner (super user)."""
        ...

    @abstractmethod
    async def is_premium(self, user_id: int) -> bool:
        """Whether the user currently has premium access."""
        ...

    @abstractmethod
    def is_helper(self, user_id: int) -> bool:
        """Whether the user is a designated helper."""
        ...

    @abstractmethod
    def has_permissions(
        self, granted: "Iterable[Permission] | None", required: "Iterable[Permission]"
    ) -> bool:
        """Whether granted contains every required permission."""
        ...


class IResponseChannel(ABC):
    """Where replies to an interaction are sent."""

    @abstractmethod
    async def reply(self, text: str, *, ephemeral: bool = False) -> None:
        """Send a reply. May raise on transport failure."""
        ...


class ITelemetryCollector(ABC):
    """Process-wide command counters. Implementations must never raise."""

    @abstractmethod
    async def increment_executed(self) -> None: ...

    @abstractmethod
    async def increment_failed(self) -> None: ...
