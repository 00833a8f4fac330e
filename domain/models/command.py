"""
Command descriptor and rate-limit policy models.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from domain.models.permission import Permission

if TYPE_CHECKING:
    from domain.models.interaction import InteractionContext

CommandHandler = Callable[["InteractionContext"], Awaitable[None]]


@dataclass(frozen=True)
class ScopeLimit:
    """
    Limit for one scope of a command.

    strict scopes block the command once exhausted; passive scopes are only
    tracked (consumed on every evaluation) and never block.
    """

    limit: int
    window_ms: int
    strict: bool = True

    def __post_init__(self):
        if self.limit < 1:
            raise ValueError("limit must be at least 1")
        if self.window_ms < 1:
            raise ValueError("window_ms must be positive")

    @classmethod
    def per_seconds(cls, limit: int, seconds: float, *, strict: bool = True) -> "ScopeLimit":
        return cls(limit=limit, window_ms=int(seconds * 1000), strict=strict)


@dataclass(frozen=True)
class CommandRateLimitPolicy:
    """
    Per-command rate limits for the global, guild and user scopes.

    A scope left as None is never checked and never consumes quota.
    commit_strict_scopes controls whether strict scopes that pass are
    consumed once the whole policy has passed; with False, only passive
    scopes ever accumulate usage.
    """

    global_scope: ScopeLimit | None = None
    guild_scope: ScopeLimit | None = None
    user_scope: ScopeLimit | None = None
    commit_strict_scopes: bool = True

    @property
    def is_empty(self) -> bool:
        return self.global_scope is None and self.guild_scope is None and self.user_scope is None


@dataclass(frozen=True)
class CommandDescriptor:
    """Everything the dispatcher needs to gate and run one slash command."""

    name: str
    run: CommandHandler
    description: str = ""
    disabled: bool = False
    super_user_only: bool = False
    premium_only: bool = False
    helper_user_only: bool = False
    required_bot_permissions: tuple[Permission, ...] = ()
    required_user_permissions: tuple[Permission, ...] = ()
    ratelimit: CommandRateLimitPolicy | None = None


def create_command(
    name: str,
    *,
    description: str = "",
    disabled: bool = False,
    super_user_only: bool = False,
    premium_only: bool = False,
    helper_user_only: bool = False,
    required_bot_permissions: tuple[Permission, ...] | list[Permission] = (),
    required_user_permissions: tuple[Permission, ...] | list[Permission] = (),
    ratelimit: CommandRateLimitPolicy | None = None,
) -> Callable[[CommandHandler], CommandDescriptor]:
    """
    Decorator that turns an async handler into a CommandDescriptor.

    Usage:
        @create_command("ping", ratelimit=CommandRateLimitPolicy(user_scope=...))
        async def ping(ctx):
            await ctx.reply("Pong!")
    """

    def decorator(handler: CommandHandler) -> CommandDescriptor:
        return CommandDescriptor(
            name=name,
            run=handler,
            description=description or (handler.__doc__ or "").strip(),
            disabled=disabled,
            super_user_only=super_user_only,
            premium_only=premium_only,
            helper_user_only=helper_user_only,
            required_bot_permissions=tuple(required_bot_permissions),
            required_user_permissions=tuple(required_user_permissions),
            ratelimit=ratelimit,
        )

    return decorator
