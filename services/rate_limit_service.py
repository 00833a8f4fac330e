"""
Evaluates a command's rate-limit policy for one caller.

Scopes are evaluated in a fixed order (global, guild, user). A strict scope
that is exhausted rejects immediately; nothing after it is checked or
consumed. Passive scopes consume one unit as soon as they are reached.
Strict scopes that pass are committed together only after every strict scope
has passed (unless the policy disables committing them).
"""

import logging

from domain.models.command import CommandRateLimitPolicy, ScopeLimit
from services import error_codes
from services.result import Result
from utils.formatting import format_duration
from utils.rate_limiter import RateLimitAcquisition, RateLimiterRegistry, RateLimitScope

logger = logging.getLogger("gate_bot.services.rate_limit")

SCOPE_MESSAGES = {
    RateLimitScope.GLOBAL: "This command is currently rate-limited globally.",
    RateLimitScope.GUILD: "This command is currently rate-limited in this guild.",
    RateLimitScope.USER: "This command is currently rate-limited for you.",
}


def format_wait_message(scope: RateLimitScope, remaining_ms: int) -> str:
    return f"{SCOPE_MESSAGES[scope]} Please try again in {format_duration(remaining_ms)}."


class RateLimitService:
    """Applies CommandRateLimitPolicy rules against a RateLimiterRegistry."""

    def __init__(self, registry: RateLimiterRegistry):
        self.registry = registry

    def _scopes(
        self, command_name: str, policy: CommandRateLimitPolicy, user_id: int, guild_id: int | None
    ) -> list[tuple[RateLimitScope, ScopeLimit, str]]:
        scopes = []
        if policy.global_scope is not None:
            scopes.append((RateLimitScope.GLOBAL, policy.global_scope, command_name))
        if policy.guild_scope is not None and guild_id is not None:
            scopes.append((RateLimitScope.GUILD, policy.guild_scope, str(guild_id)))
        if policy.user_scope is not None:
            scopes.append((RateLimitScope.USER, policy.user_scope, str(user_id)))
        return scopes

    def evaluate(
        self,
        command_name: str,
        policy: CommandRateLimitPolicy | None,
        *,
        user_id: int,
        guild_id: int | None = None,
    ) -> Result[None]:
        """
        Check (and consume) quota for one invocation.

        Returns Result.ok() to proceed, or Result.fail(..., code=RATE_LIMITED)
        with details {"scope": <scope value>, "remaining_ms": int}.
        """
        if policy is None or policy.is_empty:
            return Result.ok()

        pending: list[RateLimitAcquisition] = []
        for scope, rule, identifier in self._scopes(command_name, policy, user_id, guild_id):
            manager = self.registry.manager_for(
                command_name, scope, limit=rule.limit, window_ms=rule.window_ms
            )
            acquisition = manager.acquire(identifier)

            if not rule.strict:
                acquisition.consume()
                continue

            if acquisition.limited:
                logger.info(
                    f"Rate limited /{command_name} at {scope.value} scope "
                    f"(id={identifier}, user={user_id}, remaining={acquisition.remaining_ms}ms)"
                )
                return Result.fail(
                    format_wait_message(scope, acquisition.remaining_ms),
                    code=error_codes.RATE_LIMITED,
                    details={"scope": scope.value, "remaining_ms": acquisition.remaining_ms},
                )
            pending.append(acquisition)

        if policy.commit_strict_scopes:
            for acquisition in pending:
                acquisition.consume()
        return Result.ok()
