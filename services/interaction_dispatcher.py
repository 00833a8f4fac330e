"""
Interaction dispatcher: resolve -> authorize -> rate-limit -> execute.

Every rejection and failure is handled here; nothing escapes dispatch().
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum

from domain.models.interaction import InteractionContext
from services import error_codes
from services.authorization_service import AuthorizationGate
from services.interfaces import ICommandRegistry, IPermissionEvaluator, ITelemetryCollector
from services.rate_limit_service import RateLimitService
from services.result import Result
from utils.debug_logging import debug_log
from utils.formatting import format_user

logger = logging.getLogger("gate_bot.services.dispatcher")

COMMAND_NOT_FOUND_MESSAGE = "Command could not be found."


class DispatchState(Enum):
    RECEIVED = "received"
    RESOLVING_COMMAND = "resolving-command"
    AUTHORIZING = "authorizing"
    RATE_LIMITING = "rate-limiting"
    EXECUTING = "executing"
    COMPLETED = "completed"
    REJECTED = "rejected"
    ERRORED = "errored"


@dataclass(frozen=True)
class DispatchOutcome:
    """
    Terminal state of one dispatch.

    stage is the state the pipeline was in when it stopped (e.g. AUTHORIZING
    for an authorization rejection, EXECUTING for completed/errored).
    """

    state: DispatchState
    stage: DispatchState
    error_code: str | None = None
    message: str | None = None
    details: dict | None = None

    @property
    def completed(self) -> bool:
        return self.state is DispatchState.COMPLETED

    @property
    def rejected(self) -> bool:
        return self.state is DispatchState.REJECTED

    @property
    def errored(self) -> bool:
        return self.state is DispatchState.ERRORED


class InteractionDispatcher:
    """
    Routes an InteractionContext to its command handler.

    Args:
        registry: command lookup
        gate: authorization chain
        rate_limits: policy evaluation over the injected RateLimiterRegistry
        permissions: owner lookup (owners skip rate limits)
        telemetry: executed/failed counters
        development_mode: log every dispatch at debug level
        handler_timeout: seconds before a handler is treated as failed; None for no bound
    """

    def __init__(
        self,
        registry: ICommandRegistry,
        gate: AuthorizationGate,
        rate_limits: RateLimitService,
        permissions: IPermissionEvaluator,
        telemetry: ITelemetryCollector,
        *,
        development_mode: bool = False,
        handler_timeout: float | None = None,
    ):
        self.registry = registry
        self.gate = gate
        self.rate_limits = rate_limits
        self.permissions = permissions
        self.telemetry = telemetry
        self.development_mode = development_mode
        self.handler_timeout = handler_timeout or None

    async def _reply(self, ctx: InteractionContext, text: str, *, ephemeral: bool) -> None:
        try:
            await ctx.reply(text, ephemeral=ephemeral)
        except Exception as exc:
            logger.warning(f"Failed to reply to /{ctx.command_name} for {ctx.user_id}: {exc}")

    async def _reject(
        self, ctx: InteractionContext, stage: DispatchState, result: Result
    ) -> DispatchOutcome:
        ephemeral = result.details.get("ephemeral", True)
        await self._reply(ctx, f"❌ {result.error}", ephemeral=ephemeral)
        return DispatchOutcome(
            state=DispatchState.REJECTED,
            stage=stage,
            error_code=result.error_code,
            message=result.error,
            details=dict(result.details),
        )

    async def dispatch(self, ctx: InteractionContext) -> DispatchOutcome:
        """Run one interaction through the pipeline. Never raises."""
        try:
            outcome = await self._dispatch(ctx)
        except Exception as exc:
            logger.error(f"Unhandled error dispatching /{ctx.command_name}: {exc}", exc_info=True)
            outcome = await self._fail(ctx, error_codes.HANDLER_FAILURE, stage=DispatchState.RECEIVED)
        debug_log(
            "dispatch",
            "services/interaction_dispatcher.py:dispatch",
            outcome.state.value,
            {
                "command": ctx.command_name,
                "user_id": ctx.user_id,
                "guild_id": ctx.guild_id,
                "stage": outcome.stage.value,
                "error_code": outcome.error_code,
            },
        )
        return outcome

    async def _dispatch(self, ctx: InteractionContext) -> DispatchOutcome:
        if self.development_mode:
            logger.debug(f"[command/{ctx.command_name}]: {format_user(ctx.user_tag, ctx.user_id)}")

        # resolving-command
        descriptor = self.registry.lookup(ctx.command_name)
        if descriptor is None:
            logger.warning(f"Unknown command /{ctx.command_name} from {ctx.user_id}")
            return await self._reject(
                ctx,
                DispatchState.RESOLVING_COMMAND,
                Result.fail(COMMAND_NOT_FOUND_MESSAGE, code=error_codes.COMMAND_NOT_FOUND),
            )

        is_owner = self.permissions.is_owner(ctx.user_id)

        # authorizing
        auth = await self.gate.authorize(descriptor, ctx, is_owner=is_owner)
        if not auth:
            return await self._reject(ctx, DispatchState.AUTHORIZING, auth)

        # rate-limiting
        if descriptor.ratelimit is not None and not is_owner:
            limit = self.rate_limits.evaluate(
                descriptor.name,
                descriptor.ratelimit,
                user_id=ctx.user_id,
                guild_id=ctx.guild_id,
            )
            if not limit:
                return await self._reject(ctx, DispatchState.RATE_LIMITING, limit)

        # executing
        await self.telemetry.increment_executed()
        try:
            if self.handler_timeout is None:
                await descriptor.run(ctx)
            else:
                await asyncio.wait_for(descriptor.run(ctx), timeout=self.handler_timeout)
        except asyncio.TimeoutError:
            logger.error(
                f"/{ctx.command_name} timed out after {self.handler_timeout}s for {ctx.user_id}"
            )
            return await self._fail(ctx, error_codes.HANDLER_TIMEOUT)
        except Exception as exc:
            logger.error(f"Error running /{ctx.command_name}: {exc}", exc_info=True)
            return await self._fail(ctx, error_codes.HANDLER_FAILURE)

        return DispatchOutcome(state=DispatchState.COMPLETED, stage=DispatchState.EXECUTING)

    async def _fail(
        self, ctx: InteractionContext, code: str, *, stage: DispatchState = DispatchState.EXECUTING
    ) -> DispatchOutcome:
        message = f"An error occurred while running `/{ctx.command_name}` command."
        await self._reply(ctx, f"❌ {message}", ephemeral=False)
        await self.telemetry.increment_failed()
        return DispatchOutcome(
            state=DispatchState.ERRORED,
            stage=stage,
            error_code=code,
            message=message,
        )
