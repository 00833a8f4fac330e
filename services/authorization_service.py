"""
Ordered authorization checks run before rate limiting.

The chain is a list of AuthorizationCheck entries evaluated in order with
early return, so the first failing check is the only one reported.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from domain.models.command import CommandDescriptor
from domain.models.interaction import InteractionContext
from domain.models.permission import format_permissions, missing_permissions
from services import error_codes
from services.interfaces import IPermissionEvaluator
from services.result import Result

logger = logging.getLogger("gate_bot.services.authorization")


@dataclass(frozen=True)
class GateRequest:
    """One authorization evaluation: what is being run, by whom."""

    descriptor: CommandDescriptor
    ctx: InteractionContext
    is_owner: bool


@dataclass(frozen=True)
class AuthorizationCheck:
    check_id: str
    applies: Callable[[CommandDescriptor], bool]
    passes: Callable[[GateRequest], Awaitable[bool]]
    message: Callable[[GateRequest], str]
    ephemeral: bool = True


class AuthorizationGate:
    """Runs the authorization chain for a command invocation."""

    def __init__(self, permissions: IPermissionEvaluator):
        self.permissions = permissions
        self.checks: list[AuthorizationCheck] = [
            AuthorizationCheck(
                check_id=error_codes.COMMAND_DISABLED,
                applies=lambda d: d.disabled,
                passes=self._owner_only,
                message=lambda r: "This command is currently disabled.",
            ),
            AuthorizationCheck(
                check_id=error_codes.SUPER_USER_ONLY,
                applies=lambda d: d.super_user_only,
                passes=self._owner_only,
                message=lambda r: "This command is only available to the bot owner.",
            ),
            AuthorizationCheck(
                check_id=error_codes.PREMIUM_ONLY,
                applies=lambda d: d.premium_only,
                passes=self._premium,
                message=lambda r: (
                    "This command is only available to premium users.\n"
                    "You can get premium by contacting the developers in the support server."
                ),
            ),
            AuthorizationCheck(
                check_id=error_codes.HELPER_USER_ONLY,
                applies=lambda d: d.helper_user_only,
                passes=self._helper,
                message=lambda r: "This command is only available to helper users.",
            ),
            AuthorizationCheck(
                check_id=error_codes.BOT_MISSING_PERMISSIONS,
                applies=lambda d: bool(d.required_bot_permissions),
                passes=self._bot_permissions,
                message=lambda r: "Missing Permissions: "
                + format_permissions(
                    missing_permissions(r.ctx.bot_permissions, r.descriptor.required_bot_permissions)
                ),
                ephemeral=False,
            ),
            AuthorizationCheck(
                check_id=error_codes.USER_MISSING_PERMISSIONS,
                applies=lambda d: bool(d.required_user_permissions),
                passes=self._user_permissions,
                message=lambda r: "Missing Permissions: "
                + format_permissions(
                    missing_permissions(
                        r.ctx.member_permissions, r.descriptor.required_user_permissions
                    )
                ),
            ),
        ]

    async def _owner_only(self, request: GateRequest) -> bool:
        return request.is_owner

    async def _premium(self, request: GateRequest) -> bool:
        if request.is_owner:
            return True
        return await self.permissions.is_premium(request.ctx.user_id)

    async def _helper(self, request: GateRequest) -> bool:
        return request.is_owner or self.permissions.is_helper(request.ctx.user_id)

    async def _bot_permissions(self, request: GateRequest) -> bool:
        # Owners are not exempt: the bot cannot act without these
        return self.permissions.has_permissions(
            request.ctx.bot_permissions, request.descriptor.required_bot_permissions
        )

    async def _user_permissions(self, request: GateRequest) -> bool:
        if request.is_owner:
            return True
        return self.permissions.has_permissions(
            request.ctx.member_permissions, request.descriptor.required_user_permissions
        )

    async def authorize(
        self, descriptor: CommandDescriptor, ctx: InteractionContext, *, is_owner: bool | None = None
    ) -> Result[None]:
        """
        Evaluate every applicable check in order.

        Returns Result.ok() or the first failure, with error_code set to the
        failing check's id and details {"check_id", "ephemeral"}.
        """
        if is_owner is None:
            is_owner = self.permissions.is_owner(ctx.user_id)
        request = GateRequest(descriptor=descriptor, ctx=ctx, is_owner=is_owner)

        for check in self.checks:
            if not check.applies(descriptor):
                continue
            if await check.passes(request):
                continue
            logger.info(
                f"Denied /{descriptor.name} for user {ctx.user_id}: {check.check_id}"
            )
            return Result.fail(
                check.message(request),
                code=check.check_id,
                details={"check_id": check.check_id, "ephemeral": check.ephemeral},
            )
        return Result.ok()
