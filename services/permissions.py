"""
Permission evaluation for the authorization gate.
"""

import asyncio
import logging
import time
from collections.abc import Iterable

from domain.models.permission import Permission, has_permissions
from repositories.interfaces import IPremiumUserRepository
from services import error_codes
from services.interfaces import IPermissionEvaluator
from services.result import Result

logger = logging.getLogger("gate_bot.services.permissions")


class PermissionService(IPermissionEvaluator):
    """
    Answers owner / premium / helper membership and permission-set queries.

    Owners and helpers come from configuration; premium grants are stored in
    the premium_users table so they survive restarts.
    """

    def __init__(
        self,
        owner_ids: Iterable[int],
        premium_repo: IPremiumUserRepository,
        helper_ids: Iterable[int] = (),
    ):
        self.owner_ids = frozenset(owner_ids)
        self.helper_ids = frozenset(helper_ids)
        self.premium_repo = premium_repo

    def is_owner(self, user_id: int) -> bool:
        return user_id in self.owner_ids

    def is_helper(self, user_id: int) -> bool:
        return user_id in self.helper_ids

    async def is_premium(self, user_id: int) -> bool:
        return await asyncio.to_thread(self.premium_repo.is_premium, user_id)

    def has_permissions(
        self, granted: Iterable[Permission] | None, required: Iterable[Permission]
    ) -> bool:
        return has_permissions(granted, required)

    def grant_premium(
        self, user_id: int, granted_by: int | None = None, days: int | None = None
    ) -> Result[dict]:
        """Grant premium, optionally for a limited number of days."""
        if days is not None and days < 1:
            return Result.fail("Duration must be at least 1 day.", code=error_codes.VALIDATION_ERROR)
        expires_at = int(time.time()) + days * 86_400 if days else None
        self.premium_repo.grant(user_id, granted_by=granted_by, expires_at=expires_at)
        logger.info(f"Premium granted to {user_id} by {granted_by} (expires_at={expires_at})")
        return Result.ok({"user_id": user_id, "expires_at": expires_at})

    def revoke_premium(self, user_id: int) -> Result[None]:
        if not self.premium_repo.revoke(user_id):
            return Result.fail(f"User {user_id} does not have premium.", code=error_codes.NOT_FOUND)
        logger.info(f"Premium revoked from {user_id}")
        return Result.ok()
