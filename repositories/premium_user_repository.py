"""
Repository for premium user grants.
"""

import time

from repositories.base_repository import BaseRepository
from repositories.interfaces import IPremiumUserRepository


class PremiumUserRepository(BaseRepository, IPremiumUserRepository):
    """
    Handles CRUD operations for premium grants.
    """

    def grant(self, discord_id: int, granted_by: int | None = None, expires_at: int | None = None) -> None:
        """Grant (or refresh) premium for a user. expires_at is unix seconds, None = forever."""
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO premium_users (discord_id, granted_by, expires_at)
                VALUES (?, ?, ?)
                ON CONFLICT(discord_id) DO UPDATE SET
                    granted_by = excluded.granted_by,
                    expires_at = excluded.expires_at,
                    granted_at = CURRENT_TIMESTAMP
                """,
                (discord_id, granted_by, expires_at),
            )

    def revoke(self, discord_id: int) -> bool:
        """Remove a grant. Returns True if one existed."""
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM premium_users WHERE discord_id = ?", (discord_id,))
            return cursor.rowcount > 0

    def is_premium(self, discord_id: int, now: int | None = None) -> bool:
        now = int(time.time()) if now is None else now
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT 1 FROM premium_users
                WHERE discord_id = ? AND (expires_at IS NULL OR expires_at > ?)
                """,
                (discord_id, now),
            )
            return cursor.fetchone() is not None
