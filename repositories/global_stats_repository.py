"""
Repository for process-wide command counters.
"""

from repositories.base_repository import BaseRepository
from repositories.interfaces import IGlobalStatsRepository

GLOBAL_FIND_ID = "global"


class GlobalStatsRepository(BaseRepository, IGlobalStatsRepository):
    """
    Upserts the single "global" counters row.
    """

    def _increment(self, column: str, amount: int) -> None:
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                INSERT INTO global_stats (find_id, {column})
                VALUES (?, ?)
                ON CONFLICT(find_id) DO UPDATE SET
                    {column} = {column} + excluded.{column},
                    updated_at = CURRENT_TIMESTAMP
                """,
                (GLOBAL_FIND_ID, amount),
            )

    def increment_executed(self, amount: int = 1) -> None:
        self._increment("commands_executed", amount)

    def increment_failed(self, amount: int = 1) -> None:
        self._increment("commands_failed", amount)

    def get_stats(self) -> dict:
        """Return executed/failed counts; zeros if nothing was recorded yet."""
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT commands_executed, commands_failed FROM global_stats WHERE find_id = ?",
                (GLOBAL_FIND_ID,),
            )
            row = cursor.fetchone()
            if not row:
                return {"commands_executed": 0, "commands_failed": 0}
            return dict(row)
