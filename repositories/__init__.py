"""
Data access layer (SQLite repositories).
"""

from repositories.global_stats_repository import GlobalStatsRepository
from repositories.premium_user_repository import PremiumUserRepository

__all__ = ["GlobalStatsRepository", "PremiumUserRepository"]
