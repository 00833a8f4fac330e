"""
SQLite database bootstrap.

Constructing a Database ensures the schema exists and every migration has been
applied for the given path. Repositories open their own connections.
"""

import logging

from infrastructure.schema_manager import SchemaManager

logger = logging.getLogger("gate_bot.database")


class Database:
    """Owns schema initialization for a SQLite database file."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        SchemaManager(db_path).initialize()
        logger.debug(f"Database ready at {db_path}")
