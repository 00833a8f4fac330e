"""
SQLite schema bootstrap plus named, run-once migrations.
"""

import logging
import sqlite3

logger = logging.getLogger("gate_bot.schema")


class SchemaManager:
    """
    Creates the base tables and applies any migration not yet recorded in
    schema_migrations. Safe to run on every start.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path

    def initialize(self) -> None:
        """Create missing tables and apply pending migrations."""
        logger.info(f"Initializing database schema: {self.db_path}")
        conn = self._connect()
        try:
            cursor = conn.cursor()
            self._create_base_schema(cursor)
            self._create_schema_migrations_table(cursor)
            self._run_migrations(cursor)
            conn.commit()
        finally:
            conn.close()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA busy_timeout=5000")
        return conn

    def _create_base_schema(self, cursor) -> None:
        # Process-wide command counters, one row per find_id ("global")
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS global_stats (
                find_id TEXT PRIMARY KEY,
                commands_executed INTEGER NOT NULL DEFAULT 0,
                commands_failed INTEGER NOT NULL DEFAULT 0,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )

    # --- helpers ---

    def _add_column_if_not_exists(self, cursor, table: str, column: str, column_type: str) -> None:
        try:
            cursor.execute(f"ALTER TABLE {table} ADD COLUMN {column} {column_type}")
        except sqlite3.OperationalError:
            pass

    def _create_schema_migrations_table(self, cursor) -> None:
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
                name TEXT PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )

    def _run_migrations(self, cursor) -> None:
        applied = {row["name"] for row in cursor.execute("SELECT name FROM schema_migrations")}
        for name, action in self._get_migrations():
            if name in applied:
                continue
            logger.info(f"Applying migration: {name}")
            action(cursor)
            cursor.execute(
                "INSERT INTO schema_migrations (name) VALUES (?)",
                (name,),
            )

    def _get_migrations(self):
        return [
            ("create_premium_users_table", self._migration_create_premium_users_table),
            ("add_premium_expiry_column", self._migration_add_premium_expiry_column),
        ]

    # --- Migrations ---

    def _migration_create_premium_users_table(self, cursor) -> None:
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS premium_users (
                discord_id INTEGER PRIMARY KEY,
                granted_by INTEGER,
                granted_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )

    def _migration_add_premium_expiry_column(self, cursor) -> None:
        # Unix seconds; NULL means the grant never expires
        self._add_column_if_not_exists(cursor, "premium_users", "expires_at", "INTEGER")
