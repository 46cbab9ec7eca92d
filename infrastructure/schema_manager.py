"""
Schema and migration management for SQLite database.
"""

import logging
import sqlite3

logger = logging.getLogger("crease_bot.schema")


class SchemaManager:
    """
    Owns schema creation and migrations.

    Call initialize() to ensure schema is present and migrations are applied.
    """

    def __init__(self, db_path: str, use_uri: bool = False):
        self.db_path = db_path
        self.use_uri = use_uri

    def initialize(self) -> None:
        """Create base schema and apply migrations."""
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
        conn = sqlite3.connect(self.db_path, uri=self.use_uri)
        conn.row_factory = sqlite3.Row
        if not self.use_uri:  # Skip WAL for in-memory databases
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA busy_timeout=5000")
        return conn

    def _create_base_schema(self, cursor) -> None:
        # One row per saved session; (guild_id, user_id, session_name) is unique
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS team_builder_sessions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                guild_id INTEGER NOT NULL DEFAULT 0,
                user_id INTEGER NOT NULL,
                session_name TEXT NOT NULL,
                number_of_teams INTEGER NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )

        # Roster snapshot
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS team_builder_players (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                session_id INTEGER NOT NULL,
                name TEXT NOT NULL,
                batting INTEGER NOT NULL,
                bowling INTEGER NOT NULL,
                captaincy INTEGER NOT NULL,
                is_wicketkeeper INTEGER NOT NULL DEFAULT 0,
                notes TEXT DEFAULT '',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (session_id) REFERENCES team_builder_sessions(id) ON DELETE CASCADE
            )
            """
        )

        # Generated teams; role columns reference team_builder_players.id
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS team_builder_teams (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                session_id INTEGER NOT NULL,
                team_name TEXT NOT NULL,
                captain_player_id INTEGER,
                vice_captain_player_id INTEGER,
                wicketkeeper_player_id INTEGER,
                total_rating INTEGER NOT NULL DEFAULT 0,
                description TEXT DEFAULT '',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (session_id) REFERENCES team_builder_sessions(id) ON DELETE CASCADE
            )
            """
        )

        # Team membership
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS team_builder_team_players (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                team_id INTEGER NOT NULL,
                player_id INTEGER NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (team_id) REFERENCES team_builder_teams(id) ON DELETE CASCADE,
                FOREIGN KEY (player_id) REFERENCES team_builder_players(id) ON DELETE CASCADE
            )
            """
        )

    # --- Migration helpers ---

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
            ("add_team_builder_indexes_v1", self._migration_add_team_builder_indexes_v1),
            ("add_team_player_position", self._migration_add_team_player_position),
        ]

    # --- Migrations ---

    def _migration_add_team_builder_indexes_v1(self, cursor) -> None:
        cursor.execute(
            """
            CREATE UNIQUE INDEX IF NOT EXISTS idx_tb_sessions_owner_name
            ON team_builder_sessions(guild_id, user_id, session_name)
            """
        )
        cursor.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_tb_sessions_owner_updated
            ON team_builder_sessions(guild_id, user_id, updated_at)
            """
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_tb_players_session ON team_builder_players(session_id)"
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_tb_teams_session ON team_builder_teams(session_id)"
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_tb_team_players_team ON team_builder_team_players(team_id)"
        )

    def _migration_add_team_player_position(self, cursor) -> None:
        """Keep members in draft order when a session is reloaded."""
        self._add_column_if_not_exists(
            cursor, "team_builder_team_players", "position", "INTEGER DEFAULT 0"
        )
        self._add_column_if_not_exists(
            cursor, "team_builder_players", "position", "INTEGER DEFAULT 0"
        )
