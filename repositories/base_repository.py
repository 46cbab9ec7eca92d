"""
Base repository: SQLite connection handling shared by all repositories.
"""

import logging
import sqlite3
from abc import ABC
from contextlib import contextmanager

from infrastructure.schema_manager import SchemaManager

logger = logging.getLogger("crease_bot.repositories")

# Connection pragmas applied to every repository connection
CONNECTION_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA busy_timeout=5000",
    "PRAGMA foreign_keys=ON",
)


class BaseRepository(ABC):
    """
    Base class for repositories backed by one SQLite file.

    Connections are opened per operation and closed afterwards; nothing is
    pooled. The schema is created the first time a repository is built for
    a given path.
    """

    _schema_initialized_paths: set[str] = set()

    def __init__(self, db_path: str):
        self.db_path = db_path
        cls = type(self)
        if db_path not in cls._schema_initialized_paths:
            SchemaManager(db_path).initialize()
            cls._schema_initialized_paths.add(db_path)

    @staticmethod
    def normalize_guild_id(guild_id: int | None) -> int:
        """Sessions started outside a guild (DMs) are stored under guild 0."""
        return 0 if guild_id is None else guild_id

    def get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        for pragma in CONNECTION_PRAGMAS:
            conn.execute(pragma)
        return conn

    @contextmanager
    def _managed(self, begin: str | None):
        conn = self.get_connection()
        try:
            if begin:
                conn.execute(begin)
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            logger.debug(f"Rolled back transaction on {self.db_path}")
            raise
        finally:
            conn.close()

    def connection(self):
        """
        Connection for reads and single-statement writes.

        Commits on success, rolls back on exception, always closes.
        """
        return self._managed(begin=None)

    def atomic_transaction(self):
        """
        Connection holding the write lock from the start (BEGIN IMMEDIATE).

        Use for multi-table writes such as saving a whole session, so a
        concurrent save for the same user cannot interleave.

            with self.atomic_transaction() as conn:
                cursor = conn.cursor()
                ...
        """
        return self._managed(begin="BEGIN IMMEDIATE")
