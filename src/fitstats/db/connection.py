"""SQLite connections for the document store."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from fitstats.db.schema import DOCUMENTS_TABLE, get_schema_sql

logger = logging.getLogger(__name__)

# Seconds a writer waits on another process's lock before the write fails
BUSY_TIMEOUT = 5.0


class DatabaseConnection:
    """Opens one SQLite connection per store operation."""

    def __init__(self, db_path: Path, timeout: float = BUSY_TIMEOUT):
        """
        Args:
            db_path: Path to the SQLite database file (parents are created)
            timeout: Busy timeout in seconds for concurrent writers
        """
        self.db_path = db_path
        self.timeout = timeout
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Yield a connection; commit on success, roll back on any exception.

        Example:
            with db.get_connection() as conn:
                record = StatsQueries.load_record(conn, "alice", date.today())
        """
        conn = sqlite3.connect(self.db_path, timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize_schema(self) -> None:
        """Create the documents table and index if they don't exist."""
        with self.get_connection() as conn:
            conn.executescript(get_schema_sql())

    def table_exists(self, table_name: str) -> bool:
        with self.get_connection() as conn:
            cursor = conn.execute(
                "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
                (table_name,),
            )
            return cursor.fetchone() is not None

    def ensure_schema(self) -> None:
        """Initialize the schema on first use of a database file."""
        if not self.table_exists(DOCUMENTS_TABLE):
            logger.info("Creating document store at %s", self.db_path)
            self.initialize_schema()


# Global database instance (lazy loaded)
_db: Optional[DatabaseConnection] = None


def get_db() -> DatabaseConnection:
    """Get the global database instance.

    Built from settings on first call, with the schema created if the file
    is new.
    """
    global _db
    if _db is None:
        from fitstats.config import get_settings

        db = DatabaseConnection(get_settings().database.path)
        db.ensure_schema()
        _db = db
    return _db


def set_db(db: Optional[DatabaseConnection]) -> None:
    """Set the global database instance.

    Passing None makes the next get_db() call rebuild the instance from
    settings.
    """
    global _db
    _db = db
