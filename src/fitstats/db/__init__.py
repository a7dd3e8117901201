"""Document store backed by SQLite."""

from __future__ import annotations

from fitstats.db.connection import DatabaseConnection, get_db, set_db

__all__ = ["DatabaseConnection", "get_db", "set_db"]
