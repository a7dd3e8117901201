"""Keyed JSON documents with merge-upsert, stored in SQLite.

The store offers the three operations the metrics engine relies on:
get-by-key, merge-upsert-by-key and query-all-by-user. A merge is a single
SQL statement, so concurrent writers to the same document are reconciled per
field by the database (last writer wins per field) without any client-side
read-modify-write.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from typing import Any, Optional

from fitstats.db.schema import COLLECTIONS
from fitstats.errors import ReadError, WriteError

logger = logging.getLogger(__name__)

MERGE_SQL = """
    INSERT INTO documents (collection, doc_id, user_id, data, updated_at)
    VALUES (?, ?, ?, json(?), strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
    ON CONFLICT(collection, doc_id) DO UPDATE SET
        data = json_patch(documents.data, excluded.data),
        user_id = excluded.user_id,
        updated_at = excluded.updated_at
"""


def _check_collection(collection: str) -> None:
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection '{collection}', expected one of {COLLECTIONS}")


def _row_to_document(row: sqlite3.Row) -> dict[str, Any]:
    """Decode a row; the server timestamp is exposed as ``updatedAt``."""
    data = json.loads(row["data"])
    data["updatedAt"] = row["updated_at"]
    return data


def get_document(
    conn: sqlite3.Connection, collection: str, doc_id: str
) -> Optional[dict[str, Any]]:
    """Get a document by key, or None if it doesn't exist.

    Raises:
        ReadError: the database query failed
    """
    _check_collection(collection)
    try:
        row = conn.execute(
            """
            SELECT data, updated_at FROM documents
            WHERE collection = ? AND doc_id = ?
            """,
            (collection, doc_id),
        ).fetchone()
    except sqlite3.Error as e:
        raise ReadError(f"Failed to read {collection}/{doc_id}: {e}") from e

    if row is None:
        return None
    return _row_to_document(row)


def merge_document(
    conn: sqlite3.Connection,
    collection: str,
    doc_id: str,
    user_id: str,
    fields: dict[str, Any],
) -> dict[str, Any]:
    """Merge fields into a document, creating it if absent.

    Fields not mentioned are preserved. None values are not written.

    Returns:
        The document as stored after the merge

    Raises:
        WriteError: the write (or the read-back) failed; nothing is committed
    """
    _check_collection(collection)
    payload = {key: value for key, value in fields.items() if value is not None}

    try:
        conn.execute(MERGE_SQL, (collection, doc_id, user_id, json.dumps(payload)))
        row = conn.execute(
            """
            SELECT data, updated_at FROM documents
            WHERE collection = ? AND doc_id = ?
            """,
            (collection, doc_id),
        ).fetchone()
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        raise WriteError(f"Failed to write {collection}/{doc_id}: {e}") from e

    logger.debug("Merged %s into %s/%s", sorted(payload), collection, doc_id)
    return _row_to_document(row)


def query_documents(
    conn: sqlite3.Connection, collection: str, user_id: str
) -> list[dict[str, Any]]:
    """Get every document of a collection that belongs to a user.

    No ordering is guaranteed.

    Raises:
        ReadError: the database query failed
    """
    _check_collection(collection)
    try:
        rows = conn.execute(
            """
            SELECT data, updated_at FROM documents
            WHERE collection = ? AND user_id = ?
            """,
            (collection, user_id),
        ).fetchall()
    except sqlite3.Error as e:
        raise ReadError(f"Failed to query {collection} for user {user_id}: {e}") from e

    return [_row_to_document(row) for row in rows]
