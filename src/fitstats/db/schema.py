"""SQLite schema for the document store."""

DOCUMENTS_TABLE = "documents"

# Collections the document store accepts
COLLECTIONS = ("users", "stats")

SCHEMA_SQL = """
-- One JSON document per (collection, doc_id).
-- users: doc_id = user id, data = profile fields
-- stats: doc_id = '{user_id}_{YYYY-MM-DD}', data = daily metrics
CREATE TABLE IF NOT EXISTS documents (
    collection TEXT NOT NULL CHECK(collection IN ('users', 'stats')),
    doc_id TEXT NOT NULL,
    user_id TEXT NOT NULL,
    data TEXT NOT NULL CHECK(json_valid(data)),
    updated_at TEXT NOT NULL,
    PRIMARY KEY (collection, doc_id)
);

CREATE INDEX IF NOT EXISTS idx_documents_collection_user ON documents(collection, user_id);
"""


def get_schema_sql() -> str:
    """Return the complete schema SQL."""
    return SCHEMA_SQL
