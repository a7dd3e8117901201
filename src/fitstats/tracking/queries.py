"""Document store queries for profiles and daily records."""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, datetime
from typing import Any, Optional, Union

from fitstats.db.documents import get_document, merge_document, query_documents
from fitstats.errors import ReadError, ValidationError
from fitstats.profiles.models import Profile
from fitstats.tracking.dates import TimezoneLike, record_key, to_local_date
from fitstats.tracking.models import DailyRecord, MetricKind, coerce_metric_value

logger = logging.getLogger(__name__)

USERS = "users"
STATS = "stats"


class ProfileQueries:
    """Queries for user profiles (``users`` collection, keyed by user id)."""

    @staticmethod
    def get_profile(conn: sqlite3.Connection, user_id: str) -> Optional[Profile]:
        """Get a user's profile, or None if setup hasn't happened yet."""
        data = get_document(conn, USERS, user_id)
        if data is None:
            return None
        return Profile.from_document(data)

    @staticmethod
    def save_profile(
        conn: sqlite3.Connection, user_id: str, profile: Profile
    ) -> Profile:
        """Validate and merge a profile into the user's document.

        Raises:
            ValidationError: a field is missing or out of range (nothing written)
            WriteError: the store rejected the write
        """
        if not user_id:
            raise ValidationError("user_id is required")
        profile.validate()

        stored = merge_document(conn, USERS, user_id, user_id, profile.to_document())
        logger.info("Saved profile for user %s", user_id)
        return Profile.from_document(stored)


def _record_from_document(data: dict[str, Any]) -> DailyRecord:
    try:
        return DailyRecord.from_document(data)
    except ValueError as e:
        raise ReadError(f"Malformed stats document: {e}") from e


class StatsQueries:
    """Queries for daily records (``stats`` collection)."""

    @staticmethod
    def upsert_metric(
        conn: sqlite3.Connection,
        user_id: str,
        day: Union[date, datetime],
        metric: Union[MetricKind, str],
        value: Any,
        tz: TimezoneLike = None,
    ) -> DailyRecord:
        """Set one metric on the user's record for a day.

        Creates the record if absent. Other metrics already on the record are
        kept; writing the same metric again replaces its value. An aware
        datetime is truncated to its calendar day in ``tz`` (local time when
        None).

        Returns:
            The merged record as stored

        Raises:
            ValidationError: unknown metric or invalid value (nothing written)
            WriteError: the store rejected the write
            ReadError: the write landed but the stored record is malformed
        """
        kind = MetricKind.parse(metric)
        number = coerce_metric_value(kind, value)
        day = to_local_date(day, tz)
        key = record_key(user_id, day)

        stored = merge_document(
            conn,
            STATS,
            key,
            user_id,
            {
                kind.value: number,
                "userId": user_id,
                "date": day.isoformat(),
            },
        )
        logger.debug("Set %s=%s on %s", kind.value, number, key)
        return _record_from_document(stored)

    @staticmethod
    def load_record(
        conn: sqlite3.Connection,
        user_id: str,
        day: Union[date, datetime],
        tz: TimezoneLike = None,
    ) -> Optional[DailyRecord]:
        """Get the record for exactly one day, or None if nothing was logged.

        Raises:
            ReadError: the store query failed or the record is malformed
        """
        data = get_document(conn, STATS, record_key(user_id, to_local_date(day, tz)))
        if data is None:
            return None
        return _record_from_document(data)

    @staticmethod
    def load_history(conn: sqlite3.Connection, user_id: str) -> list[DailyRecord]:
        """Get every record of a user, in no particular order.

        Malformed documents (e.g. written by another client) are skipped with
        a warning so the remaining days still load.

        Raises:
            ReadError: the store query failed
        """
        records = []
        for data in query_documents(conn, STATS, user_id):
            try:
                records.append(DailyRecord.from_document(data))
            except ValueError as e:
                logger.warning("Skipping malformed stats document for %s: %s", user_id, e)
        return records
