"""Consecutive active-day streak."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Union

from fitstats.tracking.dates import to_local_date
from fitstats.tracking.models import DailyRecord


def compute_streak(
    records: Iterable[DailyRecord], today: Union[date, datetime]
) -> int:
    """Count consecutive active days ending today or yesterday.

    Walks records from newest to oldest. Each record must fall on the same
    day as, or the day before, the last counted day (starting from today) and
    must be active. The first record that fails either check ends the walk.

    An inactive record for today therefore ends the streak at 0 even if
    yesterday was active, and a record dated after today also ends it.

    Args:
        records: A user's daily records, any order
        today: Current date (datetimes are truncated to the day)

    Returns:
        Streak length in days (0 for no records)
    """
    last_day = to_local_date(today)
    streak = 0

    for record in sorted(records, key=lambda r: r.date, reverse=True):
        diff_days = (last_day - record.date).days
        if diff_days not in (0, 1) or not record.is_active:
            break
        streak += 1
        last_day = record.date

    return streak
