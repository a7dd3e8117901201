"""Daily record tracking, weekly aggregation and streaks.

Key components:
- DailyRecord: one record per user per calendar day, merged field by field
- StatsQueries / ProfileQueries: document store access
- weekly_window: the seven most recent records, oldest first
- compute_streak: consecutive active days ending today or yesterday
"""

from __future__ import annotations

from fitstats.tracking.dates import local_today, record_key
from fitstats.tracking.models import DailyRecord, MetricKind
from fitstats.tracking.queries import ProfileQueries, StatsQueries
from fitstats.tracking.streak import compute_streak
from fitstats.tracking.weekly import weekly_window

__all__ = [
    "DailyRecord",
    "MetricKind",
    "ProfileQueries",
    "StatsQueries",
    "compute_streak",
    "local_today",
    "record_key",
    "weekly_window",
]
