"""Weekly window over a user's daily records.

The window is the seven most recent records, not the last seven calendar
days. Days without a record are simply missing, so a user who skipped three
of the last seven days gets a shorter window that can reach further back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from fitstats.tracking.models import DailyRecord, MetricKind

WINDOW_SIZE = 7

# Indexed by date.weekday() (Monday = 0)
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def weekly_window(records: Iterable[DailyRecord]) -> list[DailyRecord]:
    """Return the most recent records (at most 7), oldest first."""
    ordered = sorted(records, key=lambda r: r.date)
    return ordered[-WINDOW_SIZE:]


@dataclass(frozen=True)
class ChartBar:
    """One bar of the weekly calorie chart."""

    label: str          # weekday of the record's own date
    calories: float
    scale: float        # 0..1, relative to the chart maximum


def weekly_chart(window: list[DailyRecord], calorie_goal: int) -> list[ChartBar]:
    """Build calorie bars for a weekly window.

    Bars are scaled against the larger of the highest day and the calorie
    goal, so the goal line always fits on the chart.
    """
    if not window:
        return []

    maximum = max(max(r.calories for r in window), calorie_goal)
    return [
        ChartBar(
            label=WEEKDAY_LABELS[record.date.weekday()],
            calories=record.calories,
            scale=record.calories / maximum if maximum > 0 else 0.0,
        )
        for record in window
    ]


@dataclass
class WeeklySummary:
    """Totals and per-logged-day averages over a weekly window."""

    days_logged: int = 0
    active_days: int = 0
    totals: dict[MetricKind, float] = field(default_factory=dict)
    averages: dict[MetricKind, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "days_logged": self.days_logged,
            "active_days": self.active_days,
            "totals": {k.value: v for k, v in self.totals.items()},
            "averages": {k.value: round(v, 1) for k, v in self.averages.items()},
        }


def summarize_week(window: list[DailyRecord]) -> WeeklySummary:
    """Aggregate nutrition and activity over the records in a window.

    Averages divide by the number of records present, not by seven.
    """
    summary = WeeklySummary(
        days_logged=len(window),
        active_days=sum(1 for r in window if r.is_active),
    )
    for kind in MetricKind:
        total = sum(r.value(kind) for r in window)
        summary.totals[kind] = total
        summary.averages[kind] = total / len(window) if window else 0.0
    return summary
