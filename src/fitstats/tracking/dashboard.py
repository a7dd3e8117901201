"""Statistics dashboard: every derived view for one user and one day.

``build_dashboard`` is pure and takes its state explicitly. ``load_dashboard``
does the reads, and degrades each failed read to an empty view plus an error
message instead of showing stale or partial history.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from fitstats.errors import ReadError
from fitstats.profiles.body_calc import NutritionTargets, compute_targets
from fitstats.profiles.models import Profile
from fitstats.tracking.models import METRIC_UNITS, DailyRecord, MetricKind
from fitstats.tracking.queries import ProfileQueries, StatsQueries
from fitstats.tracking.streak import compute_streak
from fitstats.tracking.weekly import (
    ChartBar,
    WeeklySummary,
    summarize_week,
    weekly_chart,
    weekly_window,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyTargets:
    """Daily activity goals that don't depend on the profile."""

    water: int = 8                  # glasses
    steps: int = 10000
    workout_minutes: int = 30


@dataclass(frozen=True)
class MetricProgress:
    """Today's value of a metric against its goal."""

    metric: MetricKind
    value: float
    goal: float
    percentage: float               # capped at 100

    @property
    def unit(self) -> str:
        return METRIC_UNITS[self.metric]


def metric_progress(value: float, goal: float) -> float:
    """Percent of goal reached, capped at 100; 0 when there is no goal."""
    if goal <= 0:
        return 0.0
    return min(value / goal * 100, 100.0)


def metric_goals(targets: NutritionTargets, daily: DailyTargets) -> dict[MetricKind, float]:
    """Goal for every metric kind."""
    return {
        MetricKind.CALORIES: targets.goals.calorie_goal,
        MetricKind.PROTEIN: targets.macros.protein,
        MetricKind.CARBS: targets.macros.carbs,
        MetricKind.FATS: targets.macros.fats,
        MetricKind.WATER: daily.water,
        MetricKind.STEPS: daily.steps,
        MetricKind.WORKOUT_MINUTES: daily.workout_minutes,
    }


@dataclass
class StatsDashboard:
    """Derived views shown on the statistics screen."""

    user_id: str
    day: date
    profile: Optional[Profile]
    targets: NutritionTargets
    today: DailyRecord
    progress: list[MetricProgress]
    window: list[DailyRecord]
    chart: list[ChartBar]
    week: WeeklySummary
    streak: int
    errors: list[str] = field(default_factory=list)
    profile_unavailable: bool = False

    @property
    def needs_setup(self) -> bool:
        """True when the user has no profile yet."""
        return self.profile is None and not self.profile_unavailable

    def progress_for(self, metric: MetricKind) -> MetricProgress:
        for item in self.progress:
            if item.metric == metric:
                return item
        raise KeyError(metric)


def build_dashboard(
    user_id: str,
    profile: Optional[Profile],
    today_record: Optional[DailyRecord],
    history: list[DailyRecord],
    day: date,
    daily_targets: Optional[DailyTargets] = None,
) -> StatsDashboard:
    """Compute every dashboard view from explicit inputs.

    Args:
        user_id: User the views belong to
        profile: User profile, or None before setup (default goals apply)
        today_record: Record for ``day``, or None if nothing was logged
        history: All of the user's records, any order
        day: The current calendar day
        daily_targets: Activity goals (defaults when None)
    """
    daily_targets = daily_targets or DailyTargets()
    targets = compute_targets(profile or Profile())
    today = today_record or DailyRecord.empty(user_id, day)

    goals = metric_goals(targets, daily_targets)
    progress = [
        MetricProgress(
            metric=kind,
            value=today.value(kind),
            goal=goals[kind],
            percentage=metric_progress(today.value(kind), goals[kind]),
        )
        for kind in MetricKind
    ]

    window = weekly_window(history)
    return StatsDashboard(
        user_id=user_id,
        day=day,
        profile=profile,
        targets=targets,
        today=today,
        progress=progress,
        window=window,
        chart=weekly_chart(window, targets.goals.calorie_goal),
        week=summarize_week(window),
        streak=compute_streak(history, day),
    )


def load_dashboard(
    conn: sqlite3.Connection,
    user_id: str,
    day: date,
    daily_targets: Optional[DailyTargets] = None,
) -> StatsDashboard:
    """Read a user's profile and records and build the dashboard.

    Each read is independent. A failed read contributes an absent profile,
    an absent day record, or an empty history, and adds a message to
    ``errors`` so the caller can offer a retry.
    """
    errors: list[str] = []

    profile: Optional[Profile] = None
    profile_unavailable = False
    try:
        profile = ProfileQueries.get_profile(conn, user_id)
    except ReadError as e:
        logger.warning("Profile unavailable for %s: %s", user_id, e)
        profile_unavailable = True
        errors.append("Could not load profile")

    today_record: Optional[DailyRecord] = None
    try:
        today_record = StatsQueries.load_record(conn, user_id, day)
    except ReadError as e:
        logger.warning("Today's record unavailable for %s: %s", user_id, e)
        errors.append("Could not load today's stats")

    history: list[DailyRecord] = []
    try:
        history = StatsQueries.load_history(conn, user_id)
    except ReadError as e:
        logger.warning("History unavailable for %s: %s", user_id, e)
        errors.append("Could not load history; weekly view and streak are empty")

    dashboard = build_dashboard(user_id, profile, today_record, history, day, daily_targets)
    dashboard.errors.extend(errors)
    dashboard.profile_unavailable = profile_unavailable
    return dashboard
