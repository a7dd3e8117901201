"""Tests for the weekly window, chart and summary."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from fitstats.tracking.models import MetricKind
from fitstats.tracking.weekly import (
    summarize_week,
    weekly_chart,
    weekly_window,
)


class TestWeeklyWindow:
    """Tests for weekly_window."""

    def test_empty_history(self) -> None:
        assert weekly_window([]) == []

    def test_keeps_seven_most_recent_ascending(self, sample_history, today) -> None:
        window = weekly_window(sample_history)
        assert len(window) == 7
        assert [r.date for r in window] == [today - timedelta(days=d) for d in range(6, -1, -1)]

    def test_short_history(self, record, today) -> None:
        records = [record(today), record(today - timedelta(days=1))]
        window = weekly_window(records)
        assert [r.date for r in window] == [today - timedelta(days=1), today]

    def test_no_gap_filling(self, record, today) -> None:
        """Missing days are skipped; the window reaches further back instead."""
        days = [0, 1, 5, 6, 9, 12, 20, 30, 31]
        records = [record(today - timedelta(days=d), calories=100) for d in days]
        window = weekly_window(records)

        assert len(window) == 7
        assert window[0].date == today - timedelta(days=20)
        assert window[-1].date == today
        assert all(a.date < b.date for a, b in zip(window, window[1:]))


class TestWeeklyChart:
    """Tests for weekly_chart."""

    def test_labels_follow_record_weekday(self, record) -> None:
        # 2026-10-19 is a Monday; skip Tuesday
        window = [
            record(date(2026, 10, 19), calories=1000),
            record(date(2026, 10, 21), calories=2000),
        ]
        bars = weekly_chart(window, calorie_goal=1500)
        assert [b.label for b in bars] == ["Mon", "Wed"]

    def test_scaled_to_max_calories(self, record, today) -> None:
        window = [record(today - timedelta(days=1), calories=1000), record(today, calories=4000)]
        bars = weekly_chart(window, calorie_goal=2000)
        assert bars[0].scale == pytest.approx(0.25)
        assert bars[1].scale == pytest.approx(1.0)

    def test_scaled_to_goal_when_goal_is_higher(self, record, today) -> None:
        window = [record(today, calories=1000)]
        bars = weekly_chart(window, calorie_goal=2000)
        assert bars[0].scale == pytest.approx(0.5)

    def test_empty_window(self) -> None:
        assert weekly_chart([], calorie_goal=2000) == []

    def test_all_zero(self, record, today) -> None:
        bars = weekly_chart([record(today)], calorie_goal=0)
        assert bars[0].scale == 0.0


class TestSummarizeWeek:
    """Tests for summarize_week."""

    def test_totals_and_averages(self, record, today) -> None:
        window = [
            record(today - timedelta(days=2), calories=2000, steps=8000, water=6),
            record(today - timedelta(days=1), workout_minutes=30, steps=4000),
            record(today, calories=1000, water=8),
        ]
        summary = summarize_week(window)

        assert summary.days_logged == 3
        assert summary.active_days == 3
        assert summary.totals[MetricKind.CALORIES] == 3000
        assert summary.totals[MetricKind.STEPS] == 12000
        assert summary.averages[MetricKind.CALORIES] == pytest.approx(1000)
        assert summary.averages[MetricKind.WATER] == pytest.approx(14 / 3)
        assert summary.averages[MetricKind.WORKOUT_MINUTES] == pytest.approx(10)

    def test_inactive_days_counted_separately(self, record, today) -> None:
        summary = summarize_week([record(today, protein=50), record(today - timedelta(days=1), calories=10)])
        assert summary.days_logged == 2
        assert summary.active_days == 1

    def test_empty(self) -> None:
        summary = summarize_week([])
        assert summary.days_logged == 0
        assert summary.averages[MetricKind.CALORIES] == 0.0
        assert summary.to_dict()["totals"]["workoutMinutes"] == 0
