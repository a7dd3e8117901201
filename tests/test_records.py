"""Tests for daily record models, metric kinds and day keys."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from fitstats.errors import ValidationError
from fitstats.tracking.dates import (
    local_today,
    parse_day,
    record_key,
    resolve_timezone,
    to_local_date,
)
from fitstats.tracking.models import DailyRecord, MetricKind, coerce_metric_value


class TestMetricKind:
    """Tests for parsing metric names at the boundary."""

    @pytest.mark.parametrize(
        "text",
        ["workoutMinutes", "WORKOUT_MINUTES", "workout_minutes", "workout-minutes", " workoutminutes "],
    )
    def test_spellings(self, text) -> None:
        assert MetricKind.parse(text) is MetricKind.WORKOUT_MINUTES

    def test_simple_names(self) -> None:
        assert MetricKind.parse("calories") is MetricKind.CALORIES
        assert MetricKind.parse("Steps") is MetricKind.STEPS

    def test_enum_passthrough(self) -> None:
        assert MetricKind.parse(MetricKind.FATS) is MetricKind.FATS

    @pytest.mark.parametrize("text", ["calorie", "weight", "", "workout"])
    def test_unknown_metric(self, text) -> None:
        with pytest.raises(ValidationError, match="Unknown metric"):
            MetricKind.parse(text)

    def test_integer_metrics(self) -> None:
        assert {k for k in MetricKind if k.is_integer} == {MetricKind.WATER, MetricKind.STEPS}


class TestCoerceMetricValue:
    """Tests for metric value validation."""

    def test_float_metric(self) -> None:
        assert coerce_metric_value(MetricKind.PROTEIN, "50.5") == 50.5

    def test_integer_metric(self) -> None:
        value = coerce_metric_value(MetricKind.STEPS, "8000")
        assert value == 8000
        assert isinstance(value, int)

    def test_integral_float_for_integer_metric(self) -> None:
        assert coerce_metric_value(MetricKind.WATER, 3.0) == 3

    def test_fractional_integer_metric(self) -> None:
        with pytest.raises(ValidationError, match="whole number"):
            coerce_metric_value(MetricKind.WATER, 2.5)

    @pytest.mark.parametrize("value", [-1, "-0.5"])
    def test_negative(self, value) -> None:
        with pytest.raises(ValidationError, match="negative"):
            coerce_metric_value(MetricKind.CALORIES, value)

    @pytest.mark.parametrize("value", ["abc", None, True, "nan", "inf"])
    def test_not_a_number(self, value) -> None:
        with pytest.raises(ValidationError):
            coerce_metric_value(MetricKind.CALORIES, value)

    def test_zero_allowed(self) -> None:
        assert coerce_metric_value(MetricKind.CALORIES, 0) == 0


class TestDailyRecord:
    """Tests for DailyRecord."""

    def test_key(self) -> None:
        record = DailyRecord(user_id="alice", date=date(2026, 10, 19))
        assert record.key == "alice_2026-10-19"

    @pytest.mark.parametrize(
        "calories,workout,expected",
        [(0, 0, False), (1, 0, True), (0, 1, True), (500, 30, True)],
    )
    def test_is_active(self, calories, workout, expected) -> None:
        record = DailyRecord(
            user_id="alice", date=date(2026, 10, 19), calories=calories, workout_minutes=workout
        )
        assert record.is_active is expected

    def test_empty_is_all_zero(self) -> None:
        record = DailyRecord.empty("alice", date(2026, 10, 19))
        assert all(record.value(kind) == 0 for kind in MetricKind)
        assert not record.is_active

    def test_from_document_missing_metrics_are_zero(self) -> None:
        record = DailyRecord.from_document({
            "userId": "alice",
            "date": "2026-10-19",
            "protein": 50,
            "steps": 4000.0,
            "updatedAt": "2026-10-19T08:30:00.000Z",
        })
        assert record.protein == 50
        assert record.steps == 4000
        assert isinstance(record.steps, int)
        assert record.calories == 0
        assert record.updated_at == datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "data",
        [
            {"userId": "alice", "date": "2026-10-19", "calories": "lots"},
            {"userId": "alice", "date": "2026-10-19", "steps": [1, 2]},
            {"userId": "alice", "date": "2026-10-19", "water": True},
            {"userId": "alice", "date": "2026-10-19", "protein": "nan"},
            {"userId": "alice", "date": "yesterday"},
            {"date": "2026-10-19"},
            {"userId": "alice"},
        ],
    )
    def test_from_document_malformed(self, data) -> None:
        with pytest.raises(ValueError):
            DailyRecord.from_document(data)

    def test_to_dict_uses_field_names(self) -> None:
        record = DailyRecord(user_id="alice", date=date(2026, 10, 19), workout_minutes=45)
        data = record.to_dict()
        assert data["workoutMinutes"] == 45
        assert data["date"] == "2026-10-19"
        assert data["userId"] == "alice"


class TestDates:
    """Tests for day keys and day parsing."""

    def test_record_key(self) -> None:
        assert record_key("alice", date(2026, 1, 5)) == "alice_2026-01-05"

    def test_record_key_truncates_datetime(self) -> None:
        assert record_key("alice", datetime(2026, 1, 5, 23, 59)) == "alice_2026-01-05"

    def test_record_key_requires_user(self) -> None:
        with pytest.raises(ValidationError):
            record_key("", date(2026, 1, 5))

    def test_aware_datetime_converted_to_zone(self) -> None:
        moment = datetime(2026, 1, 5, 23, 30, tzinfo=timezone.utc)
        assert to_local_date(moment, "Asia/Tokyo") == date(2026, 1, 6)
        assert to_local_date(moment, "America/New_York") == date(2026, 1, 5)

    def test_local_today_in_zone(self) -> None:
        today_utc = datetime.now(timezone.utc).date()
        assert abs((local_today("UTC") - today_utc).days) <= 1
        assert local_today(None) == date.today()

    def test_unknown_timezone(self) -> None:
        with pytest.raises(ValidationError, match="Unknown timezone"):
            resolve_timezone("Mars/Olympus")

    def test_parse_day(self) -> None:
        assert parse_day("2026-10-19") == date(2026, 10, 19)
        assert parse_day(date(2026, 10, 19)) == date(2026, 10, 19)

    def test_parse_day_invalid(self) -> None:
        with pytest.raises(ValidationError, match="YYYY-MM-DD"):
            parse_day("19/10/2026")

    def test_parse_day_timestamp(self) -> None:
        moment = datetime(2026, 10, 19, 12, 0)
        assert parse_day(moment.isoformat()) == date(2026, 10, 19)
        assert parse_day((moment + timedelta(hours=1)).isoformat()) == date(2026, 10, 19)
