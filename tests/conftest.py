"""Pytest fixtures for fitstats tests."""

from __future__ import annotations

import tempfile
from datetime import date, timedelta
from pathlib import Path

import pytest
import yaml

from fitstats.db.connection import DatabaseConnection
from fitstats.profiles.models import ActivityLevel, Goal, Profile, Sex
from fitstats.tracking.models import DailyRecord

TODAY = date(2026, 10, 19)


@pytest.fixture
def temp_db():
    """Create a temporary database with schema."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    db = DatabaseConnection(db_path)
    db.initialize_schema()

    yield db

    # Cleanup
    db_path.unlink(missing_ok=True)


@pytest.fixture
def bare_db(tmp_path):
    """A database file without the schema; every query fails."""
    return DatabaseConnection(tmp_path / "bare.db")


@pytest.fixture
def sample_profile() -> Profile:
    """70 kg, 175 cm, 30 year old moderately active male trying to lose weight."""
    return Profile(
        weight_kg=70,
        height_cm=175,
        age_years=30,
        sex=Sex.MALE,
        activity_level=ActivityLevel.MODERATE,
        goal=Goal.LOSE,
    )


def make_record(day: date, calories: float = 0, workout_minutes: float = 0, **metrics) -> DailyRecord:
    """Build a record for user 'alice' on a day."""
    return DailyRecord(
        user_id="alice",
        date=day,
        calories=calories,
        workout_minutes=workout_minutes,
        **metrics,
    )


@pytest.fixture
def record():
    """Factory for alice's records: record(day, calories=..., workout_minutes=...)."""
    return make_record


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def sample_history() -> list[DailyRecord]:
    """Ten consecutive active days ending today, shuffled out of order."""
    records = [
        make_record(TODAY - timedelta(days=offset), calories=1500 + offset * 10)
        for offset in range(10)
    ]
    return records[5:] + records[:5]


@pytest.fixture
def cli_config(tmp_path) -> Path:
    """A config.yaml pointing at a temporary database."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.safe_dump({
            "database": {"path": str(tmp_path / "fitstats.db")},
            "user": {"id": "alice"},
        })
    )
    return config_path
