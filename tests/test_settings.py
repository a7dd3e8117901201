"""Tests for settings loading and saving."""

from __future__ import annotations

from pathlib import Path

import yaml

from fitstats.config.settings import Settings


class TestSettings:
    """Tests for Settings.load / Settings.save."""

    def test_defaults_when_missing(self, tmp_path) -> None:
        settings = Settings.load(tmp_path / "missing.yaml")
        assert settings.user.id == "local"
        assert settings.tracking.timezone is None
        assert settings.targets.water == 8
        assert settings.targets.steps == 10000
        assert settings.targets.workout_minutes == 30
        assert settings.logging.level == "WARNING"
        assert settings.database.path.name == "fitstats.db"

    def test_load_values(self, tmp_path) -> None:
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            yaml.safe_dump({
                "database": {"path": "~/data/stats.db"},
                "user": {"id": 42},
                "tracking": {"timezone": "Europe/Paris"},
                "targets": {"steps": "12000"},
                "logging": {"level": "debug"},
            })
        )
        settings = Settings.load(config_path)

        assert settings.database.path == Path("~/data/stats.db").expanduser()
        assert settings.user.id == "42"
        assert settings.tracking.timezone == "Europe/Paris"
        assert settings.targets.steps == 12000
        assert settings.targets.water == 8
        assert settings.logging.level == "debug"

    def test_empty_file(self, tmp_path) -> None:
        config_path = tmp_path / "config.yaml"
        config_path.write_text("")
        assert Settings.load(config_path) == Settings()

    def test_save_then_load(self, tmp_path) -> None:
        config_path = tmp_path / "nested" / "config.yaml"
        settings = Settings()
        settings.database.path = tmp_path / "db.sqlite"
        settings.user.id = "alice"
        settings.targets.water = 10
        settings.save(config_path)

        assert Settings.load(config_path) == settings
