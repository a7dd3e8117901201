"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".fitstats"


def _default_db_path() -> Path:
    """Return the default database path."""
    return _default_config_dir() / "fitstats.db"


def default_config_path() -> Path:
    """Return the default config.yaml path."""
    return _default_config_dir() / "config.yaml"


@dataclass
class DatabaseConfig:
    """Database configuration."""

    path: Path = field(default_factory=_default_db_path)


@dataclass
class UserConfig:
    """Identity used when no --user is given."""

    id: str = "local"


@dataclass
class TrackingConfig:
    """Day boundary configuration."""

    timezone: Optional[str] = None  # IANA name; None = system local time


@dataclass
class TargetsConfig:
    """Daily activity goals."""

    water: int = 8
    steps: int = 10000
    workout_minutes: int = 30


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"


@dataclass
class Settings:
    """Main application settings."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    user: UserConfig = field(default_factory=UserConfig)
    tracking: TrackingConfig = field(default_factory=TrackingConfig)
    targets: TargetsConfig = field(default_factory=TargetsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.fitstats/config.yaml

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = default_config_path()

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        # Parse database config
        if "database" in data:
            db_data = data["database"] or {}
            if "path" in db_data:
                settings.database.path = Path(db_data["path"]).expanduser()

        # Parse user config
        if "user" in data:
            user_data = data["user"] or {}
            if "id" in user_data:
                settings.user.id = str(user_data["id"])

        # Parse tracking config
        if "tracking" in data:
            tracking_data = data["tracking"] or {}
            if "timezone" in tracking_data:
                settings.tracking.timezone = tracking_data["timezone"]

        # Parse targets
        if "targets" in data:
            targets_data = data["targets"] or {}
            if "water" in targets_data:
                settings.targets.water = int(targets_data["water"])
            if "steps" in targets_data:
                settings.targets.steps = int(targets_data["steps"])
            if "workout_minutes" in targets_data:
                settings.targets.workout_minutes = int(targets_data["workout_minutes"])

        # Parse logging config
        if "logging" in data:
            logging_data = data["logging"] or {}
            if "level" in logging_data:
                settings.logging.level = str(logging_data["level"])

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.fitstats/config.yaml
        """
        if config_path is None:
            config_path = default_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "database": {
                "path": str(self.database.path),
            },
            "user": {
                "id": self.user.id,
            },
            "tracking": {
                "timezone": self.tracking.timezone,
            },
            "targets": {
                "water": self.targets.water,
                "steps": self.targets.steps,
                "workout_minutes": self.targets.workout_minutes,
            },
            "logging": {
                "level": self.logging.level,
            },
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Optional[Path] = None) -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings


def set_settings(settings: Optional[Settings]) -> None:
    """Replace the global settings instance (None forces a reload on next use)."""
    global _settings
    _settings = settings
