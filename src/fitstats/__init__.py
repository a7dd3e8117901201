"""Personal fitness metrics: energy goals, daily records, weekly view, streaks."""

__version__ = "0.1.0"
