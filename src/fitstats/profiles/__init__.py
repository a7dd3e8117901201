"""User profile and energy goal calculation."""

from __future__ import annotations

from fitstats.profiles.body_calc import (
    EnergyGoals,
    MacroTargets,
    NutritionTargets,
    compute_goals,
    compute_targets,
)
from fitstats.profiles.models import ActivityLevel, Goal, Profile, Sex

__all__ = [
    "ActivityLevel",
    "EnergyGoals",
    "Goal",
    "MacroTargets",
    "NutritionTargets",
    "Profile",
    "Sex",
    "compute_goals",
    "compute_targets",
]
