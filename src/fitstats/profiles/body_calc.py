"""Energy expenditure and calorie goal calculator.

Calculates BMR, TDEE and a daily calorie goal from a user profile, plus the
macronutrient targets derived from that goal.

Uses the Mifflin-St Jeor equation for BMR as it's widely validated for
calculating resting metabolic rate.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from fitstats.profiles.models import ActivityLevel, Goal, Profile, Sex


# Activity level multipliers (Harris-Benedict activity factors)
ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.55

# Calorie adjustments by goal (deficit or surplus from TDEE)
GOAL_ADJUSTMENTS = {
    Goal.LOSE: -500,
    Goal.MAINTAIN: 0,
    Goal.GAIN: 500,
}

# Used whenever the profile is too incomplete to compute a TDEE
FALLBACK_CALORIE_GOAL = 2000

# Macro split of the calorie goal and energy density (kcal per gram)
PROTEIN_GRAMS_PER_KG = 2
FALLBACK_PROTEIN_GRAMS = 140
CARBS_CALORIE_SHARE = 0.4
FATS_CALORIE_SHARE = 0.3
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up.

    Python's round() rounds halves to even; goals must match the half-up
    rounding already shown to users.
    """
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class EnergyGoals:
    """Energy expenditure and calorie goal for one profile."""

    bmr: float          # 0 means "profile incomplete", not a real BMR
    tdee: int
    calorie_goal: int

    @property
    def is_complete(self) -> bool:
        return self.bmr > 0


@dataclass(frozen=True)
class MacroTargets:
    """Daily macronutrient targets in grams."""

    protein: int
    carbs: int
    fats: int


@dataclass(frozen=True)
class NutritionTargets:
    """Energy goals together with macro targets."""

    goals: EnergyGoals
    macros: MacroTargets

    def summary(self) -> str:
        """Human-readable summary of targets."""
        if not self.goals.is_complete:
            lines = [f"Profile incomplete, using default goal of {self.goals.calorie_goal} kcal/day"]
        else:
            lines = [
                f"BMR: {self.goals.bmr:.0f} kcal/day",
                f"TDEE: {self.goals.tdee} kcal/day",
                f"Target: {self.goals.calorie_goal} kcal/day "
                f"({self.goals.calorie_goal - self.goals.tdee:+d} from TDEE)",
            ]
        lines.append(
            f"Protein: {self.macros.protein}g  Carbs: {self.macros.carbs}g  "
            f"Fats: {self.macros.fats}g"
        )
        return "\n".join(lines)


def calculate_bmr(
    weight_kg: Optional[float],
    height_cm: Optional[float],
    age_years: Optional[int],
    sex: Sex,
) -> float:
    """Calculate Basal Metabolic Rate using Mifflin-St Jeor equation.

    Args:
        weight_kg: Weight in kilograms
        height_cm: Height in centimeters
        age_years: Age in years
        sex: Biological sex

    Returns:
        BMR in calories per day, or 0.0 if weight, height or age is missing
    """
    if not weight_kg or not height_cm or not age_years:
        return 0.0

    if sex == Sex.MALE:
        return (10 * weight_kg) + (6.25 * height_cm) - (5 * age_years) + 5
    return (10 * weight_kg) + (6.25 * height_cm) - (5 * age_years) - 161


def calculate_tdee(bmr: float, activity_level: Optional[ActivityLevel]) -> int:
    """Calculate Total Daily Energy Expenditure, rounded to whole calories.

    Args:
        bmr: Basal Metabolic Rate
        activity_level: Activity level; unknown levels count as moderate

    Returns:
        TDEE in calories per day
    """
    multiplier = ACTIVITY_MULTIPLIERS.get(activity_level, DEFAULT_ACTIVITY_MULTIPLIER)  # type: ignore[arg-type]
    return round_half_up(bmr * multiplier)


def calculate_calorie_goal(tdee: int, goal: Optional[Goal]) -> int:
    """Daily calorie goal for a TDEE and weight goal."""
    if tdee == 0:
        return FALLBACK_CALORIE_GOAL
    return tdee + GOAL_ADJUSTMENTS.get(goal, 0)  # type: ignore[arg-type]


def calculate_macro_targets(calorie_goal: int, weight_kg: Optional[float]) -> MacroTargets:
    """Derive protein, carb and fat targets (grams) from the calorie goal."""
    if weight_kg:
        protein = round_half_up(weight_kg * PROTEIN_GRAMS_PER_KG)
    else:
        protein = FALLBACK_PROTEIN_GRAMS

    return MacroTargets(
        protein=protein,
        carbs=round_half_up(calorie_goal * CARBS_CALORIE_SHARE / KCAL_PER_GRAM_CARBS),
        fats=round_half_up(calorie_goal * FATS_CALORIE_SHARE / KCAL_PER_GRAM_FAT),
    )


def compute_goals(profile: Profile) -> EnergyGoals:
    """Compute BMR, TDEE and calorie goal for a profile.

    Pure and deterministic. Must be re-evaluated whenever the profile changes.
    """
    bmr = calculate_bmr(
        profile.weight_kg, profile.height_cm, profile.age_years, profile.sex
    )
    tdee = calculate_tdee(bmr, profile.activity_level)
    return EnergyGoals(
        bmr=bmr,
        tdee=tdee,
        calorie_goal=calculate_calorie_goal(tdee, profile.goal),
    )


def compute_targets(profile: Profile) -> NutritionTargets:
    """Compute energy goals and macro targets for a profile."""
    goals = compute_goals(profile)
    return NutritionTargets(
        goals=goals,
        macros=calculate_macro_targets(goals.calorie_goal, profile.weight_kg),
    )


def targets_to_dict(targets: NutritionTargets) -> dict:
    """Convert NutritionTargets to dict for JSON output."""
    return {
        "calories": {
            "goal": targets.goals.calorie_goal,
        },
        "protein": {
            "goal": targets.macros.protein,
        },
        "carbs": {
            "goal": targets.macros.carbs,
        },
        "fats": {
            "goal": targets.macros.fats,
        },
        "reference": {
            "bmr": targets.goals.bmr,
            "tdee": targets.goals.tdee,
            "profile_complete": targets.goals.is_complete,
        },
    }
