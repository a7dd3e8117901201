"""User profile: the biometric inputs for energy goal calculation."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from fitstats.errors import ValidationError

logger = logging.getLogger(__name__)


class Sex(Enum):
    """Biological sex for BMR calculation."""
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(Enum):
    """Activity level for TDEE calculation."""
    SEDENTARY = "sedentary"          # Little or no exercise
    LIGHT = "light"                  # Light exercise 1-3 days/week
    MODERATE = "moderate"            # Moderate exercise 3-5 days/week
    ACTIVE = "active"                # Hard exercise 6-7 days/week
    VERY_ACTIVE = "veryActive"       # Very hard exercise, physical job


class Goal(Enum):
    """Body weight goal."""
    LOSE = "lose"                    # 500 cal deficit
    MAINTAIN = "maintain"            # TDEE
    GAIN = "gain"                    # 500 cal surplus


# Accepted ranges (inclusive)
WEIGHT_RANGE_KG = (30.0, 300.0)
HEIGHT_RANGE_CM = (100.0, 250.0)
AGE_RANGE_YEARS = (10, 120)


def _parse_enum(enum_cls: type[Enum], value: Any) -> Enum:
    """Parse an enum from its value, its name, or a snake_case spelling."""
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip()
    for member in enum_cls:
        if text == member.value or text.upper() == member.name:
            return member
    squashed = text.replace("_", "").replace("-", "").lower()
    for member in enum_cls:
        if squashed == member.value.lower():
            return member
    choices = ", ".join(m.value for m in enum_cls)
    raise ValidationError(
        f"{enum_cls.__name__} must be one of {choices}, got '{value}'"
    )


def parse_sex(value: Any) -> Sex:
    return _parse_enum(Sex, value)  # type: ignore[return-value]


def parse_activity_level(value: Any) -> ActivityLevel:
    return _parse_enum(ActivityLevel, value)  # type: ignore[return-value]


def parse_goal(value: Any) -> Goal:
    return _parse_enum(Goal, value)  # type: ignore[return-value]


@dataclass
class Profile:
    """Biometric profile for one user.

    Biometrics default to 0, meaning "not set yet". Such a profile can still
    be passed to the energy calculator, which treats it as incomplete.
    """

    weight_kg: float = 0.0
    height_cm: float = 0.0
    age_years: int = 0
    sex: Sex = Sex.MALE
    activity_level: ActivityLevel = ActivityLevel.MODERATE
    goal: Goal = Goal.MAINTAIN
    updated_at: Optional[datetime] = None

    def validation_errors(self) -> list[str]:
        """Return a message per field outside its accepted range."""
        errors: list[str] = []
        checks = (
            ("weight", self.weight_kg, WEIGHT_RANGE_KG, "kg"),
            ("height", self.height_cm, HEIGHT_RANGE_CM, "cm"),
            ("age", self.age_years, AGE_RANGE_YEARS, "years"),
        )
        for name, value, (low, high), unit in checks:
            if not value:
                errors.append(f"{name} is required")
            elif not math.isfinite(value) or not low <= value <= high:
                errors.append(
                    f"{name} must be between {low:g} and {high:g} {unit}, got {value:g}"
                )
        age = self.age_years
        if age and math.isfinite(age) and age != int(age):
            errors.append(f"age must be a whole number of years, got {age:g}")
        return errors

    def validate(self) -> None:
        """Raise ValidationError if any field is missing or out of range."""
        errors = self.validation_errors()
        if errors:
            raise ValidationError("Invalid profile: " + "; ".join(errors), errors)

    def to_document(self) -> dict[str, Any]:
        """Document fields stored in the ``users`` collection."""
        return {
            "weight": self.weight_kg,
            "height": self.height_cm,
            "age": self.age_years,
            "gender": self.sex.value,
            "activityLevel": self.activity_level.value,
            "goal": self.goal.value,
        }

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "Profile":
        """Build a profile from a stored document.

        Unknown enum spellings fall back to the defaults rather than failing,
        so a profile written by another client still loads.
        """
        profile = cls(
            weight_kg=float(data.get("weight") or 0),
            height_cm=float(data.get("height") or 0),
            age_years=int(data.get("age") or 0),
        )

        fallbacks = (
            ("gender", "sex", parse_sex),
            ("activityLevel", "activity_level", parse_activity_level),
            ("goal", "goal", parse_goal),
        )
        for key, attr, parser in fallbacks:
            if data.get(key) is None:
                continue
            try:
                setattr(profile, attr, parser(data[key]))
            except ValidationError:
                logger.warning(
                    "Unknown %s '%s' in profile document, using '%s'",
                    key, data[key], getattr(profile, attr).value,
                )

        updated_at = data.get("updatedAt")
        if updated_at:
            profile.updated_at = datetime.fromisoformat(str(updated_at).replace("Z", "+00:00"))
        return profile
