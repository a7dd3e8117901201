"""Data models for daily metric records."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Union

from fitstats.errors import ValidationError
from fitstats.tracking.dates import parse_day, record_key


class MetricKind(Enum):
    """Metrics tracked per day. Values are the stored field names."""

    CALORIES = "calories"
    PROTEIN = "protein"
    CARBS = "carbs"
    FATS = "fats"
    WATER = "water"                       # standard servings (glasses)
    STEPS = "steps"
    WORKOUT_MINUTES = "workoutMinutes"

    @property
    def is_integer(self) -> bool:
        return self in (MetricKind.WATER, MetricKind.STEPS)

    @property
    def attribute(self) -> str:
        """Name of the matching DailyRecord attribute."""
        return self.name.lower()

    @classmethod
    def parse(cls, text: Union[str, "MetricKind"]) -> "MetricKind":
        """Parse a metric from its field name or enum name.

        Accepts ``workoutMinutes``, ``WORKOUT_MINUTES``, ``workout_minutes``
        and ``workout-minutes``.
        """
        if isinstance(text, cls):
            return text
        squashed = str(text).strip().replace("_", "").replace("-", "").lower()
        for member in cls:
            if squashed == member.value.lower():
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValidationError(f"Unknown metric '{text}', expected one of: {choices}")


# Display units for each metric
METRIC_UNITS = {
    MetricKind.CALORIES: "kcal",
    MetricKind.PROTEIN: "g",
    MetricKind.CARBS: "g",
    MetricKind.FATS: "g",
    MetricKind.WATER: "glasses",
    MetricKind.STEPS: "",
    MetricKind.WORKOUT_MINUTES: "min",
}


def coerce_metric_value(kind: MetricKind, value: Any) -> Union[int, float]:
    """Validate a metric value and convert it to the metric's number type.

    Raises:
        ValidationError: non-numeric, negative, non-finite, or fractional
            value for an integer metric
    """
    if isinstance(value, bool):
        raise ValidationError(f"{kind.value} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{kind.value} must be a number, got {value!r}") from e

    if not math.isfinite(number):
        raise ValidationError(f"{kind.value} must be a finite number, got {value!r}")
    if number < 0:
        raise ValidationError(f"{kind.value} cannot be negative, got {value!r}")

    if kind.is_integer:
        if not number.is_integer():
            raise ValidationError(f"{kind.value} must be a whole number, got {value!r}")
        return int(number)
    return number


@dataclass
class DailyRecord:
    """Metrics logged by one user for one calendar day."""

    user_id: str
    date: date
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0
    water: int = 0
    steps: int = 0
    workout_minutes: float = 0.0
    updated_at: Optional[datetime] = None

    @property
    def key(self) -> str:
        return record_key(self.user_id, self.date)

    @property
    def is_active(self) -> bool:
        """A day counts toward a streak if the user worked out or ate anything."""
        return self.workout_minutes > 0 or self.calories > 0

    def value(self, kind: MetricKind) -> Union[int, float]:
        return getattr(self, kind.attribute)

    @classmethod
    def empty(cls, user_id: str, day: date) -> "DailyRecord":
        """All-zero view of a day with no record."""
        return cls(user_id=user_id, date=day)

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "DailyRecord":
        """Build a record from a ``stats`` document. Missing metrics read as 0.

        Raises:
            ValueError: the document has no owner or day, or a metric is not
                a finite number
        """
        try:
            record = cls(user_id=str(data["userId"]), date=parse_day(data["date"]))
        except KeyError as e:
            raise ValueError(f"stats document is missing {e}") from e
        except ValidationError as e:
            raise ValueError(str(e)) from e

        for kind in MetricKind:
            raw = data.get(kind.value)
            if raw is None:
                continue
            if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
                raise ValueError(f"{kind.value} must be a number, got {raw!r}")
            number = float(raw)
            if not math.isfinite(number):
                raise ValueError(f"{kind.value} must be a finite number, got {raw!r}")
            setattr(record, kind.attribute, int(number) if kind.is_integer else number)

        updated_at = data.get("updatedAt")
        if updated_at:
            record.updated_at = datetime.fromisoformat(str(updated_at).replace("Z", "+00:00"))
        return record

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly view keyed by stored field names."""
        data: dict[str, Any] = {"userId": self.user_id, "date": self.date.isoformat()}
        for kind in MetricKind:
            data[kind.value] = self.value(kind)
        data["updatedAt"] = self.updated_at.isoformat() if self.updated_at else None
        return data
