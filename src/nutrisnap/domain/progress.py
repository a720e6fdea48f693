"""Domain models for weight and calorie progress."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from nutrisnap.domain.errors import NutritionInputError


@dataclass(frozen=True)
class WeightLogEntry:
    """A body weight measurement for a day."""

    id: UUID | None
    day: date
    weight_kg: float
    user_id: UUID | None = None

    def __post_init__(self) -> None:
        if self.weight_kg is None or self.weight_kg <= 0:
            raise NutritionInputError(
                "weight_kg", f"weight_kg must be positive, got {self.weight_kg}"
            )


@dataclass(frozen=True)
class DayCalories:
    """Calories consumed on a day compared to the target."""

    day: date
    consumed: float
    target: int
    met_goal: bool


@dataclass(frozen=True)
class ProgressSummary:
    """Calorie adherence and weight trend over a date range."""

    days: list[DayCalories]
    days_on_target: int
    average_calories: int
    latest_weight_kg: float | None
    weight_change_kg: float | None
    weight_change_direction: str | None
