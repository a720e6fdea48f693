"""Domain models for the daily food ledger."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from nutrisnap.domain.errors import NutritionInputError


@dataclass(frozen=True)
class FoodLogEntry:
    """One recorded food item."""

    id: UUID | None
    meal_type: str
    name: str
    quantity: float
    unit: str
    calories: float
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    day: date | None = None
    user_id: UUID | None = None

    def __post_init__(self) -> None:
        if not self.meal_type:
            raise NutritionInputError("meal_type", "meal_type is required")
        if not self.name or not self.name.strip():
            raise NutritionInputError("name", "name is required")
        if not self.unit:
            raise NutritionInputError("unit", "unit is required")
        if self.quantity is None or self.quantity <= 0:
            raise NutritionInputError(
                "quantity", f"quantity must be positive, got {self.quantity}"
            )
        for name in ("calories", "protein_g", "carbs_g", "fat_g"):
            value = getattr(self, name)
            if value is None or value < 0:
                raise NutritionInputError(
                    name, f"{name} cannot be negative, got {value}"
                )


@dataclass(frozen=True)
class MealSummary:
    """Entries and calorie total for one meal slot."""

    meal_type: str
    entries: tuple[FoodLogEntry, ...] = ()
    total_calories: float = 0.0


@dataclass(frozen=True)
class DailySummary:
    """Day totals and progress against the calorie target."""

    total_calories: float
    total_protein_g: float
    total_carbs_g: float
    total_fat_g: float
    target_calories: int
    remaining_calories: float
    progress_pct: float


@dataclass(frozen=True)
class DayLedger:
    """Meal summaries in canonical slot order plus the day summary."""

    meals: list[MealSummary]
    daily: DailySummary
