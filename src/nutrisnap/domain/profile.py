"""Biometric, goal and target models for a user profile."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from nutrisnap.domain.errors import NutritionInputError


class Sex(Enum):
    """Sex as collected during onboarding."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(Enum):
    """Weekly activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    EXTREME = "extreme"


class Goal(Enum):
    """Body composition goal."""

    LOSE_WEIGHT = "lose_weight"
    MAINTAIN = "maintain"
    GAIN_MUSCLE = "gain_muscle"


AGE_RANGE = (14, 120)
HEIGHT_CM_RANGE = (100.0, 250.0)
WEIGHT_KG_RANGE = (30.0, 300.0)
BODY_FAT_PCT_RANGE = (5.0, 50.0)

E = TypeVar("E", bound=Enum)


def parse_enum(enum_type: type[E], value: object, field: str) -> E:
    """Return the enum member for a raw value or raise a field error."""
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise NutritionInputError(
            field, f"{field} must be one of {allowed}, got {value!r}"
        ) from None


def check_range(
    field: str, value: float | None, bounds: tuple[float, float]
) -> None:
    """Raise when a required numeric field is missing or out of bounds."""
    low, high = bounds
    if value is None:
        raise NutritionInputError(field, f"{field} is required")
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise NutritionInputError(field, f"{field} must be a number, got {value!r}")
    if not low <= value <= high:
        raise NutritionInputError(
            field, f"{field} must be between {low:g} and {high:g}, got {value}"
        )


def check_age(value: object) -> None:
    """Raise unless ``value`` is a whole number of years within range."""
    if value is not None and (not isinstance(value, int) or isinstance(value, bool)):
        raise NutritionInputError(
            "age_years", f"age_years must be an integer, got {value!r}"
        )
    check_range("age_years", value, AGE_RANGE)


_ENUM_FIELDS: dict[str, type[Enum]] = {
    "sex": Sex,
    "activity_level": ActivityLevel,
    "goal": Goal,
}
_RANGE_FIELDS = {
    "height_cm": HEIGHT_CM_RANGE,
    "weight_kg": WEIGHT_KG_RANGE,
    "target_weight_kg": WEIGHT_KG_RANGE,
    "target_body_fat_pct": BODY_FAT_PCT_RANGE,
}
_TEXT_FIELDS = ("name", "profession")


def normalize_profile_fields(values: Mapping[str, object]) -> dict[str, object]:
    """Validate profile answers one field at a time.

    ``None`` clears a field. Enum answers are returned as their string value.
    """
    normalized: dict[str, object] = {}
    for name, value in values.items():
        normalized[name] = None if value is None else _normalize_field(name, value)
    return normalized


def _normalize_field(name: str, value: object) -> object:
    if name in _ENUM_FIELDS:
        return parse_enum(_ENUM_FIELDS[name], value, name).value
    if name == "age_years":
        check_age(value)
        return value
    if name in _RANGE_FIELDS:
        check_range(name, value, _RANGE_FIELDS[name])
        return value
    if name in _TEXT_FIELDS:
        if not isinstance(value, str):
            raise NutritionInputError(name, f"{name} must be text, got {value!r}")
        return value
    raise NutritionInputError(name, f"unknown profile field {name!r}")


@dataclass(frozen=True)
class BiometricProfile:
    """Body measurements needed for the metabolic rate estimate."""

    sex: Sex
    age_years: int
    height_cm: float
    weight_kg: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "sex", parse_enum(Sex, self.sex, "sex"))
        check_age(self.age_years)
        check_range("height_cm", self.height_cm, HEIGHT_CM_RANGE)
        check_range("weight_kg", self.weight_kg, WEIGHT_KG_RANGE)


@dataclass(frozen=True)
class GoalProfile:
    """Activity level and goal used to scale energy expenditure."""

    activity_level: ActivityLevel
    goal: Goal
    target_weight_kg: float | None = None
    target_body_fat_pct: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "activity_level",
            parse_enum(ActivityLevel, self.activity_level, "activity_level"),
        )
        object.__setattr__(self, "goal", parse_enum(Goal, self.goal, "goal"))
        if self.target_weight_kg is not None:
            check_range("target_weight_kg", self.target_weight_kg, WEIGHT_KG_RANGE)
        if self.target_body_fat_pct is not None:
            check_range(
                "target_body_fat_pct", self.target_body_fat_pct, BODY_FAT_PCT_RANGE
            )


@dataclass(frozen=True)
class NutritionTargets:
    """Daily calorie and macro targets."""

    calories: int
    protein_g: int
    carbs_g: int
    fat_g: int

    def __post_init__(self) -> None:
        if self.calories is None or self.calories <= 0:
            raise NutritionInputError(
                "calories", f"target calories must be positive, got {self.calories}"
            )
        for field in ("protein_g", "carbs_g", "fat_g"):
            value = getattr(self, field)
            if value is None or value < 0:
                raise NutritionInputError(
                    field, f"{field} cannot be negative, got {value}"
                )

    def as_dict(self) -> dict[str, int]:
        """Return the targets as a plain mapping."""
        return {
            "calories": self.calories,
            "protein_g": self.protein_g,
            "carbs_g": self.carbs_g,
            "fat_g": self.fat_g,
        }
