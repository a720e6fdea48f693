"""Domain models for the nutrition tracker."""

from dataclasses import dataclass
from uuid import UUID

from nutrisnap.domain.profile import NutritionTargets


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    uid: str
    email: str


@dataclass(frozen=True)
class ProfileRecord:
    """Persisted profile fields as stored, before validation."""

    user_id: UUID
    name: str | None
    profession: str | None
    sex: str | None
    age_years: int | None
    height_cm: float | None
    weight_kg: float | None
    activity_level: str | None
    goal: str | None
    target_weight_kg: float | None
    target_body_fat_pct: float | None
    targets: NutritionTargets | None
    onboarding_completed: bool
