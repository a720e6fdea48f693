"""Domain models for the onboarding flow."""

from dataclasses import dataclass
from enum import Enum

from nutrisnap.domain.profile import BiometricProfile, GoalProfile, NutritionTargets


class OnboardingStep(Enum):
    """Onboarding steps in the order they are completed."""

    BASIC_INFO = "basic-info"
    GOALS = "goals"
    NUTRITION = "nutrition"
    COMPLETED = "completed"


STEP_ORDER = [
    OnboardingStep.BASIC_INFO,
    OnboardingStep.GOALS,
    OnboardingStep.NUTRITION,
    OnboardingStep.COMPLETED,
]

STEP_FIELDS: dict[OnboardingStep, frozenset[str]] = {
    OnboardingStep.BASIC_INFO: frozenset(
        {"name", "age_years", "sex", "height_cm", "weight_kg", "profession"}
    ),
    OnboardingStep.GOALS: frozenset(
        {"target_weight_kg", "target_body_fat_pct", "activity_level", "goal"}
    ),
    OnboardingStep.NUTRITION: frozenset(
        {"calories", "protein_g", "carbs_g", "fat_g"}
    ),
}


@dataclass(frozen=True)
class OnboardingState:
    """Answers accumulated across onboarding steps.

    Every answer stays optional until ``finalize`` checks that the required
    ones are present.
    """

    current_step: OnboardingStep = OnboardingStep.BASIC_INFO
    name: str | None = None
    age_years: int | None = None
    sex: str | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    profession: str | None = None
    target_weight_kg: float | None = None
    target_body_fat_pct: float | None = None
    activity_level: str | None = None
    goal: str | None = None
    calories: int | None = None
    protein_g: int | None = None
    carbs_g: int | None = None
    fat_g: int | None = None
    completed: bool = False


@dataclass(frozen=True)
class ProfileUpdatePayload:
    """Validated onboarding result ready to be written to the profile."""

    name: str | None
    profession: str | None
    biometrics: BiometricProfile
    goals: GoalProfile
    targets: NutritionTargets
    completed: bool = True

    def to_record(self) -> dict[str, object]:
        """Return the payload as a flat profile record."""
        return {
            "name": self.name,
            "profession": self.profession,
            "sex": self.biometrics.sex.value,
            "age_years": self.biometrics.age_years,
            "height_cm": self.biometrics.height_cm,
            "weight_kg": self.biometrics.weight_kg,
            "activity_level": self.goals.activity_level.value,
            "goal": self.goals.goal.value,
            "target_weight_kg": self.goals.target_weight_kg,
            "target_body_fat_pct": self.goals.target_body_fat_pct,
            **self.targets.as_dict(),
            "onboarding_completed": self.completed,
        }
