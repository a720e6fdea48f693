"""Onboarding flow: step merging, target suggestions and completion."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from nutrisnap.domain.errors import NutritionInputError
from nutrisnap.domain.onboarding import (
    STEP_FIELDS,
    STEP_ORDER,
    OnboardingState,
    OnboardingStep,
    ProfileUpdatePayload,
)
from nutrisnap.domain.profile import (
    BiometricProfile,
    GoalProfile,
    NutritionTargets,
    check_range,
    normalize_profile_fields,
    parse_enum,
)
from nutrisnap.services.targets import compute_targets

_logger = logging.getLogger(__name__)

COMPLETED_FIELDS = ("onboarding_completed", "onboardingCompleted")
_COMPLETED_VALUES = (True, "t", 1, "true")

# Bounds for targets the user types in on the nutrition step.
NUTRITION_INPUT_RANGES = {
    "calories": (1000, 10000),
    "protein_g": (30, 400),
    "carbs_g": (30, 700),
    "fat_g": (10, 200),
}

_BASIC_REQUIRED = ("age_years", "sex", "height_cm", "weight_kg")
_GOALS_REQUIRED = ("activity_level", "goal")


class OnboardingRepository(Protocol):
    """Persistence interface for in-progress onboarding answers."""

    def get_state(self, user_id: UUID) -> OnboardingState | None:
        """Return the saved onboarding state, if any."""

    def save_state(self, user_id: UUID, state: OnboardingState) -> None:
        """Create or overwrite the onboarding state."""

    def delete_state(self, user_id: UUID) -> None:
        """Discard the onboarding state."""


class ProfileWriter(Protocol):
    """Write access to the persisted profile."""

    def save_profile(self, user_id: UUID, payload: ProfileUpdatePayload) -> None:
        """Write a completed onboarding payload to the profile."""


def is_onboarding_completed(record: Mapping[str, object]) -> bool:
    """Return True when a stored record marks onboarding as completed.

    Older rows carry the flag as ``True``, ``'t'``, ``1`` or ``"true"``
    under either field name. Every other value counts as not completed.
    """
    for name in COMPLETED_FIELDS:
        if record.get(name) in _COMPLETED_VALUES:
            return True
    return False


def next_step(step: OnboardingStep) -> OnboardingStep:
    """Return the step that follows ``step``."""
    index = STEP_ORDER.index(step)
    return STEP_ORDER[min(index + 1, len(STEP_ORDER) - 1)]


def suggest_targets(state: OnboardingState) -> NutritionTargets | None:
    """Compute targets from the basic-info and goals answers, if complete."""
    fields = _BASIC_REQUIRED + _GOALS_REQUIRED
    if any(getattr(state, name) is None for name in fields):
        return None
    return compute_targets(_biometrics_from(state), _goals_from(state))


def apply_step(
    state: OnboardingState, step_id: str, step_data: Mapping[str, object]
) -> OnboardingState:
    """Merge one step's answers into the state and advance to the next step."""
    step = parse_enum(OnboardingStep, step_id, "step")
    if step is OnboardingStep.COMPLETED:
        raise NutritionInputError("step", "completed is not a submittable step")
    if state.completed:
        raise NutritionInputError("step", "onboarding is already completed")

    allowed = STEP_FIELDS[step]
    unknown = sorted(set(step_data) - allowed)
    if unknown:
        raise NutritionInputError(
            unknown[0], f"field {unknown[0]!r} does not belong to step {step.value}"
        )

    if step is OnboardingStep.NUTRITION:
        updates = _merge_nutrition(state, dict(step_data))
    else:
        updates = normalize_profile_fields(step_data)

    _logger.debug("Onboarding step applied: step=%s", step.value)
    return replace(state, **updates, current_step=next_step(step))


def finalize(state: OnboardingState) -> ProfileUpdatePayload:
    """Validate the accumulated answers and build the profile payload."""
    for name in _BASIC_REQUIRED + _GOALS_REQUIRED:
        if getattr(state, name) is None:
            raise NutritionInputError(name, f"{name} is required")
    for name in NUTRITION_INPUT_RANGES:
        if getattr(state, name) is None:
            raise NutritionInputError(name, f"{name} is required")

    return ProfileUpdatePayload(
        name=state.name,
        profession=state.profession,
        biometrics=_biometrics_from(state),
        goals=_goals_from(state),
        targets=NutritionTargets(
            calories=state.calories,
            protein_g=state.protein_g,
            carbs_g=state.carbs_g,
            fat_g=state.fat_g,
        ),
        completed=True,
    )


def _merge_nutrition(
    state: OnboardingState, updates: dict[str, object]
) -> dict[str, object]:
    explicit = {key: value for key, value in updates.items() if value is not None}
    for name, value in explicit.items():
        check_range(name, value, NUTRITION_INPUT_RANGES[name])
    suggested = suggest_targets(state)
    merged: dict[str, object] = suggested.as_dict() if suggested else {}
    merged.update(explicit)
    return merged


def _biometrics_from(state: OnboardingState) -> BiometricProfile:
    return BiometricProfile(
        sex=state.sex,
        age_years=state.age_years,
        height_cm=state.height_cm,
        weight_kg=state.weight_kg,
    )


def _goals_from(state: OnboardingState) -> GoalProfile:
    return GoalProfile(
        activity_level=state.activity_level,
        goal=state.goal,
        target_weight_kg=state.target_weight_kg,
        target_body_fat_pct=state.target_body_fat_pct,
    )


@dataclass
class OnboardingService:
    """Persists onboarding progress and writes the finished profile."""

    repository: OnboardingRepository
    profile_writer: ProfileWriter

    def get_state(self, user_id: UUID) -> OnboardingState:
        """Return the saved state or a fresh one at the first step."""
        return self.repository.get_state(user_id) or OnboardingState()

    def submit_step(
        self, user_id: UUID, step_id: str, step_data: Mapping[str, object]
    ) -> OnboardingState:
        """Apply a step submission and save the new state."""
        state = apply_step(self.get_state(user_id), step_id, step_data)
        self.repository.save_state(user_id, state)
        return state

    def complete(self, user_id: UUID) -> ProfileUpdatePayload:
        """Finalize onboarding and persist the profile."""
        payload = finalize(self.get_state(user_id))
        self.profile_writer.save_profile(user_id, payload)
        self.repository.delete_state(user_id)
        _logger.info(
            "Onboarding completed: user_id=%s calories=%s",
            user_id,
            payload.targets.calories,
        )
        return payload
