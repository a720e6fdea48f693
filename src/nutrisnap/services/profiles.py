"""Profile service: profile edits, targets lookup and recomputation."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from nutrisnap.domain.errors import NutritionInputError
from nutrisnap.domain.models import ProfileRecord
from nutrisnap.domain.onboarding import ProfileUpdatePayload
from nutrisnap.domain.profile import (
    BiometricProfile,
    GoalProfile,
    NutritionTargets,
    normalize_profile_fields,
)
from nutrisnap.services.targets import compute_targets

_logger = logging.getLogger(__name__)

# Fields a user may edit on the profile page after onboarding.
EDITABLE_FIELDS = frozenset(
    {
        "name",
        "profession",
        "sex",
        "age_years",
        "height_cm",
        "weight_kg",
        "activity_level",
        "goal",
        "target_weight_kg",
        "target_body_fat_pct",
    }
)
_TARGET_INPUTS = (
    "sex",
    "age_years",
    "height_cm",
    "weight_kg",
    "activity_level",
    "goal",
)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> ProfileRecord | None:
        """Return the stored profile, if present."""

    def get_targets(self, user_id: UUID) -> NutritionTargets | None:
        """Return the stored targets, if set."""

    def save_profile(self, user_id: UUID, payload: ProfileUpdatePayload) -> None:
        """Write a completed onboarding payload."""

    def set_profile_fields(
        self, user_id: UUID, fields: Mapping[str, object]
    ) -> None:
        """Overwrite the given profile columns."""

    def set_targets(self, user_id: UUID, targets: NutritionTargets) -> None:
        """Overwrite all four target figures."""


@dataclass
class ProfileService:
    """Application service for profile targets."""

    repository: ProfileRepository

    def get_profile(self, user_id: UUID) -> ProfileRecord | None:
        """Return the stored profile."""
        return self.repository.get_profile(user_id)

    def get_targets(self, user_id: UUID) -> NutritionTargets | None:
        """Return the persisted targets."""
        return self.repository.get_targets(user_id)

    def recompute_targets(self, user_id: UUID) -> NutritionTargets | None:
        """Recompute targets from the stored profile and replace them.

        Returns None when the user has no profile.
        """
        profile = self.repository.get_profile(user_id)
        if profile is None:
            return None
        targets = compute_targets(_biometrics(profile), _goals(profile))
        self.repository.set_targets(user_id, targets)
        _logger.info(
            "Targets recomputed: user_id=%s calories=%s", user_id, targets.calories
        )
        return targets

    def update_profile(
        self, user_id: UUID, changes: Mapping[str, object]
    ) -> ProfileRecord | None:
        """Apply a partial profile edit and recompute targets from the result.

        Every field is validated before anything is written. Targets are
        replaced wholesale once the profile has all the inputs they need;
        an incomplete profile only stores the edited fields. Returns None
        when the user has no profile.
        """
        profile = self.repository.get_profile(user_id)
        if profile is None:
            return None
        unknown = sorted(set(changes) - EDITABLE_FIELDS)
        if unknown:
            raise NutritionInputError(
                unknown[0], f"field {unknown[0]!r} cannot be edited"
            )
        fields = normalize_profile_fields(changes)
        updated = replace(profile, **fields)

        targets = None
        if all(getattr(updated, name) is not None for name in _TARGET_INPUTS):
            targets = compute_targets(_biometrics(updated), _goals(updated))

        self.repository.set_profile_fields(user_id, fields)
        if targets is not None:
            self.repository.set_targets(user_id, targets)
            updated = replace(updated, targets=targets)
        _logger.info(
            "Profile updated: user_id=%s fields=%s recomputed=%s",
            user_id,
            sorted(fields),
            targets is not None,
        )
        return updated


def _biometrics(profile: ProfileRecord) -> BiometricProfile:
    _require(profile, ("sex", "age_years", "height_cm", "weight_kg"))
    return BiometricProfile(
        sex=profile.sex,
        age_years=profile.age_years,
        height_cm=profile.height_cm,
        weight_kg=profile.weight_kg,
    )


def _goals(profile: ProfileRecord) -> GoalProfile:
    _require(profile, ("activity_level", "goal"))
    return GoalProfile(
        activity_level=profile.activity_level,
        goal=profile.goal,
        target_weight_kg=profile.target_weight_kg,
        target_body_fat_pct=profile.target_body_fat_pct,
    )


def _require(profile: ProfileRecord, fields: tuple[str, ...]) -> None:
    for name in fields:
        if getattr(profile, name) is None:
            raise NutritionInputError(name, f"{name} is required")
