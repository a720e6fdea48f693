"""Tests for profile service."""

from uuid import uuid4

import pytest

from nutrisnap.domain.errors import NutritionInputError
from nutrisnap.domain.models import ProfileRecord
from nutrisnap.domain.profile import NutritionTargets
from nutrisnap.services.profiles import ProfileService
from tests.conftest import InMemoryProfileRepository


def _profile(**overrides: object) -> ProfileRecord:
    values: dict[str, object] = {
        "user_id": uuid4(),
        "name": "Carlos",
        "profession": None,
        "sex": "male",
        "age_years": 30,
        "height_cm": 180,
        "weight_kg": 80,
        "activity_level": "moderate",
        "goal": "lose_weight",
        "target_weight_kg": None,
        "target_body_fat_pct": None,
        "targets": NutritionTargets(1800, 100, 100, 100),
        "onboarding_completed": True,
    }
    values.update(overrides)
    return ProfileRecord(**values)


def test_recompute_replaces_targets_wholesale() -> None:
    repository = InMemoryProfileRepository()
    profile = _profile()
    repository.profiles[profile.user_id] = profile

    targets = ProfileService(repository).recompute_targets(profile.user_id)

    assert targets == NutritionTargets(2345, 176, 235, 78)
    assert repository.get_targets(profile.user_id) == targets


def test_recompute_without_profile_returns_none() -> None:
    service = ProfileService(InMemoryProfileRepository())

    assert service.recompute_targets(uuid4()) is None


def test_recompute_requires_biometrics() -> None:
    repository = InMemoryProfileRepository()
    profile = _profile(weight_kg=None)
    repository.profiles[profile.user_id] = profile

    with pytest.raises(NutritionInputError) as excinfo:
        ProfileService(repository).recompute_targets(profile.user_id)

    assert excinfo.value.field == "weight_kg"
    assert repository.get_targets(profile.user_id).calories == 1800


def test_update_profile_recomputes_targets() -> None:
    repository = InMemoryProfileRepository()
    profile = _profile()
    repository.profiles[profile.user_id] = profile

    updated = ProfileService(repository).update_profile(
        profile.user_id, {"goal": "maintain", "name": "Carlos Lima"}
    )

    assert updated is not None
    assert updated.name == "Carlos Lima"
    assert updated.targets == NutritionTargets(2759, 207, 276, 92)
    assert repository.profiles[profile.user_id].goal == "maintain"
    assert repository.get_targets(profile.user_id).calories == 2759


def test_update_profile_rejects_invalid_field_before_writing() -> None:
    repository = InMemoryProfileRepository()
    profile = _profile()
    repository.profiles[profile.user_id] = profile

    with pytest.raises(NutritionInputError) as excinfo:
        ProfileService(repository).update_profile(
            profile.user_id, {"name": "Carlos", "height_cm": 20}
        )

    assert excinfo.value.field == "height_cm"
    assert repository.profiles[profile.user_id] == profile


def test_update_profile_rejects_non_editable_field() -> None:
    repository = InMemoryProfileRepository()
    profile = _profile()
    repository.profiles[profile.user_id] = profile

    with pytest.raises(NutritionInputError) as excinfo:
        ProfileService(repository).update_profile(profile.user_id, {"calories": 1})

    assert excinfo.value.field == "calories"


def test_update_incomplete_profile_keeps_targets() -> None:
    repository = InMemoryProfileRepository()
    profile = _profile(sex=None, goal=None)
    repository.profiles[profile.user_id] = profile

    updated = ProfileService(repository).update_profile(
        profile.user_id, {"profession": "Professor"}
    )

    assert updated.profession == "Professor"
    assert updated.targets == NutritionTargets(1800, 100, 100, 100)


def test_update_profile_without_profile_returns_none() -> None:
    service = ProfileService(InMemoryProfileRepository())

    assert service.update_profile(uuid4(), {"name": "Ana"}) is None
