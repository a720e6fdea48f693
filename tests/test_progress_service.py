"""Tests for progress summaries."""

from datetime import date
from uuid import uuid4

import pytest

from nutrisnap.domain.errors import NutritionInputError
from nutrisnap.domain.progress import WeightLogEntry
from nutrisnap.services.progress import ProgressService, summarize_progress
from tests.conftest import (
    InMemoryFoodLogRepository,
    InMemoryProfileRepository,
    InMemoryWeightLogRepository,
    make_entry,
)


def _weight(day: date, weight_kg: float) -> WeightLogEntry:
    return WeightLogEntry(id=uuid4(), day=day, weight_kg=weight_kg)


def test_summarize_progress_counts_days_on_target() -> None:
    daily = [
        (date(2024, 3, 10), 1800.0),
        (date(2024, 3, 11), 2000.0),
        (date(2024, 3, 12), 2300.0),
        (date(2024, 3, 13), 0.0),
    ]

    summary = summarize_progress(daily, [], 2000, date(2024, 3, 10))

    assert [day.met_goal for day in summary.days] == [True, True, False, True]
    assert summary.days_on_target == 3
    assert summary.average_calories == 1525
    assert summary.latest_weight_kg is None
    assert summary.weight_change_direction is None


def test_summarize_progress_weight_trend_within_range() -> None:
    logs = [
        _weight(date(2024, 3, 14), 79.8),
        _weight(date(2024, 3, 10), 80.5),
        _weight(date(2024, 3, 5), 82.0),
    ]

    summary = summarize_progress([], logs, 2000, date(2024, 3, 10))

    assert summary.average_calories == 0
    assert summary.latest_weight_kg == 79.8
    assert summary.weight_change_kg == -0.7
    assert summary.weight_change_direction == "down"


def test_summarize_progress_single_weight_is_unchanged() -> None:
    logs = [_weight(date(2024, 3, 12), 70.0)]

    summary = summarize_progress([], logs, 2000, date(2024, 3, 10))

    assert summary.weight_change_kg == 0
    assert summary.weight_change_direction == "same"


def test_summarize_progress_rejects_missing_target() -> None:
    with pytest.raises(NutritionInputError):
        summarize_progress([], [], 0, date(2024, 3, 10))


def test_progress_service_reads_logs_for_each_day() -> None:
    user_id = uuid4()
    food_logs = InMemoryFoodLogRepository()
    weights = InMemoryWeightLogRepository()
    service = ProgressService(
        weight_repository=weights,
        food_log_repository=food_logs,
        targets_repository=InMemoryProfileRepository(),
    )
    food_logs.create_entry(
        make_entry("Almoço", 900, user_id=user_id, day=date(2024, 3, 10))
    )
    food_logs.create_entry(
        make_entry("Jantar", 1400, user_id=user_id, day=date(2024, 3, 10))
    )
    food_logs.create_entry(
        make_entry("Almoço", 1500, user_id=user_id, day=date(2024, 3, 11))
    )
    service.log_weight(user_id, date(2024, 3, 10), 81.0)
    service.log_weight(user_id, date(2024, 3, 12), 81.4)

    summary = service.get_progress(
        user_id, date(2024, 3, 10), date(2024, 3, 12), target_calories=2000
    )

    assert [day.consumed for day in summary.days] == [2300, 1500, 0]
    assert summary.days_on_target == 2
    assert summary.weight_change_kg == 0.4
    assert summary.weight_change_direction == "up"
    assert service.list_weights(user_id)[0].weight_kg == 81.4


def test_progress_service_requires_targets() -> None:
    service = ProgressService(
        weight_repository=InMemoryWeightLogRepository(),
        food_log_repository=InMemoryFoodLogRepository(),
        targets_repository=InMemoryProfileRepository(),
    )

    with pytest.raises(NutritionInputError) as excinfo:
        service.get_progress(uuid4(), date(2024, 3, 10), date(2024, 3, 12))

    assert excinfo.value.field == "targets"


def test_progress_service_rejects_inverted_range() -> None:
    service = ProgressService(
        weight_repository=InMemoryWeightLogRepository(),
        food_log_repository=InMemoryFoodLogRepository(),
        targets_repository=InMemoryProfileRepository(),
    )

    with pytest.raises(NutritionInputError):
        service.get_progress(
            uuid4(), date(2024, 3, 12), date(2024, 3, 10), target_calories=2000
        )


def test_progress_service_rejects_range_over_limit() -> None:
    service = ProgressService(
        weight_repository=InMemoryWeightLogRepository(),
        food_log_repository=InMemoryFoodLogRepository(),
        targets_repository=InMemoryProfileRepository(),
    )

    summary = service.get_progress(
        uuid4(), date(2024, 1, 1), date(2024, 3, 30), target_calories=2000
    )
    with pytest.raises(NutritionInputError) as excinfo:
        service.get_progress(
            uuid4(), date(1900, 1, 1), date(2024, 3, 30), target_calories=2000
        )

    assert len(summary.days) == 90
    assert excinfo.value.field == "start"


def test_list_weights_rejects_non_positive_limit() -> None:
    service = ProgressService(
        weight_repository=InMemoryWeightLogRepository(),
        food_log_repository=InMemoryFoodLogRepository(),
        targets_repository=InMemoryProfileRepository(),
    )

    with pytest.raises(NutritionInputError) as excinfo:
        service.list_weights(uuid4(), -1)

    assert excinfo.value.field == "limit"
