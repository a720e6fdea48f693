"""Weight logging and calorie adherence over a date range."""

import logging
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from nutrisnap.domain.errors import NutritionInputError
from nutrisnap.domain.progress import DayCalories, ProgressSummary, WeightLogEntry
from nutrisnap.domain.rounding import round_half_up, round_one_decimal
from nutrisnap.services.ledger import FoodLogRepository, TargetsRepository

_logger = logging.getLogger(__name__)


class WeightLogRepository(Protocol):
    """Persistence interface for weight logs."""

    def list_weight_logs(self, user_id: UUID, limit: int) -> list[WeightLogEntry]:
        """Return the most recent weight logs, newest first."""

    def create_weight_log(self, entry: WeightLogEntry) -> WeightLogEntry:
        """Persist a weight log and return it with its id."""


def summarize_progress(
    daily_calories: list[tuple[date, float]],
    weight_logs: list[WeightLogEntry],
    target_calories: int,
    start: date,
) -> ProgressSummary:
    """Summarize calorie adherence per day and the weight trend since ``start``.

    A day meets its goal when consumption does not exceed the target. The
    weight change compares the latest log with the earliest log on or after
    ``start``.
    """
    if target_calories is None or target_calories <= 0:
        raise NutritionInputError(
            "calories", f"target calories must be positive, got {target_calories}"
        )
    days = [
        DayCalories(
            day=day,
            consumed=consumed,
            target=target_calories,
            met_goal=consumed <= target_calories,
        )
        for day, consumed in daily_calories
    ]
    average = (
        round_half_up(math.fsum(day.consumed for day in days) / len(days))
        if days
        else 0
    )

    latest = max(weight_logs, key=lambda log: log.day, default=None)
    in_range = [log for log in weight_logs if log.day >= start]
    earliest = min(in_range, key=lambda log: log.day, default=None)
    change = None
    direction = None
    if latest is not None and earliest is not None:
        change = round_one_decimal(latest.weight_kg - earliest.weight_kg)
        if change > 0:
            direction = "up"
        elif change < 0:
            direction = "down"
        else:
            direction = "same"

    return ProgressSummary(
        days=days,
        days_on_target=sum(1 for day in days if day.met_goal),
        average_calories=average,
        latest_weight_kg=latest.weight_kg if latest else None,
        weight_change_kg=change,
        weight_change_direction=direction,
    )


@dataclass
class ProgressService:
    """Service for weight logs and progress summaries."""

    weight_repository: WeightLogRepository
    food_log_repository: FoodLogRepository
    targets_repository: TargetsRepository
    weight_history_limit: int = 90
    max_range_days: int = 90

    def log_weight(
        self, user_id: UUID, day: date, weight_kg: float
    ) -> WeightLogEntry:
        """Record a weight measurement."""
        entry = WeightLogEntry(id=None, day=day, weight_kg=weight_kg, user_id=user_id)
        created = self.weight_repository.create_weight_log(entry)
        _logger.info("Weight logged: user_id=%s day=%s", user_id, day)
        return created

    def list_weights(
        self, user_id: UUID, limit: int | None = None
    ) -> list[WeightLogEntry]:
        """Return recent weight logs, newest first."""
        if limit is not None and limit < 1:
            raise NutritionInputError("limit", f"limit must be positive, got {limit}")
        return self.weight_repository.list_weight_logs(
            user_id, limit or self.weight_history_limit
        )

    def get_progress(
        self,
        user_id: UUID,
        start: date,
        end: date,
        target_calories: int | None = None,
    ) -> ProgressSummary:
        """Summarize the inclusive date range ``start``..``end``."""
        if end < start:
            raise NutritionInputError("end", "end must not be before start")
        span = (end - start).days + 1
        if span > self.max_range_days:
            raise NutritionInputError(
                "start",
                f"range must not exceed {self.max_range_days} days, got {span}",
            )
        if target_calories is None:
            targets = self.targets_repository.get_targets(user_id)
            if targets is None:
                raise NutritionInputError("targets", "user has no nutrition targets")
            target_calories = targets.calories

        daily: list[tuple[date, float]] = []
        for offset in range(span):
            day = start + timedelta(days=offset)
            entries = self.food_log_repository.list_entries(user_id, day)
            daily.append((day, math.fsum(entry.calories for entry in entries)))

        weights = self.list_weights(user_id)
        return summarize_progress(daily, weights, target_calories, start)
