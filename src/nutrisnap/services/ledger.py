"""Daily food ledger: meal grouping, day totals and calorie progress."""

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol
from uuid import UUID

from nutrisnap.domain.errors import NutritionInputError
from nutrisnap.domain.ledger import DailySummary, DayLedger, FoodLogEntry, MealSummary
from nutrisnap.domain.profile import NutritionTargets
from nutrisnap.domain.rounding import round_one_decimal

_logger = logging.getLogger(__name__)


class FoodLogRepository(Protocol):
    """Persistence interface for food log entries."""

    def list_entries(self, user_id: UUID, day: date) -> list[FoodLogEntry]:
        """Return a day's entries in insertion order."""

    def get_entry(self, user_id: UUID, entry_id: UUID) -> FoodLogEntry | None:
        """Return the user's entry by id, if present."""

    def create_entry(self, entry: FoodLogEntry) -> FoodLogEntry:
        """Persist a new entry and return it with its id."""

    def replace_entry(self, entry: FoodLogEntry) -> FoodLogEntry:
        """Overwrite every field of an entry owned by ``entry.user_id``."""

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete the user's entry."""


class TargetsRepository(Protocol):
    """Read access to a user's persisted targets."""

    def get_targets(self, user_id: UUID) -> NutritionTargets | None:
        """Return the user's targets, if set."""


def aggregate_day(
    entries: list[FoodLogEntry],
    targets: NutritionTargets,
    meal_slots: list[str],
    *,
    catch_all_slot: str | None = None,
) -> DayLedger:
    """Group a day's entries by meal slot and total them against the targets.

    Entries with a meal type outside ``meal_slots`` are rejected unless a
    ``catch_all_slot`` is given, in which case they are filed under it.
    """
    if targets is None:
        raise NutritionInputError("targets", "targets are required")
    if not meal_slots:
        raise NutritionInputError("meal_slots", "at least one meal slot is required")
    if catch_all_slot is not None and catch_all_slot not in meal_slots:
        raise NutritionInputError(
            "catch_all_slot", f"catch-all slot {catch_all_slot!r} is not a meal slot"
        )

    buckets: dict[str, list[FoodLogEntry]] = {slot: [] for slot in meal_slots}
    for entry in entries:
        slot = entry.meal_type
        if slot not in buckets:
            if catch_all_slot is None:
                raise NutritionInputError(
                    "meal_type", f"unknown meal type {entry.meal_type!r}"
                )
            slot = catch_all_slot
        buckets[slot].append(entry)

    meals = [
        MealSummary(
            meal_type=slot,
            entries=tuple(slot_entries),
            total_calories=math.fsum(entry.calories for entry in slot_entries),
        )
        for slot, slot_entries in buckets.items()
    ]

    total_calories = math.fsum(entry.calories for entry in entries)
    daily = DailySummary(
        total_calories=round_one_decimal(total_calories),
        total_protein_g=round_one_decimal(math.fsum(e.protein_g for e in entries)),
        total_carbs_g=round_one_decimal(math.fsum(e.carbs_g for e in entries)),
        total_fat_g=round_one_decimal(math.fsum(e.fat_g for e in entries)),
        target_calories=targets.calories,
        remaining_calories=round_one_decimal(targets.calories - total_calories),
        progress_pct=total_calories / targets.calories * 100,
    )
    return DayLedger(meals=meals, daily=daily)


@dataclass
class LedgerService:
    """Service that loads a day's log and manages its entries."""

    repository: FoodLogRepository
    targets_repository: TargetsRepository
    meal_slots: list[str] = field(default_factory=list)
    catch_all_slot: str | None = None

    def get_day(
        self,
        user_id: UUID,
        day: date,
        targets: NutritionTargets | None = None,
    ) -> DayLedger:
        """Aggregate a user's day using persisted or explicit targets."""
        resolved = (
            targets
            if targets is not None
            else self.targets_repository.get_targets(user_id)
        )
        if resolved is None:
            raise NutritionInputError("targets", "user has no nutrition targets")
        entries = self.repository.list_entries(user_id, day)
        return aggregate_day(
            entries,
            resolved,
            self.meal_slots,
            catch_all_slot=self.catch_all_slot,
        )

    def add_entry(self, entry: FoodLogEntry) -> FoodLogEntry:
        """Validate the meal slot and persist a new entry."""
        self._check_slot(entry.meal_type)
        created = self.repository.create_entry(entry)
        _logger.info(
            "Food log entry created: id=%s meal=%s day=%s",
            created.id,
            created.meal_type,
            created.day,
        )
        return created

    def replace_entry(self, entry: FoodLogEntry) -> FoodLogEntry | None:
        """Replace an entry; returns None unless ``entry.user_id`` owns it."""
        if entry.id is None or entry.user_id is None:
            return None
        if self.repository.get_entry(entry.user_id, entry.id) is None:
            return None
        self._check_slot(entry.meal_type)
        return self.repository.replace_entry(entry)

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry; returns False unless the user owns it."""
        if self.repository.get_entry(user_id, entry_id) is None:
            return False
        self.repository.delete_entry(user_id, entry_id)
        _logger.info("Food log entry deleted: id=%s user_id=%s", entry_id, user_id)
        return True

    def _check_slot(self, meal_type: str) -> None:
        if meal_type in self.meal_slots or self.catch_all_slot is not None:
            return
        raise NutritionInputError("meal_type", f"unknown meal type {meal_type!r}")
