"""Supabase repository for food log entries."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from nutrisnap.domain.ledger import FoodLogEntry
from nutrisnap.services.ledger import FoodLogRepository

_COLUMNS = (
    "id, user_id, date, meal_type, name, quantity, unit, calories, "
    "protein_g, carbs_g, fat_g"
)


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase implementation for food logs."""

    client: Client

    def list_entries(self, user_id: UUID, day: date) -> list[FoodLogEntry]:
        """Return a day's entries ordered by creation time."""
        response = (
            self.client.table("food_logs")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def get_entry(self, user_id: UUID, entry_id: UUID) -> FoodLogEntry | None:
        """Return an entry by id when it belongs to the user."""
        response = (
            self.client.table("food_logs")
            .select(_COLUMNS)
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def create_entry(self, entry: FoodLogEntry) -> FoodLogEntry:
        """Insert an entry and return the stored row."""
        response = self.client.table("food_logs").insert(_to_row(entry)).execute()
        if not response.data:
            raise RuntimeError("Failed to create food log entry")
        return _parse_entry(response.data[0])

    def replace_entry(self, entry: FoodLogEntry) -> FoodLogEntry:
        """Overwrite every editable column of an entry."""
        response = (
            self.client.table("food_logs")
            .update(_to_row(entry))
            .eq("id", str(entry.id))
            .eq("user_id", str(entry.user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update food log entry")
        return _parse_entry(response.data[0])

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete an entry row owned by the user."""
        self.client.table("food_logs").delete().eq("id", str(entry_id)).eq(
            "user_id", str(user_id)
        ).execute()


def _to_row(entry: FoodLogEntry) -> dict[str, object]:
    return {
        "user_id": str(entry.user_id) if entry.user_id else None,
        "date": entry.day.isoformat() if entry.day else None,
        "meal_type": entry.meal_type,
        "name": entry.name,
        "quantity": entry.quantity,
        "unit": entry.unit,
        "calories": entry.calories,
        "protein_g": entry.protein_g,
        "carbs_g": entry.carbs_g,
        "fat_g": entry.fat_g,
    }


def _parse_entry(row: dict[str, object]) -> FoodLogEntry:
    return FoodLogEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])) if row.get("user_id") else None,
        day=date.fromisoformat(str(row["date"])) if row.get("date") else None,
        meal_type=str(row.get("meal_type", "")),
        name=str(row.get("name", "")),
        quantity=float(row.get("quantity") or 0.0),
        unit=str(row.get("unit", "")),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein_g") or 0.0),
        carbs_g=float(row.get("carbs_g") or 0.0),
        fat_g=float(row.get("fat_g") or 0.0),
    )
