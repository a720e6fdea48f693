"""Supabase repository for weight logs."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from nutrisnap.domain.progress import WeightLogEntry
from nutrisnap.services.progress import WeightLogRepository


@dataclass
class SupabaseWeightLogRepository(WeightLogRepository):
    """Supabase implementation for weight logs."""

    client: Client

    def list_weight_logs(self, user_id: UUID, limit: int) -> list[WeightLogEntry]:
        """Return the most recent weight logs, newest first."""
        response = (
            self.client.table("weight_logs")
            .select("id, user_id, date, weight_kg")
            .eq("user_id", str(user_id))
            .order("date", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_weight(row) for row in response.data or []]

    def create_weight_log(self, entry: WeightLogEntry) -> WeightLogEntry:
        """Insert a weight log and return the stored row."""
        response = (
            self.client.table("weight_logs")
            .insert(
                {
                    "user_id": str(entry.user_id),
                    "date": entry.day.isoformat(),
                    "weight_kg": entry.weight_kg,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create weight log")
        return _parse_weight(response.data[0])


def _parse_weight(row: dict[str, object]) -> WeightLogEntry:
    return WeightLogEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])) if row.get("user_id") else None,
        day=date.fromisoformat(str(row["date"])),
        weight_kg=float(row["weight_kg"]),
    )
