"""Supabase repository for user profiles and targets."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrisnap.domain.models import ProfileRecord
from nutrisnap.domain.onboarding import ProfileUpdatePayload
from nutrisnap.domain.profile import NutritionTargets
from nutrisnap.services.onboarding import is_onboarding_completed
from nutrisnap.services.profiles import ProfileRepository

_TARGET_COLUMNS = ("calories", "protein_g", "carbs_g", "fat_g")


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile fields stored on the users table."""

    client: Client

    def get_profile(self, user_id: UUID) -> ProfileRecord | None:
        """Return the stored profile, if present."""
        row = self._fetch_row(user_id)
        if row is None:
            return None
        return ProfileRecord(
            user_id=user_id,
            name=row.get("name"),
            profession=row.get("profession"),
            sex=row.get("sex"),
            age_years=_optional_int(row.get("age_years")),
            height_cm=_optional_float(row.get("height_cm")),
            weight_kg=_optional_float(row.get("weight_kg")),
            activity_level=row.get("activity_level"),
            goal=row.get("goal"),
            target_weight_kg=_optional_float(row.get("target_weight_kg")),
            target_body_fat_pct=_optional_float(row.get("target_body_fat_pct")),
            targets=_parse_targets(row),
            onboarding_completed=is_onboarding_completed(row),
        )

    def get_targets(self, user_id: UUID) -> NutritionTargets | None:
        """Return the stored targets, if all four are set."""
        response = (
            self.client.table("users")
            .select(", ".join(_TARGET_COLUMNS))
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_targets(response.data[0])

    def save_profile(self, user_id: UUID, payload: ProfileUpdatePayload) -> None:
        """Write the onboarding result with the canonical completion flag."""
        record = payload.to_record()
        record["onboarding_completed"] = is_onboarding_completed(record)
        record["updated_at"] = datetime.now(tz=UTC).isoformat()
        self.client.table("users").update(record).eq("id", str(user_id)).execute()

    def set_profile_fields(
        self, user_id: UUID, fields: Mapping[str, object]
    ) -> None:
        """Overwrite the given profile columns."""
        if not fields:
            return
        self.client.table("users").update(
            {**fields, "updated_at": datetime.now(tz=UTC).isoformat()}
        ).eq("id", str(user_id)).execute()

    def set_targets(self, user_id: UUID, targets: NutritionTargets) -> None:
        """Overwrite all four target columns."""
        self.client.table("users").update(
            {
                **targets.as_dict(),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(user_id)).execute()

    def _fetch_row(self, user_id: UUID) -> dict[str, object] | None:
        response = (
            self.client.table("users")
            .select("*")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]


def _parse_targets(row: dict[str, object]) -> NutritionTargets | None:
    if any(row.get(column) is None for column in _TARGET_COLUMNS):
        return None
    if float(row["calories"]) <= 0:
        return None
    return NutritionTargets(
        calories=int(row["calories"]),
        protein_g=int(row["protein_g"]),
        carbs_g=int(row["carbs_g"]),
        fat_g=int(row["fat_g"]),
    )


def _optional_int(value: object) -> int | None:
    return int(value) if value is not None else None


def _optional_float(value: object) -> float | None:
    return float(value) if value is not None else None
