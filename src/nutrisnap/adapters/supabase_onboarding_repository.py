"""Supabase-backed onboarding state repository."""

from dataclasses import asdict, dataclass, fields
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrisnap.domain.onboarding import OnboardingState, OnboardingStep
from nutrisnap.services.onboarding import OnboardingRepository


@dataclass
class SupabaseOnboardingRepository(OnboardingRepository):
    """Supabase implementation storing answers as a JSON context."""

    client: Client

    def get_state(self, user_id: UUID) -> OnboardingState | None:
        """Return the saved onboarding state, if any."""
        response = (
            self.client.table("onboarding_sessions")
            .select("current_step, context_json")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        context = row.get("context_json") or {}
        known = {item.name for item in fields(OnboardingState)} - {"current_step"}
        return OnboardingState(
            current_step=OnboardingStep(row["current_step"]),
            **{key: value for key, value in context.items() if key in known},
        )

    def save_state(self, user_id: UUID, state: OnboardingState) -> None:
        """Create or overwrite the onboarding state row."""
        context = asdict(state)
        context.pop("current_step")
        self.client.table("onboarding_sessions").upsert(
            {
                "user_id": str(user_id),
                "current_step": state.current_step.value,
                "context_json": context,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()

    def delete_state(self, user_id: UUID) -> None:
        """Delete the onboarding state row."""
        self.client.table("onboarding_sessions").delete().eq(
            "user_id", str(user_id)
        ).execute()
