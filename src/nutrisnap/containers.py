"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutrisnap.adapters.supabase_food_log_repository import SupabaseFoodLogRepository
from nutrisnap.adapters.supabase_onboarding_repository import (
    SupabaseOnboardingRepository,
)
from nutrisnap.adapters.supabase_profile_repository import SupabaseProfileRepository
from nutrisnap.adapters.supabase_user_repository import SupabaseUserRepository
from nutrisnap.adapters.supabase_weight_log_repository import (
    SupabaseWeightLogRepository,
)
from nutrisnap.config import Settings, parse_meal_slots
from nutrisnap.services.ledger import LedgerService
from nutrisnap.services.onboarding import OnboardingService
from nutrisnap.services.profiles import ProfileService
from nutrisnap.services.progress import ProgressService
from nutrisnap.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    profile_service: ProfileService
    onboarding_service: OnboardingService
    ledger_service: LedgerService
    progress_service: ProgressService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    profile_repository = SupabaseProfileRepository(supabase_client)
    onboarding_repository = SupabaseOnboardingRepository(supabase_client)
    food_log_repository = SupabaseFoodLogRepository(supabase_client)
    weight_log_repository = SupabaseWeightLogRepository(supabase_client)

    ledger_service = LedgerService(
        repository=food_log_repository,
        targets_repository=profile_repository,
        meal_slots=parse_meal_slots(resolved_settings.meal_slots),
        catch_all_slot=resolved_settings.catch_all_meal_slot,
    )
    progress_service = ProgressService(
        weight_repository=weight_log_repository,
        food_log_repository=food_log_repository,
        targets_repository=profile_repository,
        weight_history_limit=resolved_settings.weight_history_limit,
        max_range_days=resolved_settings.max_progress_days,
    )

    return AppContainer(
        settings=resolved_settings,
        user_service=UserService(user_repository),
        profile_service=ProfileService(profile_repository),
        onboarding_service=OnboardingService(
            repository=onboarding_repository,
            profile_writer=profile_repository,
        ),
        ledger_service=ledger_service,
        progress_service=progress_service,
    )
