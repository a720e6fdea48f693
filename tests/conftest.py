"""Shared test fixtures."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date
from uuid import UUID, uuid4

import pytest

from nutrisnap.config import Settings, parse_meal_slots
from nutrisnap.containers import AppContainer
from nutrisnap.domain.ledger import FoodLogEntry
from nutrisnap.domain.models import ProfileRecord, UserRecord
from nutrisnap.domain.onboarding import OnboardingState, ProfileUpdatePayload
from nutrisnap.domain.profile import NutritionTargets
from nutrisnap.domain.progress import WeightLogEntry
from nutrisnap.services.ledger import FoodLogRepository, LedgerService
from nutrisnap.services.onboarding import OnboardingRepository, OnboardingService
from nutrisnap.services.profiles import ProfileRepository, ProfileService
from nutrisnap.services.progress import ProgressService, WeightLogRepository
from nutrisnap.services.users import UserRepository, UserService

MEAL_SLOTS = ["Café da Manhã", "Almoço", "Lanche", "Jantar", "Ceia"]


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, UserRecord] = field(default_factory=dict)
    touched: list[UUID] = field(default_factory=list)

    def get_by_uid(self, uid: str) -> UserRecord | None:
        return self.users.get(uid)

    def create_user(self, uid: str, email: str) -> UserRecord:
        user = UserRecord(id=uuid4(), uid=uid, email=email)
        self.users[uid] = user
        return user

    def touch_last_active(self, user_id: UUID) -> None:
        self.touched.append(user_id)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, ProfileRecord] = field(default_factory=dict)
    saved: list[dict[str, object]] = field(default_factory=list)

    def get_profile(self, user_id: UUID) -> ProfileRecord | None:
        return self.profiles.get(user_id)

    def get_targets(self, user_id: UUID) -> NutritionTargets | None:
        profile = self.profiles.get(user_id)
        return profile.targets if profile else None

    def save_profile(self, user_id: UUID, payload: ProfileUpdatePayload) -> None:
        self.saved.append(payload.to_record())
        self.profiles[user_id] = ProfileRecord(
            user_id=user_id,
            name=payload.name,
            profession=payload.profession,
            sex=payload.biometrics.sex.value,
            age_years=payload.biometrics.age_years,
            height_cm=payload.biometrics.height_cm,
            weight_kg=payload.biometrics.weight_kg,
            activity_level=payload.goals.activity_level.value,
            goal=payload.goals.goal.value,
            target_weight_kg=payload.goals.target_weight_kg,
            target_body_fat_pct=payload.goals.target_body_fat_pct,
            targets=payload.targets,
            onboarding_completed=payload.completed,
        )

    def set_profile_fields(
        self, user_id: UUID, fields: Mapping[str, object]
    ) -> None:
        self.profiles[user_id] = replace(self.profiles[user_id], **fields)

    def set_targets(self, user_id: UUID, targets: NutritionTargets) -> None:
        self.profiles[user_id] = replace(self.profiles[user_id], targets=targets)


@dataclass
class InMemoryOnboardingRepository(OnboardingRepository):
    """In-memory onboarding state repository for tests."""

    states: dict[UUID, OnboardingState] = field(default_factory=dict)

    def get_state(self, user_id: UUID) -> OnboardingState | None:
        return self.states.get(user_id)

    def save_state(self, user_id: UUID, state: OnboardingState) -> None:
        self.states[user_id] = state

    def delete_state(self, user_id: UUID) -> None:
        self.states.pop(user_id, None)


@dataclass
class InMemoryFoodLogRepository(FoodLogRepository):
    """In-memory food log repository for tests."""

    entries: dict[UUID, FoodLogEntry] = field(default_factory=dict)

    def list_entries(self, user_id: UUID, day: date) -> list[FoodLogEntry]:
        return [
            entry
            for entry in self.entries.values()
            if entry.user_id == user_id and entry.day == day
        ]

    def get_entry(self, user_id: UUID, entry_id: UUID) -> FoodLogEntry | None:
        entry = self.entries.get(entry_id)
        if entry is None or entry.user_id != user_id:
            return None
        return entry

    def create_entry(self, entry: FoodLogEntry) -> FoodLogEntry:
        created = replace(entry, id=uuid4())
        self.entries[created.id] = created
        return created

    def replace_entry(self, entry: FoodLogEntry) -> FoodLogEntry:
        self.entries[entry.id] = entry
        return entry

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        if self.get_entry(user_id, entry_id) is not None:
            del self.entries[entry_id]


@dataclass
class InMemoryWeightLogRepository(WeightLogRepository):
    """In-memory weight log repository for tests."""

    logs: list[WeightLogEntry] = field(default_factory=list)

    def list_weight_logs(self, user_id: UUID, limit: int) -> list[WeightLogEntry]:
        owned = [log for log in self.logs if log.user_id == user_id]
        return sorted(owned, key=lambda log: log.day, reverse=True)[:limit]

    def create_weight_log(self, entry: WeightLogEntry) -> WeightLogEntry:
        created = replace(entry, id=uuid4())
        self.logs.append(created)
        return created


def make_entry(  # noqa: PLR0913
    meal_type: str,
    calories: float,
    *,
    name: str = "Arroz",
    protein_g: float = 0.0,
    carbs_g: float = 0.0,
    fat_g: float = 0.0,
    user_id: UUID | None = None,
    day: date | None = None,
) -> FoodLogEntry:
    return FoodLogEntry(
        id=uuid4(),
        meal_type=meal_type,
        name=name,
        quantity=100,
        unit="g",
        calories=calories,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
        user_id=user_id,
        day=day,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def food_log_repository() -> InMemoryFoodLogRepository:
    return InMemoryFoodLogRepository()


@pytest.fixture
def weight_log_repository() -> InMemoryWeightLogRepository:
    return InMemoryWeightLogRepository()


@pytest.fixture
def container(
    settings: Settings,
    user_repository: InMemoryUserRepository,
    profile_repository: InMemoryProfileRepository,
    food_log_repository: InMemoryFoodLogRepository,
    weight_log_repository: InMemoryWeightLogRepository,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        user_service=UserService(user_repository),
        profile_service=ProfileService(profile_repository),
        onboarding_service=OnboardingService(
            repository=InMemoryOnboardingRepository(),
            profile_writer=profile_repository,
        ),
        ledger_service=LedgerService(
            repository=food_log_repository,
            targets_repository=profile_repository,
            meal_slots=parse_meal_slots(settings.meal_slots),
            catch_all_slot=settings.catch_all_meal_slot,
        ),
        progress_service=ProgressService(
            weight_repository=weight_log_repository,
            food_log_repository=food_log_repository,
            targets_repository=profile_repository,
        ),
    )
