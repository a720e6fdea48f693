"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_MEAL_SLOTS = "Café da Manhã,Almoço,Lanche,Jantar,Ceia"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    meal_slots: str = DEFAULT_MEAL_SLOTS
    catch_all_meal_slot: str | None = None
    fallback_target_calories: int = 2000
    fallback_protein_g: int = 150
    fallback_carbs_g: int = 200
    fallback_fat_g: int = 70
    weight_history_limit: int = 90
    max_progress_days: int = 90
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_meal_slots(raw: str | None) -> list[str]:
    """Parse the ordered meal slot names from env."""
    if raw is None or not raw.strip():
        raw = DEFAULT_MEAL_SLOTS
    slots: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if value and value not in slots:
            slots.append(value)
    return slots
