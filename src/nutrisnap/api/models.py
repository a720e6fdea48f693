"""Pydantic models for API request payloads."""

from datetime import date

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Payload for registering a user after sign-up."""

    uid: str = Field(min_length=1)
    email: str = Field(min_length=3)


class TargetsPreviewRequest(BaseModel):
    """Biometric and goal answers for a target preview."""

    sex: str
    age_years: int
    height_cm: float
    weight_kg: float
    activity_level: str
    goal: str
    target_weight_kg: float | None = None
    target_body_fat_pct: float | None = None


class FoodLogPayload(BaseModel):
    """Payload for creating or replacing a food log entry."""

    day: date
    meal_type: str
    name: str
    quantity: float
    unit: str
    calories: float
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0


class WeightLogPayload(BaseModel):
    """Payload for recording a weight measurement."""

    day: date
    weight_kg: float
