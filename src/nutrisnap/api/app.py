"""FastAPI application factory."""

import logging
from datetime import UTC, date, datetime, timedelta
from typing import Any
from uuid import UUID

from fastapi import Body, FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from nutrisnap.api.models import (
    FoodLogPayload,
    TargetsPreviewRequest,
    UserCreate,
    WeightLogPayload,
)
from nutrisnap.app_logging import configure_logging
from nutrisnap.containers import AppContainer
from nutrisnap.domain.errors import NutritionInputError
from nutrisnap.domain.ledger import FoodLogEntry
from nutrisnap.domain.models import UserRecord
from nutrisnap.domain.onboarding import OnboardingState
from nutrisnap.domain.profile import BiometricProfile, GoalProfile, NutritionTargets
from nutrisnap.services.onboarding import suggest_targets
from nutrisnap.services.targets import compute_targets

_PROGRESS_DAYS = 7


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    settings = container.settings
    configure_logging(getattr(logging, settings.log_level.upper(), logging.INFO))
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.exception_handler(NutritionInputError)
    async def nutrition_input_error(
        request: Request, exc: NutritionInputError
    ) -> JSONResponse:
        logger.warning(
            "Rejected input: path=%s field=%s error=%s",
            request.url.path,
            exc.field,
            exc,
        )
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "field": exc.field},
        )

    def suggestions_for(state: OnboardingState) -> NutritionTargets | None:
        try:
            return suggest_targets(state)
        except NutritionInputError as exc:
            logger.warning(
                "Stored onboarding answers cannot produce targets: field=%s error=%s",
                exc.field,
                exc,
            )
            return None

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/users", status_code=status.HTTP_201_CREATED)
    async def create_user(payload: UserCreate, request: Request) -> dict[str, object]:
        """Register a user or return the existing one."""
        state_container: AppContainer = request.app.state.container
        user = state_container.user_service.ensure_user(payload.uid, payload.email)
        profile = state_container.profile_service.get_profile(user.id)
        return {
            "user": user,
            "onboarding_completed": bool(profile and profile.onboarding_completed),
        }

    @app.get("/users/{uid}")
    async def get_user(uid: str, request: Request) -> dict[str, object]:
        """Return the user and the stored profile."""
        state_container: AppContainer = request.app.state.container
        user = _require_user(state_container, uid)
        return {
            "user": user,
            "profile": state_container.profile_service.get_profile(user.id),
        }

    @app.put("/users/{uid}")
    async def update_user_profile(
        uid: str,
        request: Request,
        data: dict[str, Any] | None = Body(default=None),
    ) -> dict[str, object]:
        """Edit profile fields and recompute targets."""
        state_container: AppContainer = request.app.state.container
        user = _require_user(state_container, uid)
        profile = state_container.profile_service.update_profile(user.id, data or {})
        if profile is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"profile": profile}

    @app.post("/targets/preview")
    async def preview_targets(payload: TargetsPreviewRequest) -> dict[str, object]:
        """Compute targets without persisting anything."""
        targets = compute_targets(
            BiometricProfile(
                sex=payload.sex,
                age_years=payload.age_years,
                height_cm=payload.height_cm,
                weight_kg=payload.weight_kg,
            ),
            GoalProfile(
                activity_level=payload.activity_level,
                goal=payload.goal,
                target_weight_kg=payload.target_weight_kg,
                target_body_fat_pct=payload.target_body_fat_pct,
            ),
        )
        return {"targets": targets}

    @app.get("/users/{uid}/targets")
    async def get_targets(uid: str, request: Request) -> dict[str, object]:
        """Return persisted targets, or the fallback when none are set."""
        state_container: AppContainer = request.app.state.container
        user = _require_user(state_container, uid)
        targets = state_container.profile_service.get_targets(user.id)
        return {
            "targets": targets or _fallback_targets(state_container),
            "is_fallback": targets is None,
        }

    @app.post("/users/{uid}/targets/recompute")
    async def recompute_targets(uid: str, request: Request) -> dict[str, object]:
        """Recompute and overwrite targets from the stored profile."""
        state_container: AppContainer = request.app.state.container
        user = _require_user(state_container, uid)
        targets = state_container.profile_service.recompute_targets(user.id)
        if targets is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"targets": targets}

    @app.get("/users/{uid}/onboarding")
    async def get_onboarding(uid: str, request: Request) -> dict[str, object]:
        """Return the onboarding answers collected so far."""
        state_container: AppContainer = request.app.state.container
        user = _require_user(state_container, uid)
        state = state_container.onboarding_service.get_state(user.id)
        return {"state": state, "suggested_targets": suggestions_for(state)}

    @app.post("/users/{uid}/onboarding/finalize")
    async def finalize_onboarding(uid: str, request: Request) -> dict[str, object]:
        """Finish onboarding and write the profile."""
        state_container: AppContainer = request.app.state.container
        user = _require_user(state_container, uid)
        payload = state_container.onboarding_service.complete(user.id)
        return {"profile": payload.to_record()}

    @app.post("/users/{uid}/onboarding/{step}")
    async def submit_onboarding_step(
        uid: str,
        step: str,
        request: Request,
        data: dict[str, Any] | None = Body(default=None),
    ) -> dict[str, object]:
        """Merge a step's answers into the onboarding state."""
        state_container: AppContainer = request.app.state.container
        user = _require_user(state_container, uid)
        state = state_container.onboarding_service.submit_step(
            user.id, step, data or {}
        )
        return {"state": state, "suggested_targets": suggestions_for(state)}

    @app.get("/users/{uid}/food-logs/{day}")
    async def get_day(uid: str, day: date, request: Request) -> dict[str, object]:
        """Return meal summaries and day totals for a date."""
        state_container: AppContainer = request.app.state.container
        user = _require_user(state_container, uid)
        targets = state_container.profile_service.get_targets(user.id)
        ledger = state_container.ledger_service.get_day(
            user.id, day, targets or _fallback_targets(state_container)
        )
        return {
            "day": day,
            "meals": ledger.meals,
            "daily": ledger.daily,
            "display_progress_pct": _clamp_progress(ledger.daily.progress_pct),
            "is_fallback_target": targets is None,
        }

    @app.post("/users/{uid}/food-logs", status_code=status.HTTP_201_CREATED)
    async def create_food_log(
        uid: str, payload: FoodLogPayload, request: Request
    ) -> dict[str, object]:
        """Record a food item."""
        state_container: AppContainer = request.app.state.container
        user = _require_user(state_container, uid)
        entry = state_container.ledger_service.add_entry(
            _entry_from_payload(payload, user.id, None)
        )
        return {"entry": entry}

    @app.put("/users/{uid}/food-logs/{entry_id}")
    async def replace_food_log(
        uid: str, entry_id: UUID, payload: FoodLogPayload, request: Request
    ) -> dict[str, object]:
        """Replace every field of a food item."""
        state_container: AppContainer = request.app.state.container
        user = _require_user(state_container, uid)
        entry = state_container.ledger_service.replace_entry(
            _entry_from_payload(payload, user.id, entry_id)
        )
        if entry is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"entry": entry}

    @app.delete("/users/{uid}/food-logs/{entry_id}")
    async def delete_food_log(
        uid: str, entry_id: UUID, request: Request
    ) -> dict[str, str]:
        """Delete a food item."""
        state_container: AppContainer = request.app.state.container
        user = _require_user(state_container, uid)
        if not state_container.ledger_service.delete_entry(user.id, entry_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "ok"}

    @app.get("/users/{uid}/weight-logs")
    async def list_weight_logs(
        uid: str, request: Request, limit: int | None = Query(default=None, ge=1)
    ) -> dict[str, object]:
        """Return recent weight logs."""
        state_container: AppContainer = request.app.state.container
        user = _require_user(state_container, uid)
        return {
            "weight_logs": state_container.progress_service.list_weights(
                user.id, limit
            )
        }

    @app.post("/users/{uid}/weight-logs", status_code=status.HTTP_201_CREATED)
    async def create_weight_log(
        uid: str, payload: WeightLogPayload, request: Request
    ) -> dict[str, object]:
        """Record a weight measurement."""
        state_container: AppContainer = request.app.state.container
        user = _require_user(state_container, uid)
        entry = state_container.progress_service.log_weight(
            user.id, payload.day, payload.weight_kg
        )
        return {"weight_log": entry}

    @app.get("/users/{uid}/progress")
    async def get_progress(
        uid: str,
        request: Request,
        start: date | None = None,
        end: date | None = None,
    ) -> dict[str, object]:
        """Return calorie adherence and weight trend for a date range."""
        state_container: AppContainer = request.app.state.container
        user = _require_user(state_container, uid)
        resolved_end = end or datetime.now(tz=UTC).date()
        resolved_start = start or resolved_end - timedelta(days=_PROGRESS_DAYS - 1)
        targets = state_container.profile_service.get_targets(user.id)
        summary = state_container.progress_service.get_progress(
            user.id,
            resolved_start,
            resolved_end,
            target_calories=(targets or _fallback_targets(state_container)).calories,
        )
        return {"start": resolved_start, "end": resolved_end, "progress": summary}

    return app


def _require_user(state_container: AppContainer, uid: str) -> UserRecord:
    """Return the user for a uid or raise 404."""
    user = state_container.user_service.get_user(uid)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
        )
    return user


def _fallback_targets(state_container: AppContainer) -> NutritionTargets:
    """Return the display defaults used when a user has no targets."""
    settings = state_container.settings
    return NutritionTargets(
        calories=settings.fallback_target_calories,
        protein_g=settings.fallback_protein_g,
        carbs_g=settings.fallback_carbs_g,
        fat_g=settings.fallback_fat_g,
    )


def _clamp_progress(progress_pct: float) -> float:
    """Cap a progress percentage to 0-100 for ring and bar widgets."""
    return max(0.0, min(progress_pct, 100.0))


def _entry_from_payload(
    payload: FoodLogPayload, user_id: UUID, entry_id: UUID | None
) -> FoodLogEntry:
    return FoodLogEntry(
        id=entry_id,
        user_id=user_id,
        day=payload.day,
        meal_type=payload.meal_type,
        name=payload.name,
        quantity=payload.quantity,
        unit=payload.unit,
        calories=payload.calories,
        protein_g=payload.protein_g,
        carbs_g=payload.carbs_g,
        fat_g=payload.fat_g,
    )
