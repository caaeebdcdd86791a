"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from rope_fitness.api.models import (
    BMIRequest,
    CalorieRequest,
    CalorieSummaryRequest,
    ProfileCreateRequest,
    ProfileUpdateRequest,
    WeightProgressRequest,
    WorkoutCreateRequest,
    WorkoutTimeRequest,
    WorkoutUpdateRequest,
)
from rope_fitness.app_logging import configure_logging
from rope_fitness.containers import AppContainer
from rope_fitness.domain.calories import CalorieCalculationInput
from rope_fitness.domain.chat import ChatRequest
from rope_fitness.domain.errors import (
    InvalidArgumentError,
    ProfileNotFoundError,
    WorkoutNotFoundError,
)
from rope_fitness.domain.profiles import ProfileHealth, ProfileRecord
from rope_fitness.domain.weights import WeightEntry
from rope_fitness.domain.workouts import WorkoutLogRecord
from rope_fitness.services.calories import (
    INTENSITY_LEVELS,
    calculate_bmi,
    calculate_calorie_summary,
    calculate_calories,
    calculate_weight_progress,
    estimate_workout_time,
)


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(InvalidArgumentError)
    async def invalid_argument_handler(
        request: Request, exc: InvalidArgumentError
    ) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
        )

    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)}
        )

    app.add_exception_handler(ProfileNotFoundError, not_found_handler)
    app.add_exception_handler(WorkoutNotFoundError, not_found_handler)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/intensity-levels")
    async def intensity_levels() -> dict[str, object]:
        """Return the intensity tiers and their MET values."""
        return {
            "intensity_levels": {
                key.value: asdict(level) for key, level in INTENSITY_LEVELS.items()
            }
        }

    @app.post("/api/calculate/calories")
    async def calculate_calories_endpoint(body: CalorieRequest) -> dict[str, object]:
        """Estimate calories burned for a workout."""
        result = calculate_calories(
            CalorieCalculationInput(
                weight_kg=body.weight_kg,
                work_minutes=body.work_minutes,
                intensity=body.intensity,
            )
        )
        return asdict(result)

    @app.post("/api/calculate/summary")
    async def calorie_summary(body: CalorieSummaryRequest) -> dict[str, int]:
        """Project daily calories over a week and a month."""
        return asdict(
            calculate_calorie_summary(body.daily_calories, body.workouts_per_week)
        )

    @app.post("/api/calculate/workout-time")
    async def workout_time(body: WorkoutTimeRequest) -> dict[str, int]:
        """Return the minutes needed to reach a calorie target."""
        minutes = estimate_workout_time(
            body.target_calories, body.weight_kg, body.intensity
        )
        return {"minutes": minutes}

    @app.post("/api/calculate/bmi")
    async def bmi(body: BMIRequest) -> dict[str, object]:
        """Compute BMI and its health band."""
        return asdict(calculate_bmi(body.weight_kg, body.height_cm))

    @app.post("/api/calculate/weight-progress")
    async def weight_progress(body: WeightProgressRequest) -> dict[str, object]:
        """Compute distance to the target weight."""
        result = calculate_weight_progress(body.current_weight, body.target_weight)
        return asdict(result)

    @app.get("/api/users")
    async def list_users(request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        profiles = state_container.profile_service.list_profiles()
        return {"users": [_format_profile(profile) for profile in profiles]}

    @app.post("/api/users")
    async def create_user(
        body: ProfileCreateRequest, request: Request
    ) -> dict[str, object]:
        """Create a profile and its starting weight entry."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.create_profile(
            name=body.name,
            age=body.age,
            height_cm=body.height_cm,
            weight_kg=body.weight_kg,
            target_weight_kg=body.target_weight_kg,
            gender=body.gender,
            workouts_per_week=body.workouts_per_week,
            current_level=body.current_level,
            preferred_intensity=body.preferred_intensity,
        )
        return {"success": True, "user_id": str(profile.id)}

    @app.get("/api/users/{user_id}")
    async def user_detail(user_id: UUID, request: Request) -> dict[str, object]:
        """Return a profile with its BMI and weight progress."""
        state_container: AppContainer = request.app.state.container
        health = state_container.profile_service.get_health(user_id)
        if health is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return _format_profile_health(health)

    @app.put("/api/users/{user_id}")
    async def update_user(
        user_id: UUID, body: ProfileUpdateRequest, request: Request
    ) -> dict[str, object]:
        """Update profile fields; a new weight is added to the history."""
        state_container: AppContainer = request.app.state.container
        state_container.profile_service.update_profile(
            user_id, body.model_dump(exclude_none=True)
        )
        return {"success": True}

    @app.get("/api/weight/user/{user_id}")
    async def weight_history(user_id: UUID, request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        entries = state_container.weight_service.get_history(user_id)
        return {"weight_history": [_format_weight_entry(entry) for entry in entries]}

    @app.get("/api/weight/user/{user_id}/chart")
    async def weight_chart(user_id: UUID, request: Request) -> dict[str, object]:
        """Return the last 30 days of weights as chart points."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.weight_service.get_chart(user_id)
        return {
            "data": [
                {"date": entry.measurement_date.isoformat(), "weight": entry.weight_kg}
                for entry in entries
            ]
        }

    @app.post("/api/workouts")
    async def log_workout(
        body: WorkoutCreateRequest, request: Request
    ) -> dict[str, object]:
        """Log a workout priced from the user's weight."""
        state_container: AppContainer = request.app.state.container
        record = state_container.workout_service.log_workout(
            user_id=body.user_id,
            workout_date=body.workout_date,
            work_minutes=body.work_minutes,
            intensity=body.intensity,
            sets_completed=body.sets_completed,
            plan_id=body.plan_id,
            session_id=body.session_id,
            notes=body.notes,
        )
        return {
            "success": True,
            "workout_id": str(record.id),
            "calories_burned": record.calories_burned,
        }

    @app.put("/api/workouts/{workout_id}")
    async def update_workout(
        workout_id: UUID, body: WorkoutUpdateRequest, request: Request
    ) -> dict[str, object]:
        """Update a workout and recompute its calories."""
        state_container: AppContainer = request.app.state.container
        calories = state_container.workout_service.update_workout(
            workout_id,
            workout_date=body.workout_date,
            work_minutes=body.work_minutes,
            intensity=body.intensity,
            sets_completed=body.sets_completed,
            notes=body.notes,
        )
        return {"success": True, "calories_burned": calories}

    @app.delete("/api/workouts/{workout_id}")
    async def delete_workout(workout_id: UUID, request: Request) -> dict[str, bool]:
        state_container: AppContainer = request.app.state.container
        state_container.workout_service.delete_workout(workout_id)
        return {"success": True}

    @app.post("/api/workouts/{workout_id}/duplicate")
    async def duplicate_workout(
        workout_id: UUID, request: Request
    ) -> dict[str, object]:
        """Copy a workout to today's date."""
        state_container: AppContainer = request.app.state.container
        record = state_container.workout_service.duplicate_workout(workout_id)
        return {"success": True, "new_workout_id": str(record.id)}

    @app.get("/api/workouts/user/{user_id}")
    async def list_workouts(user_id: UUID, request: Request) -> dict[str, object]:
        """Return a user's workouts, newest first."""
        state_container: AppContainer = request.app.state.container
        records = state_container.workout_service.list_workouts(user_id)
        return {"workouts": [_format_workout(record) for record in records]}

    @app.get("/api/workouts/user/{user_id}/weekly-chart")
    async def weekly_chart(user_id: UUID, request: Request) -> dict[str, object]:
        """Return calories per day over the last week."""
        state_container: AppContainer = request.app.state.container
        days = state_container.workout_service.get_weekly_chart(user_id)
        return {
            "data": [
                {"date": day.workout_date.isoformat(), "calories": day.calories}
                for day in days
            ]
        }

    @app.get("/api/workouts/user/{user_id}/stats")
    async def workout_stats(user_id: UUID, request: Request) -> dict[str, object]:
        """Return calories burned over recent periods."""
        state_container: AppContainer = request.app.state.container
        return asdict(state_container.workout_service.get_stats(user_id))

    @app.get("/api/workouts/user/{user_id}/week-progress")
    async def week_progress(user_id: UUID, request: Request) -> dict[str, int]:
        """Return this week's workouts against the weekly goal."""
        state_container: AppContainer = request.app.state.container
        return asdict(state_container.workout_service.get_week_progress(user_id))

    @app.post("/api/nutrition/chat")
    async def nutrition_chat(body: ChatRequest, request: Request) -> dict[str, object]:
        """Relay a nutrition question to the chat model."""
        state_container: AppContainer = request.app.state.container
        reply = await state_container.chat_service.reply(body)
        return reply.model_dump(exclude_none=True)

    return app


def _format_profile(profile: ProfileRecord) -> dict[str, object]:
    user = asdict(profile)
    user["id"] = str(profile.id)
    return user


def _format_profile_health(health: ProfileHealth) -> dict[str, object]:
    """Serialize a profile and its metrics for JSON responses."""
    return {
        "user": _format_profile(health.profile),
        "bmi": asdict(health.bmi) if health.bmi else None,
        "progress": asdict(health.progress) if health.progress else None,
    }


def _format_workout(record: WorkoutLogRecord) -> dict[str, object]:
    workout = asdict(record)
    workout["id"] = str(record.id)
    workout["user_id"] = str(record.user_id)
    workout["workout_date"] = record.workout_date.isoformat()
    return workout


def _format_weight_entry(entry: WeightEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "user_id": str(entry.user_id),
        "weight_kg": entry.weight_kg,
        "measurement_date": entry.measurement_date.isoformat(),
        "notes": entry.notes,
    }
