"""Request bodies accepted by the HTTP API."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel


class CalorieRequest(BaseModel):
    """Calorie estimate parameters."""

    weight_kg: float
    work_minutes: float
    intensity: str


class CalorieSummaryRequest(BaseModel):
    """Daily calories and workout frequency."""

    daily_calories: float
    workouts_per_week: int


class WorkoutTimeRequest(BaseModel):
    """Calorie target to convert into workout minutes."""

    target_calories: float
    weight_kg: float
    intensity: str


class BMIRequest(BaseModel):
    weight_kg: float
    height_cm: float


class WeightProgressRequest(BaseModel):
    current_weight: float
    target_weight: float


class WorkoutCreateRequest(BaseModel):
    """New workout log."""

    user_id: UUID
    workout_date: date
    work_minutes: float
    intensity: str
    sets_completed: int = 0
    plan_id: int | None = None
    session_id: int | None = None
    notes: str = ""


class WorkoutUpdateRequest(BaseModel):
    """Partial workout update."""

    workout_date: date | None = None
    work_minutes: float | None = None
    intensity: str | None = None
    sets_completed: int | None = None
    notes: str | None = None


class ProfileCreateRequest(BaseModel):
    """New user profile."""

    name: str
    age: int
    height_cm: float
    weight_kg: float
    target_weight_kg: float
    gender: str = "male"
    workouts_per_week: int = 3
    current_level: str = "beginner"
    preferred_intensity: str = "medium"


class ProfileUpdateRequest(BaseModel):
    """Partial profile update."""

    name: str | None = None
    age: int | None = None
    gender: str | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    target_weight_kg: float | None = None
    workouts_per_week: int | None = None
    current_level: str | None = None
    preferred_intensity: str | None = None
