"""Domain models for workout logs."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class WorkoutLogRecord:
    """A logged jump rope workout."""

    id: UUID
    user_id: UUID
    workout_date: date
    work_minutes: float
    intensity: str
    calories_burned: float
    sets_completed: int = 0
    plan_id: int | None = None
    session_id: int | None = None
    notes: str = ""


@dataclass(frozen=True)
class WorkoutStats:
    """Calorie totals for recent periods."""

    today_calories: float
    weekly_calories: float
    monthly_calories: float
    total_workouts: int
    avg_calories_per_workout: int


@dataclass(frozen=True)
class WeekProgress:
    """Workouts completed this week against the weekly goal."""

    completed: int
    target: int
    remaining: int


@dataclass(frozen=True)
class DailyCalories:
    """Calories burned on one day."""

    workout_date: date
    calories: float
