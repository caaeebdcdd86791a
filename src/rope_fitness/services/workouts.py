"""Workout logging and statistics."""

import logging
import math
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from rope_fitness.domain.calories import CalorieCalculationInput, Intensity
from rope_fitness.domain.errors import (
    InvalidArgumentError,
    ProfileNotFoundError,
    WorkoutNotFoundError,
)
from rope_fitness.domain.workouts import (
    DailyCalories,
    WeekProgress,
    WorkoutLogRecord,
    WorkoutStats,
)
from rope_fitness.services.calories import calculate_calories
from rope_fitness.services.profiles import ProfileRepository

_logger = logging.getLogger(__name__)

WEEK_DAYS = 7
MONTH_DAYS = 30

DUPLICATE_NOTE = "Duplicated workout"
DUPLICATE_NOTE_PREFIX = "Copy: "


class WorkoutRepository(Protocol):
    """Persistence interface for workout logs."""

    def create_workout_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        workout_date: date,
        work_minutes: float,
        intensity: str,
        calories_burned: float,
        sets_completed: int,
        plan_id: int | None,
        session_id: int | None,
        notes: str,
    ) -> WorkoutLogRecord:
        """Create and return a workout log."""

    def get_workout_log(self, workout_id: UUID) -> WorkoutLogRecord | None:
        """Return a workout log by id."""

    def update_workout_log(self, workout_id: UUID, changes: dict[str, object]) -> None:
        """Apply column changes to a workout log."""

    def list_workout_logs(self, user_id: UUID) -> list[WorkoutLogRecord]:
        """Return every workout log for a user."""

    def delete_workout_log(self, workout_id: UUID) -> None:
        """Remove a workout log."""


@dataclass
class WorkoutService:
    """Service for logging workouts and summarizing calories burned."""

    profile_repository: ProfileRepository
    repository: WorkoutRepository
    default_workouts_per_week: int = 3

    def log_workout(  # noqa: PLR0913
        self,
        user_id: UUID,
        workout_date: date,
        work_minutes: float,
        intensity: Intensity | str,
        sets_completed: int = 0,
        plan_id: int | None = None,
        session_id: int | None = None,
        notes: str = "",
    ) -> WorkoutLogRecord:
        """Price a workout from the user's weight and store it."""
        weight_kg = self._weight_for(user_id)
        result = calculate_calories(
            CalorieCalculationInput(
                weight_kg=weight_kg,
                work_minutes=work_minutes,
                intensity=intensity,
            )
        )
        record = self.repository.create_workout_log(
            user_id=user_id,
            workout_date=workout_date,
            work_minutes=work_minutes,
            intensity=Intensity(intensity).value,
            calories_burned=result.total_calories,
            sets_completed=sets_completed,
            plan_id=plan_id,
            session_id=session_id,
            notes=notes,
        )
        _logger.info(
            "Workout logged: user_id=%s minutes=%s calories=%s",
            user_id,
            work_minutes,
            result.total_calories,
        )
        return record

    def update_workout(  # noqa: PLR0913
        self,
        workout_id: UUID,
        workout_date: date | None = None,
        work_minutes: float | None = None,
        intensity: Intensity | str | None = None,
        sets_completed: int | None = None,
        notes: str | None = None,
    ) -> float:
        """Update a workout and re-price it; return the new calories burned."""
        current = self.repository.get_workout_log(workout_id)
        if current is None:
            raise WorkoutNotFoundError(f"Workout not found: {workout_id}")

        minutes = current.work_minutes if work_minutes is None else work_minutes
        level = current.intensity if intensity is None else intensity
        result = calculate_calories(
            CalorieCalculationInput(
                weight_kg=self._weight_for(current.user_id),
                work_minutes=minutes,
                intensity=level,
            )
        )

        changes: dict[str, object] = {
            "work_minutes": minutes,
            "intensity": Intensity(level).value,
            "calories_burned": result.total_calories,
        }
        if workout_date is not None:
            changes["workout_date"] = workout_date.isoformat()
        if sets_completed is not None:
            changes["sets_completed"] = sets_completed
        if notes is not None:
            changes["notes"] = notes
        self.repository.update_workout_log(workout_id, changes)
        return result.total_calories

    def list_workouts(self, user_id: UUID) -> list[WorkoutLogRecord]:
        """Return a user's workouts, newest first."""
        return self.repository.list_workout_logs(user_id)

    def delete_workout(self, workout_id: UUID) -> None:
        if self.repository.get_workout_log(workout_id) is None:
            raise WorkoutNotFoundError(f"Workout not found: {workout_id}")
        self.repository.delete_workout_log(workout_id)
        _logger.info("Workout deleted: workout_id=%s", workout_id)

    def duplicate_workout(
        self, workout_id: UUID, today: date | None = None
    ) -> WorkoutLogRecord:
        """Copy a workout to today, keeping its calories as logged."""
        original = self.repository.get_workout_log(workout_id)
        if original is None:
            raise WorkoutNotFoundError(f"Workout not found: {workout_id}")
        notes = (
            f"{DUPLICATE_NOTE_PREFIX}{original.notes}"
            if original.notes
            else DUPLICATE_NOTE
        )
        return self.repository.create_workout_log(
            user_id=original.user_id,
            workout_date=today or _utc_today(),
            work_minutes=original.work_minutes,
            intensity=original.intensity,
            calories_burned=original.calories_burned,
            sets_completed=original.sets_completed,
            plan_id=original.plan_id,
            session_id=original.session_id,
            notes=notes,
        )

    def get_weekly_chart(
        self, user_id: UUID, today: date | None = None
    ) -> list[DailyCalories]:
        """Return calories per workout day over the last 7 days, oldest first."""
        resolved_today = today or _utc_today()
        start = resolved_today - timedelta(days=WEEK_DAYS)
        totals: dict[date, float] = {}
        for log in self.repository.list_workout_logs(user_id):
            if log.workout_date >= start:
                totals[log.workout_date] = (
                    totals.get(log.workout_date, 0.0) + log.calories_burned
                )
        return [
            DailyCalories(workout_date=day, calories=totals[day])
            for day in sorted(totals)
        ]

    def get_stats(self, user_id: UUID, today: date | None = None) -> WorkoutStats:
        """Return calories burned today, in the last 7 and 30 days, and overall."""
        resolved_today = today or _utc_today()
        logs = self.repository.list_workout_logs(user_id)
        week_start = resolved_today - timedelta(days=WEEK_DAYS)
        month_start = resolved_today - timedelta(days=MONTH_DAYS)

        total_calories = sum(log.calories_burned for log in logs)
        average = total_calories / len(logs) if logs else 0.0
        return WorkoutStats(
            today_calories=sum(
                log.calories_burned
                for log in logs
                if log.workout_date == resolved_today
            ),
            weekly_calories=sum(
                log.calories_burned for log in logs if log.workout_date >= week_start
            ),
            monthly_calories=sum(
                log.calories_burned for log in logs if log.workout_date >= month_start
            ),
            total_workouts=len(logs),
            avg_calories_per_workout=math.floor(average + 0.5),
        )

    def get_week_progress(
        self, user_id: UUID, today: date | None = None
    ) -> WeekProgress:
        """Return workouts done since the last Sunday against the weekly goal.

        On a Sunday the count starts from the previous Sunday.
        """
        resolved_today = today or _utc_today()
        days_since_sunday = (resolved_today.weekday() + 1) % WEEK_DAYS or WEEK_DAYS
        week_start = resolved_today - timedelta(days=days_since_sunday)
        completed = sum(
            1
            for log in self.repository.list_workout_logs(user_id)
            if log.workout_date >= week_start
        )
        profile = self.profile_repository.get_profile(user_id)
        target = (
            profile.workouts_per_week
            if profile and profile.workouts_per_week
            else self.default_workouts_per_week
        )
        return WeekProgress(
            completed=completed,
            target=target,
            remaining=max(0, target - completed),
        )

    def _weight_for(self, user_id: UUID) -> float:
        profile = self.profile_repository.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(f"Profile not found: {user_id}")
        if not profile.weight_kg:
            raise InvalidArgumentError(f"Profile {user_id} has no weight recorded")
        return profile.weight_kg


def _utc_today() -> date:
    return datetime.now(tz=UTC).date()
