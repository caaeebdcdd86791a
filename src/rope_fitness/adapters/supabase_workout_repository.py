"""Supabase repository for workout logs."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from rope_fitness.domain.workouts import WorkoutLogRecord
from rope_fitness.services.workouts import WorkoutRepository

_WORKOUT_COLUMNS = (
    "id, user_id, workout_date, work_minutes, intensity, calories_burned, "
    "sets_completed, plan_id, session_id, notes"
)


@dataclass
class SupabaseWorkoutRepository(WorkoutRepository):
    """Supabase implementation for workout logs."""

    client: Client

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
        """Insert a completed workout and return it."""
        response = (
            self.client.table("workout_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "workout_date": workout_date.isoformat(),
                    "work_minutes": work_minutes,
                    "intensity": intensity,
                    "calories_burned": calories_burned,
                    "sets_completed": sets_completed,
                    "plan_id": plan_id,
                    "session_id": session_id,
                    "notes": notes,
                    "completed": True,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create workout log in Supabase")
        return _parse_row(response.data[0])

    def get_workout_log(self, workout_id: UUID) -> WorkoutLogRecord | None:
        """Return a workout log by id."""
        response = (
            self.client.table("workout_logs")
            .select(_WORKOUT_COLUMNS)
            .eq("id", str(workout_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def update_workout_log(self, workout_id: UUID, changes: dict[str, object]) -> None:
        """Update columns of a workout log."""
        self.client.table("workout_logs").update(changes).eq(
            "id", str(workout_id)
        ).execute()

    def list_workout_logs(self, user_id: UUID) -> list[WorkoutLogRecord]:
        """Return a user's workout logs, newest first."""
        response = (
            self.client.table("workout_logs")
            .select(_WORKOUT_COLUMNS)
            .eq("user_id", str(user_id))
            .order("workout_date", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def delete_workout_log(self, workout_id: UUID) -> None:
        """Delete a workout log."""
        self.client.table("workout_logs").delete().eq("id", str(workout_id)).execute()


def _parse_row(row: dict[str, object]) -> WorkoutLogRecord:
    return WorkoutLogRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        workout_date=date.fromisoformat(str(row["workout_date"])),
        work_minutes=float(row.get("work_minutes") or 0.0),
        intensity=str(row.get("intensity") or ""),
        calories_burned=float(row.get("calories_burned") or 0.0),
        sets_completed=int(row.get("sets_completed") or 0),
        plan_id=row.get("plan_id"),
        session_id=row.get("session_id"),
        notes=str(row.get("notes") or ""),
    )
