"""Supabase-backed profile repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from rope_fitness.domain.profiles import ProfileRecord
from rope_fitness.services.profiles import ProfileRepository

_PROFILE_COLUMNS = (
    "id, name, age, gender, height_cm, weight_kg, target_weight_kg, "
    "workouts_per_week, current_level, preferred_intensity"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profiles."""

    client: Client

    def get_profile(self, user_id: UUID) -> ProfileRecord | None:
        """Return the profile for a user id, if present."""
        response = (
            self.client.table("profiles")
            .select(_PROFILE_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def list_profiles(self) -> list[ProfileRecord]:
        """Return every profile, newest first."""
        response = (
            self.client.table("profiles")
            .select(_PROFILE_COLUMNS)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_profile(row) for row in response.data or []]

    def create_profile(self, values: dict[str, object]) -> ProfileRecord:
        """Insert a profile and return it."""
        response = self.client.table("profiles").insert(values).execute()
        if not response.data:
            raise RuntimeError("Failed to create profile in Supabase")
        return _parse_profile(response.data[0])

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> None:
        """Update columns of a profile."""
        self.client.table("profiles").update(changes).eq("id", str(user_id)).execute()


def _parse_profile(row: dict[str, object]) -> ProfileRecord:
    return ProfileRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        age=_optional_int(row.get("age")),
        gender=row.get("gender"),
        height_cm=_optional_float(row.get("height_cm")),
        weight_kg=_optional_float(row.get("weight_kg")),
        target_weight_kg=_optional_float(row.get("target_weight_kg")),
        workouts_per_week=_optional_int(row.get("workouts_per_week")),
        current_level=row.get("current_level"),
        preferred_intensity=row.get("preferred_intensity"),
    )


def _optional_float(value: object) -> float | None:
    return None if value is None else float(value)


def _optional_int(value: object) -> int | None:
    return None if value is None else int(value)
