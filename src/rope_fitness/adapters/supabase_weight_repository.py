"""Supabase repository for weight measurements."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from rope_fitness.domain.weights import WeightEntry
from rope_fitness.services.weights import WeightRepository

_WEIGHT_COLUMNS = "id, user_id, weight_kg, measurement_date, notes"


@dataclass
class SupabaseWeightRepository(WeightRepository):
    """Supabase implementation for the weight_tracking table."""

    client: Client

    def add_weight_entry(
        self, user_id: UUID, weight_kg: float, measurement_date: date, notes: str
    ) -> WeightEntry:
        response = (
            self.client.table("weight_tracking")
            .insert(
                {
                    "user_id": str(user_id),
                    "weight_kg": weight_kg,
                    "measurement_date": measurement_date.isoformat(),
                    "notes": notes,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to record weight in Supabase")
        return _parse_entry(response.data[0])

    def list_weight_entries(self, user_id: UUID) -> list[WeightEntry]:
        """Return a user's measurements, newest first."""
        response = (
            self.client.table("weight_tracking")
            .select(_WEIGHT_COLUMNS)
            .eq("user_id", str(user_id))
            .order("measurement_date", desc=True)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]


def _parse_entry(row: dict[str, object]) -> WeightEntry:
    return WeightEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        weight_kg=float(row["weight_kg"]),
        measurement_date=date.fromisoformat(str(row["measurement_date"])),
        notes=str(row.get("notes") or ""),
    )
