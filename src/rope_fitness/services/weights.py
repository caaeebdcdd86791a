"""Weight history for user profiles."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from rope_fitness.domain.weights import WeightEntry

CHART_DAYS = 30


class WeightRepository(Protocol):
    """Persistence interface for weight measurements."""

    def add_weight_entry(
        self, user_id: UUID, weight_kg: float, measurement_date: date, notes: str
    ) -> WeightEntry:
        """Store and return a weight measurement."""

    def list_weight_entries(self, user_id: UUID) -> list[WeightEntry]:
        """Return a user's measurements, newest first."""


@dataclass
class WeightService:
    """Reads a user's weight history."""

    repository: WeightRepository

    def get_history(self, user_id: UUID) -> list[WeightEntry]:
        """Return every measurement, newest first."""
        return self.repository.list_weight_entries(user_id)

    def get_chart(self, user_id: UUID, today: date | None = None) -> list[WeightEntry]:
        """Return measurements from the last 30 days, oldest first."""
        resolved_today = today or _utc_today()
        start = resolved_today - timedelta(days=CHART_DAYS)
        entries = [
            entry
            for entry in self.repository.list_weight_entries(user_id)
            if entry.measurement_date >= start
        ]
        return sorted(entries, key=lambda entry: entry.measurement_date)


def _utc_today() -> date:
    return datetime.now(tz=UTC).date()
