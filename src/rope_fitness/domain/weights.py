"""Domain models for weight tracking."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class WeightEntry:
    """A weight measurement recorded for a user."""

    id: UUID
    user_id: UUID
    weight_kg: float
    measurement_date: date
    notes: str = ""
