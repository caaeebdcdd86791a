"""Domain models for user profiles."""

from dataclasses import dataclass
from uuid import UUID

from rope_fitness.domain.calories import BMIResult, WeightProgressResult


@dataclass(frozen=True)
class ProfileRecord:
    """Represents a profile stored in the database."""

    id: UUID
    name: str
    age: int | None = None
    gender: str | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    target_weight_kg: float | None = None
    workouts_per_week: int | None = None
    current_level: str | None = None
    preferred_intensity: str | None = None


@dataclass(frozen=True)
class ProfileHealth:
    """Profile with derived body metrics."""

    profile: ProfileRecord
    bmi: BMIResult | None
    progress: WeightProgressResult | None
