"""Profile lookups with derived body metrics."""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from rope_fitness.domain.calories import BMIResult, WeightProgressResult
from rope_fitness.domain.errors import InvalidArgumentError, ProfileNotFoundError
from rope_fitness.domain.profiles import ProfileHealth, ProfileRecord
from rope_fitness.services.calories import (
    calculate_bmi,
    calculate_weight_progress,
    get_intensity_level,
)
from rope_fitness.services.weights import WeightRepository

_logger = logging.getLogger(__name__)

PROFILE_FIELDS = frozenset(
    {
        "name",
        "age",
        "gender",
        "height_cm",
        "weight_kg",
        "target_weight_kg",
        "workouts_per_week",
        "current_level",
        "preferred_intensity",
    }
)
_MEASUREMENT_FIELDS = ("height_cm", "weight_kg", "target_weight_kg")

STARTING_WEIGHT_NOTE = "Starting weight"
WEIGHT_UPDATE_NOTE = "Weight update"


class ProfileRepository(Protocol):
    """Persistence interface for profiles."""

    def get_profile(self, user_id: UUID) -> ProfileRecord | None:
        """Return the profile for a user id, if present."""

    def list_profiles(self) -> list[ProfileRecord]:
        """Return every profile, newest first."""

    def create_profile(self, values: dict[str, object]) -> ProfileRecord:
        """Insert a profile and return it."""

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> None:
        """Apply column changes to a profile."""


@dataclass
class ProfileService:
    """Application service for profiles and their weight history."""

    repository: ProfileRepository
    weight_repository: WeightRepository

    def get_profile(self, user_id: UUID) -> ProfileRecord | None:
        """Return a profile by id."""
        return self.repository.get_profile(user_id)

    def list_profiles(self) -> list[ProfileRecord]:
        return self.repository.list_profiles()

    def get_health(self, user_id: UUID) -> ProfileHealth | None:
        """Return a profile with BMI and weight progress where computable."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            return None
        return ProfileHealth(
            profile=profile,
            bmi=_profile_bmi(profile),
            progress=_profile_progress(profile),
        )

    def create_profile(  # noqa: PLR0913
        self,
        name: str,
        age: int,
        height_cm: float,
        weight_kg: float,
        target_weight_kg: float,
        gender: str = "male",
        workouts_per_week: int = 3,
        current_level: str = "beginner",
        preferred_intensity: str = "medium",
        today: date | None = None,
    ) -> ProfileRecord:
        """Create a profile and record its starting weight."""
        values: dict[str, object] = {
            "name": name,
            "age": age,
            "gender": gender,
            "height_cm": height_cm,
            "weight_kg": weight_kg,
            "target_weight_kg": target_weight_kg,
            "workouts_per_week": workouts_per_week,
            "current_level": current_level,
            "preferred_intensity": preferred_intensity,
        }
        _validate_profile_values(values)

        profile = self.repository.create_profile(values)
        self.weight_repository.add_weight_entry(
            user_id=profile.id,
            weight_kg=weight_kg,
            measurement_date=today or _utc_today(),
            notes=STARTING_WEIGHT_NOTE,
        )
        _logger.info("Profile created: user_id=%s", profile.id)
        return profile

    def update_profile(
        self,
        user_id: UUID,
        changes: Mapping[str, object],
        today: date | None = None,
    ) -> None:
        """Apply the supplied fields and record a weight change, if any.

        Fields whose value is ``None`` keep their stored value.
        """
        current = self.repository.get_profile(user_id)
        if current is None:
            raise ProfileNotFoundError(f"Profile not found: {user_id}")
        unknown = set(changes) - PROFILE_FIELDS
        if unknown:
            raise InvalidArgumentError(f"Unknown profile fields: {sorted(unknown)}")
        values = {key: value for key, value in changes.items() if value is not None}
        if not values:
            return
        _validate_profile_values(values)

        self.repository.update_profile(user_id, values)
        new_weight = values.get("weight_kg")
        if new_weight is not None and new_weight != current.weight_kg:
            self.weight_repository.add_weight_entry(
                user_id=user_id,
                weight_kg=float(new_weight),
                measurement_date=today or _utc_today(),
                notes=WEIGHT_UPDATE_NOTE,
            )
        _logger.info("Profile updated: user_id=%s fields=%s", user_id, sorted(values))


def _validate_profile_values(values: Mapping[str, object]) -> None:
    for key in _MEASUREMENT_FIELDS:
        value = values.get(key)
        if value is None:
            continue
        if not math.isfinite(value) or value <= 0:
            raise InvalidArgumentError(f"{key} must be positive: {value}")
    intensity = values.get("preferred_intensity")
    if intensity is not None:
        get_intensity_level(intensity)
    if "name" in values and not str(values["name"]).strip():
        raise InvalidArgumentError("name must not be blank")


def _profile_bmi(profile: ProfileRecord) -> BMIResult | None:
    if not profile.weight_kg or not profile.height_cm:
        return None
    if profile.weight_kg <= 0 or profile.height_cm <= 0:
        return None
    return calculate_bmi(profile.weight_kg, profile.height_cm)


def _profile_progress(profile: ProfileRecord) -> WeightProgressResult | None:
    if profile.weight_kg is None or profile.target_weight_kg is None:
        return None
    if profile.weight_kg == profile.target_weight_kg:
        return None
    return calculate_weight_progress(profile.weight_kg, profile.target_weight_kg)


def _utc_today() -> date:
    return datetime.now(tz=UTC).date()
