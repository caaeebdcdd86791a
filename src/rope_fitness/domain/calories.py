"""Domain models for calorie and body metric calculations."""

from dataclasses import dataclass
from enum import Enum


class Intensity(str, Enum):
    """Jump rope intensity tiers."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class IntensityLevel:
    """Exertion data for one intensity tier."""

    name: str
    met: float
    description: str
    skips_per_minute: str


@dataclass(frozen=True)
class CalorieCalculationInput:
    """Parameters for a calorie estimate."""

    weight_kg: float
    work_minutes: float
    intensity: Intensity | str


@dataclass(frozen=True)
class CalorieCalculationResult:
    """Calories burned for a single workout."""

    calories_per_minute: float
    total_calories: float
    intensity_level: IntensityLevel
    work_minutes: float
    weight_kg: float


@dataclass(frozen=True)
class CalorieSummary:
    """Calories projected over a week and a four-week month."""

    daily: int
    weekly: int
    monthly: int


@dataclass(frozen=True)
class BMIResult:
    """Body mass index and its health band."""

    bmi: float
    status: str


@dataclass(frozen=True)
class WeightProgressResult:
    """Distance to the target weight."""

    remaining_kg: float
    progress_percentage: int
    total_to_lose: float
