"""Calorie and body metric calculations for jump rope workouts.

Energy expenditure follows the MET formula::

    calories_per_minute = 0.0175 * MET * weight_kg

MET values per pace come from published jump rope measurements: slow
(< 100 skips/min) 8.8, moderate (100-120) 11.8, fast (120-160) 12.3.

Every function here is pure. Arithmetic runs on ``Decimal`` values so that
half-away-from-zero rounding is applied once, to the exact result, at the
output boundary of each function.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from types import MappingProxyType

from rope_fitness.domain.calories import (
    BMIResult,
    CalorieCalculationInput,
    CalorieCalculationResult,
    CalorieSummary,
    Intensity,
    IntensityLevel,
    WeightProgressResult,
)
from rope_fitness.domain.errors import InvalidArgumentError

MET_FACTOR = Decimal("0.0175")
WEEKS_PER_MONTH = 4

BMI_UNDERWEIGHT_LIMIT = Decimal("18.5")
BMI_NORMAL_LIMIT = Decimal("25")
BMI_OVERWEIGHT_LIMIT = Decimal("30")

INTENSITY_LEVELS = MappingProxyType(
    {
        Intensity.EASY: IntensityLevel(
            name="Easy",
            met=8.8,
            description="Slow pace, fewer than 100 skips per minute",
            skips_per_minute="< 100",
        ),
        Intensity.MEDIUM: IntensityLevel(
            name="Medium",
            met=11.8,
            description="Moderate pace, 100-120 skips per minute",
            skips_per_minute="100-120",
        ),
        Intensity.HARD: IntensityLevel(
            name="Hard",
            met=12.3,
            description="Fast pace, 120-160 skips per minute",
            skips_per_minute="120-160",
        ),
    }
)


def get_intensity_level(intensity: Intensity | str) -> IntensityLevel:
    """Return the intensity tier for a key, rejecting unknown values."""
    try:
        key = Intensity(intensity)
    except ValueError:
        raise InvalidArgumentError(
            f"Invalid intensity level: {intensity!r}"
        ) from None
    return INTENSITY_LEVELS[key]


def calculate_calories(data: CalorieCalculationInput) -> CalorieCalculationResult:
    """Estimate calories burned for a jump rope workout."""
    if data.weight_kg <= 0:
        raise InvalidArgumentError(f"weight_kg must be positive: {data.weight_kg}")
    if data.work_minutes < 0:
        raise InvalidArgumentError(
            f"work_minutes must not be negative: {data.work_minutes}"
        )
    level = get_intensity_level(data.intensity)

    per_minute = _calories_per_minute(level, data.weight_kg)
    total = per_minute * _to_decimal(data.work_minutes)

    return CalorieCalculationResult(
        calories_per_minute=float(_round(per_minute, 2)),
        total_calories=float(_round(total, 2)),
        intensity_level=level,
        work_minutes=data.work_minutes,
        weight_kg=data.weight_kg,
    )


def calculate_calorie_summary(
    daily_calories: float, workouts_per_week: int
) -> CalorieSummary:
    """Project daily calories over a week and a four-week month."""
    daily = _to_decimal(daily_calories)
    weekly = daily * workouts_per_week
    monthly = weekly * WEEKS_PER_MONTH
    return CalorieSummary(
        daily=int(_round(daily, 0)),
        weekly=int(_round(weekly, 0)),
        monthly=int(_round(monthly, 0)),
    )


def estimate_workout_time(
    target_calories: float, weight_kg: float, intensity: Intensity | str
) -> int:
    """Return the whole minutes needed to burn at least ``target_calories``."""
    level = get_intensity_level(intensity)
    if weight_kg <= 0:
        raise InvalidArgumentError(f"weight_kg must be positive: {weight_kg}")
    if target_calories < 0:
        raise InvalidArgumentError(
            f"target_calories must not be negative: {target_calories}"
        )
    per_minute = _calories_per_minute(level, weight_kg)
    minutes = _to_decimal(target_calories) / per_minute
    return math.ceil(minutes)


def calculate_bmi(weight_kg: float, height_cm: float) -> BMIResult:
    """Compute BMI and its health band from metric measurements."""
    if height_cm <= 0:
        raise InvalidArgumentError(f"height_cm must be positive: {height_cm}")
    if weight_kg <= 0:
        raise InvalidArgumentError(f"weight_kg must be positive: {weight_kg}")
    height_m = _to_decimal(height_cm) / 100
    bmi = _to_decimal(weight_kg) / (height_m * height_m)

    # The band is taken from the unrounded value.
    if bmi < BMI_UNDERWEIGHT_LIMIT:
        status = "underweight"
    elif bmi < BMI_NORMAL_LIMIT:
        status = "normal"
    elif bmi < BMI_OVERWEIGHT_LIMIT:
        status = "overweight"
    else:
        status = "obese"

    return BMIResult(bmi=float(_round(bmi, 1)), status=status)


def calculate_weight_progress(
    current_weight: float, target_weight: float
) -> WeightProgressResult:
    """Compute remaining kilograms and percentage progress to a target weight.

    ``remaining`` and ``total_to_lose`` are both measured from the current
    weight, so ``progress_percentage`` is always 0. A real progress figure
    needs a starting weight that this function does not take.
    """
    total_to_lose = _to_decimal(current_weight) - _to_decimal(target_weight)
    remaining = _to_decimal(current_weight) - _to_decimal(target_weight)
    if total_to_lose == 0:
        raise InvalidArgumentError(
            "current_weight equals target_weight; progress is undefined"
        )
    progress = (total_to_lose - remaining) / total_to_lose * 100

    return WeightProgressResult(
        remaining_kg=float(_round(remaining, 1)),
        progress_percentage=max(0, int(_round(progress, 0))),
        total_to_lose=float(_round(total_to_lose, 1)),
    )


def _calories_per_minute(level: IntensityLevel, weight_kg: float) -> Decimal:
    return MET_FACTOR * _to_decimal(level.met) * _to_decimal(weight_kg)


def _to_decimal(value: float) -> Decimal:
    """Convert a finite number to Decimal through its shortest repr."""
    if not math.isfinite(value):
        raise InvalidArgumentError(f"Expected a finite number: {value}")
    return Decimal(str(value))


def _round(value: Decimal, places: int) -> Decimal:
    """Round half away from zero to ``places`` decimals."""
    with localcontext() as context:
        # quantize needs room for every integer digit plus the decimals.
        context.prec = max(context.prec, value.adjusted() + places + 1)
        return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
