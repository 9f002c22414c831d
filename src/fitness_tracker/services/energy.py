"""Daily energy and macro target calculator.

BMR uses the Mifflin-St Jeor equation. TDEE applies a fixed activity
multiplier, then a goal multiplier adjusts calories before they are split
into macros by goal-specific ratios.
"""

import math
from enum import Enum
from typing import TypeVar

from fitness_tracker.domain.nutrition import NutrientGoal, round_half_up
from fitness_tracker.domain.profile import (
    ActivityLevel,
    EnergyBreakdown,
    Profile,
    Sex,
    WeightGoal,
)
from fitness_tracker.errors import InvalidInput

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

GOAL_MULTIPLIERS: dict[WeightGoal, float] = {
    WeightGoal.WEIGHT_LOSS: 0.8,
    WeightGoal.MAINTENANCE: 1.0,
    WeightGoal.MUSCLE_GAIN: 1.1,
}

# Fractions of calories as (protein, carbs, fat).
MACRO_RATIOS: dict[WeightGoal, tuple[float, float, float]] = {
    WeightGoal.WEIGHT_LOSS: (0.4, 0.3, 0.3),
    WeightGoal.MAINTENANCE: (0.3, 0.45, 0.25),
    WeightGoal.MUSCLE_GAIN: (0.3, 0.5, 0.2),
}

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9

E = TypeVar("E", bound=Enum)


def basal_metabolic_rate(profile: Profile) -> float:
    """Return resting calories per day."""
    _validate_metrics(profile)
    sex = _coerce(Sex, profile.sex, "sex")
    offset = 5 if sex is Sex.MALE else -161
    return (
        10 * profile.weight_kg
        + 6.25 * profile.height_cm
        - 5 * profile.age_years
        + offset
    )


def total_daily_energy_expenditure(profile: Profile) -> float:
    """Return BMR scaled by the activity multiplier."""
    level = _coerce(ActivityLevel, profile.activity_level, "activity level")
    return basal_metabolic_rate(profile) * ACTIVITY_MULTIPLIERS[level]


def compute_energy_breakdown(profile: Profile) -> EnergyBreakdown:
    """Return BMR, TDEE, adjusted calories and rounded daily targets."""
    goal = _coerce(WeightGoal, profile.goal, "goal")
    bmr = basal_metabolic_rate(profile)
    tdee = total_daily_energy_expenditure(profile)
    adjusted = tdee * GOAL_MULTIPLIERS[goal]
    protein_ratio, carbs_ratio, fat_ratio = MACRO_RATIOS[goal]
    # Calories and grams are rounded independently; their kcal sums may differ.
    targets = NutrientGoal(
        calories=round_half_up(adjusted),
        protein_g=round_half_up(adjusted * protein_ratio / KCAL_PER_GRAM_PROTEIN),
        carbs_g=round_half_up(adjusted * carbs_ratio / KCAL_PER_GRAM_CARBS),
        fat_g=round_half_up(adjusted * fat_ratio / KCAL_PER_GRAM_FAT),
    )
    return EnergyBreakdown(
        bmr=bmr, tdee=tdee, adjusted_calories=adjusted, targets=targets
    )


def compute_daily_targets(profile: Profile) -> NutrientGoal:
    """Return rounded calorie and macro targets for a profile."""
    return compute_energy_breakdown(profile).targets


def _validate_metrics(profile: Profile) -> None:
    if not _is_number(profile.weight_kg) or profile.weight_kg <= 0:
        raise InvalidInput("Weight must be a positive number")
    if not _is_number(profile.height_cm) or profile.height_cm <= 0:
        raise InvalidInput("Height must be a positive number")
    if not isinstance(profile.age_years, int) or isinstance(profile.age_years, bool):
        raise InvalidInput("Age must be a whole number")
    if profile.age_years <= 0:
        raise InvalidInput("Age must be a positive number")


def _is_number(value: object) -> bool:
    return (
        isinstance(value, int | float)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _coerce(enum_cls: type[E], value: object, label: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise InvalidInput(f"Unknown {label}: {value}") from exc
