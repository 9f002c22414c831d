"""Body profile models used by the energy calculator."""

from dataclasses import dataclass
from enum import Enum

from fitness_tracker.domain.nutrition import NutrientGoal


class Sex(str, Enum):
    """Biological sex for the BMR equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(str, Enum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "veryActive"


class WeightGoal(str, Enum):
    """Calorie adjustment goal."""

    WEIGHT_LOSS = "weightLoss"
    MAINTENANCE = "maintenance"
    MUSCLE_GAIN = "muscleGain"


@dataclass(frozen=True)
class Profile:
    """Body metrics, normalized to kilograms and centimeters."""

    weight_kg: float
    height_cm: float
    age_years: int
    sex: Sex | str
    activity_level: ActivityLevel | str
    goal: WeightGoal | str


@dataclass(frozen=True)
class EnergyBreakdown:
    """Intermediate figures of a daily target calculation."""

    bmr: float
    tdee: float
    adjusted_calories: float
    targets: NutrientGoal
