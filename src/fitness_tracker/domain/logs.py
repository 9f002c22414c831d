"""Domain models for food, exercise and water logging."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from fitness_tracker.domain.nutrition import NutrientTotals


class MealType(str, Enum):
    """Meal slot of a food log entry."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACKS = "snacks"


@dataclass(frozen=True)
class FoodItem:
    """A food with per-serving nutrients."""

    id: int
    name: str
    calories_per_serving: float
    protein_g: float
    carbs_g: float
    fat_g: float
    serving_size: float
    serving_unit: str
    contributor_user_id: int | None = None

    def per_serving(self) -> NutrientTotals:
        return NutrientTotals(
            calories=self.calories_per_serving,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
        )


@dataclass(frozen=True)
class FoodLogEntry:
    """A logged number of servings of a food."""

    id: int
    user_id: int
    food_id: int
    quantity: float
    meal_type: MealType
    logged_at: datetime


@dataclass(frozen=True)
class ExerciseType:
    """An exercise with its calorie burn rate."""

    id: int
    name: str
    calories_burned_per_minute: float
    category: str


@dataclass(frozen=True)
class ExerciseLogEntry:
    """A logged exercise session."""

    id: int
    user_id: int
    exercise_type_id: int
    duration_minutes: int
    logged_at: datetime


@dataclass(frozen=True)
class WaterLogEntry:
    """A logged amount of water."""

    id: int
    user_id: int
    amount_ml: float
    logged_at: datetime


@dataclass(frozen=True)
class FoodLogView:
    """Food log entry joined with its food and scaled nutrients."""

    entry: FoodLogEntry
    food: FoodItem
    nutrients: NutrientTotals


@dataclass(frozen=True)
class ExerciseLogView:
    """Exercise log entry joined with its type and derived burn."""

    entry: ExerciseLogEntry
    exercise: ExerciseType

    @property
    def calories_burned(self) -> float:
        return self.exercise.calories_burned_per_minute * self.entry.duration_minutes
