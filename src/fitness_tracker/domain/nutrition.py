"""Nutrient value types."""

import math
from dataclasses import dataclass

from fitness_tracker.errors import InvalidInput

NUTRIENT_FIELDS = ("calories", "protein_g", "carbs_g", "fat_g")


@dataclass(frozen=True)
class NutrientTotals:
    """Calories and macronutrient grams."""

    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0

    def __post_init__(self) -> None:
        for name in NUTRIENT_FIELDS:
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise InvalidInput(f"{name} must be a finite non-negative number")

    def __add__(self, other: "NutrientTotals") -> "NutrientTotals":
        if not isinstance(other, NutrientTotals):
            return NotImplemented
        return NutrientTotals(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
        )

    def scale(self, factor: float) -> "NutrientTotals":
        """Return totals multiplied by a non-negative factor."""
        if not math.isfinite(factor) or factor < 0:
            raise InvalidInput("Scale factor must be a finite non-negative number")
        return NutrientTotals(
            calories=self.calories * factor,
            protein_g=self.protein_g * factor,
            carbs_g=self.carbs_g * factor,
            fat_g=self.fat_g * factor,
        )

    def floor_subtract(self, consumed: "NutrientTotals") -> "NutrientTotals":
        """Subtract per field, clamping each result at zero."""
        return NutrientTotals(
            calories=max(self.calories - consumed.calories, 0.0),
            protein_g=max(self.protein_g - consumed.protein_g, 0.0),
            carbs_g=max(self.carbs_g - consumed.carbs_g, 0.0),
            fat_g=max(self.fat_g - consumed.fat_g, 0.0),
        )


@dataclass(frozen=True)
class NutrientGoal(NutrientTotals):
    """Daily nutrient target."""


DEFAULT_GOAL = NutrientGoal(calories=2000, protein_g=140, carbs_g=220, fat_g=70)


@dataclass(frozen=True)
class NutrientProgress:
    """Consumed totals measured against a goal."""

    consumed: NutrientTotals
    goal: NutrientGoal
    remaining: NutrientTotals

    @classmethod
    def measure(cls, consumed: NutrientTotals, goal: NutrientGoal) -> "NutrientProgress":
        """Build progress; remaining never drops below zero."""
        return cls(consumed=consumed, goal=goal, remaining=goal.floor_subtract(consumed))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)
