"""Recipe domain models."""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from fitness_tracker.domain.nutrition import NutrientTotals


class GoalTag(str, Enum):
    """Fitness goal a recipe is suited for."""

    FAT_LOSS = "fatLoss"
    MUSCLE_GAIN = "muscleGain"
    MAINTENANCE = "maintenance"
    HIGH_PROTEIN = "highProtein"

    @classmethod
    def _missing_(cls, value: object) -> "GoalTag | None":
        if isinstance(value, str):
            lowered = value.replace("_", "").lower()
            for member in cls:
                if member.value.lower() == lowered:
                    return member
        return None


@dataclass(frozen=True)
class Recipe:
    """A stored recipe with its nutrient totals."""

    id: int
    name: str
    description: str
    instructions: str
    totals: NutrientTotals
    goal_tag: GoalTag
    ingredients: list[str] = field(default_factory=list)
    image_ref: str | None = None


class GeneratedRecipe(BaseModel):
    """Recipe payload returned by the generation collaborator."""

    name: str = Field(min_length=1)
    description: str
    ingredients: list[str]
    instructions: str
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    image_ref: str | None = Field(default=None, alias="imageRef")

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    def totals(self) -> NutrientTotals:
        return NutrientTotals(
            calories=self.calories,
            protein_g=self.protein,
            carbs_g=self.carbs,
            fat_g=self.fat,
        )
