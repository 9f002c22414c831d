"""Recipe catalog, recommendations and generated recipes."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from pydantic import ValidationError

from fitness_tracker.domain.nutrition import NutrientTotals
from fitness_tracker.domain.recipes import GeneratedRecipe, GoalTag, Recipe
from fitness_tracker.errors import GenerationFailed, InvalidInput, NotFound
from fitness_tracker.services.ledger import NutritionLedger
from fitness_tracker.services.store import Record, RecordStore
from fitness_tracker.services.users import UserService

_logger = logging.getLogger(__name__)

DEFAULT_IMAGE = "https://images.unsplash.com/photo-1546069901-ba9599a7e63c"
GOAL_IMAGES = {
    GoalTag.MUSCLE_GAIN: "https://images.unsplash.com/photo-1482049016688-2d3e1b311543",
    GoalTag.FAT_LOSS: "https://images.unsplash.com/photo-1546069901-ba9599a7e63c",
}

RECIPE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "description": {"type": "string"},
        "ingredients": {"type": "array", "items": {"type": "string"}},
        "instructions": {"type": "string"},
        "calories": {"type": "number", "minimum": 0},
        "protein": {"type": "number", "minimum": 0},
        "carbs": {"type": "number", "minimum": 0},
        "fat": {"type": "number", "minimum": 0},
    },
    "required": [
        "name",
        "description",
        "ingredients",
        "instructions",
        "calories",
        "protein",
        "carbs",
        "fat",
    ],
    "additionalProperties": False,
}


class RecipeGenerator(Protocol):
    """Interface for an external recipe text generator."""

    async def generate(
        self, goal: str, remaining: NutrientTotals, schema: dict[str, object]
    ) -> dict[str, object]:
        """Return a recipe-shaped JSON object."""


def recommend(
    goal: GoalTag, remaining: NutrientTotals, catalog: list[Recipe]
) -> list[Recipe]:
    """Order recipes by how closely their calories fit the remaining budget.

    Recipes tagged with the goal are preferred; when none match, the whole
    catalog is ranked instead. Ties keep catalog order.
    """
    matching = [recipe for recipe in catalog if recipe.goal_tag is goal]
    candidates = matching or list(catalog)
    return sorted(
        candidates,
        key=lambda recipe: abs(recipe.totals.calories - remaining.calories),
    )


def placeholder_image(goal: GoalTag) -> str:
    """Return a stock image reference for a goal."""
    return GOAL_IMAGES.get(goal, DEFAULT_IMAGE)


@dataclass
class RecipeService:
    """Application service for recipes."""

    repository: RecordStore
    ledger: NutritionLedger
    users: UserService
    generator: RecipeGenerator | None = None

    def list_recipes(self, goal: GoalTag | str | None = None) -> list[Recipe]:
        """Return stored recipes, optionally restricted to one goal."""
        filters = {"fitness_goal": parse_goal_tag(goal).value} if goal else None
        return [parse_recipe(row) for row in self.repository.find(filters)]

    def get_recipe(self, recipe_id: int) -> Recipe:
        """Return a recipe or raise NotFound."""
        record = self.repository.get(recipe_id)
        if record is None:
            raise NotFound(f"Recipe {recipe_id} not found")
        return parse_recipe(record)

    def create_recipe(  # noqa: PLR0913
        self,
        name: str,
        description: str,
        ingredients: list[str],
        instructions: str,
        totals: NutrientTotals,
        goal: GoalTag | str,
        image_ref: str | None = None,
    ) -> Recipe:
        """Persist a recipe."""
        if not name.strip():
            raise InvalidInput("Recipe name must not be empty")
        record = self.repository.create(
            {
                "name": name.strip(),
                "description": description,
                "ingredients": list(ingredients),
                "instructions": instructions,
                "calories": totals.calories,
                "protein": totals.protein_g,
                "carbs": totals.carbs_g,
                "fat": totals.fat_g,
                "fitness_goal": parse_goal_tag(goal).value,
                "image_url": image_ref,
            }
        )
        return parse_recipe(record)

    def recommend_for_user(self, user_id: int, day: date) -> list[Recipe]:
        """Rank stored recipes against the user's remaining budget for a day."""
        user = self.users.get_user(user_id)
        progress = self.ledger.daily_progress(user_id, day, user.goals)
        return recommend(user.fitness_goal, progress.remaining, self.list_recipes())

    async def request_generated_recipe(
        self, goal: GoalTag | str, remaining: NutrientTotals
    ) -> Recipe:
        """Generate a recipe for the goal and budget, then persist it."""
        tag = parse_goal_tag(goal)
        if self.generator is None:
            raise GenerationFailed("Recipe generation is not configured")
        try:
            raw = await self.generator.generate(tag.value, remaining, RECIPE_SCHEMA)
        except Exception as exc:
            _logger.exception("Recipe generation failed", extra={"goal": tag.value})
            raise GenerationFailed("Failed to generate recipe") from exc
        try:
            generated = GeneratedRecipe.model_validate(raw)
        except ValidationError as exc:
            _logger.warning("Generated recipe payload rejected: %s", exc)
            raise GenerationFailed("Generated recipe is missing fields") from exc
        return self.create_recipe(
            name=generated.name,
            description=generated.description,
            ingredients=generated.ingredients,
            instructions=generated.instructions,
            totals=generated.totals(),
            goal=tag,
            image_ref=generated.image_ref or placeholder_image(tag),
        )


def parse_goal_tag(value: GoalTag | str) -> GoalTag:
    """Parse a goal tag, accepting the legacy lowercase spellings."""
    try:
        return GoalTag(value)
    except ValueError as exc:
        raise InvalidInput(f"Unknown fitness goal: {value}") from exc


def parse_recipe(row: Record) -> Recipe:
    """Parse a recipe row into a domain model."""
    return Recipe(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        description=str(row.get("description", "")),
        instructions=str(row.get("instructions", "")),
        totals=NutrientTotals(
            calories=float(row.get("calories", 0.0)),
            protein_g=float(row.get("protein", 0.0)),
            carbs_g=float(row.get("carbs", 0.0)),
            fat_g=float(row.get("fat", 0.0)),
        ),
        goal_tag=GoalTag(row.get("fitness_goal") or GoalTag.MAINTENANCE.value),
        ingredients=[str(item) for item in row.get("ingredients") or []],
        image_ref=row.get("image_url"),
    )
