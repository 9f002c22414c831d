"""Recipe catalog, recommendation and generation endpoints."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request, status

from fitness_tracker.api.schemas import (
    GenerateRecipeRequest,
    RecipeRequest,
    RecipeResponse,
)
from fitness_tracker.domain.nutrition import NutrientTotals

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get("")
async def list_recipes(
    request: Request, goal: str | None = None
) -> list[RecipeResponse]:
    """Return recipes, optionally filtered by fitness goal."""
    container: AppContainer = request.app.state.container
    return [
        RecipeResponse.from_domain(recipe)
        for recipe in container.recipe_service.list_recipes(goal)
    ]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_recipe(payload: RecipeRequest, request: Request) -> RecipeResponse:
    container: AppContainer = request.app.state.container
    recipe = container.recipe_service.create_recipe(
        name=payload.name,
        description=payload.description,
        ingredients=payload.ingredients,
        instructions=payload.instructions,
        totals=NutrientTotals(
            calories=payload.calories,
            protein_g=payload.protein,
            carbs_g=payload.carbs,
            fat_g=payload.fat,
        ),
        goal=payload.fitness_goal,
        image_ref=payload.image_url,
    )
    return RecipeResponse.from_domain(recipe)


@router.post("/generate", status_code=status.HTTP_201_CREATED)
async def generate_recipe(
    payload: GenerateRecipeRequest, request: Request
) -> RecipeResponse:
    """Generate a recipe for the remaining budget and store it."""
    container: AppContainer = request.app.state.container
    recipe = await container.recipe_service.request_generated_recipe(
        payload.fitness_goal, payload.remaining_nutrition.to_totals()
    )
    return RecipeResponse.from_domain(recipe)


@router.get("/recommended/{user_id}")
async def recommended_recipes(
    user_id: int,
    request: Request,
    day: date | None = Query(default=None, alias="date"),
) -> list[RecipeResponse]:
    """Rank recipes against what the user has left to eat today."""
    container: AppContainer = request.app.state.container
    recipes = container.recipe_service.recommend_for_user(
        user_id, day or container.ledger.today()
    )
    return [RecipeResponse.from_domain(recipe) for recipe in recipes]


@router.get("/{recipe_id}")
async def get_recipe(recipe_id: int, request: Request) -> RecipeResponse:
    container: AppContainer = request.app.state.container
    return RecipeResponse.from_domain(container.recipe_service.get_recipe(recipe_id))
