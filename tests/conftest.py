"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from fitness_tracker.adapters.memory_store import build_memory_stores
from fitness_tracker.config import Settings
from fitness_tracker.containers import AppContainer, build_services
from fitness_tracker.domain.logs import ExerciseType, FoodItem
from fitness_tracker.domain.models import UserRecord
from fitness_tracker.domain.nutrition import NutrientTotals
from fitness_tracker.domain.shop import Product
from fitness_tracker.services.recipes import RecipeGenerator
from fitness_tracker.services.store import RecordStores


@dataclass
class FakeRecipeGenerator(RecipeGenerator):
    """Fake recipe generator returning a fixed payload or raising."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "name": "Chicken Quinoa Bowl",
            "description": "High protein bowl",
            "ingredients": ["150g chicken breast", "100g quinoa"],
            "instructions": "Cook quinoa. Grill chicken. Combine.",
            "calories": 520,
            "protein": 45,
            "carbs": 48,
            "fat": 14,
        }
    )
    error: Exception | None = None
    calls: list[tuple[str, NutrientTotals]] = field(default_factory=list)

    async def generate(
        self, goal: str, remaining: NutrientTotals, schema: dict[str, object]
    ) -> dict[str, object]:
        self.calls.append((goal, remaining))
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        storage_backend="memory",
        openai_api_key=None,
        timezone="UTC",
        contribution_points=10,
    )


@pytest.fixture
def stores() -> RecordStores:
    return build_memory_stores()


@pytest.fixture
def recipe_generator() -> FakeRecipeGenerator:
    return FakeRecipeGenerator()


@pytest.fixture
def container(
    settings: Settings,
    stores: RecordStores,
    recipe_generator: FakeRecipeGenerator,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        stores=stores,
        close_resources=close_resources,
        **build_services(settings, stores, recipe_generator),
    )


@pytest.fixture
def user(container: AppContainer) -> UserRecord:
    return container.user_service.create_user("Alex")


@pytest.fixture
def toast(container: AppContainer) -> FoodItem:
    return container.food_service.create_food(
        name="Whole Grain Toast",
        calories_per_serving=90,
        protein_g=3,
        carbs_g=16,
        fat_g=1,
        serving_size=1,
        serving_unit="slice",
    )


@pytest.fixture
def running(container: AppContainer) -> ExerciseType:
    return container.exercise_service.create_exercise("Running", 11.4, "cardio")


@pytest.fixture
def shaker(container: AppContainer) -> Product:
    return container.product_service.create_product(
        {
            "name": "Protein Shaker",
            "description": "BPA-free shaker bottle",
            "price_cents": 10000,
            "category": "equipment",
            "discount_percent": 10,
            "points_to_redeem": 100,
            "points_discount_percent": 20,
            "is_bestseller": True,
        }
    )
