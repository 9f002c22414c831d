"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fitness_tracker.adapters.memory_store import build_memory_stores
from fitness_tracker.adapters.openai_recipe_client import OpenAIRecipeClient
from fitness_tracker.adapters.supabase_store import build_supabase_stores
from fitness_tracker.config import Settings, resolve_storage_backend
from fitness_tracker.services.catalog import (
    ExerciseCatalogService,
    FoodCatalogService,
    ProductCatalogService,
)
from fitness_tracker.services.ledger import NutritionLedger
from fitness_tracker.services.pricing import CartService
from fitness_tracker.services.recipes import RecipeGenerator, RecipeService
from fitness_tracker.services.store import RecordStores
from fitness_tracker.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    stores: RecordStores
    user_service: UserService
    food_service: FoodCatalogService
    exercise_service: ExerciseCatalogService
    product_service: ProductCatalogService
    ledger: NutritionLedger
    cart_service: CartService
    recipe_service: RecipeService
    close_resources: Callable[[], Awaitable[None]]


def build_services(
    settings: Settings,
    stores: RecordStores,
    generator: RecipeGenerator | None = None,
) -> dict[str, object]:
    """Create the service graph over a set of record stores."""
    user_service = UserService(stores.users)
    food_service = FoodCatalogService(
        repository=stores.foods,
        user_service=user_service,
        contribution_points=settings.contribution_points,
    )
    exercise_service = ExerciseCatalogService(stores.exercises)
    product_service = ProductCatalogService(stores.products)
    ledger = NutritionLedger(
        food_logs=stores.food_logs,
        exercise_logs=stores.exercise_logs,
        water_logs=stores.water_logs,
        foods=food_service,
        exercises=exercise_service,
        users=user_service,
        timezone_name=settings.timezone,
    )
    cart_service = CartService(
        repository=stores.cart_lines,
        products=product_service,
        users=user_service,
    )
    recipe_service = RecipeService(
        repository=stores.recipes,
        ledger=ledger,
        users=user_service,
        generator=generator,
    )
    return {
        "user_service": user_service,
        "food_service": food_service,
        "exercise_service": exercise_service,
        "product_service": product_service,
        "ledger": ledger,
        "cart_service": cart_service,
        "recipe_service": recipe_service,
    }


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    backend = resolve_storage_backend(resolved_settings.storage_backend)
    if backend == "supabase":
        if not (
            resolved_settings.supabase_url and resolved_settings.supabase_service_key
        ):
            raise ValueError("Supabase storage requires SUPABASE_URL and key")
        stores = build_supabase_stores(
            create_client(
                resolved_settings.supabase_url,
                resolved_settings.supabase_service_key,
            )
        )
    else:
        stores = build_memory_stores()

    recipe_client = None
    if resolved_settings.openai_api_key:
        recipe_client = OpenAIRecipeClient.create(
            api_key=resolved_settings.openai_api_key,
            model=resolved_settings.openai_model,
            store=resolved_settings.openai_store,
            timeout_seconds=resolved_settings.recipe_generation_timeout_seconds,
        )

    async def close_resources() -> None:
        if recipe_client is not None:
            await recipe_client.close()

    return AppContainer(
        settings=resolved_settings,
        stores=stores,
        close_resources=close_resources,
        **build_services(resolved_settings, stores, recipe_client),
    )
