"""Services for the shared food, exercise and product catalogs."""

import logging
import math
from dataclasses import dataclass
from typing import TypeVar

from fitness_tracker.domain.logs import ExerciseType, FoodItem
from fitness_tracker.domain.shop import Product
from fitness_tracker.errors import InvalidInput, NotFound
from fitness_tracker.services.store import Record, RecordStore
from fitness_tracker.services.users import UserService

_logger = logging.getLogger(__name__)

T = TypeVar("T", FoodItem, ExerciseType)


@dataclass
class FoodCatalogService:
    """Food catalog; contributing a food earns loyalty points."""

    repository: RecordStore
    user_service: UserService
    contribution_points: int = 10

    def list_foods(self) -> list[FoodItem]:
        """Return every food in the catalog."""
        return [parse_food(row) for row in self.repository.find()]

    def search(self, query: str | None) -> list[FoodItem]:
        """Return foods whose name contains the query, case-insensitively."""
        return _search(self.list_foods(), query)

    def get_food(self, food_id: int) -> FoodItem:
        """Return a food or raise NotFound."""
        record = self.repository.get(food_id)
        if record is None:
            raise NotFound(f"Food {food_id} not found")
        return parse_food(record)

    def create_food(  # noqa: PLR0913
        self,
        name: str,
        calories_per_serving: float,
        protein_g: float,
        carbs_g: float,
        fat_g: float,
        serving_size: float,
        serving_unit: str,
        contributor_user_id: int | None = None,
    ) -> FoodItem:
        """Create a food; a contributor is awarded points once per new food."""
        if not name.strip():
            raise InvalidInput("Food name must not be empty")
        for label, value in (
            ("calories", calories_per_serving),
            ("protein", protein_g),
            ("carbs", carbs_g),
            ("fat", fat_g),
        ):
            if not math.isfinite(value) or value < 0:
                raise InvalidInput(f"Food {label} must not be negative")
        if not math.isfinite(serving_size) or serving_size <= 0:
            raise InvalidInput("Serving size must be positive")
        if contributor_user_id is not None:
            self.user_service.get_user(contributor_user_id)

        record = self.repository.create(
            {
                "name": name.strip(),
                "calories": calories_per_serving,
                "protein_g": protein_g,
                "carbs_g": carbs_g,
                "fat_g": fat_g,
                "serving_size": serving_size,
                "serving_unit": serving_unit,
                "added_by_user_id": contributor_user_id,
            }
        )
        food = parse_food(record)
        if contributor_user_id is not None:
            self.user_service.award_points(
                contributor_user_id, self.contribution_points
            )
            _logger.info(
                "Food %s contributed by user %s", food.id, contributor_user_id
            )
        return food


@dataclass
class ExerciseCatalogService:
    """Exercise type catalog."""

    repository: RecordStore

    def list_exercises(self) -> list[ExerciseType]:
        return [parse_exercise(row) for row in self.repository.find()]

    def search(self, query: str | None) -> list[ExerciseType]:
        return _search(self.list_exercises(), query)

    def get_exercise(self, exercise_id: int) -> ExerciseType:
        """Return an exercise type or raise NotFound."""
        record = self.repository.get(exercise_id)
        if record is None:
            raise NotFound(f"Exercise {exercise_id} not found")
        return parse_exercise(record)

    def create_exercise(
        self, name: str, calories_burned_per_minute: float, category: str
    ) -> ExerciseType:
        """Create an exercise type."""
        if not name.strip():
            raise InvalidInput("Exercise name must not be empty")
        if (
            not math.isfinite(calories_burned_per_minute)
            or calories_burned_per_minute <= 0
        ):
            raise InvalidInput("Calories burned per minute must be positive")
        record = self.repository.create(
            {
                "name": name.strip(),
                "calories_burned_per_minute": calories_burned_per_minute,
                "type": category,
            }
        )
        return parse_exercise(record)


@dataclass
class ProductCatalogService:
    """Read access to storefront products."""

    repository: RecordStore

    def list_products(self, category: str | None = None) -> list[Product]:
        filters = {"category": category} if category else None
        return [parse_product(row) for row in self.repository.find(filters)]

    def get_product(self, product_id: int) -> Product:
        """Return a product or raise NotFound."""
        record = self.repository.get(product_id)
        if record is None:
            raise NotFound(f"Product {product_id} not found")
        return parse_product(record)

    def create_product(self, payload: Record) -> Product:
        """Create a product from column values."""
        price = payload.get("price_cents")
        if not isinstance(price, int) or price < 0:
            raise InvalidInput("Price must be a non-negative number of cents")
        for column in ("discount_percent", "points_discount_percent"):
            percent = payload.get(column, 0)
            if not isinstance(percent, int) or not 0 <= percent <= 100:
                raise InvalidInput(f"{column} must be between 0 and 100")
        points = payload.get("points_to_redeem", 0)
        if not isinstance(points, int) or points < 0:
            raise InvalidInput("Points to redeem must not be negative")
        return parse_product(self.repository.create(payload))


def parse_food(row: Record) -> FoodItem:
    """Parse a food row into a domain model."""
    contributor = row.get("added_by_user_id")
    return FoodItem(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        calories_per_serving=float(row.get("calories", 0.0)),
        protein_g=float(row.get("protein_g", 0.0)),
        carbs_g=float(row.get("carbs_g", 0.0)),
        fat_g=float(row.get("fat_g", 0.0)),
        serving_size=float(row.get("serving_size", 1.0)),
        serving_unit=str(row.get("serving_unit", "")),
        contributor_user_id=int(contributor) if contributor is not None else None,
    )


def parse_exercise(row: Record) -> ExerciseType:
    """Parse an exercise row into a domain model."""
    return ExerciseType(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        calories_burned_per_minute=float(row.get("calories_burned_per_minute", 0.0)),
        category=str(row.get("type", "")),
    )


def parse_product(row: Record) -> Product:
    """Parse a product row into a domain model."""
    return Product(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        description=str(row.get("description", "")),
        price_cents=int(row.get("price_cents", 0)),
        category=str(row.get("category", "")),
        discount_percent=int(row.get("discount_percent") or 0),
        points_to_redeem=int(row.get("points_to_redeem") or 0),
        points_discount_percent=int(row.get("points_discount_percent") or 0),
        is_bestseller=bool(row.get("is_bestseller", False)),
        image_ref=row.get("image_url"),
    )


def _search(items: list[T], query: str | None) -> list[T]:
    if not query:
        return items
    needle = query.lower()
    return [item for item in items if needle in item.name.lower()]
