"""Pydantic models for the JSON API. Field names are camelCase on the wire."""

from datetime import date as date_type
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fitness_tracker.domain.logs import (
    ExerciseLogView,
    ExerciseType,
    FoodItem,
    FoodLogView,
    MealType,
    WaterLogEntry,
)
from fitness_tracker.domain.models import UserRecord
from fitness_tracker.domain.nutrition import (
    NutrientGoal,
    NutrientProgress,
    NutrientTotals,
    round_half_up,
)
from fitness_tracker.domain.profile import (
    ActivityLevel,
    EnergyBreakdown,
    Sex,
    WeightGoal,
)
from fitness_tracker.domain.recipes import Recipe
from fitness_tracker.domain.shop import CartTotal, LinePrice, Product
from fitness_tracker.services.ledger import DailySummary
from fitness_tracker.services.pricing import format_cents


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False
    )


class Nutrients(CamelModel):
    calories: float = Field(default=0.0, ge=0)
    protein: float = Field(default=0.0, ge=0)
    carbs: float = Field(default=0.0, ge=0)
    fat: float = Field(default=0.0, ge=0)

    @classmethod
    def from_totals(cls, totals: NutrientTotals) -> "Nutrients":
        return cls(
            calories=totals.calories,
            protein=totals.protein_g,
            carbs=totals.carbs_g,
            fat=totals.fat_g,
        )

    def to_totals(self) -> NutrientTotals:
        return NutrientTotals(
            calories=self.calories,
            protein_g=self.protein,
            carbs_g=self.carbs,
            fat_g=self.fat,
        )

    def to_goal(self) -> NutrientGoal:
        return NutrientGoal(
            calories=self.calories,
            protein_g=self.protein,
            carbs_g=self.carbs,
            fat_g=self.fat,
        )


# Users


class CreateUserRequest(CamelModel):
    name: str
    fitness_goal: str = "maintenance"


class ProfileRequest(CamelModel):
    """Body metrics with their units, as entered in the calculator."""

    weight: float
    weight_unit: str = "kg"
    height: float
    height_unit: str = "cm"
    age: int
    sex: str
    activity_level: str
    goal: str


class ProfileResponse(CamelModel):
    weight_kg: float
    height_cm: float
    age: int
    sex: str
    activity_level: str
    goal: str


class UserResponse(CamelModel):
    id: int
    name: str
    points: int
    fitness_goal: str
    daily_calorie_goal: float
    daily_protein_goal: float
    daily_carbs_goal: float
    daily_fat_goal: float
    profile: ProfileResponse | None = None

    @classmethod
    def from_domain(cls, user: UserRecord) -> "UserResponse":
        profile = None
        if user.profile is not None:
            profile = ProfileResponse(
                weight_kg=user.profile.weight_kg,
                height_cm=user.profile.height_cm,
                age=user.profile.age_years,
                sex=Sex(user.profile.sex).value,
                activity_level=ActivityLevel(user.profile.activity_level).value,
                goal=WeightGoal(user.profile.goal).value,
            )
        return cls(
            id=user.id,
            name=user.name,
            points=user.points,
            fitness_goal=user.fitness_goal.value,
            daily_calorie_goal=user.goals.calories,
            daily_protein_goal=user.goals.protein_g,
            daily_carbs_goal=user.goals.carbs_g,
            daily_fat_goal=user.goals.fat_g,
            profile=profile,
        )


class TargetsResponse(CamelModel):
    bmr: float
    tdee: float
    calories: float
    protein: float
    carbs: float
    fat: float

    @classmethod
    def from_domain(cls, breakdown: EnergyBreakdown) -> "TargetsResponse":
        return cls(
            bmr=round_half_up(breakdown.bmr),
            tdee=round_half_up(breakdown.tdee),
            calories=breakdown.targets.calories,
            protein=breakdown.targets.protein_g,
            carbs=breakdown.targets.carbs_g,
            fat=breakdown.targets.fat_g,
        )


# Catalogs


class CreateFoodRequest(CamelModel):
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    serving_size: float
    serving_unit: str
    added_by_user_id: int | None = None


class FoodResponse(CamelModel):
    id: int
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    serving_size: float
    serving_unit: str
    added_by_user_id: int | None = None

    @classmethod
    def from_domain(cls, food: FoodItem) -> "FoodResponse":
        return cls(
            id=food.id,
            name=food.name,
            calories=food.calories_per_serving,
            protein=food.protein_g,
            carbs=food.carbs_g,
            fat=food.fat_g,
            serving_size=food.serving_size,
            serving_unit=food.serving_unit,
            added_by_user_id=food.contributor_user_id,
        )


class CreateExerciseRequest(CamelModel):
    name: str
    calories_burned_per_minute: float
    type: str


class ExerciseResponse(CamelModel):
    id: int
    name: str
    calories_burned_per_minute: float
    type: str

    @classmethod
    def from_domain(cls, exercise: ExerciseType) -> "ExerciseResponse":
        return cls(
            id=exercise.id,
            name=exercise.name,
            calories_burned_per_minute=exercise.calories_burned_per_minute,
            type=exercise.category,
        )


# Logs


class FoodLogRequest(CamelModel):
    user_id: int
    food_id: int
    quantity: float
    meal_type: str
    logged_at: datetime | None = None


class FoodLogResponse(CamelModel):
    id: int
    user_id: int
    food_id: int
    quantity: float
    meal_type: MealType
    logged_at: datetime
    food: FoodResponse | None = None
    nutrients: Nutrients | None = None

    @classmethod
    def from_view(cls, view: FoodLogView) -> "FoodLogResponse":
        entry = view.entry
        return cls(
            id=entry.id,
            user_id=entry.user_id,
            food_id=entry.food_id,
            quantity=entry.quantity,
            meal_type=entry.meal_type,
            logged_at=entry.logged_at,
            food=FoodResponse.from_domain(view.food),
            nutrients=Nutrients.from_totals(view.nutrients),
        )


class ExerciseLogRequest(CamelModel):
    user_id: int
    exercise_id: int
    duration: int
    logged_at: datetime | None = None


class ExerciseLogResponse(CamelModel):
    id: int
    user_id: int
    exercise_id: int
    duration: int
    logged_at: datetime
    exercise: ExerciseResponse | None = None
    calories_burned: int | None = None

    @classmethod
    def from_view(cls, view: ExerciseLogView) -> "ExerciseLogResponse":
        entry = view.entry
        return cls(
            id=entry.id,
            user_id=entry.user_id,
            exercise_id=entry.exercise_type_id,
            duration=entry.duration_minutes,
            logged_at=entry.logged_at,
            exercise=ExerciseResponse.from_domain(view.exercise),
            calories_burned=round_half_up(view.calories_burned),
        )


class WaterLogRequest(CamelModel):
    user_id: int
    amount: float
    logged_at: datetime | None = None


class WaterLogResponse(CamelModel):
    id: int
    user_id: int
    amount: float
    logged_at: datetime

    @classmethod
    def from_domain(cls, entry: WaterLogEntry) -> "WaterLogResponse":
        return cls(
            id=entry.id,
            user_id=entry.user_id,
            amount=entry.amount_ml,
            logged_at=entry.logged_at,
        )


class ProgressResponse(CamelModel):
    consumed: Nutrients
    goals: Nutrients
    remaining: Nutrients

    @classmethod
    def from_domain(cls, progress: NutrientProgress) -> "ProgressResponse":
        return cls(
            consumed=Nutrients.from_totals(progress.consumed),
            goals=Nutrients.from_totals(progress.goal),
            remaining=Nutrients.from_totals(progress.remaining),
        )


class DailySummaryResponse(CamelModel):
    date: date_type
    progress: ProgressResponse
    meals: dict[str, Nutrients]
    water_ml: float
    calories_burned: int

    @classmethod
    def from_domain(cls, summary: DailySummary) -> "DailySummaryResponse":
        return cls(
            date=summary.day,
            progress=ProgressResponse.from_domain(summary.progress),
            meals={
                meal.value: Nutrients.from_totals(totals)
                for meal, totals in summary.meals.items()
            },
            water_ml=summary.water_ml,
            calories_burned=round_half_up(summary.calories_burned),
        )


# Recipes


class RecipeRequest(CamelModel):
    name: str
    description: str = ""
    ingredients: list[str] = Field(default_factory=list)
    instructions: str = ""
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    fitness_goal: str
    image_url: str | None = None


class GenerateRecipeRequest(CamelModel):
    fitness_goal: str
    remaining_nutrition: Nutrients


class RecipeResponse(CamelModel):
    id: int
    name: str
    description: str
    ingredients: list[str]
    instructions: str
    calories: float
    protein: float
    carbs: float
    fat: float
    fitness_goal: str
    image_url: str | None = None

    @classmethod
    def from_domain(cls, recipe: Recipe) -> "RecipeResponse":
        return cls(
            id=recipe.id,
            name=recipe.name,
            description=recipe.description,
            ingredients=list(recipe.ingredients),
            instructions=recipe.instructions,
            calories=recipe.totals.calories,
            protein=recipe.totals.protein_g,
            carbs=recipe.totals.carbs_g,
            fat=recipe.totals.fat_g,
            fitness_goal=recipe.goal_tag.value,
            image_url=recipe.image_ref,
        )


# Shop


class ProductResponse(CamelModel):
    id: int
    name: str
    description: str
    price_cents: int
    price: str
    category: str
    discount_percent: int
    points_to_redeem: int
    points_discount_percent: int
    is_bestseller: bool
    image_url: str | None = None

    @classmethod
    def from_domain(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price_cents=product.price_cents,
            price=format_cents(product.price_cents),
            category=product.category,
            discount_percent=product.discount_percent,
            points_to_redeem=product.points_to_redeem,
            points_discount_percent=product.points_discount_percent,
            is_bestseller=product.is_bestseller,
            image_url=product.image_ref,
        )


class CartItemRequest(CamelModel):
    user_id: int
    product_id: int
    quantity: int = 1
    use_points: bool = False


class CartItemUpdateRequest(CamelModel):
    quantity: int
    use_points: bool = False


class CartItemResponse(CamelModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
    use_points: bool


class PricedLineResponse(CartItemResponse):
    product: ProductResponse
    unit_price_cents: int
    line_total_cents: int
    points_applied: bool
    points_used: int

    @classmethod
    def from_domain(cls, priced: LinePrice) -> "PricedLineResponse":
        return cls(
            id=priced.line.id,
            user_id=priced.line.user_id,
            product_id=priced.line.product_id,
            quantity=priced.line.quantity,
            use_points=priced.line.use_points,
            product=ProductResponse.from_domain(priced.product),
            unit_price_cents=priced.unit_price_cents,
            line_total_cents=priced.line_total_cents,
            points_applied=priced.points_applied,
            points_used=priced.points_used,
        )


class CartResponse(CamelModel):
    items: list[PricedLineResponse]
    subtotal_cents: int
    subtotal: str
    points_used: int

    @classmethod
    def from_domain(cls, total: CartTotal) -> "CartResponse":
        return cls(
            items=[PricedLineResponse.from_domain(line) for line in total.lines],
            subtotal_cents=total.subtotal_cents,
            subtotal=format_cents(total.subtotal_cents),
            points_used=total.points_used,
        )
