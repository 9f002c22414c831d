"""Nutrition ledger: food, exercise and water logs with daily aggregates."""

import math
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from fitness_tracker.domain.logs import (
    ExerciseLogEntry,
    ExerciseLogView,
    FoodLogEntry,
    FoodLogView,
    MealType,
    WaterLogEntry,
)
from fitness_tracker.domain.nutrition import (
    NutrientGoal,
    NutrientProgress,
    NutrientTotals,
)
from fitness_tracker.errors import InvalidInput
from fitness_tracker.services.catalog import (
    ExerciseCatalogService,
    FoodCatalogService,
)
from fitness_tracker.services.store import Record, RecordStore, parse_datetime
from fitness_tracker.services.users import UserService


_LAST_MILLISECOND = timedelta(days=1) - timedelta(milliseconds=1)


@dataclass(frozen=True)
class DailySummary:
    """Everything logged for a user on one day."""

    day: date
    progress: NutrientProgress
    meals: dict[MealType, NutrientTotals]
    water_ml: float
    calories_burned: float


@dataclass
class NutritionLedger:
    """Service that records log entries and aggregates them per day."""

    food_logs: RecordStore
    exercise_logs: RecordStore
    water_logs: RecordStore
    foods: FoodCatalogService
    exercises: ExerciseCatalogService
    users: UserService
    timezone_name: str = "UTC"
    _tz: ZoneInfo = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._tz = ZoneInfo(self.timezone_name)

    def log_food(
        self,
        user_id: int,
        food_id: int,
        quantity: float,
        meal_type: MealType | str,
        logged_at: datetime | None = None,
    ) -> FoodLogEntry:
        """Record servings of a food for a meal."""
        if not _is_positive_number(quantity):
            raise InvalidInput("Quantity must be a positive number")
        meal = _parse_meal_type(meal_type)
        self.users.get_user(user_id)
        self.foods.get_food(food_id)
        record = self.food_logs.create(
            {
                "user_id": user_id,
                "food_id": food_id,
                "quantity": float(quantity),
                "meal_type": meal.value,
                "logged_at": self._stamp(logged_at),
            }
        )
        return _parse_food_log(record)

    def delete_food_log(self, log_id: int) -> bool:
        return self.food_logs.delete(log_id)

    def list_food_logs(self, user_id: int, day: date) -> list[FoodLogView]:
        """Return the day's food entries joined with their foods."""
        views = []
        for entry in self._food_entries(user_id, day):
            food = self.foods.get_food(entry.food_id)
            views.append(
                FoodLogView(
                    entry=entry,
                    food=food,
                    nutrients=food.per_serving().scale(entry.quantity),
                )
            )
        return views

    def log_exercise(
        self,
        user_id: int,
        exercise_id: int,
        duration_minutes: int,
        logged_at: datetime | None = None,
    ) -> ExerciseLogEntry:
        """Record an exercise session."""
        if (
            not isinstance(duration_minutes, int)
            or isinstance(duration_minutes, bool)
            or duration_minutes <= 0
        ):
            raise InvalidInput("Duration must be a positive number of minutes")
        self.users.get_user(user_id)
        self.exercises.get_exercise(exercise_id)
        record = self.exercise_logs.create(
            {
                "user_id": user_id,
                "exercise_id": exercise_id,
                "duration": duration_minutes,
                "logged_at": self._stamp(logged_at),
            }
        )
        return _parse_exercise_log(record)

    def delete_exercise_log(self, log_id: int) -> bool:
        return self.exercise_logs.delete(log_id)

    def list_exercise_logs(self, user_id: int, day: date) -> list[ExerciseLogView]:
        """Return the day's exercise entries joined with their types."""
        return [
            ExerciseLogView(
                entry=entry, exercise=self.exercises.get_exercise(entry.exercise_type_id)
            )
            for entry in self._exercise_entries(user_id, day)
        ]

    def log_water(
        self, user_id: int, amount_ml: float, logged_at: datetime | None = None
    ) -> WaterLogEntry:
        """Record water intake in milliliters."""
        if not _is_positive_number(amount_ml):
            raise InvalidInput("Water amount must be a positive number")
        self.users.get_user(user_id)
        record = self.water_logs.create(
            {
                "user_id": user_id,
                "amount": float(amount_ml),
                "logged_at": self._stamp(logged_at),
            }
        )
        return _parse_water_log(record)

    def delete_water_log(self, log_id: int) -> bool:
        return self.water_logs.delete(log_id)

    def list_water_logs(self, user_id: int, day: date) -> list[WaterLogEntry]:
        start, end = self.day_bounds(day)
        rows = self.water_logs.find_between(
            "logged_at", start, end, {"user_id": user_id}
        )
        return [_parse_water_log(row) for row in rows]

    def daily_progress(
        self, user_id: int, day: date, goal: NutrientGoal
    ) -> NutrientProgress:
        """Return the day's consumed totals against a goal."""
        consumed = _sum_nutrients(self.list_food_logs(user_id, day))
        return NutrientProgress.measure(consumed, goal)

    def meal_totals(
        self, user_id: int, day: date, meal_type: MealType | str
    ) -> NutrientTotals:
        """Return consumed totals for one meal of the day."""
        meal = _parse_meal_type(meal_type)
        views = [
            view
            for view in self.list_food_logs(user_id, day)
            if view.entry.meal_type is meal
        ]
        return _sum_nutrients(views)

    def total_water_ml(self, user_id: int, day: date) -> float:
        return sum(
            (entry.amount_ml for entry in self.list_water_logs(user_id, day)), 0.0
        )

    def total_calories_burned(self, user_id: int, day: date) -> float:
        return sum(
            (view.calories_burned for view in self.list_exercise_logs(user_id, day)),
            0.0,
        )

    def daily_summary(self, user_id: int, day: date) -> DailySummary:
        """Return progress against the user's goals plus per-meal totals."""
        user = self.users.get_user(user_id)
        views = self.list_food_logs(user_id, day)
        meals = {
            meal: _sum_nutrients(
                [view for view in views if view.entry.meal_type is meal]
            )
            for meal in MealType
        }
        return DailySummary(
            day=day,
            progress=NutrientProgress.measure(_sum_nutrients(views), user.goals),
            meals=meals,
            water_ml=self.total_water_ml(user_id, day),
            calories_burned=self.total_calories_burned(user_id, day),
        )

    def today(self) -> date:
        """Return the current date in the ledger timezone."""
        return datetime.now(tz=self._tz).date()

    def day_bounds(self, day: date) -> tuple[datetime, datetime]:
        """Return the first and last millisecond of a local calendar day."""
        start = datetime.combine(day, time.min, tzinfo=self._tz)
        return start, start + _LAST_MILLISECOND

    def _food_entries(self, user_id: int, day: date) -> list[FoodLogEntry]:
        start, end = self.day_bounds(day)
        rows = self.food_logs.find_between(
            "logged_at", start, end, {"user_id": user_id}
        )
        return [_parse_food_log(row) for row in rows]

    def _exercise_entries(self, user_id: int, day: date) -> list[ExerciseLogEntry]:
        start, end = self.day_bounds(day)
        rows = self.exercise_logs.find_between(
            "logged_at", start, end, {"user_id": user_id}
        )
        return [_parse_exercise_log(row) for row in rows]

    def _stamp(self, logged_at: datetime | None) -> datetime:
        if logged_at is None:
            return datetime.now(tz=UTC)
        if logged_at.tzinfo is None:
            return logged_at.replace(tzinfo=self._tz)
        return logged_at


def _sum_nutrients(views: list[FoodLogView]) -> NutrientTotals:
    total = NutrientTotals()
    for view in views:
        total = total + view.nutrients
    return total


def _is_positive_number(value: object) -> bool:
    return (
        isinstance(value, int | float)
        and not isinstance(value, bool)
        and math.isfinite(value)
        and value > 0
    )


def _parse_meal_type(value: MealType | str) -> MealType:
    try:
        return MealType(value)
    except ValueError as exc:
        raise InvalidInput(f"Unknown meal type: {value}") from exc


def _parse_food_log(row: Record) -> FoodLogEntry:
    return FoodLogEntry(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        food_id=int(row["food_id"]),
        quantity=float(row["quantity"]),
        meal_type=MealType(row["meal_type"]),
        logged_at=parse_datetime(row["logged_at"]),
    )


def _parse_exercise_log(row: Record) -> ExerciseLogEntry:
    return ExerciseLogEntry(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        exercise_type_id=int(row["exercise_id"]),
        duration_minutes=int(row["duration"]),
        logged_at=parse_datetime(row["logged_at"]),
    )


def _parse_water_log(row: Record) -> WaterLogEntry:
    return WaterLogEntry(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        amount_ml=float(row["amount"]),
        logged_at=parse_datetime(row["logged_at"]),
    )


