"""Catalog, log and daily progress endpoints."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request, Response, status

from fitness_tracker.api.schemas import (
    CreateExerciseRequest,
    CreateFoodRequest,
    DailySummaryResponse,
    ExerciseLogRequest,
    ExerciseLogResponse,
    ExerciseResponse,
    FoodLogRequest,
    FoodLogResponse,
    FoodResponse,
    Nutrients,
    ProgressResponse,
    WaterLogRequest,
    WaterLogResponse,
)
from fitness_tracker.errors import NotFound

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer

router = APIRouter(prefix="/api", tags=["tracker"])


def _resolve_day(container: AppContainer, day: date | None) -> date:
    return day or container.ledger.today()


def _deleted(found: bool, label: str, record_id: int) -> Response:
    if not found:
        raise NotFound(f"{label} {record_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/foods")
async def list_foods(request: Request) -> list[FoodResponse]:
    container: AppContainer = request.app.state.container
    return [FoodResponse.from_domain(f) for f in container.food_service.list_foods()]


@router.get("/foods/search")
async def search_foods(request: Request, q: str = "") -> list[FoodResponse]:
    """Search foods by name."""
    container: AppContainer = request.app.state.container
    return [FoodResponse.from_domain(f) for f in container.food_service.search(q)]


@router.post("/foods", status_code=status.HTTP_201_CREATED)
async def create_food(payload: CreateFoodRequest, request: Request) -> FoodResponse:
    """Add a food; a contributing user earns points."""
    container: AppContainer = request.app.state.container
    food = container.food_service.create_food(
        name=payload.name,
        calories_per_serving=payload.calories,
        protein_g=payload.protein,
        carbs_g=payload.carbs,
        fat_g=payload.fat,
        serving_size=payload.serving_size,
        serving_unit=payload.serving_unit,
        contributor_user_id=payload.added_by_user_id,
    )
    return FoodResponse.from_domain(food)


@router.get("/exercises")
async def list_exercises(request: Request) -> list[ExerciseResponse]:
    container: AppContainer = request.app.state.container
    return [
        ExerciseResponse.from_domain(exercise)
        for exercise in container.exercise_service.list_exercises()
    ]


@router.get("/exercises/search")
async def search_exercises(request: Request, q: str = "") -> list[ExerciseResponse]:
    container: AppContainer = request.app.state.container
    return [
        ExerciseResponse.from_domain(exercise)
        for exercise in container.exercise_service.search(q)
    ]


@router.post("/exercises", status_code=status.HTTP_201_CREATED)
async def create_exercise(
    payload: CreateExerciseRequest, request: Request
) -> ExerciseResponse:
    container: AppContainer = request.app.state.container
    exercise = container.exercise_service.create_exercise(
        payload.name, payload.calories_burned_per_minute, payload.type
    )
    return ExerciseResponse.from_domain(exercise)


@router.post("/food-logs", status_code=status.HTTP_201_CREATED)
async def log_food(payload: FoodLogRequest, request: Request) -> FoodLogResponse:
    """Log servings of a food for a meal."""
    container: AppContainer = request.app.state.container
    entry = container.ledger.log_food(
        payload.user_id,
        payload.food_id,
        payload.quantity,
        payload.meal_type,
        payload.logged_at,
    )
    return FoodLogResponse(
        id=entry.id,
        user_id=entry.user_id,
        food_id=entry.food_id,
        quantity=entry.quantity,
        meal_type=entry.meal_type,
        logged_at=entry.logged_at,
    )


@router.get("/food-logs/{user_id}")
async def list_food_logs(
    user_id: int,
    request: Request,
    day: date | None = Query(default=None, alias="date"),
) -> list[FoodLogResponse]:
    """Return a day's food logs with their foods."""
    container: AppContainer = request.app.state.container
    views = container.ledger.list_food_logs(user_id, _resolve_day(container, day))
    return [FoodLogResponse.from_view(view) for view in views]


@router.delete("/food-logs/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food_log(log_id: int, request: Request) -> Response:
    container: AppContainer = request.app.state.container
    return _deleted(container.ledger.delete_food_log(log_id), "Food log", log_id)


@router.post("/exercise-logs", status_code=status.HTTP_201_CREATED)
async def log_exercise(
    payload: ExerciseLogRequest, request: Request
) -> ExerciseLogResponse:
    container: AppContainer = request.app.state.container
    entry = container.ledger.log_exercise(
        payload.user_id, payload.exercise_id, payload.duration, payload.logged_at
    )
    return ExerciseLogResponse(
        id=entry.id,
        user_id=entry.user_id,
        exercise_id=entry.exercise_type_id,
        duration=entry.duration_minutes,
        logged_at=entry.logged_at,
    )


@router.get("/exercise-logs/{user_id}")
async def list_exercise_logs(
    user_id: int,
    request: Request,
    day: date | None = Query(default=None, alias="date"),
) -> list[ExerciseLogResponse]:
    """Return a day's exercise logs with calories burned."""
    container: AppContainer = request.app.state.container
    views = container.ledger.list_exercise_logs(user_id, _resolve_day(container, day))
    return [ExerciseLogResponse.from_view(view) for view in views]


@router.delete("/exercise-logs/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exercise_log(log_id: int, request: Request) -> Response:
    container: AppContainer = request.app.state.container
    return _deleted(
        container.ledger.delete_exercise_log(log_id), "Exercise log", log_id
    )


@router.post("/water-intake", status_code=status.HTTP_201_CREATED)
async def log_water(payload: WaterLogRequest, request: Request) -> WaterLogResponse:
    container: AppContainer = request.app.state.container
    entry = container.ledger.log_water(
        payload.user_id, payload.amount, payload.logged_at
    )
    return WaterLogResponse.from_domain(entry)


@router.get("/water-intake/{user_id}")
async def list_water_logs(
    user_id: int,
    request: Request,
    day: date | None = Query(default=None, alias="date"),
) -> list[WaterLogResponse]:
    container: AppContainer = request.app.state.container
    entries = container.ledger.list_water_logs(user_id, _resolve_day(container, day))
    return [WaterLogResponse.from_domain(entry) for entry in entries]


@router.get("/water-intake/{user_id}/total")
async def total_water(
    user_id: int,
    request: Request,
    day: date | None = Query(default=None, alias="date"),
) -> dict[str, float]:
    """Return the day's total water intake in milliliters."""
    container: AppContainer = request.app.state.container
    total = container.ledger.total_water_ml(user_id, _resolve_day(container, day))
    return {"total": total}


@router.delete("/water-intake/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_water_log(log_id: int, request: Request) -> Response:
    container: AppContainer = request.app.state.container
    return _deleted(container.ledger.delete_water_log(log_id), "Water log", log_id)


@router.get("/progress/{user_id}")
async def daily_progress(
    user_id: int,
    request: Request,
    day: date | None = Query(default=None, alias="date"),
) -> ProgressResponse:
    """Return consumed, goal and remaining nutrients for a day."""
    container: AppContainer = request.app.state.container
    user = container.user_service.get_user(user_id)
    progress = container.ledger.daily_progress(
        user_id, _resolve_day(container, day), user.goals
    )
    return ProgressResponse.from_domain(progress)


@router.get("/progress/{user_id}/meals/{meal_type}")
async def meal_totals(
    user_id: int,
    meal_type: str,
    request: Request,
    day: date | None = Query(default=None, alias="date"),
) -> Nutrients:
    container: AppContainer = request.app.state.container
    totals = container.ledger.meal_totals(
        user_id, _resolve_day(container, day), meal_type
    )
    return Nutrients.from_totals(totals)


@router.get("/progress/{user_id}/summary")
async def daily_summary(
    user_id: int,
    request: Request,
    day: date | None = Query(default=None, alias="date"),
) -> DailySummaryResponse:
    """Return the dashboard overview for a day."""
    container: AppContainer = request.app.state.container
    summary = container.ledger.daily_summary(user_id, _resolve_day(container, day))
    return DailySummaryResponse.from_domain(summary)
