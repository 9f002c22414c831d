"""User, goal and calculator endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from fitness_tracker.api.schemas import (
    CreateUserRequest,
    Nutrients,
    ProfileRequest,
    TargetsResponse,
    UserResponse,
)
from fitness_tracker.domain.profile import Profile
from fitness_tracker.domain.units import normalize_height, normalize_weight
from fitness_tracker.services.energy import compute_energy_breakdown

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def create_user(payload: CreateUserRequest, request: Request) -> UserResponse:
    """Create a user with default goals."""
    container: AppContainer = request.app.state.container
    user = container.user_service.create_user(payload.name, payload.fitness_goal)
    return UserResponse.from_domain(user)


@router.get("/user/{user_id}")
async def get_user(user_id: int, request: Request) -> UserResponse:
    container: AppContainer = request.app.state.container
    return UserResponse.from_domain(container.user_service.get_user(user_id))


@router.put("/user/{user_id}/goals")
async def update_goals(
    user_id: int, payload: Nutrients, request: Request
) -> UserResponse:
    """Replace the user's daily nutrient goals."""
    container: AppContainer = request.app.state.container
    user = container.user_service.update_goals(user_id, payload.to_goal())
    return UserResponse.from_domain(user)


@router.put("/user/{user_id}/profile")
async def apply_profile(
    user_id: int, payload: ProfileRequest, request: Request
) -> UserResponse:
    """Store body metrics and derive goals from them."""
    container: AppContainer = request.app.state.container
    user = container.user_service.apply_profile(user_id, to_profile(payload))
    return UserResponse.from_domain(user)


@router.post("/targets")
async def calculate_targets(payload: ProfileRequest) -> TargetsResponse:
    """Calculate daily targets without storing anything."""
    return TargetsResponse.from_domain(compute_energy_breakdown(to_profile(payload)))


def to_profile(payload: ProfileRequest) -> Profile:
    """Normalize calculator input to metric units."""
    return Profile(
        weight_kg=normalize_weight(payload.weight, payload.weight_unit),
        height_cm=normalize_height(payload.height, payload.height_unit),
        age_years=payload.age,
        sex=payload.sex,
        activity_level=payload.activity_level,
        goal=payload.goal,
    )
