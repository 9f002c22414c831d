"""User-related business logic."""

import logging
from dataclasses import dataclass

from fitness_tracker.domain.models import UserRecord
from fitness_tracker.domain.nutrition import DEFAULT_GOAL, NutrientGoal
from fitness_tracker.domain.profile import (
    ActivityLevel,
    Profile,
    Sex,
    WeightGoal,
)
from fitness_tracker.domain.recipes import GoalTag
from fitness_tracker.errors import InvalidInput, NotFound
from fitness_tracker.services.energy import compute_daily_targets
from fitness_tracker.services.store import Record, RecordStore

_logger = logging.getLogger(__name__)

_GOAL_TAGS = {
    WeightGoal.WEIGHT_LOSS: GoalTag.FAT_LOSS,
    WeightGoal.MAINTENANCE: GoalTag.MAINTENANCE,
    WeightGoal.MUSCLE_GAIN: GoalTag.MUSCLE_GAIN,
}


@dataclass
class UserService:
    """Application service for users, goals and loyalty points."""

    repository: RecordStore

    def create_user(
        self, name: str, fitness_goal: GoalTag | str = GoalTag.MAINTENANCE
    ) -> UserRecord:
        """Create a user with zero points and default daily goals."""
        if not name.strip():
            raise InvalidInput("Name must not be empty")
        record = self.repository.create(
            {
                "name": name.strip(),
                "points": 0,
                "fitness_goal": _parse_goal_tag(fitness_goal).value,
                **_goal_columns(DEFAULT_GOAL),
                "profile": None,
            }
        )
        return _parse_user(record)

    def get_user(self, user_id: int) -> UserRecord:
        """Return a user or raise NotFound."""
        record = self.repository.get(user_id)
        if record is None:
            raise NotFound(f"User {user_id} not found")
        return _parse_user(record)

    def update_goals(self, user_id: int, goals: NutrientGoal) -> UserRecord:
        """Replace the user's daily nutrient goals."""
        return self._patch(user_id, _goal_columns(goals))

    def apply_profile(self, user_id: int, profile: Profile) -> UserRecord:
        """Store a body profile and derive daily goals from it."""
        targets = compute_daily_targets(profile)
        return self._patch(
            user_id,
            {
                "profile": _profile_columns(profile),
                "fitness_goal": goal_tag_for(profile.goal).value,
                **_goal_columns(targets),
            },
        )

    def award_points(self, user_id: int, amount: int) -> UserRecord:
        """Add loyalty points to a user's balance."""
        if amount <= 0:
            raise InvalidInput("Points to award must be positive")
        record = self.repository.increment(user_id, "points", amount)
        if record is None:
            raise NotFound(f"User {user_id} not found")
        _logger.info("Awarded %s points to user %s", amount, user_id)
        return _parse_user(record)

    def redeem_points(self, user_id: int, amount: int) -> UserRecord:
        """Spend loyalty points; the balance never goes negative."""
        if amount < 0:
            raise InvalidInput("Points to redeem must not be negative")
        if amount == 0:
            return self.get_user(user_id)
        record = self.repository.decrement_if_at_least(user_id, "points", amount)
        if record is None:
            user = self.get_user(user_id)
            raise InvalidInput(
                f"User {user_id} has {user.points} points, {amount} required"
            )
        _logger.info("Redeemed %s points for user %s", amount, user_id)
        return _parse_user(record)

    def _patch(self, user_id: int, patch: Record) -> UserRecord:
        record = self.repository.update(user_id, patch)
        if record is None:
            raise NotFound(f"User {user_id} not found")
        return _parse_user(record)


def goal_tag_for(goal: WeightGoal | str) -> GoalTag:
    """Map a calorie goal to the matching recipe goal tag."""
    return _GOAL_TAGS[WeightGoal(goal)]


def _parse_goal_tag(value: GoalTag | str) -> GoalTag:
    try:
        return GoalTag(value)
    except ValueError as exc:
        raise InvalidInput(f"Unknown fitness goal: {value}") from exc


def _goal_columns(goals: NutrientGoal) -> Record:
    return {
        "daily_calorie_goal": goals.calories,
        "daily_protein_goal": goals.protein_g,
        "daily_carbs_goal": goals.carbs_g,
        "daily_fat_goal": goals.fat_g,
    }


def _profile_columns(profile: Profile) -> Record:
    return {
        "weight_kg": profile.weight_kg,
        "height_cm": profile.height_cm,
        "age_years": profile.age_years,
        "sex": Sex(profile.sex).value,
        "activity_level": ActivityLevel(profile.activity_level).value,
        "goal": WeightGoal(profile.goal).value,
    }


def _parse_profile(raw: object) -> Profile | None:
    if not isinstance(raw, dict):
        return None
    return Profile(
        weight_kg=float(raw["weight_kg"]),
        height_cm=float(raw["height_cm"]),
        age_years=int(raw["age_years"]),
        sex=Sex(raw["sex"]),
        activity_level=ActivityLevel(raw["activity_level"]),
        goal=WeightGoal(raw["goal"]),
    )


def _parse_user(row: Record) -> UserRecord:
    """Parse a user row into a domain model."""
    return UserRecord(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        points=int(row.get("points") or 0),
        fitness_goal=GoalTag(row.get("fitness_goal") or GoalTag.MAINTENANCE.value),
        goals=NutrientGoal(
            calories=float(row.get("daily_calorie_goal", DEFAULT_GOAL.calories)),
            protein_g=float(row.get("daily_protein_goal", DEFAULT_GOAL.protein_g)),
            carbs_g=float(row.get("daily_carbs_goal", DEFAULT_GOAL.carbs_g)),
            fat_g=float(row.get("daily_fat_goal", DEFAULT_GOAL.fat_g)),
        ),
        profile=_parse_profile(row.get("profile")),
    )
