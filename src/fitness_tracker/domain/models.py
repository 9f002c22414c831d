"""Domain models for the fitness tracker."""

from dataclasses import dataclass

from fitness_tracker.domain.nutrition import NutrientGoal
from fitness_tracker.domain.profile import Profile
from fitness_tracker.domain.recipes import GoalTag


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: int
    name: str
    points: int
    fitness_goal: GoalTag
    goals: NutrientGoal
    profile: Profile | None = None
