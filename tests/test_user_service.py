"""Tests for user service."""

import threading
import time
from dataclasses import dataclass

import pytest

from fitness_tracker.adapters.memory_store import InMemoryRecordStore
from fitness_tracker.domain.nutrition import DEFAULT_GOAL, NutrientGoal
from fitness_tracker.domain.profile import Profile, WeightGoal
from fitness_tracker.domain.recipes import GoalTag
from fitness_tracker.errors import InvalidInput, NotFound
from fitness_tracker.services.users import UserService


def test_create_user_has_defaults() -> None:
    service = UserService(InMemoryRecordStore())

    user = service.create_user("  Alex ")

    assert user.name == "Alex"
    assert user.points == 0
    assert user.fitness_goal is GoalTag.MAINTENANCE
    assert user.goals == DEFAULT_GOAL
    assert user.profile is None
    assert service.get_user(user.id) == user


def test_create_user_accepts_legacy_goal_spelling() -> None:
    service = UserService(InMemoryRecordStore())

    assert service.create_user("Kim", "musclegain").fitness_goal is GoalTag.MUSCLE_GAIN
    with pytest.raises(InvalidInput):
        service.create_user("Kim", "shred")
    with pytest.raises(InvalidInput):
        service.create_user("   ")


def test_update_goals_replaces_targets() -> None:
    service = UserService(InMemoryRecordStore())
    user = service.create_user("Alex")
    goals = NutrientGoal(calories=1800, protein_g=150, carbs_g=160, fat_g=60)

    updated = service.update_goals(user.id, goals)

    assert updated.goals == goals
    with pytest.raises(NotFound):
        service.update_goals(999, goals)


def test_apply_profile_derives_goals_and_tag() -> None:
    service = UserService(InMemoryRecordStore())
    user = service.create_user("Alex")
    profile = Profile(
        weight_kg=60.0,
        height_cm=165.0,
        age_years=25,
        sex="female",
        activity_level="sedentary",
        goal="weightLoss",
    )

    updated = service.apply_profile(user.id, profile)

    assert updated.goals == NutrientGoal(
        calories=1291, protein_g=129, carbs_g=97, fat_g=43
    )
    assert updated.fitness_goal is GoalTag.FAT_LOSS
    assert updated.profile is not None
    assert updated.profile.goal is WeightGoal.WEIGHT_LOSS


def test_award_and_redeem_points() -> None:
    service = UserService(InMemoryRecordStore())
    user = service.create_user("Alex")

    service.award_points(user.id, 30)
    after = service.redeem_points(user.id, 20)

    assert after.points == 10
    with pytest.raises(InvalidInput):
        service.redeem_points(user.id, 11)
    with pytest.raises(InvalidInput):
        service.award_points(user.id, 0)
    with pytest.raises(NotFound):
        service.award_points(999, 5)
    assert service.get_user(user.id).points == 10
    with pytest.raises(NotFound):
        service.redeem_points(999, 5)


@dataclass
class SlowReadStore(InMemoryRecordStore):
    """Store whose reads stall so concurrent writers interleave."""

    def get(self, record_id: int) -> dict[str, object] | None:
        time.sleep(0.05)
        return super().get(record_id)


def test_concurrent_redemptions_cannot_overdraw_points() -> None:
    service = UserService(SlowReadStore())
    user = service.create_user("Alex")
    service.award_points(user.id, 100)
    failures: list[Exception] = []

    def redeem() -> None:
        try:
            service.redeem_points(user.id, 100)
        except InvalidInput as exc:
            failures.append(exc)

    threads = [threading.Thread(target=redeem) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert service.get_user(user.id).points == 0
    assert len(failures) == 1
