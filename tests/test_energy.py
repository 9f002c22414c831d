"""Tests for the daily energy and macro calculator."""

import pytest

from fitness_tracker.domain.nutrition import (
    NutrientGoal,
    NutrientTotals,
    round_half_up,
)
from fitness_tracker.domain.profile import (
    ActivityLevel,
    Profile,
    Sex,
    WeightGoal,
)
from fitness_tracker.errors import InvalidInput
from fitness_tracker.services.energy import (
    GOAL_MULTIPLIERS,
    MACRO_RATIOS,
    basal_metabolic_rate,
    compute_daily_targets,
    compute_energy_breakdown,
    total_daily_energy_expenditure,
)


def _profile(**overrides) -> Profile:  # type: ignore[no-untyped-def]
    values = {
        "weight_kg": 70.0,
        "height_cm": 175.0,
        "age_years": 30,
        "sex": Sex.MALE,
        "activity_level": ActivityLevel.MODERATE,
        "goal": WeightGoal.MAINTENANCE,
    }
    values.update(overrides)
    return Profile(**values)


def test_maintenance_targets_for_moderate_male() -> None:
    profile = _profile()

    assert basal_metabolic_rate(profile) == pytest.approx(1648.75)
    assert total_daily_energy_expenditure(profile) == pytest.approx(2555.5625)
    assert compute_daily_targets(profile) == NutrientGoal(
        calories=2556, protein_g=192, carbs_g=288, fat_g=71
    )


def test_weight_loss_targets_for_sedentary_female() -> None:
    profile = _profile(
        weight_kg=60.0,
        height_cm=165.0,
        age_years=25,
        sex="female",
        activity_level="sedentary",
        goal="weightLoss",
    )

    breakdown = compute_energy_breakdown(profile)

    assert breakdown.bmr == pytest.approx(1345.25)
    assert breakdown.adjusted_calories == pytest.approx(1291.44)
    assert breakdown.targets == NutrientGoal(
        calories=1291, protein_g=129, carbs_g=97, fat_g=43
    )


def test_muscle_gain_targets_for_active_male() -> None:
    profile = _profile(
        weight_kg=80.0,
        height_cm=180.0,
        age_years=28,
        activity_level=ActivityLevel.ACTIVE,
        goal=WeightGoal.MUSCLE_GAIN,
    )

    assert compute_daily_targets(profile) == NutrientGoal(
        calories=3397, protein_g=255, carbs_g=425, fat_g=75
    )


def test_macro_ratios_sum_to_one() -> None:
    for ratios in MACRO_RATIOS.values():
        assert sum(ratios) == pytest.approx(1.0)


@pytest.mark.parametrize("goal", list(WeightGoal))
@pytest.mark.parametrize("level", list(ActivityLevel))
def test_macro_calories_stay_close_to_adjusted_calories(
    goal: WeightGoal, level: ActivityLevel
) -> None:
    profile = _profile(activity_level=level, goal=goal)

    targets = compute_daily_targets(profile)
    adjusted = total_daily_energy_expenditure(profile) * GOAL_MULTIPLIERS[goal]
    macro_kcal = targets.protein_g * 4 + targets.carbs_g * 4 + targets.fat_g * 9

    assert min(targets.protein_g, targets.carbs_g, targets.fat_g) >= 0
    assert abs(macro_kcal - adjusted) <= 10


@pytest.mark.parametrize(
    "overrides",
    [
        {"weight_kg": 0},
        {"weight_kg": -70.0},
        {"weight_kg": float("nan")},
        {"weight_kg": float("inf")},
        {"height_cm": float("nan")},
        {"height_cm": 0},
        {"age_years": 0},
        {"age_years": 30.5},
        {"sex": "other"},
        {"activity_level": "extreme"},
        {"goal": "bulk"},
    ],
)
def test_invalid_profiles_are_rejected(overrides: dict[str, object]) -> None:
    with pytest.raises(InvalidInput):
        compute_daily_targets(_profile(**overrides))


def test_round_half_up() -> None:
    assert round_half_up(287.5) == 288
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2


@pytest.mark.parametrize("value", [float("nan"), float("inf"), -1.0])
def test_nutrient_totals_reject_non_finite_and_negative_values(value: float) -> None:
    with pytest.raises(InvalidInput):
        NutrientTotals(calories=value)
    with pytest.raises(InvalidInput):
        NutrientGoal(protein_g=value)
    with pytest.raises(InvalidInput):
        NutrientTotals(calories=100).scale(value)
