"""Tests for unit normalization."""

import pytest

from fitness_tracker.domain.units import (
    cm_from_inches,
    kg_from_pounds,
    normalize_height,
    normalize_weight,
)
from fitness_tracker.errors import InvalidInput


def test_pounds_and_inches_convert_to_metric() -> None:
    assert kg_from_pounds(154) == pytest.approx(69.853168)
    assert cm_from_inches(70) == pytest.approx(177.8)


def test_normalize_accepts_unit_spellings() -> None:
    assert normalize_weight(70, "KG") == 70.0
    assert normalize_weight(10, "lbs") == pytest.approx(4.53592)
    assert normalize_height(180, " cm ") == 180.0
    assert normalize_height(12, "inches") == pytest.approx(30.48)


def test_normalize_rejects_unknown_units() -> None:
    with pytest.raises(InvalidInput):
        normalize_weight(10, "stone")
    with pytest.raises(InvalidInput):
        normalize_height(6, "ft")
