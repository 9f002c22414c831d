"""Mass and length unit normalization."""

from fitness_tracker.errors import InvalidInput

KG_PER_POUND = 0.453592
CM_PER_INCH = 2.54


def kg_from_pounds(lb: float) -> float:
    return lb * KG_PER_POUND


def cm_from_inches(inches: float) -> float:
    return inches * CM_PER_INCH


def normalize_weight(value: float, unit: str) -> float:
    """Return a weight in kilograms."""
    cleaned = unit.strip().lower()
    if cleaned == "kg":
        return float(value)
    if cleaned in {"lb", "lbs"}:
        return kg_from_pounds(value)
    raise InvalidInput(f"Unsupported weight unit: {unit}")


def normalize_height(value: float, unit: str) -> float:
    """Return a height in centimeters."""
    cleaned = unit.strip().lower()
    if cleaned == "cm":
        return float(value)
    if cleaned in {"in", "inch", "inches"}:
        return cm_from_inches(value)
    raise InvalidInput(f"Unsupported height unit: {unit}")
