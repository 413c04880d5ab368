"""Half-up rounding shared by the nutrition engine."""

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from negative infinity (2.5 -> 3, 0.25 -> 0.3)."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def round_calories(value: float) -> int:
    """Round kilocalories to a whole number."""
    return int(round_half_up(value))


def round_macro(value: float) -> float:
    """Round grams to one decimal place."""
    return round_half_up(value, 1)
