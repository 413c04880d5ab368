"""Scale per-100 g nutrient profiles to a consumed quantity."""

import re

from calorie_track.domain.nutrition import NutrientProfile
from calorie_track.services.rounding import round_calories, round_macro

REFERENCE_GRAMS = 100.0

_UNIT_TO_GRAMS = {"g": 1.0, "kg": 1000.0, "mg": 0.001}

_WEIGHT_RE = re.compile(
    r"(?<![\d.,/])(\d+(?:\.\d+)?|\.\d+)\s*(kg|mg|g)\b",
    re.IGNORECASE,
)


def parse_quantity_grams(quantity: str | None) -> float | None:
    """Return the weight in grams embedded in a quantity string, if any."""
    if not quantity:
        return None
    match = _WEIGHT_RE.search(quantity)
    if match is None:
        return None
    amount, unit = match.groups()
    return float(amount) * _UNIT_TO_GRAMS[unit.lower()]


def scale_profile(profile: NutrientProfile, quantity: str | None) -> NutrientProfile:
    """Rescale a per-100 g profile to a quantity like ``"250 g"``.

    Quantities without a weight (``"1 slice"``) leave the profile unchanged.
    Always pass the reference profile, not one that was already scaled.
    """
    grams = parse_quantity_grams(quantity)
    if grams is None:
        return profile
    return scale_to_grams(profile, grams)


def scale_to_grams(profile: NutrientProfile, grams: float) -> NutrientProfile:
    """Rescale a per-100 g profile to a weight in grams."""
    ratio = grams / REFERENCE_GRAMS
    return NutrientProfile(
        calories=round_calories(profile.calories * ratio),
        protein=round_macro(profile.protein * ratio),
        fat=round_macro(profile.fat * ratio),
        carbs=round_macro(profile.carbs * ratio),
    )
