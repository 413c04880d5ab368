"""Extract a nutrient profile from raw FDC nutrient records.

FDC has served the same nutrients under two identifier schemes: the legacy
three-digit nutrient numbers (``208`` energy, ``203`` protein, ...) and the
four-digit nutrient ids (``1008``, ``1003``, ...). Depending on endpoint and
format, the identifier shows up as ``nutrient.id``, ``nutrientId``,
``nutrientNumber``, ``number``, ``nutrient.number`` or a bare ``id``, and the
value as ``amount`` or ``value``. Everything resolves through a single lookup
table.
"""

import logging
import math

from calorie_track.domain.nutrition import NutrientProfile
from calorie_track.services.rounding import round_calories, round_macro

KJ_PER_KCAL = 4.184
ATWATER_PROTEIN = 4
ATWATER_FAT = 9
ATWATER_CARBS = 4

NUTRIENT_FIELDS: dict[str, str] = {
    "208": "calories",
    "1008": "calories",
    "268": "energy_kj",
    "1062": "energy_kj",
    "203": "protein",
    "1003": "protein",
    "204": "fat",
    "1004": "fat",
    "205": "carbs",
    "1005": "carbs",
    "269": "sugars",
    "2000": "sugars",
    "291": "fiber",
    "1079": "fiber",
}

_MACRO_FIELDS = {"protein", "fat", "carbs", "sugars", "fiber"}

_logger = logging.getLogger(__name__)


def extract_nutrients(raw: object) -> NutrientProfile:
    """Map one raw food record to a canonical per-100 g profile.

    Returns the all-zero profile when the record has no usable nutrient list.
    """
    observations = raw.get("foodNutrients") if isinstance(raw, dict) else None
    if not isinstance(observations, list):
        return NutrientProfile.empty()

    values = {"calories": 0, "protein": 0.0, "fat": 0.0, "carbs": 0.0}
    energy_kj: float | None = None
    for observation in observations:
        if not isinstance(observation, dict):
            continue
        identifier = _identifier(observation)
        field = NUTRIENT_FIELDS.get(identifier) if identifier else None
        if field is None:
            continue
        value = _amount(observation)
        if value is None:
            continue
        unit = _unit(observation)
        if field == "calories" and unit == "kj":
            field = "energy_kj"
        if field in _MACRO_FIELDS and unit == "mg":
            value = value / 1000

        if field == "calories":
            values["calories"] = max(values["calories"], round_calories(value))
        elif field == "energy_kj":
            energy_kj = value if energy_kj is None else max(energy_kj, value)
        elif field == "fiber":
            if values["carbs"] == 0:
                values["carbs"] += round_macro(value)
        elif field == "sugars":
            if values["carbs"] == 0:
                values["carbs"] = max(values["carbs"], round_macro(value))
        else:
            values[field] = max(values[field], round_macro(value))
        _logger.debug("Matched nutrient %s -> %s: %s", identifier, field, value)

    if values["calories"] == 0 and energy_kj:
        values["calories"] = round_calories(energy_kj / KJ_PER_KCAL)
        _logger.debug("Converted calories from kJ: %s", values["calories"])

    has_macros = values["protein"] or values["fat"] or values["carbs"]
    if values["calories"] == 0 and has_macros:
        values["calories"] = estimate_calories(
            values["protein"], values["fat"], values["carbs"]
        )
        _logger.debug("Estimated calories from macros: %s", values["calories"])

    return NutrientProfile(
        calories=values["calories"],
        protein=values["protein"],
        fat=values["fat"],
        carbs=values["carbs"],
    )


def estimate_calories(protein: float, fat: float, carbs: float) -> int:
    """Estimate kilocalories from macros with Atwater factors."""
    return round_calories(
        protein * ATWATER_PROTEIN + fat * ATWATER_FAT + carbs * ATWATER_CARBS
    )


def _identifier(observation: dict[str, object]) -> str | None:
    nutrient = observation.get("nutrient")
    nested = nutrient if isinstance(nutrient, dict) else {}
    for candidate in (
        nested.get("id"),
        observation.get("nutrientId"),
        observation.get("nutrientNumber"),
        observation.get("number"),
        nested.get("number"),
        # full-format rows carry their own row id next to the nutrient dict
        None if isinstance(nutrient, dict) else observation.get("id"),
    ):
        key = _normalize_identifier(candidate)
        if key in NUTRIENT_FIELDS:
            return key
    return None


def _normalize_identifier(value: object) -> str | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, str):
        cleaned = value.strip()
        if cleaned.endswith(".0"):
            cleaned = cleaned[:-2]
        return cleaned or None
    return None


def _amount(observation: dict[str, object]) -> float | None:
    raw = observation.get("amount")
    if raw is None:
        raw = observation.get("value")
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int | float):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def _unit(observation: dict[str, object]) -> str:
    nutrient = observation.get("nutrient")
    nested = nutrient if isinstance(nutrient, dict) else {}
    unit = observation.get("unitName") or nested.get("unitName") or ""
    return str(unit).strip().lower()
