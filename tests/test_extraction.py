"""Tests for nutrient extraction from FDC records."""

from calorie_track.domain.nutrition import NutrientProfile
from calorie_track.services.extraction import estimate_calories, extract_nutrients
from tests.conftest import CHICKEN_BREAST


def test_extracts_modern_nutrient_ids() -> None:
    profile = extract_nutrients(CHICKEN_BREAST)

    assert profile == NutrientProfile(calories=120, protein=22.5, fat=2.6, carbs=0)


def test_extracts_legacy_nutrient_numbers() -> None:
    raw = {
        "foodNutrients": [
            {"nutrientNumber": "208", "value": 52},
            {"nutrientNumber": "203", "value": 0.26},
            {"nutrientNumber": "204", "value": 0.17},
            {"nutrientNumber": "205", "value": 13.81},
        ]
    }

    profile = extract_nutrients(raw)

    assert profile == NutrientProfile(calories=52, protein=0.3, fat=0.2, carbs=13.8)


def test_extracts_abridged_number_field() -> None:
    raw = {
        "foodNutrients": [
            {"number": "208", "amount": 389, "unitName": "KCAL"},
            {"number": 203, "amount": 16.9, "unitName": "G"},
        ]
    }

    profile = extract_nutrients(raw)

    assert profile.calories == 389
    assert profile.protein == 16.9


def test_duplicate_observations_keep_maximum() -> None:
    raw = {
        "foodNutrients": [
            {"nutrientId": 1008, "amount": 100},
            {"nutrientNumber": 208, "amount": 120},
            {"nutrientId": 1003, "amount": 5.0},
            {"nutrient": {"number": "203"}, "amount": 4.0},
        ]
    }

    profile = extract_nutrients(raw)

    assert profile.calories == 120
    assert profile.protein == 5.0


def test_fiber_fills_missing_carbs() -> None:
    raw = {
        "foodNutrients": [
            {"nutrientId": 1008, "amount": 30},
            {"nutrientId": 1079, "amount": 2.4},
        ]
    }

    assert extract_nutrients(raw).carbs == 2.4


def test_fiber_ignored_when_carbs_present() -> None:
    raw = {
        "foodNutrients": [
            {"nutrientId": 1005, "amount": 10.0},
            {"nutrientId": 1079, "amount": 2.4},
            {"nutrientId": 2000, "amount": 7.0},
        ]
    }

    assert extract_nutrients(raw).carbs == 10.0


def test_sugars_fill_missing_carbs() -> None:
    raw = {"foodNutrients": [{"nutrientNumber": "269", "amount": 8.25}]}

    profile = extract_nutrients(raw)

    assert profile.carbs == 8.3
    assert profile.calories == 33


def test_kilojoules_convert_when_calories_missing() -> None:
    raw = {
        "foodNutrients": [
            {"nutrientId": 1062, "amount": 418.4},
            {"nutrientId": 1003, "amount": 1.0},
        ]
    }

    assert extract_nutrients(raw).calories == 100


def test_energy_reported_in_kilojoules_is_converted() -> None:
    raw = {"foodNutrients": [{"nutrientId": 1008, "amount": 836.8, "unitName": "kJ"}]}

    assert extract_nutrients(raw).calories == 200


def test_kilocalories_win_over_kilojoules() -> None:
    raw = {
        "foodNutrients": [
            {"nutrientId": 1062, "amount": 1000},
            {"nutrientId": 1008, "amount": 50},
        ]
    }

    assert extract_nutrients(raw).calories == 50


def test_milligram_macros_are_converted() -> None:
    raw = {"foodNutrients": [{"nutrientId": 1003, "amount": 2500, "unitName": "MG"}]}

    assert extract_nutrients(raw).protein == 2.5


def test_atwater_estimate_when_energy_missing() -> None:
    raw = {
        "foodNutrients": [
            {"nutrientId": 1003, "amount": 10},
            {"nutrientId": 1004, "amount": 5},
            {"nutrientId": 1005, "amount": 20},
        ]
    }

    assert extract_nutrients(raw).calories == 165


def test_estimate_calories_rounds_half_up() -> None:
    assert estimate_calories(0.125, 0, 0) == 1
    assert estimate_calories(0.625, 0, 0) == 3


def test_macros_round_half_up() -> None:
    raw = {"foodNutrients": [{"nutrientId": 1004, "amount": 0.25}]}

    assert extract_nutrients(raw).fat == 0.3


def test_irregular_input_yields_empty_profile() -> None:
    for raw in (None, "food", 42, [], {}, {"foodNutrients": "none"}):
        assert extract_nutrients(raw) == NutrientProfile.empty()


def test_irregular_observations_are_skipped() -> None:
    raw = {
        "foodNutrients": [
            None,
            "208",
            {"nutrientId": 1008},
            {"nutrientId": 1008, "amount": "n/a"},
            {"nutrientId": 1008, "amount": -5},
            {"nutrientId": 1008, "amount": float("nan")},
            {"nutrientId": 1008, "amount": float("inf")},
            {"nutrientId": 9999, "amount": 500},
            {"nutrientId": True, "amount": 500},
            {"nutrientId": "1003", "amount": "12.5"},
        ]
    }

    profile = extract_nutrients(raw)

    assert profile.protein == 12.5
    assert profile.calories == 50


def test_numeric_identifier_forms_resolve_alike() -> None:
    for identifier in (208, "208", 208.0, "208.0"):
        raw = {"foodNutrients": [{"nutrientNumber": identifier, "amount": 75}]}
        assert extract_nutrients(raw).calories == 75


def test_profile_without_data_is_empty() -> None:
    profile = extract_nutrients({"foodNutrients": []})

    assert profile.is_empty


def test_bare_identifier_with_value() -> None:
    profile = extract_nutrients({"foodNutrients": [{"id": 208, "value": 95}]})

    assert profile == NutrientProfile(calories=95, protein=0, fat=0, carbs=0)


def test_macros_only_record_estimates_calories() -> None:
    raw = {"foodNutrients": [{"id": 1003, "value": 20}, {"id": 1004, "value": 10}]}

    profile = extract_nutrients(raw)

    assert profile == NutrientProfile(calories=170, protein=20, fat=10, carbs=0)


def test_row_id_next_to_nutrient_dict_is_ignored() -> None:
    raw = {"foodNutrients": [{"nutrient": {"id": 9999}, "id": 1003, "amount": 5}]}

    assert extract_nutrients(raw).is_empty
