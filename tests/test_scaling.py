"""Tests for quantity parsing and profile scaling."""

import pytest

from calorie_track.domain.nutrition import NutrientProfile
from calorie_track.services.scaling import (
    parse_quantity_grams,
    scale_profile,
    scale_to_grams,
)

PER_100G = NutrientProfile(calories=165, protein=31.0, fat=3.6, carbs=0.0)


@pytest.mark.parametrize(
    ("quantity", "grams"),
    [
        ("250 g", 250.0),
        ("250g", 250.0),
        ("1.5 kg", 1500.0),
        ("500 mg", 0.5),
        ("about 80G of rice", 80.0),
        (".5 kg", 500.0),
    ],
)
def test_parse_quantity_grams(quantity: str, grams: float) -> None:
    assert parse_quantity_grams(quantity) == pytest.approx(grams)


@pytest.mark.parametrize("quantity", [None, "", "1 slice", "2 cups", "100 grains"])
def test_parse_quantity_without_weight(quantity: str | None) -> None:
    assert parse_quantity_grams(quantity) is None


def test_scale_profile_to_weight() -> None:
    scaled = scale_profile(PER_100G, "150 g")

    assert scaled == NutrientProfile(calories=248, protein=46.5, fat=5.4, carbs=0.0)


def test_scale_profile_without_weight_is_unchanged() -> None:
    assert scale_profile(PER_100G, "1 breast") == PER_100G


def test_scale_profile_reference_weight_is_identity() -> None:
    assert scale_profile(PER_100G, "100g") == PER_100G


def test_scale_rounds_fields_independently() -> None:
    profile = NutrientProfile(calories=25, protein=0.5, fat=0.5, carbs=0.5)

    scaled = scale_to_grams(profile, 50)

    assert scaled == NutrientProfile(calories=13, protein=0.3, fat=0.3, carbs=0.3)


def test_scale_to_zero_grams() -> None:
    assert scale_to_grams(PER_100G, 0).is_empty


@pytest.mark.parametrize("quantity", ["1,000 g", "1,5 kg", "1/2 kg", "2x1,5 kg"])
def test_parse_quantity_ignores_tail_of_larger_number(quantity: str) -> None:
    assert parse_quantity_grams(quantity) is None


def test_ambiguous_number_leaves_profile_unchanged() -> None:
    assert scale_profile(PER_100G, "1,000 g") == PER_100G


def test_equivalent_weights_scale_alike() -> None:
    assert scale_profile(PER_100G, "0.5kg") == scale_profile(PER_100G, "500g")


def test_double_reference_weight_doubles_calories() -> None:
    profile = NutrientProfile(calories=52.4, protein=0.3, fat=0.2, carbs=13.8)

    scaled = scale_profile(profile, "200g")

    assert scaled.calories == round(profile.calories * 2)
    assert scaled == NutrientProfile(calories=105, protein=0.6, fat=0.4, carbs=27.6)
