"""Tests for macro extraction."""

import math

import pytest

from dining_macros.domain.menu import Macros
from dining_macros.services.nutrients import coerce_number, extract_macros


def test_object_shape_reads_named_fields() -> None:
    macros = extract_macros(
        {"nutrition": {"calories": 200, "protein": "20g", "carbs": 10.5, "fat": None}}
    )

    assert macros == Macros(kcal=200, protein_g=20, carb_g=10.5, fat_g=0, fiber_g=0)


def test_object_shape_wins_over_list_shape() -> None:
    macros = extract_macros(
        {
            "nutrition": {"calories": 90},
            "nutrients": [{"name": "Calories", "value_numeric": "500"}],
        }
    )

    assert macros.kcal == 90


def test_list_shape_matches_labels_ignoring_case() -> None:
    macros = extract_macros(
        {
            "nutrients": [
                {"name": "CALORIES", "value_numeric": "310"},
                {"name": "protein (g)", "value_numeric": 12},
                {"name": "Total Carbohydrates (g)", "value": "41g"},
                {"name": "Total Fat (g)", "value_numeric": "-", "value": "9.5"},
                {"name": "Dietary Fiber (g)", "value_numeric": "3"},
                {"name": "Sodium (mg)", "value_numeric": "700"},
            ]
        }
    )

    assert macros == Macros(kcal=310, protein_g=12, carb_g=41, fat_g=9.5, fiber_g=3)


def test_list_shape_missing_entries_default_to_zero() -> None:
    macros = extract_macros(
        {"nutrients": [{"name": "Calories", "value_numeric": "150"}, {"value": 4}]}
    )

    assert macros == Macros(kcal=150)


def test_item_without_nutrients_is_all_zero() -> None:
    assert extract_macros({"name": "Water"}) == Macros()
    assert extract_macros({"nutrition": "n/a", "nutrients": {}}) == Macros()
    assert extract_macros(None) == Macros()


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (12, 12.0),
        (3.5, 3.5),
        ("7.25 g", 7.25),
        ("less than 1", 1.0),
        ("-", 0.0),
        ("", 0.0),
        (None, 0.0),
        (True, 0.0),
        (math.nan, 0.0),
        (math.inf, 0.0),
        ("nan", 0.0),
        (-4, 0.0),
        (10**400, 0.0),
        ("1" * 400, 0.0),
    ],
)
def test_coerce_number(value: object, expected: float) -> None:
    assert coerce_number(value) == expected


def test_oversized_integer_defaults_field_to_zero() -> None:
    macros = extract_macros({"nutrition": {"calories": 10**400, "protein": 12}})

    assert macros == Macros(kcal=0, protein_g=12)
