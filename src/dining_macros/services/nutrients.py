"""Macro extraction from upstream menu items."""

import math
import re

from dining_macros.domain.menu import Macros

CALORIES = "calories"
PROTEIN = "protein (g)"
CARBS = "total carbohydrates (g)"
FAT = "total fat (g)"
FIBER = "dietary fiber (g)"

_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")


def extract_macros(raw_item: object) -> Macros:
    """Read per-serving macros from either upstream nutrient encoding.

    Items with a ``nutrition`` object are read by key and carry no fiber.
    Items with a ``nutrients`` list are matched by label, ignoring case.
    Anything else yields zeros.
    """
    if not isinstance(raw_item, dict):
        return Macros()
    nutrition = raw_item.get("nutrition")
    if isinstance(nutrition, dict):
        return _from_nutrition_object(nutrition)
    nutrients = raw_item.get("nutrients")
    if isinstance(nutrients, list):
        return _from_nutrient_list(nutrients)
    return Macros()


def coerce_number(value: object) -> float:
    """Coerce an upstream value to a finite non-negative float, else 0."""
    number = _parse_number(value)
    if number is None:
        return 0.0
    return max(number, 0.0)


def _parse_number(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        try:
            number = float(value)
        except OverflowError:
            return None
    else:
        match = _NUMBER_RE.search(str(value))
        if match is None:
            return None
        number = float(match.group(0))
    if not math.isfinite(number):
        return None
    return number


def _from_nutrition_object(nutrition: dict[str, object]) -> Macros:
    return Macros(
        kcal=coerce_number(nutrition.get("calories")),
        protein_g=coerce_number(nutrition.get("protein")),
        carb_g=coerce_number(nutrition.get("carbs")),
        fat_g=coerce_number(nutrition.get("fat")),
    )


def _from_nutrient_list(nutrients: list[object]) -> Macros:
    by_name = {
        str(entry["name"]).lower(): entry
        for entry in nutrients
        if isinstance(entry, dict) and entry.get("name")
    }

    def pick(label: str) -> float:
        entry = by_name.get(label)
        if entry is None:
            return 0.0
        number = _parse_number(entry.get("value_numeric"))
        if number is None:
            number = _parse_number(entry.get("value"))
        return coerce_number(number)

    return Macros(
        kcal=pick(CALORIES),
        protein_g=pick(PROTEIN),
        carb_g=pick(CARBS),
        fat_g=pick(FAT),
        fiber_g=pick(FIBER),
    )
