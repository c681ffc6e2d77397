"""Meal composition, comparison and ranking over normalized menu items."""

import math
from dataclasses import dataclass
from typing import Literal

from dining_macros.domain.meals import (
    ComparisonRow,
    MacroSlice,
    MealLine,
    MealSelection,
    MealTotals,
    ProteinRank,
    ProteinThresholds,
)
from dining_macros.domain.menu import MenuItem

ProteinMetric = Literal["per_serving", "per_100kcal"]

HIGH_PROTEIN_DENSITY = 20
LOW_FAT_EFFICIENCY = 25


@dataclass
class MealService:
    """Aggregations used by the meal builder views."""

    thresholds: ProteinThresholds

    def totals(self, items: list[MenuItem], selection: MealSelection) -> MealTotals:
        """Sum macros of the selected items."""
        return compute_totals(items, selection)

    def compare(self, a: MenuItem, b: MenuItem) -> list[ComparisonRow]:
        """Compare two items row by row."""
        return compare_items(a, b)

    def top_protein(
        self,
        items: list[MenuItem],
        metric: ProteinMetric = "per_serving",
        station: str | None = None,
    ) -> list[ProteinRank]:
        """Rank items by protein using the configured thresholds."""
        return rank_top_protein(items, metric, self.thresholds, station=station)


def compute_totals(items: list[MenuItem], selection: MealSelection) -> MealTotals:
    """Scale each selected item by its multiplier and sum the macros.

    Ids missing from ``items`` are skipped. A missing multiplier means one
    serving; negative or non-finite multipliers count as zero.
    """
    by_id = {item.id: item for item in items}
    lines: list[MealLine] = []
    seen: set[str] = set()
    for item_id in selection.item_ids:
        item = by_id.get(item_id)
        if item is None or item_id in seen:
            continue
        seen.add(item_id)
        servings = clean_servings(selection.servings.get(item_id, 1.0))
        lines.append(
            MealLine(
                item=item,
                servings=servings,
                calories=item.per_serving_kcal * servings,
                protein_g=item.per_serving_protein_g * servings,
                carbs_g=item.per_serving_carb_g * servings,
                fat_g=item.per_serving_fat_g * servings,
            )
        )

    protein = sum(line.protein_g for line in lines)
    carbs = sum(line.carbs_g for line in lines)
    fat = sum(line.fat_g for line in lines)
    return MealTotals(
        calories=sum(line.calories for line in lines),
        protein_g=protein,
        carbs_g=carbs,
        fat_g=fat,
        lines=lines,
        distribution=[
            MacroSlice(name="Protein", grams=protein),
            MacroSlice(name="Carbs", grams=carbs),
            MacroSlice(name="Fat", grams=fat),
        ],
    )


def clean_servings(value: object) -> float:
    """Coerce a serving multiplier to a finite non-negative float."""
    try:
        servings = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(servings):
        return 0.0
    return max(servings, 0.0)


def compare_items(a: MenuItem, b: MenuItem) -> list[ComparisonRow]:
    """Build comparison rows; more protein wins, less of everything else wins."""
    rows = [
        ComparisonRow(
            label="Serving",
            a=a.serving_name or "serving",
            b=b.serving_name or "serving",
            winner=None,
        )
    ]
    numeric = [
        ("Calories", a.per_serving_kcal, b.per_serving_kcal, False),
        ("Protein (g)", a.per_serving_protein_g, b.per_serving_protein_g, True),
        ("Carbs (g)", a.per_serving_carb_g, b.per_serving_carb_g, False),
        ("Fat (g)", a.per_serving_fat_g, b.per_serving_fat_g, False),
    ]
    for label, value_a, value_b, higher_wins in numeric:
        rows.append(
            ComparisonRow(
                label=label,
                a=_format_amount(value_a),
                b=_format_amount(value_b),
                winner=_winner(value_a, value_b, higher_wins=higher_wins),
            )
        )
    return rows


def rank_top_protein(
    items: list[MenuItem],
    metric: ProteinMetric,
    thresholds: ProteinThresholds,
    station: str | None = None,
) -> list[ProteinRank]:
    """Rank protein sources, skipping low-calorie and low-protein items."""
    min_protein = (
        thresholds.min_per_serving_g
        if metric == "per_serving"
        else thresholds.min_per_100kcal_g
    )
    ranked = []
    for item in filter_items(items, station=station):
        kcal = item.per_serving_kcal
        protein = item.per_serving_protein_g
        if kcal < thresholds.min_kcal or protein < min_protein:
            continue
        ranked.append(
            ProteinRank(
                item=item,
                protein_g=protein,
                protein_per_100kcal=protein / kcal * 100 if kcal > 0 else 0.0,
                pct_protein_calories=protein * 4 / kcal * 100 if kcal > 0 else 0.0,
            )
        )
    if metric == "per_serving":
        ranked.sort(key=lambda rank: rank.protein_g, reverse=True)
    else:
        ranked.sort(key=lambda rank: rank.protein_per_100kcal, reverse=True)
    return ranked[: thresholds.limit]


def filter_items(
    items: list[MenuItem], station: str | None = None, query: str | None = None
) -> list[MenuItem]:
    """Filter by exact station and by a name/station substring."""
    needle = (query or "").lower()
    return [
        item
        for item in items
        if (not station or item.station == station)
        and (needle in item.name.lower() or needle in item.station.lower())
    ]


def list_stations(items: list[MenuItem]) -> list[str]:
    """Return the sorted distinct stations."""
    return sorted({item.station for item in items})


def item_badges(item: MenuItem) -> list[str]:
    """Return display badges for an item."""
    badges = []
    if item.protein_density >= HIGH_PROTEIN_DENSITY:
        badges.append("High Protein")
    if item.fat_efficiency <= LOW_FAT_EFFICIENCY:
        badges.append("Low Fat")
    return badges


def find_item(
    items: list[MenuItem], key: str, station: str | None = None
) -> MenuItem | None:
    """Look an item up by id, then by name preferring the given station."""
    for item in items:
        if item.id == key:
            return item
    named = [item for item in items if item.name == key]
    if station:
        for item in named:
            if item.station == station:
                return item
    return named[0] if named else None


def _winner(value_a: float, value_b: float, *, higher_wins: bool) -> str | None:
    if value_a == value_b:
        return None
    a_wins = value_a > value_b if higher_wins else value_a < value_b
    return "a" if a_wins else "b"


def _format_amount(value: float) -> str:
    return f"{value:g}"
