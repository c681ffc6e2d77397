"""Domain models for composing and ranking meals."""

from dataclasses import dataclass, field

from dining_macros.domain.menu import MenuItem


@dataclass(frozen=True)
class MealSelection:
    """Selected menu item ids with optional serving multipliers."""

    item_ids: list[str] = field(default_factory=list)
    servings: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class MealLine:
    """One selected item scaled by its serving multiplier."""

    item: MenuItem
    servings: float
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class MacroSlice:
    """Labelled gram amount for a macro distribution chart."""

    name: str
    grams: float


@dataclass(frozen=True)
class MealTotals:
    """Totals for a composed meal."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    lines: list[MealLine]
    distribution: list[MacroSlice]


@dataclass(frozen=True)
class ComparisonRow:
    """Side-by-side value for two items; winner is "a", "b" or None."""

    label: str
    a: str
    b: str
    winner: str | None


@dataclass(frozen=True)
class ProteinRank:
    """Protein ranking entry."""

    item: MenuItem
    protein_g: float
    protein_per_100kcal: float
    pct_protein_calories: float


@dataclass(frozen=True)
class ProteinThresholds:
    """Gating thresholds for the top-protein list."""

    min_kcal: float = 60
    min_per_serving_g: float = 10
    min_per_100kcal_g: float = 8
    limit: int = 5
