"""Derived per-100 g values and calorie-share scores."""

from dining_macros.domain.menu import DerivedMetrics, Macros

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARB = 4
KCAL_PER_G_FAT = 9
MIN_KCAL_FLOOR = 1.0


def compute_derived(macros: Macros, serving_size_g: float | None) -> DerivedMetrics:
    """Compute per-100 g values (when grams are known) and scores."""
    kcal = max(macros.kcal, MIN_KCAL_FLOOR)
    return DerivedMetrics(
        protein_density=macros.protein_g * KCAL_PER_G_PROTEIN / kcal * 100,
        fat_efficiency=macros.fat_g * KCAL_PER_G_FAT / kcal * 100,
        fiber_per_100kcal=macros.fiber_g * 100 / kcal,
        per_100g_kcal=per_100g(macros.kcal, serving_size_g),
        per_100g_protein_g=per_100g(macros.protein_g, serving_size_g),
        per_100g_carb_g=per_100g(macros.carb_g, serving_size_g),
        per_100g_fat_g=per_100g(macros.fat_g, serving_size_g),
    )


def per_100g(per_serving: float, serving_size_g: float | None) -> float | None:
    """Scale a per-serving value to 100 g; None when grams are unknown."""
    if serving_size_g is None or serving_size_g <= 0:
        return None
    return per_serving * (100 / serving_size_g)
