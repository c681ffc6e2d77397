"""Menu domain models."""

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class Macros:
    """Per-serving macronutrients read from an upstream item."""

    kcal: float = 0.0
    protein_g: float = 0.0
    carb_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0


@dataclass(frozen=True)
class DerivedMetrics:
    """Per-100 g values and calorie-based scores for one serving."""

    protein_density: float
    fat_efficiency: float
    fiber_per_100kcal: float
    per_100g_kcal: float | None = None
    per_100g_protein_g: float | None = None
    per_100g_carb_g: float | None = None
    per_100g_fat_g: float | None = None


@dataclass(frozen=True)
class MenuItem:
    """Canonical menu item produced by the normalizer."""

    id: str
    name: str
    station: str
    meal_period: str
    serving_name: str
    serving_size_g: float | None
    per_serving_kcal: float
    per_serving_protein_g: float
    per_serving_carb_g: float
    per_serving_fat_g: float
    per_serving_fiber_g: float
    protein_density: float
    fat_efficiency: float
    fiber_per_100kcal: float
    per_100g_kcal: float | None = None
    per_100g_protein_g: float | None = None
    per_100g_carb_g: float | None = None
    per_100g_fat_g: float | None = None

    def to_payload(self) -> dict[str, object]:
        """Return the JSON shape, leaving out unknown optional values."""
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass(frozen=True)
class MenuResult:
    """Normalized items for one meal plus the raw upstream period list."""

    items: list[MenuItem] = field(default_factory=list)
    periods: list[dict[str, object]] = field(default_factory=list)
