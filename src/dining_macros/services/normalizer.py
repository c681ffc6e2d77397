"""Normalization of DineOnCampus period payloads into menu items."""

from collections.abc import Iterator

from dining_macros.domain.menu import MenuItem
from dining_macros.services.metrics import compute_derived
from dining_macros.services.nutrients import extract_macros
from dining_macros.services.servings import parse_serving_grams

ID_KEYS = ("id", "mrn", "webtrition_id")
SERVING_KEYS = ("portion", "servingSize", "serving", "portion_size")

DEFAULT_NAME = "Item"
DEFAULT_STATION = "Uncategorized"
DEFAULT_PERIOD = "Unspecified"
DEFAULT_SERVING = "1 serving"

_UNKNOWN_GRAMS = "unknown"


def normalize_menu(
    payload: object, wanted_period_id: str | None = None
) -> list[MenuItem]:
    """Build de-duplicated menu items from a period detail payload.

    Items keep upstream order. Malformed branches are skipped or defaulted,
    never raised.
    """
    period = _select_period(payload, wanted_period_id)
    if period is None:
        return []
    period_name = _label(period.get("name"), DEFAULT_PERIOD)
    items = [
        _build_item(raw_item, station=station, meal_period=period_name)
        for station, raw_item in _iter_items(period)
    ]
    return dedupe_items(items)


def dedupe_items(items: list[MenuItem]) -> list[MenuItem]:
    """Drop repeats of (name, station, grams), keeping the first one."""
    seen: set[tuple[str, str, float | str]] = set()
    unique: list[MenuItem] = []
    for item in items:
        key = _dedupe_key(item)
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def first_present(raw: dict[str, object], keys: tuple[str, ...]) -> object | None:
    """Return the first value among ``keys`` that is not None or empty."""
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def _select_period(
    payload: object, wanted_period_id: str | None
) -> dict[str, object] | None:
    if not isinstance(payload, dict):
        return None
    menu = payload.get("menu")
    if not isinstance(menu, dict):
        return None
    periods = menu.get("periods")
    if isinstance(periods, dict):
        return periods
    if not isinstance(periods, list):
        return None
    candidates = [period for period in periods if isinstance(period, dict)]
    if not candidates:
        return None
    if wanted_period_id is not None:
        for period in candidates:
            if str(period.get("id")) == wanted_period_id:
                return period
    return candidates[0]


def _iter_items(period: dict[str, object]) -> Iterator[tuple[str, dict[str, object]]]:
    categories = period.get("categories")
    if not isinstance(categories, list):
        return
    for category in categories:
        if not isinstance(category, dict):
            continue
        station = _label(category.get("name"), DEFAULT_STATION)
        raw_items = category.get("items")
        if not isinstance(raw_items, list):
            continue
        for raw_item in raw_items:
            if isinstance(raw_item, dict):
                yield station, raw_item


def _build_item(raw: dict[str, object], *, station: str, meal_period: str) -> MenuItem:
    name = _label(raw.get("name"), DEFAULT_NAME)
    serving_text = first_present(raw, SERVING_KEYS)
    serving_name = str(serving_text) if serving_text is not None else DEFAULT_SERVING
    grams = parse_serving_grams(serving_name)
    identifier = first_present(raw, ID_KEYS)
    macros = extract_macros(raw)
    derived = compute_derived(macros, grams)
    return MenuItem(
        id=str(identifier) if identifier is not None else name,
        name=name,
        station=station,
        meal_period=meal_period,
        serving_name=serving_name,
        serving_size_g=grams,
        per_serving_kcal=macros.kcal,
        per_serving_protein_g=macros.protein_g,
        per_serving_carb_g=macros.carb_g,
        per_serving_fat_g=macros.fat_g,
        per_serving_fiber_g=macros.fiber_g,
        protein_density=derived.protein_density,
        fat_efficiency=derived.fat_efficiency,
        fiber_per_100kcal=derived.fiber_per_100kcal,
        per_100g_kcal=derived.per_100g_kcal,
        per_100g_protein_g=derived.per_100g_protein_g,
        per_100g_carb_g=derived.per_100g_carb_g,
        per_100g_fat_g=derived.per_100g_fat_g,
    )


def _dedupe_key(item: MenuItem) -> tuple[str, str, float | str]:
    # Unknown weights share one sentinel, so same-named items at a station
    # with unparseable servings collapse into the first.
    grams: float | str = (
        round(item.serving_size_g, 3)
        if item.serving_size_g is not None
        else _UNKNOWN_GRAMS
    )
    return item.name.lower(), item.station.lower(), grams


def _label(value: object, default: str) -> str:
    if value is None or value == "":
        return default
    return str(value)
