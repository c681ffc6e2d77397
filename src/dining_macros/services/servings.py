"""Serving-size text to gram conversion."""

import re

OUNCE_TO_G = 28.3495
FLOZ_TO_ML = 29.5735
DENSITY_G_PER_ML = 1.0

_NUMBER = r"(\d+(?:\.\d+)?)"
_FLOZ_RE = re.compile(rf"{_NUMBER}\s*floz")
_OUNCE_RE = re.compile(rf"{_NUMBER}\s*(?:oz|ounce|ounces)")
_GRAM_RE = re.compile(rf"{_NUMBER}\s*g(?:ram)?")


def parse_serving_grams(text: str | None) -> float | None:
    """Convert a serving descriptor such as "4 oz" into grams.

    Only whole-string matches count. Descriptors in other units ("1 each",
    "1 slice") have no known weight and return None.
    """
    if not text:
        return None
    cleaned = text.strip().lower()

    match = _FLOZ_RE.fullmatch(cleaned)
    if match:
        return float(match.group(1)) * FLOZ_TO_ML * DENSITY_G_PER_ML
    match = _OUNCE_RE.fullmatch(cleaned)
    if match:
        return float(match.group(1)) * OUNCE_TO_G
    match = _GRAM_RE.fullmatch(cleaned)
    if match:
        return float(match.group(1))
    return None
