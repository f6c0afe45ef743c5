"""Pack size parsing and normalization."""

import re

from .models import ParsedSize, UnitCategory

# unit -> (factor to base unit, base unit, category)
UNIT_CONVERSIONS: dict[str, tuple[float, str, UnitCategory]] = {
    "pt": (568, "ml", UnitCategory.VOLUME),
    "pint": (568, "ml", UnitCategory.VOLUME),
    "pints": (568, "ml", UnitCategory.VOLUME),
    "l": (1000, "ml", UnitCategory.VOLUME),
    "litre": (1000, "ml", UnitCategory.VOLUME),
    "liter": (1000, "ml", UnitCategory.VOLUME),
    "litres": (1000, "ml", UnitCategory.VOLUME),
    "liters": (1000, "ml", UnitCategory.VOLUME),
    "ml": (1, "ml", UnitCategory.VOLUME),
    "millilitre": (1, "ml", UnitCategory.VOLUME),
    "milliliter": (1, "ml", UnitCategory.VOLUME),
    "millilitres": (1, "ml", UnitCategory.VOLUME),
    "milliliters": (1, "ml", UnitCategory.VOLUME),
    "cl": (10, "ml", UnitCategory.VOLUME),
    "centilitre": (10, "ml", UnitCategory.VOLUME),
    "centiliter": (10, "ml", UnitCategory.VOLUME),
    "kg": (1000, "g", UnitCategory.WEIGHT),
    "kilogram": (1000, "g", UnitCategory.WEIGHT),
    "kilograms": (1000, "g", UnitCategory.WEIGHT),
    "kilo": (1000, "g", UnitCategory.WEIGHT),
    "kilos": (1000, "g", UnitCategory.WEIGHT),
    "g": (1, "g", UnitCategory.WEIGHT),
    "gram": (1, "g", UnitCategory.WEIGHT),
    "grams": (1, "g", UnitCategory.WEIGHT),
    "oz": (28.35, "g", UnitCategory.WEIGHT),
    "ounce": (28.35, "g", UnitCategory.WEIGHT),
    "ounces": (28.35, "g", UnitCategory.WEIGHT),
    "lb": (453.6, "g", UnitCategory.WEIGHT),
    "lbs": (453.6, "g", UnitCategory.WEIGHT),
    "pound": (453.6, "g", UnitCategory.WEIGHT),
    "pounds": (453.6, "g", UnitCategory.WEIGHT),
    "pk": (1, "pk", UnitCategory.COUNT),
    "pack": (1, "pk", UnitCategory.COUNT),
    "packs": (1, "pk", UnitCategory.COUNT),
    "each": (1, "each", UnitCategory.COUNT),
    "ea": (1, "each", UnitCategory.COUNT),
    "pcs": (1, "each", UnitCategory.COUNT),
    "pieces": (1, "each", UnitCategory.COUNT),
    "x": (1, "pk", UnitCategory.COUNT),
}

UNIT_DISPLAY = {
    "ml": "ml",
    "l": "L",
    "pt": "pt",
    "g": "g",
    "kg": "kg",
    "pk": "pk",
    "each": "each",
}

PRICE_PER_UNIT_DISPLAY = {
    UnitCategory.VOLUME: "/100ml",
    UnitCategory.WEIGHT: "/100g",
    UnitCategory.COUNT: "/each",
}

PINT_ML = 568
# UK milk comes in 1pt to 6pt bottles.
MAX_PINT_DISPLAY_ML = 6 * PINT_ML

_SIMPLE_SIZE = re.compile(r"^(\d+(?:\.\d+)?)[-x]?([a-z]+)$")
_MULTIPACK_SIZE = re.compile(r"^(\d+)x(\d+(?:\.\d+)?)([a-z]+)$")


def _format_number(value: float) -> str:
    if value == int(value):
        return str(int(value))
    return f"{value:.1f}".removesuffix(".0")


def _display_for(normalized_value: float, category: UnitCategory, base_unit: str) -> str:
    if category == UnitCategory.VOLUME:
        if normalized_value % PINT_ML == 0 and PINT_ML <= normalized_value <= MAX_PINT_DISPLAY_ML:
            unit, value = "pt", normalized_value / PINT_ML
        elif normalized_value >= 1000:
            unit, value = "l", normalized_value / 1000
        else:
            unit, value = "ml", normalized_value
    elif category == UnitCategory.WEIGHT:
        if normalized_value >= 1000:
            unit, value = "kg", normalized_value / 1000
        else:
            unit, value = "g", normalized_value
    else:
        unit, value = base_unit, normalized_value

    return f"{_format_number(value)}{UNIT_DISPLAY[unit]}"


def parse_size(size: str | None) -> ParsedSize | None:
    """Parse a size string such as "2 pints", "500ml" or "6 x 330ml".

    Returns None when the text is not a recognised quantity and unit.
    """
    if not size or not isinstance(size, str):
        return None

    original = size.strip()
    cleaned = re.sub(r"\s+", "", original.lower())

    match = _SIMPLE_SIZE.match(cleaned)
    if match:
        value = float(match.group(1))
        conversion = UNIT_CONVERSIONS.get(match.group(2))
        if conversion is None:
            return None
        factor, base_unit, category = conversion
        normalized_value = value * factor
        return ParsedSize(
            value=value,
            unit=base_unit,
            category=category,
            normalized_value=normalized_value,
            display=_display_for(normalized_value, category, base_unit),
            original=original,
        )

    multipack = _MULTIPACK_SIZE.match(cleaned)
    if multipack:
        count = float(multipack.group(1))
        each = float(multipack.group(2))
        conversion = UNIT_CONVERSIONS.get(multipack.group(3))
        if conversion is None:
            return None
        factor, base_unit, category = conversion
        total = count * each
        return ParsedSize(
            value=total,
            unit=base_unit,
            category=category,
            normalized_value=total * factor,
            display=f"{_format_number(count)}x{_format_number(each)}{UNIT_DISPLAY[base_unit]}",
            original=original,
        )

    return None


def normalize_size(size: str) -> str:
    """Normalize a size to its display form, or return it unchanged."""
    parsed = parse_size(size)
    return parsed.display if parsed else size


def normalize_size_for_dedup(size: str | None) -> str:
    """Build a comparison token for a pack size.

    Equivalent sizes in different units share a token ("1 litre" and
    "1000ml" both give "1000:volume"). Unparseable text falls back to its
    lowercase form with whitespace removed.
    """
    if not size or not size.strip():
        return ""

    parsed = parse_size(size)
    if parsed is None:
        return re.sub(r"\s+", "", size.lower())
    base_value = round(parsed.normalized_value, 2)
    token = str(int(base_value)) if base_value == int(base_value) else str(base_value)
    return f"{token}:{parsed.category.value}"


def calculate_price_per_unit(price: float, size: str) -> float | None:
    """Price per 100ml/100g, or per item for count sizes."""
    parsed = parse_size(size)
    if parsed is None:
        return None

    if parsed.category == UnitCategory.COUNT:
        if parsed.value == 0:
            return None
        return price / parsed.value

    if parsed.normalized_value == 0:
        return None
    return price / parsed.normalized_value * 100


def format_price_per_unit(price_per_unit: float, category: UnitCategory, currency: str = "£") -> str:
    """Format a unit price, e.g. "£0.73/100ml"."""
    if price_per_unit < 0.01:
        formatted = f"{price_per_unit:.3f}"
    else:
        formatted = f"{price_per_unit:.2f}"
    return f"{currency}{formatted}{PRICE_PER_UNIT_DISPLAY[category]}"
