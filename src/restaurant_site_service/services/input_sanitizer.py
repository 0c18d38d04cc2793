"""Coercion of raw request fields into canonical values.

None of these helpers raise: malformed input degrades to an empty or default value and
callers apply their own required-field checks.
"""

import math
from typing import Any

# EU allergen tags (Italian), in canonical output order.
ALLERGENS: tuple[str, ...] = (
    "glutine",
    "crostacei",
    "uova",
    "pesce",
    "arachidi",
    "soia",
    "latte",
    "frutta_a_guscio",
    "sedano",
    "senape",
    "sesamo",
    "solfiti",
    "lupini",
    "molluschi",
    "nichel",
)


def clean_str(value: Any) -> str:
    """Return the trimmed string form of a value, or "" for None."""
    if value is None:
        return ""
    return str(value).strip()


def normalize_allergens(value: Any) -> list[str]:
    """Normalize an allergen list to known tags.

    Args:
        value: Raw allergen input, expected to be a list of strings

    Returns:
        Distinct known tags in canonical vocabulary order (empty list for non-list input)
    """
    if not isinstance(value, list):
        return []

    requested = {clean_str(tag).lower() for tag in value}
    return [tag for tag in ALLERGENS if tag in requested]


def coerce_number(value: Any, default: int | float | None) -> int | float | None:
    """Coerce a JSON value to a number the way browsers' ``Number()`` does.

    Args:
        value: Raw value (number, numeric string, bool, ...)
        default: Returned when the value has no finite numeric reading

    Returns:
        The number (integral values as int) or ``default``
    """
    if isinstance(value, bool):
        return int(value)

    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            number = float(text)
        except ValueError:
            return default
    else:
        return default

    if isinstance(number, float):
        if not math.isfinite(number):
            return default
        if number.is_integer():
            return int(number)
    return number


def coerce_int(value: Any) -> int | None:
    """Coerce a value to an integer, or None when it is not integral."""
    number = coerce_number(value, None)
    if isinstance(number, int):
        return number
    return None


def parse_id(value: str | None) -> int | None:
    """Parse a numeric row id taken from a URL path.

    Returns:
        The id, or None when the path segment is not a plain decimal number
    """
    text = clean_str(value)
    if not text.isascii() or not text.isdigit():
        return None
    return int(text)
