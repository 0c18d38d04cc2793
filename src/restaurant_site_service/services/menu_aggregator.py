"""Ordering of the public menu listing."""

import unicodedata
from collections.abc import Iterable
from typing import Any

from restaurant_site_service.models.menu_models import UNRANKED_CATEGORY, MenuItem
from restaurant_site_service.services.input_sanitizer import clean_str, coerce_number


def build_category_rank(categories: Iterable[Any]) -> dict[str, int | float]:
    """Map category names to their admin-configured rank.

    Args:
        categories: Raw ``{name, order}`` entries from the category order document

    Returns:
        dict: Trimmed category name -> rank (non-numeric ranks become UNRANKED_CATEGORY)
    """
    ranks: dict[str, int | float] = {}
    for entry in categories:
        if not isinstance(entry, dict):
            continue
        name = clean_str(entry.get("name"))
        if not name:
            continue
        order = coerce_number(entry.get("order"), UNRANKED_CATEGORY)
        ranks[name] = UNRANKED_CATEGORY if order is None else order
    return ranks


def collation_key(text: str | None) -> tuple[str, str]:
    """Accent- and case-insensitive sort key, close to Italian dictionary order."""
    value = text or ""
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return base, value


def sort_menu_items(items: Iterable[MenuItem], categories: Iterable[Any]) -> list[MenuItem]:
    """Sort menu items for the public listing.

    Items are ordered by category rank (unranked categories last), then position,
    then id; the name comparison only breaks ties between equal ids.

    Args:
        items: Available menu items
        categories: Raw category order entries

    Returns:
        list: A new, sorted list
    """
    ranks = build_category_rank(categories)

    def sort_key(item: MenuItem) -> tuple[Any, ...]:
        category = clean_str(item.category)
        return (
            ranks.get(category, UNRANKED_CATEGORY),
            item.position or 0,
            item.id,
            collation_key(item.name),
        )

    return sorted(items, key=sort_key)
