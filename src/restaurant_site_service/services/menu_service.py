"""Service for the restaurant menu: items, category order and public listing."""

import logging
import math
from collections.abc import Callable
from typing import Any

from restaurant_site_service.exceptions import NotFoundError, ValidationError
from restaurant_site_service.models.content_models import MENU_CATEGORIES_SLUG
from restaurant_site_service.models.menu_models import CategoryOrderEntry, MenuItem
from restaurant_site_service.observability.metrics import record_page_upsert
from restaurant_site_service.repositories.site_repositories import (
    MenuItemRepository,
    SitePageRepository,
)
from restaurant_site_service.services.input_sanitizer import (
    clean_str,
    coerce_number,
    normalize_allergens,
    parse_id,
)
from restaurant_site_service.services.menu_aggregator import sort_menu_items

logger = logging.getLogger(__name__)

TEXT_COLUMNS = ("name", "description", "category", "name_en", "description_en", "category_en")


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _as_int(value: Any, default: int) -> int:
    number = coerce_number(value, default)
    return default if number is None else int(number)


# Boolean spellings PostgreSQL accepts for a text-to-boolean cast
TRUE_STRINGS = frozenset({"t", "true", "y", "yes", "on", "1"})
FALSE_STRINGS = frozenset({"f", "false", "n", "no", "off", "0"})


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    return bool(value)


def _as_price(value: Any) -> int:
    if not _is_number(value):
        raise ValidationError("price_cents must be a number")
    return int(round(value))


def normalize_categories(raw: Any) -> list[CategoryOrderEntry]:
    """Clean a raw category order list.

    Entries without a name are dropped and non-numeric orders become 0.

    Args:
        raw: Client-provided ``categories`` value

    Returns:
        list: Clean entries in input order
    """
    if not isinstance(raw, list):
        return []

    entries = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        name = clean_str(entry.get("name"))
        if name:
            order = coerce_number(entry.get("order"), 0)
            entries.append(CategoryOrderEntry(name=name, order=order))
    return entries


# Column -> converter applied when a non-null value is sent on update
_UPDATE_CONVERTERS: dict[str, Callable[[Any], Any]] = {
    **{column: clean_str for column in TEXT_COLUMNS},
    "price_cents": _as_price,
    "position": lambda value: _as_int(value, 0),
    "is_available": _as_bool,
}


class MenuService:
    """Service for menu items and their public ordering.

    The category order is a page document; the public listing joins it with the
    available menu items.
    """

    def __init__(
        self,
        menu_repository: MenuItemRepository,
        page_repository: SitePageRepository,
    ) -> None:
        """Initialize the MenuService.

        Args:
            menu_repository: Repository for menu items
            page_repository: Repository for page documents (category order)
        """
        self.menu_repository = menu_repository
        self.page_repository = page_repository

    async def get_category_order(self) -> list[CategoryOrderEntry]:
        page = self.page_repository.get_page(MENU_CATEGORIES_SLUG)
        return normalize_categories(page.data.get("categories") if page else None)

    async def replace_category_order(self, body: dict[str, Any]) -> list[CategoryOrderEntry]:
        """Replace the category order document.

        Args:
            body: ``{categories: [{name, order}, ...]}``

        Returns:
            list: The stored entries
        """
        categories = normalize_categories(body.get("categories"))
        self.page_repository.replace_data(
            MENU_CATEGORIES_SLUG,
            {"categories": [entry.to_document() for entry in categories]},
        )
        record_page_upsert("menu_categories")
        logger.info(f"Menu category order replaced ({len(categories)} categories)")
        return categories

    async def list_public_menu(self) -> list[MenuItem]:
        """List available items ordered by category rank, position and id."""
        items = self.menu_repository.list_available()
        page = self.page_repository.get_page(MENU_CATEGORIES_SLUG)
        raw_categories = page.data.get("categories") if page else None
        return sort_menu_items(items, raw_categories if isinstance(raw_categories, list) else [])

    async def create_item(self, body: dict[str, Any]) -> MenuItem:
        """Create a menu item.

        Args:
            body: Item fields; ``name`` and a numeric ``price_cents`` are required

        Returns:
            MenuItem: The stored item

        Raises:
            ValidationError: If name or price_cents is missing
        """
        name = clean_str(body.get("name"))
        price_cents = body.get("price_cents")
        if not name or not _is_number(price_cents):
            raise ValidationError("name and price_cents required")

        is_available = body.get("is_available")
        fields: dict[str, Any] = {
            column: clean_str(body.get(column)) for column in TEXT_COLUMNS
        }
        fields.update(
            name=name,
            price_cents=_as_price(price_cents),
            position=_as_int(body.get("position"), 0),
            is_available=True if is_available is None else _as_bool(is_available),
            allergens=normalize_allergens(body.get("allergens")),
            image_url=clean_str(body.get("image_url")),
        )

        item = self.menu_repository.create_item(fields)
        logger.info(f"Menu item {item.id} created")
        return item

    async def update_item(self, raw_id: str, body: dict[str, Any]) -> MenuItem:
        """Update a menu item, keeping every column the body does not set.

        Fields sent as null or left out keep their value, except ``image_url``
        (set whenever the key is present, null included) and ``allergens``
        (normalized and set whenever the key is present).

        Args:
            raw_id: Item id taken from the URL
            body: Fields to change

        Returns:
            MenuItem: The item after the update

        Raises:
            NotFoundError: If the item does not exist
        """
        item_id = parse_id(raw_id)
        if item_id is None:
            raise NotFoundError()

        changes: dict[str, Any] = {}
        for column, convert in _UPDATE_CONVERTERS.items():
            value = body.get(column)
            if value is not None:
                changes[column] = convert(value)

        if "image_url" in body:
            image_url = body["image_url"]
            changes["image_url"] = None if image_url is None else clean_str(image_url)

        if "allergens" in body:
            changes["allergens"] = normalize_allergens(body["allergens"])

        item = self.menu_repository.update_item(item_id, changes)
        if item is None:
            raise NotFoundError()
        return item

    async def delete_item(self, raw_id: str) -> None:
        """Delete a menu item.

        Raises:
            NotFoundError: If the item does not exist
        """
        item_id = parse_id(raw_id)
        if item_id is None or not self.menu_repository.delete_item(item_id):
            raise NotFoundError()
        logger.info(f"Menu item {item_id} deleted")
