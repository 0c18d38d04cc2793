"""Service for the homepage strips (pizzas, starters, desserts, ...)."""

import logging
import re
import time
from typing import Any

from restaurant_site_service.exceptions import ConflictError, NotFoundError, ValidationError
from restaurant_site_service.models.content_models import (
    STRIP_SLUG_PREFIX,
    SitePage,
    StripItem,
    strip_slug,
)
from restaurant_site_service.observability.metrics import record_page_upsert
from restaurant_site_service.repositories.site_repositories import SitePageRepository
from restaurant_site_service.services.input_sanitizer import clean_str, coerce_int

logger = logging.getLogger(__name__)

STRIP_KEY_PATTERN = re.compile(r"^[a-z0-9_-]{2,30}$")


class StripService:
    """Service for strip categories stored as ``strip_<key>`` page documents."""

    def __init__(self, page_repository: SitePageRepository) -> None:
        """Initialize the StripService.

        Args:
            page_repository: Repository for page documents
        """
        self.page_repository = page_repository

    async def list_keys(self) -> list[str]:
        """List strip keys in display order.

        Strips with a numeric ``order`` come first (ascending), the rest follow;
        ties are broken by slug.

        Returns:
            list: Strip keys without the ``strip_`` prefix
        """
        pages = self.page_repository.list_pages_with_prefix(STRIP_SLUG_PREFIX)

        def sort_key(page: SitePage) -> tuple[bool, int, str]:
            order = coerce_int(page.data.get("order"))
            return (order is None, order or 0, page.slug)

        keys = [page.slug.removeprefix(STRIP_SLUG_PREFIX) for page in sorted(pages, key=sort_key)]
        return [key for key in keys if key]

    async def get_strip(self, key: str) -> dict[str, Any] | None:
        page = self.page_repository.get_page(strip_slug(key))
        return page.data if page else None

    async def update_strip(self, key: str, body: dict[str, Any]) -> SitePage:
        """Shallow-merge new values into a strip document (created if missing)."""
        page = self.page_repository.merge_data(strip_slug(key), body)
        record_page_upsert("strip")
        return page

    async def delete_strip(self, key: str) -> str:
        """Delete a strip category.

        Returns:
            str: The deleted slug

        Raises:
            NotFoundError: If the strip does not exist
        """
        slug = strip_slug(key)
        if not self.page_repository.delete_page(slug):
            raise NotFoundError("Strip category not found")
        logger.info(f"Strip {slug} deleted")
        return slug

    async def create_strip(self, body: dict[str, Any]) -> SitePage:
        """Create an empty strip category.

        Args:
            body: ``{key, title}``; the key is lower-cased, the title defaults to the key

        Returns:
            SitePage: The new strip document ``{title, items: []}``

        Raises:
            ValidationError: If the key is missing or has invalid characters
            ConflictError: If the strip already exists
        """
        key = clean_str(body.get("key")).lower()
        title = clean_str(body.get("title"))

        if not key:
            raise ValidationError("key required")
        if not STRIP_KEY_PATTERN.match(key):
            raise ValidationError("key invalid (use only a-z 0-9 _ -)")

        document = {"title": title or key, "items": []}
        page = self.page_repository.create_page(strip_slug(key), document)
        if page is None:
            raise ConflictError("Strip category already exists")

        record_page_upsert("strip")
        logger.info(f"Strip {page.slug} created")
        return page

    async def add_item(self, body: dict[str, Any]) -> StripItem:
        """Append an image + name item to a strip.

        Items are never edited in place; the strip document is created if missing.

        Args:
            body: ``{key, name, image_url}``

        Returns:
            StripItem: The appended item

        Raises:
            ValidationError: If key, name or image_url is missing
        """
        key = clean_str(body.get("key")).lower()
        name = clean_str(body.get("name"))
        image_url = clean_str(body.get("image_url"))

        if not key:
            raise ValidationError("key required")
        if not name:
            raise ValidationError("name required")
        if not image_url:
            raise ValidationError("image_url required")

        slug = strip_slug(key)
        page = self.page_repository.get_page(slug)
        current = page.data if page else {}
        items = current.get("items") if isinstance(current.get("items"), list) else []

        item = StripItem(id=int(time.time() * 1000), name=name, image_url=image_url)
        self.page_repository.replace_data(slug, {**current, "items": [*items, item.model_dump()]})
        record_page_upsert("strip")
        return item
