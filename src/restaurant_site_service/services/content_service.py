"""Service for page documents, booking settings and the photo gallery."""

import logging
from typing import Any

from restaurant_site_service.exceptions import ValidationError
from restaurant_site_service.models.content_models import (
    BOOKING_SLUG,
    GALLERY_SLUG,
    BookingSettings,
    SitePage,
)
from restaurant_site_service.observability.metrics import record_page_upsert, record_translation
from restaurant_site_service.repositories.site_repositories import SitePageRepository
from restaurant_site_service.services.auto_translate import AutoTranslator
from restaurant_site_service.services.input_sanitizer import clean_str

logger = logging.getLogger(__name__)


class ContentService:
    """Service for admin-editable site content.

    Page writes from the back office are enriched with English translations before
    being shallow-merged into the stored document.
    """

    def __init__(
        self, page_repository: SitePageRepository, auto_translator: AutoTranslator
    ) -> None:
        """Initialize the ContentService.

        Args:
            page_repository: Repository for page documents
            auto_translator: English enrichment step for page writes
        """
        self.page_repository = page_repository
        self.auto_translator = auto_translator

    async def check_database(self) -> bool:
        """Return whether the relational store answers queries."""
        return self.page_repository.ping()

    async def get_page(self, slug: str) -> SitePage:
        """Get a page document, or an empty one when the slug was never written.

        Args:
            slug: Page key

        Returns:
            SitePage (``data={}`` and ``updated_at=None`` when missing)
        """
        page = self.page_repository.get_page(slug)
        if page is None:
            return SitePage(slug=slug, data={}, updated_at=None)
        return page

    async def upsert_page(self, slug: str, body: dict[str, Any]) -> SitePage:
        """Store admin-edited page content.

        The document is first enriched with ``_en`` fields. If the translation step
        fails the original body is stored as is, so an unavailable translation
        service never blocks an edit.

        Args:
            slug: Page key
            body: Top-level keys to merge into the page

        Returns:
            SitePage: The stored page after the merge
        """
        document = body
        if self.auto_translator.applies_to(slug):
            result = await self.auto_translator.enrich(body)
            record_translation(result.success, result.translated_fields)
            if result.success:
                document = result.document
            else:
                logger.warning(f"Storing page {slug} untranslated: {result.error_message}")

        page = self.page_repository.merge_data(slug, document)
        record_page_upsert("page")
        logger.info(f"Page {slug} updated")
        return page

    async def get_booking_settings(self) -> BookingSettings:
        page = self.page_repository.get_page(BOOKING_SLUG)
        return BookingSettings.from_document(page.data if page else {})

    async def update_booking_settings(self, body: dict[str, Any]) -> BookingSettings:
        """Replace the booking settings.

        Args:
            body: ``{enabled, whatsapp}``; ``enabled`` is read for truthiness

        Returns:
            BookingSettings: The stored settings
        """
        settings = BookingSettings(
            enabled=bool(body.get("enabled")),
            whatsapp=clean_str(body.get("whatsapp")),
        )
        self.page_repository.replace_data(BOOKING_SLUG, settings.model_dump())
        record_page_upsert("booking")
        return settings

    async def get_gallery_images(self) -> list[str]:
        page = self.page_repository.get_page(GALLERY_SLUG)
        if page is None or not isinstance(page.data.get("images"), list):
            return []
        return page.data["images"]

    async def replace_gallery(self, body: dict[str, Any]) -> int:
        """Replace the whole gallery with a new list of image URLs.

        Args:
            body: ``{images: [url, ...]}``

        Returns:
            int: Number of images stored

        Raises:
            ValidationError: If no non-blank image URL is given
        """
        raw_images = body.get("images")
        images = [clean_str(url) for url in raw_images] if isinstance(raw_images, list) else []
        images = [url for url in images if url]

        if not images:
            raise ValidationError("images array required")

        self.page_repository.replace_data(GALLERY_SLUG, {"images": images})
        record_page_upsert("gallery")
        logger.info(f"Gallery replaced with {len(images)} images")
        return len(images)
