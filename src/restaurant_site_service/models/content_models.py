"""Page document models.

Site content lives in keyed JSON documents ("pages"). Strips, booking settings, the
gallery and the menu category order are page documents under well-known slugs.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from restaurant_site_service.models.db_models import SitePageModel

MENU_CATEGORIES_SLUG = "menu_categories"
BOOKING_SLUG = "booking"
GALLERY_SLUG = "gallery"
STRIP_SLUG_PREFIX = "strip_"


def strip_slug(key: str) -> str:
    """Return the page slug that stores the strip category ``key``."""
    return f"{STRIP_SLUG_PREFIX}{key}"


class SitePage(BaseModel):
    """A keyed JSON document."""

    slug: str = Field(..., description="Page key")
    data: dict[str, Any] = Field(default_factory=dict, description="Page document")
    updated_at: datetime | None = Field(None, description="Timestamp of the last write")

    @classmethod
    def from_model(cls, row: SitePageModel) -> "SitePage":
        """Create a SitePage from its database row.

        Args:
            row: Mapped ``site_pages`` row

        Returns:
            SitePage: Parsed model instance
        """
        data = row.data if isinstance(row.data, dict) else {}
        return cls(slug=row.slug, data=data, updated_at=row.updated_at)


class StripItem(BaseModel):
    """An image + name entry of a homepage strip."""

    id: int = Field(..., description="Creation timestamp in milliseconds")
    name: str = Field(..., description="Dish name")
    image_url: str = Field(..., description="Public image URL")


class BookingSettings(BaseModel):
    """Online booking toggle and WhatsApp contact."""

    enabled: bool = Field(default=True, description="Whether the booking form is shown")
    whatsapp: str = Field(default="", description="WhatsApp number for bookings")

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "BookingSettings":
        """Read settings from the stored document; booking is on unless explicitly disabled."""
        return cls(enabled=data.get("enabled") is not False, whatsapp=data.get("whatsapp") or "")
