"""Menu data models.

These models represent menu items and the admin-configured category order as they
are returned to the website.
"""

from typing import Any

from pydantic import BaseModel, Field

from restaurant_site_service.models.db_models import MenuItemModel

# Rank given to categories that are missing from the category order
UNRANKED_CATEGORY = 9999


class MenuItem(BaseModel):
    """Menu item with Italian and English fields."""

    id: int = Field(..., description="Unique identifier for the menu item")
    name: str = Field(..., description="Item name (Italian)")
    description: str | None = Field("", description="Item description (Italian)")
    price_cents: int = Field(..., description="Item price in cents")
    category: str | None = Field("", description="Category name (Italian)")
    image_url: str | None = Field("", description="URL to item image")
    position: int = Field(default=0, description="Tie-break order inside the category")
    is_available: bool = Field(default=True, description="Whether the item is listed publicly")
    name_en: str | None = Field("", description="Item name (English)")
    description_en: str | None = Field("", description="Item description (English)")
    category_en: str | None = Field("", description="Category name (English)")
    allergens: list[str] = Field(default_factory=list, description="Allergen tags")

    @classmethod
    def from_model(cls, row: MenuItemModel) -> "MenuItem":
        """Create a MenuItem from its database row.

        Args:
            row: Mapped ``menu_items`` row

        Returns:
            MenuItem: Parsed model instance
        """
        return cls(
            id=row.id,
            name=row.name,
            description=row.description,
            price_cents=row.price_cents,
            category=row.category,
            image_url=row.image_url,
            position=row.position,
            is_available=row.is_available,
            name_en=row.name_en,
            description_en=row.description_en,
            category_en=row.category_en,
            allergens=list(row.allergens or []),
        )


class CategoryOrderEntry(BaseModel):
    """One entry of the menu category order document."""

    name: str = Field(..., description="Category name as stored on menu items")
    order: int | float = Field(default=0, description="Rank, lower sorts first")

    def to_document(self) -> dict[str, Any]:
        return {"name": self.name, "order": self.order}
