"""SQLAlchemy repository classes for site content.

These repositories provide keyed reads and upserts of page documents, menu items and
reservations. Expected misses return None/False; database failures are not swallowed
here and surface as ``SQLAlchemyError`` to the request that triggered them.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from restaurant_site_service.models.content_models import SitePage
from restaurant_site_service.models.db_models import (
    MenuItemModel,
    ReservationModel,
    SitePageModel,
)
from restaurant_site_service.models.menu_models import MenuItem
from restaurant_site_service.models.reservation_models import Reservation, ReservationStatus
from restaurant_site_service.repositories.database import ping_database

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def merge_documents(current: dict[str, Any] | None, incoming: dict[str, Any]) -> dict[str, Any]:
    """Shallow-merge two page documents.

    Top-level keys of ``incoming`` replace the stored ones (nested objects included);
    keys that ``incoming`` does not mention survive.

    Args:
        current: Stored document, or None when the page does not exist yet
        incoming: New values

    Returns:
        dict: The merged document
    """
    merged = dict(current) if isinstance(current, dict) else {}
    merged.update(incoming)
    return merged


class SitePageRepository:
    """Repository for page documents stored in ``site_pages``."""

    def __init__(self, engine: Engine) -> None:
        """Initialize repository.

        Args:
            engine: SQLAlchemy engine bound to the site database
        """
        self.engine = engine

    def ping(self) -> bool:
        """Check that the database answers queries."""
        return ping_database(self.engine)

    def get_page(self, slug: str) -> SitePage | None:
        """Retrieve a page document.

        Args:
            slug: Page key

        Returns:
            SitePage if found, None otherwise
        """
        with Session(self.engine) as session:
            row = session.get(SitePageModel, slug)
            if row is None:
                return None
            return SitePage.from_model(row)

    def list_pages_with_prefix(self, prefix: str) -> list[SitePage]:
        """List all pages whose slug starts with ``prefix``.

        Args:
            prefix: Literal slug prefix (LIKE wildcards are escaped)

        Returns:
            list: Pages ordered by slug (empty list if none found)
        """
        statement = (
            select(SitePageModel)
            .where(SitePageModel.slug.startswith(prefix, autoescape=True))
            .order_by(SitePageModel.slug)
        )
        with Session(self.engine) as session:
            return [SitePage.from_model(row) for row in session.scalars(statement)]

    def replace_data(self, slug: str, data: dict[str, Any]) -> SitePage:
        """Insert or fully replace a page document.

        Args:
            slug: Page key
            data: New document

        Returns:
            SitePage: The stored page
        """
        with Session(self.engine) as session:
            row = session.get(SitePageModel, slug)
            if row is None:
                row = SitePageModel(slug=slug, data=data, updated_at=_utcnow())
                session.add(row)
            else:
                row.data = data
                row.updated_at = _utcnow()
            session.commit()
            return SitePage.from_model(row)

    def merge_data(self, slug: str, data: dict[str, Any]) -> SitePage:
        """Insert a page document or shallow-merge it into the stored one.

        Read, merge and write happen in one session; concurrent writers to the same
        slug are last-write-wins.

        Args:
            slug: Page key
            data: Top-level keys to set

        Returns:
            SitePage: The stored page after the merge
        """
        with Session(self.engine) as session:
            row = session.get(SitePageModel, slug)
            if row is None:
                document = merge_documents(None, data)
                row = SitePageModel(slug=slug, data=document, updated_at=_utcnow())
                session.add(row)
            else:
                row.data = merge_documents(row.data, data)
                row.updated_at = _utcnow()
            session.commit()
            return SitePage.from_model(row)

    def create_page(self, slug: str, data: dict[str, Any]) -> SitePage | None:
        """Insert a page document only if the slug is free.

        Returns:
            SitePage if created, None if the slug already exists
        """
        with Session(self.engine) as session:
            if session.get(SitePageModel, slug) is not None:
                return None
            row = SitePageModel(slug=slug, data=data, updated_at=_utcnow())
            session.add(row)
            session.commit()
            return SitePage.from_model(row)

    def delete_page(self, slug: str) -> bool:
        """Delete a page document.

        Returns:
            bool: True if a page was deleted, False if it did not exist
        """
        with Session(self.engine) as session:
            row = session.get(SitePageModel, slug)
            if row is None:
                return False
            session.delete(row)
            session.commit()
            return True


class MenuItemRepository:
    """Repository for menu item CRUD operations on ``menu_items``."""

    def __init__(self, engine: Engine) -> None:
        """Initialize repository.

        Args:
            engine: SQLAlchemy engine bound to the site database
        """
        self.engine = engine

    def list_available(self) -> list[MenuItem]:
        """List items that are shown on the public menu (unsorted)."""
        statement = select(MenuItemModel).where(MenuItemModel.is_available.is_(True))
        with Session(self.engine) as session:
            return [MenuItem.from_model(row) for row in session.scalars(statement)]

    def get_item(self, item_id: int) -> MenuItem | None:
        with Session(self.engine) as session:
            row = session.get(MenuItemModel, item_id)
            return MenuItem.from_model(row) if row is not None else None

    def create_item(self, fields: dict[str, Any]) -> MenuItem:
        """Insert a menu item.

        Args:
            fields: Column values (already sanitized)

        Returns:
            MenuItem: The stored item with its generated id
        """
        with Session(self.engine) as session:
            row = MenuItemModel(**fields)
            session.add(row)
            session.commit()
            return MenuItem.from_model(row)

    def update_item(self, item_id: int, changes: dict[str, Any]) -> MenuItem | None:
        """Overwrite the given columns of a menu item.

        Args:
            item_id: Item identifier
            changes: Column values to set; columns not listed keep their value

        Returns:
            MenuItem after the update, None if the item does not exist
        """
        with Session(self.engine) as session:
            row = session.get(MenuItemModel, item_id)
            if row is None:
                return None
            for column, value in changes.items():
                setattr(row, column, value)
            session.commit()
            return MenuItem.from_model(row)

    def delete_item(self, item_id: int) -> bool:
        """Delete a menu item.

        Returns:
            bool: True if an item was deleted, False if it did not exist
        """
        with Session(self.engine) as session:
            row = session.get(MenuItemModel, item_id)
            if row is None:
                return False
            session.delete(row)
            session.commit()
            return True


class ReservationRepository:
    """Repository for reservations stored in ``reservations``."""

    def __init__(self, engine: Engine) -> None:
        """Initialize repository.

        Args:
            engine: SQLAlchemy engine bound to the site database
        """
        self.engine = engine

    def create_reservation(
        self,
        full_name: str,
        phone: str,
        people: int,
        reserved_at: datetime,
        notes: str | None,
    ) -> Reservation:
        """Insert a new reservation with status ``new``.

        Returns:
            Reservation: The stored reservation
        """
        with Session(self.engine) as session:
            row = ReservationModel(
                full_name=full_name,
                phone=phone,
                people=people,
                reserved_at=reserved_at,
                notes=notes,
                status=ReservationStatus.NEW.value,
                created_at=_utcnow(),
            )
            session.add(row)
            session.commit()
            return Reservation.from_model(row)

    def list_recent(self, limit: int) -> list[Reservation]:
        """List the most recently submitted reservations.

        Args:
            limit: Maximum number of reservations to return

        Returns:
            list: Reservations, newest first
        """
        statement = (
            select(ReservationModel)
            .order_by(ReservationModel.created_at.desc(), ReservationModel.id.desc())
            .limit(limit)
        )
        with Session(self.engine) as session:
            return [Reservation.from_model(row) for row in session.scalars(statement)]

    def update_status(self, reservation_id: int, status: ReservationStatus) -> Reservation | None:
        """Set the status of a reservation.

        Returns:
            Reservation after the update, None if it does not exist
        """
        with Session(self.engine) as session:
            row = session.get(ReservationModel, reservation_id)
            if row is None:
                return None
            row.status = status.value
            session.commit()
            return Reservation.from_model(row)
