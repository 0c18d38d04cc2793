"""Shared FastAPI dependencies for the route modules."""

import logging
from typing import Any

from fastapi import Request

from restaurant_site_service.exceptions import ConfigError
from restaurant_site_service.repositories.image_store import ImageStore
from restaurant_site_service.services.content_service import ContentService
from restaurant_site_service.services.menu_service import MenuService
from restaurant_site_service.services.reservation_service import ReservationService
from restaurant_site_service.services.strip_service import StripService

logger = logging.getLogger(__name__)


def require_database(request: Request) -> None:
    """Reject database-backed routes when no database is configured."""
    if not request.app.state.database_configured:
        raise ConfigError("DATABASE_URL missing")


def require_image_store(request: Request) -> ImageStore:
    store: ImageStore | None = request.app.state.image_store
    if store is None:
        raise ConfigError("Bucket binding missing")
    return store


async def read_json_body(request: Request) -> Any:
    """Parse the request body as JSON.

    Returns:
        The parsed value, or None when the body is empty or not valid JSON
    """
    try:
        return await request.json()
    except ValueError:
        logger.debug(f"Ignoring unparsable JSON body on {request.method} {request.url.path}")
        return None


def as_object(value: Any) -> dict[str, Any]:
    """Treat anything that is not a JSON object as an empty one."""
    return value if isinstance(value, dict) else {}


def get_content_service(request: Request) -> ContentService:
    return request.app.state.content_service


def get_strip_service(request: Request) -> StripService:
    return request.app.state.strip_service


def get_menu_service(request: Request) -> MenuService:
    return request.app.state.menu_service


def get_reservation_service(request: Request) -> ReservationService:
    return request.app.state.reservation_service
