"""FastAPI application for the public website and the admin back office."""

import logging

from fastapi import APIRouter, FastAPI

from restaurant_site_service.auth.admin_token_validator import AdminTokenValidator
from restaurant_site_service.handlers.content_routes import router as content_router
from restaurant_site_service.handlers.error_handling import register_exception_handlers
from restaurant_site_service.handlers.image_routes import router as image_router
from restaurant_site_service.handlers.menu_routes import router as menu_router
from restaurant_site_service.handlers.middleware import AccessLogMiddleware, CorsMiddleware
from restaurant_site_service.handlers.reservation_routes import router as reservation_router
from restaurant_site_service.handlers.strip_routes import router as strip_router
from restaurant_site_service.repositories.image_store import ImageStore
from restaurant_site_service.services.content_service import ContentService
from restaurant_site_service.services.menu_service import MenuService
from restaurant_site_service.services.reservation_service import ReservationService
from restaurant_site_service.services.strip_service import StripService

logger = logging.getLogger(__name__)

# Routers in match priority. Image routes only need the object store; every router
# after them requires a configured database.
ROUTE_TABLE: tuple[APIRouter, ...] = (
    image_router,
    menu_router,
    reservation_router,
    content_router,
    strip_router,
)


def create_app(
    content_service: ContentService | None,
    strip_service: StripService | None,
    menu_service: MenuService | None,
    reservation_service: ReservationService | None,
    image_store: ImageStore | None,
    admin_token: str | None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        content_service: Service for pages, booking settings and gallery (None without a database)
        strip_service: Service for homepage strips (None without a database)
        menu_service: Service for menu items and category order (None without a database)
        reservation_service: Service for reservations (None without a database)
        image_store: Object store for images (None without a bucket)
        admin_token: Admin bearer secret (None or blank rejects every admin request)

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Restaurant Site API",
        description="Menu, reservations and content for the restaurant website and back office",
        version="1.0.0",
    )

    # Store services in app state for access in route handlers
    app.state.content_service = content_service
    app.state.strip_service = strip_service
    app.state.menu_service = menu_service
    app.state.reservation_service = reservation_service
    app.state.image_store = image_store
    app.state.database_configured = all(
        service is not None
        for service in (content_service, strip_service, menu_service, reservation_service)
    )
    app.state.admin_token_validator = AdminTokenValidator(admin_token=admin_token)

    if not app.state.admin_token_validator.configured:
        logger.warning("No ADMIN_TOKEN configured - admin endpoints will reject every request")

    register_exception_handlers(app)

    for router in ROUTE_TABLE:
        app.include_router(router)

    # Added last so it runs first: preflights never reach routing
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(CorsMiddleware)

    return app
