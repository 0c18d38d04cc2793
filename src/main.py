"""Main application entry point for the restaurant site API.

This module provides the FastAPI application factory and configuration
for running the service locally or in production.
"""

import logging
import os
from typing import Any

import boto3
from fastapi import FastAPI

from restaurant_site_service.handlers.api_handler import create_app
from restaurant_site_service.observability import configure_logging, setup_observability
from restaurant_site_service.repositories.database import create_database_engine, create_schema
from restaurant_site_service.repositories.image_store import ImageStore
from restaurant_site_service.repositories.site_repositories import (
    MenuItemRepository,
    ReservationRepository,
    SitePageRepository,
)
from restaurant_site_service.services.auto_translate import AutoTranslator
from restaurant_site_service.services.content_service import ContentService
from restaurant_site_service.services.menu_service import MenuService
from restaurant_site_service.services.reservation_service import ReservationService
from restaurant_site_service.services.strip_service import StripService
from restaurant_site_service.services.translation_client import (
    DEFAULT_TRANSLATION_MODEL,
    TranslationClient,
)

logger = logging.getLogger(__name__)


def get_s3_client() -> Any:
    """Create S3 client with appropriate configuration.

    Returns:
        Boto3 S3 client for AWS S3, or for an S3-compatible endpoint such as R2
    """
    endpoint_url = os.getenv("S3_ENDPOINT_URL")
    region = os.getenv("AWS_REGION", "us-east-1")

    if endpoint_url:
        # S3-compatible store - credentials come from the environment
        logger.info(f"Using S3-compatible object store at {endpoint_url}")
        return boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        )

    logger.info(f"Using AWS S3 in region {region}")
    # Production - boto3 will use default credential chain (IAM role, env vars, etc.)
    return boto3.client("s3", region_name=region)


def create_image_store() -> ImageStore | None:
    """Create the image store from environment variables.

    Returns:
        ImageStore, or None when IMAGE_BUCKET_NAME is not set
    """
    bucket_name = os.getenv("IMAGE_BUCKET_NAME")
    if not bucket_name:
        logger.warning("IMAGE_BUCKET_NAME not set - image routes will return 500")
        return None

    logger.info(f"Image store configured - bucket: {bucket_name}")
    return ImageStore(s3_client=get_s3_client(), bucket_name=bucket_name)


def create_translation_client() -> TranslationClient | None:
    """Create the translation client from environment variables.

    Returns:
        TranslationClient, or None when Cloudflare credentials are not set
    """
    account_id = os.getenv("CLOUDFLARE_ACCOUNT_ID")
    api_token = os.getenv("CLOUDFLARE_API_TOKEN")

    if not account_id or not api_token:
        logger.warning("Translation service not configured - pages will be stored untranslated")
        return None

    model = os.getenv("TRANSLATION_MODEL", DEFAULT_TRANSLATION_MODEL)
    logger.info(f"Translation client configured - model: {model}")
    return TranslationClient(account_id=account_id, api_token=api_token, model=model)


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Creates the database engine and repositories (when DATABASE_URL is set)
    3. Creates the object store and translation clients
    4. Creates services
    5. Creates FastAPI app with public and admin routes
    6. Sets up observability

    Returns:
        Configured FastAPI application instance
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Initializing restaurant site API...")

    translation_client = create_translation_client()
    auto_translator = AutoTranslator(translation_client=translation_client)

    engine = None
    content_service = strip_service = menu_service = reservation_service = None

    database_url = os.getenv("DATABASE_URL")
    if database_url:
        engine = create_database_engine(database_url)
        if os.getenv("CREATE_SCHEMA", "false").lower() == "true":
            create_schema(engine)

        page_repository = SitePageRepository(engine=engine)
        menu_repository = MenuItemRepository(engine=engine)
        reservation_repository = ReservationRepository(engine=engine)

        content_service = ContentService(
            page_repository=page_repository, auto_translator=auto_translator
        )
        strip_service = StripService(page_repository=page_repository)
        menu_service = MenuService(
            menu_repository=menu_repository, page_repository=page_repository
        )
        reservation_service = ReservationService(reservation_repository=reservation_repository)
        logger.info("Database services initialized")
    else:
        logger.warning("DATABASE_URL not set - database routes will return 500")

    app = create_app(
        content_service=content_service,
        strip_service=strip_service,
        menu_service=menu_service,
        reservation_service=reservation_service,
        image_store=create_image_store(),
        admin_token=os.getenv("ADMIN_TOKEN"),
    )

    if os.getenv("ENABLE_OTEL", "true").lower() == "true":
        setup_observability(app=app, engine=engine)

    logger.info("Restaurant site API initialized successfully")
    return app


# Create the FastAPI application instance (only when not in test mode)
# This prevents the app from being created during test collection
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    # Create a placeholder app for test imports
    app = FastAPI()


if __name__ == "__main__":
    """Run the application with uvicorn when executed directly."""
    import uvicorn

    port = int(os.getenv("PORT", "8000"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")
    logger.info(f"API documentation available at http://{host}:{port}/docs")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
