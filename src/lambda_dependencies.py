"""Shared dependency factory for the Lambda handler.

This module provides cached dependency initialization to optimize Lambda cold starts.
Dependencies are created once and reused across invocations within the same Lambda container.
"""

import logging
import os
from typing import Any

import boto3
from fastapi import FastAPI
from sqlalchemy.engine import Engine

from restaurant_site_service.handlers.api_handler import create_app
from restaurant_site_service.observability import configure_logging, setup_observability
from restaurant_site_service.repositories.database import create_database_engine
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

# Module-level caches for Lambda container reuse
_database_engine: Engine | None = None
_s3_client: Any | None = None
_fastapi_app: FastAPI | None = None


def get_database_engine() -> Engine | None:
    """Create or retrieve cached SQLAlchemy engine.

    Returns:
        Engine bound to DATABASE_URL, or None when it is not set
    """
    global _database_engine

    if _database_engine is not None:
        return _database_engine

    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        logger.warning("DATABASE_URL not set - database routes will return 500")
        return None

    _database_engine = create_database_engine(database_url)
    logger.info("Database engine initialized")
    return _database_engine


def get_s3_client() -> Any:
    """Create or retrieve cached S3 client.

    Returns:
        Boto3 S3 client configured for environment
    """
    global _s3_client

    if _s3_client is not None:
        return _s3_client

    endpoint_url = os.getenv("S3_ENDPOINT_URL")
    region = os.getenv("AWS_REGION", "us-east-1")

    if endpoint_url:
        logger.info(f"Using S3-compatible object store at {endpoint_url}")
        _s3_client = boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        )
    else:
        logger.info(f"Using AWS S3 in region {region}")
        _s3_client = boto3.client("s3", region_name=region)

    return _s3_client


def get_image_store() -> ImageStore | None:
    """Create the image store when a bucket is configured.

    Returns:
        ImageStore, or None when IMAGE_BUCKET_NAME is not set
    """
    bucket_name = os.getenv("IMAGE_BUCKET_NAME")
    if not bucket_name:
        logger.warning("IMAGE_BUCKET_NAME not set - image routes will return 500")
        return None
    return ImageStore(s3_client=get_s3_client(), bucket_name=bucket_name)


def get_auto_translator() -> AutoTranslator:
    """Create the auto-translation step (without a client when credentials are missing).

    Returns:
        AutoTranslator instance
    """
    account_id = os.getenv("CLOUDFLARE_ACCOUNT_ID")
    api_token = os.getenv("CLOUDFLARE_API_TOKEN")

    if not account_id or not api_token:
        logger.warning("Translation service not configured - pages will be stored untranslated")
        return AutoTranslator(translation_client=None)

    client = TranslationClient(
        account_id=account_id,
        api_token=api_token,
        model=os.getenv("TRANSLATION_MODEL", DEFAULT_TRANSLATION_MODEL),
    )
    return AutoTranslator(translation_client=client)


def get_fastapi_app() -> FastAPI:
    """Create or retrieve cached FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    global _fastapi_app

    if _fastapi_app is not None:
        return _fastapi_app

    engine = get_database_engine()
    content_service = strip_service = menu_service = reservation_service = None

    if engine is not None:
        page_repository = SitePageRepository(engine=engine)
        content_service = ContentService(
            page_repository=page_repository, auto_translator=get_auto_translator()
        )
        strip_service = StripService(page_repository=page_repository)
        menu_service = MenuService(
            menu_repository=MenuItemRepository(engine=engine),
            page_repository=page_repository,
        )
        reservation_service = ReservationService(
            reservation_repository=ReservationRepository(engine=engine)
        )

    _fastapi_app = create_app(
        content_service=content_service,
        strip_service=strip_service,
        menu_service=menu_service,
        reservation_service=reservation_service,
        image_store=get_image_store(),
        admin_token=os.getenv("ADMIN_TOKEN"),
    )

    if os.getenv("ENABLE_OTEL", "true").lower() == "true":
        setup_observability(app=_fastapi_app, engine=engine)

    logger.info("FastAPI application initialized")
    return _fastapi_app


def initialize_lambda_environment() -> None:
    """Initialize Lambda environment with logging.

    Should be called once during Lambda cold start.
    """
    log_level = os.getenv("LOG_LEVEL", "INFO")
    configure_logging(log_level)

    logger.info("Lambda environment initialized")
