"""Exception handlers rendering every error as ``{"error": message}``."""

import logging
from typing import cast

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from restaurant_site_service.exceptions import ConfigError, SiteServiceError
from restaurant_site_service.handlers.middleware import CORS_HEADERS

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _site_error_handler(_: Request, exc: Exception) -> JSONResponse:
    error = cast(SiteServiceError, exc)
    return error_response(error.status_code, error.message)


async def _http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    # Unknown path and known path with another method are both "no such route"
    if http_exc.status_code in (404, 405):
        # Every route past the image routes needs the database
        if not request.app.state.database_configured:
            missing = ConfigError("DATABASE_URL missing")
            return error_response(missing.status_code, missing.message)
        return error_response(404, "Not found")
    message = str(http_exc.detail) if http_exc.detail else "Request failed"
    return error_response(http_exc.status_code, message)


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    logger.info(f"Request validation failed: {validation_exc.errors()}")
    return error_response(400, "Invalid request")


async def _storage_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        f"Storage failure on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return error_response(500, "Internal server error")


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Runs in the outermost middleware, so the CORS headers are added here
    logger.exception(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    response = error_response(500, "Internal server error")
    response.headers.update(CORS_HEADERS)
    return response


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error taxonomy and storage failure handlers to the app."""
    app.add_exception_handler(SiteServiceError, _site_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)

    for storage_error in (SQLAlchemyError, ClientError, BotoCoreError):
        app.add_exception_handler(storage_error, _storage_exception_handler)

    app.add_exception_handler(Exception, _unhandled_exception_handler)
