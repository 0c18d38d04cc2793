"""FastAPI dependencies for admin authentication.

Provides dependency injection functions for FastAPI endpoints to validate the admin token.
"""

from typing import Annotated

from fastapi import Header, Request

from restaurant_site_service.auth.admin_token_validator import (
    AdminTokenValidator,
    extract_bearer_token,
)
from restaurant_site_service.exceptions import AuthError


def get_admin_token_from_header(
    authorization: str | None,
    validator: AdminTokenValidator,
) -> str:
    """Extract and validate the admin bearer token.

    Args:
        authorization: Value of the Authorization header
        validator: AdminTokenValidator holding the configured secret

    Returns:
        str: The validated token

    Raises:
        AuthError: 401 if the token is missing, wrong, or no secret is configured
    """
    token = extract_bearer_token(authorization)
    if not validator.validate(token):
        raise AuthError()
    return token


def require_admin(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """FastAPI dependency guarding admin routes."""
    return get_admin_token_from_header(
        authorization=authorization,
        validator=request.app.state.admin_token_validator,
    )
