"""Admin token validation for back-office endpoints.

The back office authenticates with a single static secret sent as a bearer token.
Validation is a plain string comparison against the configured secret.
"""

import re

_BEARER_PREFIX = re.compile(r"^Bearer\s+", re.IGNORECASE)


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token part of an ``Authorization: Bearer <token>`` header.

    Args:
        authorization: Raw header value, None if absent

    Returns:
        str: The trimmed token ("" when the header is missing)
    """
    return _BEARER_PREFIX.sub("", authorization or "", count=1).strip()


class AdminTokenValidator:
    """Validates bearer tokens for admin endpoint authentication.

    A missing or blank configured secret rejects every token.
    """

    def __init__(self, admin_token: str | None) -> None:
        """Initialize validator with the admin secret.

        Args:
            admin_token: Configured admin secret (None or blank disables admin access)
        """
        self.admin_token = (admin_token or "").strip()

    @property
    def configured(self) -> bool:
        return bool(self.admin_token)

    def validate(self, token: str) -> bool:
        """Validate a bearer token.

        Args:
            token: Token extracted from the Authorization header

        Returns:
            bool: True if a secret is configured and the token equals it
        """
        return self.configured and token == self.admin_token
