"""Error taxonomy for the site API.

Every exception carries the HTTP status it maps to. Handlers raise these and the
exception handlers in ``handlers.error_handling`` render them as ``{"error": message}``.
"""


class SiteServiceError(Exception):
    """Base class for errors that are reported back to the client."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Human readable message returned in the response body
        """
        super().__init__(message)
        self.message = message


class AuthError(SiteServiceError):
    """Admin bearer token missing or wrong."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ValidationError(SiteServiceError):
    """Required field missing or invalid."""

    status_code = 400


class NotFoundError(SiteServiceError):
    """Unknown id, slug, image key or route."""

    status_code = 404

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class ConflictError(SiteServiceError):
    """Resource already exists."""

    status_code = 409


class ConfigError(SiteServiceError):
    """A required binding (database, bucket) is not configured."""

    status_code = 500


class TranslationError(Exception):
    """The translation service could not produce a translation.

    Never surfaced to clients: the auto-translate step recovers from it.
    """
