"""Exception hierarchy for strapi-transfer.

All exceptions raised by this package derive from StrapiError so callers
can catch a single base class. HTTP failures are mapped to specific
subclasses by the client, and every HTTP exception carries the status code
and the (possibly raw text) response body.
"""

from typing import Any


class StrapiError(Exception):
    """Base exception for all strapi-transfer errors.

    Attributes:
        message: Human readable error message
        details: Additional structured error details
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(StrapiError):
    """Raised when configuration is missing or invalid."""


# Snapshot file errors


class ImportExportError(StrapiError):
    """Base exception for snapshot export/import errors."""


class SnapshotFileError(ImportExportError):
    """Raised when a snapshot file cannot be read or written."""


class FormatError(ImportExportError):
    """Raised when snapshot content is not a valid snapshot structure."""


# HTTP errors


class HTTPError(StrapiError):
    """Base exception for non-2xx responses from the admin API.

    Attributes:
        status_code: HTTP status code of the response
        body: Parsed JSON body, raw text if the body was not JSON, or None
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.status_code = status_code
        self.body = body


class ValidationError(HTTPError):
    """HTTP 400 - the payload was rejected."""


class AuthenticationError(HTTPError):
    """HTTP 401 - invalid or missing token."""


class AuthorizationError(HTTPError):
    """HTTP 403 - token lacks permission."""


class NotFoundError(HTTPError):
    """HTTP 404 - resource does not exist."""


class MethodNotAllowedError(HTTPError):
    """HTTP 405 - the model does not accept writes.

    The importer treats this as a protected model rather than a failure.
    """


class ConflictError(HTTPError):
    """HTTP 409 - conflicting resource state."""


class RateLimitError(HTTPError):
    """HTTP 429 - too many requests.

    Attributes:
        retry_after: Seconds suggested by the Retry-After header, if any
    """

    def __init__(
        self,
        message: str,
        retry_after: int | None = None,
        status_code: int | None = 429,
        body: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, body=body, details=details)
        self.retry_after = retry_after


class ServerError(HTTPError):
    """HTTP 5xx - server side failure."""


# Transport errors


class NetworkError(StrapiError):
    """Base exception for transport level failures."""


class ConnectionError(NetworkError):  # noqa: A001
    """Raised when the server cannot be reached."""


class TimeoutError(NetworkError):  # noqa: A001
    """Raised when a request exceeds the configured timeout."""
