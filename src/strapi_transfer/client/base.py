"""Base HTTP client for the Strapi admin Content Manager API.

This module provides the pieces shared by HTTP operations: authentication
headers, URL building, tolerant body parsing and mapping of error
responses to exceptions.
"""

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from ..auth.api_token import APITokenAuth
from ..exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    HTTPError,
    MethodNotAllowedError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from ..models.config import StrapiConfig

logger = logging.getLogger(__name__)

CONTENT_MANAGER_PREFIX = "content-manager"


def encode_uid(uid: str) -> str:
    """URL-encode a content type UID for use as a path segment.

    Examples:
        >>> encode_uid("api::article.article")
        'api%3A%3Aarticle.article'
    """
    return quote(uid, safe="")


def content_manager_path(group: str, uid: str) -> str:
    """Admin API path for one content type.

    Examples:
        >>> content_manager_path("collection-types", "api::article.article")
        'content-manager/collection-types/api%3A%3Aarticle.article'
    """
    return f"{CONTENT_MANAGER_PREFIX}/{group}/{encode_uid(uid)}"


def parse_body(response: httpx.Response) -> Any:
    """Parse a response body as JSON, falling back to raw text.

    Returns None for an empty body.
    """
    text = response.text
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


class BaseClient:
    """Base HTTP client for Strapi admin API operations.

    Provides:
    - Bearer token authentication
    - URL building for admin (non ``/api``) paths
    - Error handling and exception mapping

    Not intended to be used directly - use SyncClient instead.
    """

    def __init__(self, config: StrapiConfig) -> None:
        """Initialize the base client.

        Args:
            config: Strapi configuration with URL, token, and options

        Raises:
            ConfigurationError: If the token is empty
        """
        self.config = config
        self.base_url = config.get_base_url()
        self.auth = APITokenAuth(config.get_api_token())

        if not self.auth.validate_token():
            raise ConfigurationError("API token is required and cannot be empty")

        logger.info(f"Initialized Strapi admin client for {self.base_url}")

    def _get_headers(self, extra_headers: dict[str, str] | None = None) -> dict[str, str]:
        """Build request headers with authentication.

        Args:
            extra_headers: Additional headers to include

        Returns:
            Complete headers dictionary
        """
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            **self.auth.get_headers(),
        }

        if extra_headers:
            headers.update(extra_headers)

        return headers

    def _build_url(self, path: str) -> str:
        """Build full URL for an admin path.

        Args:
            path: Admin path (e.g., "content-manager/collection-types/api%3A%3Aa.a")

        Returns:
            Complete URL
        """
        return f"{self.base_url}/{path.strip('/')}"

    def _handle_error_response(self, response: httpx.Response, path: str) -> None:
        """Raise the exception matching an error response.

        Args:
            response: HTTPX response object
            path: Request path, included in the message

        Raises:
            Appropriate HTTPError subclass based on status code
        """
        status_code = response.status_code
        body = parse_body(response)

        error_message = ""
        error_details: dict[str, Any] = {}
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            error_message = str(body["error"].get("message") or "")
            details = body["error"].get("details")
            error_details = details if isinstance(details, dict) else {}
        if not error_message:
            error_message = body if isinstance(body, str) and body else response.reason_phrase

        message = f"HTTP {status_code} {error_message} -> {path}"
        kwargs: dict[str, Any] = {
            "status_code": status_code,
            "body": body,
            "details": error_details,
        }

        if status_code == 400:
            raise ValidationError(f"Validation error: {message}", **kwargs)
        elif status_code == 401:
            raise AuthenticationError(f"Authentication failed: {message}", **kwargs)
        elif status_code == 403:
            raise AuthorizationError(f"Authorization failed: {message}", **kwargs)
        elif status_code == 404:
            raise NotFoundError(f"Resource not found: {message}", **kwargs)
        elif status_code == 405:
            raise MethodNotAllowedError(f"Method not allowed: {message}", **kwargs)
        elif status_code == 409:
            raise ConflictError(f"Conflict: {message}", **kwargs)
        elif status_code == 429:
            retry_after = response.headers.get("Retry-After")
            retry_seconds = int(retry_after) if retry_after and retry_after.isdigit() else None
            raise RateLimitError(
                f"Rate limit exceeded: {message}", retry_after=retry_seconds, **kwargs
            )
        elif 500 <= status_code < 600:
            raise ServerError(f"Server error: {message}", **kwargs)
        else:
            raise HTTPError(f"Unexpected error: {message}", **kwargs)
