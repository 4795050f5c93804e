"""Synchronous HTTP client for the Strapi admin API.

Requests are issued one at a time; every call blocks until its response
arrives.
"""

import logging
from typing import Any

import httpx

from ..exceptions import ConnectionError as StrapiConnectionError
from ..exceptions import NetworkError
from ..exceptions import TimeoutError as StrapiTimeoutError
from ..models.config import StrapiConfig
from ..models.snapshot import COLLECTION_GROUP, SINGLE_GROUP
from .base import CONTENT_MANAGER_PREFIX, BaseClient, content_manager_path, parse_body

logger = logging.getLogger(__name__)


class SyncClient(BaseClient):
    """Synchronous client for the admin Content Manager API.

    Example:
        ```python
        from strapi_transfer import StrapiConfig, SyncClient

        config = StrapiConfig(base_url="http://localhost:1337", api_token="admin-jwt")

        with SyncClient(config) as client:
            client.create_entry("api::article.article", {"title": "Hello"})
        ```
    """

    def __init__(
        self,
        config: StrapiConfig,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the synchronous client.

        Args:
            config: Connection configuration
            http_client: HTTP client to use (defaults to a new httpx.Client)
        """
        super().__init__(config)

        self._client = http_client or self._create_default_http_client()
        self._owns_client = http_client is None

    def _create_default_http_client(self) -> httpx.Client:
        """Create the default HTTP client.

        Returns:
            Configured httpx.Client instance
        """
        return httpx.Client(timeout=self.config.timeout, verify=self.config.verify_ssl)

    def __enter__(self) -> "SyncClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()
        logger.debug("Closed Strapi admin client")

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Make an HTTP request to the admin API.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: Admin path
            params: URL query parameters
            json: JSON request body
            headers: Additional headers

        Returns:
            Parsed JSON body, raw text if the body is not JSON, or None

        Raises:
            HTTPError: On non-2xx responses
            ConnectionError: On connection failures
            TimeoutError: On request timeout
            NetworkError: On any other request failure, such as an undecodable body
        """
        url = self._build_url(path)
        request_headers = self._get_headers(headers)

        logger.debug(f"{method} {url} params={params}")

        try:
            response = self._client.request(
                method=method,
                url=url,
                params=params,
                json=json,
                headers=request_headers,
            )
        except httpx.TimeoutException as e:
            raise StrapiTimeoutError(
                f"Request timed out after {self.config.timeout}s: {e}"
            ) from e
        except httpx.TransportError as e:
            raise StrapiConnectionError(f"Failed to connect to {self.base_url}: {e}") from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise NetworkError(f"Request to {url} failed: {e}") from e

        if not response.is_success:
            self._handle_error_response(response, path)

        logger.debug(f"Response: {response.status_code}")
        return parse_body(response)

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make a GET request."""
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any, params: dict[str, Any] | None = None) -> Any:
        """Make a POST request."""
        return self.request("POST", path, params=params, json=json)

    def put(self, path: str, json: Any, params: dict[str, Any] | None = None) -> Any:
        """Make a PUT request."""
        return self.request("PUT", path, params=params, json=json)

    # Content Manager operations

    def list_content_types(self) -> Any:
        """Fetch the content type registry.

        Returns:
            Raw response body of ``GET /content-manager/content-types``
        """
        return self.get(f"{CONTENT_MANAGER_PREFIX}/content-types")

    def list_entries(self, uid: str, page: int, page_size: int) -> Any:
        """Fetch one page of a collection type's entries.

        Args:
            uid: Collection type UID
            page: 1-based page number
            page_size: Entries per page

        Returns:
            Raw response body
        """
        params = {
            "populate": "*",
            "pagination[pageSize]": page_size,
            "pagination[page]": page,
        }
        return self.get(content_manager_path(COLLECTION_GROUP, uid), params=params)

    def get_single(self, uid: str) -> Any:
        """Fetch a single type's entry with relations populated."""
        return self.get(content_manager_path(SINGLE_GROUP, uid), params={"populate": "*"})

    def create_entry(self, uid: str, data: dict[str, Any]) -> Any:
        """Create one entry of a collection type.

        Args:
            uid: Collection type UID
            data: Entry fields

        Returns:
            Raw response body
        """
        return self.post(content_manager_path(COLLECTION_GROUP, uid), json=data)

    def update_single(self, uid: str, data: dict[str, Any]) -> Any:
        """Create or replace the entry of a single type."""
        return self.put(content_manager_path(SINGLE_GROUP, uid), json=data)
