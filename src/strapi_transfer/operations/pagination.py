"""Pagination walker for admin listing endpoints.

Fetches every page of a collection type listing and concatenates the
entries in page order.
"""

import logging
from collections.abc import Generator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..models.snapshot import Entity, PaginationMeta

if TYPE_CHECKING:
    from ..client.sync_client import SyncClient

logger = logging.getLogger(__name__)


@dataclass
class PageWalkResult:
    """Aggregated entries of a paged listing.

    Attributes:
        entries: All entries in page order
        pagination: Pagination summary of the last page fetched
        pages_fetched: Number of requests made
    """

    entries: list[Entity] = field(default_factory=list)
    pagination: PaginationMeta | None = None
    pages_fetched: int = 0


def read_page_entries(payload: Any) -> list[Entity]:
    """Entries of one listing response (``results``, else ``data``)."""
    if not isinstance(payload, dict):
        return []
    for key in ("results", "data"):
        value = payload.get(key)
        if isinstance(value, list):
            return value
    return []


def read_pagination(payload: Any) -> PaginationMeta | None:
    """Pagination summary of one listing response.

    The admin API reports it at the top level; the public API nests it
    under ``meta``.
    """
    if not isinstance(payload, dict):
        return None
    raw = payload.get("pagination")
    if not isinstance(raw, dict):
        meta = payload.get("meta")
        raw = meta.get("pagination") if isinstance(meta, dict) else None
    if not isinstance(raw, dict):
        return None
    return PaginationMeta.model_validate(raw)


def iter_pages(
    client: "SyncClient",
    uid: str,
    page_size: int,
) -> Generator[tuple[list[Entity], PaginationMeta | None], None, None]:
    """Yield ``(entries, pagination)`` for each page of a collection type.

    Stops after the page whose number reaches the reported page count, or
    after a page with no entries. A response without a pagination summary
    counts as a single page.

    Args:
        client: SyncClient instance
        uid: Collection type UID
        page_size: Entries requested per page

    Yields:
        Entries and pagination summary of each page
    """
    page = 1
    while True:
        payload = client.list_entries(uid, page=page, page_size=page_size)
        entries = read_page_entries(payload)
        pagination = read_pagination(payload)

        yield entries, pagination

        page_count = pagination.page_count if pagination and pagination.page_count else 1
        if page >= page_count or not entries:
            break
        page += 1


def fetch_all_pages(client: "SyncClient", uid: str, page_size: int) -> PageWalkResult:
    """Fetch every page of a collection type listing.

    Example:
        >>> result = fetch_all_pages(client, "api::article.article", page_size=250)
        >>> len(result.entries), result.pagination.page_count
        (510, 3)
    """
    result = PageWalkResult()
    for entries, pagination in iter_pages(client, uid, page_size):
        result.entries.extend(entries)
        result.pagination = pagination
        result.pages_fetched += 1

    logger.debug(f"Fetched {len(result.entries)} entries of {uid} in {result.pages_fetched} pages")
    return result
