"""Export orchestration for Strapi content.

Walks the admin Content Manager API and collects every entry of every
content type into a Snapshot.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from strapi_transfer.exceptions import FormatError, StrapiError
from strapi_transfer.export.snapshot_io import save_snapshot
from strapi_transfer.models.content_type import ContentTypeListing, ContentTypeListItem
from strapi_transfer.models.export_options import DEFAULT_PAGE_SIZE
from strapi_transfer.models.snapshot import (
    CollectionMeta,
    CollectionRecord,
    SingleMeta,
    SingleRecord,
    Snapshot,
    SnapshotMeta,
    utc_now,
)
from strapi_transfer.operations.pagination import fetch_all_pages

if TYPE_CHECKING:
    from strapi_transfer.client.sync_client import SyncClient

logger = logging.getLogger(__name__)


class StrapiExporter:
    """Export Strapi content to the portable snapshot format.

    Example:
        >>> with SyncClient(config) as client:
        ...     exporter = StrapiExporter(client)
        ...     snapshot = exporter.export_snapshot()
        ...     exporter.save_to_file(snapshot, "strapi-export.json")
    """

    def __init__(self, client: "SyncClient", page_size: int = DEFAULT_PAGE_SIZE):
        """Initialize exporter with Strapi client.

        Args:
            client: Synchronous Strapi client
            page_size: Entries requested per listing page
        """
        self.client = client
        self.page_size = page_size

    def discover_content_types(self) -> ContentTypeListing:
        """List the application content types known to the Content Manager.

        Returns:
            Collection and single type UIDs, each sorted

        Raises:
            FormatError: If the registry response has an unexpected shape
        """
        payload = self.client.list_content_types()
        raw_items = payload.get("data") if isinstance(payload, dict) else payload
        if not isinstance(raw_items, list):
            raise FormatError("Unexpected content type registry response")

        listing = ContentTypeListing.from_items(
            [ContentTypeListItem.model_validate(item) for item in raw_items]
        )
        logger.info(
            f"Discovered {len(listing.collection_types)} collection types and "
            f"{len(listing.single_types)} single types"
        )
        return listing

    def export_snapshot(
        self,
        collection_uids: list[str] | None = None,
        single_uids: list[str] | None = None,
        progress_callback: Callable[[int, int, str], None] | None = None,
    ) -> Snapshot:
        """Export the given content types, discovering them if none are given.

        A model that fails to export is logged and left out; the others are
        still exported.

        Args:
            collection_uids: Collection type UIDs to export
            single_uids: Single type UIDs to export
            progress_callback: Optional callback(current, total, message)

        Returns:
            Snapshot of all exported entries
        """
        if not collection_uids and not single_uids:
            listing = self.discover_content_types()
            collection_uids = listing.collection_types
            single_uids = listing.single_types

        collection_uids = collection_uids or []
        single_uids = single_uids or []

        logger.info("Starting Strapi export")
        snapshot = Snapshot(
            meta=SnapshotMeta(
                exported_at=utc_now(),
                source=self.client.base_url,
                page_size=self.page_size,
            )
        )

        total = len(collection_uids) + len(single_uids)
        done = 0

        for uid in collection_uids:
            try:
                snapshot.collection_types[uid] = self._export_collection(uid)
                logger.info(
                    f"Exported collection {uid} "
                    f"({snapshot.collection_types[uid].entity_count} entries)"
                )
            except StrapiError as e:
                logger.error(f"Failed to export collection {uid}: {e}")
            done += 1
            if progress_callback:
                progress_callback(done, total, f"Exported {uid}")

        for uid in single_uids:
            try:
                snapshot.single_types[uid] = self._export_single(uid)
                logger.info(f"Exported single {uid}")
            except StrapiError as e:
                logger.error(f"Failed to export single {uid}: {e}")
            done += 1
            if progress_callback:
                progress_callback(done, total, f"Exported {uid}")

        logger.info(f"Export finished: {snapshot.get_entity_count()} entities")
        return snapshot

    def _export_collection(self, uid: str) -> CollectionRecord:
        walk = fetch_all_pages(self.client, uid, self.page_size)
        return CollectionRecord(
            meta=CollectionMeta(
                count=len(walk.entries),
                pagination=walk.pagination,
                fetched_at=utc_now(),
            ),
            entries=walk.entries,
        )

    def _export_single(self, uid: str) -> SingleRecord:
        payload = self.client.get_single(uid)
        record = payload.get("data", payload) if isinstance(payload, dict) else None
        return SingleRecord(
            meta=SingleMeta(fetched_at=utc_now()),
            data=record if isinstance(record, dict) else None,
        )

    @staticmethod
    def save_to_file(snapshot: Snapshot, file_path: str | Path) -> Path:
        """Save a snapshot to a JSON file.

        Example:
            >>> StrapiExporter.save_to_file(snapshot, "backup.json")
        """
        return save_snapshot(snapshot, file_path)
