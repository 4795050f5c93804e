"""Replay of a snapshot into a target Strapi instance.

Models are processed in a deterministic order. Each model is checked
against the protection guard, its entries are sanitized and submitted one
request at a time, and failures are isolated per entry.
"""

import logging
from typing import TYPE_CHECKING

from strapi_transfer.exceptions import MethodNotAllowedError, StrapiError
from strapi_transfer.export.field_sanitizer import FieldSanitizer
from strapi_transfer.export.ordering import ordering_key
from strapi_transfer.export.protection import ProtectionGuard
from strapi_transfer.models.import_options import EntityFailure, ImportOptions, ImportResult
from strapi_transfer.models.snapshot import (
    GROUPS,
    CollectionRecord,
    SingleRecord,
    Snapshot,
)

if TYPE_CHECKING:
    from strapi_transfer.client.sync_client import SyncClient

logger = logging.getLogger(__name__)

PlanItem = tuple[str, str, CollectionRecord | SingleRecord]


def plan_import(snapshot: Snapshot, order: list[str] | None = None) -> list[PlanItem]:
    """Order every (uid, group, record) of a snapshot for processing.

    Both groups are ordered together. A UID present in both groups is
    handled collection group first.
    """
    uid_key = ordering_key(order or [])

    def key(item: PlanItem) -> tuple[int, str, int]:
        uid, group, _ = item
        rank, name = uid_key(uid)
        return rank, name, GROUPS.index(group)

    return sorted(snapshot.records(), key=key)


class StrapiImporter:
    """Replay snapshot entries into a Strapi instance.

    Example:
        >>> from strapi_transfer import ImportOptions, SyncClient
        >>> from strapi_transfer.export import StrapiImporter, load_snapshot
        >>>
        >>> snapshot = load_snapshot("strapi-export.json")
        >>> with SyncClient(target_config) as client:
        ...     importer = StrapiImporter(client, ImportOptions(order=["api::author.author"]))
        ...     result = importer.import_snapshot(snapshot)
        ...     print(result.summary())
    """

    def __init__(
        self,
        client: "SyncClient",
        options: ImportOptions | None = None,
        guard: ProtectionGuard | None = None,
        sanitizer: FieldSanitizer | None = None,
    ) -> None:
        """Initialize importer.

        Args:
            client: Client connected to the target instance
            options: Import options (uses defaults if None)
            guard: Protection guard (built from options if None)
            sanitizer: Field sanitizer (default removal sets if None)
        """
        self.client = client
        self.options = options or ImportOptions()
        self.guard = guard or ProtectionGuard.from_options(self.options)
        self.sanitizer = sanitizer or FieldSanitizer()

    def import_snapshot(self, snapshot: Snapshot) -> ImportResult:
        """Replay every record of a snapshot.

        Per-entry errors are recorded in the result and never raised.

        Args:
            snapshot: Loaded snapshot

        Returns:
            ImportResult with the final counters
        """
        result = ImportResult(dry_run=self.options.dry_run)

        for uid, group, record in plan_import(snapshot, self.options.order):
            if self.guard.is_protected(uid):
                count = record.entity_count or 1
                logger.info(f"Skipping protected model {uid} ({group})")
                result.skipped += count
                continue

            if isinstance(record, CollectionRecord):
                self._import_collection(uid, record, result)
            else:
                self._import_single(uid, record, result)

        result.protected_detected = sorted(self.guard.detected_uids)
        logger.info(f"Summary -> {result.summary()}")
        return result

    def _import_collection(
        self, uid: str, record: CollectionRecord, result: ImportResult
    ) -> None:
        """Create every entry of a collection type, in stored order."""
        entries = record.entries
        total = len(entries)
        if not total:
            logger.info(f"No entries found for {uid}, skipping.")
            result.skipped += 1
            return

        logger.info(f"Importing {total} entries for {uid}")
        for index, entry in enumerate(entries):
            payload = self.sanitizer.sanitize(entry)
            result.items += 1

            if self.options.dry_run:
                result.created += 1
                logger.info(f"[dry-run] ({index + 1}/{total}) {uid}")
                continue

            try:
                self.client.create_entry(uid, payload)
            except MethodNotAllowedError:
                remaining = total - index
                logger.warning(
                    f"{uid} is protected (405). Skipping remaining {remaining} entries "
                    "for this model."
                )
                self.guard.mark_detected(uid)
                result.skipped += remaining
                return
            except StrapiError as e:
                self._record_failure(result, uid, index, e)
                continue

            result.created += 1
            logger.info(f"({index + 1}/{total}) {uid}")

    def _import_single(self, uid: str, record: SingleRecord, result: ImportResult) -> None:
        """Create or replace the entry of a single type."""
        if record.data is None:
            logger.info(f"No data for single type {uid}, skipping.")
            result.skipped += 1
            return

        payload = self.sanitizer.sanitize(record.data)
        result.items += 1

        if self.options.dry_run:
            result.created += 1
            logger.info(f"[dry-run] Updated single type {uid}")
            return

        try:
            self.client.update_single(uid, payload)
        except MethodNotAllowedError:
            logger.warning(f"{uid} is protected (405). Skipping.")
            self.guard.mark_detected(uid)
            result.skipped += 1
            return
        except StrapiError as e:
            self._record_failure(result, uid, None, e)
            return

        result.created += 1
        logger.info(f"Updated single type {uid}")

    @staticmethod
    def _record_failure(
        result: ImportResult, uid: str, index: int | None, error: StrapiError
    ) -> None:
        status_code = getattr(error, "status_code", None)
        body = getattr(error, "body", None)
        position = f" entry {index + 1}" if index is not None else ""
        detail = f" body={body!r}" if body is not None else ""
        logger.error(f"Failed to import {uid}{position}: {error}{detail}")
        result.add_failure(
            EntityFailure(
                uid=uid,
                index=index,
                status_code=status_code,
                message=str(error),
                body=body,
            )
        )
