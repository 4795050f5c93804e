"""Pydantic models for configuration, snapshots and results."""

from .config import StrapiConfig
from .content_type import ContentTypeListing, ContentTypeListItem
from .export_options import ExportOptions
from .import_options import EntityFailure, ImportOptions, ImportResult
from .snapshot import (
    CollectionMeta,
    CollectionRecord,
    PaginationMeta,
    SingleMeta,
    SingleRecord,
    Snapshot,
    SnapshotMeta,
    classify_record,
    extract_collection_entries,
)

__all__ = [
    "StrapiConfig",
    "ExportOptions",
    "ImportOptions",
    "ImportResult",
    "EntityFailure",
    "ContentTypeListItem",
    "ContentTypeListing",
    "Snapshot",
    "SnapshotMeta",
    "CollectionRecord",
    "CollectionMeta",
    "SingleRecord",
    "SingleMeta",
    "PaginationMeta",
    "classify_record",
    "extract_collection_entries",
]
