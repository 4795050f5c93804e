"""Snapshot data model.

A snapshot is the portable artifact produced by extraction and consumed by
replay::

    {
      "meta": {"exportedAt": ..., "source": ..., "formatVersion": 1, "pageSize": 250},
      "collection-types": {"<uid>": {"kind": "collectionType", "meta": {...}, "data": [...]}},
      "single-types": {"<uid>": {"kind": "singleType", "meta": {...}, "data": {...}}}
    }

Record kinds are resolved once, when a snapshot is validated, so the rest of
the pipeline works with typed CollectionRecord / SingleRecord values.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, model_serializer, model_validator

COLLECTION_GROUP = "collection-types"
SINGLE_GROUP = "single-types"
GROUPS = (COLLECTION_GROUP, SINGLE_GROUP)

COLLECTION_KIND = "collectionType"
SINGLE_KIND = "singleType"

# Keys checked for collection entries, in priority order
ENTRY_KEYS = ("results", "data", "entries")

META_KEY = "meta"
FORMAT_VERSION = 1

Entity = dict[str, Any]
RecordKind = Literal["collectionType", "singleType"]
# Timestamps are informational; values that are not ISO-8601 are kept as text
Timestamp = datetime | str


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def classify_record(payload: Any, group: str | None = None) -> RecordKind:
    """Decide whether a raw snapshot record is a collection or single type.

    Rules, first match wins:

    1. An explicit ``kind`` tag of ``collectionType`` or ``singleType``
    2. The group the record was found under
    3. Shape: a list under ``results`` or ``data`` means a collection
    4. Otherwise a single type

    Examples:
        >>> classify_record({"kind": "singleType", "data": []}, "collection-types")
        'singleType'
        >>> classify_record({"data": {}}, "collection-types")
        'collectionType'
        >>> classify_record({"results": []})
        'collectionType'
    """
    if isinstance(payload, dict):
        kind = payload.get("kind")
        if kind in (COLLECTION_KIND, SINGLE_KIND):
            return kind
    if group == COLLECTION_GROUP:
        return COLLECTION_KIND
    if group == SINGLE_GROUP:
        return SINGLE_KIND
    if isinstance(payload, dict) and (
        isinstance(payload.get("results"), list) or isinstance(payload.get("data"), list)
    ):
        return COLLECTION_KIND
    return SINGLE_KIND


def extract_collection_entries(payload: Any) -> list[Entity]:
    """Return the entry list of a raw collection record.

    Older snapshots stored entries under ``results``, ``data`` or
    ``entries``; the first list found wins.
    """
    if not isinstance(payload, dict):
        return []
    for key in ENTRY_KEYS:
        value = payload.get(key)
        if isinstance(value, list):
            return value
    return []


class PaginationMeta(BaseModel):
    """Pagination summary returned by a listing endpoint."""

    page: int = 1
    page_size: int | None = Field(None, alias="pageSize")
    page_count: int | None = Field(None, alias="pageCount")
    total: int | None = None

    model_config = {"populate_by_name": True, "extra": "allow"}


class SnapshotMeta(BaseModel):
    """Top level snapshot metadata."""

    exported_at: Timestamp = Field(
        default_factory=utc_now, alias="exportedAt", union_mode="left_to_right"
    )
    source: str | None = None
    format_version: int = Field(FORMAT_VERSION, alias="formatVersion")
    page_size: int | None = Field(None, alias="pageSize")

    model_config = {"populate_by_name": True, "extra": "allow"}


class CollectionMeta(BaseModel):
    """Per collection type fetch metadata."""

    count: int = 0
    pagination: PaginationMeta | None = None
    fetched_at: Timestamp | None = Field(None, alias="fetchedAt", union_mode="left_to_right")

    model_config = {"populate_by_name": True, "extra": "allow"}


class SingleMeta(BaseModel):
    """Per single type fetch metadata."""

    fetched_at: Timestamp | None = Field(None, alias="fetchedAt", union_mode="left_to_right")

    model_config = {"populate_by_name": True, "extra": "allow"}


class CollectionRecord(BaseModel):
    """All entries of one collection type."""

    kind: Literal["collectionType"] = COLLECTION_KIND
    meta: CollectionMeta = Field(default_factory=CollectionMeta)
    entries: list[Entity] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @model_validator(mode="before")
    @classmethod
    def _collect_entries(cls, value: Any) -> Any:
        if isinstance(value, dict):
            value = dict(value)
            value["entries"] = extract_collection_entries(value)
            for key in ("results", "data"):
                value.pop(key, None)
        return value

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        entries = data.pop("entries", [])
        # Written under both keys so readers of either layout can load it
        data["data"] = entries
        data["results"] = entries
        return data

    @property
    def entity_count(self) -> int:
        return len(self.entries)


class SingleRecord(BaseModel):
    """The one entry of a single type, if any."""

    kind: Literal["singleType"] = SINGLE_KIND
    meta: SingleMeta = Field(default_factory=SingleMeta)
    data: Entity | None = None

    model_config = {"populate_by_name": True}

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, value: Any) -> Any:
        if isinstance(value, dict) and not isinstance(value.get("data"), (dict, type(None))):
            value = dict(value)
            value["data"] = None
        return value

    @property
    def entity_count(self) -> int:
        return 1


ContentRecord = Annotated[CollectionRecord | SingleRecord, Field(discriminator="kind")]


def _is_single_wrapper(payload: dict[str, Any]) -> bool:
    # Only a "data" key or a known kind tag marks a record wrapper
    return "data" in payload or payload.get("kind") in (COLLECTION_KIND, SINGLE_KIND)


def _classify_group(records: Any, group: str) -> dict[str, Any]:
    if not isinstance(records, dict):
        return {}
    classified: dict[str, Any] = {}
    for uid, payload in records.items():
        if uid == META_KEY:
            continue
        if isinstance(payload, BaseModel):
            classified[uid] = payload
            continue
        kind = classify_record(payload, group)
        if not isinstance(payload, dict):
            item = {"data": payload}
        elif kind == SINGLE_KIND and not _is_single_wrapper(payload):
            # Bare entity stored without a record wrapper
            item = {"data": payload or None}
        else:
            item = dict(payload)
        item["kind"] = kind
        classified[uid] = item
    return classified


class Snapshot(BaseModel):
    """The persisted export of every model's entries.

    Both group mappings always exist after validation, and the key ``meta``
    is never treated as a UID.
    """

    meta: SnapshotMeta = Field(default_factory=SnapshotMeta)
    collection_types: dict[str, ContentRecord] = Field(
        default_factory=dict, alias=COLLECTION_GROUP
    )
    single_types: dict[str, ContentRecord] = Field(default_factory=dict, alias=SINGLE_GROUP)

    model_config = {"populate_by_name": True}

    @model_validator(mode="before")
    @classmethod
    def _classify_records(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        value = dict(value)
        for group, field_name in (
            (COLLECTION_GROUP, "collection_types"),
            (SINGLE_GROUP, "single_types"),
        ):
            key = group if group in value else field_name
            value[group] = _classify_group(value.pop(key, None) or {}, group)
        if value.get(META_KEY) is None:
            value.pop(META_KEY, None)
        return value

    def group(self, name: str) -> dict[str, CollectionRecord | SingleRecord]:
        """Return the record mapping for a group name."""
        if name == COLLECTION_GROUP:
            return self.collection_types
        if name == SINGLE_GROUP:
            return self.single_types
        raise KeyError(name)

    def records(self) -> list[tuple[str, str, CollectionRecord | SingleRecord]]:
        """All (uid, group, record) triples, in group then insertion order."""
        return [
            (uid, group, record)
            for group in GROUPS
            for uid, record in self.group(group).items()
        ]

    def get_entity_count(self) -> int:
        """Total number of entities across all records."""
        total = 0
        for _, _, record in self.records():
            if isinstance(record, CollectionRecord):
                total += record.entity_count
            elif record.data is not None:
                total += 1
        return total

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize to the on-disk JSON layout."""
        return self.model_dump(mode="json", by_alias=True)
