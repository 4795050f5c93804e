"""Export and import of Strapi content snapshots."""

from .exporter import StrapiExporter
from .field_sanitizer import FieldSanitizer, strip_immutable_fields
from .importer import StrapiImporter, plan_import
from .ordering import order_uids
from .protection import DEFAULT_PROTECTED_UIDS, ProtectionGuard
from .snapshot_io import load_snapshot, save_snapshot

__all__ = [
    "StrapiExporter",
    "StrapiImporter",
    "plan_import",
    "FieldSanitizer",
    "strip_immutable_fields",
    "order_uids",
    "ProtectionGuard",
    "DEFAULT_PROTECTED_UIDS",
    "load_snapshot",
    "save_snapshot",
]
