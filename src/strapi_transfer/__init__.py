"""strapi-transfer: move Strapi content between instances.

This package provides:
- Extraction of every content type into a portable JSON snapshot
- Replay of a snapshot into another instance through the admin API
- Protection of system-critical models from writes
- Deterministic, operator-overridable model ordering
- Per-entry failure isolation with a final accounting
"""

from .__version__ import __version__
from .client import SyncClient
from .config_factory import ConfigFactory, load_config
from .exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    FormatError,
    HTTPError,
    ImportExportError,
    MethodNotAllowedError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
    SnapshotFileError,
    StrapiError,
    ValidationError,
)
from .export import (
    FieldSanitizer,
    ProtectionGuard,
    StrapiExporter,
    StrapiImporter,
    load_snapshot,
    order_uids,
    save_snapshot,
)
from .models import (
    CollectionRecord,
    ExportOptions,
    ImportOptions,
    ImportResult,
    SingleRecord,
    Snapshot,
    StrapiConfig,
)
from .operations import fetch_all_pages

__all__ = [
    "__version__",
    # Client
    "SyncClient",
    # Configuration
    "StrapiConfig",
    "ImportOptions",
    "ExportOptions",
    "ConfigFactory",
    "load_config",
    # Snapshot
    "Snapshot",
    "CollectionRecord",
    "SingleRecord",
    "load_snapshot",
    "save_snapshot",
    # Export/Import
    "StrapiExporter",
    "StrapiImporter",
    "ImportResult",
    "FieldSanitizer",
    "ProtectionGuard",
    "order_uids",
    "fetch_all_pages",
    # Exceptions
    "StrapiError",
    "ConfigurationError",
    "ImportExportError",
    "SnapshotFileError",
    "FormatError",
    "HTTPError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "MethodNotAllowedError",
    "ConflictError",
    "RateLimitError",
    "ServerError",
    "NetworkError",
]
