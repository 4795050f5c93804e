#!/usr/bin/env python3
"""Simple Strapi Migration Example

Exports every content type from a source instance to a snapshot file and
replays it into a target instance.

Usage:
    1. Update SOURCE_URL, SOURCE_TOKEN, TARGET_URL, TARGET_TOKEN below
    2. Optionally list models that must be created first in IMPORT_ORDER
    3. Run: python simple_migration.py

Environment Variables (optional):
    SOURCE_STRAPI_URL: Override SOURCE_URL
    SOURCE_STRAPI_TOKEN: Override SOURCE_TOKEN
    TARGET_STRAPI_URL: Override TARGET_URL
    TARGET_STRAPI_TOKEN: Override TARGET_TOKEN
"""

import logging
import os
import sys
from datetime import datetime

from pydantic import SecretStr

from strapi_transfer import (
    ImportOptions,
    StrapiConfig,
    StrapiExporter,
    StrapiImporter,
    SyncClient,
    load_snapshot,
)
from strapi_transfer.exceptions import StrapiError

# ============================================================================
# CONFIGURATION - Update these values or use environment variables
# ============================================================================

SOURCE_URL = os.getenv("SOURCE_STRAPI_URL", "http://localhost:1337")
SOURCE_TOKEN = os.getenv("SOURCE_STRAPI_TOKEN", "your-source-admin-token-here")

TARGET_URL = os.getenv("TARGET_STRAPI_URL", "http://localhost:1338")
TARGET_TOKEN = os.getenv("TARGET_STRAPI_TOKEN", "your-target-admin-token-here")

# Models referenced by others go first; everything else follows alphabetically
IMPORT_ORDER = [
    "api::author.author",
    "api::category.category",
]

# ============================================================================


def validate_config() -> None:
    """Validate configuration before migration.

    Raises:
        ValueError: If required configuration is missing.
    """
    if not SOURCE_TOKEN or SOURCE_TOKEN == "your-source-admin-token-here":
        raise ValueError(
            "SOURCE_TOKEN not configured. "
            "Set SOURCE_STRAPI_TOKEN environment variable or update SOURCE_TOKEN in the script."
        )
    if not TARGET_TOKEN or TARGET_TOKEN == "your-target-admin-token-here":
        raise ValueError(
            "TARGET_TOKEN not configured. "
            "Set TARGET_STRAPI_TOKEN environment variable or update TARGET_TOKEN in the script."
        )


def main() -> int:
    """Perform a migration from source to target."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    try:
        validate_config()
    except ValueError as e:
        print(f"Configuration error: {e}")
        return 2

    run_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    snapshot_file = f"strapi-export_{run_id}.json"

    source_config = StrapiConfig(base_url=SOURCE_URL, api_token=SecretStr(SOURCE_TOKEN))
    target_config = StrapiConfig(base_url=TARGET_URL, api_token=SecretStr(TARGET_TOKEN))

    # Step 1: Export from source
    print(f"\nExporting from {SOURCE_URL}...")
    try:
        with SyncClient(source_config) as source_client:
            exporter = StrapiExporter(source_client)
            snapshot = exporter.export_snapshot()
            exporter.save_to_file(snapshot, snapshot_file)
    except StrapiError as e:
        print(f"Export failed: {e}")
        return 1

    print(f"  Exported {snapshot.get_entity_count()} entities to {snapshot_file}")

    # Step 2: Import to target (re-read the file, as a separate run would)
    print(f"\nImporting to {TARGET_URL}...")
    options = ImportOptions(file=snapshot_file, order=IMPORT_ORDER)
    with SyncClient(target_config) as target_client:
        result = StrapiImporter(target_client, options).import_snapshot(
            load_snapshot(options.file)
        )

    print(f"  {result.summary()}")
    for failure in result.failures:
        print(f"  failed: {failure.uid} #{failure.index}: {failure.message}")

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
