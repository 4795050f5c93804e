"""Reading and writing snapshot files."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from strapi_transfer.exceptions import FormatError, SnapshotFileError
from strapi_transfer.models.snapshot import Snapshot

logger = logging.getLogger(__name__)


def load_snapshot(file_path: str | Path) -> Snapshot:
    """Load and validate a snapshot file.

    Args:
        file_path: Path to the snapshot JSON file

    Returns:
        Snapshot with both group mappings present

    Raises:
        SnapshotFileError: If the file cannot be read
        FormatError: If the content is not a valid snapshot

    Example:
        >>> snapshot = load_snapshot("strapi-export.json")
        >>> sorted(snapshot.collection_types)
        ['api::article.article']
    """
    path = Path(file_path)
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SnapshotFileError(f"Cannot read snapshot file {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise FormatError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise FormatError(f"Expected a JSON object in {path}, got: {type(data).__name__}")

    try:
        snapshot = Snapshot.model_validate(data)
    except PydanticValidationError as e:
        raise FormatError(f"Invalid snapshot structure in {path}: {e}") from e

    logger.info(
        f"Loaded snapshot {path} ({len(snapshot.collection_types)} collection types, "
        f"{len(snapshot.single_types)} single types)"
    )
    return snapshot


def save_snapshot(snapshot: Snapshot, file_path: str | Path) -> Path:
    """Write a snapshot as indented UTF-8 JSON.

    Parent directories are created as needed.

    Raises:
        SnapshotFileError: If the file cannot be written
    """
    path = Path(file_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(snapshot.to_json_dict(), f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise SnapshotFileError(f"Cannot write snapshot file {path}: {e}") from e

    logger.info(f"Snapshot saved to {path}")
    return path
