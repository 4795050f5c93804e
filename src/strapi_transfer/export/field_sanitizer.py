"""Removal of server-managed fields before an entity is written back.

The target instance assigns identifiers, timestamps, audit authors and
localization links itself and rejects or ignores them on write.
"""

from collections.abc import Iterable
from typing import Any

ROOT_IMMUTABLE_FIELDS: frozenset[str] = frozenset(
    {
        "id",
        "documentId",
        "createdAt",
        "updatedAt",
        "publishedAt",
        "createdBy",
        "updatedBy",
        "localizations",
    }
)

NESTED_IMMUTABLE_FIELDS: frozenset[str] = frozenset(
    {
        "id",
        "documentId",
        "createdAt",
        "updatedAt",
        "publishedAt",
        "createdBy",
        "updatedBy",
        "localizations",
    }
)


class FieldSanitizer:
    """Strip immutable fields from an entity tree.

    The root mapping (depth 0) and everything below it use separate removal
    sets, so a nested component can keep a field the root must drop.

    Example:
        >>> sanitizer = FieldSanitizer()
        >>> sanitizer.sanitize({"id": 1, "title": "A", "seo": {"id": 7, "slug": "a"}})
        {'title': 'A', 'seo': {'slug': 'a'}}
    """

    def __init__(
        self,
        root_fields: Iterable[str] = ROOT_IMMUTABLE_FIELDS,
        nested_fields: Iterable[str] = NESTED_IMMUTABLE_FIELDS,
    ) -> None:
        self.root_fields = frozenset(root_fields)
        self.nested_fields = frozenset(nested_fields)

    def fields_for_depth(self, depth: int) -> frozenset[str]:
        """Return the removal set that applies at a nesting depth."""
        return self.root_fields if depth == 0 else self.nested_fields

    def sanitize(self, value: Any, depth: int = 0) -> Any:
        """Return a write-safe copy of ``value``. The input is not modified.

        Args:
            value: Entity, list of entities, or scalar
            depth: Nesting depth of ``value`` (0 for the entity itself)

        Returns:
            New structure without immutable fields
        """
        if isinstance(value, list):
            return [self.sanitize(item, depth + 1) for item in value]
        if isinstance(value, dict):
            removed = self.fields_for_depth(depth)
            return {
                key: self.sanitize(item, depth + 1)
                for key, item in value.items()
                if key not in removed
            }
        return value


def strip_immutable_fields(value: Any) -> Any:
    """Sanitize with the default removal sets."""
    return FieldSanitizer().sanitize(value)
