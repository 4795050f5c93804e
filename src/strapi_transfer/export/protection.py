"""Protection guard: decides which models must never be written."""

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from strapi_transfer.models.import_options import ImportOptions

logger = logging.getLogger(__name__)

# System-critical models of the reference deployment
DEFAULT_PROTECTED_UIDS: tuple[str, ...] = (
    "api::header.header",
    "api::footer.footer",
    "api::global.global",
    "api::dealer-list.dealer-list",
)


class ProtectionGuard:
    """Tracks protected UIDs for one replay run.

    The static set comes from configuration and never changes. The detected
    set grows when a model answers a write with 405 and is never shrunk, so
    once a UID is protected it stays protected for the rest of the run.

    Example:
        >>> guard = ProtectionGuard(extra_uids=["api::menu.menu"])
        >>> guard.is_protected("api::global.global")
        True
        >>> guard.mark_detected("api::page.page")
        >>> guard.is_protected("api::page.page")
        True
    """

    def __init__(
        self,
        extra_uids: Iterable[str] = (),
        include_protected: bool = False,
        defaults: Iterable[str] = DEFAULT_PROTECTED_UIDS,
    ) -> None:
        """Initialize the guard.

        Args:
            extra_uids: Operator supplied UIDs to protect
            include_protected: Drop the built-in defaults
            defaults: Built-in protected UIDs
        """
        static = set() if include_protected else set(defaults)
        static.update(extra_uids)
        self._static: frozenset[str] = frozenset(static)
        self._detected: set[str] = set()

        if include_protected:
            logger.warning("include-protected enabled: default protected UID list disabled")

    @classmethod
    def from_options(cls, options: "ImportOptions") -> "ProtectionGuard":
        """Build a guard from import options."""
        return cls(
            extra_uids=options.protected_uids,
            include_protected=options.include_protected,
        )

    @property
    def static_uids(self) -> frozenset[str]:
        """UIDs protected by configuration."""
        return self._static

    @property
    def detected_uids(self) -> frozenset[str]:
        """UIDs found to be protected during this run."""
        return frozenset(self._detected)

    def is_protected(self, uid: str) -> bool:
        """Return True if ``uid`` must not be written."""
        return uid in self._static or uid in self._detected

    def mark_detected(self, uid: str) -> None:
        """Record that ``uid`` rejected a write with 405."""
        if uid not in self._detected:
            logger.info(f"Marking {uid} as protected for the rest of the run")
        self._detected.add(uid)
