"""Import configuration and result models."""

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .config import UidList, split_uid_list
from .export_options import DEFAULT_EXPORT_FILE


class ImportOptions(BaseSettings):
    """Options for replaying a snapshot into a target instance.

    Attributes:
        file: Snapshot file to replay
        include_protected: Disable the built-in protected UID list
        protected_uids: Additional UIDs that must never be written
        order: Manual processing order; unlisted UIDs follow alphabetically
        dry_run: Walk the snapshot without issuing write requests
    """

    model_config = SettingsConfigDict(
        env_prefix="STRAPI_",
        extra="ignore",
        populate_by_name=True,
    )

    file: Path = Field(
        default=Path(DEFAULT_EXPORT_FILE),
        validation_alias=AliasChoices("file", "STRAPI_EXPORT_FILE"),
    )
    include_protected: bool = False
    protected_uids: UidList = Field(default_factory=list)
    order: UidList = Field(
        default_factory=list,
        validation_alias=AliasChoices("order", "STRAPI_IMPORT_ORDER"),
    )
    dry_run: bool = False

    @field_validator("protected_uids", "order", mode="before")
    @classmethod
    def _split(cls, value: Any) -> list[str]:
        return split_uid_list(value)


class EntityFailure(BaseModel):
    """A single write attempt that failed."""

    uid: str
    index: int | None = None
    status_code: int | None = None
    message: str
    body: Any = None


class ImportResult(BaseModel):
    """Replay statistics for one run.

    Counters only ever grow during a run. ``items`` counts entities that
    reached a write attempt, ``skipped`` counts entities deliberately not
    written (protected or empty), ``failed`` counts write attempts that
    errored.
    """

    items: int = 0
    created: int = 0
    skipped: int = 0
    failed: int = 0
    dry_run: bool = False
    failures: list[EntityFailure] = Field(default_factory=list)
    protected_detected: list[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        """True when no write attempt failed. Skips do not count."""
        return self.failed == 0

    def add_failure(self, failure: EntityFailure) -> None:
        """Record a failed write attempt."""
        self.failures.append(failure)
        self.failed += 1

    def summary(self) -> str:
        """One line summary of the four counters."""
        return (
            f"created: {self.created}, skipped: {self.skipped}, "
            f"failed: {self.failed}, processed entries: {self.items}"
        )
