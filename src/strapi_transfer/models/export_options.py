"""Options for the extraction side."""

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .config import UidList, split_uid_list

DEFAULT_EXPORT_FILE = "strapi-export.json"
DEFAULT_PAGE_SIZE = 250


class ExportOptions(BaseSettings):
    """Settings controlling what gets exported and where it is written.

    When both UID lists are empty the exporter discovers content types
    from the admin API.
    """

    model_config = SettingsConfigDict(
        env_prefix="STRAPI_",
        extra="ignore",
        populate_by_name=True,
    )

    output: Path = Field(
        default=Path(DEFAULT_EXPORT_FILE),
        validation_alias=AliasChoices("output", "STRAPI_EXPORT_FILE"),
    )
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)
    collection_uids: UidList = Field(default_factory=list)
    single_uids: UidList = Field(default_factory=list)

    @field_validator("collection_uids", "single_uids", mode="before")
    @classmethod
    def _split(cls, value: Any) -> list[str]:
        return split_uid_list(value)
