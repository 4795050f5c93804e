"""Content type registry models.

Parses the response of the admin ``GET /content-manager/content-types``
endpoint, which lists every model the Content Manager knows about.
"""

from typing import Any

from pydantic import BaseModel, Field

from .snapshot import COLLECTION_KIND, SINGLE_KIND


class ContentTypeInfo(BaseModel):
    """Display and naming information for a content type."""

    display_name: str | None = Field(None, alias="displayName")
    singular_name: str | None = Field(None, alias="singularName")
    plural_name: str | None = Field(None, alias="pluralName")
    description: str | None = None

    model_config = {"populate_by_name": True}


class ContentTypeListItem(BaseModel):
    """One entry of the content type registry."""

    uid: str
    kind: str = COLLECTION_KIND
    is_displayed: bool = Field(True, alias="isDisplayed")
    info: ContentTypeInfo = Field(default_factory=ContentTypeInfo)
    attributes: dict[str, Any] = Field(default_factory=dict)

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @property
    def is_api_model(self) -> bool:
        """True for models defined by the application (``api::`` namespace)."""
        return self.uid.startswith("api::")

    @property
    def is_single_type(self) -> bool:
        return self.kind == SINGLE_KIND


class ContentTypeListing(BaseModel):
    """Content types split by kind, each list sorted."""

    collection_types: list[str] = Field(default_factory=list)
    single_types: list[str] = Field(default_factory=list)

    @classmethod
    def from_items(cls, items: list[ContentTypeListItem]) -> "ContentTypeListing":
        """Keep displayed application models and group them by kind."""
        selected = [item for item in items if item.is_displayed and item.is_api_model]
        return cls(
            collection_types=sorted({i.uid for i in selected if not i.is_single_type}),
            single_types=sorted({i.uid for i in selected if i.is_single_type}),
        )
