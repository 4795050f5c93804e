"""Configuration models for strapi-transfer.

Settings are read from keyword arguments first, then environment variables
(optionally loaded from a .env file), then defaults. Keyword arguments are
how the CLI applies flag overrides, so flags always take precedence.
"""

from typing import Annotated, Any

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_BASE_URL = "http://localhost:1337"

UidList = Annotated[list[str], NoDecode]


def split_uid_list(value: Any) -> list[str]:
    """Normalize a comma separated string or iterable into a list of UIDs.

    Items are trimmed and empty items dropped.

    Examples:
        >>> split_uid_list(" api::a.a, ,api::b.b ")
        ['api::a.a', 'api::b.b']
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = list(value)
    return [str(item).strip() for item in items if str(item).strip()]


class StrapiConfig(BaseSettings):
    """Connection settings for a Strapi admin API.

    Example:
        >>> config = StrapiConfig(
        ...     base_url="http://localhost:1337",
        ...     api_token="admin-jwt",
        ... )
        >>> config.get_base_url()
        'http://localhost:1337'
    """

    model_config = SettingsConfigDict(
        env_prefix="STRAPI_",
        extra="ignore",
        populate_by_name=True,
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        validation_alias=AliasChoices("base_url", "STRAPI_URL", "STRAPI_BASE_URL"),
        description="Base URL of the Strapi instance",
    )
    api_token: SecretStr = Field(
        validation_alias=AliasChoices(
            "api_token", "STRAPI_ADMIN_TOKEN", "STRAPI_TOKEN", "STRAPI_API_TOKEN"
        ),
        description="Admin bearer token",
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("base_url cannot be empty")
        return value

    @field_validator("api_token")
    @classmethod
    def _require_token(cls, value: SecretStr) -> SecretStr:
        # Tokens copied from browser storage may carry surrounding quotes
        token = value.get_secret_value().strip().strip('"')
        if not token:
            raise ValueError("api_token cannot be empty")
        return SecretStr(token)

    def get_base_url(self) -> str:
        """Return the base URL without a trailing slash."""
        return self.base_url

    def get_api_token(self) -> str:
        """Return the plain token value."""
        return self.api_token.get_secret_value()
