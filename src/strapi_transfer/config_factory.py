"""Construction of configuration values with consistent error handling.

Every settings model is built here so that validation failures surface as
ConfigurationError, and so CLI overrides are applied the same way
everywhere: explicit values win over environment variables, which win over
defaults.
"""

import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import ValidationError
from pydantic_settings import BaseSettings

from .exceptions import ConfigurationError
from .models.config import StrapiConfig, split_uid_list
from .models.export_options import ExportOptions
from .models.import_options import ImportOptions

logger = logging.getLogger(__name__)

SettingsT = TypeVar("SettingsT", bound=BaseSettings)

MISSING_TOKEN_MESSAGE = (
    "Missing Strapi admin token. Provide --token, STRAPI_ADMIN_TOKEN, or STRAPI_TOKEN."
)


def _drop_unset(overrides: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in overrides.items() if value is not None}


def _build(
    settings_cls: type[SettingsT], env_file: str | Path | None, overrides: dict[str, Any]
) -> SettingsT:
    env_path = Path(env_file) if env_file else None
    if env_path is not None and not env_path.is_file():
        raise ConfigurationError(f".env file not found: {env_path}")

    try:
        return settings_cls(_env_file=env_path, **_drop_unset(overrides))  # type: ignore[call-arg]
    except ValidationError as e:
        missing = {
            str(error["loc"][0]) for error in e.errors() if error["type"] == "missing"
        }
        if "api_token" in missing:
            raise ConfigurationError(MISSING_TOKEN_MESSAGE) from e
        raise ConfigurationError(f"Invalid configuration: {e}") from e


class ConfigFactory:
    """Factory methods for configuration values.

    Example:
        >>> config = ConfigFactory.create(api_token="admin-jwt")
        >>> options = ConfigFactory.import_options(order="api::author.author")
    """

    @staticmethod
    def create(env_file: str | Path | None = None, **overrides: Any) -> StrapiConfig:
        """Build connection settings.

        Args:
            env_file: Optional .env file to read in addition to the environment
            **overrides: Explicit values; None means "not given"

        Raises:
            ConfigurationError: If the token is missing or a value is invalid
        """
        return _build(StrapiConfig, env_file, overrides)

    @staticmethod
    def from_environment_only() -> StrapiConfig:
        """Build connection settings from environment variables alone."""
        return _build(StrapiConfig, None, {})

    @staticmethod
    def import_options(env_file: str | Path | None = None, **overrides: Any) -> ImportOptions:
        """Build import options.

        Protected UIDs given explicitly are added to those from the
        environment rather than replacing them.
        """
        extra_protected = overrides.pop("protected_uids", None)
        if extra_protected is not None:
            configured = _build(ImportOptions, env_file, {}).protected_uids
            merged = list(dict.fromkeys(configured + split_uid_list(extra_protected)))
            overrides["protected_uids"] = merged
        return _build(ImportOptions, env_file, overrides)

    @staticmethod
    def export_options(env_file: str | Path | None = None, **overrides: Any) -> ExportOptions:
        """Build export options."""
        return _build(ExportOptions, env_file, overrides)


def load_config(env_file: str | Path | None = None, **overrides: Any) -> StrapiConfig:
    """Shortcut for ``ConfigFactory.create``."""
    return ConfigFactory.create(env_file, **overrides)
