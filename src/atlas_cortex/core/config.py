"""Configuration management for the Atlas Cortex rules core.

This module provides centralized configuration management using
pydantic-settings, supporting environment variables, .env files, and
runtime configuration overrides.

Example:
    >>> from atlas_cortex.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.share.code_prefix
    'AC-'

Environment Variables:
    ATLAS_CORTEX_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    ATLAS_CORTEX_CATALOG_ENGINE_DIR: Directory of extra engine schema JSON files
    ATLAS_CORTEX_CREATION_BASELINE_RESOURCE_MAX: Starting value of resource pools
    ATLAS_CORTEX_SHARE_CODE_PREFIX: Prefix of generated share codes
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from atlas_cortex.core.constants import (
    BASELINE_RESOURCE_VALUE,
    SHARE_CODE_PREFIX,
    SHARE_CODE_VERSION,
)
from atlas_cortex.core.exceptions import ConfigurationError


class CatalogSettings(BaseSettings):
    """Configuration for the engine schema catalog.

    Attributes:
        engine_dir: Optional directory of engine schema JSON documents.
        include_builtin: Seed the catalog with the built-in world engines.
        allow_overrides: Let loaded documents replace an existing engine id.
    """

    model_config = SettingsConfigDict(
        env_prefix="ATLAS_CORTEX_CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    engine_dir: Path | None = Field(
        default=None,
        description="Directory of extra engine schema JSON documents",
    )
    include_builtin: bool = Field(
        default=True,
        description="Seed the catalog with built-in engines",
    )
    allow_overrides: bool = Field(
        default=False,
        description="Allow loaded documents to replace existing engines",
    )

    @field_validator("engine_dir", mode="after")
    @classmethod
    def ensure_directory(cls, value: Path | None) -> Path | None:
        """Reject an engine directory that does not exist.

        Args:
            value: The configured directory.

        Returns:
            The validated path.

        Raises:
            ConfigurationError: If the path is set but is not a directory.
        """
        if value is not None and not value.is_dir():
            raise ConfigurationError(
                f"Engine directory does not exist: {value}",
                config_key="engine_dir",
            )
        return value


class CreationSettings(BaseSettings):
    """Configuration for character creation.

    Attributes:
        baseline_resource_max: Current/max seeded into every resource pool.
        starting_level: Level given to newly created characters.
        strict_required_fields: Raise on missing required fields at finalize.
    """

    model_config = SettingsConfigDict(
        env_prefix="ATLAS_CORTEX_CREATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    baseline_resource_max: int = Field(
        default=BASELINE_RESOURCE_VALUE,
        ge=1,
        description="Starting current/max of every resource pool",
    )
    starting_level: int = Field(
        default=1,
        ge=0,
        description="Level of newly created characters",
    )
    strict_required_fields: bool = Field(
        default=True,
        description="Raise when required fields are missing at finalize",
    )


class ShareSettings(BaseSettings):
    """Configuration for character and save share codes.

    Attributes:
        code_prefix: Prefix marking a string as a share code.
        current_version: Payload version written into new codes.
        min_payload_length: Shortest payload accepted as a plausible code.
    """

    model_config = SettingsConfigDict(
        env_prefix="ATLAS_CORTEX_SHARE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    code_prefix: str = Field(
        default=SHARE_CODE_PREFIX,
        min_length=1,
        description="Share code prefix",
    )
    current_version: int = Field(
        default=SHARE_CODE_VERSION,
        ge=1,
        description="Share payload version",
    )
    min_payload_length: int = Field(
        default=10,
        ge=0,
        description="Minimum payload length for format checks",
    )

    @model_validator(mode="after")
    def validate_prefix(self) -> "ShareSettings":
        """Ensure the prefix is delimited from the payload.

        The payload alphabet includes letters, digits, '-' and '_', so the
        prefix must end with '-' to stay unambiguous.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If the prefix does not end with '-'.
        """
        if not self.code_prefix.endswith("-"):
            raise ConfigurationError(
                f"code_prefix ({self.code_prefix!r}) must end with '-'",
                config_key="code_prefix",
            )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_json: Emit JSON log lines instead of console output.
        catalog: Engine catalog settings.
        creation: Character creation settings.
        share: Share code settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="ATLAS_CORTEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Atlas Cortex",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="JSON log output",
    )

    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    creation: CreationSettings = Field(default_factory=CreationSettings)
    share: ShareSettings = Field(default_factory=ShareSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Primarily useful for testing or when environment variables have
    changed at runtime.
    """
    get_settings.cache_clear()


__all__ = [
    "CatalogSettings",
    "CreationSettings",
    "ShareSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
