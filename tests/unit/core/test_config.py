"""Tests for configuration management."""

from __future__ import annotations

from pathlib import Path

import pytest

from atlas_cortex.core.config import (
    CatalogSettings,
    CreationSettings,
    Settings,
    ShareSettings,
    clear_settings_cache,
    get_settings,
)
from atlas_cortex.core.exceptions import ConfigurationError


class TestCatalogSettings:
    """Tests for CatalogSettings configuration."""

    def test_default_values(self) -> None:
        settings = CatalogSettings()

        assert settings.engine_dir is None
        assert settings.include_builtin is True
        assert settings.allow_overrides is False

    def test_engine_dir_must_exist(self, tmp_path: Path) -> None:
        """A missing engine directory is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            CatalogSettings(engine_dir=tmp_path / "missing")

        assert exc_info.value.details["config_key"] == "engine_dir"

    def test_engine_dir_accepts_directory(self, tmp_path: Path) -> None:
        assert CatalogSettings(engine_dir=tmp_path).engine_dir == tmp_path


class TestCreationSettings:
    """Tests for CreationSettings configuration."""

    def test_default_values(self) -> None:
        settings = CreationSettings()

        assert settings.baseline_resource_max == 100
        assert settings.starting_level == 1
        assert settings.strict_required_fields is True

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATLAS_CORTEX_CREATION_BASELINE_RESOURCE_MAX", "250")

        assert CreationSettings().baseline_resource_max == 250


class TestShareSettings:
    """Tests for ShareSettings configuration."""

    def test_default_values(self) -> None:
        settings = ShareSettings()

        assert settings.code_prefix == "AC-"
        assert settings.current_version == 2

    def test_prefix_must_end_with_dash(self) -> None:
        """The prefix must be delimited from the payload alphabet."""
        with pytest.raises(ConfigurationError) as exc_info:
            ShareSettings(code_prefix="AC")

        assert "code_prefix" in str(exc_info.value)


class TestSettings:
    """Tests for main Settings configuration."""

    def test_default_settings(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.app_name == "Atlas Cortex"
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.is_production is True

    def test_env_vars(self, mock_env_vars: dict[str, str]) -> None:
        """Nested settings read their own prefixes."""
        settings = Settings()

        assert settings.debug is True
        assert settings.log_level == "DEBUG"
        assert settings.creation.baseline_resource_max == 50


class TestGetSettings:
    """Tests for the settings singleton."""

    def test_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_clear_cache(self) -> None:
        first = get_settings()
        clear_settings_cache()

        assert get_settings() is not first

    def test_invalid_env_raises_configuration_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATLAS_CORTEX_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError):
            get_settings()
