"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Atlas Cortex test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from atlas_cortex.models.engine_schema import EngineSchema


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_caches() -> Generator[None, None, None]:
    """Reset the settings and catalog caches before and after each test."""
    from atlas_cortex.core.config import clear_settings_cache
    from atlas_cortex.engine.catalog import clear_catalog_cache

    clear_settings_cache()
    clear_catalog_cache()
    yield
    clear_settings_cache()
    clear_catalog_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "ATLAS_CORTEX_DEBUG": "true",
        "ATLAS_CORTEX_LOG_LEVEL": "DEBUG",
        "ATLAS_CORTEX_CREATION_BASELINE_RESOURCE_MAX": "50",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Schema Fixtures
# =============================================================================


@pytest.fixture
def classic_schema() -> EngineSchema:
    from atlas_cortex.engine.catalog import load_engine_schema

    return load_engine_schema("classic")


@pytest.fixture
def outworlder_schema() -> EngineSchema:
    from atlas_cortex.engine.catalog import load_engine_schema

    return load_engine_schema("outworlder")


@pytest.fixture
def tactical_schema() -> EngineSchema:
    from atlas_cortex.engine.catalog import load_engine_schema

    return load_engine_schema("tactical")


@pytest.fixture
def custom_schema_document() -> dict[str, Any]:
    """A schema document exercising every creation field type.

    Returns:
        camelCase catalog document.
    """
    return {
        "id": "starfall",
        "name": "Starfall",
        "stats": [
            {"id": "grit", "name": "Grit", "abbreviation": "GRT", "min": 1, "max": 20, "default": 10},
            {"id": "wits", "name": "Wits", "abbreviation": "WIT", "min": 1, "max": 20, "default": 10},
            {"id": "aura", "name": "Aura", "abbreviation": "AUR", "min": 0, "max": 100, "default": 50},
        ],
        "statPointBudget": 8,
        "resources": [
            {"id": "health", "name": "Health", "color": "#ef4444", "showInHUD": True},
            {"id": "mana", "name": "Mana", "color": "#3b82f6"},
        ],
        "progression": {"type": "level", "maxLevel": 10},
        "creationFields": [
            {"id": "callsign", "type": "text", "label": "Callsign", "required": True},
            {"id": "notes", "type": "textarea", "label": "Notes"},
            {"id": "age", "type": "number", "label": "Age", "validation": {"min": 16, "max": 90}},
            {
                "id": "origin",
                "type": "select",
                "label": "Origin",
                "required": True,
                "options": [
                    {"value": "core", "label": "Core Worlds"},
                    {"value": "rim", "label": "Outer Rim"},
                ],
            },
            {
                "id": "traits",
                "type": "multiselect",
                "label": "Traits",
                "options": [
                    {"value": "brave", "label": "Brave"},
                    {"value": "sly", "label": "Sly"},
                    {"value": "kind", "label": "Kind"},
                ],
            },
            {"id": "luck", "type": "slider", "label": "Luck", "validation": {"min": 3, "max": 9}},
            {"id": "oath", "type": "checkbox", "label": "Sworn Oath"},
            {"id": "portrait", "type": "image", "label": "Portrait"},
        ],
    }


@pytest.fixture
def custom_schema(custom_schema_document: dict[str, Any]) -> EngineSchema:
    return EngineSchema.model_validate(custom_schema_document)


# =============================================================================
# Character Fixtures
# =============================================================================


@pytest.fixture
def raw_outworlder() -> dict[str, Any]:
    """Provide an outworlder character as persisted (no mana field).

    Returns:
        camelCase character document.
    """
    return {
        "world": "outworlder",
        "id": "ow-1",
        "name": "Jason Asano",
        "level": 1,
        "rank": "iron",
        "hp": {"current": 80, "max": 120},
        "spirit": {"current": 60, "max": 110},
        "stats": {"power": 12, "speed": 11, "spirit": 11, "recovery": 10},
        "essences": ["Dark", "Blood", "Sin"],
        "confluence": "Doom",
        "abilities": [
            {"name": "Midnight Eyes", "type": "utility", "rank": "Iron", "currentCooldown": 0},
            "Leech Bite [attack] - Drains the target",
        ],
        "fateEngine": {"momentum_counter": 2, "pity_crit_counter": 5},
    }


@pytest.fixture
def raw_tactical() -> dict[str, Any]:
    """Provide a tactical operative with loadout and skills.

    Returns:
        camelCase character document.
    """
    return {
        "world": "tactical",
        "name": "Kai",
        "level": 7,
        "job": "Specialist",
        "hp": {"current": 150, "max": 170},
        "nanites": {"current": 40, "max": 100},
        "stats": {"strength": 14, "agility": 18, "vitality": 17, "intelligence": 12, "perception": 15},
        "skills": [{"name": "Shadow Step", "rank": "C", "type": "active", "cooldown": 3}],
        "weapons": ["Pulse Carbine"],
        "loadout": {"armor": {"name": "Tactical Vest", "rank": "B"}},
        "tacticalSquad": [{"id": "u1", "name": "Igris", "rank": "Knight"}],
    }
