"""Engine schema catalog.

The catalog owns every EngineSchema known to the process: the built-in
world engines plus any documents loaded from an engine directory or
registered at runtime. Schemas are validated once on registration and then
shared read-only.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from atlas_cortex.core.config import CatalogSettings, get_settings
from atlas_cortex.core.exceptions import EngineSchemaError, UnknownEngineSchemaError
from atlas_cortex.core.logging import get_logger
from atlas_cortex.models.engine_schema import EngineSchema


logger = get_logger(__name__)


# =============================================================================
# Built-in Engines
# =============================================================================

BUILTIN_ENGINE_DOCUMENTS: tuple[dict[str, Any], ...] = (
    {
        "id": "classic",
        "name": "Classic D&D",
        "description": "D&D 5e style gameplay with six core attributes",
        "order": 1,
        "stats": [
            {"id": "STR", "name": "Strength", "abbreviation": "STR", "min": 8, "max": 20, "default": 10},
            {"id": "DEX", "name": "Dexterity", "abbreviation": "DEX", "min": 8, "max": 20, "default": 10},
            {"id": "CON", "name": "Constitution", "abbreviation": "CON", "min": 8, "max": 20, "default": 10},
            {"id": "INT", "name": "Intelligence", "abbreviation": "INT", "min": 8, "max": 20, "default": 10},
            {"id": "WIS", "name": "Wisdom", "abbreviation": "WIS", "min": 8, "max": 20, "default": 10},
            {"id": "CHA", "name": "Charisma", "abbreviation": "CHA", "min": 8, "max": 20, "default": 10},
        ],
        "statPointBudget": 15,
        "resources": [
            {"id": "hp", "name": "Health", "color": "#10b981", "icon": "❤️", "showInHUD": True},
        ],
        "progression": {"type": "level", "maxLevel": 20},
        "creationFields": [
            {
                "id": "class",
                "type": "select",
                "label": "Class",
                "required": True,
                "options": [
                    {"value": "fighter", "label": "Fighter"},
                    {"value": "wizard", "label": "Wizard"},
                    {"value": "rogue", "label": "Rogue"},
                    {"value": "cleric", "label": "Cleric"},
                    {"value": "ranger", "label": "Ranger"},
                    {"value": "paladin", "label": "Paladin"},
                ],
            },
            {
                "id": "race",
                "type": "select",
                "label": "Race",
                "required": True,
                "options": [
                    {"value": "human", "label": "Human"},
                    {"value": "elf", "label": "Elf"},
                    {"value": "dwarf", "label": "Dwarf"},
                    {"value": "halfling", "label": "Halfling"},
                ],
            },
            {"id": "background", "type": "text", "label": "Background", "aiGeneratable": True},
        ],
        "aiContext": (
            "D&D 5e fantasy RPG. Characters have six core attributes (STR, DEX, CON, "
            "INT, WIS, CHA). Use d20 rolls for ability checks, adding relevant "
            "attribute modifiers. Combat uses turn-based initiative."
        ),
    },
    {
        "id": "outworlder",
        "name": "Outworlder",
        "description": "HWFWM Essence System with rank-based progression",
        "order": 2,
        "stats": [
            {"id": "power", "name": "Power", "abbreviation": "PWR", "min": 10, "max": 100, "default": 10},
            {"id": "speed", "name": "Speed", "abbreviation": "SPD", "min": 10, "max": 100, "default": 10},
            {"id": "spirit", "name": "Spirit", "abbreviation": "SPI", "min": 10, "max": 100, "default": 10},
            {"id": "recovery", "name": "Recovery", "abbreviation": "REC", "min": 10, "max": 100, "default": 10},
        ],
        "statPointBudget": 10,
        "resources": [
            {"id": "hp", "name": "Health", "color": "#10b981", "icon": "❤️", "showInHUD": True},
            {"id": "mana", "name": "Mana", "color": "#3b82f6", "icon": "💧", "showInHUD": True},
            {"id": "stamina", "name": "Stamina", "color": "#f59e0b", "icon": "⚡", "showInHUD": True},
        ],
        "progression": {
            "type": "rank",
            "ranks": [
                {"id": "iron", "name": "Iron", "order": 1},
                {"id": "bronze", "name": "Bronze", "order": 2},
                {"id": "silver", "name": "Silver", "order": 3},
                {"id": "gold", "name": "Gold", "order": 4},
                {"id": "diamond", "name": "Diamond", "order": 5},
            ],
        },
        "creationFields": [
            {"id": "background", "type": "text", "label": "Origin Story", "aiGeneratable": True},
        ],
        "aiContext": (
            "HWFWM-style essence magic system. Characters progress through ranks "
            "(Iron → Bronze → Silver → Gold → Diamond). Powers come from absorbed "
            "essences. Stats are Power, Speed, Spirit, and Recovery. Combat "
            "emphasizes essence ability combinations."
        ),
    },
    {
        "id": "tactical",
        "name": "Praxis",
        "description": "Elite tactical operations system with mission-based progression",
        "order": 3,
        "stats": [
            {"id": "strength", "name": "Strength", "abbreviation": "STR", "min": 10, "max": 999, "default": 10},
            {"id": "agility", "name": "Agility", "abbreviation": "AGI", "min": 10, "max": 999, "default": 10},
            {"id": "vitality", "name": "Vitality", "abbreviation": "VIT", "min": 10, "max": 999, "default": 10},
            {"id": "intelligence", "name": "Intelligence", "abbreviation": "INT", "min": 10, "max": 999, "default": 10},
            {"id": "perception", "name": "Perception", "abbreviation": "PER", "min": 10, "max": 999, "default": 10},
        ],
        "statPointBudget": 10,
        "resources": [
            {"id": "hp", "name": "Health", "color": "#ef4444", "icon": "❤️", "showInHUD": True},
            {"id": "nanites", "name": "Nanites", "color": "#3b82f6", "icon": "🔷", "showInHUD": True},
            {"id": "stamina", "name": "Stamina", "color": "#f59e0b", "icon": "⚡", "showInHUD": True},
        ],
        "progression": {"type": "level", "maxLevel": 100},
        "creationFields": [
            {
                "id": "class",
                "type": "select",
                "label": "Operative Class",
                "required": True,
                "options": [
                    {"value": "fighter", "label": "Fighter"},
                    {"value": "mage", "label": "Mage"},
                    {"value": "assassin", "label": "Assassin"},
                    {"value": "tank", "label": "Tank"},
                    {"value": "healer", "label": "Healer"},
                ],
            },
            {"id": "title", "type": "text", "label": "Operative Title"},
        ],
        "aiContext": (
            "PRAXIS tactical operations system. Operatives have game-like stats "
            "(STR, AGI, VIT, INT, PER) that can reach 999. Level-based progression "
            "up to level 100. Combat is tactical with skills, missions, and "
            "supernatural threat encounters."
        ),
    },
)


# =============================================================================
# Catalog
# =============================================================================


class EngineCatalog:
    """Registry of engine schemas keyed by engine id.

    Example:
        >>> catalog = EngineCatalog.with_builtins()
        >>> catalog.get("outworlder").is_rank_based
        True
    """

    def __init__(
        self,
        schemas: list[EngineSchema] | None = None,
        *,
        allow_overrides: bool = False,
    ) -> None:
        """Initialize the catalog.

        Args:
            schemas: Schemas to register up front.
            allow_overrides: Let registration replace an existing engine id.
        """
        self._schemas: dict[str, EngineSchema] = {}
        self.allow_overrides = allow_overrides
        for schema in schemas or []:
            self.register(schema)

    @classmethod
    def with_builtins(cls, *, allow_overrides: bool = False) -> EngineCatalog:
        """Create a catalog seeded with the built-in world engines."""
        catalog = cls(allow_overrides=allow_overrides)
        for document in BUILTIN_ENGINE_DOCUMENTS:
            catalog.register_document(document)
        return catalog

    @classmethod
    def from_settings(cls, settings: CatalogSettings | None = None) -> EngineCatalog:
        """Create a catalog as configured by CatalogSettings."""
        settings = settings or get_settings().catalog
        if settings.include_builtin:
            catalog = cls.with_builtins(allow_overrides=settings.allow_overrides)
        else:
            catalog = cls(allow_overrides=settings.allow_overrides)
        if settings.engine_dir is not None:
            catalog.load_directory(settings.engine_dir)
        return catalog

    def __contains__(self, engine_id: object) -> bool:
        return engine_id in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def __iter__(self) -> Iterator[EngineSchema]:
        return iter(self.schemas())

    def get(self, engine_id: str) -> EngineSchema:
        """Get the schema of an engine.

        Args:
            engine_id: Engine identifier.

        Returns:
            The registered EngineSchema.

        Raises:
            UnknownEngineSchemaError: If no engine has this id.
        """
        schema = self._schemas.get(engine_id)
        if schema is None:
            raise UnknownEngineSchemaError(
                f"Engine schema not found: {engine_id}",
                engine_id=engine_id,
                details={"available": self.ids()},
            )
        return schema

    def find(self, engine_id: str) -> EngineSchema | None:
        return self._schemas.get(engine_id)

    def ids(self) -> list[str]:
        """Engine ids in display order."""
        return [schema.id for schema in self.schemas()]

    def schemas(self) -> list[EngineSchema]:
        """Registered schemas sorted by ``order``; unordered ones last."""
        return sorted(
            self._schemas.values(),
            key=lambda schema: (schema.order is None, schema.order or 0, schema.id),
        )

    def register(self, schema: EngineSchema, *, replace: bool | None = None) -> EngineSchema:
        """Add a schema to the catalog.

        Args:
            schema: Validated engine schema.
            replace: Replace an existing schema with the same id. Defaults
                to the catalog's ``allow_overrides``.

        Returns:
            The registered schema.

        Raises:
            EngineSchemaError: If the id is taken and replacement is not allowed.
        """
        replace = self.allow_overrides if replace is None else replace
        if schema.id in self._schemas and not replace:
            raise EngineSchemaError(
                f"Engine schema already registered: {schema.id}",
                engine_id=schema.id,
            )
        self._schemas[schema.id] = schema
        logger.debug(
            "Engine schema registered",
            engine_id=schema.id,
            stats=len(schema.stats),
            resources=len(schema.resources),
        )
        return schema

    def register_document(
        self, document: Mapping[str, Any], *, replace: bool | None = None
    ) -> EngineSchema:
        """Validate a catalog document and register the resulting schema.

        Raises:
            EngineSchemaError: If the document is not a valid engine schema.
        """
        try:
            schema = EngineSchema.model_validate(document)
        except PydanticValidationError as exc:
            engine_id = document.get("id") if isinstance(document.get("id"), str) else None
            raise EngineSchemaError(
                f"Invalid engine schema document: {engine_id or '<no id>'}",
                engine_id=engine_id,
                details={"errors": [err["msg"] for err in exc.errors()]},
            ) from exc
        return self.register(schema, replace=replace)

    def load_directory(self, path: Path | str) -> list[EngineSchema]:
        """Register every ``*.json`` engine document in a directory.

        Args:
            path: Directory to scan (not recursive).

        Returns:
            The schemas loaded, in file name order.

        Raises:
            EngineSchemaError: If a file is not valid JSON or not a valid schema.
        """
        directory = Path(path)
        loaded: list[EngineSchema] = []
        for file_path in sorted(directory.glob("*.json")):
            try:
                document = json.loads(file_path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                raise EngineSchemaError(
                    f"Cannot read engine schema file: {file_path.name}",
                    details={"path": str(file_path), "reason": str(exc)},
                ) from exc
            if not isinstance(document, dict):
                raise EngineSchemaError(
                    f"Engine schema file must hold a JSON object: {file_path.name}",
                    details={"path": str(file_path)},
                )
            loaded.append(self.register_document(document))
        logger.info("Engine directory loaded", path=str(directory), engines=len(loaded))
        return loaded


@lru_cache
def get_catalog() -> EngineCatalog:
    """Get the process-wide catalog, built from settings on first use."""
    return EngineCatalog.from_settings()


def clear_catalog_cache() -> None:
    """Drop the process-wide catalog so the next call rebuilds it."""
    get_catalog.cache_clear()


def load_engine_schema(engine_id: str) -> EngineSchema:
    """Load an engine schema from the process-wide catalog.

    Raises:
        UnknownEngineSchemaError: If no engine has this id.
    """
    return get_catalog().get(engine_id)


__all__ = [
    "BUILTIN_ENGINE_DOCUMENTS",
    "EngineCatalog",
    "get_catalog",
    "clear_catalog_cache",
    "load_engine_schema",
]
