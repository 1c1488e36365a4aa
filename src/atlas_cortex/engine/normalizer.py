"""Projection of any world's character onto the unified view.

The raw character may come straight from the AI layer, so every field is
coerced defensively: anything that does not have the expected shape falls
back to a default or is left out. Resources and stats follow the schema's
declared order. World-specific structures reach the view through
``extras`` when they have a recognizable shape.

The normalizer never raises; a malformed character yields a partial view.

Example:
    >>> from atlas_cortex.engine.catalog import load_engine_schema
    >>> view = normalize_character(
    ...     {"name": "Kai", "stats": {"strength": 14}, "hp": {"current": 50, "max": 200}},
    ...     load_engine_schema("tactical"),
    ... )
    >>> view.resource("Health").percentage
    25.0
"""

from __future__ import annotations

import copy
import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel

from atlas_cortex.core.constants import (
    DEFAULT_RESOURCE_MAX,
    LEGACY_RESOURCE_NAMES,
    MODIFIER_ELIGIBLE_MAX,
)
from atlas_cortex.core.logging import get_logger
from atlas_cortex.engine.stat_mapper import calculate_modifier, coerce_number
from atlas_cortex.models.engine_schema import EngineSchema, ResourceDefinition, StatDefinition
from atlas_cortex.models.view import (
    NormalizedAbility,
    NormalizedItem,
    NormalizedResource,
    NormalizedStat,
    UnifiedCharacterView,
)


logger = get_logger(__name__)

UNKNOWN_NAME = "Unknown"

STAT_ICONS: MappingProxyType[str, str] = MappingProxyType(
    {
        "strength": "💪",
        "dexterity": "🏃",
        "constitution": "🛡️",
        "intelligence": "🧠",
        "wisdom": "👁️",
        "charisma": "✨",
        "power": "💪",
        "speed": "🏃",
        "stamina": "🔋",
        "spirit": "✨",
        "recovery": "❤️",
        "agility": "🏃",
        "vitality": "❤️",
        "sense": "👁️",
        "perception": "👁️",
        "combat": "🎯",
        "tactics": "🧠",
        "stealth": "👤",
        "leadership": "⭐",
    }
)
"""Stat icons keyed by lower-case stat id or display name."""

# Top-level keys the normalizer reads itself.
CORE_KEYS = frozenset(
    {
        "id",
        "world",
        "name",
        "level",
        "rank",
        "class",
        "job",
        "race",
        "experience",
        "hp",
        "stats",
        "resources",
        "inventory",
        "weapons",
        "loadout",
        "equipment",
        "abilities",
        "skills",
    }
)

# Lists passed through to extras by key.
EXTRA_LIST_KEYS = frozenset({"essences", "tacticalSquad", "shadowArmy", "quests"})

# Scalars passed through to extras by key.
EXTRA_SCALAR_KEYS = frozenset(
    {"confluence", "alignment", "background", "specialization", "title", "missionPoints"}
)

_ABILITY_PATTERN = re.compile(r"^(.+?)\s*\[(.+?)\]\s*-\s*(.+)$")


# =============================================================================
# Coercion
# =============================================================================


def _integer(value: Any, *, minimum: int | None = None) -> int | None:
    number = coerce_number(value)
    if number is None:
        return None
    result = int(number)
    if minimum is not None and result < minimum:
        return None
    return result


def _text(value: Any) -> str | None:
    """A non-blank string, or None. Numbers are stringified."""
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _flag(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def _is_pair(value: Any) -> bool:
    return (
        isinstance(value, Mapping)
        and coerce_number(value.get("current")) is not None
        and coerce_number(value.get("max")) is not None
    )


# =============================================================================
# Normalizer
# =============================================================================


class Normalizer:
    """Builds UnifiedCharacterView instances.

    Stateless; one instance can serve any number of callers.
    """

    def normalize(self, character: Any, schema: EngineSchema) -> UnifiedCharacterView:
        """Project a character onto the unified view.

        Args:
            character: Character model or raw character mapping.
            schema: Engine schema of the character's world.

        Returns:
            The view; partial when the character is malformed.
        """
        raw = self._raw(character)
        if raw is None:
            return UnifiedCharacterView(name=UNKNOWN_NAME)
        try:
            return self._build(raw, schema)
        except Exception:
            logger.exception("Character normalization failed", engine_id=schema.id)
            return UnifiedCharacterView(name=_text(raw.get("name")) or UNKNOWN_NAME)

    @staticmethod
    def _raw(character: Any) -> dict[str, Any] | None:
        if isinstance(character, BaseModel):
            return character.model_dump(mode="json", by_alias=True)
        if isinstance(character, Mapping):
            return dict(character)
        return None

    def _build(self, raw: dict[str, Any], schema: EngineSchema) -> UnifiedCharacterView:
        consumed: set[str] = set(CORE_KEYS)
        resources = self._resources(raw, schema, consumed)
        stats = self._stats(raw, schema, consumed)
        return UnifiedCharacterView(
            name=_text(raw.get("name")) or UNKNOWN_NAME,
            rank=self._rank(raw.get("rank"), schema),
            level=self._level(raw.get("level"), schema),
            class_=_text(raw.get("class")) or _text(raw.get("job")),
            race=_text(raw.get("race")),
            experience=self._experience(raw.get("experience")),
            resources=tuple(resources),
            stats=tuple(stats),
            inventory=tuple(self._inventory(raw)),
            abilities=tuple(self._abilities(raw)),
            extras=self._extras(raw, consumed),
        )

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    @staticmethod
    def _level(value: Any, schema: EngineSchema) -> int:
        if schema.is_rank_based:
            return 0
        level = _integer(value, minimum=0)
        return 1 if level is None else level

    @staticmethod
    def _rank(value: Any, schema: EngineSchema) -> str | None:
        label = _text(value)
        if label is None:
            return None
        rank = schema.rank_by_key(label)
        return rank.name if rank is not None else label

    @staticmethod
    def _experience(value: Any) -> dict[str, float] | None:
        if not _is_pair(value):
            return None
        return {"current": coerce_number(value["current"]), "max": coerce_number(value["max"])}

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------

    def _resources(
        self, raw: dict[str, Any], schema: EngineSchema, consumed: set[str]
    ) -> list[NormalizedResource]:
        nested = raw.get("resources")
        nested = nested if isinstance(nested, Mapping) else {}
        result = []
        for definition in schema.resources:
            resolved = self._resolve_resource(raw, nested, definition, consumed)
            if resolved is None:
                logger.debug("Resource missing from character", resource=definition.id)
                continue
            result.append(resolved)
        return result

    def _resolve_resource(
        self,
        raw: dict[str, Any],
        nested: Mapping[str, Any],
        definition: ResourceDefinition,
        consumed: set[str],
    ) -> NormalizedResource | None:
        pair = self._pool(nested.get(definition.id))
        # Top-level pools under the id or a legacy name are this resource
        # even when the nested map wins.
        for key in (definition.id, *LEGACY_RESOURCE_NAMES.get(definition.id, ())):
            candidate = self._pool(raw.get(key))
            if candidate is None:
                continue
            consumed.add(key)
            if pair is None:
                pair = candidate
        if pair is None:
            return None
        current, maximum = pair
        return NormalizedResource(
            name=definition.name,
            current=current,
            max=maximum,
            color=definition.color,
            icon=definition.icon,
        )

    @staticmethod
    def _pool(value: Any) -> tuple[float, float] | None:
        """``(current, max)`` of a pool mapping or bare number."""
        if isinstance(value, Mapping):
            current = coerce_number(value.get("current"))
            if current is None:
                return None
            maximum = coerce_number(value.get("max"))
            if maximum is None:
                maximum = float(DEFAULT_RESOURCE_MAX)
            return max(0.0, current), max(0.0, maximum)
        current = coerce_number(value)
        if current is None:
            return None
        return max(0.0, current), float(DEFAULT_RESOURCE_MAX)

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------

    def _stats(
        self, raw: dict[str, Any], schema: EngineSchema, consumed: set[str]
    ) -> list[NormalizedStat]:
        values = raw.get("stats")
        values = values if isinstance(values, Mapping) else {}
        return [self._stat(raw, values, definition, consumed) for definition in schema.stats]

    @staticmethod
    def _stat(
        raw: dict[str, Any],
        values: Mapping[str, Any],
        definition: StatDefinition,
        consumed: set[str],
    ) -> NormalizedStat:
        value = coerce_number(values.get(definition.id))
        if value is None:
            for key in (definition.id, definition.name.lower()):
                value = coerce_number(raw.get(key))
                if value is not None:
                    consumed.add(key)
                    break
        if value is None:
            value = float(definition.default)
        icon = STAT_ICONS.get(definition.id.lower()) or STAT_ICONS.get(definition.name.lower())
        modifier = calculate_modifier(value) if definition.max <= MODIFIER_ELIGIBLE_MAX else None
        return NormalizedStat(
            id=definition.id,
            name=definition.name,
            abbreviation=definition.abbreviation,
            value=value,
            icon=icon,
            modifier=modifier,
        )

    # -------------------------------------------------------------------------
    # Inventory
    # -------------------------------------------------------------------------

    def _inventory(self, raw: dict[str, Any]) -> list[NormalizedItem]:
        items: list[NormalizedItem] = []
        inventory = raw.get("inventory")
        if isinstance(inventory, list):
            for entry in inventory:
                item = self._item(entry, fallback_name="Unknown Item")
                if item is not None:
                    items.append(item)
        weapons = raw.get("weapons")
        if isinstance(weapons, list):
            for entry in weapons:
                item = self._item(entry, fallback_name="Unknown Weapon", slot="weapon", equipped=True)
                if item is not None:
                    items.append(item)
        for key in ("loadout", "equipment"):
            slots = raw.get(key)
            if not isinstance(slots, Mapping):
                continue
            for slot, entry in slots.items():
                item = self._item(
                    entry, fallback_name=_capitalize(str(slot)), slot=str(slot), equipped=True
                )
                if item is not None:
                    items.append(item)
        return items

    @staticmethod
    def _item(
        entry: Any,
        *,
        fallback_name: str,
        slot: str | None = None,
        equipped: bool = False,
    ) -> NormalizedItem | None:
        if isinstance(entry, str):
            name = entry.strip()
            return NormalizedItem(name=name, type=slot, equipped=equipped) if name else None
        if not isinstance(entry, Mapping):
            return None
        quantity = 1 if slot else _integer(entry.get("quantity"), minimum=1) or 1
        return NormalizedItem(
            id=_text(entry.get("id")),
            name=_text(entry.get("name")) or fallback_name,
            quantity=quantity,
            type=slot or _text(entry.get("type")),
            equipped=_flag(entry.get("equipped"), equipped),
            rank=_text(entry.get("rank")),
        )

    # -------------------------------------------------------------------------
    # Abilities
    # -------------------------------------------------------------------------

    def _abilities(self, raw: dict[str, Any]) -> list[NormalizedAbility]:
        result: list[NormalizedAbility] = []
        candidates: list[NormalizedAbility] = []
        abilities = raw.get("abilities")
        if isinstance(abilities, list):
            candidates.extend(
                ability
                for ability in (self._ability(entry, "Unknown Ability") for entry in abilities)
                if ability is not None
            )
        skills = raw.get("skills")
        if isinstance(skills, list):
            candidates.extend(
                self._ability(entry, "Unknown Skill")
                for entry in skills
                if isinstance(entry, Mapping)
            )
        for ability in candidates:
            if not any(_same_ability(ability.name, kept.name) for kept in result):
                result.append(ability)
        return result

    @staticmethod
    def _ability(entry: Any, fallback_name: str) -> NormalizedAbility | None:
        if isinstance(entry, str):
            text = entry.strip()
            if not text:
                return None
            match = _ABILITY_PATTERN.match(text)
            if match is None:
                return NormalizedAbility(name=text)
            name, kind, description = (part.strip() for part in match.groups())
            return NormalizedAbility(name=name, type=kind, description=description)
        if not isinstance(entry, Mapping):
            return None
        return NormalizedAbility(
            name=_text(entry.get("name")) or fallback_name,
            rank=_text(entry.get("rank")),
            type=_text(entry.get("type")),
            current_cooldown=_integer(entry.get("currentCooldown"), minimum=0),
            cooldown=_integer(entry.get("cooldown"), minimum=0),
            description=_text(entry.get("description")),
            essence=_text(entry.get("essence")),
            cost=_text(entry.get("cost")),
            cost_amount=_integer(entry.get("costAmount"), minimum=0),
        )

    # -------------------------------------------------------------------------
    # Extras
    # -------------------------------------------------------------------------

    @staticmethod
    def _extras(raw: dict[str, Any], consumed: set[str]) -> dict[str, Any]:
        extras: dict[str, Any] = {}
        for key, value in raw.items():
            if key in consumed or value is None:
                continue
            if _is_extra(key, value):
                extras[key] = copy.deepcopy(value)
        return extras


def _same_ability(first: str, second: str) -> bool:
    """Fuzzy name match: equal, or one contains the other."""
    a, b = first.strip().lower(), second.strip().lower()
    return a == b or a in b or b in a


def _is_extra(key: str, value: Any) -> bool:
    """Whether a leftover top-level field has a shape the view layer knows."""
    if key in EXTRA_SCALAR_KEYS:
        return _text(value) is not None
    if isinstance(value, list):
        return key in EXTRA_LIST_KEYS
    if not isinstance(value, Mapping) or not value:
        return False
    if _is_pair(value):
        return True
    # counter map, e.g. fate engine counters
    if all(coerce_number(item) is not None for item in value.values()):
        return True
    # map of pairs, e.g. spell slots by level
    return all(_is_pair(item) for item in value.values())


_default_normalizer = Normalizer()


def normalize_character(character: Any, schema: EngineSchema) -> UnifiedCharacterView:
    """Normalize with the shared stateless Normalizer."""
    return _default_normalizer.normalize(character, schema)


__all__ = [
    "STAT_ICONS",
    "Normalizer",
    "normalize_character",
]
