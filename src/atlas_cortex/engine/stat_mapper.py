"""Translation of rule-agnostic stat names into world-native fields.

The AI layer speaks in generic or legacy (D&D) stat names; each world
stores its stats under its own ids. The mapping tables here are fixed for
the lifetime of the process. Supporting a new engine means adding a table,
not touching the lookup logic.

Lookups never raise: an unrecognized name falls back to itself and emits
an UnknownStatWarning, because gameplay must go on.

Example:
    >>> get_stat_value("tactical", "STR", {"strength": 14})
    14
    >>> calculate_modifier(14)
    2
"""

from __future__ import annotations

import math
import warnings
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from atlas_cortex.core.constants import NEUTRAL_STAT_VALUE
from atlas_cortex.core.exceptions import UnknownStatWarning
from atlas_cortex.core.logging import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class StatMapping:
    """Where a requested stat lives in a world's character.

    Attributes:
        native_field_id: Key of the stat in the character's stats map.
        display_name: Label to show for the stat.
    """

    native_field_id: str
    display_name: str


def _table(
    native: Mapping[str, str],
    aliases: Mapping[str, str],
) -> MappingProxyType[str, StatMapping]:
    """Build a mapping table.

    Args:
        native: Native stat id -> display name. Each id is also reachable
            by its display name.
        aliases: Legacy name -> native stat id.
    """
    entries: dict[str, StatMapping] = {}
    for alias, stat_id in aliases.items():
        entries[alias] = StatMapping(stat_id, native[stat_id])
    for stat_id, display in native.items():
        entries[stat_id] = StatMapping(stat_id, display)
        entries[display] = StatMapping(stat_id, display)
    return MappingProxyType(entries)


STAT_MAPPINGS: MappingProxyType[str, MappingProxyType[str, StatMapping]] = MappingProxyType(
    {
        "classic": _table(
            {
                "STR": "Strength",
                "DEX": "Dexterity",
                "CON": "Constitution",
                "INT": "Intelligence",
                "WIS": "Wisdom",
                "CHA": "Charisma",
            },
            {},
        ),
        "outworlder": _table(
            {"power": "Power", "speed": "Speed", "spirit": "Spirit", "recovery": "Recovery"},
            {
                "STR": "power",
                "DEX": "speed",
                "CON": "spirit",
                "WIS": "recovery",
                # no direct equivalent
                "INT": "spirit",
                "CHA": "recovery",
            },
        ),
        "tactical": _table(
            {
                "strength": "Strength",
                "agility": "Agility",
                "vitality": "Vitality",
                "intelligence": "Intelligence",
                "perception": "Perception",
            },
            {
                "STR": "strength",
                "DEX": "agility",
                "CON": "vitality",
                "INT": "intelligence",
                "WIS": "perception",
                # no direct equivalent
                "CHA": "perception",
            },
        ),
    }
)
"""Mapping tables keyed by engine id."""

WORLD_STAT_CONTEXT: MappingProxyType[str, str] = MappingProxyType(
    {
        "classic": (
            "Use D&D 5E stats: STR (Strength), DEX (Dexterity), CON (Constitution), "
            "INT (Intelligence), WIS (Wisdom), CHA (Charisma)."
        ),
        "outworlder": (
            "Use Outworlder stats ONLY: power, speed, spirit, recovery. "
            "NEVER use D&D stat names (STR/DEX/etc)."
        ),
        "tactical": (
            "Use Tactical stats ONLY: strength, agility, vitality, intelligence, "
            "perception. NEVER use D&D stat names (STR/DEX/etc)."
        ),
    }
)


def _warn(message: str, **context: object) -> None:
    logger.warning(message, **context)
    warnings.warn(message, UnknownStatWarning, stacklevel=3)


def map_stat(engine_id: str, requested_name: str) -> StatMapping:
    """Map a requested stat name to the engine's native field.

    Tries an exact match, then the upper-cased name, and finally falls
    back to the requested name itself (with an UnknownStatWarning).

    Args:
        engine_id: Engine whose table to use.
        requested_name: Stat name as supplied by the caller.

    Returns:
        The native field id and display name.
    """
    table = STAT_MAPPINGS.get(engine_id)
    if table is not None:
        mapping = table.get(requested_name) or table.get(requested_name.upper())
        if mapping is not None:
            return mapping
    _warn(
        f'Unknown stat "{requested_name}" for engine "{engine_id}"',
        engine_id=engine_id,
        stat=requested_name,
    )
    return StatMapping(requested_name, requested_name)


def get_stat_value(
    engine_id: str,
    requested_name: str,
    stats: Mapping[str, float],
) -> float:
    """Resolve a requested stat and read it from a stats map.

    Returns the neutral value 10 (with an UnknownStatWarning) when the
    mapped stat is missing.
    """
    mapping = map_stat(engine_id, requested_name)
    value = stats.get(mapping.native_field_id)
    if value is None:
        _warn(
            f'Stat "{mapping.native_field_id}" not found in character stats',
            engine_id=engine_id,
            stat=mapping.native_field_id,
        )
        return NEUTRAL_STAT_VALUE
    return value


def coerce_number(value: object) -> float | None:
    """A finite number from a number or numeric string, or None.

    Booleans are not numbers here.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def calculate_modifier(value: float) -> int:
    """D&D-style modifier ``floor((value - 10) / 2)``.

    Applied to every engine alike, whatever the stat's natural range.
    """
    return math.floor((value - NEUTRAL_STAT_VALUE) / 2)


def mapped_names(engine_id: str) -> list[str]:
    """Every name the engine's table recognizes (empty for unknown engines)."""
    return list(STAT_MAPPINGS.get(engine_id, {}))


def get_world_stat_context(engine_id: str) -> str:
    """Instruction telling the AI layer which stat names a world uses."""
    return WORLD_STAT_CONTEXT.get(engine_id, "")


__all__ = [
    "StatMapping",
    "STAT_MAPPINGS",
    "WORLD_STAT_CONTEXT",
    "map_stat",
    "get_stat_value",
    "coerce_number",
    "calculate_modifier",
    "mapped_names",
    "get_world_stat_context",
]
