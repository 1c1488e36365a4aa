"""Character import templates, import validation and campaign save export.

Imported characters are pasted JSON, often hand-edited, so parsing
tolerates trailing commas and validation reports every problem found at
once rather than stopping at the first.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from atlas_cortex.core.constants import MAX_ESSENCES, OUTWORLDER_RANKS, SAVE_MESSAGE_WINDOW
from atlas_cortex.core.exceptions import UnknownEngineSchemaError
from atlas_cortex.core.logging import get_logger
from atlas_cortex.data.essences import get_essence
from atlas_cortex.engine.world_creation import get_starting_essence
from atlas_cortex.models.enums import OutworlderAbilityType, TacticalJob, WorldModuleType


logger = get_logger(__name__)

_TRAILING_COMMA = re.compile(r",\s*([}\]])")

# "praxis" is the tactical world's campaign name.
_WORLD_ALIASES = MappingProxyType({"praxis": WorldModuleType.TACTICAL})

CLASSIC_IMPORT_STATS = (
    ("strength", "STR"),
    ("dexterity", "DEX"),
    ("constitution", "CON"),
    ("intelligence", "INT"),
    ("wisdom", "WIS"),
    ("charisma", "CHA"),
)
OUTWORLDER_IMPORT_STATS = ("power", "speed", "spirit", "recovery")
TACTICAL_IMPORT_STATS = ("strength", "agility", "vitality", "intelligence", "perception")


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True)
class CharacterTemplate:
    """Example import document for a world."""

    world_type: str
    description: str
    example: dict[str, Any]


@dataclass(frozen=True)
class ImportValidation:
    """Problems found in an import document."""

    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class CharacterImportResult:
    """Outcome of parsing pasted character JSON."""

    success: bool
    character: dict[str, Any] | None = None
    errors: list[str] = field(default_factory=list)


class CampaignSaveData(BaseModel):
    """Portable snapshot of a campaign (dumped in camelCase)."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    version: int = 1
    world_type: str
    created_at: datetime
    save_name: str
    character: dict[str, Any] = Field(default_factory=dict)
    module_state: dict[str, Any] = Field(default_factory=dict)
    message_count: int = Field(ge=0)
    last_messages: list[Any] = Field(default_factory=list)


# =============================================================================
# Templates
# =============================================================================


def _resolve_world(world: str) -> WorldModuleType | None:
    key = world.strip().lower()
    if key in _WORLD_ALIASES:
        return _WORLD_ALIASES[key]
    try:
        return WorldModuleType(key)
    except ValueError:
        return None


def get_template_for_world(world: str) -> CharacterTemplate:
    """Example import document for a world.

    Raises:
        UnknownEngineSchemaError: If the world has no import template.
    """
    match _resolve_world(world):
        case WorldModuleType.OUTWORLDER:
            return CharacterTemplate(
                world_type="outworlder",
                description="Outworlder (HWFWM) character template",
                example={
                    "name": "Hero Name",
                    "rank": "Iron",
                    "essences": ["Might", "Swift"],
                    "confluence": "",
                    "stats": {"power": 12, "speed": 11, "spirit": 10, "recovery": 10},
                    "abilities": [
                        {
                            "name": "Power Strike",
                            "essence": "Might",
                            "rank": "Iron",
                            "type": "attack",
                            "cooldown": 0,
                            "cost": "mana",
                            "costAmount": 10,
                            "description": "A powerful strike",
                        }
                    ],
                },
            )
        case WorldModuleType.CLASSIC:
            return CharacterTemplate(
                world_type="classic",
                description="D&D 5E Classic character template",
                example={
                    "name": "Hero Name",
                    "class": "Wizard",
                    "race": "Human",
                    "background": "Sage",
                    "stats": {
                        "strength": 10,
                        "dexterity": 14,
                        "constitution": 12,
                        "intelligence": 16,
                        "wisdom": 13,
                        "charisma": 8,
                    },
                    "spells": ["Magic Missile", "Shield", "Detect Magic"],
                    "equipment": ["Spellbook", "Component Pouch", "Quarterstaff"],
                },
            )
        case WorldModuleType.TACTICAL:
            return CharacterTemplate(
                world_type="tactical",
                description="PRAXIS: Operation Dark Tide character template",
                example={
                    "name": "Operative Name",
                    "job": "PRAXIS Operative",
                    "title": "Shadow",
                    "stats": {
                        "strength": 12,
                        "agility": 14,
                        "vitality": 11,
                        "intelligence": 13,
                        "perception": 15,
                    },
                    "skills": [
                        {
                            "name": "Shadow Step",
                            "rank": "C",
                            "type": "active",
                            "description": "Teleport short distance",
                        }
                    ],
                    "equipment": ["Mk. IV Pulse Carbine", "Tactical Armor"],
                },
            )
        case _:
            raise UnknownEngineSchemaError(f"Unknown world type: {world}", engine_id=world)


def generate_template(world: str) -> str:
    """Pretty-printed JSON of the world's import template."""
    return json.dumps(get_template_for_world(world).example, indent=2, ensure_ascii=False)


# =============================================================================
# Import
# =============================================================================


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_stats(stats: Any, required: Sequence[str], errors: list[str]) -> None:
    if not isinstance(stats, Mapping):
        errors.append("Stats must be an object")
        return
    for stat in required:
        if not _is_number(stats.get(stat)):
            errors.append(f"Missing or invalid stat: {stat}")


def _is_known_essence(name: Any) -> bool:
    return isinstance(name, str) and (
        get_essence(name) is not None or get_starting_essence(name) is not None
    )


def _validate_outworlder(data: Mapping[str, Any], errors: list[str]) -> None:
    rank = data.get("rank")
    if rank and rank not in OUTWORLDER_RANKS:
        errors.append(f"Invalid rank. Must be one of: {', '.join(OUTWORLDER_RANKS)}")
    essences = data.get("essences")
    if essences:
        if not isinstance(essences, list):
            errors.append("Essences must be an array")
        else:
            if len(essences) > MAX_ESSENCES:
                errors.append(f"Maximum {MAX_ESSENCES} essences allowed")
            unknown = [str(name) for name in essences if not _is_known_essence(name)]
            if unknown:
                errors.append(f"Unknown essences: {', '.join(unknown)}")
    if data.get("stats"):
        _check_stats(data["stats"], OUTWORLDER_IMPORT_STATS, errors)
    abilities = data.get("abilities")
    if isinstance(abilities, list):
        valid_types = [kind.value for kind in OutworlderAbilityType]
        for index, ability in enumerate(abilities, start=1):
            if not isinstance(ability, Mapping):
                errors.append(f"Ability {index}: must be an object")
                continue
            if not ability.get("name"):
                errors.append(f"Ability {index}: name is required")
            if ability.get("type") and ability["type"] not in valid_types:
                errors.append(
                    f"Ability {index}: invalid type. Must be one of: {', '.join(valid_types)}"
                )


def _validate_classic(data: Mapping[str, Any], errors: list[str]) -> None:
    stats = data.get("stats")
    if not stats:
        return
    if not isinstance(stats, Mapping):
        errors.append("Stats must be an object")
        return
    # full names or abbreviations
    for full, short in CLASSIC_IMPORT_STATS:
        if not (_is_number(stats.get(full)) or _is_number(stats.get(short))):
            errors.append(f"Missing or invalid stat: {full}")


def _validate_tactical(data: Mapping[str, Any], errors: list[str]) -> None:
    job = data.get("job")
    valid_jobs = [item.value for item in TacticalJob]
    if job and job not in valid_jobs:
        errors.append(f"Invalid job. Must be one of: {', '.join(valid_jobs)}")
    if data.get("stats"):
        _check_stats(data["stats"], TACTICAL_IMPORT_STATS, errors)


_VALIDATORS = MappingProxyType(
    {
        WorldModuleType.OUTWORLDER: _validate_outworlder,
        WorldModuleType.CLASSIC: _validate_classic,
        WorldModuleType.TACTICAL: _validate_tactical,
    }
)


def validate_import(data: Any, world: str) -> ImportValidation:
    """Check an import document against a world's rules."""
    if not isinstance(data, Mapping):
        return ImportValidation(errors=["Character data must be an object"])
    errors: list[str] = []
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        errors.append("Character name is required")
    resolved = _resolve_world(world)
    if resolved is None:
        errors.append(f"Unknown world type: {world}")
    else:
        _VALIDATORS[resolved](data, errors)
    return ImportValidation(errors=errors)


def parse_character_json(text: str, world: str) -> CharacterImportResult:
    """Parse and validate pasted character JSON.

    Trailing commas before ``}`` or ``]`` are removed first.
    """
    try:
        data = json.loads(_TRAILING_COMMA.sub(r"\1", text))
    except json.JSONDecodeError as exc:
        return CharacterImportResult(success=False, errors=[f"Invalid JSON format: {exc.msg}"])
    validation = validate_import(data, world)
    if not validation.valid:
        logger.info("Character import rejected", world=world, errors=len(validation.errors))
        return CharacterImportResult(success=False, errors=validation.errors)
    return CharacterImportResult(success=True, character=data)


# =============================================================================
# Export
# =============================================================================


def export_campaign_save(
    campaign: Mapping[str, Any],
    messages: Sequence[Any],
    save_name: str,
) -> CampaignSaveData:
    """Snapshot a campaign with its most recent messages.

    Args:
        campaign: Campaign document with ``worldModule`` and ``moduleState``.
        messages: Full message history, oldest first.
        save_name: Name of the save.
    """
    module_state = campaign.get("moduleState")
    module_state = dict(module_state) if isinstance(module_state, Mapping) else {}
    character = module_state.get("character")
    return CampaignSaveData(
        world_type=str(campaign.get("worldModule", "")),
        created_at=datetime.now(UTC),
        save_name=save_name,
        character=dict(character) if isinstance(character, Mapping) else {},
        module_state=module_state,
        message_count=len(messages),
        last_messages=list(messages[-SAVE_MESSAGE_WINDOW:]),
    )


__all__ = [
    "CharacterTemplate",
    "ImportValidation",
    "CharacterImportResult",
    "CampaignSaveData",
    "get_template_for_world",
    "generate_template",
    "validate_import",
    "parse_character_json",
    "export_campaign_save",
]
