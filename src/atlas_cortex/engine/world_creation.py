"""World-specific character creation.

The shared CreationEngine seeds every resource pool with the same
baseline. The built-in worlds derive their starting pools from stats
instead; those derivations live here and plug into the engine as
resource derivers. This module also builds the full per-world character
variants (class equipment, starting essence, empty squad).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from atlas_cortex.core.constants import (
    BASELINE_RESOURCE_VALUE,
    NEUTRAL_STAT_VALUE,
    STARTING_GOLD,
    STARTING_PROFICIENCY_BONUS,
)
from atlas_cortex.core.exceptions import CharacterValidationError, ValidationError
from atlas_cortex.core.logging import get_logger
from atlas_cortex.engine.catalog import EngineCatalog, get_catalog
from atlas_cortex.engine.creation import CreationEngine, ResourceDeriver, points_spent
from atlas_cortex.engine.stat_mapper import calculate_modifier
from atlas_cortex.models.characters import (
    ClassicCharacter,
    InventoryItem,
    OutworlderAbility,
    OutworlderCharacter,
    ResourcePool,
    TacticalCharacter,
)
from atlas_cortex.models.engine_schema import EngineSchema
from atlas_cortex.models.enums import (
    OutworlderAbilityType,
    OutworlderRank,
    TacticalJob,
    WorldModuleType,
)


logger = get_logger(__name__)


# =============================================================================
# Resource Derivations
# =============================================================================


def _scaled_pool(stat_value: int) -> ResourcePool:
    """Pool of 100 plus 10 per point above the neutral value."""
    return ResourcePool.full(max(0, BASELINE_RESOURCE_VALUE + (stat_value - NEUTRAL_STAT_VALUE) * 10))


def derive_classic_resources(
    schema: EngineSchema, stats: Mapping[str, int], baseline: int
) -> dict[str, ResourcePool]:
    """5E hit points: 10 + CON modifier."""
    con = stats.get("CON", NEUTRAL_STAT_VALUE)
    return {"hp": ResourcePool.full(max(1, 10 + calculate_modifier(con)))}


def derive_outworlder_resources(
    schema: EngineSchema, stats: Mapping[str, int], baseline: int
) -> dict[str, ResourcePool]:
    """Power scales health; spirit scales both stamina and mana."""
    spirit = _scaled_pool(stats.get("spirit", NEUTRAL_STAT_VALUE))
    return {
        "hp": _scaled_pool(stats.get("power", NEUTRAL_STAT_VALUE)),
        "stamina": spirit,
        "mana": spirit.model_copy(),
    }


def derive_tactical_resources(
    schema: EngineSchema, stats: Mapping[str, int], baseline: int
) -> dict[str, ResourcePool]:
    """Vitality scales health; nanites start nearly empty."""
    return {
        "hp": _scaled_pool(stats.get("vitality", NEUTRAL_STAT_VALUE)),
        "nanites": ResourcePool(current=10, max=100),
        "stamina": ResourcePool.full(baseline),
    }


RESOURCE_DERIVERS: MappingProxyType[str, ResourceDeriver] = MappingProxyType(
    {
        WorldModuleType.CLASSIC: derive_classic_resources,
        WorldModuleType.OUTWORLDER: derive_outworlder_resources,
        WorldModuleType.TACTICAL: derive_tactical_resources,
    }
)


def get_resource_deriver(engine_id: str) -> ResourceDeriver | None:
    return RESOURCE_DERIVERS.get(engine_id)


def creation_engine_for(
    engine_id: str, *, catalog: EngineCatalog | None = None
) -> CreationEngine:
    """Start a creation session for an engine with its world derivations.

    Raises:
        UnknownEngineSchemaError: If the catalog has no such engine.
    """
    schema = (catalog or get_catalog()).get(engine_id)
    return CreationEngine(schema, resource_deriver=get_resource_deriver(engine_id))


def _checked_stats(engine_id: str, stats: Mapping[str, int] | None) -> dict[str, int]:
    """Fill defaults and check bounds and budget against the world's schema."""
    schema = get_catalog().get(engine_id)
    values = {stat.id: stat.default for stat in schema.stats}
    values.update(stats or {})
    errors = [
        f"{stat.id} = {values[stat.id]} is outside [{stat.min}, {stat.max}]"
        for stat in schema.stats
        if not stat.min <= values[stat.id] <= stat.max
    ]
    budget = schema.stat_point_budget
    spent = points_spent(schema, values)
    if budget is not None and spent > budget:
        errors.append(f"{spent - budget} points over the stat budget of {budget}")
    if errors:
        raise CharacterValidationError(f"Invalid {engine_id} stats", errors=errors)
    return values


# =============================================================================
# Classic
# =============================================================================

CLASS_EQUIPMENT: MappingProxyType[str, tuple[InventoryItem, ...]] = MappingProxyType(
    {
        "Fighter": (
            InventoryItem(name="Longsword", type="weapon", equipped=True),
            InventoryItem(name="Chain Mail", type="armor", equipped=True),
            InventoryItem(name="Shield", type="weapon", equipped=True),
            InventoryItem(name="Health Potion", quantity=2),
        ),
        "Wizard": (
            InventoryItem(name="Quarterstaff", type="weapon", equipped=True),
            InventoryItem(name="Robes", type="armor", equipped=True),
            InventoryItem(name="Spellbook", equipped=True),
            InventoryItem(name="Mana Potion", quantity=3),
        ),
        "Rogue": (
            InventoryItem(name="Shortsword", type="weapon", equipped=True),
            InventoryItem(name="Dagger", type="weapon", quantity=2),
            InventoryItem(name="Leather Armor", type="armor", equipped=True),
            InventoryItem(name="Thieves' Tools", equipped=True),
        ),
        "Cleric": (
            InventoryItem(name="Mace", type="weapon", equipped=True),
            InventoryItem(name="Shield", type="weapon", equipped=True),
            InventoryItem(name="Scale Mail", type="armor", equipped=True),
            InventoryItem(name="Holy Symbol", equipped=True),
        ),
        "Ranger": (
            InventoryItem(name="Longbow", type="weapon", equipped=True),
            InventoryItem(name="Shortsword", type="weapon", equipped=True),
            InventoryItem(name="Leather Armor", type="armor", equipped=True),
            InventoryItem(name="Arrows", quantity=20),
        ),
        "Paladin": (
            InventoryItem(name="Longsword", type="weapon", equipped=True),
            InventoryItem(name="Shield", type="weapon", equipped=True),
            InventoryItem(name="Chain Mail", type="armor", equipped=True),
            InventoryItem(name="Holy Symbol", equipped=True),
        ),
    }
)
"""Starting gear per class (consumables and tools are ``misc`` items)."""


def create_classic_character(
    name: str,
    *,
    race: str = "Human",
    class_name: str = "Fighter",
    stats: Mapping[str, int] | None = None,
    background: str | None = None,
) -> ClassicCharacter:
    """Build a level 1 classic character.

    Raises:
        ValidationError: If the class is unknown.
        CharacterValidationError: If the stats break the classic schema.
    """
    class_name = class_name.strip().title()
    if class_name not in CLASS_EQUIPMENT:
        raise ValidationError(
            f"Unknown class: {class_name}",
            field_name="class",
            invalid_value=class_name,
        )
    values = _checked_stats(WorldModuleType.CLASSIC, stats)
    hp = derive_classic_resources(get_catalog().get(WorldModuleType.CLASSIC), values, 0)["hp"]
    inventory = [
        item.model_copy(update={"id": f"item-{index}"})
        for index, item in enumerate(CLASS_EQUIPMENT[class_name])
    ]
    character = ClassicCharacter(
        name=name,
        race=race.strip().title(),
        class_=class_name,
        background=background,
        stats=values,
        hp=hp,
        ac=10 + calculate_modifier(values["DEX"]),
        proficiency_bonus=STARTING_PROFICIENCY_BONUS,
        inventory=inventory,
        gold=STARTING_GOLD,
    )
    logger.info("Classic character created", character_id=character.id, class_name=class_name)
    return character


# =============================================================================
# Outworlder
# =============================================================================


@dataclass(frozen=True)
class StartingEssence:
    """An essence offered at creation and the ability it grants."""

    name: str
    ability: str
    ability_type: OutworlderAbilityType


STARTING_ESSENCES: tuple[StartingEssence, ...] = (
    StartingEssence("Might", "Power Strike", OutworlderAbilityType.ATTACK),
    StartingEssence("Swift", "Quick Step", OutworlderAbilityType.MOVEMENT),
    StartingEssence("Resolve", "Iron Will", OutworlderAbilityType.DEFENSE),
    StartingEssence("Mystic", "Mana Bolt", OutworlderAbilityType.SPECIAL),
)


def get_starting_essence(name: str) -> StartingEssence | None:
    wanted = name.strip().lower()
    return next((e for e in STARTING_ESSENCES if e.name.lower() == wanted), None)


def create_outworlder_character(
    name: str,
    *,
    essence: str = "Might",
    stats: Mapping[str, int] | None = None,
) -> OutworlderCharacter:
    """Build an Iron-rank outworlder bonded to one starting essence.

    Raises:
        ValidationError: If the essence is not a starting essence.
        CharacterValidationError: If the stats break the outworlder schema.
    """
    starting = get_starting_essence(essence)
    if starting is None:
        raise ValidationError(
            f"Not a starting essence: {essence}",
            field_name="essence",
            invalid_value=essence,
        )
    values = _checked_stats(WorldModuleType.OUTWORLDER, stats)
    pools = derive_outworlder_resources(
        get_catalog().get(WorldModuleType.OUTWORLDER), values, BASELINE_RESOURCE_VALUE
    )
    ability = OutworlderAbility(
        name=starting.ability,
        essence=starting.name,
        rank="Iron",
        type=starting.ability_type,
        cooldown=0,
        current_cooldown=0,
        cost="mana",
        cost_amount=10,
        description=f"Starting ability from {starting.name} essence",
    )
    character = OutworlderCharacter(
        name=name,
        rank=OutworlderRank.IRON,
        essences=[starting.name],
        stats=values,
        hp=pools["hp"],
        spirit=pools["stamina"],
        mana=pools["mana"],
        abilities=[ability],
    )
    logger.info("Outworlder character created", character_id=character.id, essence=starting.name)
    return character


# =============================================================================
# Tactical
# =============================================================================


def create_tactical_character(
    name: str,
    *,
    stats: Mapping[str, int] | None = None,
    title: str | None = None,
) -> TacticalCharacter:
    """Build a level 1 operative with no job and an empty squad.

    Raises:
        CharacterValidationError: If the stats break the tactical schema.
    """
    values = _checked_stats(WorldModuleType.TACTICAL, stats)
    pools = derive_tactical_resources(
        get_catalog().get(WorldModuleType.TACTICAL), values, BASELINE_RESOURCE_VALUE
    )
    character = TacticalCharacter(
        name=name,
        job=TacticalJob.NONE,
        title=title,
        stats=values,
        stat_points=0,
        hp=pools["hp"],
        nanites=pools["nanites"],
        stamina=pools["stamina"],
    )
    logger.info("Tactical character created", character_id=character.id)
    return character


__all__ = [
    "derive_classic_resources",
    "derive_outworlder_resources",
    "derive_tactical_resources",
    "RESOURCE_DERIVERS",
    "get_resource_deriver",
    "creation_engine_for",
    "CLASS_EQUIPMENT",
    "create_classic_character",
    "StartingEssence",
    "STARTING_ESSENCES",
    "get_starting_essence",
    "create_outworlder_character",
    "create_tactical_character",
]
