"""Pydantic V2 schemas for the Atlas Cortex rules core.

Submodules:
    enums: Enumeration types (WorldModuleType, FieldType, ProgressionType, ...)
    engine_schema: Rule system definitions (EngineSchema and its parts)
    characters: Per-world character union (ClassicCharacter, ...)
    view: World-agnostic view produced by the normalizer

Example:
    >>> from atlas_cortex.models import EngineSchema, parse_character
    >>> hero = parse_character({"world": "tactical", "name": "Kai"})
    >>> hero.stats["vitality"]
    10
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from atlas_cortex.models.enums import (
    EssenceCategory,
    EssenceRarity,
    FieldType,
    OutworlderAbilityType,
    OutworlderRank,
    ProgressionType,
    ShareableType,
    TacticalJob,
    WorldModuleType,
)

# =============================================================================
# Engine Schema
# =============================================================================
from atlas_cortex.models.engine_schema import (
    EngineSchema,
    FieldOption,
    FieldValidation,
    FormFieldDefinition,
    HUDConfig,
    ProgressionConfig,
    RankDefinition,
    ResourceDefinition,
    StatDefinition,
)

# =============================================================================
# Characters
# =============================================================================
from atlas_cortex.models.characters import (
    Character,
    CharacterBase,
    ClassicAbility,
    ClassicCharacter,
    GenericCharacter,
    InventoryItem,
    ModuleCharacter,
    OutworlderAbility,
    OutworlderCharacter,
    ResourcePool,
    TacticalCharacter,
    TacticalSkill,
    TacticalUnit,
    parse_character,
)

# =============================================================================
# View
# =============================================================================
from atlas_cortex.models.view import (
    NormalizedAbility,
    NormalizedItem,
    NormalizedResource,
    NormalizedStat,
    UnifiedCharacterView,
)


__all__ = [
    # Enums
    "WorldModuleType",
    "FieldType",
    "ProgressionType",
    "ShareableType",
    "OutworlderRank",
    "OutworlderAbilityType",
    "TacticalJob",
    "EssenceRarity",
    "EssenceCategory",
    # Engine schema
    "EngineSchema",
    "StatDefinition",
    "ResourceDefinition",
    "FieldOption",
    "FieldValidation",
    "FormFieldDefinition",
    "RankDefinition",
    "ProgressionConfig",
    "HUDConfig",
    # Characters
    "CharacterBase",
    "ClassicCharacter",
    "OutworlderCharacter",
    "TacticalCharacter",
    "GenericCharacter",
    "ModuleCharacter",
    "Character",
    "ResourcePool",
    "InventoryItem",
    "ClassicAbility",
    "OutworlderAbility",
    "TacticalSkill",
    "TacticalUnit",
    "parse_character",
    # View
    "NormalizedResource",
    "NormalizedStat",
    "NormalizedItem",
    "NormalizedAbility",
    "UnifiedCharacterView",
]
