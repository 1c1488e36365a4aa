"""Enumeration types for the Atlas Cortex rules core.

These enums name the world modules, the creation form field types, the
progression models and the small closed vocabularies used by the
built-in worlds.
"""

from __future__ import annotations

from enum import StrEnum


class WorldModuleType(StrEnum):
    """Built-in world modules (rule systems)."""

    CLASSIC = "classic"
    OUTWORLDER = "outworlder"
    TACTICAL = "tactical"


class FieldType(StrEnum):
    """Input types supported by engine-defined creation forms."""

    TEXT = "text"
    NUMBER = "number"
    SELECT = "select"
    MULTISELECT = "multiselect"
    TEXTAREA = "textarea"
    SLIDER = "slider"
    CHECKBOX = "checkbox"
    IMAGE = "image"

    @property
    def has_options(self) -> bool:
        """Whether the field picks its value from a fixed option list."""
        return self in (FieldType.SELECT, FieldType.MULTISELECT)

    @property
    def is_numeric(self) -> bool:
        """Whether the field holds a number bounded by its validation."""
        return self in (FieldType.NUMBER, FieldType.SLIDER)


class ProgressionType(StrEnum):
    """How characters advance in a rule system."""

    LEVEL = "level"
    RANK = "rank"


class ShareableType(StrEnum):
    """Kinds of payload a share code can carry."""

    CHARACTER = "character"
    SAVE = "save"


class OutworlderRank(StrEnum):
    """Outworlder rank ladder, lowest first."""

    IRON = "Iron"
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    DIAMOND = "Diamond"


class OutworlderAbilityType(StrEnum):
    """Ability categories granted by outworlder essences."""

    ATTACK = "attack"
    DEFENSE = "defense"
    UTILITY = "utility"
    MOVEMENT = "movement"
    SPECIAL = "special"


class TacticalJob(StrEnum):
    """Jobs available to tactical operatives."""

    NONE = "None"
    SPECIALIST = "Specialist"
    PRAXIS_OPERATIVE = "PRAXIS Operative"


class EssenceRarity(StrEnum):
    """Essence rarity tiers, most common first."""

    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"


class EssenceCategory(StrEnum):
    """Essence categories."""

    ANIMAL = "Animal"
    ELEMENT = "Element"
    OBJECT = "Object"
    CONCEPT = "Concept"
    BODY = "Body"


__all__ = [
    "WorldModuleType",
    "FieldType",
    "ProgressionType",
    "ShareableType",
    "OutworlderRank",
    "OutworlderAbilityType",
    "TacticalJob",
    "EssenceRarity",
    "EssenceCategory",
]
