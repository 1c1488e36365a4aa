"""Application-wide constants for the Atlas Cortex rules core.

This module defines constants shared by the stat mapper, the creation
engine, the normalizer and the share-code codec.
"""

from __future__ import annotations

from types import MappingProxyType

# =============================================================================
# Stat Rules
# =============================================================================

NEUTRAL_STAT_VALUE = 10
"""Stat value whose D&D-style modifier is 0; fallback for missing stats."""

MODIFIER_ELIGIBLE_MAX = 30
"""Stats whose declared max is at or below this get a modifier."""

# =============================================================================
# Resources
# =============================================================================

BASELINE_RESOURCE_VALUE = 100
"""Current and max of a freshly created resource pool."""

DEFAULT_RESOURCE_MAX = 100
"""Max assumed when a resource is stored as a bare number."""

MIN_PERCENT = 0.0
MAX_PERCENT = 100.0

DEFAULT_RESOURCE_COLOR = "#8b5cf6"
"""Colour used for resources that declare none."""

LEGACY_RESOURCE_NAMES: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "hp": ("health", "hitPoints"),
        "health": ("hp", "hitPoints"),
        "mana": ("mp", "nanites", "energy"),
        "mp": ("mana", "nanites", "energy"),
        "nanites": ("mana", "mp", "nc"),
        "stamina": ("spirit", "focus", "fatigue"),
        "fatigue": ("stamina",),
    }
)
"""Top-level character fields consulted when a resource id is not present."""

# =============================================================================
# World Rules
# =============================================================================

MAX_ESSENCES = 4
"""Essences an outworlder can bond (the fifth slot is the confluence)."""

OUTWORLDER_RANKS = ("Iron", "Bronze", "Silver", "Gold", "Diamond")
"""Outworlder rank ladder, lowest first."""

STARTING_GOLD = 15
"""Gold carried by a freshly created classic character."""

STARTING_PROFICIENCY_BONUS = 2
"""Proficiency bonus of a level 1 classic character."""

# =============================================================================
# Sharing
# =============================================================================

SHARE_CODE_PREFIX = "AC-"
"""Prefix of every share code."""

SHARE_CODE_VERSION = 2
"""Payload version written into new share codes."""

SAVE_MESSAGE_WINDOW = 50
"""Number of trailing messages kept in a campaign save export."""


__all__ = [
    # Stats
    "NEUTRAL_STAT_VALUE",
    "MODIFIER_ELIGIBLE_MAX",
    # Resources
    "BASELINE_RESOURCE_VALUE",
    "DEFAULT_RESOURCE_MAX",
    "MIN_PERCENT",
    "MAX_PERCENT",
    "DEFAULT_RESOURCE_COLOR",
    "LEGACY_RESOURCE_NAMES",
    # World rules
    "MAX_ESSENCES",
    "OUTWORLDER_RANKS",
    "STARTING_GOLD",
    "STARTING_PROFICIENCY_BONUS",
    # Sharing
    "SHARE_CODE_PREFIX",
    "SHARE_CODE_VERSION",
    "SAVE_MESSAGE_WINDOW",
]
