"""Static game data shipped with the rules core."""

from __future__ import annotations

from atlas_cortex.data.essences import (
    ESSENCES,
    RARITY_COLORS,
    Essence,
    essence_groups,
    essences_by_category,
    essences_by_rarity,
    get_essence,
    rarity_color,
)


__all__ = [
    "Essence",
    "ESSENCES",
    "RARITY_COLORS",
    "get_essence",
    "essences_by_rarity",
    "essences_by_category",
    "rarity_color",
    "essence_groups",
]
