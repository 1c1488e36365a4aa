"""Essence catalogue for the outworlder world.

Essences are grouped here by rarity and category; the flat ``ESSENCES``
tuple keeps that order, which is also the order shown in pickers.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from atlas_cortex.models.enums import EssenceCategory, EssenceRarity


@dataclass(frozen=True)
class Essence:
    """An essence an outworlder can bond with."""

    name: str
    rarity: EssenceRarity
    category: EssenceCategory
    description: str | None = None


def _group(
    rarity: EssenceRarity, category: EssenceCategory, names: str
) -> tuple[Essence, ...]:
    return tuple(Essence(name, rarity, category) for name in names.split())


_C = EssenceRarity.COMMON
_U = EssenceRarity.UNCOMMON

ESSENCES: tuple[Essence, ...] = (
    *_group(
        _C,
        EssenceCategory.ANIMAL,
        "Ape Bat Bear Bee Bird Cat Cattle Crocodile Deer Dog Duck Fish Flea Fox "
        "Frog Goat Horse Lizard Locust Monkey Mouse Octopus Pangolin Rabbit Rat "
        "Shark Skunk Sloth Snake Spider Turtle Wasp Whale Wolf",
    ),
    *_group(_C, EssenceCategory.ELEMENT, "Air Earth Fire Water Plant Fungus Coral Tree Iron"),
    *_group(
        _C,
        EssenceCategory.OBJECT,
        "Armour Axe Bow Cage Chain Cloth Fork Hammer Hook Knife Needle Net Paper "
        "Rake Sceptre Shield Ship Shovel Sickle Spear Spike Staff Sword Thread "
        "Trap Trowel Vehicle Wheel Whip",
    ),
    *_group(_C, EssenceCategory.BODY, "Eye Foot Hair Hand Tooth"),
    *_group(_C, EssenceCategory.CONCEPT, "Adept Feast Hunt Might Swift"),
    Essence("Balance", _U, EssenceCategory.CONCEPT),
    Essence("Blood", _U, EssenceCategory.BODY),
    Essence("Bone", _U, EssenceCategory.BODY),
    Essence("Claw", _U, EssenceCategory.BODY),
    Essence("Cloud", _U, EssenceCategory.ELEMENT),
    Essence("Cold", _U, EssenceCategory.ELEMENT),
    Essence("Dance", _U, EssenceCategory.CONCEPT),
    Essence("Dark", _U, EssenceCategory.ELEMENT),
    Essence("Growth", _U, EssenceCategory.CONCEPT),
    Essence("Hunger", _U, EssenceCategory.CONCEPT),
    Essence("Light", _U, EssenceCategory.ELEMENT),
    Essence("Omen", _U, EssenceCategory.CONCEPT),
    Essence("Potent", _U, EssenceCategory.CONCEPT),
    Essence("Renewal", _U, EssenceCategory.CONCEPT),
    Essence("Rune", _U, EssenceCategory.CONCEPT),
    Essence("Wing", _U, EssenceCategory.BODY),
    Essence("Wind", _U, EssenceCategory.ELEMENT),
    Essence("Gun", _U, EssenceCategory.OBJECT),
    Essence("Technology", _U, EssenceCategory.OBJECT),
    Essence("Death", EssenceRarity.RARE, EssenceCategory.CONCEPT),
    Essence("Magic", EssenceRarity.RARE, EssenceCategory.CONCEPT),
    Essence("Sin", EssenceRarity.RARE, EssenceCategory.CONCEPT),
    Essence("Void", EssenceRarity.RARE, EssenceCategory.ELEMENT),
    *_group(EssenceRarity.EPIC, EssenceCategory.CONCEPT, "Dimension Doom Soul Time"),
    *_group(EssenceRarity.LEGENDARY, EssenceCategory.CONCEPT, "Absolution Apocalypse"),
)

RARITY_COLORS: MappingProxyType[EssenceRarity, str] = MappingProxyType(
    {
        EssenceRarity.COMMON: "#9CA3AF",
        EssenceRarity.UNCOMMON: "#22C55E",
        EssenceRarity.RARE: "#3B82F6",
        EssenceRarity.EPIC: "#A855F7",
        EssenceRarity.LEGENDARY: "#F59E0B",
    }
)

_BY_NAME: MappingProxyType[str, Essence] = MappingProxyType(
    {essence.name.lower(): essence for essence in ESSENCES}
)


def get_essence(name: str) -> Essence | None:
    """Look up an essence by name, case-insensitively."""
    return _BY_NAME.get(name.strip().lower())


def essences_by_rarity(rarity: EssenceRarity | str) -> list[Essence]:
    return [essence for essence in ESSENCES if essence.rarity == rarity]


def essences_by_category(category: EssenceCategory | str) -> list[Essence]:
    return [essence for essence in ESSENCES if essence.category == category]


def rarity_color(rarity: EssenceRarity | str) -> str:
    """Display colour of a rarity tier (grey for anything unknown)."""
    try:
        return RARITY_COLORS[EssenceRarity(rarity)]
    except ValueError:
        return RARITY_COLORS[EssenceRarity.COMMON]


def essence_groups() -> list[tuple[EssenceRarity, list[Essence]]]:
    """Essences grouped by rarity, most common tier first."""
    return [(rarity, essences_by_rarity(rarity)) for rarity in EssenceRarity]


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
