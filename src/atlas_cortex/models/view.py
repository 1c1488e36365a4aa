"""World-agnostic character view produced by the normalizer.

The view layer renders these models without branching on the world a
character belongs to. World-specific widgets opt in through ``extras``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from atlas_cortex.core.constants import MAX_PERCENT, MIN_PERCENT


class ViewModel(BaseModel):
    """Base class for view models.

    Views are immutable snapshots; equality is structural.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class NormalizedResource(ViewModel):
    """A resource pool ready for display."""

    name: str
    current: float = Field(ge=0)
    max: float = Field(ge=0)
    color: str | None = None
    icon: str | None = None

    @computed_field
    @property
    def percentage(self) -> float:
        """Fill ratio in percent, clamped to 0-100 whatever the source data."""
        if self.max <= 0:
            return MIN_PERCENT
        return max(MIN_PERCENT, min(MAX_PERCENT, self.current / self.max * 100))


class NormalizedStat(ViewModel):
    """A stat ready for display.

    ``modifier`` is only set for D&D-like bounded stats.
    """

    id: str
    name: str
    abbreviation: str
    value: float
    icon: str | None = None
    modifier: int | None = None


class NormalizedItem(ViewModel):
    """An inventory entry."""

    name: str
    quantity: int = Field(default=1, ge=1)
    equipped: bool = False
    id: str | None = None
    type: str | None = None
    rank: str | None = None


class NormalizedAbility(ViewModel):
    """An ability or skill entry."""

    name: str
    rank: str | None = None
    type: str | None = None
    current_cooldown: int | None = None
    cooldown: int | None = None
    description: str | None = None
    essence: str | None = None
    cost: str | None = None
    cost_amount: int | None = None


class UnifiedCharacterView(ViewModel):
    """Projection of any world's character onto one display shape.

    Attributes:
        name: Character name.
        rank: Rank label for rank-progression worlds.
        level: Character level, 0 when the world has no levels.
        class_: Class or job label.
        race: Race label.
        experience: ``{current, max}`` experience pair when present.
        resources: Resource pools in schema order.
        stats: Stats in schema order.
        inventory: Carried items.
        abilities: Abilities and skills.
        extras: World-specific structures keyed by their original field name.
    """

    name: str
    rank: str | None = None
    level: int = 0
    class_: str | None = Field(default=None, alias="class")
    race: str | None = None
    experience: dict[str, float] | None = None
    resources: tuple[NormalizedResource, ...] = ()
    stats: tuple[NormalizedStat, ...] = ()
    inventory: tuple[NormalizedItem, ...] = ()
    abilities: tuple[NormalizedAbility, ...] = ()
    extras: dict[str, Any] = Field(default_factory=dict)

    def resource(self, name: str) -> NormalizedResource | None:
        """Find a resource by display name."""
        return next((r for r in self.resources if r.name == name), None)

    def stat(self, stat_id: str) -> NormalizedStat | None:
        """Find a stat by id."""
        return next((s for s in self.stats if s.id == stat_id), None)


__all__ = [
    "ViewModel",
    "NormalizedResource",
    "NormalizedStat",
    "NormalizedItem",
    "NormalizedAbility",
    "UnifiedCharacterView",
]
