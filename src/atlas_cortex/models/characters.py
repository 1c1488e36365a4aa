"""Pydantic V2 schemas for per-world characters.

A character is a tagged union keyed by its ``world`` field. Each variant
owns identity, a level, an hp-equivalent primary pool, a stats map keyed
by the world's native stat ids, and its world-specific extras.

Characters are created once per campaign, mutated by the game-logic layer
during play, and dumped in camelCase form for persistence.

Example:
    >>> data = {"world": "outworlder", "name": "Jason", "rank": "Iron",
    ...         "hp": {"current": 100, "max": 100}}
    >>> hero = parse_character(data)
    >>> isinstance(hero, OutworlderCharacter)
    True
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, ClassVar, Literal
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
)
from pydantic.alias_generators import to_camel

from atlas_cortex.core.constants import MAX_ESSENCES, NEUTRAL_STAT_VALUE
from atlas_cortex.models.enums import (
    OutworlderAbilityType,
    OutworlderRank,
    TacticalJob,
    WorldModuleType,
)


class CharacterPart(BaseModel):
    """Base class for character data.

    Parts are mutated in place by the game-logic layer, so assignments are
    validated. Unknown keys are kept so nothing written by another layer is
    lost on a round trip.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


# =============================================================================
# Shared Parts
# =============================================================================


class ResourcePool(CharacterPart):
    """A current/max pair such as hit points or mana."""

    current: int = Field(default=0, ge=0, description="Current value")
    max: int = Field(default=0, ge=0, description="Maximum value")

    @property
    def percentage(self) -> float:
        if self.max <= 0:
            return 0.0
        return max(0.0, min(100.0, self.current / self.max * 100))

    @classmethod
    def full(cls, value: int) -> "ResourcePool":
        """Create a pool at its maximum."""
        return cls(current=value, max=value)


class InventoryItem(CharacterPart):
    """An item carried by a character."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)
    type: Literal["weapon", "armor", "potion", "scroll", "misc"] = "misc"
    description: str | None = None
    equipped: bool = False


# =============================================================================
# Abilities
# =============================================================================


class ClassicAbility(CharacterPart):
    """A D&D-style class or racial ability."""

    name: str = Field(min_length=1)
    description: str = ""
    type: Literal["action", "bonus", "reaction", "passive"] = "action"
    uses_remaining: int | None = Field(default=None, ge=0)
    max_uses: int | None = Field(default=None, ge=0)
    recharge_on: Literal["shortRest", "longRest"] | None = None


class OutworlderAbility(CharacterPart):
    """An essence ability."""

    name: str = Field(min_length=1)
    essence: str = ""
    rank: Literal["Normal", "Iron", "Bronze", "Silver", "Gold", "Diamond"] = "Iron"
    type: OutworlderAbilityType = OutworlderAbilityType.SPECIAL
    cooldown: int = Field(default=0, ge=0)
    current_cooldown: int = Field(default=0, ge=0)
    cost: Literal["mana", "health", "spirit", "none"] = "mana"
    cost_amount: int | None = Field(default=None, ge=0)
    description: str = ""


class TacticalSkill(CharacterPart):
    """A skill of a tactical operative."""

    name: str = Field(min_length=1)
    rank: Literal["E", "D", "C", "B", "A", "S"] = "E"
    type: Literal["active", "passive"] = "active"
    mana_cost: int | None = Field(default=None, ge=0)
    cooldown: int | None = Field(default=None, ge=0)
    description: str = ""


class TacticalUnit(CharacterPart):
    """A member of a tactical squad."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str = Field(min_length=1)
    rank: Literal["Normal", "Elite", "Knight", "General"] = "Normal"
    type: str = "infantry"
    status: Literal["active", "stored", "destroyed"] = "active"


# =============================================================================
# Characters
# =============================================================================


class CharacterBase(CharacterPart):
    """Fields shared by every world's character.

    Attributes:
        world: Engine id the character belongs to (union discriminator).
        id: Unique character identifier.
        name: Character name.
        level: Character level.
        hp: Primary (hp-equivalent) resource pool.
        stats: Stat values keyed by the world's native stat ids.
    """

    STAT_IDS: ClassVar[tuple[str, ...]] = ()

    world: str
    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str = Field(min_length=1, max_length=100)
    level: int = Field(default=1, ge=0)
    hp: ResourcePool = Field(default_factory=lambda: ResourcePool.full(100))
    stats: dict[str, int] = Field(default_factory=dict)

    @field_validator("stats", mode="after")
    @classmethod
    def fill_missing_stats(cls, value: dict[str, int]) -> dict[str, int]:
        """Give every native stat of the world a value."""
        for stat_id in cls.STAT_IDS:
            value.setdefault(stat_id, NEUTRAL_STAT_VALUE)
        return value

    def to_document(self) -> dict[str, Any]:
        """Dump the character in persisted (camelCase) form."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ClassicCharacter(CharacterBase):
    """D&D 5E style character."""

    STAT_IDS: ClassVar[tuple[str, ...]] = ("STR", "DEX", "CON", "INT", "WIS", "CHA")

    world: Literal["classic"] = "classic"
    class_: str = Field(default="Fighter", alias="class")
    race: str = "Human"
    background: str | None = None
    ac: int = Field(default=10, ge=0)
    proficiency_bonus: int = Field(default=2, ge=0)
    inventory: list[InventoryItem] = Field(default_factory=list)
    gold: int = Field(default=0, ge=0)
    spell_slots: dict[int, ResourcePool] | None = None
    abilities: list[ClassicAbility] = Field(default_factory=list)


class OutworlderCharacter(CharacterBase):
    """Essence-rank character (He Who Fights With Monsters style)."""

    STAT_IDS: ClassVar[tuple[str, ...]] = ("power", "speed", "spirit", "recovery")

    world: Literal["outworlder"] = "outworlder"
    rank: OutworlderRank = OutworlderRank.IRON
    essences: list[str] = Field(default_factory=list, max_length=MAX_ESSENCES)
    confluence: str | None = None
    abilities: list[OutworlderAbility] = Field(default_factory=list)
    spirit: ResourcePool = Field(default_factory=lambda: ResourcePool.full(100))
    mana: ResourcePool = Field(default_factory=lambda: ResourcePool.full(100))


class TacticalCharacter(CharacterBase):
    """Tactical-unit character (operative with a squad)."""

    STAT_IDS: ClassVar[tuple[str, ...]] = (
        "strength",
        "agility",
        "vitality",
        "intelligence",
        "perception",
    )

    world: Literal["tactical"] = "tactical"
    job: TacticalJob = TacticalJob.NONE
    title: str | None = None
    stat_points: int = Field(default=0, ge=0)
    nanites: ResourcePool = Field(default_factory=lambda: ResourcePool(current=10, max=100))
    stamina: ResourcePool = Field(default_factory=lambda: ResourcePool.full(100))
    skills: list[TacticalSkill] = Field(default_factory=list)
    tactical_squad: list[TacticalUnit] = Field(default_factory=list)


class GenericCharacter(CharacterBase):
    """Character of a schema-driven engine.

    Resource pools and creation form values are stored as extra top-level
    fields named after their schema ids.
    """

    rank: str | None = None


ModuleCharacter = Annotated[
    ClassicCharacter | OutworlderCharacter | TacticalCharacter,
    Field(discriminator="world", description="A character of a built-in world"),
]
"""Discriminated union of the built-in world characters.

The ``world`` field selects the variant:
- "classic" -> ClassicCharacter
- "outworlder" -> OutworlderCharacter
- "tactical" -> TacticalCharacter
"""

Character = ClassicCharacter | OutworlderCharacter | TacticalCharacter | GenericCharacter

_module_character_adapter: TypeAdapter[Any] = TypeAdapter(ModuleCharacter)


def parse_character(data: Mapping[str, Any]) -> Character:
    """Validate raw character data into the variant its ``world`` names.

    Args:
        data: Character document (camelCase or snake_case keys).

    Returns:
        A built-in world character, or a GenericCharacter for any other world.

    Raises:
        pydantic.ValidationError: If the data does not fit the variant.
    """
    world = data.get("world")
    if world in set(WorldModuleType):
        return _module_character_adapter.validate_python(dict(data))
    return GenericCharacter.model_validate(dict(data))


__all__ = [
    "CharacterPart",
    "ResourcePool",
    "InventoryItem",
    "ClassicAbility",
    "OutworlderAbility",
    "TacticalSkill",
    "TacticalUnit",
    "CharacterBase",
    "ClassicCharacter",
    "OutworlderCharacter",
    "TacticalCharacter",
    "GenericCharacter",
    "ModuleCharacter",
    "Character",
    "parse_character",
]
