"""Pydantic V2 schemas describing a rule system (engine schema).

An EngineSchema is the data definition of one world module: its stats,
resources, progression model and character-creation form. Schemas are
loaded from an external catalog, so this module validates them strictly
and fills in defaults for the optional parts.

Catalog documents use camelCase keys (``statPointBudget``, ``showInHUD``,
``creationFields``); the models accept those as well as the snake_case
attribute names and dump by alias.

Example:
    >>> schema = EngineSchema.model_validate({
    ...     "id": "mini",
    ...     "name": "Mini",
    ...     "stats": [{"id": "might", "name": "Might", "abbreviation": "MGT",
    ...                "min": 1, "max": 20, "default": 10}],
    ...     "statPointBudget": 5,
    ... })
    >>> schema.get_stat("might").abbreviation
    'MGT'
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from atlas_cortex.core.exceptions import (
    UnknownFieldError,
    UnknownResourceError,
    UnknownStatError,
)
from atlas_cortex.models.enums import FieldType, ProgressionType


class SchemaModel(BaseModel):
    """Base class for engine schema parts.

    Schema parts are immutable once loaded; the catalog hands out the
    same instances to every session.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


def _duplicates(ids: list[str]) -> list[str]:
    return sorted(key for key, count in Counter(ids).items() if count > 1)


# =============================================================================
# Definitions
# =============================================================================


class StatDefinition(SchemaModel):
    """A numeric character attribute.

    Attributes:
        id: Native field id (key in the character's stats map).
        name: Display name, e.g. "Strength".
        abbreviation: Short label, e.g. "STR".
        min: Lowest allowed value.
        max: Highest allowed value.
        default: Starting value at creation.
        description: Optional help text.
    """

    id: str = Field(min_length=1, description="Native stat id")
    name: str = Field(min_length=1, description="Display name")
    abbreviation: str = Field(min_length=1, max_length=8, description="Short label")
    min: int = Field(description="Lowest allowed value")
    max: int = Field(description="Highest allowed value")
    default: int = Field(description="Starting value")
    description: str | None = Field(default=None, description="Help text")

    @model_validator(mode="after")
    def validate_bounds(self) -> "StatDefinition":
        """Ensure min <= default <= max."""
        if self.min > self.max:
            msg = f"Stat '{self.id}': min ({self.min}) exceeds max ({self.max})"
            raise ValueError(msg)
        if not self.min <= self.default <= self.max:
            msg = (
                f"Stat '{self.id}': default ({self.default}) outside "
                f"[{self.min}, {self.max}]"
            )
            raise ValueError(msg)
        return self

    def clamp(self, value: int) -> int:
        """Clamp a value into this stat's declared range."""
        return max(self.min, min(self.max, value))


class ResourceDefinition(SchemaModel):
    """A depletable pool such as health or mana.

    Attributes:
        id: Native field id.
        name: Display name.
        color: Display colour (hex string).
        icon: Optional emoji or icon name.
        show_in_hud: Whether the pool is shown in the HUD.
    """

    id: str = Field(min_length=1, description="Native resource id")
    name: str = Field(min_length=1, description="Display name")
    color: str = Field(default="#8b5cf6", description="Display colour")
    icon: str | None = Field(default=None, description="Emoji or icon name")
    show_in_hud: bool = Field(default=True, alias="showInHUD", description="Show in HUD")


class FieldOption(SchemaModel):
    """One choice of a select or multiselect field."""

    value: str
    label: str


class FieldValidation(SchemaModel):
    """Numeric bounds for number and slider fields."""

    min: float | None = None
    max: float | None = None

    @model_validator(mode="after")
    def validate_range(self) -> "FieldValidation":
        """Ensure min <= max when both are given."""
        if self.min is not None and self.max is not None and self.min > self.max:
            msg = f"validation.min ({self.min}) exceeds validation.max ({self.max})"
            raise ValueError(msg)
        return self

    def clamp(self, value: float) -> float:
        """Clamp a value into the configured bounds."""
        if self.min is not None:
            value = max(self.min, value)
        if self.max is not None:
            value = min(self.max, value)
        return value


class FormFieldDefinition(SchemaModel):
    """One input of the character-creation form.

    Attributes:
        id: Field id; becomes a top-level character field at finalize.
        type: Input type.
        label: Display label.
        required: Whether finalize requires a value.
        options: Choices for select/multiselect fields.
        default_value: Value used instead of the type default.
        validation: Numeric bounds for number/slider fields.
        ai_generatable: Whether the AI layer may fill this field in.
        placeholder: Optional input hint.
    """

    id: str = Field(min_length=1, description="Field id")
    type: FieldType = Field(description="Input type")
    label: str = Field(min_length=1, description="Display label")
    required: bool = Field(default=False, description="Required at finalize")
    options: list[FieldOption] | None = Field(default=None, description="Choices")
    default_value: Any = Field(default=None, description="Initial value")
    validation: FieldValidation | None = Field(default=None, description="Bounds")
    ai_generatable: bool = Field(default=False, description="AI may fill this field")
    placeholder: str | None = Field(default=None, description="Input hint")

    @model_validator(mode="after")
    def validate_options(self) -> "FormFieldDefinition":
        """Check option lists and option-bound defaults."""
        if self.type.has_options and not self.options:
            msg = f"Field '{self.id}': {self.type} fields need at least one option"
            raise ValueError(msg)
        if self.options:
            dupes = _duplicates([option.value for option in self.options])
            if dupes:
                msg = f"Field '{self.id}': duplicate option values {dupes}"
                raise ValueError(msg)
        if self.default_value is None:
            return self
        values = self.option_values
        if self.type == FieldType.SELECT and self.default_value not in values:
            msg = f"Field '{self.id}': default {self.default_value!r} is not an option"
            raise ValueError(msg)
        if self.type == FieldType.MULTISELECT:
            if not isinstance(self.default_value, list) or any(
                item not in values for item in self.default_value
            ):
                msg = f"Field '{self.id}': multiselect default must be a list of options"
                raise ValueError(msg)
        return self

    @property
    def option_values(self) -> list[str]:
        """Values of the declared options, in order."""
        return [option.value for option in self.options or []]


# =============================================================================
# Progression
# =============================================================================


class RankDefinition(SchemaModel):
    """One step of a rank-based progression ladder."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    order: int


class ProgressionConfig(SchemaModel):
    """How characters advance.

    Attributes:
        type: Level-based or rank-based progression.
        max_level: Level cap for level-based systems.
        ranks: Rank ladder for rank-based systems, sorted by order.
    """

    type: ProgressionType = Field(default=ProgressionType.LEVEL)
    max_level: int | None = Field(default=None, ge=1)
    ranks: list[RankDefinition] | None = Field(default=None)

    @field_validator("ranks", mode="after")
    @classmethod
    def sort_ranks(cls, value: list[RankDefinition] | None) -> list[RankDefinition] | None:
        """Keep ranks in ascending order."""
        if value is None:
            return None
        return sorted(value, key=lambda rank: rank.order)

    @model_validator(mode="after")
    def validate_ranks(self) -> "ProgressionConfig":
        """Rank progression needs a non-empty ladder with unique ids."""
        if self.type == ProgressionType.RANK and not self.ranks:
            msg = "Rank progression requires at least one rank"
            raise ValueError(msg)
        if self.ranks:
            dupes = _duplicates([rank.id for rank in self.ranks])
            if dupes:
                msg = f"Duplicate rank ids {dupes}"
                raise ValueError(msg)
        return self


class HUDConfig(SchemaModel):
    """Which character sections the HUD shows."""

    show_stats: bool = True
    show_resources: bool = True
    show_abilities: bool = True
    show_inventory: bool = True
    layout: Literal["compact", "expanded"] = "compact"


# =============================================================================
# Engine Schema
# =============================================================================


class EngineSchema(SchemaModel):
    """Definition of one rule system.

    Attributes:
        id: Unique engine identifier, e.g. "classic".
        name: Display name.
        description: Short description.
        stats: Stat definitions, in display order.
        stat_point_budget: Points spendable above stat defaults at creation.
        resources: Resource definitions, in display order; the first is primary.
        progression: Progression model.
        creation_fields: Creation form fields, in display order.
        hud_layout: Optional HUD configuration.
        ai_context: Text describing the rule system to the AI layer.
        order: Sort key in engine pickers.
    """

    id: str = Field(min_length=1, description="Engine id")
    name: str = Field(default="", description="Display name")
    description: str = Field(default="", description="Short description")
    stats: list[StatDefinition] = Field(default_factory=list)
    stat_point_budget: int | None = Field(default=None, ge=0)
    resources: list[ResourceDefinition] = Field(default_factory=list)
    progression: ProgressionConfig = Field(default_factory=ProgressionConfig)
    creation_fields: list[FormFieldDefinition] = Field(default_factory=list)
    hud_layout: HUDConfig | None = Field(default=None)
    ai_context: str | None = Field(default=None)
    order: int | None = Field(default=None)

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "EngineSchema":
        """Stat, resource and field ids must be unique within the schema."""
        for label, ids in (
            ("stat", [stat.id for stat in self.stats]),
            ("resource", [resource.id for resource in self.resources]),
            ("field", [field.id for field in self.creation_fields]),
        ):
            dupes = _duplicates(ids)
            if dupes:
                msg = f"Engine '{self.id}': duplicate {label} ids {dupes}"
                raise ValueError(msg)
        return self

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def find_stat(self, stat_id: str) -> StatDefinition | None:
        return next((stat for stat in self.stats if stat.id == stat_id), None)

    def find_resource(self, resource_id: str) -> ResourceDefinition | None:
        return next((res for res in self.resources if res.id == resource_id), None)

    def find_field(self, field_id: str) -> FormFieldDefinition | None:
        return next((field for field in self.creation_fields if field.id == field_id), None)

    def get_stat(self, stat_id: str) -> StatDefinition:
        """Get a stat definition by id.

        Raises:
            UnknownStatError: If the schema declares no such stat.
        """
        stat = self.find_stat(stat_id)
        if stat is None:
            raise UnknownStatError(
                f"Stat '{stat_id}' is not defined",
                definition_id=stat_id,
                engine_id=self.id,
            )
        return stat

    def get_resource(self, resource_id: str) -> ResourceDefinition:
        """Get a resource definition by id.

        Raises:
            UnknownResourceError: If the schema declares no such resource.
        """
        resource = self.find_resource(resource_id)
        if resource is None:
            raise UnknownResourceError(
                f"Resource '{resource_id}' is not defined",
                definition_id=resource_id,
                engine_id=self.id,
            )
        return resource

    def get_field(self, field_id: str) -> FormFieldDefinition:
        """Get a creation form field by id.

        Raises:
            UnknownFieldError: If the schema declares no such field.
        """
        field = self.find_field(field_id)
        if field is None:
            raise UnknownFieldError(
                f"Field '{field_id}' is not defined",
                definition_id=field_id,
                engine_id=self.id,
            )
        return field

    @property
    def stat_ids(self) -> list[str]:
        return [stat.id for stat in self.stats]

    @property
    def resource_ids(self) -> list[str]:
        return [resource.id for resource in self.resources]

    @property
    def primary_resource(self) -> ResourceDefinition | None:
        """The first declared resource (the hp-equivalent pool)."""
        return self.resources[0] if self.resources else None

    @property
    def is_rank_based(self) -> bool:
        return self.progression.type == ProgressionType.RANK

    @property
    def lowest_rank(self) -> RankDefinition | None:
        ranks = self.progression.ranks or []
        return ranks[0] if ranks else None

    def rank_by_key(self, key: str) -> RankDefinition | None:
        """Find a rank by id or display name, case-insensitively."""
        wanted = key.strip().lower()
        for rank in self.progression.ranks or []:
            if wanted in (rank.id.lower(), rank.name.lower()):
                return rank
        return None

    def to_document(self) -> dict[str, Any]:
        """Dump the schema in catalog (camelCase) form."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = [
    "SchemaModel",
    "StatDefinition",
    "ResourceDefinition",
    "FieldOption",
    "FieldValidation",
    "FormFieldDefinition",
    "RankDefinition",
    "ProgressionConfig",
    "HUDConfig",
    "EngineSchema",
]
