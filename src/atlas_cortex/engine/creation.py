"""Schema-driven character creation.

The CreationEngine holds the state of one character-creation session: the
creation form values and the stat allocation. It enforces the schema's
stat bounds and point budget on every adjustment and assembles a
GenericCharacter once the form is complete.

Budget accounting counts only points above each stat's default. Lowering
a stat below its default never buys extra points; points are freed only by
lowering a stat that is currently above its default.

Example:
    >>> from atlas_cortex.engine.catalog import load_engine_schema
    >>> engine = CreationEngine(load_engine_schema("classic"))
    >>> engine.adjust_stat("STR", 5)
    True
    >>> engine.remaining_points()
    10
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from atlas_cortex.core.config import CreationSettings, get_settings
from atlas_cortex.core.exceptions import (
    CharacterValidationError,
    RulesEngineError,
    ValidationError,
)
from atlas_cortex.core.logging import get_logger
from atlas_cortex.engine.stat_mapper import coerce_number
from atlas_cortex.models.characters import GenericCharacter, ResourcePool
from atlas_cortex.models.engine_schema import EngineSchema, FormFieldDefinition
from atlas_cortex.models.enums import FieldType


logger = get_logger(__name__)

_RESERVED_FIELDS = frozenset({"world", "id", "name", "level", "rank", "hp", "stats"})


class ResourceDeriver(Protocol):
    """World-specific derivation of starting resource pools.

    Returns pools keyed by resource id; resources left out keep the
    baseline pool.
    """

    def __call__(
        self,
        schema: EngineSchema,
        stats: Mapping[str, int],
        baseline: int,
    ) -> dict[str, ResourcePool]: ...


@dataclass(frozen=True)
class CreationValidation:
    """Validation state of a creation session.

    Attributes:
        missing_fields: Ids of required fields without a value.
        errors: Other violations (stat bounds, budget).
    """

    missing_fields: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.missing_fields and not self.errors


def default_field_value(definition: FormFieldDefinition) -> Any:
    """Starting value of a form field.

    An explicit ``defaultValue`` wins; otherwise the value is keyed by the
    field type.
    """
    if definition.default_value is not None:
        value = definition.default_value
        return list(value) if isinstance(value, list) else value
    match definition.type:
        case FieldType.TEXT | FieldType.TEXTAREA:
            return ""
        case FieldType.CHECKBOX:
            return False
        case FieldType.MULTISELECT:
            return []
        case FieldType.SLIDER:
            if definition.validation is not None and definition.validation.min is not None:
                return definition.validation.min
            return 0
        case _:
            return None


def is_missing(definition: FormFieldDefinition, value: Any) -> bool:
    """Whether a required field lacks a usable value."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list):
        return not value
    if definition.type == FieldType.CHECKBOX:
        return value is not True
    return False


def points_spent(schema: EngineSchema, stats: Mapping[str, int]) -> int:
    """Points above default, summed over the schema's stats."""
    return sum(max(0, stats.get(stat.id, stat.default) - stat.default) for stat in schema.stats)


class CreationEngine:
    """State machine of one character-creation session.

    Attributes:
        form_data: Current value of every creation field.
        stats: Current value of every stat.
    """

    def __init__(
        self,
        schema: EngineSchema | None = None,
        *,
        resource_deriver: ResourceDeriver | None = None,
        settings: CreationSettings | None = None,
    ) -> None:
        """Initialize the creation engine.

        Args:
            schema: Engine schema to start a session for.
            resource_deriver: World-specific starting resources.
            settings: Creation settings; defaults to the global settings.
        """
        self.settings = settings or get_settings().creation
        self.resource_deriver = resource_deriver
        self._schema: EngineSchema | None = None
        self.form_data: dict[str, Any] = {}
        self.stats: dict[str, int] = {}
        if schema is not None:
            self.initialize(schema)

    @property
    def schema(self) -> EngineSchema:
        if self._schema is None:
            raise RulesEngineError("Creation engine has no engine schema; call initialize()")
        return self._schema

    @property
    def budget(self) -> int | None:
        return self.schema.stat_point_budget

    def initialize(self, schema: EngineSchema) -> None:
        """Start a fresh session, replacing any previous state."""
        self._schema = schema
        self.stats = {stat.id: stat.default for stat in schema.stats}
        self.form_data = {
            definition.id: default_field_value(definition)
            for definition in schema.creation_fields
        }
        logger.debug(
            "Creation session initialized",
            engine_id=schema.id,
            budget=schema.stat_point_budget,
        )

    def set_field(self, field_id: str, value: Any) -> Any:
        """Set a creation form value.

        Numeric values (numbers or numeric strings) are clamped into the
        field's validation bounds.

        Args:
            field_id: Creation field id.
            value: New value.

        Returns:
            The value stored.

        Raises:
            UnknownFieldError: If the schema declares no such field.
            ValidationError: If a select value is not one of the options, or
                a number or slider value is not numeric.
        """
        definition = self.schema.get_field(field_id)
        options = definition.option_values
        if definition.type == FieldType.SELECT and value is not None and value not in options:
            raise ValidationError(
                f"'{value}' is not an option of field '{field_id}'",
                field_name=field_id,
                invalid_value=value,
            )
        if definition.type == FieldType.MULTISELECT:
            value = list(value or [])
            invalid = [item for item in value if item not in options]
            if invalid:
                raise ValidationError(
                    f"{invalid} are not options of field '{field_id}'",
                    field_name=field_id,
                    invalid_value=invalid,
                )
        elif definition.type.is_numeric and value is not None:
            number = coerce_number(value)
            if number is None:
                raise ValidationError(
                    f"'{value}' is not a number for field '{field_id}'",
                    field_name=field_id,
                    invalid_value=value,
                )
            if definition.validation is not None:
                number = definition.validation.clamp(number)
            value = int(number) if number.is_integer() else number
        elif definition.type == FieldType.CHECKBOX:
            value = bool(value)
        self.form_data[field_id] = value
        return value

    def spent_points(self) -> int:
        return points_spent(self.schema, self.stats)

    def remaining_points(self) -> int | None:
        """Points left to spend, or None when the schema has no budget."""
        if self.budget is None:
            return None
        return self.budget - self.spent_points()

    def adjust_stat(self, stat_id: str, delta: int) -> bool:
        """Raise or lower a stat.

        The new value is clamped into the stat's bounds. The adjustment is
        rejected when it would spend more than the budget. An unknown stat
        id is ignored.

        Returns:
            True if the stat changed.
        """
        stat = self.schema.find_stat(stat_id)
        if stat is None:
            logger.warning("Ignoring adjustment of unknown stat", stat=stat_id)
            return False
        current = self.stats[stat_id]
        candidate = stat.clamp(current + delta)
        if candidate == current:
            return False
        if self.budget is not None:
            spent = points_spent(self.schema, {**self.stats, stat_id: candidate})
            if spent > self.budget:
                logger.debug(
                    "Stat adjustment over budget",
                    stat=stat_id,
                    candidate=candidate,
                    spent=spent,
                    budget=self.budget,
                )
                return False
        self.stats[stat_id] = candidate
        return True

    def validate(self) -> CreationValidation:
        """Check the session against the schema."""
        missing = [
            definition.id
            for definition in self.schema.creation_fields
            if definition.required and is_missing(definition, self.form_data.get(definition.id))
        ]
        errors: list[str] = []
        for stat in self.schema.stats:
            value = self.stats.get(stat.id, stat.default)
            if not stat.min <= value <= stat.max:
                errors.append(f"{stat.id} = {value} is outside [{stat.min}, {stat.max}]")
        remaining = self.remaining_points()
        if remaining is not None and remaining < 0:
            errors.append(f"{-remaining} points over the stat budget of {self.budget}")
        return CreationValidation(missing_fields=missing, errors=errors)

    def starting_resources(self) -> dict[str, ResourcePool]:
        """Starting pool of every schema resource."""
        baseline = self.settings.baseline_resource_max
        pools = {
            resource.id: ResourcePool.full(baseline) for resource in self.schema.resources
        }
        if self.resource_deriver is not None:
            pools.update(self.resource_deriver(self.schema, dict(self.stats), baseline))
        return pools

    def finalize(self, name: str, *, strict: bool | None = None) -> GenericCharacter:
        """Assemble the character.

        Args:
            name: Character name.
            strict: Raise on missing required fields. Defaults to the
                ``strict_required_fields`` setting.

        Returns:
            The new character (not persisted).

        Raises:
            CharacterValidationError: If required fields are missing (when
                strict), the name is blank, or the stats break the schema.
        """
        strict = self.settings.strict_required_fields if strict is None else strict
        result = self.validate()
        errors = list(result.errors)
        if not name or not name.strip():
            errors.append("name is required")
        if errors or (strict and result.missing_fields):
            raise CharacterValidationError(
                "Character is not ready to finalize",
                missing_fields=result.missing_fields,
                errors=errors,
            )
        if result.missing_fields:
            logger.warning(
                "Finalizing with missing required fields",
                engine_id=self.schema.id,
                missing=result.missing_fields,
            )

        schema = self.schema
        pools = self.starting_resources()
        primary = schema.primary_resource
        hp = pools[primary.id] if primary else ResourcePool.full(self.settings.baseline_resource_max)

        document: dict[str, Any] = {}
        for field_id, value in self.form_data.items():
            if field_id in _RESERVED_FIELDS:
                logger.warning("Creation field shadows a character field", field=field_id)
                continue
            document[field_id] = value
        for resource_id, pool in pools.items():
            if resource_id != "hp":
                document[resource_id] = pool.model_dump()
        document.update(
            world=schema.id,
            name=name.strip(),
            level=self.settings.starting_level,
            hp=hp,
            stats=dict(self.stats),
        )
        if schema.is_rank_based and schema.lowest_rank is not None:
            document["rank"] = schema.lowest_rank.name

        character = GenericCharacter.model_validate(document)
        logger.info(
            "Character finalized",
            engine_id=schema.id,
            character_id=character.id,
            spent=self.spent_points(),
        )
        return character


__all__ = [
    "ResourceDeriver",
    "CreationValidation",
    "CreationEngine",
    "default_field_value",
    "is_missing",
    "points_spent",
]
