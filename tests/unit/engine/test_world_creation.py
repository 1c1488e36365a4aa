"""Tests for world-specific character creation."""

from __future__ import annotations

import pytest

from atlas_cortex.core.exceptions import (
    CharacterValidationError,
    UnknownEngineSchemaError,
    ValidationError,
)
from atlas_cortex.engine.catalog import load_engine_schema
from atlas_cortex.engine.normalizer import normalize_character
from atlas_cortex.engine.world_creation import (
    CLASS_EQUIPMENT,
    create_classic_character,
    create_outworlder_character,
    create_tactical_character,
    creation_engine_for,
    derive_classic_resources,
    get_resource_deriver,
    get_starting_essence,
)
from atlas_cortex.models import EngineSchema, ResourcePool


class TestResourceDerivation:
    """Tests for stat-derived starting pools."""

    @pytest.mark.parametrize(("con", "hp"), [(10, 10), (14, 12), (8, 9), (20, 15)])
    def test_classic_hit_points(self, classic_schema: EngineSchema, con: int, hp: int) -> None:
        pools = derive_classic_resources(classic_schema, {"CON": con}, 100)

        assert pools["hp"] == ResourcePool.full(hp)

    def test_outworlder_engine(self) -> None:
        engine = creation_engine_for("outworlder")
        engine.adjust_stat("power", 4)
        engine.adjust_stat("spirit", 2)

        pools = engine.starting_resources()

        assert pools["hp"].max == 140
        assert pools["stamina"].max == 120
        assert pools["mana"].max == 120
        assert "spirit" not in pools

    def test_tactical_engine(self) -> None:
        engine = creation_engine_for("tactical")
        engine.adjust_stat("vitality", 5)

        character = engine.finalize("Kai", strict=False)

        assert character.hp.max == 150
        assert character.to_document()["nanites"] == {"current": 10, "max": 100}

    def test_unknown_world_has_no_deriver(self) -> None:
        assert get_resource_deriver("starfall") is None

    def test_unknown_engine(self) -> None:
        with pytest.raises(UnknownEngineSchemaError):
            creation_engine_for("steampunk")


class TestClassicCreation:
    """Tests for create_classic_character."""

    def test_fighter(self) -> None:
        hero = create_classic_character(
            "Tordek",
            race="dwarf",
            class_name="fighter",
            stats={"STR": 15, "DEX": 12, "CON": 14},
        )

        assert hero.class_ == "Fighter"
        assert hero.race == "Dwarf"
        assert hero.hp == ResourcePool.full(12)
        assert hero.ac == 11
        assert hero.gold == 15
        assert hero.proficiency_bonus == 2
        assert [item.name for item in hero.inventory] == [
            "Longsword",
            "Chain Mail",
            "Shield",
            "Health Potion",
        ]
        assert [item.id for item in hero.inventory] == ["item-0", "item-1", "item-2", "item-3"]

    def test_equipment_not_shared(self) -> None:
        hero = create_classic_character("Lidda", class_name="Rogue")
        hero.inventory[0].quantity = 5

        assert CLASS_EQUIPMENT["Rogue"][0].quantity == 1

    def test_unknown_class(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            create_classic_character("Nobody", class_name="Bard")

        assert exc_info.value.details["field_name"] == "class"

    def test_stats_over_budget(self) -> None:
        with pytest.raises(CharacterValidationError, match="Invalid classic stats") as exc_info:
            create_classic_character("Greedy", stats={"STR": 20, "DEX": 20})

        assert any("over the stat budget" in error for error in exc_info.value.errors)

    def test_stats_out_of_range(self) -> None:
        with pytest.raises(CharacterValidationError):
            create_classic_character("Weak", stats={"STR": 3})


class TestOutworlderCreation:
    """Tests for create_outworlder_character."""

    def test_starting_essence(self) -> None:
        hero = create_outworlder_character("Jason", essence="swift", stats={"power": 12})

        assert hero.rank == "Iron"
        assert hero.essences == ["Swift"]
        assert hero.hp.max == 120
        ability = hero.abilities[0]
        assert ability.name == "Quick Step"
        assert ability.type == "movement"
        assert ability.cost_amount == 10
        assert ability.description == "Starting ability from Swift essence"

    def test_unknown_essence(self) -> None:
        assert get_starting_essence("Doom") is None
        with pytest.raises(ValidationError):
            create_outworlder_character("Jason", essence="Doom")

    def test_matches_schema_driven_creation(self) -> None:
        """Both creation paths render the same pools from the same stats."""
        schema = load_engine_schema("outworlder")
        engine = creation_engine_for("outworlder")
        engine.adjust_stat("power", 3)
        engine.adjust_stat("spirit", 5)

        generic = normalize_character(engine.finalize("Jason", strict=False), schema)
        hero = normalize_character(
            create_outworlder_character("Jason", stats={"power": 13, "spirit": 15}), schema
        )

        assert generic.resources == hero.resources
        assert [(r.name, r.max) for r in hero.resources] == [
            ("Health", 130),
            ("Mana", 150),
            ("Stamina", 150),
        ]
        assert "stamina" not in generic.extras
        assert "spirit" not in generic.extras


class TestTacticalCreation:
    """Tests for create_tactical_character."""

    def test_defaults(self) -> None:
        operative = create_tactical_character("Kai", title="Shadow")

        assert operative.job == "None"
        assert operative.title == "Shadow"
        assert operative.tactical_squad == []
        assert operative.hp.max == 100
        assert operative.nanites == ResourcePool(current=10, max=100)
