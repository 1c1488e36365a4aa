"""Tests for per-world character models."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from atlas_cortex.models import (
    ClassicCharacter,
    GenericCharacter,
    InventoryItem,
    OutworlderAbility,
    OutworlderCharacter,
    ResourcePool,
    TacticalCharacter,
    parse_character,
)


class TestResourcePool:
    """Tests for ResourcePool."""

    def test_full(self) -> None:
        pool = ResourcePool.full(120)

        assert pool.current == 120
        assert pool.max == 120
        assert pool.percentage == 100.0

    def test_percentage_clamped(self) -> None:
        assert ResourcePool(current=150, max=100).percentage == 100.0
        assert ResourcePool(current=25, max=100).percentage == 25.0
        assert ResourcePool(current=5, max=0).percentage == 0.0

    def test_negative_values_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ResourcePool(current=-1, max=10)

    def test_assignment_validated(self) -> None:
        pool = ResourcePool.full(10)

        with pytest.raises(ValidationError):
            pool.current = -5

    def test_dump_has_no_percentage(self) -> None:
        assert ResourcePool.full(10).model_dump() == {"current": 10, "max": 10}


class TestInventoryItem:
    """Tests for InventoryItem."""

    def test_defaults(self) -> None:
        item = InventoryItem(name="Rope")

        assert item.quantity == 1
        assert item.type == "misc"
        assert item.equipped is False
        assert item.id

    def test_quantity_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            InventoryItem(name="Rope", quantity=0)


class TestClassicCharacter:
    """Tests for ClassicCharacter."""

    def test_missing_stats_filled(self) -> None:
        hero = ClassicCharacter(name="Tordek", stats={"STR": 16})

        assert hero.stats["STR"] == 16
        assert hero.stats["CHA"] == 10
        assert set(hero.stats) == {"STR", "DEX", "CON", "INT", "WIS", "CHA"}

    def test_class_alias(self) -> None:
        hero = ClassicCharacter.model_validate({"name": "Lidda", "class": "Rogue"})

        assert hero.class_ == "Rogue"
        assert hero.to_document()["class"] == "Rogue"

    def test_name_required(self) -> None:
        with pytest.raises(ValidationError):
            ClassicCharacter(name="")


class TestOutworlderCharacter:
    """Tests for OutworlderCharacter."""

    def test_defaults(self) -> None:
        hero = OutworlderCharacter(name="Jason")

        assert hero.world == "outworlder"
        assert hero.rank == "Iron"
        assert hero.mana.max == 100
        assert hero.stats == {"power": 10, "speed": 10, "spirit": 10, "recovery": 10}

    def test_essence_limit(self) -> None:
        with pytest.raises(ValidationError):
            OutworlderCharacter(name="Jason", essences=["Dark", "Blood", "Sin", "Might", "Swift"])

    def test_ability_type_checked(self) -> None:
        with pytest.raises(ValidationError):
            OutworlderAbility(name="Blink", type="teleport")

    def test_camel_case_document(self) -> None:
        hero = OutworlderCharacter(
            name="Jason",
            abilities=[OutworlderAbility(name="Midnight Eyes", type="utility", cost_amount=5)],
        )

        ability = hero.to_document()["abilities"][0]
        assert ability["costAmount"] == 5
        assert ability["currentCooldown"] == 0


class TestTacticalCharacter:
    """Tests for TacticalCharacter."""

    def test_defaults(self) -> None:
        operative = TacticalCharacter(name="Kai")

        assert operative.job == "None"
        assert operative.nanites.current == 10
        assert operative.nanites.max == 100
        assert operative.stats["perception"] == 10

    def test_squad_alias(self) -> None:
        operative = TacticalCharacter.model_validate(
            {"name": "Kai", "tacticalSquad": [{"name": "Igris", "rank": "Knight"}]}
        )

        assert operative.tactical_squad[0].rank == "Knight"
        assert "tacticalSquad" in operative.to_document()


class TestParseCharacter:
    """Tests for world-discriminated parsing."""

    @pytest.mark.parametrize(
        ("world", "expected"),
        [
            ("classic", ClassicCharacter),
            ("outworlder", OutworlderCharacter),
            ("tactical", TacticalCharacter),
            ("starfall", GenericCharacter),
        ],
    )
    def test_variant_selected_by_world(self, world: str, expected: type) -> None:
        assert isinstance(parse_character({"world": world, "name": "Hero"}), expected)

    def test_generic_keeps_extra_fields(self) -> None:
        hero = parse_character(
            {"world": "starfall", "name": "Vex", "mana": {"current": 5, "max": 10}, "origin": "rim"}
        )

        document = hero.to_document()
        assert document["origin"] == "rim"
        assert document["mana"] == {"current": 5, "max": 10}

    def test_round_trip(self, raw_tactical: dict[str, Any]) -> None:
        operative = parse_character(raw_tactical)

        assert parse_character(operative.to_document()) == operative

    def test_invalid_variant_data(self) -> None:
        with pytest.raises(ValidationError):
            parse_character({"world": "outworlder", "name": "Jason", "rank": "Mythic"})
