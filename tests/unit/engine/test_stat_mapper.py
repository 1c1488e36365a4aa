"""Tests for the stat mapper."""

from __future__ import annotations

import warnings

import pytest

from atlas_cortex.core.exceptions import UnknownStatWarning
from atlas_cortex.engine.catalog import load_engine_schema
from atlas_cortex.engine.stat_mapper import (
    STAT_MAPPINGS,
    StatMapping,
    calculate_modifier,
    coerce_number,
    get_stat_value,
    get_world_stat_context,
    map_stat,
    mapped_names,
)


class TestMapStat:
    """Tests for map_stat."""

    @pytest.mark.parametrize("engine_id", sorted(STAT_MAPPINGS))
    def test_every_mapped_name_resolves_to_schema_field(self, engine_id: str) -> None:
        """Every name in a table points at a declared stat or resource."""
        schema = load_engine_schema(engine_id)
        declared = set(schema.stat_ids) | set(schema.resource_ids)

        for name in mapped_names(engine_id):
            assert map_stat(engine_id, name).native_field_id in declared

    @pytest.mark.parametrize(
        ("engine_id", "requested", "native", "display"),
        [
            ("classic", "STR", "STR", "Strength"),
            ("classic", "Wisdom", "WIS", "Wisdom"),
            ("outworlder", "STR", "power", "Power"),
            ("outworlder", "INT", "spirit", "Spirit"),
            ("outworlder", "CHA", "recovery", "Recovery"),
            ("tactical", "DEX", "agility", "Agility"),
            ("tactical", "CHA", "perception", "Perception"),
            ("tactical", "vitality", "vitality", "Vitality"),
        ],
    )
    def test_known_mappings(self, engine_id: str, requested: str, native: str, display: str) -> None:
        assert map_stat(engine_id, requested) == StatMapping(native, display)

    def test_case_insensitive_legacy_name(self) -> None:
        """Lower-case legacy names are retried upper-cased."""
        assert map_stat("tactical", "str").native_field_id == "strength"

    def test_unknown_name_falls_back_with_warning(self) -> None:
        with pytest.warns(UnknownStatWarning, match="luck"):
            mapping = map_stat("classic", "luck")

        assert mapping == StatMapping("luck", "luck")

    def test_unknown_engine_falls_back_with_warning(self) -> None:
        with pytest.warns(UnknownStatWarning):
            mapping = map_stat("steampunk", "STR")

        assert mapping.native_field_id == "STR"

    def test_unknown_name_never_raises(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            with pytest.raises(UnknownStatWarning):
                map_stat("classic", "luck")


class TestGetStatValue:
    """Tests for get_stat_value."""

    def test_tactical_legacy_strength(self) -> None:
        assert get_stat_value("tactical", "STR", {"strength": 14}) == 14

    def test_outworlder_charisma_fallback(self) -> None:
        assert get_stat_value("outworlder", "CHA", {"recovery": 12}) == 12

    def test_missing_stat_returns_neutral_value(self) -> None:
        with pytest.warns(UnknownStatWarning, match="not found"):
            value = get_stat_value("tactical", "STR", {"agility": 18})

        assert value == 10

    def test_zero_is_a_value(self) -> None:
        assert get_stat_value("classic", "DEX", {"DEX": 0}) == 0


class TestCalculateModifier:
    """Tests for calculate_modifier."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(10, 0), (12, 1), (8, -1), (20, 5), (11, 0), (9, -1), (1, -5), (30, 10)],
    )
    def test_modifier(self, value: int, expected: int) -> None:
        assert calculate_modifier(value) == expected


class TestCoerceNumber:
    """Tests for coerce_number."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(14, 14.0), (2.5, 2.5), (" 30 ", 30.0), ("-4", -4.0)],
    )
    def test_numbers(self, value: object, expected: float) -> None:
        assert coerce_number(value) == expected

    @pytest.mark.parametrize(
        "value", [True, None, "", "strong", float("inf"), "nan", [1], {"current": 1}]
    )
    def test_not_numbers(self, value: object) -> None:
        assert coerce_number(value) is None


class TestWorldStatContext:
    """Tests for world stat instructions."""

    def test_known_world(self) -> None:
        assert "power, speed, spirit, recovery" in get_world_stat_context("outworlder")

    def test_unknown_world(self) -> None:
        assert get_world_stat_context("steampunk") == ""
        assert mapped_names("steampunk") == []
