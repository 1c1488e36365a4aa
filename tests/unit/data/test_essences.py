"""Tests for the essence catalogue."""

from __future__ import annotations

import pytest

from atlas_cortex.data import (
    ESSENCES,
    RARITY_COLORS,
    essence_groups,
    essences_by_category,
    essences_by_rarity,
    get_essence,
    rarity_color,
)
from atlas_cortex.models import EssenceCategory, EssenceRarity


class TestCatalogue:
    """Tests for the essence list itself."""

    def test_size_and_unique_names(self) -> None:
        names = [essence.name for essence in ESSENCES]

        assert len(names) == 111
        assert len(set(names)) == len(names)

    @pytest.mark.parametrize(
        ("rarity", "count"),
        [
            (EssenceRarity.COMMON, 82),
            (EssenceRarity.UNCOMMON, 19),
            (EssenceRarity.RARE, 4),
            (EssenceRarity.EPIC, 4),
            (EssenceRarity.LEGENDARY, 2),
        ],
    )
    def test_rarity_counts(self, rarity: EssenceRarity, count: int) -> None:
        assert len(essences_by_rarity(rarity)) == count

    def test_every_rarity_has_a_colour(self) -> None:
        assert set(RARITY_COLORS) == set(EssenceRarity)


class TestLookups:
    """Tests for essence lookups."""

    def test_get_essence_case_insensitive(self) -> None:
        essence = get_essence("  doom ")

        assert essence is not None
        assert essence.name == "Doom"
        assert essence.rarity == EssenceRarity.EPIC

    def test_get_unknown_essence(self) -> None:
        assert get_essence("Cheese") is None

    def test_by_category_accepts_strings(self) -> None:
        body = essences_by_category("Body")

        assert body == essences_by_category(EssenceCategory.BODY)
        assert {"Blood", "Eye", "Wing"} <= {essence.name for essence in body}

    def test_rarity_color(self) -> None:
        assert rarity_color("Legendary") == "#F59E0B"
        assert rarity_color("Mythic") == RARITY_COLORS[EssenceRarity.COMMON]

    def test_groups_in_rarity_order(self) -> None:
        groups = essence_groups()

        assert [rarity for rarity, _ in groups] == list(EssenceRarity)
        assert sum(len(members) for _, members in groups) == len(ESSENCES)
