"""Tests for the unified character view models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from atlas_cortex.models import NormalizedResource, NormalizedStat, UnifiedCharacterView


class TestNormalizedResource:
    """Tests for NormalizedResource."""

    @pytest.mark.parametrize(
        ("current", "maximum", "expected"),
        [
            (50, 100, 50.0),
            (150, 100, 100.0),
            (10, 0, 0.0),
            (0, 0, 0.0),
        ],
    )
    def test_percentage_clamped(self, current: float, maximum: float, expected: float) -> None:
        assert NormalizedResource(name="Health", current=current, max=maximum).percentage == expected

    def test_percentage_serialized(self) -> None:
        dumped = NormalizedResource(name="Mana", current=1, max=4).model_dump()

        assert dumped["percentage"] == 25.0

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValidationError):
            NormalizedResource(name="Health", current=-1, max=10)


class TestUnifiedCharacterView:
    """Tests for UnifiedCharacterView."""

    def test_defaults(self) -> None:
        view = UnifiedCharacterView(name="Unknown")

        assert view.level == 0
        assert view.resources == ()
        assert view.extras == {}

    def test_lookup_helpers(self) -> None:
        view = UnifiedCharacterView(
            name="Kai",
            resources=(NormalizedResource(name="Health", current=5, max=10),),
            stats=(NormalizedStat(id="agility", name="Agility", abbreviation="AGI", value=18),),
        )

        assert view.resource("Health") is not None
        assert view.resource("Mana") is None
        assert view.stat("agility") is not None
        assert view.stat("agility").value == 18  # type: ignore[union-attr]

    def test_class_alias(self) -> None:
        view = UnifiedCharacterView.model_validate({"name": "Lidda", "class": "Rogue"})

        assert view.class_ == "Rogue"
        assert view.model_dump(by_alias=True)["class"] == "Rogue"

    def test_frozen(self) -> None:
        view = UnifiedCharacterView(name="Kai")

        with pytest.raises(ValidationError):
            view.name = "Other"  # type: ignore[misc]
