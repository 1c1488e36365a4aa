"""Tests for share code generation and parsing."""

from __future__ import annotations

import json
from typing import Any

import pytest
from lzstring import LZString

from atlas_cortex.core.config import ShareSettings
from atlas_cortex.engine.world_creation import create_tactical_character
from atlas_cortex.models import ShareableType
from atlas_cortex.sharing.share_code import (
    DECOMPRESS_FAILED,
    INVALID_FORMAT,
    INVALID_STRUCTURE,
    NEWER_VERSION,
    estimate_code_size,
    generate_share_code,
    is_valid_share_code_format,
    parse_share_code,
)


def _raw_code(payload: Any) -> str:
    """Build a code around an arbitrary payload."""
    encoded = LZString().compressToBase64(json.dumps(payload))
    return "AC-" + encoded.replace("+", "-").replace("/", "_").rstrip("=")


class TestRoundTrip:
    """parse_share_code inverts generate_share_code."""

    @pytest.mark.parametrize(
        "data",
        [
            {"name": "Kai", "level": 7, "stats": {"strength": 14}},
            {"name": "Élodie «la Rouge»", "notes": "日本語 ✨ 🐉"},
            {"empty": {}, "list": [], "none": None, "flag": False, "ratio": 0.25},
            [1, 2, 3],
            "just a string",
            0,
            None,
            {"deep": [{"nested": [{"level": i} for i in range(20)]}]},
        ],
    )
    def test_round_trip(self, data: Any) -> None:
        result = generate_share_code(data, ShareableType.CHARACTER)

        assert result.success
        assert result.code is not None
        parsed = parse_share_code(result.code)
        assert parsed.success
        assert parsed.data is not None
        assert parsed.data.data == data
        assert parsed.data.type == ShareableType.CHARACTER
        assert parsed.data.version == 2

    def test_url_safe(self) -> None:
        data = {"blob": "".join(chr(c) for c in range(32, 127)) * 5}

        code = generate_share_code(data, "save").code

        assert code is not None
        assert code.startswith("AC-")
        assert not set(code) & {"+", "/", "=", " "}
        assert parse_share_code(code).data.data == data  # type: ignore[union-attr]

    def test_model_payload(self) -> None:
        operative = create_tactical_character("Kai")

        code = generate_share_code(operative, ShareableType.CHARACTER).code
        parsed = parse_share_code(code)  # type: ignore[arg-type]

        assert parsed.data.data["name"] == "Kai"  # type: ignore[union-attr]
        assert "tacticalSquad" in parsed.data.data  # type: ignore[union-attr]

    def test_surrounding_whitespace_ignored(self) -> None:
        code = generate_share_code({"name": "Kai"}, "character").code

        assert parse_share_code(f"  {code}\n").success


class TestGenerationFailures:
    """Generation reports failures instead of raising."""

    def test_not_serializable(self) -> None:
        result = generate_share_code({"when": object()}, "character")

        assert not result.success
        assert result.code is None
        assert result.error

    def test_non_finite_number(self) -> None:
        assert not generate_share_code({"hp": float("nan")}, "character").success

    def test_unknown_share_type(self) -> None:
        assert not generate_share_code({"name": "Kai"}, "campaign").success


class TestParseFailures:
    """Parsing reports each failure kind."""

    @pytest.mark.parametrize("code", ["", "XY-abc", "ac-abc", "N4Ig"])
    def test_wrong_prefix(self, code: str) -> None:
        result = parse_share_code(code)

        assert not result.success
        assert result.error == INVALID_FORMAT

    @pytest.mark.parametrize("code", ["AC-", "AC-!!!!", "AC-AAAAAAAAAAAAAAAA"])
    def test_corrupt_payload(self, code: str) -> None:
        assert parse_share_code(code).error == DECOMPRESS_FAILED

    def test_not_json(self) -> None:
        encoded = LZString().compressToBase64("definitely not json")

        assert parse_share_code("AC-" + encoded.rstrip("=")).error == DECOMPRESS_FAILED

    @pytest.mark.parametrize(
        "payload",
        [
            {"type": "character", "version": 1},
            {"type": "weapon", "version": 1, "data": {}},
            {"type": "character", "version": 0, "data": {}},
            ["character", 1, {}],
        ],
    )
    def test_invalid_structure(self, payload: Any) -> None:
        assert parse_share_code(_raw_code(payload)).error == INVALID_STRUCTURE

    def test_newer_version(self) -> None:
        code = generate_share_code({"name": "Kai"}, "character", settings=ShareSettings(current_version=3)).code

        result = parse_share_code(code)  # type: ignore[arg-type]

        assert not result.success
        assert result.error == NEWER_VERSION

    def test_older_version_accepted(self) -> None:
        result = parse_share_code(_raw_code({"type": "save", "version": 1, "data": {"saveName": "x"}}))

        assert result.success
        assert result.data.type == ShareableType.SAVE  # type: ignore[union-attr]


class TestHelpers:
    """Tests for size estimates and format checks."""

    def test_estimate_matches_payload_compression(self) -> None:
        assert estimate_code_size({"name": "Kai"}) > len("AC-")
        assert estimate_code_size({"bad": object()}) == 0

    def test_format_check(self) -> None:
        code = generate_share_code({"name": "Kai"}, "character").code

        assert is_valid_share_code_format(code)  # type: ignore[arg-type]
        assert not is_valid_share_code_format("AC-short")
        assert not is_valid_share_code_format("XY-" + "A" * 40)

    def test_custom_prefix(self) -> None:
        settings = ShareSettings(code_prefix="HERO-")

        code = generate_share_code({"name": "Kai"}, "character", settings=settings).code

        assert code is not None
        assert code.startswith("HERO-")
        assert parse_share_code(code).error == INVALID_FORMAT
        assert parse_share_code(code, settings=settings).success
