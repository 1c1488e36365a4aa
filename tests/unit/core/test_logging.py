"""Tests for structured logging setup."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest
import structlog

from atlas_cortex.core.logging import bind_context, clear_context, configure_logging, get_logger


class TestLogging:
    """Tests for logging configuration and context binding."""

    @pytest.fixture(autouse=True)
    def reset_structlog(self) -> Generator[None, None, None]:
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)
        clear_context()
        structlog.reset_defaults()

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="DEBUG", json_format=True)

        get_logger(__name__).info("Character finalized", engine_id="classic")

        out = capsys.readouterr().out
        assert '"event": "Character finalized"' in out
        assert '"engine_id": "classic"' in out
        assert '"app": "atlas_cortex"' in out

    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="WARNING", json_format=True)

        get_logger(__name__).info("hidden")

        assert "hidden" not in capsys.readouterr().out

    def test_bound_context(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_format=True)
        bind_context(campaign_id="c-42")

        get_logger(__name__).warning("Stat not found")

        assert '"campaign_id": "c-42"' in capsys.readouterr().out
