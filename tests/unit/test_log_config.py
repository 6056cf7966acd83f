"""
Unit tests for structlog configuration.
"""

from __future__ import annotations

import structlog

from errbridge import configure_structlog


class TestConfigureStructlog:
    """Verify structlog configuration function."""

    def test_configure_structlog_sets_log_level(self) -> None:
        """
        GIVEN log_level="WARNING"
        WHEN configure_structlog is called
        THEN structlog is configured with a filtering wrapper.
        """
        configure_structlog("WARNING")
        config = structlog.get_config()
        assert config["wrapper_class"] is not None
        assert structlog.get_logger() is not None

    def test_console_renderer_by_default(self) -> None:
        configure_structlog()
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_json_renderer(self) -> None:
        configure_structlog("INFO", "json")
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_invalid_level_falls_back(self, capsys) -> None:
        """
        GIVEN an invalid log_level string
        WHEN configure_structlog is called
        THEN it falls back to INFO (debug dropped, info emitted).
        """
        configure_structlog("NONEXISTENT", "json")
        log = structlog.get_logger()
        log.debug("hidden.event")
        log.info("visible.event")
        out = capsys.readouterr().out
        assert "visible.event" in out
        assert "hidden.event" not in out
