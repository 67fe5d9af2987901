"""Tests for setup_logging."""

from __future__ import annotations

from unittest.mock import patch

import structlog

from autopilot.core.logging import setup_logging


def _captured_config(**kwargs):
    with (
        patch("structlog.configure") as configure,
        patch("logging.config.dictConfig") as dict_config,
    ):
        setup_logging(**kwargs)
    return configure.call_args.kwargs, dict_config.call_args.args[0]


class TestSetupLogging:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("AUTOPILOT_LOG_LEVEL", raising=False)
        monkeypatch.delenv("AUTOPILOT_LOG_FORMAT", raising=False)
        _, config = _captured_config()

        assert config["loggers"]["autopilot"]["level"] == "INFO"
        assert config["loggers"]["autopilot"]["propagate"] is False
        assert config["loggers"]["httpx"]["level"] == "WARNING"
        renderer = config["formatters"]["structlog"]["processors"][-1]
        assert isinstance(renderer, structlog.dev.ConsoleRenderer)

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("AUTOPILOT_LOG_LEVEL", "debug")
        monkeypatch.setenv("AUTOPILOT_LOG_FORMAT", "json")
        _, config = _captured_config()

        assert config["loggers"]["autopilot"]["level"] == "DEBUG"
        renderer = config["formatters"]["structlog"]["processors"][-1]
        assert isinstance(renderer, structlog.processors.JSONRenderer)

    def test_arguments_override_environment(self, monkeypatch):
        monkeypatch.setenv("AUTOPILOT_LOG_LEVEL", "debug")
        _, config = _captured_config(level="warning")
        assert config["loggers"]["autopilot"]["level"] == "WARNING"
