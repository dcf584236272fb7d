"""Tests for structlog/stdlib logging configuration."""

from __future__ import annotations

import logging

import pytest
import structlog

from reelscrape.infrastructure.config import AppConfig
from reelscrape.infrastructure.logging import setup


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    setup._stop_async_listener()
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestBuildLoggingConfig:
    def test_level_applied_except_httpx(self) -> None:
        cfg = setup.build_logging_config(AppConfig(log_level="DEBUG"))
        assert cfg["root"]["level"] == "DEBUG"
        assert cfg["loggers"]["uvicorn"]["level"] == "DEBUG"
        assert cfg["loggers"]["httpx"]["level"] == "WARNING"
        assert cfg["handlers"]["default"]["formatter"] == "structlog"

    def test_renderer_follows_format(self) -> None:
        prod = AppConfig(environment="prod")
        dev = AppConfig(environment="dev")
        assert isinstance(setup._renderer(prod), structlog.processors.JSONRenderer)
        assert isinstance(setup._renderer(dev), structlog.dev.ConsoleRenderer)

    def test_base_config_not_mutated(self) -> None:
        setup.build_logging_config(AppConfig(log_level="ERROR"))
        assert "structlog" not in setup.BASE_LOGGING_CONFIG["formatters"]
        assert setup.BASE_LOGGING_CONFIG["loggers"]["uvicorn"]["level"] == "INFO"


class TestConfigureLogging:
    def test_routes_root_through_queue(self) -> None:
        cfg = setup.configure_logging(AppConfig(log_level="WARNING"))

        root = logging.getLogger()
        assert cfg["root"]["level"] == "WARNING"
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], setup._StructlogPreservingQueueHandler)
        assert setup._QUEUE_LISTENER is not None


class TestLevelRangeFilter:
    def test_range(self) -> None:
        flt = setup._LevelRangeFilter(logging.NOTSET, logging.WARNING)
        warning = logging.LogRecord("x", logging.WARNING, "", 0, "m", None, None)
        error = logging.LogRecord("x", logging.ERROR, "", 0, "m", None, None)
        assert flt.filter(warning)
        assert not flt.filter(error)
