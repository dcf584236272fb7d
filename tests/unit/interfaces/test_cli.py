"""Tests for the CLI entrypoint (argument parsing and wiring)."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from reelscrape.interfaces.cli.cli import _parse_args, build_cli_overrides, start

_CLI = "reelscrape.interfaces.cli.cli"


class TestBuildCliOverrides:
    def test_empty(self) -> None:
        assert build_cli_overrides(_parse_args([])) == {}

    def test_flags(self) -> None:
        args = _parse_args(
            ["--environment", "prod", "--log-level", "DEBUG", "--log-format", "console"]
        )
        assert build_cli_overrides(args) == {
            "environment": "prod",
            "log_level": "DEBUG",
            "log_format": "console",
        }

    def test_invalid_choice_exits(self) -> None:
        with pytest.raises(SystemExit):
            _parse_args(["--environment", "staging"])


class TestStart:
    def test_default_port_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "8123")
        monkeypatch.delenv("HOST", raising=False)
        with patch(f"{_CLI}.uvicorn.run") as run, patch(
            f"{_CLI}.configure_logging", return_value={"version": 1}
        ) as configure, patch(f"{_CLI}.create_app", return_value=MagicMock()) as make:
            start([])

        configure.assert_called_once()
        make.assert_called_once()
        kwargs = run.call_args.kwargs
        assert kwargs["port"] == 8123
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["log_config"] == {"version": 1}

    def test_flags_win_over_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "8123")
        with patch(f"{_CLI}.uvicorn.run") as run, patch(
            f"{_CLI}.configure_logging", return_value={}
        ), patch(f"{_CLI}.create_app") as make:
            start(["--host", "127.0.0.1", "--port", "9000", "--environment", "prod"])

        assert run.call_args.kwargs["port"] == 9000
        assert run.call_args.kwargs["host"] == "127.0.0.1"
        config = make.call_args.args[0]
        assert config.environment == "prod"
        assert config.log_format == "json"
