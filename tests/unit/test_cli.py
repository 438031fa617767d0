"""Smoke tests for the command-line interface."""

import json
import os
import sys
from collections.abc import Iterator
from unittest.mock import patch

import pytest
import structlog
from psy_mantis import cli
from psy_mantis.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


def run_cli(*args: str) -> None:
    with patch.object(sys, "argv", ["psy-mantis", *args]):
        cli.main()


class TestCLI:
    """Tests for cli.main()."""

    def test_no_command_prints_usage(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            run_cli()

        assert exc_info.value.code == 1
        assert "Usage" in capsys.readouterr().out

    def test_unknown_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.dict(os.environ, {"LOG_LEVEL": "ERROR"}), pytest.raises(SystemExit):
            run_cli("analyze")

        assert "Unknown command: analyze" in capsys.readouterr().out

    def test_test_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.dict(
            os.environ,
            {
                "STEAM_API_KEY": "test_api_key_123",
                "STEAM_HTTP_MAX_RETRIES": "4",
                "LOG_LEVEL": "ERROR",
            },
        ):
            run_cli("test-config")

        output = json.loads(capsys.readouterr().out)
        assert output["success"] is True
        assert output["command"] == "test-config"
        assert output["data"]["api_key_configured"] is True
        assert output["data"]["transport"]["max_retries"] == 4
        assert "test_api_key_123" not in json.dumps(output)

    def test_missing_api_key_reports_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        with (
            patch.dict(os.environ, {"LOG_LEVEL": "CRITICAL"}, clear=True),
            pytest.raises(SystemExit) as exc_info,
        ):
            run_cli("app-details", "570")

        assert exc_info.value.code == 1
        output = json.loads(capsys.readouterr().out)
        assert output["success"] is False
        assert "STEAM_API_KEY" in output["error"]

    def test_logs_go_to_stderr_not_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        with (
            patch.dict(os.environ, {"LOG_LEVEL": "INFO", "LOG_FORMAT": "json"}, clear=True),
            pytest.raises(SystemExit),
        ):
            run_cli("app-details", "570")

        captured = capsys.readouterr()
        assert captured.out.lstrip().startswith("{")
        assert json.loads(captured.out)["command"] == "app-details"
        assert "Looking up app details" in captured.err
        assert "CLI error" in captured.err

    def test_log_level_filters_cli_logs(self, capsys: pytest.CaptureFixture[str]) -> None:
        with (
            patch.dict(os.environ, {"LOG_LEVEL": "CRITICAL"}, clear=True),
            pytest.raises(SystemExit),
        ):
            run_cli("app-details", "570")

        captured = capsys.readouterr()
        assert "Looking up app details" not in captured.out + captured.err
        assert "CLI error" not in captured.out + captured.err
