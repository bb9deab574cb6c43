"""
Tests for the command-line entry point.
"""

from unittest.mock import patch

import pytest

from pxweb_mcp.cli import build_parser, main, run, settings_from_args
from pxweb_mcp.core.config import DEFAULT_API_BASE, Settings


class TestParser:

    def test_defaults_come_from_settings(self) -> None:
        args = build_parser(Settings()).parse_args([])

        assert args.url == DEFAULT_API_BASE
        assert args.port == 3000
        assert args.host == "0.0.0.0"
        assert args.log_level == "INFO"

    def test_flags(self) -> None:
        args = build_parser(Settings()).parse_args(
            ["--url", "https://pxweb.example/v2", "--port", "8080", "--log-level", "debug"]
        )

        settings = settings_from_args(args)

        assert settings.api_base_url == "https://pxweb.example/v2"
        assert settings.port == 8080
        assert settings.log_level == "DEBUG"

    def test_environment_supplies_defaults(self, monkeypatch) -> None:
        monkeypatch.setenv("PXWEB_MCP_PORT", "4100")

        args = build_parser(Settings()).parse_args([])

        assert args.port == 4100

    def test_help_exits_zero(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            build_parser(Settings()).parse_args(["--help"])

        assert exc_info.value.code == 0
        assert "--url" in capsys.readouterr().out


class TestMain:

    def test_starts_uvicorn(self) -> None:
        with patch("pxweb_mcp.cli.uvicorn.run") as mock_run:
            code = main(["--port", "3100", "--host", "127.0.0.1"])

        assert code == 0
        mock_run.assert_called_once()
        _, kwargs = mock_run.call_args
        assert kwargs["port"] == 3100
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["log_config"] is None

    def test_startup_failure_exits_one(self, capsys) -> None:
        with patch("pxweb_mcp.cli.uvicorn.run", side_effect=OSError("address already in use")):
            code = main([])

        assert code == 1
        assert "Fatal error: address already in use" in capsys.readouterr().err

    def test_invalid_url_exits_one(self, capsys) -> None:
        with patch("pxweb_mcp.cli.uvicorn.run") as mock_run:
            code = main(["--url", "ftp://nowhere"])

        assert code == 1
        mock_run.assert_not_called()
        assert "Fatal error" in capsys.readouterr().err

    def test_run_exits_with_main_code(self) -> None:
        with patch("pxweb_mcp.cli.main", return_value=1):
            with pytest.raises(SystemExit) as exc_info:
                run()

        assert exc_info.value.code == 1
