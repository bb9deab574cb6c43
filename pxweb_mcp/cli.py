"""
Command-line entry point.

Usage:
    pxweb-mcp [--url BASE] [--port N] [--host ADDR] [--log-level LEVEL]

Flags override PXWEB_MCP_* environment variables. Exits with status 1 and a
message on stderr if startup fails.
"""

import argparse
import sys
from typing import Optional, Sequence

import uvicorn

from pxweb_mcp.core.config import Settings, get_settings
from pxweb_mcp.main import create_app
from pxweb_mcp.observability.logging import configure_logging, get_logger


def build_parser(defaults: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pxweb-mcp",
        description="MCP server for the PxWeb v2 statistics API",
    )
    parser.add_argument(
        "--url",
        default=defaults.api_base_url,
        help=f"PxWeb API base URL (default: {defaults.api_base_url})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=defaults.port,
        help=f"Port to listen on (default: {defaults.port})",
    )
    parser.add_argument(
        "--host",
        default=defaults.host,
        help=f"Interface to bind (default: {defaults.host})",
    )
    parser.add_argument(
        "--log-level",
        default=defaults.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help=f"Log level (default: {defaults.log_level})",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Build validated settings, with flags taking precedence over the environment."""
    return Settings(
        api_base_url=args.url,
        port=args.port,
        host=args.host,
        log_level=args.log_level,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Parse arguments and serve until interrupted.

    Returns:
        Process exit code.
    """
    try:
        parser = build_parser(get_settings())
        args = parser.parse_args(argv)
        settings = settings_from_args(args)

        configure_logging(level=settings.log_level, stream=sys.stderr, force=True)
        logger = get_logger(__name__)

        app = create_app(settings)

        logger.info(f"PxWeb MCP Server running on http://localhost:{settings.port}/mcp")
        logger.info(f"Using API: {settings.api_base_url}")

        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1
    return 0


def run() -> None:
    sys.exit(main())
