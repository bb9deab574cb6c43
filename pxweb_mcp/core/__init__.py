"""
Core module for PxWeb MCP.

This module contains configuration, exceptions, and shared constants.
"""

from pxweb_mcp.core.config import (
    DEFAULT_API_BASE,
    DEFAULT_PORT,
    USER_AGENT,
    Settings,
    get_settings,
)
from pxweb_mcp.core.exceptions import (
    ErrorCode,
    PxWebMCPException,
    ResponseParseError,
    ToolExecutionError,
    ToolValidationError,
    UpstreamConnectionError,
    UpstreamHTTPError,
)

__all__ = [
    # Config
    "DEFAULT_API_BASE",
    "DEFAULT_PORT",
    "USER_AGENT",
    "Settings",
    "get_settings",
    # Exceptions
    "ErrorCode",
    "PxWebMCPException",
    "UpstreamHTTPError",
    "UpstreamConnectionError",
    "ResponseParseError",
    "ToolExecutionError",
    "ToolValidationError",
]
