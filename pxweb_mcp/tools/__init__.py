"""
Tools Package - Tool Registry and Execution

This package provides the tool registry for managing available tools
and the executor that validates and runs tool calls.
"""

from pxweb_mcp.tools.executor import ToolExecutor
from pxweb_mcp.tools.registry import ToolNotFoundError, ToolRegistry

__all__ = [
    "ToolExecutor",
    "ToolRegistry",
    "ToolNotFoundError",
]
