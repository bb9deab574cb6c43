"""
Models Package - Domain models for the tool system.
"""

from pxweb_mcp.models.domain import (
    RegisteredTool,
    ToolCall,
    ToolDefinition,
    ToolResult,
)

__all__ = [
    "RegisteredTool",
    "ToolCall",
    "ToolDefinition",
    "ToolResult",
]
