"""
Tool Registry

This module implements the tool registry for managing the tools exposed
over MCP. Each entry binds a name to a ToolDefinition (description and
JSON input schema) and the handler that runs it.

Pattern: Service Registry applied to tool management

The registry is built once at startup by the application factory and is
read-only afterwards.
"""

import logging

from pxweb_mcp.models.domain import RegisteredTool, ToolDefinition

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================


class ToolNotFoundError(Exception):
    """Raised when a requested tool is not found in the registry."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Tool not found: {tool_name}")


# =============================================================================
# ToolRegistry Class
# =============================================================================


class ToolRegistry:
    """
    Registry for managing available tools.

    Tools keep their registration order, which is also the order in which
    they are listed to MCP clients.

    Attributes:
        _tools: Dictionary mapping tool names to RegisteredTool instances.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.register("search_tables", search_tool)
        >>> tool = registry.get("search_tables")
        >>> result = await tool.handler({"query": "befolkning*"})
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._tools: dict[str, RegisteredTool] = {}

    def register(self, name: str, tool: RegisteredTool) -> None:
        """
        Register a tool with the given name.

        If a tool with the same name exists, it is overwritten.

        Args:
            name: The name to register the tool under.
            tool: The RegisteredTool instance to register.
        """
        self._tools[name] = tool
        logger.debug(f"Registered tool: {name}")

    def get(self, name: str) -> RegisteredTool:
        """
        Get a registered tool by name.

        Args:
            name: The name of the tool to retrieve.

        Returns:
            The RegisteredTool instance.

        Raises:
            ToolNotFoundError: If the tool is not registered.
        """
        if name not in self._tools:
            raise ToolNotFoundError(name)
        return self._tools[name]

    def list(self) -> list[ToolDefinition]:
        """
        List all registered tool definitions.

        The definition name is replaced by the registration name when the
        two differ, so listed names always match what dispatch accepts.

        Returns:
            List of ToolDefinition instances.
        """
        definitions = []
        for name, tool in self._tools.items():
            definition = tool.definition
            if definition.name != name:
                definition = definition.model_copy(update={"name": name})
            definitions.append(definition)
        return definitions

    def has(self, name: str) -> bool:
        """
        Check if a tool is registered.

        Args:
            name: The name of the tool to check.

        Returns:
            True if the tool is registered, False otherwise.
        """
        return name in self._tools

    def unregister(self, name: str) -> None:
        """
        Remove a tool from the registry.

        Does not raise an error if the tool doesn't exist.
        """
        self._tools.pop(name, None)
        logger.debug(f"Unregistered tool: {name}")

    def get_definition(self, name: str) -> ToolDefinition:
        """
        Get a tool definition by name.

        Raises:
            ToolNotFoundError: If the tool is not registered.
        """
        return self.get(name).definition

    def __len__(self) -> int:
        return len(self._tools)
