"""
Domain Models - Tool Definitions, Calls and Results

This module contains the domain models for the tool system: tool
definitions, registered tools, tool calls and tool results.

Pattern: Domain models as value objects
Pattern: Pydantic for validation at boundaries
"""

from typing import Any, Callable, Optional

from pydantic import BaseModel, Field


# =============================================================================
# ToolDefinition Model
# =============================================================================


class ToolDefinition(BaseModel):
    """
    Tool definition schema for tool registration.

    This is the metadata describing a tool - its name, what it does,
    and the JSON Schema for its parameters. It does not include the
    handler callable; see RegisteredTool for that.

    Attributes:
        name: Unique tool identifier.
        description: Human-readable description of what the tool does.
        parameters: JSON Schema defining the tool's input parameters.

    Example:
        >>> tool = ToolDefinition(
        ...     name="get_code_list",
        ...     description="Fetch a code list",
        ...     parameters={
        ...         "type": "object",
        ...         "properties": {"code_list_id": {"type": "string"}},
        ...         "required": ["code_list_id"],
        ...     },
        ... )
    """

    name: str = Field(..., description="Unique tool identifier")
    description: Optional[str] = Field(
        default=None, description="Human-readable description"
    )
    parameters: dict[str, Any] = Field(
        ..., description="JSON Schema for input parameters"
    )

    model_config = {"frozen": True}


# =============================================================================
# RegisteredTool Model
# =============================================================================


class RegisteredTool(BaseModel):
    """
    A tool with its definition and handler callable.

    The handler can be sync or async and receives the validated
    arguments as a dict.

    Attributes:
        definition: The tool's metadata (name, description, parameters).
        handler: Callable that executes the tool.
    """

    definition: ToolDefinition
    handler: Callable[..., Any] = Field(..., description="Tool execution callable")

    model_config = {"arbitrary_types_allowed": True}

    @property
    def name(self) -> str:
        """Get tool name from definition."""
        return self.definition.name

    @property
    def description(self) -> Optional[str]:
        """Get tool description from definition."""
        return self.definition.description

    @property
    def parameters(self) -> dict[str, Any]:
        """Get tool parameters from definition."""
        return self.definition.parameters


# =============================================================================
# ToolCall Model
# =============================================================================


class ToolCall(BaseModel):
    """
    A request to execute a specific tool with arguments.

    Attributes:
        id: Unique identifier for this tool call.
        name: Name of the tool to execute.
        arguments: Raw arguments, validated by the executor.

    Example:
        >>> tool_call = ToolCall(
        ...     id="call_abc123",
        ...     name="list_recent_tables",
        ...     arguments={"days": 7},
        ... )
    """

    id: str = Field(..., description="Unique tool call identifier")
    name: str = Field(..., description="Name of tool to execute")
    arguments: dict[str, Any] = Field(
        default_factory=dict, description="Arguments for tool"
    )


# =============================================================================
# ToolResult Model
# =============================================================================


class ToolResult(BaseModel):
    """
    Result of executing a tool.

    Either a success carrying the text payload or a failure carrying a
    human-readable error message. Results are returned, never raised.

    Attributes:
        tool_call_id: ID of the ToolCall this result responds to.
        content: The tool's output text.
        is_error: Whether the result represents an error.

    Example:
        >>> result = ToolResult(content="07459: Population")
        >>> failed = ToolResult(content="Error searching tables: HTTP 404: not found", is_error=True)
    """

    tool_call_id: Optional[str] = Field(
        default=None, description="ID of originating tool call"
    )
    content: str = Field(..., description="Tool output content")
    is_error: bool = Field(default=False, description="Whether result is an error")
