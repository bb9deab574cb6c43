"""
Tool Executor - Dispatch

This module implements the tool executor: tool lookup, argument validation
against the registered JSON Schema, handler execution and result wrapping.

Validation failures are raised before the handler runs, so an invalid call
never reaches the network. Everything the handler does is returned as a
ToolResult.

Pattern: Command Executor (executes tool calls as commands)
Pattern: Async-first with sync handler support
Pattern: Fail-fast validation with graceful error wrapping
"""

import asyncio
import copy
import inspect
import logging
import uuid
from typing import Any, Optional

from pxweb_mcp.core.exceptions import ToolExecutionError, ToolValidationError
from pxweb_mcp.models.domain import ToolCall, ToolResult
from pxweb_mcp.tools.registry import ToolNotFoundError, ToolRegistry

logger = logging.getLogger(__name__)

_TYPE_MAP: dict[str, Any] = {
    "string": str,
    "integer": int,
    "number": (int, float),
    "boolean": bool,
    "array": list,
    "object": dict,
}


# =============================================================================
# ToolExecutor Class
# =============================================================================


class ToolExecutor:
    """
    Executor for running registered tools.

    The executor looks up tools in the registry, validates arguments against
    the tool's JSON Schema, executes the handler, and wraps results.

    Pattern: Dependency Injection (registry is injected)

    Attributes:
        registry: The ToolRegistry to look up tools from.
        timeout: Optional maximum execution time in seconds. None means the
            handler runs until its upstream request completes or fails.

    Example:
        >>> executor = ToolExecutor(registry=registry)
        >>> result = await executor.dispatch("list_recent_tables", {"days": 7})
    """

    def __init__(
        self, registry: ToolRegistry, timeout: Optional[float] = None
    ) -> None:
        self.registry = registry
        self.timeout = timeout

    # =========================================================================
    # Dispatch
    # =========================================================================

    async def dispatch(
        self, name: str, arguments: Optional[dict[str, Any]] = None
    ) -> ToolResult:
        """
        Run the named tool with raw, unvalidated arguments.

        Args:
            name: Registered tool name.
            arguments: Raw arguments as received from the caller.

        Returns:
            ToolResult with the tool output or error message.

        Raises:
            ToolExecutionError: If the tool is not registered.
            ToolValidationError: If the arguments do not match the schema.
        """
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise ToolValidationError(
                f"Arguments must be an object, got {type(arguments).__name__}",
                tool_name=name,
            )
        tool_call = ToolCall(id=f"call_{uuid.uuid4().hex}", name=name, arguments=arguments)
        return await self.execute(tool_call)

    async def execute(self, tool_call: ToolCall) -> ToolResult:
        """
        Execute a tool call and return the result.

        Args:
            tool_call: The ToolCall containing tool name and arguments.

        Returns:
            ToolResult with execution output or error information.

        Raises:
            ToolExecutionError: If tool not found in registry.
            ToolValidationError: If arguments fail schema validation.
        """
        tool_name = tool_call.name
        tool_call_id = tool_call.id

        try:
            tool = self.registry.get(tool_name)
        except ToolNotFoundError as e:
            raise ToolExecutionError(
                f"Tool not found: {tool_name}",
                tool_name=tool_name,
                tool_call_id=tool_call_id,
            ) from e

        arguments = self._validate_arguments(
            tool_name, tool.parameters, tool_call.arguments
        )

        try:
            result = await self._run_handler(tool.handler, arguments)
        except asyncio.TimeoutError:
            logger.warning(f"Tool {tool_name} timed out after {self.timeout}s")
            return ToolResult(
                tool_call_id=tool_call_id,
                content=f"Tool execution timeout after {self.timeout}s",
                is_error=True,
            )
        except Exception as e:
            logger.error(f"Tool {tool_name} execution failed: {e}")
            return ToolResult(
                tool_call_id=tool_call_id,
                content=f"Tool execution failed: {e}",
                is_error=True,
            )

        if isinstance(result, ToolResult):
            return result.model_copy(update={"tool_call_id": tool_call_id})
        return ToolResult(tool_call_id=tool_call_id, content=str(result))

    # =========================================================================
    # Argument Validation
    # =========================================================================

    def _validate_arguments(
        self, tool_name: str, schema: dict[str, Any], arguments: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Validate arguments against the tool's JSON Schema.

        Checks required properties, types, enums, numeric bounds and the
        value schema of open-ended objects. Defaults from the schema are
        filled in for absent properties; an explicit null counts as absent.

        Returns:
            A new dict of validated arguments.

        Raises:
            ToolValidationError: If validation fails.
        """
        for prop in schema.get("required", []):
            if arguments.get(prop) is None:
                raise ToolValidationError(
                    f"Missing required argument: {prop}",
                    tool_name=tool_name,
                    field=prop,
                )

        validated = dict(arguments)
        properties = schema.get("properties", {})
        for prop_name, prop_schema in properties.items():
            if validated.get(prop_name) is None:
                validated.pop(prop_name, None)
                if "default" in prop_schema:
                    validated[prop_name] = copy.deepcopy(prop_schema["default"])
                continue
            validated[prop_name] = self._validate_value(
                tool_name, prop_name, prop_schema, validated[prop_name]
            )

        return validated

    def _validate_value(
        self, tool_name: str, field: str, schema: dict[str, Any], value: Any
    ) -> Any:
        expected_type = schema.get("type")

        if expected_type == "integer" and isinstance(value, float) and value.is_integer():
            value = int(value)

        if expected_type and not self._check_type(value, expected_type):
            raise ToolValidationError(
                f"Invalid type for '{field}': expected {expected_type}, "
                f"got {type(value).__name__}",
                tool_name=tool_name,
                field=field,
                value=value,
            )

        enum = schema.get("enum")
        if enum is not None and value not in enum:
            raise ToolValidationError(
                f"Invalid value for '{field}': expected one of {enum}, got {value!r}",
                tool_name=tool_name,
                field=field,
                value=value,
            )

        minimum = schema.get("minimum")
        if minimum is not None and value < minimum:
            raise ToolValidationError(
                f"Invalid value for '{field}': must be >= {minimum}, got {value}",
                tool_name=tool_name,
                field=field,
                value=value,
            )

        maximum = schema.get("maximum")
        if maximum is not None and value > maximum:
            raise ToolValidationError(
                f"Invalid value for '{field}': must be <= {maximum}, got {value}",
                tool_name=tool_name,
                field=field,
                value=value,
            )

        item_schema = schema.get("additionalProperties")
        if isinstance(value, dict) and isinstance(item_schema, dict):
            value = {
                key: self._validate_value(tool_name, f"{field}.{key}", item_schema, item)
                for key, item in value.items()
            }

        return value

    def _check_type(self, value: Any, expected_type: str) -> bool:
        """
        Check if a value matches the expected JSON Schema type.

        Args:
            value: The value to check.
            expected_type: The JSON Schema type string.

        Returns:
            True if the value matches the type, False otherwise.
        """
        python_type = _TYPE_MAP.get(expected_type)
        if python_type is None:
            return True

        # bool is a subclass of int, but not a valid JSON number
        if expected_type in ("integer", "number") and isinstance(value, bool):
            return False

        return isinstance(value, python_type)

    # =========================================================================
    # Handler Execution
    # =========================================================================

    async def _run_handler(self, handler: Any, arguments: dict[str, Any]) -> Any:
        """
        Execute a handler, with timeout protection when one is configured.

        Sync handlers are run in the default executor to avoid blocking.
        """
        if inspect.iscoroutinefunction(handler):
            awaitable = handler(arguments)
        else:
            loop = asyncio.get_running_loop()
            awaitable = loop.run_in_executor(None, handler, arguments)

        if self.timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=self.timeout)
