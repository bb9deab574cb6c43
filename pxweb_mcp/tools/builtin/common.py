"""
Shared pieces of the PxWeb tools: the language parameter, the error
wrapper applied to every handler, and identifier/table-list helpers.
"""

import functools
import logging
from typing import Any, Awaitable, Callable

from pxweb_mcp.clients.pxweb import PxWebClient
from pxweb_mcp.core.exceptions import ResponseParseError
from pxweb_mcp.models.domain import ToolResult

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "no"
LANGUAGES = ["en", "no"]

LANGUAGE_PROPERTY: dict[str, Any] = {
    "type": "string",
    "enum": LANGUAGES,
    "default": DEFAULT_LANGUAGE,
    "description": "Language - 'no' for Norwegian (default), 'en' for English.",
}

ToolHandler = Callable[[PxWebClient, dict[str, Any]], Awaitable[str]]


def error_message(error: BaseException) -> str:
    """Human-readable message for an exception, falling back to its type name."""
    return str(error) or type(error).__name__


def tool_handler(action: str) -> Callable[[ToolHandler], Callable[..., Awaitable[ToolResult]]]:
    """
    Turn a handler's text or exception into a ToolResult.

    Any exception raised by the handler becomes an error result reading
    "Error <action>: <message>".

    Args:
        action: Gerund phrase naming the operation, e.g. "searching tables".
    """

    def decorator(func: ToolHandler) -> Callable[..., Awaitable[ToolResult]]:
        @functools.wraps(func)
        async def wrapper(client: PxWebClient, args: dict[str, Any]) -> ToolResult:
            try:
                text = await func(client, args)
            except Exception as e:
                logger.warning(f"{func.__name__} failed: {type(e).__name__}: {e}")
                return ToolResult(
                    content=f"Error {action}: {error_message(e)}",
                    is_error=True,
                )
            return ToolResult(content=text)

        return wrapper

    return decorator


def require_identifier(args: dict[str, Any], field: str) -> str:
    """
    Return a trimmed identifier argument.

    Raises:
        ValueError: If the identifier is empty after trimming.
    """
    value = str(args.get(field) or "").strip()
    if not value:
        raise ValueError(f"{field} must not be empty")
    return value


def language_of(args: dict[str, Any]) -> str:
    return args.get("language") or DEFAULT_LANGUAGE


def format_table_list(
    payload: Any,
    empty_message: str,
    updated_suffix: bool = False,
) -> str:
    """
    Reduce a /tables response to one "<id>: <label>" line per table.

    A missing or null "tables" key is treated the same as an empty list.

    Args:
        payload: Decoded JSON body.
        empty_message: Text returned when no tables are listed.
        updated_suffix: Append " (updated: <date>)" to each line.

    Raises:
        ResponseParseError: If the body is not a table listing.
    """
    if not isinstance(payload, dict):
        raise ResponseParseError("Unexpected response format: expected a JSON object")

    tables = payload.get("tables")
    if tables is None:
        tables = []
    if not isinstance(tables, list):
        raise ResponseParseError("Unexpected response format: 'tables' is not a list")
    if not tables:
        return empty_message

    lines = []
    for table in tables:
        if not isinstance(table, dict):
            raise ResponseParseError("Unexpected response format: table entry is not an object")
        line = f"{table.get('id', '')}: {table.get('label', '')}"
        if updated_suffix:
            line = f"{line} (updated: {table.get('updated', '')})"
        lines.append(line)
    return "\n".join(lines)
