"""
Built-in Tools Package - PxWeb tools

This package provides the six tools exposed over MCP. Each proxies one
PxWeb v2 endpoint through a PxWebClient bound at registration time.
"""

from functools import partial
from typing import Any, Callable

from pxweb_mcp.clients.pxweb import PxWebClient
from pxweb_mcp.models.domain import RegisteredTool, ToolDefinition
from pxweb_mcp.tools.builtin.code_lists import GET_CODE_LIST_DEFINITION, get_code_list
from pxweb_mcp.tools.builtin.common import (
    DEFAULT_LANGUAGE,
    LANGUAGES,
    format_table_list,
    tool_handler,
)
from pxweb_mcp.tools.builtin.data import (
    OUTPUT_FORMATS,
    QUERY_TABLE_DEFINITION,
    build_data_params,
    query_table,
)
from pxweb_mcp.tools.builtin.tables import (
    FETCH_METADATA_DEFINITION,
    GET_TABLE_INFO_DEFINITION,
    LIST_RECENT_TABLES_DEFINITION,
    NO_TABLES_FOUND,
    SEARCH_TABLES_DEFINITION,
    fetch_metadata,
    get_table_info,
    list_recent_tables,
    search_tables,
)
from pxweb_mcp.tools.registry import ToolRegistry

BUILTIN_TOOLS: list[tuple[ToolDefinition, Callable[..., Any]]] = [
    (SEARCH_TABLES_DEFINITION, search_tables),
    (GET_TABLE_INFO_DEFINITION, get_table_info),
    (FETCH_METADATA_DEFINITION, fetch_metadata),
    (QUERY_TABLE_DEFINITION, query_table),
    (GET_CODE_LIST_DEFINITION, get_code_list),
    (LIST_RECENT_TABLES_DEFINITION, list_recent_tables),
]


def register_builtin_tools(registry: ToolRegistry, client: PxWebClient) -> None:
    """
    Register all PxWeb tools with the given registry.

    Args:
        registry: The ToolRegistry to register tools with.
        client: PxWeb client every handler sends its requests through.
    """
    for definition, handler in BUILTIN_TOOLS:
        registry.register(
            definition.name,
            RegisteredTool(definition=definition, handler=partial(handler, client)),
        )


__all__ = [
    # Definitions
    "SEARCH_TABLES_DEFINITION",
    "GET_TABLE_INFO_DEFINITION",
    "FETCH_METADATA_DEFINITION",
    "QUERY_TABLE_DEFINITION",
    "GET_CODE_LIST_DEFINITION",
    "LIST_RECENT_TABLES_DEFINITION",
    # Handlers
    "search_tables",
    "get_table_info",
    "fetch_metadata",
    "query_table",
    "get_code_list",
    "list_recent_tables",
    # Helpers
    "build_data_params",
    "format_table_list",
    "tool_handler",
    "DEFAULT_LANGUAGE",
    "LANGUAGES",
    "NO_TABLES_FOUND",
    "OUTPUT_FORMATS",
    # Registration
    "BUILTIN_TOOLS",
    "register_builtin_tools",
]
