"""
Table Tools - search, recent updates, table info and metadata

This module implements the table-level tools that proxy the PxWeb
/tables endpoints:

- search_tables: GET /tables?lang=&query=&includeDiscontinued=
- list_recent_tables: GET /tables?lang=&pastdays=
- get_table_info: GET /tables/{id}?lang=
- fetch_metadata: GET /tables/{id}/metadata?lang=

The two listing tools reduce the JSON body to one line per table; the other
two pass the body through unchanged.
"""

from typing import Any

from pxweb_mcp.clients.pxweb import PxWebClient, path_segment
from pxweb_mcp.models.domain import ToolDefinition
from pxweb_mcp.tools.builtin.common import (
    LANGUAGE_PROPERTY,
    format_table_list,
    language_of,
    require_identifier,
    tool_handler,
)

NO_TABLES_FOUND = "No tables found for your query."


# =============================================================================
# Tool Definitions
# =============================================================================


SEARCH_TABLES_DEFINITION = ToolDefinition(
    name="search_tables",
    description="""Search for tables in Statistics Norway (SSB) database.

Supports wildcards (*) at end of words, boolean operators (AND, OR), and special filters:
- title:word - search only in titles
- updated:20250908* - tables updated on date
- "word1 word2"~5 - proximity search (words within 5 words of each other)

Geographic indicators in titles: (F) = county, (K) = municipality, (B) = city district.""",
    parameters={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "Search query. Examples: 'befolkning*', 'title:children AND title:(K)'",
            },
            "language": LANGUAGE_PROPERTY,
            "include_discontinued": {
                "type": "boolean",
                "default": False,
                "description": "Include discontinued table series.",
            },
        },
        "required": ["query"],
    },
)

LIST_RECENT_TABLES_DEFINITION = ToolDefinition(
    name="list_recent_tables",
    description="""List tables updated in the past N days.

Use this to find newly published statistics.""",
    parameters={
        "type": "object",
        "properties": {
            "days": {
                "type": "integer",
                "minimum": 1,
                "maximum": 365,
                "description": "Number of days to look back.",
            },
            "language": LANGUAGE_PROPERTY,
        },
        "required": ["days"],
    },
)

GET_TABLE_INFO_DEFINITION = ToolDefinition(
    name="get_table_info",
    description="""Get basic information about a table (title, time range, variables).

Use this for a quick overview before fetching full metadata.""",
    parameters={
        "type": "object",
        "properties": {
            "table_id": {
                "type": "string",
                "description": "The table ID (e.g. '07459', '11342').",
            },
            "language": LANGUAGE_PROPERTY,
        },
        "required": ["table_id"],
    },
)

FETCH_METADATA_DEFINITION = ToolDefinition(
    name="fetch_metadata",
    description="""Fetch detailed metadata for a table to understand its structure.

Returns variable IDs, value codes, elimination info, and available code lists.
Use this to construct queries.""",
    parameters={
        "type": "object",
        "properties": {
            "table_id": {
                "type": "string",
                "description": "The table ID (e.g. '07459', '11342').",
            },
            "language": LANGUAGE_PROPERTY,
        },
        "required": ["table_id"],
    },
)


# =============================================================================
# Tool Handlers
# =============================================================================


@tool_handler("searching tables")
async def search_tables(client: PxWebClient, args: dict[str, Any]) -> str:
    """
    Search the table catalogue.

    Args:
        client: PxWeb API client.
        args: Validated arguments:
            - query (str): Search expression, trimmed before sending.
            - language (str): "en" or "no".
            - include_discontinued (bool): Include discontinued series.

    Returns:
        One "<id>: <label>" line per table, or NO_TABLES_FOUND.
    """
    params = [
        ("lang", language_of(args)),
        ("query", str(args.get("query", "")).strip()),
        ("includeDiscontinued", "true" if args.get("include_discontinued") else "false"),
    ]
    payload = await client.get_json("/tables", params)
    return format_table_list(payload, NO_TABLES_FOUND)


@tool_handler("listing recent tables")
async def list_recent_tables(client: PxWebClient, args: dict[str, Any]) -> str:
    """List tables updated within the last `days` days, with their update dates."""
    days = args["days"]
    params = [
        ("lang", language_of(args)),
        ("pastdays", str(days)),
    ]
    payload = await client.get_json("/tables", params)
    return format_table_list(
        payload,
        f"No tables updated in the past {days} days.",
        updated_suffix=True,
    )


@tool_handler("fetching table info")
async def get_table_info(client: PxWebClient, args: dict[str, Any]) -> str:
    table_id = require_identifier(args, "table_id")
    return await client.get_text(
        f"/tables/{path_segment(table_id)}",
        [("lang", language_of(args))],
    )


@tool_handler("fetching metadata")
async def fetch_metadata(client: PxWebClient, args: dict[str, Any]) -> str:
    table_id = require_identifier(args, "table_id")
    return await client.get_text(
        f"/tables/{path_segment(table_id)}/metadata",
        [("lang", language_of(args))],
    )
