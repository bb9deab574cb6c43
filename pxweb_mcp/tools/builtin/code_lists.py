"""
Code List Tool - get_code_list

Proxies GET /codeLists/{id}. Returns the valueset (vs_*) or grouping (agg_*)
body unchanged.
"""

from typing import Any

from pxweb_mcp.clients.pxweb import PxWebClient, path_segment
from pxweb_mcp.models.domain import ToolDefinition
from pxweb_mcp.tools.builtin.common import (
    LANGUAGE_PROPERTY,
    language_of,
    require_identifier,
    tool_handler,
)


GET_CODE_LIST_DEFINITION = ToolDefinition(
    name="get_code_list",
    description="""Fetch a code list (valueset or grouping).

Valuesets (vs_*): Lists of valid values for a variable.
Groupings (agg_*): Aggregation mappings (e.g., municipality mergers).

Find available code lists in table metadata under 'codeLists'.""",
    parameters={
        "type": "object",
        "properties": {
            "code_list_id": {
                "type": "string",
                "description": "Code list ID (e.g. 'vs_Fylker', 'agg_KommSummer').",
            },
            "language": LANGUAGE_PROPERTY,
        },
        "required": ["code_list_id"],
    },
)


@tool_handler("fetching code list")
async def get_code_list(client: PxWebClient, args: dict[str, Any]) -> str:
    code_list_id = require_identifier(args, "code_list_id")
    return await client.get_text(
        f"/codeLists/{path_segment(code_list_id)}",
        [("lang", language_of(args))],
    )
