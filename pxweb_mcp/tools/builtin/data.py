"""
Data Query Tool - query_table

Proxies GET /tables/{id}/data. Variable selections, code lists and output
value modes are open-ended objects; each entry becomes one repeated query
parameter (valueCodes[K]=V, codelist[K]=V, outputValues[K]=V).
"""

from typing import Any, Optional

from pxweb_mcp.clients.pxweb import PxWebClient, path_segment
from pxweb_mcp.models.domain import ToolDefinition
from pxweb_mcp.tools.builtin.common import (
    LANGUAGE_PROPERTY,
    language_of,
    require_identifier,
    tool_handler,
)

OUTPUT_FORMATS = ["json-stat2", "csv", "xlsx", "html", "px", "json-px"]
DEFAULT_OUTPUT_FORMAT = "json-stat2"
OUTPUT_VALUE_MODES = ["aggregated", "single"]


QUERY_TABLE_DEFINITION = ToolDefinition(
    name="query_table",
    description="""Query data from a table using the v2 API syntax.

Value selection syntax:
- Specific values: valueCodes[Region]=0301,0402
- All values: valueCodes[Region]=*
- Wildcard: valueCodes[Konsumgrp]=?? (two-digit codes)
- Latest N: valueCodes[Tid]=top(5)
- From value: valueCodes[Tid]=from(2020M01)
- Range: valueCodes[Region]=[range(01,05)]

Output formats: json-stat2, csv, xlsx, html, px, json-px

For csv/xlsx/html, use stub and heading to control layout.""",
    parameters={
        "type": "object",
        "properties": {
            "table_id": {
                "type": "string",
                "description": "The table ID to query.",
            },
            "value_codes": {
                "type": "object",
                "additionalProperties": {"type": "string"},
                "description": "Object mapping variable IDs to value selections. "
                "Example: { Region: '0301', Tid: 'top(5)', ContentsCode: '*' }",
            },
            "language": LANGUAGE_PROPERTY,
            "output_format": {
                "type": "string",
                "enum": OUTPUT_FORMATS,
                "default": DEFAULT_OUTPUT_FORMAT,
                "description": "Output format.",
            },
            "code_list": {
                "type": "object",
                "additionalProperties": {"type": "string"},
                "description": "Optional code lists to use. Example: { Region: 'agg_Fylker2024' }",
            },
            "output_values": {
                "type": "object",
                "additionalProperties": {"type": "string", "enum": OUTPUT_VALUE_MODES},
                "description": "For groupings: 'aggregated' for sums, 'single' for individual values.",
            },
        },
        "required": ["table_id", "value_codes"],
    },
)


def _repeated(prefix: str, entries: Optional[dict[str, str]]) -> list[tuple[str, str]]:
    if not entries:
        return []
    return [(f"{prefix}[{key}]", value) for key, value in entries.items()]


def build_data_params(args: dict[str, Any]) -> list[tuple[str, str]]:
    """
    Build the ordered query parameters for a data request.

    Order: lang, outputFormat, valueCodes[*], codelist[*], outputValues[*].
    """
    params = [
        ("lang", language_of(args)),
        ("outputFormat", args.get("output_format") or DEFAULT_OUTPUT_FORMAT),
    ]
    params.extend(_repeated("valueCodes", args.get("value_codes")))
    params.extend(_repeated("codelist", args.get("code_list")))
    params.extend(_repeated("outputValues", args.get("output_values")))
    return params


@tool_handler("querying table")
async def query_table(client: PxWebClient, args: dict[str, Any]) -> str:
    """
    Fetch table data in the requested output format.

    The response body is returned verbatim. No Accept header is sent since
    csv, xlsx, html and px are not JSON.
    """
    table_id = require_identifier(args, "table_id")
    return await client.get_text(
        f"/tables/{path_segment(table_id)}/data",
        build_data_params(args),
        accept=None,
    )
