"""
MCP Endpoint - Model Context Protocol over Streamable HTTP

This module bridges the tool registry and executor to the MCP Python SDK:

- create_mcp_server() builds a low-level mcp Server whose tools/list and
  tools/call handlers read from the ToolRegistry and dispatch through the
  ToolExecutor.
- create_session_manager() wraps that server in a stateful
  StreamableHTTPSessionManager. The SDK assigns a fresh random session id on
  every initialize and returns it in the mcp-session-id header.
- MCPEndpoint is the ASGI app mounted at /mcp. Any exception escaping the SDK is
  logged and turned into a 500 JSON response if nothing has been sent yet.
"""

import logging
from typing import Any, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.responses import JSONResponse
from starlette.types import Message, Receive, Scope, Send

from pxweb_mcp.api.middleware.logging import MCP_SESSION_HEADER
from pxweb_mcp.observability.logging import correlation_id_context
from pxweb_mcp.tools.executor import ToolExecutor
from pxweb_mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

SERVER_NAME = "pxweb-mcp"
SERVER_VERSION = "1.0.0"
MCP_PATH = "/mcp"


# =============================================================================
# MCP Server
# =============================================================================


def create_mcp_server(registry: ToolRegistry, executor: ToolExecutor) -> Server:
    """
    Create the MCP server exposing the registered tools.

    Tool results (including upstream failures) are returned as a single text
    content block. Unknown tools and schema violations raise, which the SDK
    reports to the client as an error result.

    Args:
        registry: Registry listing the tools.
        executor: Executor that validates and runs tool calls.

    Returns:
        Configured low-level MCP Server.
    """
    server: Server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=definition.name,
                description=definition.description,
                inputSchema=definition.parameters,
            )
            for definition in registry.list()
        ]

    def session_id() -> Optional[str]:
        """Session id header of the HTTP request carrying the current MCP message."""
        try:
            request = server.request_context.request
        except LookupError:
            return None
        headers = getattr(request, "headers", None)
        return headers.get(MCP_SESSION_HEADER) if headers is not None else None

    @server.call_tool()
    async def call_tool(
        name: str, arguments: Optional[dict[str, Any]]
    ) -> list[types.TextContent]:
        # Handlers run in the session manager's task group, outside the
        # request middleware's context.
        with correlation_id_context(session_id()):
            result = await executor.dispatch(name, arguments)
            if result.is_error:
                logger.info(f"Tool {name} returned an error: {result.content}")
        return [types.TextContent(type="text", text=result.content)]

    return server


def create_session_manager(
    server: Server, json_response: bool = False
) -> StreamableHTTPSessionManager:
    """
    Create a stateful Streamable HTTP session manager for the server.

    A session manager can only be run once, so a new one is created on every
    application startup.
    """
    return StreamableHTTPSessionManager(
        app=server,
        event_store=None,
        json_response=json_response,
        stateless=False,
    )


# =============================================================================
# ASGI Endpoint
# =============================================================================


class MCPEndpoint:
    """
    ASGI app serving /mcp through the session manager on app.state.

    Expects scope["app"].state.session_manager to be set by the application
    lifespan.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            session_manager: StreamableHTTPSessionManager = scope["app"].state.session_manager
            await session_manager.handle_request(scope, receive, send_wrapper)
        except Exception:
            logger.exception("MCP error")
            if not response_started:
                response = JSONResponse(
                    {"error": "Internal server error"}, status_code=500
                )
                await response(scope, receive, send)
