"""
Tests for the MCP server wiring and the /mcp ASGI endpoint.
"""

import mcp.types as types
import pytest
from fastapi.testclient import TestClient
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager

from pxweb_mcp.api.mcp import (
    SERVER_NAME,
    SERVER_VERSION,
    create_mcp_server,
    create_session_manager,
)
from pxweb_mcp.main import create_app
from pxweb_mcp.tools.builtin import register_builtin_tools
from pxweb_mcp.tools.executor import ToolExecutor
from pxweb_mcp.tools.registry import ToolRegistry


@pytest.fixture
def registry(pxweb_client) -> ToolRegistry:
    registry = ToolRegistry()
    register_builtin_tools(registry, pxweb_client)
    return registry


class TestCreateMCPServer:

    def test_sdk_provides_decorator_api(self) -> None:
        from mcp.server.lowlevel import Server

        assert callable(getattr(Server, "list_tools", None))
        assert callable(getattr(Server, "call_tool", None))

    def test_server_identity(self, registry) -> None:
        server = create_mcp_server(registry, ToolExecutor(registry=registry))

        assert server.name == SERVER_NAME == "pxweb-mcp"
        assert server.version == SERVER_VERSION == "1.0.0"

    def test_registers_list_and_call_handlers(self, registry) -> None:
        server = create_mcp_server(registry, ToolExecutor(registry=registry))

        assert types.ListToolsRequest in server.request_handlers
        assert types.CallToolRequest in server.request_handlers

    def test_session_manager_is_stateful(self, registry) -> None:
        server = create_mcp_server(registry, ToolExecutor(registry=registry))

        manager = create_session_manager(server, json_response=True)

        assert isinstance(manager, StreamableHTTPSessionManager)
        assert manager.stateless is False
        assert manager.json_response is True


class TestMCPEndpoint:
    """Failures inside the endpoint become a 500 JSON response."""

    def test_without_session_manager(self, test_settings, pxweb_client) -> None:
        app = create_app(test_settings, client=pxweb_client)
        client = TestClient(app)

        response = client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": "ping"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
