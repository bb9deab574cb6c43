"""
PxWeb MCP - Main Application Entry Point

This module provides the FastAPI application serving the MCP endpoint and
the health check.

Routes:
- /health: stateless liveness probe, any method
- /mcp: MCP Streamable HTTP transport
- anything else, trailing-slash variants included: 404 {"error": "Not found"}
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.routing import Route

from pxweb_mcp.api.mcp import (
    MCP_PATH,
    SERVER_VERSION,
    MCPEndpoint,
    create_mcp_server,
    create_session_manager,
)
from pxweb_mcp.api.middleware.logging import MCP_SESSION_HEADER, RequestLoggingMiddleware
from pxweb_mcp.api.routes.health import health_route
from pxweb_mcp.clients.pxweb import PxWebClient
from pxweb_mcp.core.config import Settings, get_settings
from pxweb_mcp.tools.builtin import register_builtin_tools
from pxweb_mcp.tools.executor import ToolExecutor
from pxweb_mcp.tools.registry import ToolRegistry

APP_NAME = "PxWeb MCP"
APP_VERSION = SERVER_VERSION
APP_DESCRIPTION = "MCP server for the PxWeb v2 statistics API"

logger = logging.getLogger(__name__)


# =============================================================================
# Exception Handlers
# =============================================================================


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP errors as {"error": ...}; unknown paths become "Not found"."""
    message = "Not found" if exc.status_code == 404 else exc.detail
    return JSONResponse(
        {"error": message},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        f"Unhandled exception on {request.url.path}: {type(exc).__name__}: {exc}"
    )
    return JSONResponse({"error": "Internal server error"}, status_code=500)


# =============================================================================
# Application Factory
# =============================================================================


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[PxWebClient] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Application settings (default: get_settings()).
        client: PxWeb client for the tools (default: built from settings).

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()
    client = client or PxWebClient.from_settings(settings)

    registry = ToolRegistry()
    register_builtin_tools(registry, client)
    executor = ToolExecutor(registry=registry)
    mcp_server = create_mcp_server(registry, executor)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        session_manager = create_session_manager(
            mcp_server, json_response=settings.json_response
        )
        app.state.session_manager = session_manager
        async with session_manager.run():
            logger.info(
                f"{settings.service_name} started: {len(registry)} tools, "
                f"api={client.base_url}"
            )
            yield
        logger.info(f"{settings.service_name} shutting down")

    app = FastAPI(
        title=APP_NAME,
        description=APP_DESCRIPTION,
        version=APP_VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.registry = registry
    app.state.executor = executor

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[MCP_SESSION_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.router.routes.append(health_route)
    app.router.routes.append(Route(MCP_PATH, endpoint=MCPEndpoint()))

    return app
