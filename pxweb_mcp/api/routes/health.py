"""
Health Route - Health Endpoint

The health check is stateless: it never touches the MCP session manager or
the upstream API. HealthEndpoint is a plain ASGI app, so the Route serving
it accepts every HTTP method.
"""

from pydantic import BaseModel
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

HEALTH_PATH = "/health"


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


class HealthEndpoint:
    """Liveness probe: always 200 {"status": "ok"}."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        response = JSONResponse(HealthResponse(status="ok").model_dump())
        await response(scope, receive, send)


health_route = Route(HEALTH_PATH, endpoint=HealthEndpoint())
