"""
Request Logging Middleware

This module implements request/response logging middleware for the HTTP
server. Requests carrying an MCP session id are logged with that id as the
correlation id.

Written as plain ASGI middleware rather than BaseHTTPMiddleware: the MCP
endpoint answers with long-lived SSE streams that must pass through
unbuffered.

Features:
- Logs request method, path, and client IP
- Logs response status code and duration
- Redacts sensitive headers from debug logs
"""

import logging
import time

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from pxweb_mcp.observability.logging import correlation_id_context

logger = logging.getLogger(__name__)

MCP_SESSION_HEADER = "mcp-session-id"

# Headers that should be redacted (case-insensitive matching)
SENSITIVE_HEADER_PATTERNS = [
    "authorization",
    "api-key",
    "apikey",
    "x-api-key",
    "api_key",
    "x-auth-token",
    "cookie",
    "set-cookie",
]


def redact_sensitive_headers(headers: dict[str, str]) -> dict[str, str]:
    """
    Redact sensitive headers from a headers dictionary.

    Args:
        headers: Dictionary of HTTP headers

    Returns:
        Dictionary with sensitive values replaced with [REDACTED]
    """
    redacted = {}
    for key, value in headers.items():
        key_lower = key.lower()
        is_sensitive = any(
            pattern in key_lower for pattern in SENSITIVE_HEADER_PATTERNS
        )
        redacted[key] = "[REDACTED]" if is_sensitive else value
    return redacted


class RequestLoggingMiddleware:
    """
    Middleware for logging HTTP requests and responses.

    Non-HTTP scopes (lifespan) pass straight through.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()

        method = scope["method"]
        path = scope["path"]
        client = scope.get("client")
        client_host = client[0] if client else "unknown"
        headers = Headers(scope=scope)
        status_code = 500

        logger.debug(
            f"Request: {method} {path} from {client_host} "
            f"headers={redact_sensitive_headers(dict(headers))}"
        )

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        with correlation_id_context(headers.get(MCP_SESSION_HEADER)):
            try:
                await self.app(scope, receive, send_wrapper)
            except Exception as e:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.error(
                    f"Request failed: {method} {path} from {client_host} "
                    f"error={type(e).__name__}: {e} duration={duration_ms:.2f}ms"
                )
                raise

            duration_ms = (time.perf_counter() - start_time) * 1000
            log_level = logging.WARNING if status_code >= 400 else logging.INFO
            logger.log(
                log_level,
                f"{method} {path} {status_code} "
                f"from {client_host} duration={duration_ms:.2f}ms",
            )
