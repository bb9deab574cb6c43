"""
Clients Package - HTTP Client Setup

This package provides the HTTP client factory and the PxWeb API client used
by the tools.
"""

from pxweb_mcp.clients.http import (
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_MAX_KEEPALIVE,
    DEFAULT_RETRY_COUNT,
    DEFAULT_TIMEOUT_SECONDS,
    create_http_client,
)
from pxweb_mcp.clients.pxweb import (
    JSON_CONTENT_TYPE,
    PxWebClient,
    path_segment,
)

__all__ = [
    # HTTP Client Factory
    "create_http_client",
    "DEFAULT_MAX_CONNECTIONS",
    "DEFAULT_MAX_KEEPALIVE",
    "DEFAULT_RETRY_COUNT",
    "DEFAULT_TIMEOUT_SECONDS",
    # PxWeb Client
    "JSON_CONTENT_TYPE",
    "PxWebClient",
    "path_segment",
]
