"""
HTTP Client Module - Client Factory

This module provides HTTP client factory functionality with connection
limits, timeouts and default headers for calls to the PxWeb API.

Pattern: Factory pattern for creating configured HTTP clients
"""

from typing import Optional

import httpx

from pxweb_mcp.core.config import USER_AGENT


# =============================================================================
# Default Configuration Constants
# =============================================================================


DEFAULT_TIMEOUT_SECONDS: float = 30.0
"""Default timeout for HTTP requests in seconds."""

DEFAULT_MAX_CONNECTIONS: int = 100
"""Maximum number of connections in the pool."""

DEFAULT_MAX_KEEPALIVE: int = 20
"""Maximum number of keepalive connections."""

DEFAULT_RETRY_COUNT: int = 0
"""Connection-level retries. Upstream failures are always surfaced to the caller."""


# =============================================================================
# HTTP Client Factory
# =============================================================================


def create_http_client(
    base_url: Optional[str] = None,
    timeout_seconds: Optional[float] = None,
    max_connections: Optional[int] = None,
    max_keepalive: Optional[int] = None,
    retries: Optional[int] = None,
    headers: Optional[dict[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create a configured HTTP client with connection pooling and timeouts.

    Args:
        base_url: Base URL for all requests (e.g., "https://data.ssb.no/api/pxwebapi/v2")
        timeout_seconds: Request timeout in seconds (default: 30.0)
        max_connections: Maximum connections in pool (default: 100)
        max_keepalive: Maximum keepalive connections (default: 20)
        retries: Number of connection retries (default: 0)
        headers: Additional headers to include in all requests
        transport: Transport to use instead of the pooled default
            (e.g. httpx.MockTransport in tests)

    Returns:
        httpx.AsyncClient: Configured async HTTP client

    Example:
        >>> client = create_http_client(headers={"Accept": "application/json"})
        >>> async with client:
        ...     response = await client.get("https://data.ssb.no/api/pxwebapi/v2/tables")
    """
    timeout = timeout_seconds if timeout_seconds is not None else DEFAULT_TIMEOUT_SECONDS
    max_conn = max_connections if max_connections is not None else DEFAULT_MAX_CONNECTIONS
    max_keep = max_keepalive if max_keepalive is not None else DEFAULT_MAX_KEEPALIVE
    retry_count = retries if retries is not None else DEFAULT_RETRY_COUNT

    timeout_config = httpx.Timeout(
        connect=timeout,
        read=timeout,
        write=timeout,
        pool=timeout,
    )

    default_headers = {
        "User-Agent": USER_AGENT,
    }
    if headers:
        default_headers.update(headers)

    if transport is None:
        limits = httpx.Limits(
            max_connections=max_conn,
            max_keepalive_connections=max_keep,
        )
        transport = httpx.AsyncHTTPTransport(
            retries=retry_count,
            limits=limits,
        )

    return httpx.AsyncClient(
        base_url=base_url or "",
        timeout=timeout_config,
        headers=default_headers,
        transport=transport,
    )
