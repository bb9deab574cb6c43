"""
PxWeb API Client - Request Executor

This module builds upstream URLs for the PxWeb v2 API and performs the
GET requests behind every tool.

Query strings are form-encoded with urlencode, keeping "*" literal:
"valueCodes[Tid]=top(5)" becomes "valueCodes%5BTid%5D=top%285%29" and a
space becomes "+". Unreserved characters such as "~" are also sent literally,
where URLSearchParams would send "%7E"; both decode to the same value.

Pattern: Service Proxy (one request per tool call, nothing cached or retried)
"""

import json
import logging
from typing import Any, Optional, Sequence
from urllib.parse import quote, urlencode

import httpx

from pxweb_mcp.clients.http import create_http_client
from pxweb_mcp.core.config import USER_AGENT, Settings
from pxweb_mcp.core.exceptions import (
    ResponseParseError,
    UpstreamConnectionError,
    UpstreamHTTPError,
)

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"

QueryParams = Sequence[tuple[str, str]]


def path_segment(value: str) -> str:
    """Percent-encode an identifier so it stays a single path segment."""
    return quote(value, safe="")


class PxWebClient:
    """
    Client for the PxWeb v2 REST API.

    Holds only read-only configuration; every call opens its own
    httpx.AsyncClient, so concurrent tool calls share nothing.

    Attributes:
        base_url: API base URL without trailing slash.
        user_agent: Value of the User-Agent header.
        timeout_seconds: Per-request timeout.

    Example:
        >>> client = PxWebClient("https://data.ssb.no/api/pxwebapi/v2")
        >>> url = client.build_url("/tables", [("lang", "en"), ("query", "befolkning*")])
        >>> text = await client.get_text("/tables/07459", [("lang", "no")])
    """

    def __init__(
        self,
        base_url: str,
        user_agent: str = USER_AGENT,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "PxWebClient":
        """Create a client from application settings."""
        return cls(
            base_url=settings.api_base_url,
            user_agent=settings.user_agent,
            timeout_seconds=settings.request_timeout_seconds,
            transport=transport,
        )

    # =========================================================================
    # URL Building
    # =========================================================================

    def build_url(self, path: str, params: Optional[QueryParams] = None) -> str:
        """
        Build an absolute upstream URL.

        Args:
            path: Path below the base URL, starting with "/".
            params: Ordered (name, value) pairs. Repeated names are allowed.

        Returns:
            The absolute URL with a form-encoded query string.
        """
        url = f"{self.base_url}{path}"
        if params:
            url = f"{url}?{urlencode(list(params), safe='*')}"
        return url

    # =========================================================================
    # Request Execution
    # =========================================================================

    async def execute(
        self, url: str, accept: Optional[str] = JSON_CONTENT_TYPE
    ) -> httpx.Response:
        """
        Perform a GET request and return the response.

        Args:
            url: Absolute URL to fetch.
            accept: Value for the Accept header, or None to leave it unset.

        Returns:
            The httpx.Response with its body fully read.

        Raises:
            UpstreamHTTPError: If the status code is outside 200-299.
            UpstreamConnectionError: If no response was received.
        """
        headers = {"User-Agent": self.user_agent}
        if accept:
            headers["Accept"] = accept

        logger.debug(f"GET {url}")

        async with create_http_client(
            timeout_seconds=self.timeout_seconds,
            headers=headers,
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(url)
            except httpx.RequestError as e:
                logger.warning(f"PxWeb request failed: {url} error={type(e).__name__}: {e}")
                raise UpstreamConnectionError(str(e) or type(e).__name__, url=url) from e

        if not response.is_success:
            logger.warning(f"PxWeb returned HTTP {response.status_code} for {url}")
            raise UpstreamHTTPError(response.status_code, response.text)

        return response

    async def get(
        self,
        path: str,
        params: Optional[QueryParams] = None,
        accept: Optional[str] = JSON_CONTENT_TYPE,
    ) -> httpx.Response:
        """Build the URL for path/params and execute the request."""
        return await self.execute(self.build_url(path, params), accept=accept)

    async def get_text(
        self,
        path: str,
        params: Optional[QueryParams] = None,
        accept: Optional[str] = JSON_CONTENT_TYPE,
    ) -> str:
        """Fetch a resource and return the body text verbatim."""
        response = await self.get(path, params, accept=accept)
        return response.text

    async def get_json(
        self, path: str, params: Optional[QueryParams] = None
    ) -> Any:
        """
        Fetch a resource and decode its JSON body.

        Raises:
            ResponseParseError: If the body is not valid JSON.
        """
        response = await self.get(path, params)
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ResponseParseError(f"Invalid JSON in response: {e}") from e
