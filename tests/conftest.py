"""
Pytest configuration and shared fixtures.

The upstream PxWeb API is replaced by FakePxWeb, an httpx.MockTransport
handler that records every request and serves canned responses per path.
No test touches the network.
"""

import logging
from typing import Any, Optional

import httpx
import pytest
import structlog

from pxweb_mcp.clients.pxweb import PxWebClient
from pxweb_mcp.core.config import Settings, get_settings
from pxweb_mcp.observability.logging import reset_logging

TEST_API_BASE = "https://pxweb.test/api/pxwebapi/v2"
TEST_API_PATH = "/api/pxwebapi/v2"


# =============================================================================
# Test Markers
# =============================================================================


def pytest_configure(config):
    """
    Register custom markers for test categorization.

    - unit: tests for individual components
    - integration: tests driving the full ASGI app over MCP
    """
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for the MCP endpoint")


# =============================================================================
# Fake Upstream
# =============================================================================


class FakePxWeb:
    """
    In-memory stand-in for the PxWeb API.

    Responses are registered per path (relative to the API base). When more
    than one response is queued for a path they are served in order, and the
    last one is repeated. Unregistered paths answer with an empty table list.

    Attributes:
        requests: Every request received, in order.
        error: If set, raised from the transport instead of answering.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.error: Optional[Exception] = None
        self._responses: dict[str, list[dict[str, Any]]] = {}

    def respond(
        self,
        path: str,
        status_code: int = 200,
        json: Any = None,
        text: Optional[str] = None,
    ) -> None:
        """Queue a response for a path such as "/tables" or "/tables/07459"."""
        kwargs: dict[str, Any] = {"status_code": status_code}
        if text is not None:
            kwargs["text"] = text
        else:
            kwargs["json"] = json
        self._responses.setdefault(path, []).append(kwargs)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error

        path = request.url.path
        if path.startswith(TEST_API_PATH):
            path = path[len(TEST_API_PATH):]

        queued = self._responses.get(path)
        if not queued:
            return httpx.Response(200, json={"tables": []})
        kwargs = queued.pop(0) if len(queued) > 1 else queued[0]
        return httpx.Response(**kwargs)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    @property
    def last_params(self) -> list[tuple[str, str]]:
        """Decoded query pairs of the last request, in order."""
        return list(self.last_request.url.params.multi_items())


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_global_state():
    """Clear the settings cache and logging state around every test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    get_settings.cache_clear()
    reset_logging()
    yield
    get_settings.cache_clear()
    reset_logging()
    structlog.reset_defaults()
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def fake_pxweb() -> FakePxWeb:
    return FakePxWeb()


@pytest.fixture
def pxweb_client(fake_pxweb: FakePxWeb) -> PxWebClient:
    """PxWebClient wired to the fake upstream."""
    return PxWebClient(TEST_API_BASE, transport=fake_pxweb.transport)


@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing at the fake upstream, answering MCP with plain JSON."""
    return Settings(api_base_url=TEST_API_BASE, json_response=True)
