"""
Tests for PxWebClient - URL building and request execution.
"""

from urllib.parse import parse_qsl, urlsplit

import httpx
import pytest

from pxweb_mcp.clients.pxweb import PxWebClient, path_segment
from pxweb_mcp.core.config import Settings
from pxweb_mcp.core.exceptions import (
    ResponseParseError,
    UpstreamConnectionError,
    UpstreamHTTPError,
)
from tests.conftest import TEST_API_BASE


# =============================================================================
# URL Building
# =============================================================================


class TestBuildURL:
    """Query strings are form-encoded and keep pair order."""

    def test_path_without_params(self) -> None:
        client = PxWebClient(TEST_API_BASE)

        assert client.build_url("/tables/07459") == f"{TEST_API_BASE}/tables/07459"

    def test_trailing_slash_on_base_is_dropped(self) -> None:
        client = PxWebClient(f"{TEST_API_BASE}/")

        assert client.build_url("/tables") == f"{TEST_API_BASE}/tables"

    def test_brackets_and_parentheses_are_encoded(self) -> None:
        client = PxWebClient(TEST_API_BASE)

        url = client.build_url(
            "/tables/07459/data",
            [("valueCodes[Region]", "0301"), ("valueCodes[Tid]", "top(5)")],
        )

        assert "valueCodes%5BRegion%5D=0301" in url
        assert "valueCodes%5BTid%5D=top%285%29" in url

    def test_asterisk_stays_literal(self) -> None:
        client = PxWebClient(TEST_API_BASE)

        url = client.build_url("/tables", [("query", "befolkning*")])

        assert url.endswith("query=befolkning*")

    def test_spaces_and_quotes_are_encoded(self) -> None:
        client = PxWebClient(TEST_API_BASE)

        url = client.build_url("/tables", [("query", '"barn skole"~5')])

        assert "query=%22barn+skole%22~5" in url
        assert parse_qsl(urlsplit(url).query) == [("query", '"barn skole"~5')]

    def test_query_decodes_to_original_pairs(self) -> None:
        client = PxWebClient(TEST_API_BASE)
        pairs = [
            ("lang", "en"),
            ("valueCodes[Region]", "[range(01,05)]"),
            ("valueCodes[Konsumgrp]", "??"),
            ("codelist[Region]", "agg_Fylker2024"),
        ]

        url = client.build_url("/tables/03013/data", pairs)

        assert parse_qsl(urlsplit(url).query) == pairs


def test_path_segment_encodes_reserved_characters() -> None:
    assert path_segment("07459") == "07459"
    assert path_segment("a/b c") == "a%2Fb%20c"


# =============================================================================
# Request Execution
# =============================================================================


class TestExecute:
    """Behaviour of the GET helpers against a fake upstream."""

    @pytest.mark.asyncio
    async def test_get_text_returns_body_verbatim(self, fake_pxweb, pxweb_client) -> None:
        fake_pxweb.respond("/tables/07459", text='{"id": "07459",  "label": "Befolkning"}')

        text = await pxweb_client.get_text("/tables/07459", [("lang", "no")])

        assert text == '{"id": "07459",  "label": "Befolkning"}'

    @pytest.mark.asyncio
    async def test_sends_user_agent_and_accept(self, fake_pxweb, pxweb_client) -> None:
        await pxweb_client.get_text("/tables")

        request = fake_pxweb.last_request
        assert request.method == "GET"
        assert request.headers["User-Agent"] == "pxweb-mcp/1.0"
        assert request.headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_accept_none_leaves_client_default(self, fake_pxweb, pxweb_client) -> None:
        await pxweb_client.get_text("/tables/07459/data", accept=None)

        assert fake_pxweb.last_request.headers["Accept"] != "application/json"

    @pytest.mark.asyncio
    async def test_non_success_status_raises(self, fake_pxweb, pxweb_client) -> None:
        fake_pxweb.respond("/tables/99999", status_code=404, text="Table not found")

        with pytest.raises(UpstreamHTTPError) as exc_info:
            await pxweb_client.get_text("/tables/99999")

        assert str(exc_info.value) == "HTTP 404: Table not found"
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_connection_failure_raises(self, fake_pxweb, pxweb_client) -> None:
        fake_pxweb.error = httpx.ConnectError("Connection refused")

        with pytest.raises(UpstreamConnectionError, match="Connection refused") as exc_info:
            await pxweb_client.get_text("/tables")

        assert exc_info.value.url == f"{TEST_API_BASE}/tables"

    @pytest.mark.asyncio
    async def test_get_json_decodes(self, fake_pxweb, pxweb_client) -> None:
        fake_pxweb.respond("/tables", json={"tables": [{"id": "07459"}]})

        payload = await pxweb_client.get_json("/tables")

        assert payload == {"tables": [{"id": "07459"}]}

    @pytest.mark.asyncio
    async def test_get_json_invalid_body(self, fake_pxweb, pxweb_client) -> None:
        fake_pxweb.respond("/tables", text="<html>maintenance</html>")

        with pytest.raises(ResponseParseError, match="Invalid JSON in response"):
            await pxweb_client.get_json("/tables")


def test_from_settings() -> None:
    settings = Settings(
        api_base_url="https://pxweb.example/v2/",
        user_agent="probe/0.1",
        request_timeout_seconds=12,
    )

    client = PxWebClient.from_settings(settings)

    assert client.base_url == "https://pxweb.example/v2"
    assert client.user_agent == "probe/0.1"
    assert client.timeout_seconds == 12
