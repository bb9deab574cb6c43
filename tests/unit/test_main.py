"""
Tests for the application factory.
"""

import pytest
from fastapi.testclient import TestClient

from pxweb_mcp.main import APP_NAME, create_app


@pytest.fixture
def app(test_settings, pxweb_client):
    return create_app(test_settings, client=pxweb_client)


class TestCreateApp:

    def test_app_metadata(self, app) -> None:
        assert app.title == APP_NAME
        assert app.version == "1.0.0"

    def test_state(self, app, test_settings) -> None:
        assert app.state.settings is test_settings
        assert len(app.state.registry) == 6
        assert app.state.executor.registry is app.state.registry

    def test_routes(self, app) -> None:
        paths = {getattr(route, "path", None) for route in app.routes}

        assert {"/health", "/mcp"} <= paths

    def test_no_docs_routes(self, app) -> None:
        client = TestClient(app)

        assert client.get("/docs").status_code == 404
        assert client.get("/openapi.json").status_code == 404


class TestErrorResponses:

    def test_unknown_path(self, app) -> None:
        response = TestClient(app).get("/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}

    @pytest.mark.parametrize("path", ["/mcp/", "/health/", "/mcp/extra"])
    def test_paths_match_exactly(self, app, path: str) -> None:
        response = TestClient(app, follow_redirects=False).get(path)

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}

    @pytest.mark.parametrize("method", ["GET", "POST", "DELETE", "TRACE"])
    def test_health_answers_every_method(self, app, method: str) -> None:
        response = TestClient(app).request(method, "/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_unhandled_exception(self, app) -> None:
        @app.get("/explode")
        async def explode() -> None:
            raise RuntimeError("kaboom")

        response = TestClient(app, raise_server_exceptions=False).get("/explode")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


class TestLifespan:

    def test_health_inside_lifespan(self, app) -> None:
        with TestClient(app) as client:
            assert client.get("/health").json() == {"status": "ok"}
            assert app.state.session_manager is not None

    def test_restart_creates_new_session_manager(self, app) -> None:
        with TestClient(app):
            first = app.state.session_manager
        with TestClient(app):
            second = app.state.session_manager

        assert first is not second

    def test_cors_exposes_session_header(self, app) -> None:
        response = TestClient(app).get("/health", headers={"Origin": "https://agent.example"})

        assert "mcp-session-id" in response.headers["access-control-expose-headers"].lower()
