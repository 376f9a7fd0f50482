"""Tests for the main FastAPI application.
"""
import pytest
from fastapi import status
from fastapi.testclient import TestClient
from httpx import AsyncClient

from stockcharts.core.exceptions import InvalidParameterError
from stockcharts.main import app
from stockcharts.main import create_app


class TestMainApplication:
    """Test the main FastAPI application configuration and endpoints."""

    def test_create_app(self):
        """Test application factory function."""
        test_app = create_app()
        assert test_app.title == "Stock Charts API"
        assert test_app.version == "1.0.0"

    @pytest.mark.unit
    def test_root_endpoint(self, client: TestClient):
        """Test the root endpoint returns expected information."""
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()

        assert data["message"] == "Stock Charts API"
        assert data["version"] == "1.0.0"
        assert data["health"] == "/api/v1/health"
        # docs are only served in development
        assert data["docs"] == "disabled"

    @pytest.mark.asyncio
    async def test_root_endpoint_async(self, async_client: AsyncClient):
        """Test the root endpoint with async client."""
        response = await async_client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Stock Charts API"

    @pytest.mark.unit
    def test_cors_headers(self, client: TestClient):
        """Test CORS headers are properly configured."""
        response = client.options(
            "/api/v1/health",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code in [status.HTTP_200_OK, status.HTTP_204_NO_CONTENT]
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_nonexistent_endpoint(self, client: TestClient):
        """Test that nonexistent endpoints return 404."""
        response = client.get("/nonexistent")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_docs_disabled_outside_development(self, client: TestClient):
        assert client.get("/docs").status_code == status.HTTP_404_NOT_FOUND
        assert client.get("/openapi.json").status_code == status.HTTP_404_NOT_FOUND

    def test_exception_handlers_registered(self):
        """Test that the invalid parameter and global handlers are registered."""
        assert InvalidParameterError in app.exception_handlers
        assert Exception in app.exception_handlers

    def test_app_middleware_configured(self):
        """Test that middleware is properly configured."""
        from starlette.middleware.cors import CORSMiddleware

        middleware_classes = [middleware.cls for middleware in app.user_middleware]
        assert CORSMiddleware in middleware_classes


class TestDevelopmentApplication:
    """Application built with ENVIRONMENT=development."""

    @pytest.fixture
    def dev_client(self, monkeypatch):
        from stockcharts.core.config import get_settings

        monkeypatch.setenv("ENVIRONMENT", "development")
        get_settings.cache_clear()
        try:
            yield TestClient(create_app())
        finally:
            monkeypatch.undo()
            get_settings.cache_clear()

    def test_openapi_schema_available(self, dev_client: TestClient):
        response = dev_client.get("/openapi.json")

        assert response.status_code == status.HTTP_200_OK
        paths = response.json()["paths"]
        assert "/api/v1/tools/{tool_name}" in paths
        assert "/api/v1/charts/overlays" in paths

    def test_root_links_docs(self, dev_client: TestClient):
        assert dev_client.get("/").json()["docs"] == "/docs"


class TestApplicationLifespan:
    """Test application lifespan management."""

    @pytest.mark.asyncio
    async def test_app_startup_and_shutdown(self):
        """Test that the lifespan manager starts and stops cleanly."""
        from stockcharts.main import lifespan

        async with lifespan(app):
            pass

    def test_lifespan_runs_with_test_client(self):
        with TestClient(app) as client:
            assert client.get("/api/v1/health/live").status_code == status.HTTP_200_OK
