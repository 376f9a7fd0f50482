"""Tests for the health, readiness and liveness endpoints."""

import asyncio
from datetime import datetime

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from httpx import AsyncClient

from stockcharts.api.v1.health import health_check
from stockcharts.api.v1.health import liveness_check
from stockcharts.api.v1.health import readiness_check
from stockcharts.core.config import Settings

HEALTH_URL = "/api/v1/health"


@pytest.mark.unit
class TestHealth:
    def test_reports_version_and_environment(self, client: TestClient):
        response = client.get(HEALTH_URL)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == "1.0.0"
        assert body["environment"] == "test"
        datetime.fromisoformat(body["timestamp"])

    def test_reports_market_data_provider(self, client: TestClient):
        checks = client.get(HEALTH_URL).json()["checks"]

        assert checks["application"]["status"] == "healthy"
        assert checks["market_data_provider"]["status"] == "healthy"
        assert "mock" in checks["market_data_provider"]["message"]

    @pytest.mark.parametrize(
        ("path", "expected"),
        [("/ready", "ready"), ("/live", "alive")],
    )
    def test_readiness_and_liveness(self, client: TestClient, path: str, expected: str):
        body = client.get(HEALTH_URL + path).json()

        assert body["status"] == expected
        datetime.fromisoformat(body["timestamp"])

    @pytest.mark.parametrize("method", ["post", "put", "delete"])
    def test_read_only(self, client: TestClient, method: str):
        response = getattr(client, method)(HEALTH_URL)

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED


class TestHandlersDirectly:
    async def test_health_check_uses_given_settings(self):
        result = await health_check(Settings(environment="staging"))

        assert result["environment"] == "staging"
        assert "ready" in result["checks"]["application"]["message"].lower()

    async def test_readiness_and_liveness_handlers(self):
        assert (await readiness_check())["status"] == "ready"
        assert (await liveness_check())["status"] == "alive"


@pytest.mark.integration
async def test_concurrent_requests(async_client: AsyncClient):
    responses = await asyncio.gather(*(async_client.get(HEALTH_URL) for _ in range(10)))

    assert {r.status_code for r in responses} == {status.HTTP_200_OK}
    assert {r.json()["status"] for r in responses} == {"healthy"}
