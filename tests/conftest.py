"""Shared pytest fixtures for testing infrastructure.

CRITICAL: Environment variables MUST be set before ANY imports.
"""
import os

# ===============================================================================
# CRITICAL: Set test environment variables FIRST, before ANY other imports!
# This ensures Settings classes pick up the test configuration.
# ===============================================================================
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["MARKET_DATA_PROVIDER"] = "mock"

# Now import everything else AFTER environment is configured
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport
from httpx import AsyncClient

from stockcharts.core.config import Settings
from stockcharts.core.deps import get_app_settings
from stockcharts.indicators.types import Bar
from stockcharts.utils.structured_logging import configure_structured_logging
from tests.utils.mock_data import (
    bars_from_closes,
    bars_from_lows,
    fibonacci_uptrend_bars,
    serialize_bars,
)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings.

    Returns:
        Settings: Test configuration
    """
    return Settings(
        environment="test",
        log_level="WARNING",
        market_data_provider="mock",
        debug=True,
    )


@pytest.fixture(scope="session", autouse=True)
def configure_logging(test_settings: Settings):
    """Configure structured logging for tests.

    Args:
        test_settings: Test configuration
    """
    configure_structured_logging(log_level=test_settings.log_level)


@pytest.fixture
def app(test_settings: Settings):
    """FastAPI application with the settings dependency overridden.

    Args:
        test_settings: Test configuration

    Returns:
        FastAPI: Test application instance
    """
    from stockcharts.main import app as main_app

    async def _get_test_settings() -> Settings:
        return test_settings

    main_app.dependency_overrides[get_app_settings] = _get_test_settings

    yield main_app

    main_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    """Create synchronous test client.

    Args:
        app: Test application instance

    Returns:
        TestClient: Synchronous test client
    """
    return TestClient(app)


@pytest_asyncio.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client.

    Args:
        app: Test application instance

    Yields:
        AsyncClient: Async test client
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


# Common test data fixtures
@pytest.fixture
def rising_bars() -> list[Bar]:
    """20 bars with closes 100, 101, ..., 119."""
    return bars_from_closes([100.0 + i for i in range(20)])


@pytest.fixture
def fibonacci_bars() -> list[Bar]:
    """60 bars with one swing low at index 5 and one swing high at index 20."""
    return fibonacci_uptrend_bars()


@pytest.fixture
def v_shaped_bars() -> list[Bar]:
    """Lows [10, 8, 9, 7, 9] with highs two points above."""
    return bars_from_lows([10.0, 8.0, 9.0, 7.0, 9.0])


@pytest.fixture
def ohlc_payload():
    """Factory turning bars into an ``ohlcData`` JSON array."""
    return serialize_bars
