"""Unit tests for dependency injection functions.

Tests the dependency injection functions in stockcharts.core.deps.
"""
import pytest

from stockcharts.core.config import Settings
from stockcharts.core.deps import (
    get_market_data_provider,
    get_overlay_service,
    get_ratio_service,
    get_tool_service,
)
from stockcharts.core.exceptions import InvalidParameterError
from stockcharts.providers.mock import MockMarketDataProvider
from stockcharts.services.ratio_service import RatioService


class TestGetMarketDataProvider:
    """Tests for get_market_data_provider dependency function."""

    @pytest.mark.asyncio
    async def test_returns_mock_provider_when_configured(self) -> None:
        """Test that MockMarketDataProvider is returned when MARKET_DATA_PROVIDER=mock."""
        provider = await get_market_data_provider(Settings(market_data_provider="mock"))
        assert isinstance(provider, MockMarketDataProvider)

    @pytest.mark.asyncio
    async def test_raises_for_unknown_provider(self) -> None:
        """Test that InvalidParameterError is raised for unknown provider configuration."""
        with pytest.raises(InvalidParameterError, match="Unknown market data provider"):
            await get_market_data_provider(Settings(market_data_provider="unknown"))


class TestServiceDependencies:
    @pytest.mark.asyncio
    async def test_ratio_service_wraps_provider(self) -> None:
        provider = MockMarketDataProvider()
        service = await get_ratio_service(provider)
        assert service.provider is provider

    @pytest.mark.asyncio
    async def test_overlay_service_uses_settings(self) -> None:
        settings = Settings(hull_min_segment_bars=5, fibonacci_max_sets=2)
        service = await get_overlay_service(settings)

        assert service.hull_min_segment_bars == 5
        assert service.fibonacci_params.max_sets == 2

    @pytest.mark.asyncio
    async def test_tool_service_uses_settings(self) -> None:
        settings = Settings(default_sma_period=7)
        ratio_service = RatioService(MockMarketDataProvider())
        service = await get_tool_service(settings, ratio_service)

        assert service.settings is settings
        assert service.ratio_service is ratio_service
