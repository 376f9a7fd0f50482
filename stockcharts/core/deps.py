"""Dependency injection for FastAPI endpoints.

This module provides dependency functions for configuration settings, the
market data provider and the services built on top of them.
"""
from typing import Annotated

from fastapi import Depends

from stockcharts.core.config import Settings, get_settings
from stockcharts.providers.base import MarketDataProviderInterface
from stockcharts.providers.factory import create_market_data_provider
from stockcharts.services.overlay_service import OverlayService
from stockcharts.services.ratio_service import RatioService
from stockcharts.services.tool_service import ToolService


async def get_app_settings() -> Settings:
    """Get application settings dependency.

    Returns:
        Settings: Application configuration settings
    """
    return get_settings()


AppSettings = Annotated[Settings, Depends(get_app_settings)]


async def get_market_data_provider(settings: AppSettings) -> MarketDataProviderInterface:
    """Get market data provider based on the MARKET_DATA_PROVIDER setting.

    Returns:
        MarketDataProviderInterface: Configured provider instance

    Raises:
        InvalidParameterError: If the provider name is unknown
    """
    return create_market_data_provider(settings)


async def get_ratio_service(
    provider: MarketDataProviderInterface = Depends(get_market_data_provider),
) -> RatioService:
    """Get RatioService backed by the configured provider."""
    return RatioService(provider)


async def get_overlay_service(settings: AppSettings) -> OverlayService:
    """Get OverlayService tuned from settings."""
    return OverlayService.from_settings(settings)


async def get_tool_service(
    settings: AppSettings,
    ratio_service: RatioService = Depends(get_ratio_service),
) -> ToolService:
    """Get ToolService using settings for defaults and the provider for stock data."""
    return ToolService(settings, ratio_service)
