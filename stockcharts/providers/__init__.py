"""Market data provider abstractions and implementations.

Available providers:
- MockMarketDataProvider: Deterministic synthetic bars for development and tests
"""

from stockcharts.providers.base import BarRequest, MarketDataProviderInterface
from stockcharts.providers.factory import create_market_data_provider
from stockcharts.providers.mock import MockMarketDataProvider

__all__ = [
    "BarRequest",
    "MarketDataProviderInterface",
    "MockMarketDataProvider",
    "create_market_data_provider",
]
