"""Provider selection from settings."""
import logging

from stockcharts.core.config import Settings
from stockcharts.core.exceptions import InvalidParameterError
from stockcharts.providers.base import MarketDataProviderInterface
from stockcharts.providers.mock import MockMarketDataProvider

logger = logging.getLogger(__name__)


def create_market_data_provider(settings: Settings) -> MarketDataProviderInterface:
    """Build the provider named by the MARKET_DATA_PROVIDER setting.

    - "mock": Returns MockMarketDataProvider (deterministic synthetic data)

    Raises:
        InvalidParameterError: If the provider name is unknown
    """
    if settings.market_data_provider == "mock":
        logger.debug("Using MockMarketDataProvider for market data")
        return MockMarketDataProvider()

    raise InvalidParameterError(
        f"Unknown market data provider: {settings.market_data_provider}. "
        "Valid options: 'mock'"
    )
