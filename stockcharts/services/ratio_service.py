"""Bar retrieval for plain and ratio symbols."""
import asyncio
import logging
from datetime import date

from stockcharts.core.exceptions import InvalidParameterError
from stockcharts.indicators.ratio import is_ratio_symbol, parse_ratio_symbol, ratio_bars
from stockcharts.indicators.types import Bar
from stockcharts.providers.base import BarRequest, MarketDataProviderInterface
from stockcharts.utils.validation import is_valid_symbol, normalize_symbol

logger = logging.getLogger(__name__)


class RatioService:
    """Fetch bars for a ticker or a ticker ratio such as ``XLK/SPY``."""

    def __init__(self, provider: MarketDataProviderInterface):
        self.provider = provider

    async def get_ratio_bars(self, ratio_symbol: str, start_date: date, end_date: date) -> list[Bar]:
        """Fetch both legs of a ratio and divide them on common dates.

        Raises:
            InvalidRatioError: If the ratio is not exactly two valid symbols
        """
        numerator, denominator = parse_ratio_symbol(ratio_symbol)
        numerator_bars, denominator_bars = await asyncio.gather(
            self.provider.fetch_bars(BarRequest(numerator, start_date, end_date)),
            self.provider.fetch_bars(BarRequest(denominator, start_date, end_date)),
        )
        bars = ratio_bars(numerator_bars, denominator_bars)
        logger.info(
            f"Built {len(bars)} ratio bars for {numerator}/{denominator} "
            f"from {len(numerator_bars)} and {len(denominator_bars)} bars"
        )
        return bars

    async def get_bars(self, symbol: str, start_date: date, end_date: date) -> list[Bar]:
        """Fetch bars for a single symbol, or for a ratio if it contains "/".

        Raises:
            InvalidParameterError: If the symbol format is invalid
        """
        if is_ratio_symbol(symbol):
            return await self.get_ratio_bars(symbol, start_date, end_date)

        normalized = normalize_symbol(symbol)
        if not is_valid_symbol(normalized):
            raise InvalidParameterError(f"Invalid symbol format: {symbol}")
        return await self.provider.fetch_bars(BarRequest(normalized, start_date, end_date))
