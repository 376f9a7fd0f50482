"""Mock market data provider for testing.

Generates fake but realistic-looking daily bars without hitting external APIs.
Prices are a pure function of (symbol, date): the same symbol always yields the
same bar for a given date, whatever range is requested, so ratio legs line up
and tests are reproducible.
"""
import logging
import math
import zlib
from datetime import date, timedelta

from stockcharts.indicators.types import Bar
from stockcharts.providers.base import BarRequest, MarketDataProviderInterface

logger = logging.getLogger(__name__)

EPOCH = date(2000, 1, 3)


class MockMarketDataProvider(MarketDataProviderInterface):
    """
    Mock market data provider for testing.

    Each symbol gets its own base price, drift and cycle lengths derived from a
    CRC32 of the symbol. The close follows the drift with two superimposed
    cycles, which gives the hull and swing detectors turning points to find.
    Weekends are skipped; holidays are not modelled.
    """

    @property
    def provider_name(self) -> str:
        return "mock"

    @staticmethod
    def _seed(symbol: str) -> int:
        return zlib.crc32(symbol.upper().encode("utf-8"))

    def _close(self, seed: int, day_index: int) -> float:
        base = 20.0 + seed % 180
        drift = ((seed >> 8) % 16 - 5) / 100.0
        slow_period = 40 + (seed >> 12) % 40
        fast_period = 9 + (seed >> 16) % 8
        phase = (seed >> 20) % 360

        trend = math.exp(drift * day_index / 365.0)
        cycles = (
            1.0
            + 0.08 * math.sin(2 * math.pi * day_index / slow_period)
            + 0.025 * math.sin(2 * math.pi * day_index / fast_period + math.radians(phase))
        )
        return base * trend * cycles

    @staticmethod
    def _wick(seed: int, day_index: int) -> float:
        noise = math.sin(day_index * 12.9898 + (seed % 1000) * 78.233) * 43758.5453
        return 0.003 + 0.009 * (noise - math.floor(noise))

    def _bar(self, seed: int, day: date) -> Bar:
        day_index = (day - EPOCH).days
        close = self._close(seed, day_index)
        open_price = self._close(seed, day_index - 1)
        high = max(open_price, close) * (1 + self._wick(seed, day_index))
        low = min(open_price, close) * (1 - self._wick(seed, -day_index))
        return Bar(
            date=day,
            open=round(open_price, 4),
            high=round(high, 4),
            low=round(low, 4),
            close=round(close, 4),
        )

    async def fetch_bars(self, request: BarRequest) -> list[Bar]:
        """Generate deterministic weekday bars for the requested range."""
        self._validate_request(request)

        seed = self._seed(request.symbol)
        bars = []
        current = request.start_date
        while current <= request.end_date:
            if current.weekday() < 5:
                bars.append(self._bar(seed, current))
            current += timedelta(days=1)

        logger.info(f"Generated {len(bars)} mock bars for {request.symbol}")
        return bars
