"""Date-aligned indicator series over OHLC bars.

Each function takes bars in ascending date order and returns the indicator as
a list of points aligned to bar dates, starting after the indicator's warm-up.
A request that cannot be computed (non-positive period, too few bars) yields an
empty list rather than an exception; callers treat empty as "not computable".
"""

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from stockcharts.indicators import technical
from stockcharts.indicators.types import Bar, IndicatorPoint, MacdPoint, closes


def _aligned(
    bars: Sequence[Bar], values: NDArray[np.float64], start: int
) -> list[IndicatorPoint]:
    return [
        IndicatorPoint(date=bars[i].date, value=float(values[i]))
        for i in range(start, len(bars))
    ]


def sma(bars: Sequence[Bar], period: int) -> list[IndicatorPoint]:
    """Simple moving average of closes; first point at bars[period - 1]."""
    if period <= 0 or len(bars) < period:
        return []
    values = technical.simple_moving_average(closes(bars), period)
    return _aligned(bars, values, period - 1)


def ema(bars: Sequence[Bar], period: int) -> list[IndicatorPoint]:
    """SMA-seeded exponential moving average; first point at bars[period - 1]."""
    if period <= 0 or len(bars) < period:
        return []
    values = technical.exponential_moving_average(closes(bars), period)
    return _aligned(bars, values, period - 1)


def rsi(bars: Sequence[Bar], period: int) -> list[IndicatorPoint]:
    """Wilder RSI; first point at bars[period]."""
    if period <= 0 or len(bars) <= period:
        return []
    values = technical.relative_strength_index(closes(bars), period)
    return _aligned(bars, values, period)


def macd(
    bars: Sequence[Bar],
    fast: int = 12,
    slow: int = 26,
    signal_period: int = 9,
) -> list[MacdPoint]:
    """MACD line, signal line and histogram.

    Points start where the signal line is first defined. Returns an empty list
    when there are fewer than slow + signal_period bars.
    """
    if fast <= 0 or slow <= 0 or signal_period <= 0:
        return []
    if len(bars) < slow + signal_period:
        return []

    macd_line, signal_line, histogram = technical.macd(
        closes(bars), fast, slow, signal_period
    )
    start = max(fast, slow) - 1 + signal_period - 1
    return [
        MacdPoint(
            date=bars[i].date,
            macd=float(macd_line[i]),
            signal=float(signal_line[i]),
            histogram=float(histogram[i]),
        )
        for i in range(start, len(bars))
    ]


def detrended_price_oscillator(bars: Sequence[Bar], period: int) -> list[IndicatorPoint]:
    """Close minus SMA(period), aligned to the SMA's first point."""
    if period <= 0 or len(bars) < period:
        return []
    values = technical.detrended_price_oscillator(closes(bars), period)
    return _aligned(bars, values, period - 1)
