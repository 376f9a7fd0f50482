"""Value types shared by the indicator and trend line engines."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Bar:
    """One daily OHLC observation.

    Bars are expected in strictly increasing date order. OHLC consistency
    (low <= open, close <= high) is assumed, not checked.
    """

    date: date
    open: float
    high: float
    low: float
    close: float


@dataclass(frozen=True)
class IndicatorPoint:
    """Single indicator sample aligned to a bar date."""

    date: date
    value: float


@dataclass(frozen=True)
class MacdPoint:
    """Single MACD sample aligned to a bar date."""

    date: date
    macd: float
    signal: float
    histogram: float


@dataclass(frozen=True)
class TrendSegment:
    """Line anchored at two dates/prices.

    Attributes:
        start_date: Date of the first anchor
        end_date: Date of the second anchor
        start_value: Price at start_date
        end_value: Price at end_date
        label: Optional tag (e.g. "38.2%" for Fibonacci levels)
    """

    start_date: date
    end_date: date
    start_value: float
    end_value: float
    label: str | None = None


def closes(bars: Sequence[Bar]) -> NDArray[np.float64]:
    """Closing prices as a float array."""
    return np.array([bar.close for bar in bars], dtype=float)


def highs(bars: Sequence[Bar]) -> NDArray[np.float64]:
    """High prices as a float array."""
    return np.array([bar.high for bar in bars], dtype=float)


def lows(bars: Sequence[Bar]) -> NDArray[np.float64]:
    """Low prices as a float array."""
    return np.array([bar.low for bar in bars], dtype=float)
