"""Synthetic bar builders for indicator and trend line tests.

Builders produce weekday-dated bars so tests can describe a series by one
price dimension and let the rest follow.
"""
from collections.abc import Sequence
from datetime import date
from datetime import timedelta

import numpy as np

from stockcharts.indicators.types import Bar

START_DATE = date(2024, 1, 1)


def trading_days(count: int, start: date = START_DATE) -> list[date]:
    """First ``count`` weekdays on or after ``start``."""
    days = []
    current = start
    while len(days) < count:
        if current.weekday() < 5:
            days.append(current)
        current += timedelta(days=1)
    return days


def bars_from_closes(closes: Sequence[float], start: date = START_DATE) -> list[Bar]:
    """Bars whose open/high/low all equal the close."""
    return [
        Bar(date=day, open=close, high=close, low=close, close=close)
        for day, close in zip(trading_days(len(closes), start), closes)
    ]


def bars_from_lows(
    lows: Sequence[float], spread: float = 2.0, start: date = START_DATE
) -> list[Bar]:
    """Bars with the given lows and highs ``spread`` above them."""
    bars = []
    for day, low in zip(trading_days(len(lows), start), lows):
        high = low + spread
        mid = (low + high) / 2
        bars.append(Bar(date=day, open=mid, high=high, low=low, close=mid))
    return bars


def bars_from_extremes(
    highs: Sequence[float], lows: Sequence[float], start: date = START_DATE
) -> list[Bar]:
    """Bars with explicit highs and lows; open and close at the midpoint."""
    bars = []
    for day, high, low in zip(trading_days(len(highs), start), highs, lows):
        mid = (high + low) / 2
        bars.append(Bar(date=day, open=mid, high=high, low=low, close=mid))
    return bars


def fibonacci_uptrend_lows() -> list[float]:
    """60 lows: decline to 90 at index 5, climb to 108 at index 20, flat at 100.

    With highs two points above, index 5 is the only swing low (90) and
    index 20 the only swing high (110).
    """
    lows = []
    for i in range(60):
        if i <= 5:
            lows.append(100.0 - 2.0 * i)
        elif i <= 20:
            lows.append(90.0 + (i - 5) * 1.2)
        else:
            lows.append(100.0)
    return lows


def fibonacci_uptrend_bars() -> list[Bar]:
    return bars_from_lows(fibonacci_uptrend_lows())


def random_walk_bars(count: int = 200, seed: int = 42, start_price: float = 100.0) -> list[Bar]:
    """Seeded random-walk bars with positive prices and real wicks."""
    rng = np.random.default_rng(seed)
    returns = rng.normal(0.0005, 0.015, count)
    closes = start_price * np.cumprod(1 + returns)
    opens = np.concatenate([[start_price], closes[:-1]])
    wicks = rng.uniform(0.001, 0.01, (2, count))
    highs = np.maximum(opens, closes) * (1 + wicks[0])
    lows = np.minimum(opens, closes) * (1 - wicks[1])
    return [
        Bar(date=day, open=float(o), high=float(h), low=float(lo), close=float(c))
        for day, o, h, lo, c in zip(trading_days(count), opens, highs, lows, closes)
    ]


def serialize_bars(bars: Sequence[Bar]) -> list[dict]:
    """Render bars in the ``ohlcData`` wire format."""
    return [
        {
            "date": bar.date.isoformat(),
            "open": bar.open,
            "high": bar.high,
            "low": bar.low,
            "close": bar.close,
        }
        for bar in bars
    ]
