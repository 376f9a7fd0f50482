"""Array-level price indicators.

Every function takes a one-dimensional price array and returns float64 arrays
of the same length. Positions where an indicator has not warmed up yet hold
NaN. Misuse (empty input, non-positive periods) raises ``ValueError``; the
date-aligned wrappers in ``stockcharts.indicators.series`` turn short inputs
into empty results instead.
"""

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view
from numpy.typing import NDArray

from stockcharts.core.constants import IndicatorDefaults

PriceInput = list[float] | NDArray[np.float64]


def _price_array(prices: PriceInput) -> NDArray[np.float64]:
    values = np.asarray(prices, dtype=np.float64)
    if values.size == 0:
        raise ValueError("Prices array cannot be empty")
    return values


def _check_period(period: int) -> None:
    if period <= 0:
        raise ValueError("Period must be greater than 0")


def simple_moving_average(prices: PriceInput, period: int) -> NDArray[np.float64]:
    """Mean of each trailing window of ``period`` prices.

    Args:
        prices: Price series, oldest first
        period: Window length (must be > 0)

    Returns:
        Array whose first defined value sits at index ``period - 1``.

    Raises:
        ValueError: If period <= 0 or prices is empty

    Example:
        >>> simple_moving_average([1, 2, 3, 4, 5], 3)
        array([nan, nan,  2.,  3.,  4.])
    """
    _check_period(period)
    values = _price_array(prices)

    result = np.full(values.size, np.nan)
    if values.size >= period:
        result[period - 1 :] = sliding_window_view(values, period).mean(axis=1)
    return result


def exponential_moving_average(prices: PriceInput, period: int) -> NDArray[np.float64]:
    """SMA-seeded exponential moving average.

    The value at ``period - 1`` is the mean of the first ``period`` prices;
    after that ``ema[i] = (price[i] - ema[i-1]) * k + ema[i-1]`` with
    ``k = 2 / (period + 1)``.

    Raises:
        ValueError: If period <= 0 or prices is empty
    """
    _check_period(period)
    values = _price_array(prices)

    result = np.full(values.size, np.nan)
    if values.size < period:
        return result

    alpha = 2.0 / (period + 1)
    current = values[:period].sum() / period
    result[period - 1] = current
    for i in range(period, values.size):
        current = (values[i] - current) * alpha + current
        result[i] = current
    return result


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return IndicatorDefaults.RSI_MAX
    ceiling = IndicatorDefaults.RSI_MAX
    return ceiling - ceiling / (1.0 + avg_gain / avg_loss)


def relative_strength_index(prices: PriceInput, period: int = 14) -> NDArray[np.float64]:
    """Wilder's Relative Strength Index.

    Average gain and loss start as plain means over the first ``period``
    price changes, then follow ``avg = (avg * (period - 1) + current) / period``.
    RSI is 100 whenever the average loss is zero.

    Args:
        prices: Price series, oldest first
        period: Smoothing period (must be > 0)

    Returns:
        Values in [0, 100], first defined at index ``period``.

    Raises:
        ValueError: If period <= 0 or prices is empty
    """
    _check_period(period)
    values = _price_array(prices)

    result = np.full(values.size, np.nan)
    if values.size <= period:
        return result

    changes = np.diff(values)
    ups = np.clip(changes, 0.0, None)
    downs = np.clip(-changes, 0.0, None)

    avg_gain = ups[:period].mean()
    avg_loss = downs[:period].mean()
    result[period] = _rsi_value(avg_gain, avg_loss)

    # changes[j] moves the price from values[j] to values[j + 1]
    for j in range(period, changes.size):
        avg_gain = (avg_gain * (period - 1) + ups[j]) / period
        avg_loss = (avg_loss * (period - 1) + downs[j]) / period
        result[j + 1] = _rsi_value(avg_gain, avg_loss)
    return result


def macd(
    prices: PriceInput,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """Moving Average Convergence Divergence.

    The MACD line (fast EMA minus slow EMA) is defined from index
    ``max(fast_period, slow_period) - 1``. The signal line is an SMA-seeded
    EMA of the defined MACD values, and the histogram is their difference.

    Returns:
        ``(macd_line, signal_line, histogram)``

    Raises:
        ValueError: If any period is <= 0 or prices is empty
    """
    if min(fast_period, slow_period, signal_period) <= 0:
        raise ValueError("All periods must be greater than 0")
    values = _price_array(prices)

    macd_line = np.full(values.size, np.nan)
    signal_line = np.full(values.size, np.nan)

    first = max(fast_period, slow_period) - 1
    if values.size > first:
        spread = (
            exponential_moving_average(values, fast_period)
            - exponential_moving_average(values, slow_period)
        )
        macd_line[first:] = spread[first:]
        signal_line[first:] = exponential_moving_average(spread[first:], signal_period)

    return macd_line, signal_line, macd_line - signal_line


def detrended_price_oscillator(prices: PriceInput, period: int = 20) -> NDArray[np.float64]:
    """Price minus its ``period`` SMA; NaN wherever the SMA is undefined."""
    _check_period(period)
    values = _price_array(prices)
    return values - simple_moving_average(values, period)
