"""Technical indicators package for Stock Charts.

This package provides implementations of the price indicators and trend line
detectors drawn on charts.

Available indicators:
- Simple Moving Average (SMA)
- Exponential Moving Average (EMA)
- Relative Strength Index (RSI)
- Moving Average Convergence Divergence (MACD)
- Detrended Price Oscillator (DPO)
- Convex Hull Support/Resistance
- Swing-based Fibonacci Retracements
- Ratio Series
"""

from .types import Bar, IndicatorPoint, MacdPoint, TrendSegment
from .technical import (
    detrended_price_oscillator,
    exponential_moving_average,
    macd,
    relative_strength_index,
    simple_moving_average,
)
from .hull import HullTrendLines, detect_hull_trend_lines
from .swings import (
    SwingParameters,
    SwingPoint,
    detect_swing_points,
    validate_swing_points,
)
from .fibonacci import (
    FibonacciAnalysis,
    FibonacciParameters,
    FibonacciSet,
    LevelInvalidation,
    analyze_fibonacci,
    build_fibonacci_sets,
    fibonacci_retracements,
    invalidate_levels,
    manual_fibonacci_lines,
)
from .ratio import is_ratio_symbol, parse_ratio_symbol, ratio_bars
from .registry import (
    INDICATOR_REGISTRY,
    IndicatorDisplay,
    IndicatorPeriods,
    IndicatorSeries,
    IndicatorSpec,
    IndicatorType,
    calculate_indicator_series,
    parse_indicator_specs,
)

__all__ = [
    "Bar",
    "IndicatorPoint",
    "MacdPoint",
    "TrendSegment",
    "simple_moving_average",
    "exponential_moving_average",
    "relative_strength_index",
    "macd",
    "detrended_price_oscillator",
    "HullTrendLines",
    "detect_hull_trend_lines",
    "SwingParameters",
    "SwingPoint",
    "detect_swing_points",
    "validate_swing_points",
    "FibonacciAnalysis",
    "FibonacciParameters",
    "FibonacciSet",
    "LevelInvalidation",
    "analyze_fibonacci",
    "build_fibonacci_sets",
    "fibonacci_retracements",
    "invalidate_levels",
    "manual_fibonacci_lines",
    "is_ratio_symbol",
    "parse_ratio_symbol",
    "ratio_bars",
    "INDICATOR_REGISTRY",
    "IndicatorDisplay",
    "IndicatorPeriods",
    "IndicatorSeries",
    "IndicatorSpec",
    "IndicatorType",
    "calculate_indicator_series",
    "parse_indicator_specs",
]
