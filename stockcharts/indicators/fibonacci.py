"""Fibonacci retracement detection from validated swing points.

Pipeline:
1. Detect fractal swings and validate them (``stockcharts.indicators.swings``).
2. Pair validated swings into trend legs: a low followed by a higher high
   (uptrend) or a high followed by a lower low (downtrend). A leg is dropped
   when an intermediate swing makes a more extreme high/low than its far end,
   or when its range is too small relative to the high.
3. Keep the most recent ``max_sets`` legs as retracement sets.
4. Walk the bars after each leg and mark inside levels (23.6% to 61.8%) as
   broken once price crosses them against the trend. A set whose four inside
   levels are all broken is no longer valid.

Levels are placed at fractions of the range above the low. The 0% and 100%
anchors are never invalidated.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from stockcharts.core.constants import FibonacciThresholds, SwingThresholds
from stockcharts.indicators.swings import (
    SwingParameters,
    SwingPoint,
    detect_swing_points,
    validate_swing_points,
)
from stockcharts.indicators.types import Bar, TrendSegment

if TYPE_CHECKING:
    from stockcharts.core.config import Settings

logger = logging.getLogger(__name__)

RETRACEMENT_RATIOS = FibonacciThresholds.RETRACEMENT_RATIOS
INSIDE_RATIOS = RETRACEMENT_RATIOS[1:-1]


def format_ratio(ratio: float) -> str:
    """Percentage label for a level ratio, e.g. 0.382 -> "38.2%"."""
    return f"{ratio * 100:.1f}%"


@dataclass
class LevelInvalidation:
    """Invalidation state of the four inside levels of a retracement set.

    Flags only ever move from intact to broken.
    """

    broken: list[bool] = field(default_factory=lambda: [False] * len(INSIDE_RATIOS))

    def mark_broken(self, level: int) -> None:
        self.broken[level] = True

    @property
    def is_valid(self) -> bool:
        return not all(self.broken)


@dataclass(frozen=True)
class FibonacciSet:
    """Retracement range between two validated swings.

    Attributes:
        start_index: Bar index of the earlier swing
        end_index: Bar index of the later swing
        start_date: Date of the earlier swing, where the levels are anchored
        high: Higher of the two swing prices
        low: Lower of the two swing prices
        is_uptrend: True for a low-to-high leg
        state: Inside-level invalidation, updated by ``invalidate_levels``
    """

    start_index: int
    end_index: int
    start_date: date
    high: float
    low: float
    is_uptrend: bool
    state: LevelInvalidation = field(default_factory=LevelInvalidation, compare=False)

    @property
    def price_range(self) -> float:
        return self.high - self.low

    @property
    def invalidated_levels(self) -> tuple[bool, ...]:
        """Broken flags for the 23.6/38.2/50/61.8% levels."""
        return tuple(self.state.broken)

    @property
    def is_valid(self) -> bool:
        return self.state.is_valid

    def level_price(self, ratio: float) -> float:
        """Price of the level at ``ratio`` of the range above the low."""
        return self.low + self.price_range * ratio


@dataclass(frozen=True)
class FibonacciParameters:
    """Tunable thresholds for the retracement pipeline."""

    swings: SwingParameters = field(default_factory=SwingParameters)
    min_bars: int = FibonacciThresholds.MIN_BARS
    min_range_pct: float = FibonacciThresholds.MIN_RANGE_PCT
    max_sets: int = FibonacciThresholds.MAX_SETS
    max_validated_swings: int = SwingThresholds.MAX_VALIDATED_SWINGS

    def __post_init__(self) -> None:
        if self.max_sets < 1:
            raise ValueError("max_sets must be at least 1")
        if self.max_validated_swings < 2:
            raise ValueError("max_validated_swings must be at least 2")

    @classmethod
    def from_settings(cls, settings: "Settings") -> "FibonacciParameters":
        """Create from application settings."""
        return cls(
            swings=SwingParameters.from_settings(settings),
            min_bars=settings.fibonacci_min_bars,
            min_range_pct=settings.fibonacci_min_range_pct,
            max_sets=settings.fibonacci_max_sets,
            max_validated_swings=settings.swing_max_validated,
        )


@dataclass
class FibonacciAnalysis:
    """Intermediate and final results of the retracement pipeline."""

    swings: list[SwingPoint]
    validated_swings: list[SwingPoint]
    sets: list[FibonacciSet]
    lines: list[TrendSegment]


def _leg_direction(first: SwingPoint, second: SwingPoint) -> bool | None:
    """True for an uptrend leg, False for a downtrend leg, None otherwise."""
    if not first.is_high and second.is_high and second.price > first.price:
        return True
    if first.is_high and not second.is_high and second.price < first.price:
        return False
    return None


def _is_overshot(
    intermediate: Sequence[SwingPoint], second: SwingPoint, is_uptrend: bool
) -> bool:
    """Check whether a swing between the leg's ends goes beyond its far end."""
    if is_uptrend:
        return any(s.is_high and s.price > second.price for s in intermediate)
    return any(not s.is_high and s.price < second.price for s in intermediate)


def build_fibonacci_sets(
    validated_swings: Sequence[SwingPoint],
    params: FibonacciParameters | None = None,
) -> list[FibonacciSet]:
    """Pair validated swings into retracement sets.

    Every ordered pair is considered, so the search is quadratic in the number
    of swings. Only the most recent ``max_validated_swings`` swings take part.

    Args:
        validated_swings: Output of ``validate_swing_points``, in time order
        params: Pipeline thresholds (defaults to FibonacciParameters())

    Returns:
        At most ``max_sets`` sets, the last ones in construction order.
    """
    params = params or FibonacciParameters()
    swings = list(validated_swings)
    swings = swings[max(len(swings) - params.max_validated_swings, 0) :]
    sets: list[FibonacciSet] = []

    for i, first in enumerate(swings):
        for j in range(i + 1, len(swings)):
            second = swings[j]
            if first.index >= second.index:
                continue

            is_uptrend = _leg_direction(first, second)
            if is_uptrend is None:
                continue

            if _is_overshot(swings[i + 1 : j], second, is_uptrend):
                continue

            high = max(first.price, second.price)
            low = min(first.price, second.price)
            if high <= 0 or (high - low) / high < params.min_range_pct:
                continue

            sets.append(
                FibonacciSet(
                    start_index=first.index,
                    end_index=second.index,
                    start_date=first.date,
                    high=high,
                    low=low,
                    is_uptrend=is_uptrend,
                )
            )

    return sets[max(len(sets) - params.max_sets, 0) :]


def invalidate_levels(bars: Sequence[Bar], sets: Sequence[FibonacciSet]) -> None:
    """Mark inside levels broken by price action after each set's leg.

    For an uptrend set a level breaks when a later bar's low drops below it;
    for a downtrend set when a later bar's high rises above it.
    """
    for fib_set in sets:
        level_prices = [fib_set.level_price(ratio) for ratio in INSIDE_RATIOS]

        for bar in bars[fib_set.end_index + 1 :]:
            for level, price in enumerate(level_prices):
                if fib_set.state.broken[level]:
                    continue
                if fib_set.is_uptrend and bar.low < price:
                    fib_set.state.mark_broken(level)
                elif not fib_set.is_uptrend and bar.high > price:
                    fib_set.state.mark_broken(level)

            if not fib_set.is_valid:
                break


def retracement_lines(bars: Sequence[Bar], sets: Sequence[FibonacciSet]) -> list[TrendSegment]:
    """Horizontal level lines for every valid set.

    Each valid set contributes its 0% and 100% anchors plus every inside level
    that is still intact, drawn from the set's start date to the last bar.
    Lines are sorted by date span, longest first.
    """
    if not bars:
        return []

    end_date = bars[-1].date
    lines: list[TrendSegment] = []

    for fib_set in sets:
        if not fib_set.is_valid:
            continue

        for position, ratio in enumerate(RETRACEMENT_RATIOS):
            is_inside = 0 < position < len(RETRACEMENT_RATIOS) - 1
            if is_inside and fib_set.state.broken[position - 1]:
                continue
            price = fib_set.level_price(ratio)
            lines.append(
                TrendSegment(
                    start_date=fib_set.start_date,
                    end_date=end_date,
                    start_value=price,
                    end_value=price,
                    label=format_ratio(ratio),
                )
            )

    return sorted(lines, key=lambda line: line.end_date - line.start_date, reverse=True)


def analyze_fibonacci(
    bars: Sequence[Bar], params: FibonacciParameters | None = None
) -> FibonacciAnalysis:
    """Run the full swing-to-retracement pipeline.

    Args:
        bars: OHLC bars in ascending date order
        params: Pipeline thresholds (defaults to FibonacciParameters())

    Returns:
        FibonacciAnalysis with every stage's output. All lists are empty when
        there are fewer than ``params.min_bars`` bars.
    """
    params = params or FibonacciParameters()
    if len(bars) < params.min_bars:
        return FibonacciAnalysis(swings=[], validated_swings=[], sets=[], lines=[])

    swings = detect_swing_points(bars, params.swings)
    validated = validate_swing_points(bars, swings, params.swings)
    sets = build_fibonacci_sets(validated, params)
    invalidate_levels(bars, sets)
    lines = retracement_lines(bars, sets)

    logger.debug(
        f"Fibonacci pipeline: {len(swings)} swings, {len(validated)} validated, "
        f"{len(sets)} sets, {sum(s.is_valid for s in sets)} valid, {len(lines)} lines"
    )
    return FibonacciAnalysis(swings=swings, validated_swings=validated, sets=sets, lines=lines)


def fibonacci_retracements(
    bars: Sequence[Bar], params: FibonacciParameters | None = None
) -> list[TrendSegment]:
    """Fibonacci retracement lines detected from swing structure."""
    return analyze_fibonacci(bars, params).lines


def manual_fibonacci_lines(
    start_date: date, end_date: date, high: float, low: float
) -> list[TrendSegment]:
    """Retracement and extension lines for an explicit high/low pair.

    Retracements are measured down from the high; extensions project the range
    beyond both the high and the low. The high and low themselves are included
    as reference lines.

    Args:
        start_date: First date of the chart
        end_date: Last date of the chart
        high: Swing high price
        low: Swing low price

    Returns:
        Horizontal lines: retracements, extensions (below then above for each
        ratio), then the high and low references.
    """
    price_range = high - low
    lines: list[TrendSegment] = []

    for ratio in FibonacciThresholds.MANUAL_RETRACEMENT_RATIOS:
        level = high - price_range * ratio
        lines.append(TrendSegment(start_date, end_date, level, level, format_ratio(ratio)))

    for ratio in FibonacciThresholds.MANUAL_EXTENSION_RATIOS:
        below = low - price_range * (ratio - 1)
        above = high + price_range * (ratio - 1)
        label = format_ratio(ratio)
        lines.append(TrendSegment(start_date, end_date, below, below, label))
        lines.append(TrendSegment(start_date, end_date, above, above, label))

    lines.append(TrendSegment(start_date, end_date, high, high, "High"))
    lines.append(TrendSegment(start_date, end_date, low, low, "Low"))
    return lines
