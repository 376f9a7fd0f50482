"""Convex-hull support and resistance detection.

Support lines follow the lower convex hull of the bar lows and resistance
lines follow the upper convex hull of the bar highs. Hulls are built with
Andrew's monotone chain; bar indices are already sorted, so each hull is a
single linear scan.

Each consecutive pair of hull vertices becomes a segment that is extended
along its slope to the newest bar, so the line can be drawn through the
present. Segments touching the newest bar are dropped because that bar cannot
confirm a completed line yet, and segments spanning fewer than
``HullThresholds.MIN_SEGMENT_BARS`` bars are dropped as noise.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from stockcharts.core.constants import HullThresholds
from stockcharts.indicators.types import Bar, TrendSegment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HullPoint:
    """Price at a bar position."""

    index: int
    value: float


@dataclass(frozen=True)
class HullTrendLines:
    """Support and resistance segments, each ordered by time."""

    support: list[TrendSegment] = field(default_factory=list)
    resistance: list[TrendSegment] = field(default_factory=list)


def cross(origin: HullPoint, a: HullPoint, b: HullPoint) -> float:
    """Z component of (a - origin) x (b - origin).

    Positive for a left (counter-clockwise) turn, negative for a right turn,
    zero for collinear points.
    """
    return (a.index - origin.index) * (b.value - origin.value) - (
        a.value - origin.value
    ) * (b.index - origin.index)


def _monotone_chain(
    points: Sequence[HullPoint], should_pop: Callable[[float], bool]
) -> list[HullPoint]:
    hull: list[HullPoint] = []
    for point in points:
        while len(hull) >= 2 and should_pop(cross(hull[-2], hull[-1], point)):
            hull.pop()
        hull.append(point)
    return hull


def lower_hull(points: Sequence[HullPoint]) -> list[HullPoint]:
    """Lower convex hull of points sorted by index.

    Pops while the turn is not strictly to the left, which leaves the chain
    that stays below every intervening point.
    """
    return _monotone_chain(points, lambda turn: turn <= 0)


def upper_hull(points: Sequence[HullPoint]) -> list[HullPoint]:
    """Upper convex hull of points sorted by index.

    Pops while the turn is not strictly to the right, which leaves the chain
    that stays above every intervening point.
    """
    return _monotone_chain(points, lambda turn: turn >= 0)


def _extended_segments(
    bars: Sequence[Bar], hull: Sequence[HullPoint], min_span: int
) -> list[TrendSegment]:
    last_index = len(bars) - 1
    segments: list[TrendSegment] = []

    for a, b in zip(hull, hull[1:]):
        if a.index == last_index or b.index == last_index:
            continue
        span = b.index - a.index
        if span < min_span:
            continue

        slope = (b.value - a.value) / span
        end_value = a.value + slope * (last_index - a.index)
        segments.append(
            TrendSegment(
                start_date=bars[a.index].date,
                end_date=bars[last_index].date,
                start_value=a.value,
                end_value=end_value,
            )
        )

    return segments


def detect_hull_trend_lines(
    bars: Sequence[Bar],
    min_segment_bars: int = HullThresholds.MIN_SEGMENT_BARS,
) -> HullTrendLines:
    """Detect extendable support and resistance lines from convex hulls.

    Args:
        bars: OHLC bars in ascending date order
        min_segment_bars: Minimum index span between hull vertices
            (default 3)

    Returns:
        HullTrendLines with support segments from the lower hull of lows and
        resistance segments from the upper hull of highs. Both lists are empty
        for fewer than 3 bars.
    """
    if len(bars) < HullThresholds.MIN_BARS:
        return HullTrendLines()

    low_points = [HullPoint(i, bar.low) for i, bar in enumerate(bars)]
    high_points = [HullPoint(i, bar.high) for i, bar in enumerate(bars)]

    support = _extended_segments(bars, lower_hull(low_points), min_segment_bars)
    resistance = _extended_segments(bars, upper_hull(high_points), min_segment_bars)

    logger.debug(
        f"Hull trend lines over {len(bars)} bars: "
        f"{len(support)} support, {len(resistance)} resistance"
    )
    return HullTrendLines(support=support, resistance=resistance)
