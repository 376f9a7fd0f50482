"""Swing high/low detection and validation.

A swing high is a bar whose high strictly exceeds the highs of the
``lookaround_bars`` bars on either side of it; a swing low is the mirror image
on lows. Raw fractal swings are noisy, so a sequential validation pass keeps
only swings that differ meaningfully from the previously accepted one and that
hold as an extreme for a confirmation window afterwards.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from stockcharts.core.constants import SwingThresholds
from stockcharts.indicators.types import Bar

if TYPE_CHECKING:
    from stockcharts.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwingPoint:
    """A confirmed or candidate local price extreme.

    Attributes:
        index: Position of the bar in the series
        date: Date of the bar
        is_high: True for a swing high, False for a swing low
        price: The bar's high (swing high) or low (swing low)
    """

    index: int
    date: date
    is_high: bool
    price: float


@dataclass(frozen=True)
class SwingParameters:
    """Tunable thresholds for swing detection and validation.

    The alternation and confirmation thresholds are empirical; see
    ``SwingThresholds`` for what each one controls.
    """

    lookaround_bars: int = SwingThresholds.LOOKAROUND_BARS
    min_bars: int = SwingThresholds.MIN_BARS
    min_price_change: float = SwingThresholds.MIN_PRICE_CHANGE
    min_separation_bars: int = SwingThresholds.MIN_SEPARATION_BARS
    alternation_after: int = SwingThresholds.ALTERNATION_AFTER
    confirmation_bars: int = SwingThresholds.CONFIRMATION_BARS

    @classmethod
    def from_settings(cls, settings: "Settings") -> "SwingParameters":
        """Create from application settings."""
        return cls(
            lookaround_bars=settings.swing_lookaround_bars,
            min_price_change=settings.swing_min_price_change,
            min_separation_bars=settings.swing_min_separation_bars,
            alternation_after=settings.swing_alternation_after,
            confirmation_bars=settings.swing_confirmation_bars,
        )


def detect_swing_points(
    bars: Sequence[Bar], params: SwingParameters | None = None
) -> list[SwingPoint]:
    """Find fractal swing highs and lows.

    Args:
        bars: OHLC bars in ascending date order
        params: Detection thresholds (defaults to SwingParameters())

    Returns:
        Swings in time order. A bar that is both a swing high and a swing low
        contributes the high first. Empty if the series is shorter than
        params.min_bars.
    """
    params = params or SwingParameters()
    if len(bars) < params.min_bars:
        return []

    k = params.lookaround_bars
    swings: list[SwingPoint] = []

    for i in range(k, len(bars) - k):
        neighbours = [*bars[i - k : i], *bars[i + 1 : i + k + 1]]

        high = bars[i].high
        if all(high > other.high for other in neighbours):
            swings.append(SwingPoint(index=i, date=bars[i].date, is_high=True, price=high))

        low = bars[i].low
        if all(low < other.low for other in neighbours):
            swings.append(SwingPoint(index=i, date=bars[i].date, is_high=False, price=low))

    return swings


def _is_confirmed(bars: Sequence[Bar], swing: SwingPoint, window: int) -> bool:
    """Check that no bar in the window after the swing takes out its price.

    The window is truncated at the end of the series.
    """
    following = bars[swing.index + 1 : swing.index + 1 + window]
    if swing.is_high:
        return all(bar.high <= swing.price for bar in following)
    return all(bar.low >= swing.price for bar in following)


def validate_swing_points(
    bars: Sequence[Bar],
    swings: Sequence[SwingPoint],
    params: SwingParameters | None = None,
) -> list[SwingPoint]:
    """Filter raw swings down to confirmed pivots.

    Each swing is compared with the previously accepted swing and rejected if:
    - its price is within ``min_price_change`` (relative to the average of the
      two prices) of the previous one;
    - it is fewer than ``min_separation_bars`` bars after the previous one;
    - at least ``alternation_after`` swings have been accepted and it has the
      same type (high/low) as the previous one;
    - price breaks it within the next ``confirmation_bars`` bars.

    Args:
        bars: The bars the swings were detected on
        swings: Candidate swings in time order
        params: Validation thresholds (defaults to SwingParameters())

    Returns:
        Accepted swings in their original time order.
    """
    params = params or SwingParameters()
    accepted: list[SwingPoint] = []

    for swing in swings:
        if accepted:
            previous = accepted[-1]

            average = (swing.price + previous.price) / 2
            if average == 0 or abs(swing.price - previous.price) / average < params.min_price_change:
                continue

            if swing.index - previous.index < params.min_separation_bars:
                continue

            if len(accepted) >= params.alternation_after and swing.is_high == previous.is_high:
                continue

        if not _is_confirmed(bars, swing, params.confirmation_bars):
            continue

        accepted.append(swing)

    logger.debug(f"Validated {len(accepted)} of {len(swings)} swing points")
    return accepted
