"""Chart overlay composition.

Runs the indicator registry and the trend line detectors over one bar series
and decorates the results with the colors, stroke widths and dash styles a
renderer needs. No drawing happens here.
"""
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING

from stockcharts.core.constants import FibonacciThresholds, HullThresholds
from stockcharts.core.exceptions import InvalidParameterError
from stockcharts.indicators.fibonacci import (
    FibonacciParameters,
    fibonacci_retracements,
    format_ratio,
    manual_fibonacci_lines,
)
from stockcharts.indicators.hull import detect_hull_trend_lines
from stockcharts.indicators.registry import (
    IndicatorDisplay,
    IndicatorPeriods,
    IndicatorSeries,
    IndicatorSpec,
    calculate_indicator_series,
    parse_indicator_specs,
)
from stockcharts.indicators.types import Bar, TrendSegment

if TYPE_CHECKING:
    from stockcharts.core.config import Settings

logger = logging.getLogger(__name__)

# Blue, orange, green, red, purple, brown
OVERLAY_COLORS = ["#1F77B4", "#FF7F0E", "#2CA02C", "#D62728", "#9467BD", "#8C564B"]
# Pink, cyan, gray, olive, light red, light blue
PANEL_COLORS = ["#E377C2", "#17BECF", "#7F7F7F", "#BCBD22", "#FF9796", "#9EDAE5"]

SUPPORT_COLOR = "#2CA02C"
RESISTANCE_COLOR = "#D62728"
HIGH_COLOR = "#00FF00"
LOW_COLOR = "#FF0000"

# Keyed by level label; 0% is the leg's low and 100% its high
FIBONACCI_LEVEL_COLORS = {
    "0.0%": LOW_COLOR,
    "23.6%": "#FFD700",
    "38.2%": "#FF8C00",
    "50.0%": "#FF6347",
    "61.8%": "#9370DB",
    "100.0%": HIGH_COLOR,
}
FIBONACCI_ANCHOR_LABELS = {"0.0%", "100.0%"}

MANUAL_RETRACEMENT_COLORS = ["#FFD700", "#FF8C00", "#FF6347", "#9370DB", "#20B2AA"]
MANUAL_EXTENSION_COLORS = ["#FF1493", "#8A2BE2"]

HORIZONTAL_LINE_COLOR = "#FF0000"
EXTENDED_LINE_COLOR = "#FF6B35"
USER_LINE_COLORS = [
    "#FF6B35",
    "#F7931E",
    "#FFD23F",
    "#06FFA5",
    "#118AB2",
    "#073B4C",
    "#DD1C77",
    "#9D4EDD",
]

LINE_WIDTH = 2.0
LEVEL_WIDTH = 1.5


class LineKind(str, Enum):
    """Source of a chart line."""

    SUPPORT = "support"
    RESISTANCE = "resistance"
    FIBONACCI = "fibonacci"
    MANUAL_FIBONACCI = "manual_fibonacci"
    CUSTOM = "custom"


@dataclass(frozen=True)
class ChartLine:
    """Trend segment with rendering metadata."""

    segment: TrendSegment
    kind: LineKind
    color: str
    stroke_width: float = LINE_WIDTH
    dashed: bool = False


@dataclass(frozen=True)
class ChartIndicator:
    """Indicator series with its assigned color."""

    series: IndicatorSeries
    color: str


@dataclass
class ChartOverlays:
    """All overlays for one chart."""

    bar_count: int
    start_date: date | None = None
    end_date: date | None = None
    overlays: list[ChartIndicator] = field(default_factory=list)
    panels: list[ChartIndicator] = field(default_factory=list)
    lines: list[ChartLine] = field(default_factory=list)


@dataclass(frozen=True)
class CustomLineSpec:
    """A line sketched from one or two values.

    With only ``start_value`` the line is horizontal. With both values it runs
    through (``start_date``, ``start_value``) and (``end_date``, ``end_value``),
    where missing dates default to the chart's first and last dates, and is
    extended to the chart's edges.
    """

    start_value: float
    end_value: float | None = None
    start_date: date | None = None
    end_date: date | None = None


@dataclass(frozen=True)
class UserLine:
    """A fully specified line supplied by the caller.

    Lines without a color take the next one from ``USER_LINE_COLORS``.
    """

    segment: TrendSegment
    color: str | None = None
    stroke_width: float = LINE_WIDTH
    dashed: bool = False


def check_fibonacci_range(high: float | None, low: float | None) -> None:
    """Raises InvalidParameterError unless both bounds are absent or high > low."""
    if (high is None) != (low is None):
        raise InvalidParameterError("fibonacciHigh and fibonacciLow must be given together")
    if high is not None and low is not None and high <= low:
        raise InvalidParameterError("fibonacciHigh must be greater than fibonacciLow")


def custom_line_spec(
    start_value: float | None,
    end_value: float | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> CustomLineSpec | None:
    """Collect loose line arguments; None when no line was asked for.

    Raises:
        InvalidParameterError: If an end value or a date comes without a start value
    """
    if start_value is None:
        if end_value is not None or start_date is not None or end_date is not None:
            raise InvalidParameterError(
                "lineStartValue is required when lineEndValue or line dates are given"
            )
        return None
    return CustomLineSpec(start_value, end_value, start_date, end_date)


def assign_colors(
    series_list: Sequence[IndicatorSeries],
) -> tuple[list[ChartIndicator], list[ChartIndicator]]:
    """Split series by display mode and cycle each group through its palette."""
    overlays: list[ChartIndicator] = []
    panels: list[ChartIndicator] = []
    for series in series_list:
        if series.spec.display == IndicatorDisplay.OVERLAY:
            color = OVERLAY_COLORS[len(overlays) % len(OVERLAY_COLORS)]
            overlays.append(ChartIndicator(series, color))
        else:
            color = PANEL_COLORS[len(panels) % len(PANEL_COLORS)]
            panels.append(ChartIndicator(series, color))
    return overlays, panels


def hull_lines(
    bars: Sequence[Bar], min_segment_bars: int = HullThresholds.MIN_SEGMENT_BARS
) -> list[ChartLine]:
    """Convex-hull support (green) and resistance (red) lines, both dashed."""
    trend_lines = detect_hull_trend_lines(bars, min_segment_bars)
    support = [
        ChartLine(segment, LineKind.SUPPORT, SUPPORT_COLOR, dashed=True)
        for segment in trend_lines.support
    ]
    resistance = [
        ChartLine(segment, LineKind.RESISTANCE, RESISTANCE_COLOR, dashed=True)
        for segment in trend_lines.resistance
    ]
    return support + resistance


def fibonacci_lines(
    bars: Sequence[Bar], params: FibonacciParameters | None = None
) -> list[ChartLine]:
    """Swing-based retracement lines; inside levels dashed, anchors solid."""
    lines = []
    for segment in fibonacci_retracements(bars, params):
        is_anchor = segment.label in FIBONACCI_ANCHOR_LABELS
        lines.append(
            ChartLine(
                segment,
                LineKind.FIBONACCI,
                FIBONACCI_LEVEL_COLORS.get(segment.label or "", HIGH_COLOR),
                stroke_width=LINE_WIDTH if is_anchor else LEVEL_WIDTH,
                dashed=not is_anchor,
            )
        )
    return lines


def manual_lines(bars: Sequence[Bar], high: float, low: float) -> list[ChartLine]:
    """Retracement/extension lines for an explicit range across the whole chart."""
    if not bars:
        return []

    extension_colors = dict(
        zip(
            (format_ratio(r) for r in FibonacciThresholds.MANUAL_EXTENSION_RATIOS),
            MANUAL_EXTENSION_COLORS,
        )
    )
    retracement_colors = iter(MANUAL_RETRACEMENT_COLORS)

    lines = []
    for segment in manual_fibonacci_lines(bars[0].date, bars[-1].date, high, low):
        if segment.label == "High":
            lines.append(ChartLine(segment, LineKind.MANUAL_FIBONACCI, HIGH_COLOR))
        elif segment.label == "Low":
            lines.append(ChartLine(segment, LineKind.MANUAL_FIBONACCI, LOW_COLOR))
        elif segment.label in extension_colors:
            color = extension_colors[segment.label]
            lines.append(ChartLine(segment, LineKind.MANUAL_FIBONACCI, color, LEVEL_WIDTH))
        else:
            color = next(retracement_colors)
            lines.append(ChartLine(segment, LineKind.MANUAL_FIBONACCI, color, LEVEL_WIDTH))
    return lines


def custom_line(bars: Sequence[Bar], spec: CustomLineSpec) -> ChartLine | None:
    """Horizontal (red) or extended two-point (orange) line across the chart.

    The slope of a two-point line is measured per calendar day, so weekends
    and holidays count toward the extension.
    """
    if not bars:
        return None
    chart_start, chart_end = bars[0].date, bars[-1].date

    if spec.end_value is None:
        segment = TrendSegment(
            chart_start, chart_end, spec.start_value, spec.start_value, label="Custom"
        )
        return ChartLine(segment, LineKind.CUSTOM, HORIZONTAL_LINE_COLOR)

    point_start = spec.start_date or chart_start
    point_end = spec.end_date or chart_end
    days = (point_end - point_start).days
    slope = (spec.end_value - spec.start_value) / days if days else 0.0

    start_value = spec.start_value - slope * (point_start - chart_start).days
    end_value = spec.end_value + slope * (chart_end - point_end).days
    segment = TrendSegment(chart_start, chart_end, start_value, end_value, label="Custom")
    return ChartLine(segment, LineKind.CUSTOM, EXTENDED_LINE_COLOR)


def user_lines(lines: Sequence[UserLine]) -> list[ChartLine]:
    """Caller-supplied lines drawn as given; uncolored ones cycle the palette."""
    return [
        ChartLine(
            line.segment,
            LineKind.CUSTOM,
            line.color or USER_LINE_COLORS[i % len(USER_LINE_COLORS)],
            line.stroke_width,
            line.dashed,
        )
        for i, line in enumerate(lines)
    ]


class OverlayService:
    """Compose indicator series and trend lines for a chart."""

    def __init__(
        self,
        fibonacci_params: FibonacciParameters | None = None,
        hull_min_segment_bars: int = HullThresholds.MIN_SEGMENT_BARS,
        indicator_periods: IndicatorPeriods | None = None,
    ):
        self.fibonacci_params = fibonacci_params or FibonacciParameters()
        self.hull_min_segment_bars = hull_min_segment_bars
        self.indicator_periods = indicator_periods or IndicatorPeriods()

    @classmethod
    def from_settings(cls, settings: "Settings") -> "OverlayService":
        return cls(
            fibonacci_params=FibonacciParameters.from_settings(settings),
            hull_min_segment_bars=settings.hull_min_segment_bars,
            indicator_periods=IndicatorPeriods.from_settings(settings),
        )

    def parse_indicators(self, text: str) -> list[IndicatorSpec]:
        """Parse indicator specs using this service's default periods.

        Raises:
            UnsupportedOperationError: If an entry names an unknown indicator
        """
        return parse_indicator_specs(text, self.indicator_periods)

    def build_chart_overlays(
        self,
        bars: Sequence[Bar],
        specs: Sequence[IndicatorSpec] = (),
        include_hull: bool = False,
        include_fibonacci: bool = False,
        fibonacci_high: float | None = None,
        fibonacci_low: float | None = None,
        line: CustomLineSpec | None = None,
        extra_lines: Sequence[UserLine] = (),
    ) -> ChartOverlays:
        """Build every requested overlay for one chart.

        Args:
            bars: OHLC bars in ascending date order
            specs: Indicators to calculate
            include_hull: Add convex-hull support and resistance lines
            include_fibonacci: Add swing-based Fibonacci retracement lines
            fibonacci_high: High of a manual Fibonacci range
            fibonacci_low: Low of a manual Fibonacci range; manual lines are
                drawn only when both bounds are given
            line: Horizontal or extended custom line
            extra_lines: Caller-supplied lines, drawn last

        Returns:
            ChartOverlays; indicators or detectors that cannot run on these
            bars contribute nothing.
        """
        overlays, panels = assign_colors(calculate_indicator_series(bars, specs))

        lines: list[ChartLine] = []
        if include_hull:
            lines.extend(hull_lines(bars, self.hull_min_segment_bars))
        if include_fibonacci:
            lines.extend(fibonacci_lines(bars, self.fibonacci_params))
        if line is not None:
            sketched = custom_line(bars, line)
            if sketched is not None:
                lines.append(sketched)
        if fibonacci_high is not None and fibonacci_low is not None:
            lines.extend(manual_lines(bars, fibonacci_high, fibonacci_low))
        lines.extend(user_lines(extra_lines))

        logger.info(
            f"Built chart overlays over {len(bars)} bars: {len(overlays)} overlays, "
            f"{len(panels)} panels, {len(lines)} lines"
        )
        return ChartOverlays(
            bar_count=len(bars),
            start_date=bars[0].date if bars else None,
            end_date=bars[-1].date if bars else None,
            overlays=overlays,
            panels=panels,
            lines=lines,
        )
