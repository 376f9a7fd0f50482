"""Schemas for chart overlay endpoints."""

import datetime
from typing import Any

from pydantic import Field, model_validator

from stockcharts.core.exceptions import InvalidParameterError
from stockcharts.indicators.types import MacdPoint, TrendSegment
from stockcharts.schemas.bars import OhlcBar
from stockcharts.schemas.base import CamelCaseModel
from stockcharts.services.overlay_service import (
    ChartIndicator,
    ChartLine,
    ChartOverlays,
    CustomLineSpec,
    UserLine,
    check_fibonacci_range,
    custom_line_spec,
)


class ChartLineRequest(CamelCaseModel):
    """Straight line supplied by the caller and drawn as given."""

    start_date: datetime.date
    end_date: datetime.date
    start_value: float
    end_value: float
    color: str | None = Field(
        None,
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Hex color; omitted colors cycle a palette",
    )
    stroke_width: float = Field(2.0, gt=0)
    dashed: bool = False
    label: str | None = None

    def to_user_line(self) -> UserLine:
        segment = TrendSegment(
            self.start_date, self.end_date, self.start_value, self.end_value, self.label
        )
        return UserLine(segment, self.color, self.stroke_width, self.dashed)


class ChartOverlaysRequest(CamelCaseModel):
    """Bars plus the overlays to compute on them."""

    ohlc_data: list[OhlcBar] = Field(..., description="Array of OHLC data points")
    indicators: str = Field(
        "", description='Indicator specs, e.g. "SMA:20,EMA:50:overlay,RSI:14:panel"'
    )
    hull: bool = Field(False, description="Include convex-hull support/resistance lines")
    fibonacci: bool = Field(False, description="Include swing-based Fibonacci retracements")
    fibonacci_high: float | None = Field(None, description="High of a manual Fibonacci range")
    fibonacci_low: float | None = Field(None, description="Low of a manual Fibonacci range")
    line_start_value: float | None = Field(
        None, description="Value of a custom line; alone it draws a horizontal line"
    )
    line_end_value: float | None = Field(
        None, description="Second value of a custom line, extended to the chart edges"
    )
    line_start_date: datetime.date | None = Field(
        None, description="Date of lineStartValue (default: first bar)"
    )
    line_end_date: datetime.date | None = Field(
        None, description="Date of lineEndValue (default: last bar)"
    )
    lines: list[ChartLineRequest] = Field(
        default_factory=list, description="Additional lines drawn as given"
    )

    @model_validator(mode="after")
    def check_lines(self) -> "ChartOverlaysRequest":
        try:
            check_fibonacci_range(self.fibonacci_high, self.fibonacci_low)
            self.custom_line()
        except InvalidParameterError as e:
            raise ValueError(str(e)) from e
        return self

    def custom_line(self) -> CustomLineSpec | None:
        return custom_line_spec(
            self.line_start_value, self.line_end_value, self.line_start_date, self.line_end_date
        )


class ChartLineResponse(CamelCaseModel):
    """Decorated straight line."""

    start_date: datetime.date
    end_date: datetime.date
    start_value: float
    end_value: float
    color: str = Field(..., description="Hex color, e.g. #2CA02C")
    stroke_width: float
    dashed: bool
    label: str | None = None
    kind: str = Field(
        ..., description="support, resistance, fibonacci, manual_fibonacci or custom"
    )

    @classmethod
    def from_line(cls, line: ChartLine) -> "ChartLineResponse":
        segment = line.segment
        return cls(
            start_date=segment.start_date,
            end_date=segment.end_date,
            start_value=segment.start_value,
            end_value=segment.end_value,
            color=line.color,
            stroke_width=line.stroke_width,
            dashed=line.dashed,
            label=segment.label,
            kind=line.kind.value,
        )


class IndicatorSeriesResponse(CamelCaseModel):
    """Computed indicator series with display metadata."""

    name: str = Field(..., description='Display name, e.g. "SMA(20)"')
    type: str
    period: int
    display: str = Field(..., description="overlay or panel")
    color: str
    points: list[dict[str, Any]] = Field(
        ..., description="date/value samples, or date/macd/signal/histogram for MACD"
    )

    @classmethod
    def from_indicator(cls, indicator: ChartIndicator) -> "IndicatorSeriesResponse":
        series = indicator.series
        points: list[dict[str, Any]] = []
        for point in series.points:
            if isinstance(point, MacdPoint):
                points.append(
                    {
                        "date": point.date.isoformat(),
                        "macd": point.macd,
                        "signal": point.signal,
                        "histogram": point.histogram,
                    }
                )
            else:
                points.append({"date": point.date.isoformat(), "value": point.value})
        return cls(
            name=series.name,
            type=series.spec.type.value,
            period=series.spec.period,
            display=series.spec.display.value,
            color=indicator.color,
            points=points,
        )


class ChartOverlaysResponse(CamelCaseModel):
    """Everything a renderer needs to decorate a price chart."""

    symbol: str | None = Field(None, description="Symbol or ratio the bars belong to")
    bar_count: int
    start_date: datetime.date | None = None
    end_date: datetime.date | None = None
    overlays: list[IndicatorSeriesResponse] = Field(
        ..., description="Indicators drawn on the price panel"
    )
    panels: list[IndicatorSeriesResponse] = Field(
        ..., description="Indicators drawn in their own panels"
    )
    lines: list[ChartLineResponse]

    @classmethod
    def from_overlays(
        cls, overlays: ChartOverlays, symbol: str | None = None
    ) -> "ChartOverlaysResponse":
        return cls(
            symbol=symbol,
            bar_count=overlays.bar_count,
            start_date=overlays.start_date,
            end_date=overlays.end_date,
            overlays=[IndicatorSeriesResponse.from_indicator(i) for i in overlays.overlays],
            panels=[IndicatorSeriesResponse.from_indicator(i) for i in overlays.panels],
            lines=[ChartLineResponse.from_line(line) for line in overlays.lines],
        )
