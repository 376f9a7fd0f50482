"""Named analysis tools that take JSON arguments and return text tables.

Each tool validates its arguments with a pydantic model, runs an engine and
renders the result as a plain-text table, so callers such as chat agents can
read the output directly.
"""
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import date
from typing import Any

import pandas as pd
from pydantic import BaseModel, ValidationError

from stockcharts.core.config import Settings, get_settings
from stockcharts.core.exceptions import InvalidParameterError, UnsupportedOperationError
from stockcharts.indicators import series
from stockcharts.indicators.fibonacci import FibonacciParameters, fibonacci_retracements
from stockcharts.indicators.hull import detect_hull_trend_lines
from stockcharts.indicators.ratio import is_ratio_symbol, parse_ratio_symbol, ratio_bars
from stockcharts.providers.factory import create_market_data_provider
from stockcharts.schemas.bars import to_bars
from stockcharts.schemas.tools import (
    RatioArguments,
    StockDataArguments,
    TechnicalIndicatorArguments,
    ToolInfo,
    ToolResult,
    TrendLineArguments,
)
from stockcharts.services.ratio_service import RatioService
from stockcharts.utils.formatting import (
    indicator_table,
    macd_table,
    ratio_table,
    stock_data_table,
    trend_line_table,
)
from stockcharts.utils.structured_logging import get_logger, log_duration
from stockcharts.utils.validation import normalize_symbol

logger = logging.getLogger(__name__)
event_logger = get_logger(__name__)

DEFAULT_STOCK_DATA_PERIOD = "1Y"
PERIOD_OFFSETS = {
    "1W": pd.DateOffset(weeks=1),
    "1M": pd.DateOffset(months=1),
    "3M": pd.DateOffset(months=3),
    "1Y": pd.DateOffset(years=1),
}


@dataclass(frozen=True)
class ToolDefinition:
    """A tool's public contract and its handler."""

    name: str
    description: str
    arguments_model: type[BaseModel]
    handler: Callable[[Any], Awaitable[str]]

    def info(self) -> ToolInfo:
        return ToolInfo(
            name=self.name,
            description=self.description,
            input_schema=self.arguments_model.model_json_schema(by_alias=True),
        )


def _validation_message(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "arguments"
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)


def resolve_date_range(
    period: str | None, start_date: date | None, end_date: date | None, today: date
) -> tuple[date, date]:
    """Turn a period preset and optional dates into a concrete range.

    The preset counts back from today and only applies when neither date is
    given. A missing end date is today; a missing start date is one year
    before the end date.
    """
    if start_date is None and end_date is None:
        offset = PERIOD_OFFSETS[period or DEFAULT_STOCK_DATA_PERIOD]
        return (pd.Timestamp(today) - offset).date(), today

    end = end_date or today
    start = start_date or (pd.Timestamp(end) - PERIOD_OFFSETS["1Y"]).date()
    return start, end


class ToolService:
    """Registry and executor for the analysis tools."""

    def __init__(
        self, settings: Settings | None = None, ratio_service: RatioService | None = None
    ):
        self.settings = settings or get_settings()
        self.ratio_service = ratio_service or RatioService(
            create_market_data_provider(self.settings)
        )
        self._tools: dict[str, ToolDefinition] = {
            tool.name: tool
            for tool in (
                ToolDefinition(
                    name="calculate_technical_indicator",
                    description=(
                        "Calculate a technical indicator (sma, ema, rsi, macd, dpo) from OHLC "
                        "data. Returns a formatted text table."
                    ),
                    arguments_model=TechnicalIndicatorArguments,
                    handler=self._technical_indicator,
                ),
                ToolDefinition(
                    name="calculate_ratio",
                    description=(
                        "Divide two OHLC series field by field on their common dates. "
                        "Returns a formatted text table."
                    ),
                    arguments_model=RatioArguments,
                    handler=self._ratio,
                ),
                ToolDefinition(
                    name="detect_trend_lines",
                    description=(
                        "Detect convex-hull support/resistance lines or swing-based Fibonacci "
                        "retracement levels. Returns a formatted text table."
                    ),
                    arguments_model=TrendLineArguments,
                    handler=self._trend_lines,
                ),
                ToolDefinition(
                    name="get_stock_data",
                    description=(
                        "Fetch daily OHLC bars for a ticker or a ticker ratio such as XLK/SPY. "
                        "Use period (1W, 1M, 3M, 1Y) or startDate/endDate. Returns a formatted "
                        "text table with close-to-close percent returns."
                    ),
                    arguments_model=StockDataArguments,
                    handler=self._stock_data,
                ),
            )
        }

    def list_tools(self) -> list[ToolInfo]:
        """Catalogue of all tools with their JSON input schemas."""
        return [tool.info() for tool in self._tools.values()]

    async def execute_tool(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        """Validate arguments and run a tool.

        Args:
            name: Tool name, e.g. "calculate_technical_indicator"
            arguments: JSON argument object

        Returns:
            ToolResult with the text table

        Raises:
            UnsupportedOperationError: If no tool has this name
            InvalidParameterError: If the arguments fail validation
            MarketDataError: If a data-fetching tool cannot reach its provider
        """
        tool = self._tools.get(name)
        if tool is None:
            raise UnsupportedOperationError(f"Unknown tool: {name}")

        try:
            parsed = tool.arguments_model.model_validate(arguments)
        except ValidationError as e:
            raise InvalidParameterError(
                f"Invalid arguments for {name}: {_validation_message(e)}"
            ) from e

        with log_duration(event_logger, "tool_executed", tool=name):
            text = await tool.handler(parsed)
        return ToolResult(text=text)

    async def _technical_indicator(self, args: TechnicalIndicatorArguments) -> str:
        bars = to_bars(args.ohlc_data)
        settings = self.settings

        if args.operation == "macd":
            fast = args.fast_period or settings.default_macd_fast_period
            slow = args.slow_period or settings.default_macd_slow_period
            signal = args.signal_period or settings.default_macd_signal_period
            return macd_table(series.macd(bars, fast, slow, signal))

        if args.operation == "sma":
            period = args.period or settings.default_sma_period
            return indicator_table(f"SMA({period})", series.sma(bars, period))
        if args.operation == "ema":
            period = args.period or settings.default_ema_period
            return indicator_table(f"EMA({period})", series.ema(bars, period))
        if args.operation == "rsi":
            period = args.period or settings.default_rsi_period
            return indicator_table(f"RSI({period})", series.rsi(bars, period))

        period = args.period or settings.default_dpo_period
        return indicator_table(
            f"DPO({period})", series.detrended_price_oscillator(bars, period)
        )

    async def _ratio(self, args: RatioArguments) -> str:
        bars = ratio_bars(to_bars(args.ohlc_data1), to_bars(args.ohlc_data2))
        logger.debug(f"Ratio tool produced {len(bars)} rows")
        return ratio_table(bars)

    async def _trend_lines(self, args: TrendLineArguments) -> str:
        bars = to_bars(args.ohlc_data)
        if args.method == "fibonacci":
            params = FibonacciParameters.from_settings(self.settings)
            lines = fibonacci_retracements(bars, params)
            return trend_line_table(("fibonacci", line) for line in lines)

        trend_lines = detect_hull_trend_lines(bars, self.settings.hull_min_segment_bars)
        return trend_line_table(
            [
                *(("support", line) for line in trend_lines.support),
                *(("resistance", line) for line in trend_lines.resistance),
            ]
        )

    async def _stock_data(self, args: StockDataArguments) -> str:
        start, end = resolve_date_range(
            args.period, args.start_date, args.end_date, date.today()
        )
        bars = await self.ratio_service.get_bars(args.symbol, start, end)
        if args.limit is not None:
            bars = bars[: args.limit]

        span = f"1 day bars from {start.isoformat()} to {end.isoformat()}"
        if is_ratio_symbol(args.symbol):
            numerator, denominator = parse_ratio_symbol(args.symbol)
            return stock_data_table(
                f"Ratio data for {numerator}/{denominator} ({span}):",
                bars,
                [f"Numerator: {numerator}, Denominator: {denominator}"],
            )
        return stock_data_table(f"Stock data for {normalize_symbol(args.symbol)} ({span}):", bars)
