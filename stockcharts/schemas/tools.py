"""Schemas for the tool dispatch API."""

from datetime import date
from typing import Any, Literal

from pydantic import Field, field_validator, model_validator

from stockcharts.schemas.bars import OhlcBar
from stockcharts.schemas.base import CamelCaseModel, StrictBaseModel


def _lowercase(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


class TechnicalIndicatorArguments(CamelCaseModel):
    """Arguments of the ``calculate_technical_indicator`` tool."""

    ohlc_data: list[OhlcBar] = Field(..., description="Array of OHLC data points")
    operation: Literal["sma", "ema", "rsi", "macd", "dpo"] = Field(
        ..., description="Operation: sma, ema, rsi, macd, dpo"
    )
    period: int | None = Field(
        None, gt=0, description="Period for SMA/EMA/RSI/DPO (default: SMA/EMA/DPO 20, RSI 14)"
    )
    fast_period: int | None = Field(None, gt=0, description="MACD fast period (default 12)")
    slow_period: int | None = Field(None, gt=0, description="MACD slow period (default 26)")
    signal_period: int | None = Field(None, gt=0, description="MACD signal period (default 9)")

    @field_validator("operation", mode="before")
    @classmethod
    def normalize_operation(cls, v: Any) -> Any:
        return _lowercase(v)


class RatioArguments(CamelCaseModel):
    """Arguments of the ``calculate_ratio`` tool."""

    ohlc_data1: list[OhlcBar] = Field(..., description="Numerator OHLC data points")
    ohlc_data2: list[OhlcBar] = Field(..., description="Denominator OHLC data points")
    operation: Literal["ratio"] = Field(..., description="Operation: ratio")

    @field_validator("operation", mode="before")
    @classmethod
    def normalize_operation(cls, v: Any) -> Any:
        return _lowercase(v)


class TrendLineArguments(CamelCaseModel):
    """Arguments of the ``detect_trend_lines`` tool."""

    ohlc_data: list[OhlcBar] = Field(..., description="Array of OHLC data points")
    method: Literal["hull", "fibonacci"] = Field(
        "hull", description="Detector: hull (support/resistance) or fibonacci (retracements)"
    )

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, v: Any) -> Any:
        return _lowercase(v)


class StockDataArguments(CamelCaseModel):
    """Arguments of the ``get_stock_data`` tool.

    ``period`` applies only when neither date is given; it defaults to 1Y.
    """

    symbol: str = Field(
        ..., min_length=1, description="Ticker (e.g. AAPL) or ratio of two tickers (e.g. XLK/SPY)"
    )
    period: Literal["1W", "1M", "3M", "1Y"] | None = Field(
        None, description="Lookback preset used when no dates are given (default 1Y)"
    )
    start_date: date | None = Field(None, description="First date (YYYY-MM-DD)")
    end_date: date | None = Field(None, description="Last date (YYYY-MM-DD, default today)")
    limit: int | None = Field(None, gt=0, description="Keep only the first N bars")

    @field_validator("period", mode="before")
    @classmethod
    def normalize_period(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def check_dates(self) -> "StockDataArguments":
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("startDate must not be after endDate")
        return self


class ToolResult(StrictBaseModel):
    """Text content returned by a tool."""

    type: Literal["text"] = "text"
    text: str = Field(..., description="Formatted text table")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "type": "text",
                    "text": "Date       | SMA(3)\n-----------|-----------\n2025-03-05 | 101.0000\n",
                }
            ]
        }
    }


class ToolInfo(CamelCaseModel):
    """Catalogue entry for one tool."""

    name: str
    description: str
    input_schema: dict[str, Any] = Field(..., description="JSON schema of the arguments")


class ToolListResponse(StrictBaseModel):
    """All available tools."""

    tools: list[ToolInfo]
