"""Schemas for OHLC price data."""

import datetime
from collections.abc import Sequence

from pydantic import Field

from stockcharts.indicators.types import Bar
from stockcharts.schemas.base import CamelCaseModel


class OhlcBar(CamelCaseModel):
    """Single daily OHLC observation."""

    date: datetime.date = Field(..., description="Trading date (YYYY-MM-DD)")
    open: float = Field(..., description="Opening price")
    high: float = Field(..., description="High price")
    low: float = Field(..., description="Low price")
    close: float = Field(..., description="Closing price")
    percent_return: float | None = Field(
        None, description="Close divided by the previous close (informational, ignored)"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "date": "2025-03-03",
                    "open": 101.2,
                    "high": 103.5,
                    "low": 100.8,
                    "close": 102.9,
                }
            ]
        }
    }

    def to_bar(self) -> Bar:
        return Bar(date=self.date, open=self.open, high=self.high, low=self.low, close=self.close)


def to_bars(ohlc_data: Sequence[OhlcBar]) -> list[Bar]:
    """Convert request bars to engine bars, sorted by date.

    Engines require ascending dates; clients do not always send them that way.
    """
    return sorted((item.to_bar() for item in ohlc_data), key=lambda bar: bar.date)
