"""Plain-text table rendering for tool results.

Tables have a header row, a dash separator row and one row per sample. Dates
are ISO formatted and left-aligned to width 10, numbers carry four decimals
and columns are separated by " | ".
"""
from collections.abc import Iterable, Sequence
from datetime import date

from stockcharts.indicators.types import Bar, IndicatorPoint, MacdPoint, TrendSegment

DATE_WIDTH = 10
COLUMN_SEPARATOR = " | "

MACD_HEADER = "Date       | MACD     | Signal   | Hist"
MACD_SEPARATOR = "-----------|----------|----------|----------"
RATIO_HEADER = "Date       | OpenR    | HighR    | LowR     | CloseR"
RATIO_SEPARATOR = "-----------|----------|----------|----------|----------"
STOCK_DATA_HEADER = "Date       | Open     | High     | Low      | Close    | % Return"
STOCK_DATA_SEPARATOR = "-----------|----------|----------|----------|----------|----------"
TREND_LINE_HEADER = "Line       | Start      | End        | StartVal | EndVal   | Label"
TREND_LINE_SEPARATOR = "-----------|------------|------------|----------|----------|----------"


def format_number(value: float) -> str:
    """Four-decimal rendering, e.g. 117.0 -> "117.0000"."""
    return f"{value:.4f}"


def format_date(day: date) -> str:
    return f"{day.isoformat():<{DATE_WIDTH}}"


def format_row(day: date, values: Iterable[float]) -> str:
    """One table row: padded date followed by formatted values."""
    return COLUMN_SEPARATOR.join([format_date(day), *(format_number(v) for v in values)])


def format_table(header: str, separator: str, rows: Iterable[str]) -> str:
    """Join header, separator and rows; every line ends with a newline."""
    return "".join(f"{line}\n" for line in (header, separator, *rows))


def indicator_table(name: str, points: Sequence[IndicatorPoint]) -> str:
    """Two-column table for a single-valued indicator such as "SMA(20)"."""
    return format_table(
        f"Date       | {name}",
        "-----------|-----------",
        (format_row(p.date, [p.value]) for p in points),
    )


def macd_table(points: Sequence[MacdPoint]) -> str:
    return format_table(
        MACD_HEADER,
        MACD_SEPARATOR,
        (format_row(p.date, [p.macd, p.signal, p.histogram]) for p in points),
    )


def ratio_table(bars: Sequence[Bar]) -> str:
    return format_table(
        RATIO_HEADER,
        RATIO_SEPARATOR,
        (format_row(b.date, [b.open, b.high, b.low, b.close]) for b in bars),
    )


def trend_line_table(lines: Iterable[tuple[str, TrendSegment]]) -> str:
    """Table of (kind, segment) pairs, e.g. ("support", segment)."""
    rows = (
        COLUMN_SEPARATOR.join(
            [
                f"{kind:<{DATE_WIDTH}}",
                format_date(segment.start_date),
                format_date(segment.end_date),
                format_number(segment.start_value),
                format_number(segment.end_value),
                segment.label or "",
            ]
        ).rstrip()
        for kind, segment in lines
    )
    return format_table(TREND_LINE_HEADER, TREND_LINE_SEPARATOR, rows)


def percent_returns(bars: Sequence[Bar]) -> list[float]:
    """Close-to-close change in percent. The first bar, and any bar after a zero close, is 0."""
    returns = []
    previous = None
    for bar in bars:
        if previous:
            returns.append((bar.close / previous - 1.0) * 100.0)
        else:
            returns.append(0.0)
        previous = bar.close
    return returns


def stock_data_table(title: str, bars: Sequence[Bar], footer: Iterable[str] = ()) -> str:
    """Titled OHLC table with a "% Return" column and a record count.

    Example:
        Stock data for AAPL (1 day bars from 2024-01-02 to 2024-01-31):

        Date       | Open     | High     | Low      | Close    | % Return
        -----------|----------|----------|----------|----------|----------
        2024-01-02 | 100.0000 | 101.0000 | 99.0000 | 100.5000 | 0.00%

        Total records: 1
    """
    rows = (
        COLUMN_SEPARATOR.join(
            [
                format_row(bar.date, [bar.open, bar.high, bar.low, bar.close]),
                f"{change:.2f}%",
            ]
        )
        for bar, change in zip(bars, percent_returns(bars), strict=True)
    )
    table = format_table(STOCK_DATA_HEADER, STOCK_DATA_SEPARATOR, rows)
    trailer = "".join(f"{line}\n" for line in (f"Total records: {len(bars)}", *footer))
    return f"{title}\n\n{table}\n{trailer}"
