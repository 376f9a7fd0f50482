"""Ratio series between two tickers.

A ratio chart such as ``XLK/SPY`` divides one ticker's bars by another's,
field by field, on the dates both tickers traded.
"""

from collections.abc import Sequence

import pandas as pd

from stockcharts.core.exceptions import InvalidRatioError
from stockcharts.indicators.types import Bar
from stockcharts.utils.validation import is_valid_symbol, normalize_symbol

PRICE_FIELDS = ["open", "high", "low", "close"]


def is_ratio_symbol(text: str) -> bool:
    """Check whether a symbol string denotes a ratio (contains "/")."""
    return "/" in text


def parse_ratio_symbol(text: str) -> tuple[str, str]:
    """Split a ratio symbol into normalized numerator and denominator.

    Args:
        text: Ratio such as "xlk/spy"

    Returns:
        Tuple of (numerator, denominator), e.g. ("XLK", "SPY")

    Raises:
        InvalidRatioError: If the text is not exactly two valid symbols
    """
    parts = [normalize_symbol(part) for part in text.split("/")]
    if len(parts) != 2:
        raise InvalidRatioError(f"Ratio must have exactly two symbols: {text!r}")

    for part in parts:
        if not part or not is_valid_symbol(part):
            raise InvalidRatioError(f"Invalid symbol in ratio {text!r}: {part!r}")

    return parts[0], parts[1]


def _to_frame(bars: Sequence[Bar]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "date": [bar.date for bar in bars],
            **{name: [float(getattr(bar, name)) for bar in bars] for name in PRICE_FIELDS},
        }
    )


def ratio_bars(numerator: Sequence[Bar], denominator: Sequence[Bar]) -> list[Bar]:
    """Divide two bar series field by field on their common dates.

    Dates present in only one series are dropped, as are dates where any
    denominator field is zero.

    Args:
        numerator: Bars of the first ticker
        denominator: Bars of the second ticker

    Returns:
        Ratio bars in ascending date order.
    """
    if not numerator or not denominator:
        return []

    merged = pd.merge(
        _to_frame(numerator),
        _to_frame(denominator),
        on="date",
        how="inner",
        suffixes=("_num", "_den"),
    )

    denominators = merged[[f"{name}_den" for name in PRICE_FIELDS]]
    merged = merged[(denominators != 0).all(axis=1)].sort_values("date")

    return [
        Bar(
            date=row.date,
            open=row.open_num / row.open_den,
            high=row.high_num / row.high_den,
            low=row.low_num / row.low_den,
            close=row.close_num / row.close_den,
        )
        for row in merged.itertuples(index=False)
    ]
