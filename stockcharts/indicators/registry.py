"""Indicator registry for dynamic indicator calculation.

This module parses indicator specifications such as ``"SMA:20,RSI:14:panel"``
and dispatches each one to its series calculator, so chart endpoints can
compute whatever indicators a request names.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from stockcharts.core.constants import IndicatorDefaults
from stockcharts.core.exceptions import UnsupportedOperationError
from stockcharts.indicators import series
from stockcharts.indicators.types import Bar, IndicatorPoint, MacdPoint

if TYPE_CHECKING:
    from stockcharts.core.config import Settings

logger = logging.getLogger(__name__)


class IndicatorType(str, Enum):
    """Available indicator types for chart overlays."""

    SMA = "SMA"
    EMA = "EMA"
    RSI = "RSI"
    MACD = "MACD"
    DPO = "DPO"


class IndicatorDisplay(str, Enum):
    """Where an indicator is drawn."""

    OVERLAY = "overlay"
    PANEL = "panel"


TYPE_ALIASES: dict[str, IndicatorType] = {"DETRENDED": IndicatorType.DPO}

DEFAULT_DISPLAY: dict[IndicatorType, IndicatorDisplay] = {
    IndicatorType.SMA: IndicatorDisplay.OVERLAY,
    IndicatorType.EMA: IndicatorDisplay.OVERLAY,
    IndicatorType.RSI: IndicatorDisplay.PANEL,
    IndicatorType.MACD: IndicatorDisplay.PANEL,
    IndicatorType.DPO: IndicatorDisplay.PANEL,
}


@dataclass(frozen=True)
class IndicatorPeriods:
    """Periods used when a request names an indicator without one.

    ``macd_fast`` is the default MACD period; ``macd_slow`` and
    ``macd_signal`` complete every MACD request.
    """

    sma: int = IndicatorDefaults.SMA_PERIOD
    ema: int = IndicatorDefaults.EMA_PERIOD
    rsi: int = IndicatorDefaults.RSI_PERIOD
    dpo: int = IndicatorDefaults.DPO_PERIOD
    macd_fast: int = IndicatorDefaults.MACD_FAST_PERIOD
    macd_slow: int = IndicatorDefaults.MACD_SLOW_PERIOD
    macd_signal: int = IndicatorDefaults.MACD_SIGNAL_PERIOD

    @classmethod
    def from_settings(cls, settings: "Settings") -> "IndicatorPeriods":
        """Create from the ``default_*_period`` settings."""
        return cls(
            sma=settings.default_sma_period,
            ema=settings.default_ema_period,
            rsi=settings.default_rsi_period,
            dpo=settings.default_dpo_period,
            macd_fast=settings.default_macd_fast_period,
            macd_slow=settings.default_macd_slow_period,
            macd_signal=settings.default_macd_signal_period,
        )

    def default_period(self, indicator_type: IndicatorType) -> int:
        if indicator_type == IndicatorType.MACD:
            return self.macd_fast
        return getattr(self, indicator_type.value.lower())


@dataclass(frozen=True)
class IndicatorSpec:
    """One requested indicator.

    For MACD ``period`` is the fast period and ``slow_period``/``signal_period``
    complete the configuration; other indicators ignore them.
    """

    type: IndicatorType
    period: int
    display: IndicatorDisplay
    slow_period: int = IndicatorDefaults.MACD_SLOW_PERIOD
    signal_period: int = IndicatorDefaults.MACD_SIGNAL_PERIOD

    @property
    def name(self) -> str:
        """Display name, e.g. "SMA(20)" or "MACD(12,26,9)"."""
        if self.type == IndicatorType.MACD:
            return f"MACD({self.period},{self.slow_period},{self.signal_period})"
        return f"{self.type.value}({self.period})"


@dataclass
class IndicatorSeries:
    """Calculated indicator with its request metadata."""

    spec: IndicatorSpec
    points: list[IndicatorPoint] | list[MacdPoint]

    @property
    def name(self) -> str:
        return self.spec.name


def parse_indicator_type(text: str) -> IndicatorType:
    """Resolve an indicator name (case-insensitive, aliases allowed).

    Raises:
        UnsupportedOperationError: If the name is not a known indicator
    """
    key = text.strip().upper()
    if key in TYPE_ALIASES:
        return TYPE_ALIASES[key]
    try:
        return IndicatorType(key)
    except ValueError as e:
        raise UnsupportedOperationError(f"Unsupported indicator type: {text.strip()}") from e


def _parse_period(text: str | None, default: int) -> int:
    if text is not None:
        try:
            period = int(text.strip())
        except ValueError:
            period = 0
        if period > 0:
            return period
    return default


def _parse_display(text: str | None, indicator_type: IndicatorType) -> IndicatorDisplay:
    if text is not None and text.strip():
        try:
            return IndicatorDisplay(text.strip().lower())
        except ValueError:
            logger.warning(f"Ignoring unknown display mode '{text.strip()}'")
    return DEFAULT_DISPLAY[indicator_type]


def parse_indicator_specs(
    text: str, periods: IndicatorPeriods | None = None
) -> list[IndicatorSpec]:
    """Parse a comma-separated list of ``TYPE[:PERIOD[:DISPLAY]]`` entries.

    Missing, unparsable or non-positive periods fall back to the indicator's
    default period, and a missing display falls back to its default display.
    Blank entries are skipped.

    Args:
        text: Specification string, e.g. "SMA:20,RSI:14:panel,macd"
        periods: Default periods (defaults to IndicatorPeriods())

    Returns:
        Specs in the order given

    Raises:
        UnsupportedOperationError: If an entry names an unknown indicator
    """
    periods = periods or IndicatorPeriods()
    specs: list[IndicatorSpec] = []
    for part in text.split(","):
        if not part.strip():
            continue
        fields = part.split(":")
        indicator_type = parse_indicator_type(fields[0])
        period = _parse_period(
            fields[1] if len(fields) > 1 else None, periods.default_period(indicator_type)
        )
        display = _parse_display(fields[2] if len(fields) > 2 else None, indicator_type)
        specs.append(
            IndicatorSpec(
                type=indicator_type,
                period=period,
                display=display,
                slow_period=periods.macd_slow,
                signal_period=periods.macd_signal,
            )
        )
    return specs


def calculate_macd(bars: Sequence[Bar], spec: IndicatorSpec) -> list[MacdPoint]:
    """MACD with ``spec.period`` as the fast period."""
    return series.macd(
        bars, fast=spec.period, slow=spec.slow_period, signal_period=spec.signal_period
    )


IndicatorCalculator = Callable[
    [Sequence[Bar], IndicatorSpec], list[IndicatorPoint] | list[MacdPoint]
]

# Registry mapping indicator types to calculation functions
INDICATOR_REGISTRY: dict[IndicatorType, IndicatorCalculator] = {
    IndicatorType.SMA: lambda bars, spec: series.sma(bars, spec.period),
    IndicatorType.EMA: lambda bars, spec: series.ema(bars, spec.period),
    IndicatorType.RSI: lambda bars, spec: series.rsi(bars, spec.period),
    IndicatorType.MACD: calculate_macd,
    IndicatorType.DPO: lambda bars, spec: series.detrended_price_oscillator(bars, spec.period),
}


def calculate_indicator_series(
    bars: Sequence[Bar],
    specs: Sequence[IndicatorSpec],
) -> list[IndicatorSeries]:
    """Calculate every requested indicator over the same bars.

    Args:
        bars: OHLC bars in ascending date order
        specs: Parsed indicator requests

    Returns:
        One IndicatorSeries per spec, in request order. A series whose
        indicator cannot be computed on these bars has no points.
    """
    results = []
    for spec in specs:
        calculator = INDICATOR_REGISTRY[spec.type]
        results.append(IndicatorSeries(spec=spec, points=calculator(bars, spec)))
    return results
