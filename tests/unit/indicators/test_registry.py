"""Unit tests for indicator registry."""

import pytest

from stockcharts.core.config import Settings
from stockcharts.core.exceptions import UnsupportedOperationError
from stockcharts.indicators.registry import (
    INDICATOR_REGISTRY,
    IndicatorDisplay,
    IndicatorPeriods,
    IndicatorSpec,
    IndicatorType,
    calculate_indicator_series,
    parse_indicator_specs,
    parse_indicator_type,
)
from stockcharts.indicators.types import MacdPoint
from tests.utils.mock_data import random_walk_bars


class TestParseIndicatorType:
    """Tests for parse_indicator_type function."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("sma", IndicatorType.SMA),
            (" Ema ", IndicatorType.EMA),
            ("RSI", IndicatorType.RSI),
            ("macd", IndicatorType.MACD),
            ("dpo", IndicatorType.DPO),
            ("detrended", IndicatorType.DPO),
        ],
    )
    def test_known_types(self, text, expected):
        assert parse_indicator_type(text) == expected

    def test_unknown_type(self):
        with pytest.raises(UnsupportedOperationError, match="Unsupported indicator type: BOLL"):
            parse_indicator_type("BOLL")


class TestParseIndicatorSpecs:
    """Tests for parse_indicator_specs function."""

    def test_full_specs(self):
        specs = parse_indicator_specs("SMA:20,RSI:14:panel")

        assert specs == [
            IndicatorSpec(IndicatorType.SMA, 20, IndicatorDisplay.OVERLAY),
            IndicatorSpec(IndicatorType.RSI, 14, IndicatorDisplay.PANEL),
        ]

    def test_default_periods(self):
        specs = parse_indicator_specs("sma,ema,rsi,macd,dpo")

        assert [s.period for s in specs] == [20, 20, 14, 12, 20]

    def test_default_displays(self):
        specs = parse_indicator_specs("sma,ema,rsi,macd,dpo")

        assert [s.display for s in specs] == [
            IndicatorDisplay.OVERLAY,
            IndicatorDisplay.OVERLAY,
            IndicatorDisplay.PANEL,
            IndicatorDisplay.PANEL,
            IndicatorDisplay.PANEL,
        ]

    def test_display_override(self):
        specs = parse_indicator_specs("EMA:50:panel,RSI:7:overlay")

        assert specs[0].display == IndicatorDisplay.PANEL
        assert specs[1].display == IndicatorDisplay.OVERLAY

    @pytest.mark.parametrize("period", ["abc", "0", "-5", ""])
    def test_bad_period_falls_back_to_default(self, period):
        assert parse_indicator_specs(f"RSI:{period}")[0].period == 14

    def test_unknown_display_falls_back_to_default(self):
        assert parse_indicator_specs("SMA:10:sideways")[0].display == IndicatorDisplay.OVERLAY

    def test_blank_parts_skipped(self):
        assert parse_indicator_specs("") == []
        assert len(parse_indicator_specs("SMA:5,, ,EMA:3,")) == 2

    def test_unknown_type_raises(self):
        with pytest.raises(UnsupportedOperationError):
            parse_indicator_specs("SMA:20,FOO:3")


class TestIndicatorSpecName:
    def test_simple_name(self):
        assert IndicatorSpec(IndicatorType.SMA, 20, IndicatorDisplay.OVERLAY).name == "SMA(20)"

    def test_macd_name(self):
        spec = IndicatorSpec(IndicatorType.MACD, 12, IndicatorDisplay.PANEL)
        assert spec.name == "MACD(12,26,9)"

    def test_macd_name_uses_configured_periods(self):
        spec = IndicatorSpec(IndicatorType.MACD, 8, IndicatorDisplay.PANEL, 21, 5)
        assert spec.name == "MACD(8,21,5)"


class TestIndicatorPeriods:
    def test_from_settings(self):
        periods = IndicatorPeriods.from_settings(
            Settings(default_sma_period=50, default_rsi_period=7, default_macd_slow_period=30)
        )

        assert periods.default_period(IndicatorType.SMA) == 50
        assert periods.default_period(IndicatorType.RSI) == 7
        assert periods.default_period(IndicatorType.EMA) == 20
        assert periods.default_period(IndicatorType.MACD) == 12
        assert periods.macd_slow == 30

    def test_parse_fills_missing_periods(self):
        periods = IndicatorPeriods(sma=50, dpo=10, macd_fast=5, macd_slow=35, macd_signal=4)

        specs = parse_indicator_specs("SMA,SMA:9,DPO,MACD", periods)

        assert [s.name for s in specs] == ["SMA(50)", "SMA(9)", "DPO(10)", "MACD(5,35,4)"]

    def test_macd_period_override_keeps_configured_slow_and_signal(self):
        periods = IndicatorPeriods(macd_slow=40, macd_signal=6)

        (spec,) = parse_indicator_specs("MACD:10", periods)

        assert spec.name == "MACD(10,40,6)"


class TestCalculateIndicatorSeries:
    """Tests for calculate_indicator_series function."""

    def test_registry_covers_every_type(self):
        assert set(INDICATOR_REGISTRY) == set(IndicatorType)

    def test_series_in_request_order(self):
        bars = random_walk_bars(count=60)
        specs = parse_indicator_specs("RSI:14,SMA:10,MACD")

        results = calculate_indicator_series(bars, specs)

        assert [r.name for r in results] == ["RSI(14)", "SMA(10)", "MACD(12,26,9)"]
        assert len(results[0].points) == 60 - 14
        assert len(results[1].points) == 60 - 10 + 1
        assert isinstance(results[2].points[0], MacdPoint)

    def test_uncomputable_series_is_empty(self):
        bars = random_walk_bars(count=10)
        results = calculate_indicator_series(bars, parse_indicator_specs("SMA:20,MACD"))

        assert [r.points for r in results] == [[], []]
