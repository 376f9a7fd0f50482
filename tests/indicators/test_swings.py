"""Unit tests for swing detection and validation."""

import pytest

from stockcharts.core.config import Settings
from stockcharts.indicators.swings import (
    SwingParameters,
    SwingPoint,
    detect_swing_points,
    validate_swing_points,
)
from tests.utils.mock_data import bars_from_extremes, bars_from_lows


def _swing(index, is_high, price, bars):
    return SwingPoint(index=index, date=bars[index].date, is_high=is_high, price=price)


@pytest.mark.unit
class TestDetectSwingPoints:
    """Fractal swing detection."""

    def test_finds_single_low_and_high(self, fibonacci_bars):
        swings = detect_swing_points(fibonacci_bars)

        assert [(s.index, s.is_high, s.price) for s in swings] == [
            (5, False, 90.0),
            (20, True, 110.0),
        ]
        assert swings[0].date == fibonacci_bars[5].date

    def test_too_few_bars(self):
        bars = bars_from_lows([10.0, 8.0, 6.0, 4.0, 6.0, 8.0, 10.0, 12.0, 14.0, 16.0])
        assert detect_swing_points(bars) == []

    def test_equal_neighbours_are_not_swings(self):
        bars = bars_from_lows([10.0] * 15)
        assert detect_swing_points(bars) == []

    def test_strict_comparison_on_ties(self):
        lows = [14.0, 13.0, 12.0, 10.0, 10.0, 12.0, 13.0, 14.0, 15.0, 16.0, 17.0]
        assert detect_swing_points(bars_from_lows(lows)) == []

    def test_high_listed_before_low_on_same_bar(self):
        """An outside bar can be both; the high comes first."""
        highs = [10.0] * 11
        lows = [5.0] * 11
        highs[5], lows[5] = 12.0, 3.0
        swings = detect_swing_points(bars_from_extremes(highs, lows))

        assert [(s.index, s.is_high) for s in swings] == [(5, True), (5, False)]

    def test_edges_are_never_swings(self):
        lows = [1.0, 5.0, 6.0, 7.0, 8.0, 9.0, 8.0, 7.0, 6.0, 5.0, 1.0]
        swings = detect_swing_points(bars_from_lows(lows))

        assert all(3 <= s.index <= len(lows) - 4 for s in swings)

    def test_custom_lookaround(self):
        lows = [10.0, 9.0, 8.0, 9.0, 10.0, 11.0, 12.0, 13.0, 14.0, 15.0, 16.0]
        bars = bars_from_lows(lows)

        assert detect_swing_points(bars) == []
        swings = detect_swing_points(bars, SwingParameters(lookaround_bars=2))
        assert [(s.index, s.is_high) for s in swings] == [(2, False)]


@pytest.mark.unit
class TestValidateSwingPoints:
    """Sequential swing validation."""

    def test_keeps_confirmed_alternating_swings(self, fibonacci_bars):
        swings = detect_swing_points(fibonacci_bars)
        assert validate_swing_points(fibonacci_bars, swings) == swings

    def test_rejects_small_price_change(self, fibonacci_bars):
        first = _swing(5, False, 90.0, fibonacci_bars)
        second = _swing(20, True, 90.5, fibonacci_bars)

        assert validate_swing_points(fibonacci_bars, [first, second]) == [first]

    def test_rejects_close_swings(self, fibonacci_bars):
        first = _swing(20, True, 110.0, fibonacci_bars)
        second = _swing(22, False, 100.0, fibonacci_bars)

        assert validate_swing_points(fibonacci_bars, [first, second]) == [first]

    def test_rejects_swing_broken_within_confirmation_window(self, fibonacci_bars):
        """A low at index 3 (94) is undercut two bars later."""
        candidate = _swing(3, False, 94.0, fibonacci_bars)
        assert validate_swing_points(fibonacci_bars, [candidate]) == []

    def test_confirmation_window_truncated_at_series_end(self, fibonacci_bars):
        last = len(fibonacci_bars) - 2
        candidate = _swing(last, True, 102.0, fibonacci_bars)

        assert validate_swing_points(fibonacci_bars, [candidate]) == [candidate]

    def test_alternation_enforced_after_threshold(self, fibonacci_bars):
        bars = fibonacci_bars
        established = [
            _swing(25, False, 100.0, bars),
            _swing(30, True, 102.0, bars),
            _swing(35, False, 98.0, bars),
        ]
        repeated = _swing(40, False, 96.0, bars)
        alternating = _swing(45, True, 103.0, bars)

        accepted = validate_swing_points(bars, [*established, repeated, alternating])

        assert accepted == [*established, alternating]

    def test_same_type_allowed_before_threshold(self, fibonacci_bars):
        bars = fibonacci_bars
        first = _swing(25, True, 102.0, bars)
        second = _swing(30, True, 106.0, bars)

        assert validate_swing_points(bars, [first, second]) == [first, second]

    def test_parameters_from_settings(self):
        settings = Settings(swing_lookaround_bars=2, swing_confirmation_bars=5)
        params = SwingParameters.from_settings(settings)

        assert params.lookaround_bars == 2
        assert params.confirmation_bars == 5
        assert params.min_price_change == settings.swing_min_price_change
