"""Unit tests for application configuration.

Tests the Settings class in stockcharts.core.config, ensuring config fields
have correct default values and mirror the documented constants.
"""
import pytest
from pydantic import ValidationError

from stockcharts.core.config import Settings, get_settings
from stockcharts.core.constants import FibonacciThresholds, SwingThresholds


class TestSettingsDefaults:
    """Tests for Settings default values."""

    def test_indicator_period_defaults(self) -> None:
        """Test indicator period config fields have correct defaults."""
        settings = Settings()
        assert settings.default_sma_period == 20
        assert settings.default_ema_period == 20
        assert settings.default_rsi_period == 14
        assert settings.default_dpo_period == 20
        assert settings.default_macd_fast_period == 12
        assert settings.default_macd_slow_period == 26
        assert settings.default_macd_signal_period == 9

    def test_swing_defaults(self) -> None:
        """Test swing config fields match SwingThresholds."""
        settings = Settings()
        assert settings.swing_lookaround_bars == SwingThresholds.LOOKAROUND_BARS == 3
        assert settings.swing_min_price_change == 0.01
        assert settings.swing_min_separation_bars == 3
        assert settings.swing_alternation_after == 3
        assert settings.swing_confirmation_bars == 10
        assert settings.swing_max_validated == 100

    def test_fibonacci_and_hull_defaults(self) -> None:
        """Test Fibonacci and hull config fields have correct defaults."""
        settings = Settings()
        assert settings.fibonacci_min_bars == FibonacciThresholds.MIN_BARS == 50
        assert settings.fibonacci_min_range_pct == 0.005
        assert settings.fibonacci_max_sets == 8
        assert settings.hull_min_segment_bars == 3

    def test_data_provider_defaults(self) -> None:
        """Test market data config fields have correct defaults."""
        settings = Settings()
        assert settings.market_data_provider == "mock"
        assert settings.default_history_days == 365

    def test_environment_flags(self) -> None:
        assert Settings(environment="development").is_development
        assert Settings(environment="Production").is_production
        assert not Settings(environment="test").is_development


class TestSettingsValidation:
    def test_rejects_non_positive_period(self) -> None:
        with pytest.raises(ValidationError):
            Settings(default_rsi_period=0)

    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("FIBONACCI_MAX_SETS", "4")
        assert Settings().fibonacci_max_sets == 4


class TestGetSettings:
    """Tests for get_settings() function."""

    def test_get_settings_returns_settings_instance(self) -> None:
        """Test that get_settings() returns a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_is_cached(self) -> None:
        """Test that get_settings() returns the same cached instance."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
