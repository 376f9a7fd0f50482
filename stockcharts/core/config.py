"""Configuration management using Pydantic v2 settings.
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from stockcharts.core.constants import (
    FibonacciThresholds,
    HullThresholds,
    IndicatorDefaults,
    SwingThresholds,
)


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application
    app_name: str = Field(default="Stock Charts API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    environment: str = Field(
        default="development", description="Environment (development, production)"
    )

    # API
    api_v1_prefix: str = Field(default="/api/v1", description="API v1 prefix")
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173", "http://localhost:8000"],
        description="Allowed CORS origins",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")

    # Market Data Provider Configuration
    market_data_provider: str = Field(
        default="mock",
        description="Market data provider: 'mock'"
    )
    default_history_days: int = Field(
        default=365,
        description="Default number of days of historical data to fetch"
    )

    # Indicator Defaults
    default_sma_period: int = Field(default=IndicatorDefaults.SMA_PERIOD, gt=0)
    default_ema_period: int = Field(default=IndicatorDefaults.EMA_PERIOD, gt=0)
    default_rsi_period: int = Field(default=IndicatorDefaults.RSI_PERIOD, gt=0)
    default_dpo_period: int = Field(default=IndicatorDefaults.DPO_PERIOD, gt=0)
    default_macd_fast_period: int = Field(default=IndicatorDefaults.MACD_FAST_PERIOD, gt=0)
    default_macd_slow_period: int = Field(default=IndicatorDefaults.MACD_SLOW_PERIOD, gt=0)
    default_macd_signal_period: int = Field(default=IndicatorDefaults.MACD_SIGNAL_PERIOD, gt=0)

    # Trend Line Tuning
    hull_min_segment_bars: int = Field(
        default=HullThresholds.MIN_SEGMENT_BARS,
        gt=0,
        description="Minimum bar span of a hull segment"
    )
    swing_lookaround_bars: int = Field(
        default=SwingThresholds.LOOKAROUND_BARS,
        gt=0,
        description="Bars on each side a swing must exceed"
    )
    swing_min_price_change: float = Field(
        default=SwingThresholds.MIN_PRICE_CHANGE,
        ge=0,
        description="Minimum relative price change between accepted swings"
    )
    swing_min_separation_bars: int = Field(
        default=SwingThresholds.MIN_SEPARATION_BARS,
        ge=0,
        description="Minimum bar distance between accepted swings"
    )
    swing_alternation_after: int = Field(
        default=SwingThresholds.ALTERNATION_AFTER,
        ge=0,
        description="Accepted swings after which high/low alternation is enforced"
    )
    swing_confirmation_bars: int = Field(
        default=SwingThresholds.CONFIRMATION_BARS,
        ge=0,
        description="Bars a swing must hold as an extreme to be confirmed"
    )
    swing_max_validated: int = Field(
        default=SwingThresholds.MAX_VALIDATED_SWINGS,
        gt=1,
        description="Most recent validated swings considered for pairing"
    )
    fibonacci_min_bars: int = Field(
        default=FibonacciThresholds.MIN_BARS,
        gt=0,
        description="Minimum bars before retracement lines are produced"
    )
    fibonacci_min_range_pct: float = Field(
        default=FibonacciThresholds.MIN_RANGE_PCT,
        ge=0,
        description="Minimum leg range as a fraction of the high"
    )
    fibonacci_max_sets: int = Field(
        default=FibonacciThresholds.MAX_SETS,
        gt=0,
        description="Most recent retracement sets kept"
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Application settings
    """
    return Settings()
