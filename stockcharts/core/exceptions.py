"""Core exception classes for the Stock Charts application."""


class StockChartsError(Exception):
    """Base exception for Stock Charts operations."""

    pass


class InvalidParameterError(StockChartsError):
    """Raised when a caller supplies a parameter that cannot be honored."""

    pass


class InvalidRatioError(InvalidParameterError):
    """Raised when a ratio specification is not exactly two valid symbols."""

    pass


class UnsupportedOperationError(InvalidParameterError):
    """Raised when an indicator, operation, or tool name is not supported."""

    pass


class MarketDataError(StockChartsError):
    """Raised when the market data provider cannot supply bars."""

    pass
