"""Base provider interface and data models for market data providers.

This module defines the contract that all market data providers must implement.
Engines only ever see the resulting ``Bar`` sequences.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date

from stockcharts.core.exceptions import InvalidParameterError
from stockcharts.indicators.types import Bar


@dataclass
class BarRequest:
    """Request for daily bars over an inclusive date range."""

    symbol: str
    start_date: date
    end_date: date


class MarketDataProviderInterface(ABC):
    """
    Abstract interface for market data providers.

    Implementations return daily bars for a single symbol. Ratio symbols are
    resolved above this layer, by fetching both legs separately.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of this provider (e.g., 'mock')."""
        pass

    def _validate_request(self, request: BarRequest) -> None:
        """Reject requests whose date range is reversed.

        Raises:
            InvalidParameterError: If start_date is after end_date
        """
        if request.start_date > request.end_date:
            raise InvalidParameterError(
                f"start_date ({request.start_date}) is after end_date ({request.end_date})"
            )

    @abstractmethod
    async def fetch_bars(self, request: BarRequest) -> list[Bar]:
        """
        Fetch daily OHLC bars.

        Args:
            request: BarRequest with symbol and inclusive date range

        Returns:
            List of Bar objects in ascending date order

        Raises:
            InvalidParameterError: If the request is malformed
            MarketDataError: If the provider cannot deliver data
        """
        pass
