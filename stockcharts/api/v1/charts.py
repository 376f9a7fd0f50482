"""Chart overlay endpoints: indicator series and decorated trend lines."""

import logging
from datetime import UTC, date, datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query, status

from stockcharts.core.deps import AppSettings, get_overlay_service, get_ratio_service
from stockcharts.core.exceptions import InvalidParameterError
from stockcharts.schemas.bars import to_bars
from stockcharts.schemas.charts import ChartOverlaysRequest, ChartOverlaysResponse
from stockcharts.services.overlay_service import (
    OverlayService,
    check_fibonacci_range,
    custom_line_spec,
)
from stockcharts.services.ratio_service import RatioService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/overlays",
    response_model=ChartOverlaysResponse,
    summary="Compute Overlays for Supplied Bars",
    description="Compute indicator series, convex-hull support/resistance lines, "
    "Fibonacci retracements and custom lines for bars supplied in the request body.",
    operation_id="compute_chart_overlays",
    responses={
        400: {"description": "Unsupported indicator"},
        422: {"description": "Request body failed validation"},
    },
)
async def compute_chart_overlays(
    request: ChartOverlaysRequest,
    overlay_service: OverlayService = Depends(get_overlay_service),
) -> ChartOverlaysResponse:
    """Compute overlays for the bars in the request body.

    Raises:
        HTTPException: 400 if an indicator spec is invalid
    """
    try:
        specs = overlay_service.parse_indicators(request.indicators)
    except InvalidParameterError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    overlays = overlay_service.build_chart_overlays(
        to_bars(request.ohlc_data),
        specs,
        include_hull=request.hull,
        include_fibonacci=request.fibonacci,
        fibonacci_high=request.fibonacci_high,
        fibonacci_low=request.fibonacci_low,
        line=request.custom_line(),
        extra_lines=[line.to_user_line() for line in request.lines],
    )
    return ChartOverlaysResponse.from_overlays(overlays)


@router.get(
    "/overlays",
    response_model=ChartOverlaysResponse,
    summary="Compute Overlays for a Symbol",
    description="Fetch daily bars for a symbol or a ratio such as XLK/SPY from the "
    "configured market data provider and compute the requested overlays.",
    operation_id="get_chart_overlays",
    responses={
        400: {"description": "Invalid symbol, ratio, indicator, line or date range"},
        502: {"description": "Market data provider failed"},
        500: {"description": "Internal Server Error"},
    },
)
async def get_chart_overlays(
    settings: AppSettings,
    symbol: str = Query(..., description="Ticker (AAPL) or ratio (XLK/SPY)"),
    indicators: str = Query("", description='Indicator specs, e.g. "SMA:20,RSI:14:panel"'),
    hull: bool = Query(False, description="Include convex-hull support/resistance lines"),
    fibonacci: bool = Query(False, description="Include swing-based Fibonacci retracements"),
    start_date: date | None = Query(None, description="Start date (YYYY-MM-DD)"),
    end_date: date | None = Query(None, description="End date (YYYY-MM-DD)"),
    fibonacci_high: float | None = Query(None, description="High of a manual Fibonacci range"),
    fibonacci_low: float | None = Query(None, description="Low of a manual Fibonacci range"),
    line_start_value: float | None = Query(
        None, description="Value of a custom line; alone it draws a horizontal line"
    ),
    line_end_value: float | None = Query(
        None, description="Second value of a custom line, extended to the chart edges"
    ),
    line_start_date: date | None = Query(None, description="Date of line_start_value"),
    line_end_date: date | None = Query(None, description="Date of line_end_value"),
    ratio_service: RatioService = Depends(get_ratio_service),
    overlay_service: OverlayService = Depends(get_overlay_service),
) -> ChartOverlaysResponse:
    """Fetch bars and compute overlays.

    Without dates the last ``default_history_days`` days are used.

    Raises:
        HTTPException: 400 for invalid symbols, ratios, indicators, lines or dates
    """
    end = end_date or datetime.now(UTC).date()
    start = start_date or end - timedelta(days=settings.default_history_days)

    try:
        specs = overlay_service.parse_indicators(indicators)
        check_fibonacci_range(fibonacci_high, fibonacci_low)
        line = custom_line_spec(line_start_value, line_end_value, line_start_date, line_end_date)
        bars = await ratio_service.get_bars(symbol, start, end)
    except InvalidParameterError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    logger.info(f"Computing overlays for {symbol} over {len(bars)} bars ({start} to {end})")
    overlays = overlay_service.build_chart_overlays(
        bars,
        specs,
        include_hull=hull,
        include_fibonacci=fibonacci,
        fibonacci_high=fibonacci_high,
        fibonacci_low=fibonacci_low,
        line=line,
    )
    return ChartOverlaysResponse.from_overlays(overlays, symbol=symbol.upper().strip())
