"""FastAPI documentation configuration and metadata.

OpenAPI descriptions, tags and shared error responses for the Stock Charts API.
"""
from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

# API Metadata
API_TITLE = "Stock Charts API"
API_DESCRIPTION = """
## Stock Charts API

Technical indicators and trend line detection over daily OHLC price series.

### Indicators

- **SMA / EMA** - simple and SMA-seeded exponential moving averages
- **RSI** - Wilder's relative strength index
- **MACD** - moving average convergence divergence with signal and histogram
- **DPO** - detrended price oscillator

### Trend Lines

- **Convex hull** - support from the lower hull of lows, resistance from the
  upper hull of highs, extended to the latest bar
- **Fibonacci** - retracement levels between validated swing points, with
  levels dropped once price breaks through them

### Ratio Charts

Any symbol may be a ratio such as `XLK/SPY`; bars are divided field by field on
the dates both tickers traded.

### Tools

`/tools` exposes the same calculations as named tools that take JSON arguments
and return plain-text tables.

### Error Handling

- **400**: invalid parameters (unknown indicator, bad ratio, unknown tool)
- **422**: request body failed schema validation
- **500**: unexpected server error
"""

API_VERSION = "1.0.0"
API_CONTACT = {
    "name": "Stock Charts",
}
API_LICENSE = {
    "name": "MIT",
    "url": "https://opensource.org/licenses/MIT",
}

# OpenAPI Tags
OPENAPI_TAGS: list[dict[str, Any]] = [
    {
        "name": "health",
        "description": "**System Health & Monitoring**\n\n"
        "Endpoints for monitoring application health, readiness, and liveness.",
    },
    {
        "name": "tools",
        "description": "**Analysis Tools**\n\n"
        "Named tools (technical indicators, ratios, trend lines) that accept JSON "
        "arguments and return formatted text tables.",
    },
    {
        "name": "charts",
        "description": "**Chart Overlays**\n\n"
        "Indicator series and decorated trend lines ready for a chart renderer, "
        "computed from supplied bars or from the configured market data provider.",
    },
]

# Response Examples
COMMON_RESPONSES = {
    400: {
        "description": "Bad Request - Invalid input parameters",
        "content": {
            "application/json": {
                "examples": {
                    "invalid_ratio": {
                        "summary": "Invalid Ratio Symbol",
                        "value": {"detail": "Ratio must have exactly two symbols: 'A/B/C'"},
                    },
                    "unsupported_indicator": {
                        "summary": "Unsupported Indicator",
                        "value": {"detail": "Unsupported indicator type: VWAP"},
                    },
                }
            }
        },
    },
    422: {
        "description": "Validation Error - Request validation failed",
    },
    500: {
        "description": "Internal Server Error - Server encountered an error",
        "content": {
            "application/json": {
                "examples": {
                    "generic_error": {
                        "summary": "Generic Internal Error",
                        "value": {
                            "error": "Internal Server Error",
                            "detail": "An unexpected error occurred",
                        },
                    }
                }
            }
        },
    },
}


def custom_openapi_schema(app: FastAPI) -> dict[str, Any]:
    """Generate the OpenAPI schema with shared error responses.

    Args:
        app: FastAPI application instance

    Returns:
        Dict[str, Any]: Custom OpenAPI schema
    """
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=API_TITLE,
        version=API_VERSION,
        description=API_DESCRIPTION,
        routes=app.routes,
        tags=OPENAPI_TAGS,
        contact=API_CONTACT,
        license_info=API_LICENSE,
    )

    openapi_schema["servers"] = [
        {"url": "http://localhost:8000", "description": "Local Development Server"},
    ]
    openapi_schema["components"] = openapi_schema.get("components", {})
    openapi_schema["components"]["responses"] = COMMON_RESPONSES

    app.openapi_schema = openapi_schema
    return app.openapi_schema


def get_swagger_ui_parameters() -> dict[str, Any]:
    """Swagger UI display options."""
    return {
        "deepLinking": True,
        "displayRequestDuration": True,
        "defaultModelsExpandDepth": 2,
        "docExpansion": "list",
        "filter": True,
        "tryItOutEnabled": True,
    }
