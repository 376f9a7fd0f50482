"""Main FastAPI application with async support and middleware.
"""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stockcharts.api.v1 import charts
from stockcharts.api.v1 import health
from stockcharts.api.v1 import tools
from stockcharts.core.config import get_settings
from stockcharts.core.docs import API_CONTACT
from stockcharts.core.docs import API_DESCRIPTION
from stockcharts.core.docs import API_TITLE
from stockcharts.core.docs import API_VERSION
from stockcharts.core.docs import OPENAPI_TAGS
from stockcharts.core.docs import custom_openapi_schema
from stockcharts.core.docs import get_swagger_ui_parameters
from stockcharts.core.exceptions import InvalidParameterError
from stockcharts.core.exceptions import MarketDataError
from stockcharts.utils.structured_logging import configure_structured_logging
from stockcharts.utils.structured_logging import get_logger

configure_structured_logging(
    log_level=get_settings().log_level, json_output=not get_settings().is_development
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan management.

    Logs startup configuration and shutdown; the app holds no connections.
    """
    settings = get_settings()
    logger.info(
        "Starting Stock Charts API",
        environment=settings.environment,
        market_data_provider=settings.market_data_provider,
    )
    try:
        yield
    finally:
        logger.info("Stock Charts API shutdown complete")


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        contact=API_CONTACT,
        openapi_tags=OPENAPI_TAGS,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        debug=settings.debug,
        lifespan=lifespan,
        swagger_ui_parameters=get_swagger_ui_parameters() if settings.is_development else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidParameterError)
    async def invalid_parameter_handler(
        request: Request, exc: InvalidParameterError
    ) -> JSONResponse:
        """Translate invalid parameters raised outside route handlers into 400s."""
        logger.warning("Invalid parameter", path=str(request.url), detail=str(exc))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc)},
        )

    @app.exception_handler(MarketDataError)
    async def market_data_error_handler(request: Request, exc: MarketDataError) -> JSONResponse:
        """Report provider failures as 502 Bad Gateway."""
        logger.error("Market data provider failed", path=str(request.url), detail=str(exc))
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": f"Market data unavailable: {exc}"},
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler for unhandled exceptions.

        Args:
            request: The incoming request
            exc: The exception that occurred

        Returns:
            JSONResponse: Error response
        """
        logger.error(
            "Unhandled exception occurred",
            exc_info=exc,
            path=str(request.url),
            method=request.method,
        )

        if settings.is_development:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "Internal Server Error",
                    "detail": str(exc),
                    "type": type(exc).__name__,
                },
            )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal Server Error",
                "detail": "An unexpected error occurred",
            },
        )

    # Include routers
    app.include_router(health.router, prefix=settings.api_v1_prefix, tags=["health"])
    app.include_router(tools.router, prefix=settings.api_v1_prefix, tags=["tools"])
    app.include_router(
        charts.router, prefix=f"{settings.api_v1_prefix}/charts", tags=["charts"]
    )

    if settings.is_development:
        app.openapi = lambda: custom_openapi_schema(app)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Service banner with links.

        Returns:
            dict: Welcome message with links
        """
        return {
            "message": API_TITLE,
            "version": API_VERSION,
            "docs": "/docs" if settings.is_development else "disabled",
            "health": f"{settings.api_v1_prefix}/health",
        }

    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "stockcharts.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
