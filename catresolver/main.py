"""Category resolver main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and exception handlers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from catresolver.api.categories import brands_router, page_types_router
from catresolver.api.categories import router as categories_router
from catresolver.api.health import router as health_router
from catresolver.api.middleware import setup_middleware
from catresolver.domain.exceptions import CatalogError
from catresolver.infrastructure.config import settings
from catresolver.infrastructure.log_config import configure_logging
from catresolver.infrastructure.search_client import SearchClientError

configure_logging(settings)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting category resolver",
        version=settings.api_version,
        debug=settings.debug,
        search_api_url=settings.search_api_url,
        platform_mode=settings.platform_mode,
    )

    yield

    logger.info("Shutting down category resolver")


app = FastAPI(
    title="Category Resolver",
    description="Resolves storefront category paths to search category IDs",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

setup_middleware(app)

app.include_router(health_router, tags=["Health"])
app.include_router(categories_router)
app.include_router(brands_router)
app.include_router(page_types_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


def _error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: list | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details or [],
            "request_id": getattr(request.state, "request_id", None),
        },
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    detail = exc.detail
    if isinstance(detail, dict):
        return _error_response(
            request,
            exc.status_code,
            detail.get("error_code", "ERROR"),
            detail.get("message", str(detail)),
            detail.get("details", []),
        )
    return _error_response(request, exc.status_code, "ERROR", str(detail))


@app.exception_handler(SearchClientError)
async def search_client_error_handler(
    request: Request, exc: SearchClientError
) -> JSONResponse:
    """Report an unavailable search backend."""
    logger.error(
        "Search backend unavailable",
        path=request.url.path,
        backend_path=exc.path,
        backend_status=exc.status_code,
        error=exc.message,
    )
    return _error_response(
        request,
        status.HTTP_502_BAD_GATEWAY,
        "SEARCH_BACKEND_UNAVAILABLE",
        "The search backend is unavailable",
    )


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Report invalid catalog input."""
    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "INVALID_CATEGORY_PATH",
        exc.message,
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions with consistent format."""
    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An internal error occurred",
    )
