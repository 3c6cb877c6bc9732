"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Easier to test (can create multiple instances)

2. Lifespan Events
   - startup: build the shared HTTP client, cache and search pipeline
   - shutdown: close the HTTP client once in-flight requests are done

3. Single Route
   - GET /search is the only endpoint
   - Every other path or method answers 405 with a JSON error body
   - OpenAPI/docs routes are disabled for the same reason

4. Exception Handlers
   - Routing errors become the service's own JSON error body
   - Anything unexpected becomes a 500 JSON body and is logged
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from booksearch.config import get_settings
from booksearch.exceptions import InternalError, MethodOrRouteError
from booksearch.routers import search_router
from booksearch.routers.search import UTF8JSONResponse
from booksearch.schemas.search import ErrorResponse
from booksearch.services.cache import ResponseCache
from booksearch.services.catalog_client import CatalogClient, create_http_client
from booksearch.services.pipeline import SearchPipeline

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> UTF8JSONResponse:
    """Build a JSON error response in the service's {"error": ...} shape."""
    return UTF8JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown

    The HTTP client is shared by every request for the life of the
    process; uvicorn lets accepted requests finish before shutdown
    reaches the code after yield.
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Books API: {settings.books_api_url}")

    http_client = create_http_client(settings)
    cache = ResponseCache()
    app.state.pipeline = SearchPipeline(
        client=CatalogClient(http_client, settings),
        cache=cache,
        debug=settings.debug,
    )

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}... (cache: {cache.stats()})")
    await http_client.aclose()


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="Searches the books API and ranks results by their descriptions.",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        # /search/ is a different path, not a redirect to /search
        redirect_slashes=False,
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Request Logging
    # -------------------------------------------------------------------------
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every request as METHOD URL -> status."""
        response = await call_next(request)
        logger.info(f"{request.method} {request.url} -> {response.status_code}")
        return response

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> UTF8JSONResponse:
        """
        Handle routing errors.

        Unknown paths (404) and wrong methods (405) both answer 405, so
        a client gets the same hint whichever part of the request is off.
        """
        if exc.status_code in (404, 405):
            error = MethodOrRouteError()
            return error_response(error.status_code, error.message)
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> UTF8JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug:
            return error_response(500, f"Error: {exc}")
        return error_response(500, InternalError.default_message)

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(search_router)

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn booksearch.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# This allows running the app directly with: python -m booksearch.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "booksearch.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
