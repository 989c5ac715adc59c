"""FastAPI application entry point.

Loyverse Proxy - thin JSON proxy/aggregator for the Loyverse POS API.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from loyverse_proxy.routes import api_router
from loyverse_proxy.schemas import ErrorResponse
from loyverse_proxy.services.loyverse_client import (
    LoyverseError,
    UpstreamError,
    close_loyverse_client,
)
from loyverse_proxy.settings import get_settings

logger = logging.getLogger("uvicorn.error")

UPSTREAM_ERROR_MESSAGE = "Failed to fetch data from Loyverse API"

CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Content-Type", "Authorization"]

AVAILABLE_ENDPOINTS = (
    "/api/loyverse/data (comprehensive data)",
    "/api/loyverse/modifiers (modifiers only)",
    "/api/loyverse/modifier-groups (modifier groups)",
    "/api/loyverse/variants (items with variants)",
    "/api/loyverse/items (items, query forwarded)",
    "/api/loyverse/{endpoint} (generic proxy)",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    logger.info(f"Proxying {settings.loyverse_api_base} on http://{settings.host}:{settings.port}")
    logger.info("Available endpoints:")
    for endpoint in AVAILABLE_ENDPOINTS:
        logger.info(f"  - {endpoint}")

    yield

    # Shutdown
    await close_loyverse_client()


def _error(status_code: int, error: str, details: str | None = None, upstream_status: int | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details, upstream_status=upstream_status)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Proxy and aggregator for the Loyverse POS API",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Unexpected errors become JSON here, inside the CORS layer, so the 500
    # still carries CORS headers
    @app.middleware("http")
    async def catch_unhandled_errors(request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception("Unhandled error")
            return _error(500, "Internal server error", str(e))

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
    )

    # Every OPTIONS request (preflight or not) is answered with an empty 200.
    # Registered last so it is the outermost layer.
    @app.middleware("http")
    async def answer_options(request: Request, call_next) -> Response:
        if request.method == "OPTIONS":
            return Response(
                status_code=200,
                headers={
                    "Access-Control-Allow-Origin": "*",
                    "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
                    "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
                },
            )
        return await call_next(request)

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
        """Surface the upstream status; non-error statuses become 502."""
        status_code = exc.status_code if exc.status_code >= 400 else 502
        return _error(status_code, UPSTREAM_ERROR_MESSAGE, str(exc), exc.status_code)

    @app.exception_handler(LoyverseError)
    async def loyverse_error_handler(request: Request, exc: LoyverseError) -> JSONResponse:
        logger.error(f"Error fetching from Loyverse API: {exc}")
        return _error(500, UPSTREAM_ERROR_MESSAGE, str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return _error(404, "Not found")
        return _error(exc.status_code, str(exc.detail))

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    # Include API routes
    app.include_router(api_router)

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "loyverse_proxy.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
