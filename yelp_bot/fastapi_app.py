"""
FastAPI Application Factory.
Creates and configures the FastAPI application with routers, middleware, and DI.
"""

import logging
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from yelp_bot.adapters.watson_work.workspace_routes import router as webhook_router
from yelp_bot.config.logging_config import (
    NO_CORRELATION_ID,
    correlation_id_var,
    setup_logging,
)
from yelp_bot.config.settings import Config
from yelp_bot.presentation.api import metrics_router
from yelp_bot.setup.ioc.container import create_container

logger = logging.getLogger(__name__)

ALIVE_MESSAGE = "Watson Work Yelp bot is alive and happy!"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and set correlation ID from request headers."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID", NO_CORRELATION_ID)

        # Set in contextvars (propagates to background tasks and logging)
        correlation_id_var.set(correlation_id)

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


def create_fastapi_app(container: AsyncContainer | None = None) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        container: Dishka container to resolve dependencies from. Defaults to
            one built from AppProvider; tests pass their own.

    Returns:
        FastAPI application instance
    """
    setup_logging(Config.LOG_LEVEL, Config.LOG_PATH)
    container = container or create_container()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Yelp bot started, listening for Watson Work events.")
        yield
        # Closes the shared HTTP client
        await container.close()
        logger.info("Yelp bot shutdown. DI container closed.")

    app = FastAPI(
        title="Watson Work Yelp Bot",
        description="Finds nearby restaurants for Watson Work spaces",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Setup Dishka BEFORE app starts (must add middleware before startup)
    setup_dishka(container, app)

    app.add_middleware(CorrelationIdMiddleware)

    # Validation error handler - shows detailed Pydantic errors
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning("[VALIDATION ERROR] %s", errors)
        return JSONResponse(
            status_code=400,
            content={"error": "Validation error", "details": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning("[HTTP ERROR %s] %s", exc.status_code, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("[GLOBAL ERROR] %s: %s", type(exc).__name__, exc)
        return JSONResponse(
            status_code=500,
            content={"error": f"Internal server error: {str(exc)}"},
        )

    # Health check routes
    @app.get("/", tags=["health"], response_class=PlainTextResponse)
    async def root():
        return ALIVE_MESSAGE

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy"}

    app.include_router(webhook_router)  # POST /webhook
    if Config.METRICS_ENABLED:
        app.include_router(metrics_router)  # GET /metrics

    return app
