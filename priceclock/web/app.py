"""FastAPI application for PriceClock."""

from __future__ import annotations

from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.middleware.base import BaseHTTPMiddleware

from priceclock import __version__
from priceclock.config import get_config
from priceclock.core.logging import configure_logging
from priceclock.ingestion.sources import iter_file_lines
from priceclock.web.dependencies import get_price_service
from priceclock.web.routes import health, prices

# Initialize structured logging
configure_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the bootstrap offer batch, if configured, before serving."""
    bootstrap = get_config().ingestion.bootstrap_file
    if bootstrap is not None:
        result = get_price_service().replace(iter_file_lines(bootstrap))
        if not result.success:
            logger.error("bootstrap_failed", path=str(bootstrap), **(result.error_details or {}))
            raise RuntimeError(f"Bootstrap offer file rejected: {result.message}")
        logger.info("bootstrap_loaded", path=str(bootstrap), offers=result.offers_loaded)
    yield


app = FastAPI(
    title="PriceClock",
    description="Point-in-time price lookups over time-bounded offers",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# Request Logging Middleware
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        structlog.contextvars.clear_contextvars()

        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        structlog.contextvars.bind_contextvars(request_id=request_id)

        logger.info(
            "request_started",
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)

            logger.info(
                "request_completed",
                status_code=response.status_code,
            )
            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as exc:
            logger.error("request_failed", error=str(exc))
            raise


app.add_middleware(RequestLoggingMiddleware)

# Prometheus Metrics
Instrumentator().instrument(app).expose(app)

# Include Routers
app.include_router(health.router)
app.include_router(prices.router)
