"""FastAPI application factory"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from brokerage_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from brokerage_gateway.api.v1 import gross_profit, portfolio, market
from brokerage_gateway.infrastructure.observability.logging import setup_logging
from brokerage_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Brokerage Gateway",
        description="Commission and gross profit engine for real estate deals",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        request_id = getattr(request.state, "request_id", "unknown")
        logging.error(f"Unexpected error: {exc}", extra={"request_id": request_id})
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(gross_profit.router, prefix="/v1", tags=["gross-profit"])
    app.include_router(portfolio.router, prefix="/v1", tags=["portfolio"])
    app.include_router(market.router, prefix="/v1", tags=["market"])

    return app


app = create_app()
