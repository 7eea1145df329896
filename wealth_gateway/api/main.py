"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from wealth_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from wealth_gateway.api.v1 import advice, forecast, goals, recurring, snapshot
from wealth_gateway.infrastructure.observability.logging import setup_logging
from wealth_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Wealth Gateway",
        description="Financial snapshot, goal trajectory and net-worth forecasting service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(snapshot.router, prefix="/v1", tags=["snapshots"])
    app.include_router(forecast.router, prefix="/v1", tags=["forecasts"])
    app.include_router(goals.router, prefix="/v1", tags=["goals"])
    app.include_router(recurring.router, prefix="/v1", tags=["recurring"])
    app.include_router(advice.router, prefix="/v1", tags=["advice"])

    return app


app = create_app()
