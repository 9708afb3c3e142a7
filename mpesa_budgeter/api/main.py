"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from mpesa_budgeter.api.middleware import RequestIDMiddleware, MetricsMiddleware
from mpesa_budgeter.api.v1 import analytics, messages
from mpesa_budgeter.infrastructure.observability.logging import setup_logging
from mpesa_budgeter.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="M-PESA Budgeter",
        description="Confirmation SMS parsing and budget analytics",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(messages.router, prefix="/v1", tags=["messages"])
    app.include_router(analytics.router, prefix="/v1", tags=["analytics"])

    return app


app = create_app()
