"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from credit_gateway.api.errors import register_exception_handlers
from credit_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from credit_gateway.api.v1 import evaluation, evaluation_logs
from credit_gateway.infrastructure.observability.logging import setup_logging
from credit_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Credit Gateway",
        description="Credit evaluation and loan terms service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(evaluation.router, prefix="/v1", tags=["credit-evaluation"])
    app.include_router(evaluation_logs.router, prefix="/v1", tags=["audit"])

    return app


app = create_app()
