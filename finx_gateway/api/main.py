"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from finx_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from finx_gateway.api.v1 import achievements, advisor, analysis, calculators, simulate, snapshot
from finx_gateway.infrastructure.database.session import init_db
from finx_gateway.infrastructure.observability.logging import setup_logging
from finx_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="FinX Gateway",
        description="Personal finance health score, projections, and what-if simulation",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
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
    app.include_router(snapshot.router, prefix="/v1", tags=["snapshot"])
    app.include_router(analysis.router, prefix="/v1", tags=["analysis"])
    app.include_router(simulate.router, prefix="/v1", tags=["simulator"])
    app.include_router(calculators.router, prefix="/v1", tags=["calculators"])
    app.include_router(achievements.router, prefix="/v1", tags=["achievements"])
    app.include_router(advisor.router, prefix="/v1", tags=["advisor"])

    return app


app = create_app()
