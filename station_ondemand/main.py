"""On-demand catalog service main application."""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from .shared.health import router as health_router
from .shared.metrics import METRICS_CONTENT_TYPE, get_metrics
from .shared.error_handler import register_exception_handlers
from .shared.correlation import CorrelationIDMiddleware
from .shared.logging import configure_logging, get_logger
from .shared.settings import app_settings
from .shared.db import engine

from .api.ondemand import router as ondemand_router

# Configure logging
configure_logging(log_level=app_settings.log_level, log_format=app_settings.log_format)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(
        "ondemand_service_started",
        version=app_settings.app_version,
        search_backend="meilisearch" if app_settings.search_configured else "database",
    )
    
    yield
    
    logger.info("ondemand_service_shutting_down")
    await engine.dispose()
    logger.info("ondemand_service_shutdown")


# Create FastAPI app
app = FastAPI(
    title="Station On-Demand Catalog Service",
    version=app_settings.app_version,
    description="On-demand media listing and downloads for stations",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Correlation ID middleware
app.add_middleware(CorrelationIDMiddleware)

# Register all exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(health_router)
app.include_router(ondemand_router, prefix=app_settings.api_prefix)

# Prometheus metrics endpoint
@app.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(content=get_metrics(), media_type=METRICS_CONTENT_TYPE)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8004)
