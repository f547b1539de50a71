"""
FastAPI Delivery Analytics API.

Provides read-only delivery and zone analytics for dashboards and reporting.
"""

import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from google.cloud import bigquery
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from src import __version__
from src.api.routers import deliveries, zones
from src.common.config_loader import get_config
from src.common.exceptions import AnalyticsError, InvalidFilterError, NotFoundError, StorageError
from src.common.logging_utils import get_logger, setup_logging
from src.common.metrics import MetricsClient

logger = get_logger(__name__)

config = get_config()
ENVIRONMENT = config.environment


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    setup_logging(
        service_name="delivery-analytics-api",
        log_level=config.log_level,
        use_json=ENVIRONMENT != "dev",
    )
    logger.info(f"Starting Delivery Analytics API in {ENVIRONMENT} environment")

    app.state.bq_client = bigquery.Client(project=config.gcp.project_id)
    logger.info("BigQuery client initialized", dataset=config.bigquery.curated_dataset)

    if config.monitoring.enabled:
        app.state.metrics_client = MetricsClient(config.gcp.project_id, ENVIRONMENT)

    yield

    metrics_client = getattr(app.state, "metrics_client", None)
    if metrics_client:
        metrics_client.close()
    app.state.bq_client.close()
    app.state.bq_client = None
    logger.info("Delivery Analytics API shutdown complete")


app = FastAPI(
    title="Delivery Analytics API",
    description="Read-only API for delivery and zone analytics",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if ENVIRONMENT == "dev" else None,
    redoc_url="/redoc" if ENVIRONMENT == "dev" else None,
)
app.state.config = config

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.api.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(deliveries.router, prefix="/api/v1/deliveries", tags=["Deliveries"])
app.include_router(zones.router, prefix="/api/v1/zones", tags=["Zones"])


# Every error leaves the API as {"error": "<message>"}

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse({"error": f"Invalid request: {problems}"}, status_code=422)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse({"error": str(exc)}, status_code=404)


@app.exception_handler(InvalidFilterError)
async def invalid_filter_handler(request: Request, exc: InvalidFilterError):
    return JSONResponse({"error": str(exc)}, status_code=422)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.exception(f"Unhandled storage failure: {exc}", exc_info=exc, path=request.url.path)
    return JSONResponse({"error": "Storage unavailable"}, status_code=500)


@app.exception_handler(AnalyticsError)
async def analytics_error_handler(request: Request, exc: AnalyticsError):
    logger.error(f"Unhandled analytics error: {exc}", path=request.url.path)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


# Health and info endpoints

class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    environment: str
    timestamp: datetime


class InfoResponse(BaseModel):
    """API info response."""
    name: str
    version: str
    environment: str


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint for load balancers."""
    return HealthResponse(
        status="healthy",
        environment=ENVIRONMENT,
        timestamp=datetime.now(timezone.utc),
    )


@app.get("/", response_model=InfoResponse)
async def root():
    """API root endpoint."""
    return InfoResponse(
        name="Delivery Analytics API",
        version=__version__,
        environment=ENVIRONMENT,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.api.main:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", 8080)),
        reload=ENVIRONMENT == "dev",
    )
