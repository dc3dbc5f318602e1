"""
Bathymetric Contour API

FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes import contours_router
from src.application.dtos import HealthResponse
from src.infrastructure.config import get_settings
from src.infrastructure.database import dispose_engines


VERSION = "0.1.0"

settings = get_settings()

logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if settings.log_format == "json" else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting Bathymetric Contour API", version=VERSION)
    yield
    # Shutdown
    await dispose_engines()
    logger.info("Shutting down Bathymetric Contour API")


# Create FastAPI app
app = FastAPI(
    title="Bathymetric Contour API",
    description="""
    **Depth contour generation for river cross-section surveys**

    Turns scattered depth soundings into isobath line features.

    ## Pipeline

    1. **Validation**: drops non-finite depths, requires at least 3 soundings
    2. **Level selection**: stepped levels at the requested interval, or a single level for homogeneous surveys
    3. **Interpolation**: inverse-distance-weighted grid over the survey extent
    4. **Tracing**: marching-squares isolines at every level
    5. **Fallback**: an approximate ring around the survey centroid when no line can be traced
    """,
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    redirect_slashes=False,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Health check endpoint
@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Returns the current status of the API.
    """
    return HealthResponse(
        status="healthy",
        version=VERSION,
        database="configured",
        timestamp=datetime.utcnow(),
    )


# Include routers
app.include_router(contours_router, prefix="/api/v1")


# Root endpoint
@app.get("/", tags=["root"])
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Bathymetric Contour API",
        "version": VERSION,
        "description": "Depth contour generation for river cross-section surveys",
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
