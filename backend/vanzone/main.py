"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from vanzone import __version__
from vanzone.config import get_settings
from vanzone.database import close_db, init_db
from vanzone.exceptions import ErrorKind, VanzoneError
from vanzone.routers import (
    discovery_router,
    health_router,
    metrics_router,
    profiles_router,
    skills_router,
)

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_COORDINATE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.INVALID_PARAMETER: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.NOT_AUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Starting Vanzone...")

    await init_db()
    logger.info("Database initialized")

    yield

    # Shutdown
    logger.info("Shutting down Vanzone...")
    await close_db()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Vanzone",
    description="Location-privacy and nearby discovery service for van-dwellers",
    version=__version__,
    lifespan=lifespan,
)

# Session cookie carries the user id issued by the authentication service
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    max_age=86400,  # 24 hours
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(VanzoneError)
async def vanzone_error_handler(request: Request, exc: VanzoneError) -> JSONResponse:
    """Translate domain errors into HTTP responses."""
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if exc.kind == ErrorKind.STORE_UNAVAILABLE:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "kind": str(exc.kind)},
    )


# Include routers
app.include_router(health_router)
app.include_router(metrics_router)
app.include_router(skills_router)
app.include_router(profiles_router)
app.include_router(discovery_router)


@app.get("/")
async def root():
    """Root endpoint - shows API info."""
    return {
        "name": "Vanzone",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics",
    }
