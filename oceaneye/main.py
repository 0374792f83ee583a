"""
Main FastAPI application for the OceanEye identification service.

This is the entry point for the application.
Run with: uvicorn oceaneye.main:app --reload
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from oceaneye import config
from oceaneye.api import identify_router
from oceaneye.models.schemas import HealthResponse
from oceaneye.services.identifier import Identifier, get_identifier, reset_identifier
from oceaneye.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown.
    """
    # Startup
    logger.info("Starting OceanEye identification service...")
    logger.info(f"Records URL: {config.RECORDS_URL}")
    logger.info(f"Request timeout: {config.REQUEST_TIMEOUT}s")

    yield

    # Shutdown
    logger.info("Shutting down OceanEye identification service...")
    reset_identifier()


# Create FastAPI application
app = FastAPI(
    title="OceanEye",
    description="""
    Identify a fish from a photo.

    ## Features
    - Upload a photo; it is re-encoded to PNG and hashed with SHA256
    - The digest is matched exactly against the species record document
    - Results carry an explicit status: found, not_found, or an error kind
    - Failures say whether to retake the photo or retry the network
    """,
    version="0.1.0",
    lifespan=lifespan
)

# Add CORS middleware for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(identify_router)


@app.get("/health", response_model=HealthResponse)
async def health_check(identifier: Identifier = Depends(get_identifier)):
    """Service health and lookup configuration."""
    return HealthResponse(
        status="healthy",
        records_url=identifier.resolver.records_url,
        request_timeout=identifier.resolver.timeout,
        identifying=identifier.is_identifying
    )
