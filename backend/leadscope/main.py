"""Main FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

import httpx

from leadscope import __version__
from leadscope.config import settings
from leadscope.database import Base, init_models
from leadscope.routers import lead_routes
from leadscope.scheduler import start_scheduler, stop_scheduler
from leadscope.services.enrichment_service import create_enrichment_service
from leadscope.services.scoring import get_strategy

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="LeadScope Enrichment & Scoring API",
    description="Multi-source company enrichment and weighted lead scoring",
    version=__version__,
    redirect_slashes=False
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(lead_routes.router)


# ============================================
# HEALTH & ROOT ENDPOINTS
# ============================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    service = getattr(app.state, "enrichment_service", None)
    return {
        "status": "healthy",
        "version": __version__,
        "environment": settings.ENVIRONMENT,
        "enrichment_mode": "simulated" if settings.simulated else "live",
        "scoring_strategy": settings.SCORING_STRATEGY,
        "sources": service.get_source_status() if service else {},
        "registered_tables": list(Base.metadata.tables.keys()),
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "LeadScope Enrichment & Scoring API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


# ============================================
# STARTUP & SHUTDOWN
# ============================================

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info("Starting LeadScope API...")
    logger.info("=" * 50)

    # Fail fast on an unknown or malformed scoring table
    strategy = get_strategy(settings.SCORING_STRATEGY)
    logger.info(f"Scoring strategy: {strategy.name} {strategy.weights}")

    await init_models()

    app.state.http_client = httpx.AsyncClient(
        timeout=settings.SOURCE_TIMEOUT_SECONDS,
        headers={"User-Agent": settings.USER_AGENT},
    )
    app.state.enrichment_service = create_enrichment_service(app.state.http_client, settings)

    if settings.ENABLE_SCHEDULED_ENRICHMENT:
        start_scheduler(app.state.enrichment_service)

    logger.info("=" * 50)
    logger.info("Application started successfully!")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    logger.info("Shutting down LeadScope API...")
    stop_scheduler()

    client = getattr(app.state, "http_client", None)
    if client is not None:
        await client.aclose()
