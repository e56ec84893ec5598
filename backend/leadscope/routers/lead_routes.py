"""
Lead Routes - enrichment, scoring and placeholder prospecting
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from leadscope.config import Settings, settings as app_settings
from leadscope.database import get_db
from leadscope.models import Lead
from leadscope.schemas import (
    EnrichAllResponse,
    LeadEnrichResponse,
    LeadResponse,
    LeadScoreResponse,
    Priority,
    ProspectRequest,
)
from leadscope.services.batch_enrichment import BatchEnrichmentScheduler
from leadscope.services.enrichment_service import EnrichmentService
from leadscope.services.lead_service import (
    enrich_all_leads,
    enrich_and_score_lead,
    rescore_lead,
)
from leadscope.services.prospecting import LeadProspector

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/leads", tags=["Leads"])


# ============================================================================
# DEPENDENCIES
# ============================================================================

def get_settings() -> Settings:
    return app_settings


def get_enrichment_service(request: Request) -> EnrichmentService:
    """Coordinator built at startup and kept on app.state"""
    service = getattr(request.app.state, "enrichment_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Enrichment service not initialized")
    return service


def get_prospector() -> LeadProspector:
    return LeadProspector()


async def _get_lead_or_404(db: AsyncSession, lead_id: int) -> Lead:
    lead = await db.get(Lead, lead_id)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead


# ============================================================================
# LIST / GET
# ============================================================================

@router.get("", response_model=List[LeadResponse])
async def list_leads(
    priority: Optional[Priority] = None,
    limit: int = Query(100, ge=1, le=1000),
    skip: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    """List leads, highest score first"""
    stmt = select(Lead).order_by(Lead.score.desc(), Lead.id)
    if priority:
        stmt = stmt.where(Lead.priority == priority.value)

    result = await db.execute(stmt.offset(skip).limit(limit))
    return result.scalars().all()


@router.get("/{lead_id}", response_model=LeadResponse)
async def get_lead(lead_id: int, db: AsyncSession = Depends(get_db)):
    """Get single lead"""
    return await _get_lead_or_404(db, lead_id)


# ============================================================================
# SCORING
# ============================================================================

@router.post("/{lead_id}/score", response_model=LeadScoreResponse)
async def score_lead_route(
    lead_id: int,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Rescore a lead from its fields and stored profile, with the per-feature breakdown"""
    lead = await _get_lead_or_404(db, lead_id)

    breakdown = rescore_lead(lead, settings.SCORING_STRATEGY)
    await db.commit()
    await db.refresh(lead)

    return LeadScoreResponse(lead=LeadResponse.model_validate(lead), breakdown=breakdown)


# ============================================================================
# ENRICHMENT
# ============================================================================

@router.post("/enrich-all", response_model=EnrichAllResponse)
async def enrich_all(
    db: AsyncSession = Depends(get_db),
    service: EnrichmentService = Depends(get_enrichment_service),
    settings: Settings = Depends(get_settings),
):
    """
    Enrich and rescore every lead in paced windows.

    Individual source or lead failures only lower data quality; only a
    scheduler-level failure (e.g. misconfiguration) becomes a 500.
    """
    try:
        scheduler = BatchEnrichmentScheduler(
            service,
            window_size=settings.BATCH_WINDOW_SIZE,
            pacing_delay=settings.BATCH_PACING_SECONDS,
        )
        enriched_count = await enrich_all_leads(db, scheduler, settings.SCORING_STRATEGY)
    except Exception as e:
        logger.error(f"❌ Batch enrichment failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Batch enrichment failed: {e}")

    return EnrichAllResponse(enriched_count=enriched_count)


@router.post("/{lead_id}/enrich", response_model=LeadEnrichResponse)
async def enrich_lead(
    lead_id: int,
    db: AsyncSession = Depends(get_db),
    service: EnrichmentService = Depends(get_enrichment_service),
    settings: Settings = Depends(get_settings),
):
    """Enrich one lead from every source, rescore it and return the updated record"""
    lead = await _get_lead_or_404(db, lead_id)

    profile = await enrich_and_score_lead(lead, service, settings.SCORING_STRATEGY)
    await db.commit()
    await db.refresh(lead)

    response = LeadEnrichResponse.model_validate(lead)
    response.profile = profile
    return response


# ============================================================================
# PROSPECTING (placeholder data)
# ============================================================================

@router.post("/prospect", response_model=List[LeadResponse])
async def prospect_leads(
    request: ProspectRequest,
    db: AsyncSession = Depends(get_db),
    prospector: LeadProspector = Depends(get_prospector),
    settings: Settings = Depends(get_settings),
):
    """Create placeholder demo leads for an industry, scored on insert"""
    created = []
    for candidate in prospector.prospect(request.industry, request.limit):
        lead = Lead(**candidate.model_dump())
        rescore_lead(lead, settings.SCORING_STRATEGY)
        db.add(lead)
        created.append(lead)

    await db.commit()
    for lead in created:
        await db.refresh(lead)

    logger.info(f"Created {len(created)} prospected leads for '{request.industry}'")
    return created
