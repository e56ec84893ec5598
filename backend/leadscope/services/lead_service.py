# backend/leadscope/services/lead_service.py
"""
Lead store write-back: apply fused profiles and scores to Lead records.

The engine never creates or deletes leads here; it only updates the
enrichment-derived and scoring fields of existing records.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from leadscope.models import Lead
from leadscope.schemas.enrichment import EnrichedProfile
from leadscope.schemas.lead import ScoreBreakdown
from leadscope.services.batch_enrichment import BatchEnrichmentScheduler
from leadscope.services.enrichment_service import EnrichmentService
from leadscope.services.scoring import score_breakdown
from leadscope.sources.parsing import employee_range

logger = logging.getLogger(__name__)


def stored_profile(lead: Lead) -> Optional[EnrichedProfile]:
    """The last fused profile saved on the lead, if any."""
    if not lead.enrichment_data:
        return None
    return EnrichedProfile.model_validate(lead.enrichment_data)


def apply_profile(lead: Lead, profile: EnrichedProfile) -> Lead:
    """
    Write profile-derived fields onto the lead.

    Employee count, size bucket, location, website and funding label are
    overwritten when the profile has them; industry is only filled when
    empty; tech stack is unioned. enrichment_data is replaced wholesale.
    """
    if profile.employee_count:
        lead.employee_count = profile.employee_count
        lead.company_size = employee_range(profile.employee_count)
    if profile.headquarters:
        lead.location = profile.headquarters
    if profile.website:
        lead.website = profile.website
    if profile.funding_stage:
        lead.funding_info = profile.funding_stage
    if profile.industry and not lead.industry:
        lead.industry = profile.industry

    if profile.tech_stack:
        tech_stack = list(lead.tech_stack or [])
        seen = {t.lower() for t in tech_stack}
        for tech in profile.tech_stack:
            if tech.lower() not in seen:
                seen.add(tech.lower())
                tech_stack.append(tech)
        lead.tech_stack = tech_stack

    lead.enrichment_data = profile.model_dump(mode="json")
    lead.is_enriched = bool(profile.contributing_sources)
    lead.enriched_at = datetime.now(timezone.utc)
    return lead


def rescore_lead(lead: Lead, strategy: str = "weighted", profile: Optional[EnrichedProfile] = None) -> ScoreBreakdown:
    """Recompute score and priority from the lead and its (stored) profile."""
    if profile is None:
        profile = stored_profile(lead)

    breakdown = score_breakdown(lead, profile, strategy)
    lead.score = breakdown.total_score
    lead.priority = breakdown.priority.value
    return breakdown


async def enrich_and_score_lead(lead: Lead, service: EnrichmentService, strategy: str = "weighted") -> EnrichedProfile:
    """Enrich one lead, apply the profile and rescore. Does not commit."""
    profile = await service.enrich_company(lead.company_name, lead.website)
    apply_profile(lead, profile)
    rescore_lead(lead, strategy, profile)

    logger.info(
        f"Lead {lead.id} ({lead.company_name}): score={lead.score} priority={lead.priority} "
        f"quality={profile.data_quality.value}"
    )
    return profile


async def enrich_all_leads(
    db: AsyncSession,
    scheduler: BatchEnrichmentScheduler,
    strategy: str = "weighted",
) -> int:
    """
    Run the batch scheduler over every lead and persist the results.

    Returns:
        Number of leads that ended up with at least one contributing source
    """
    result = await db.execute(select(Lead).order_by(Lead.id))
    leads: List[Lead] = list(result.scalars().all())

    if not leads:
        logger.info("No leads to enrich")
        return 0

    profiles = await scheduler.enrich_batch(leads)

    enriched_count = 0
    for lead in leads:
        profile = profiles.get(lead.id)
        if profile is None:
            continue
        apply_profile(lead, profile)
        rescore_lead(lead, strategy, profile)
        if lead.is_enriched:
            enriched_count += 1

    await db.commit()

    logger.info(f"✅ Enriched {enriched_count}/{len(leads)} leads")
    return enriched_count

