# backend/leadscope/services/enrichment_service.py
"""
Lead Enrichment Service - Multi-Source Fan-out

All registered adapters run concurrently for one company; each result is
tagged with its logical source's reliability weight and adapters sharing a
logical source are folded into one SourceResult before fusion.
"""

import asyncio
import logging
from collections import OrderedDict
from typing import Dict, List, Optional

import httpx

from leadscope.schemas.enrichment import EnrichedProfile, SourceResult, SourceStatus
from leadscope.services.fusion import fuse, merge_payloads
from leadscope.sources import SourceAdapter, RELIABILITY_WEIGHTS, build_adapters

logger = logging.getLogger(__name__)


def fold_results(results: List[SourceResult]) -> List[SourceResult]:
    """
    Combine adapter results sharing a source_id into one result per logical source.

    Ok if any adapter under it was ok; otherwise error if any adapter
    errored, else unavailable.
    """
    grouped: "OrderedDict[str, List[SourceResult]]" = OrderedDict()
    for result in results:
        grouped.setdefault(result.source_id, []).append(result)

    folded = []
    for source_id, group in grouped.items():
        if len(group) == 1:
            folded.append(group[0])
            continue

        adapters = [name for r in group for name in r.adapters]
        weight = max(r.reliability_weight for r in group)
        simulated = any(r.simulated for r in group)
        ok = [r for r in group if r.status == SourceStatus.OK]

        if ok:
            folded.append(SourceResult.success(
                source_id, weight, merge_payloads([r.payload for r in ok]),
                simulated=simulated, adapters=adapters,
            ))
            continue

        reasons = "; ".join(f"{r.adapters[0] if r.adapters else source_id}: {r.reason}" for r in group)
        if any(r.status == SourceStatus.ERROR for r in group):
            folded.append(SourceResult.error(source_id, weight, reasons, simulated=simulated, adapters=adapters))
        else:
            folded.append(SourceResult.unavailable(source_id, weight, reasons, simulated=simulated, adapters=adapters))

    return folded


class EnrichmentService:
    """
    Multi-source enrichment orchestration

    Fan-out:
    1. Crunchbase - funding, categories, headcount (0.95)
    2. LinkedIn - industry, size, HQ (0.90)
    3. GitHub - tech stack from repositories (0.80)
    4. Google - SerpApi search + website + technology + news (0.70)
    """

    def __init__(self, adapters: List[SourceAdapter]):
        self.adapters = list(adapters)

        modes = {adapter.simulated for adapter in self.adapters}
        if len(modes) > 1:
            raise ValueError("Adapters must all be live or all be simulated")
        self.simulated = modes == {True}

        enabled = [a.name for a in self.adapters if a.simulated or a.is_configured]
        mode = "simulated" if self.simulated else "live"
        logger.info(f"Enrichment providers enabled ({mode}): {', '.join(enabled) or 'None'}")

    async def _run_adapter(self, adapter: SourceAdapter, company_name: str, domain: Optional[str]) -> SourceResult:
        return await adapter.fetch(company_name, domain)

    async def enrich(self, company_name: str, domain: Optional[str] = None) -> List[SourceResult]:
        """
        Query every adapter concurrently and wait for all to settle.

        One adapter's failure never cancels or blanks the others.
        """
        logger.info(f"Starting multi-source enrichment for: {company_name}")

        settled = await asyncio.gather(
            *(self._run_adapter(adapter, company_name, domain) for adapter in self.adapters),
            return_exceptions=True,
        )

        results: List[SourceResult] = []
        for adapter, outcome in zip(self.adapters, settled):
            if isinstance(outcome, SourceResult):
                results.append(outcome)
                continue

            if isinstance(outcome, asyncio.CancelledError):
                raise outcome

            # Adapters convert their own failures; anything reaching here is a bug in one of them
            logger.error(f"{adapter.name} raised for {company_name}: {outcome!r}")
            results.append(SourceResult.error(
                adapter.source_id,
                RELIABILITY_WEIGHTS.get(adapter.source_id, 0.0),
                f"unexpected error: {type(outcome).__name__}",
                adapters=[adapter.name],
            ))

        return fold_results(results)

    async def enrich_company(self, company_name: str, domain: Optional[str] = None) -> EnrichedProfile:
        """Fan out and fuse into one profile."""
        results = await self.enrich(company_name, domain)
        profile = fuse(results)

        logger.info(
            f"✅ Enrichment complete for {company_name}: "
            f"{len(profile.contributing_sources)}/{len(results)} sources, "
            f"score={profile.enrichment_score}, quality={profile.data_quality.value}"
        )
        return profile

    def get_source_status(self) -> Dict[str, Dict[str, object]]:
        """Per-adapter configuration summary."""
        return {
            adapter.name: {
                "source": adapter.source_id,
                "weight": adapter.weight,
                "configured": adapter.is_configured,
                "simulated": adapter.simulated,
            }
            for adapter in self.adapters
        }


def create_enrichment_service(client: Optional[httpx.AsyncClient], settings) -> EnrichmentService:
    """
    Factory function to create enrichment service.

    The HTTP client's lifecycle belongs to the caller.
    """
    return EnrichmentService(build_adapters(client, settings))
