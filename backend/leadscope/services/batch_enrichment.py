# backend/leadscope/services/batch_enrichment.py
"""
Batch enrichment - windowed fan-outs with pacing between windows
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from leadscope.schemas.enrichment import EnrichedProfile
from leadscope.services.enrichment_service import EnrichmentService

logger = logging.getLogger(__name__)

WindowCallback = Callable[[int, int, Dict[Any, EnrichedProfile]], Awaitable[None]]


def _lead_value(lead: Any, name: str) -> Any:
    if isinstance(lead, dict):
        return lead.get(name)
    return getattr(lead, name, None)


class BatchEnrichmentScheduler:
    """
    Enrich many leads in fixed-size windows.

    Every fan-out in a window runs concurrently; the next window starts
    only after the current one has fully settled and the pacing delay
    has elapsed. No delay after the last window.
    """

    def __init__(
        self,
        service: EnrichmentService,
        window_size: int = 5,
        pacing_delay: float = 1.0,
        on_window_complete: Optional[WindowCallback] = None,
    ):
        """
        Args:
            service: Fan-out coordinator
            window_size: Leads enriched concurrently per window
            pacing_delay: Seconds to wait between windows
            on_window_complete: Optional async callback(window_num, total_windows, window_results)

        Raises:
            ValueError: window_size < 1 or negative pacing_delay
        """
        if window_size < 1:
            raise ValueError(f"window_size must be >= 1, got {window_size}")
        if pacing_delay < 0:
            raise ValueError(f"pacing_delay must be >= 0, got {pacing_delay}")

        self.service = service
        self.window_size = window_size
        self.pacing_delay = pacing_delay
        self.on_window_complete = on_window_complete

        self.windows_processed = 0
        self.leads_processed = 0
        self.max_concurrency = 0
        self._in_flight = 0

    async def _enrich_one(self, lead: Any) -> EnrichedProfile:
        self._in_flight += 1
        self.max_concurrency = max(self.max_concurrency, self._in_flight)
        try:
            return await self.service.enrich_company(
                _lead_value(lead, "company_name") or "",
                _lead_value(lead, "website"),
            )
        finally:
            self._in_flight -= 1

    async def enrich_batch(self, leads: List[Any]) -> Dict[Any, EnrichedProfile]:
        """
        Enrich every lead.

        Returns:
            lead id -> profile. A lead whose fan-out blew up still gets an
            entry (an empty, low-quality profile).
        """
        total = len(leads)
        total_windows = (total + self.window_size - 1) // self.window_size
        results: Dict[Any, EnrichedProfile] = {}

        for start in range(0, total, self.window_size):
            window = leads[start:start + self.window_size]
            window_num = (start // self.window_size) + 1

            logger.info(
                f"📦 Processing window {window_num}/{total_windows} "
                f"({len(window)} leads, total: {self.leads_processed + len(window)}/{total})"
            )

            outcomes = await asyncio.gather(
                *(self._enrich_one(lead) for lead in window),
                return_exceptions=True,
            )

            window_results: Dict[Any, EnrichedProfile] = {}
            for lead, outcome in zip(window, outcomes):
                lead_id = _lead_value(lead, "id")
                if isinstance(outcome, EnrichedProfile):
                    profile = outcome
                else:
                    if isinstance(outcome, asyncio.CancelledError):
                        raise outcome
                    logger.error(f"Enrichment failed for lead {lead_id}: {outcome!r}")
                    profile = EnrichedProfile()

                if lead_id in results:
                    logger.warning(f"Duplicate lead id {lead_id} in batch, keeping first result")
                    continue
                results[lead_id] = profile
                window_results[lead_id] = profile

            self.leads_processed += len(window)
            self.windows_processed += 1

            if self.on_window_complete:
                await self.on_window_complete(window_num, total_windows, window_results)

            # Wait before next window (except after the last)
            if start + self.window_size < total:
                logger.info(
                    f"⏸️  Window {window_num} complete. "
                    f"Waiting {self.pacing_delay}s before next window..."
                )
                await asyncio.sleep(self.pacing_delay)

        logger.info(
            f"✅ All windows processed: {self.windows_processed} windows, "
            f"{self.leads_processed} leads"
        )
        return results

    def get_stats(self) -> Dict[str, int]:
        return {
            "windows_processed": self.windows_processed,
            "leads_processed": self.leads_processed,
            "max_concurrency": self.max_concurrency,
        }
