# tests/services/test_batch_enrichment.py
"""
Tests for windowed batch enrichment

Run with: pytest tests/services/test_batch_enrichment.py -v
"""

import asyncio
import pytest
from unittest.mock import AsyncMock, patch

from leadscope.schemas.enrichment import DataQuality, EnrichedProfile
from leadscope.services.batch_enrichment import BatchEnrichmentScheduler


class RecordingService:
    """Fake coordinator that records concurrency and call order."""

    def __init__(self, delay: float = 0.01, fail_for=()):
        self.delay = delay
        self.fail_for = set(fail_for)
        self.in_flight = 0
        self.peak = 0
        self.calls = []

    async def enrich_company(self, company_name, domain=None):
        self.calls.append(company_name)
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if company_name in self.fail_for:
                raise RuntimeError(f"fan-out blew up for {company_name}")
            return EnrichedProfile(
                description=company_name,
                contributing_sources=["linkedin"],
                enrichment_score=90,
            )
        finally:
            self.in_flight -= 1


def _leads(n):
    return [{"id": i, "company_name": f"Company {i}", "website": f"c{i}.com"} for i in range(1, n + 1)]


# ============================================================================
# TEST: Windowing
# ============================================================================

class TestWindowing:

    @pytest.mark.asyncio
    async def test_twelve_leads_window_five(self):
        service = RecordingService()
        windows = []

        async def on_window(num, total, results):
            windows.append((num, total, len(results)))

        scheduler = BatchEnrichmentScheduler(service, window_size=5, pacing_delay=0, on_window_complete=on_window)

        results = await scheduler.enrich_batch(_leads(12))

        assert windows == [(1, 3, 5), (2, 3, 5), (3, 3, 2)]
        assert service.peak <= 5
        assert scheduler.get_stats() == {
            "windows_processed": 3,
            "leads_processed": 12,
            "max_concurrency": 5,
        }
        assert sorted(results) == list(range(1, 13))

    @pytest.mark.asyncio
    async def test_windows_run_in_order(self):
        service = RecordingService()
        scheduler = BatchEnrichmentScheduler(service, window_size=5, pacing_delay=0)

        await scheduler.enrich_batch(_leads(12))

        first_window = set(service.calls[:5])
        assert first_window == {f"Company {i}" for i in range(1, 6)}
        assert set(service.calls[10:]) == {"Company 11", "Company 12"}

    @pytest.mark.asyncio
    async def test_pacing_between_windows_only(self):
        scheduler = BatchEnrichmentScheduler(RecordingService(delay=0), window_size=5, pacing_delay=1.5)

        with patch("leadscope.services.batch_enrichment.asyncio.sleep", new=AsyncMock()) as sleep:
            await scheduler.enrich_batch(_leads(12))

        assert sleep.await_count == 2
        sleep.assert_awaited_with(1.5)

    @pytest.mark.asyncio
    async def test_single_window_never_sleeps(self):
        scheduler = BatchEnrichmentScheduler(RecordingService(delay=0), window_size=5, pacing_delay=1.0)

        with patch("leadscope.services.batch_enrichment.asyncio.sleep", new=AsyncMock()) as sleep:
            await scheduler.enrich_batch(_leads(5))

        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_batch(self):
        scheduler = BatchEnrichmentScheduler(RecordingService())
        assert await scheduler.enrich_batch([]) == {}
        assert scheduler.get_stats()["windows_processed"] == 0


# ============================================================================
# TEST: Failure handling
# ============================================================================

class TestFailures:

    @pytest.mark.asyncio
    async def test_failed_lead_gets_empty_profile(self):
        service = RecordingService(fail_for={"Company 3"})
        scheduler = BatchEnrichmentScheduler(service, window_size=5, pacing_delay=0)

        results = await scheduler.enrich_batch(_leads(6))

        assert len(results) == 6
        failed = results[3]
        assert failed.data_quality == DataQuality.LOW
        assert failed.enrichment_score == 0
        assert not failed.has_enrichable_fields()
        assert results[4].description == "Company 4"

    @pytest.mark.parametrize("window,pacing", [(0, 1.0), (-1, 1.0), (5, -0.5)])
    def test_invalid_configuration(self, window, pacing):
        with pytest.raises(ValueError):
            BatchEnrichmentScheduler(RecordingService(), window_size=window, pacing_delay=pacing)

    @pytest.mark.asyncio
    async def test_rerun_is_idempotent(self):
        scheduler = BatchEnrichmentScheduler(RecordingService(), window_size=5, pacing_delay=0)

        first = await scheduler.enrich_batch(_leads(7))
        second = await scheduler.enrich_batch(_leads(7))

        assert {k: v.description for k, v in first.items()} == {k: v.description for k, v in second.items()}
