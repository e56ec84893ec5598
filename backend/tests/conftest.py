# tests/conftest.py

import asyncio
import pytest
from typing import Any, Dict, Optional

from leadscope.models import Lead
from leadscope.schemas.enrichment import SourceResult
from leadscope.sources.base import SourceAdapter, RELIABILITY_WEIGHTS


class StubAdapter(SourceAdapter):
    """Adapter with a canned outcome: a payload, an exception, or a slow response."""

    def __init__(
        self,
        name: str,
        source_id: str,
        payload: Optional[Dict[str, Any]] = None,
        exc: Optional[BaseException] = None,
        delay: float = 0.0,
        config: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(None, config or {})
        self.name = name
        self.source_id = source_id
        self.payload = payload
        self.exc = exc
        self.delay = delay
        self.calls = []

    async def _fetch(self, company_name, domain=None):
        self.calls.append((company_name, domain))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.exc:
            raise self.exc
        return self.payload


@pytest.fixture
def stub_adapter():
    return StubAdapter


@pytest.fixture
def ok_result():
    """Factory for ok SourceResults at the source's standard weight"""
    def make(source_id: str, payload: Optional[Dict[str, Any]] = None, weight: Optional[float] = None):
        return SourceResult.success(
            source_id,
            RELIABILITY_WEIGHTS.get(source_id, 0.5) if weight is None else weight,
            payload or {"description": f"{source_id} data"},
            adapters=[source_id],
        )
    return make


@pytest.fixture
def failed_result():
    def make(source_id: str, reason: str = "timeout"):
        return SourceResult.error(source_id, RELIABILITY_WEIGHTS.get(source_id, 0.5), reason)
    return make


@pytest.fixture
def make_lead():
    """Transient Lead with sensible defaults"""
    counter = {"id": 0}

    def make(**overrides):
        counter["id"] += 1
        fields = dict(
            id=counter["id"],
            company_name="TechCorp Inc",
            contact_name="Jane Doe",
            job_title="VP Engineering",
            industry="SaaS",
            location="San Francisco, CA",
            company_size="1000+",
            employee_count=1200,
            website="https://techcorp.com",
            tech_stack=["React", "AWS"],
            funding_info="Series B",
            recent_activity="Requested product demo",
            score=0,
            priority="cold",
            is_enriched=False,
            enrichment_data=None,
        )
        fields.update(overrides)
        return Lead(**fields)
    return make


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: unit tests")
    config.addinivalue_line("markers", "integration: integration tests")
    config.addinivalue_line("markers", "slow: slow running tests")
