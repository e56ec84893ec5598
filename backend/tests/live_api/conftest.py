# tests/live_api/conftest.py
"""
Live API tests - Uses REAL API keys and makes REAL API calls
Only run when you have API credits and want to verify integrations
"""

import os

import httpx
import pytest
import pytest_asyncio


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "live_api: Tests that make real API calls (expensive, requires API keys)"
    )


# Check for required API keys
SERPAPI_KEY = os.getenv("SERPAPI_API_KEY")
CRUNCHBASE_KEY = os.getenv("CRUNCHBASE_API_KEY")
NEWS_API_KEY = os.getenv("NEWS_API_KEY")


# Skip entire directory if no API keys
def pytest_collection_modifyitems(config, items):
    """Skip live API tests if API keys not configured"""
    if not (SERPAPI_KEY or CRUNCHBASE_KEY or NEWS_API_KEY):
        skip_live = pytest.mark.skip(
            reason="No API keys configured (set SERPAPI_API_KEY, CRUNCHBASE_API_KEY or NEWS_API_KEY)"
        )
        for item in items:
            if "live_api" in item.nodeid:
                item.add_marker(skip_live)


@pytest_asyncio.fixture
async def http_client():
    async with httpx.AsyncClient(timeout=15.0) as client:
        yield client
