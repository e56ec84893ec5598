"""
Source adapter factory and registry.
"""
from typing import List, Optional

import httpx

from .base import SourceAdapter, RELIABILITY_WEIGHTS, SOURCE_PRIORITY
from .crunchbase import CrunchbaseAdapter
from .github import GitHubAdapter
from .google_search import GoogleSearchAdapter
from .linkedin import LinkedInAdapter
from .news import NewsAdapter
from .technology import TechnologyAdapter
from .website import WebsiteAdapter

# Registry of available adapters
ADAPTER_REGISTRY = {
    "linkedin": LinkedInAdapter,
    "crunchbase": CrunchbaseAdapter,
    "github": GitHubAdapter,
    "google_search": GoogleSearchAdapter,
    "website": WebsiteAdapter,
    "technology": TechnologyAdapter,
    "news": NewsAdapter,
}

# Settings attribute holding each adapter's credential
API_KEY_SETTINGS = {
    "crunchbase": "CRUNCHBASE_API_KEY",
    "github": "GITHUB_TOKEN",
    "google_search": "SERPAPI_API_KEY",
    "news": "NEWS_API_KEY",
}


def get_adapter(name: str, client: Optional[httpx.AsyncClient], settings) -> SourceAdapter:
    """
    Factory function to create one adapter from application settings.

    Raises:
        ValueError: If name not found in registry
    """
    adapter_class = ADAPTER_REGISTRY.get(name)

    if not adapter_class:
        raise ValueError(
            f"Unknown source adapter: {name}. "
            f"Available: {list(ADAPTER_REGISTRY.keys())}"
        )

    key_setting = API_KEY_SETTINGS.get(name)
    config = {
        "api_key": getattr(settings, key_setting, None) if key_setting else None,
        "timeout": settings.SOURCE_TIMEOUT_SECONDS,
        "simulated": settings.simulated,
        "user_agent": settings.USER_AGENT,
    }
    return adapter_class(client, config)


def build_adapters(client: Optional[httpx.AsyncClient], settings) -> List[SourceAdapter]:
    """Every registered adapter, all in the same (live or simulated) mode."""
    return [get_adapter(name, client, settings) for name in ADAPTER_REGISTRY]


__all__ = [
    "SourceAdapter",
    "RELIABILITY_WEIGHTS",
    "SOURCE_PRIORITY",
    "ADAPTER_REGISTRY",
    "get_adapter",
    "build_adapters",
]
