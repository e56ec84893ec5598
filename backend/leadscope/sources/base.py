"""
Base adapter interface for company data sources.
All adapters must implement this interface.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from leadscope.schemas.enrichment import SourceResult

logger = logging.getLogger(__name__)


# Static reliability weight per logical source
RELIABILITY_WEIGHTS: Dict[str, float] = {
    "crunchbase": 0.95,
    "linkedin": 0.90,
    "github": 0.80,
    "google": 0.70,
}

# Field precedence for fusion, highest first
SOURCE_PRIORITY = ["crunchbase", "linkedin", "github", "google"]

DEFAULT_TIMEOUT_SECONDS = 12.0
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; LeadScopeBot/1.0)"


class SourceAdapter(ABC):
    """
    Abstract base class for all company data source adapters.

    Subclasses implement `_fetch()` returning a dict of canonical profile
    fields (or None when the source has nothing for this company). The
    public `fetch()` wraps it with the timeout budget and converts every
    failure into an unavailable/error `SourceResult`, so callers never
    see an exception from a source.
    """

    name: str = "base"
    source_id: str = "google"
    requires_api_key: bool = False

    def __init__(self, client: Optional[httpx.AsyncClient], config: Optional[Dict[str, Any]] = None):
        """
        Args:
            client: Shared HTTP client (owned by the caller)
            config: api_key, timeout, simulated, user_agent
        """
        self.client = client
        self.config = config or {}
        self.api_key = self.config.get("api_key")
        self.timeout = float(self.config.get("timeout", DEFAULT_TIMEOUT_SECONDS))
        self.simulated = bool(self.config.get("simulated", False))
        self.user_agent = self.config.get("user_agent", DEFAULT_USER_AGENT)

    @property
    def weight(self) -> float:
        return RELIABILITY_WEIGHTS.get(self.source_id, 0.0)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) or not self.requires_api_key

    @abstractmethod
    async def _fetch(self, company_name: str, domain: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """
        Query the source.

        Returns:
            Canonical partial profile fields, or None when nothing was found
        """
        pass

    def simulate(self, company_name: str, domain: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Deterministic fabricated payload used in simulated mode."""
        from leadscope.sources.simulation import simulated_payload
        return simulated_payload(self.name, company_name, domain)

    async def fetch(self, company_name: str, domain: Optional[str] = None) -> SourceResult:
        """Look up one company. Never raises for source failures."""
        if self.simulated:
            return self._to_result(self.simulate(company_name, domain), company_name, simulated=True)

        if not self.is_configured:
            logger.info(f"{self.name}: not configured, skipping {company_name}")
            return self._unavailable("not configured")

        try:
            payload = await asyncio.wait_for(self._fetch(company_name, domain), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"⚠️ {self.name}: timed out after {self.timeout}s for {company_name}")
            return self._error("timeout")
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code == 404:
                logger.info(f"{self.name}: no record for {company_name}")
                return self._unavailable("not found")
            logger.warning(f"⚠️ {self.name}: HTTP {status_code} for {company_name}")
            return self._error(f"HTTP {status_code}")
        except httpx.HTTPError as e:
            logger.warning(f"⚠️ {self.name}: request failed for {company_name}: {e!r}")
            return self._error(f"request failed: {type(e).__name__}")
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"⚠️ {self.name}: malformed response for {company_name}: {e}")
            return self._error("malformed response")
        except Exception as e:
            logger.error(f"{self.name}: unexpected error for {company_name}: {e}", exc_info=True)
            return self._error(f"unexpected error: {type(e).__name__}")

        return self._to_result(payload, company_name)

    def _to_result(self, payload: Optional[Dict[str, Any]], company_name: str, simulated: bool = False) -> SourceResult:
        payload = clean_payload(payload)
        if not payload:
            logger.info(f"{self.name}: no data for {company_name}")
            return self._unavailable("no data", simulated=simulated)

        logger.debug(f"{self.name}: {company_name} -> {sorted(payload.keys())}")
        return SourceResult.success(
            self.source_id,
            self.weight,
            payload,
            simulated=simulated,
            adapters=[self.name],
        )

    def _unavailable(self, reason: str, simulated: bool = False) -> SourceResult:
        return SourceResult.unavailable(
            self.source_id, self.weight, reason, simulated=simulated, adapters=[self.name]
        )

    def _error(self, reason: str) -> SourceResult:
        return SourceResult.error(self.source_id, self.weight, reason, adapters=[self.name])

    def _headers(self, **extra) -> Dict[str, str]:
        headers = {
            "User-Agent": self.user_agent,
            "Accept-Language": "en-US,en;q=0.9",
        }
        headers.update(extra)
        return headers

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name} source={self.source_id}>"


def clean_payload(payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Drop absent values so missing fields stay missing."""
    if not payload:
        return {}

    cleaned = {}
    for key, value in payload.items():
        if value is None:
            continue
        if isinstance(value, str):
            value = value.strip()
            if not value:
                continue
        if isinstance(value, (list, dict)) and not value:
            continue
        cleaned[key] = value
    return cleaned
