# backend/leadscope/sources/google_search.py
"""
Google search via SerpApi - knowledge graph and local business results
"""

import logging
from typing import Any, Dict, Optional

from leadscope.sources.base import SourceAdapter
from leadscope.sources.parsing import (
    parse_employee_count,
    parse_founded_year,
    parse_revenue,
)

logger = logging.getLogger(__name__)

SERPAPI_URL = "https://serpapi.com/search.json"

PROFILE_NETWORKS = {
    "linkedin": "linkedin",
    "twitter": "twitter",
    "x": "twitter",
    "facebook": "facebook",
    "instagram": "instagram",
    "youtube": "youtube",
}


def parse_search_results(data: Dict[str, Any]) -> Dict[str, Any]:
    """Map a SerpApi Google response to profile fields."""
    enriched: Dict[str, Any] = {}

    kg = data.get("knowledge_graph") or {}
    if kg:
        enriched["description"] = kg.get("description")
        enriched["website"] = kg.get("website")
        enriched["headquarters"] = kg.get("headquarters")
        enriched["phone"] = kg.get("phone")
        enriched["revenue"] = parse_revenue(f"revenue of {kg['revenue']}") if kg.get("revenue") else None

        employees = kg.get("number_of_employees") or kg.get("employees")
        if employees:
            enriched["employee_count"] = parse_employee_count(str(employees))

        if kg.get("founded"):
            enriched["founded_year"] = parse_founded_year(str(kg["founded"]))

        if kg.get("type"):
            enriched["categories"] = [kg["type"]]

        social = {}
        for profile in kg.get("profiles") or []:
            network = PROFILE_NETWORKS.get((profile.get("name") or "").lower())
            if network and profile.get("link"):
                social.setdefault(network, profile["link"])
        enriched["social_links"] = social

    local = data.get("local_results") or {}
    places = local.get("places") if isinstance(local, dict) else local
    if places:
        place = places[0]
        if not enriched.get("phone"):
            enriched["phone"] = place.get("phone")
        if not enriched.get("headquarters"):
            enriched["headquarters"] = place.get("address")
        if place.get("type"):
            enriched["categories"] = (enriched.get("categories") or []) + [place["type"]]

    # Fall back to the first organic snippet for headcount
    if not enriched.get("employee_count"):
        for result in (data.get("organic_results") or [])[:3]:
            count = parse_employee_count(result.get("snippet", ""))
            if count:
                enriched["employee_count"] = count
                break

    return enriched


class GoogleSearchAdapter(SourceAdapter):
    """Local-business / web search lookup through SerpApi."""

    name = "google_search"
    source_id = "google"
    requires_api_key = True

    async def _fetch(self, company_name: str, domain: Optional[str] = None) -> Optional[Dict[str, Any]]:
        query = f"{company_name} company"
        if domain:
            query = f"{company_name} {domain}"

        logger.info(f"🔍 SerpApi: Searching for '{query}'")

        response = await self.client.get(
            SERPAPI_URL,
            params={"engine": "google", "q": query, "num": 5, "api_key": self.api_key},
        )
        response.raise_for_status()
        data = response.json()

        if data.get("error"):
            raise ValueError(data["error"])

        return parse_search_results(data)
