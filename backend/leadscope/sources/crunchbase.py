# backend/leadscope/sources/crunchbase.py
"""
Crunchbase v4 organization lookup - funding, categories, headcount
"""

import logging
from typing import Any, Dict, List, Optional

from leadscope.sources.base import SourceAdapter
from leadscope.sources.parsing import (
    format_funding_amount,
    parse_employee_count,
    parse_founded_year,
    parse_funding_stage,
    slugify,
)

logger = logging.getLogger(__name__)

BASE_URL = "https://api.crunchbase.com/api/v4/entities/organizations"

FIELD_IDS = [
    "short_description",
    "categories",
    "num_employees_enum",
    "location_identifiers",
    "founded_on",
    "funding_total",
    "last_funding_type",
    "ipo_status",
    "stock_symbol",
    "website_url",
    "linkedin",
    "twitter",
    "facebook",
]


def _value(field: Any) -> Any:
    """Crunchbase wraps many scalars as {"value": ...}."""
    if isinstance(field, dict):
        return field.get("value") or field.get("value_usd")
    return field


def parse_organization(properties: Dict[str, Any]) -> Dict[str, Any]:
    """Map Crunchbase organization properties to profile fields."""
    data: Dict[str, Any] = {
        "description": properties.get("short_description"),
        "website": _value(properties.get("website_url")),
        "stock_symbol": _value(properties.get("stock_symbol")),
    }

    employee_enum = properties.get("num_employees_enum")
    if employee_enum:
        data["employee_count"] = parse_employee_count(employee_enum)

    locations: List[Dict[str, Any]] = properties.get("location_identifiers") or []
    parts = [loc.get("value") for loc in locations if loc.get("location_type") in ("city", "region", "country")]
    if parts:
        data["headquarters"] = ", ".join(p for p in parts if p)

    founded = _value(properties.get("founded_on"))
    if founded:
        data["founded_year"] = parse_founded_year(str(founded)[:4])

    funding_total = properties.get("funding_total")
    if isinstance(funding_total, dict) and funding_total.get("value_usd"):
        data["funding_total"] = format_funding_amount(float(funding_total["value_usd"]))

    stage = parse_funding_stage(properties.get("last_funding_type"))
    if properties.get("ipo_status") == "public":
        stage = "Public"
    if stage:
        data["funding_stage"] = stage

    categories = properties.get("categories") or []
    data["categories"] = [c.get("value") for c in categories if isinstance(c, dict) and c.get("value")]

    social = {}
    for network in ("linkedin", "twitter", "facebook"):
        url = _value(properties.get(network))
        if url:
            social[network] = url
    data["social_links"] = social

    return data


class CrunchbaseAdapter(SourceAdapter):
    """Startup-funding registry lookup."""

    name = "crunchbase"
    source_id = "crunchbase"
    requires_api_key = True

    async def _fetch(self, company_name: str, domain: Optional[str] = None) -> Optional[Dict[str, Any]]:
        permalink = slugify(company_name)
        response = await self.client.get(
            f"{BASE_URL}/{permalink}",
            params={"user_key": self.api_key, "field_ids": ",".join(FIELD_IDS)},
            headers={"Accept": "application/json"},
        )
        response.raise_for_status()

        properties = response.json().get("properties")
        if not properties:
            return None

        logger.info(f"Crunchbase matched {company_name} as '{permalink}'")
        return parse_organization(properties)
