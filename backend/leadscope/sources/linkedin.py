# backend/leadscope/sources/linkedin.py
"""
LinkedIn company page scraper (public "about" page, no login)
"""

import logging
from typing import Any, Dict, Optional

from bs4 import BeautifulSoup

from leadscope.sources.base import SourceAdapter
from leadscope.sources.parsing import (
    parse_employee_count,
    parse_founded_year,
    slugify,
)

logger = logging.getLogger(__name__)

BASE_URL = "https://www.linkedin.com/company"


def parse_company_page(html: str, page_url: str) -> Dict[str, Any]:
    """
    Parse the public company page.

    The about section is rendered as `data-test-id="about-us__<field>"`
    blocks, each holding a <dd> value.
    """
    soup = BeautifulSoup(html, "html.parser")
    data: Dict[str, Any] = {}

    def about(field: str) -> Optional[str]:
        block = soup.find(attrs={"data-test-id": f"about-us__{field}"})
        if not block:
            return None
        value = block.find("dd") or block
        text = " ".join(value.get_text(" ").split())
        return text or None

    description = about("description")
    if not description:
        meta = soup.find("meta", attrs={"property": "og:description"})
        if meta:
            description = meta.get("content")
    if description:
        data["description"] = description

    data["industry"] = about("industry")
    data["headquarters"] = about("headquarters")

    size = about("size")
    if size:
        data["employee_count"] = parse_employee_count(size)

    founded = about("foundedOn")
    if founded:
        data["founded_year"] = parse_founded_year(founded)

    website = about("website")
    if website:
        data["website"] = website

    specialties = about("specialties")
    if specialties:
        data["categories"] = [s.strip() for s in specialties.replace(" and ", ",").split(",") if s.strip()]

    if data:
        data["social_links"] = {"linkedin": page_url}
    return data


class LinkedInAdapter(SourceAdapter):
    """Professional-network company lookup."""

    name = "linkedin"
    source_id = "linkedin"

    async def _fetch(self, company_name: str, domain: Optional[str] = None) -> Optional[Dict[str, Any]]:
        url = f"{BASE_URL}/{slugify(company_name)}/"
        response = await self.client.get(
            url,
            headers=self._headers(Accept="text/html,application/xhtml+xml"),
            follow_redirects=True,
        )
        response.raise_for_status()

        data = parse_company_page(response.text, url)
        if not any(v for k, v in data.items() if k != "social_links"):
            logger.info(f"LinkedIn page for {company_name} had no company details")
            return None
        return data
