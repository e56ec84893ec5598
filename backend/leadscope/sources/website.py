# backend/leadscope/sources/website.py
"""
Company website scraper - description, contact and social profile links
"""

import re
import logging
from typing import Any, Dict, Optional

from bs4 import BeautifulSoup

from leadscope.sources.base import SourceAdapter
from leadscope.sources.parsing import (
    extract_domain,
    parse_employee_count,
    parse_founded_year,
    parse_funding_stage,
)

logger = logging.getLogger(__name__)


SOCIAL_HOSTS = {
    "linkedin.com/company": "linkedin",
    "twitter.com": "twitter",
    "x.com": "twitter",
    "facebook.com": "facebook",
    "github.com": "github",
    "instagram.com": "instagram",
    "youtube.com": "youtube",
}


def parse_homepage(html: str, base_url: str) -> Dict[str, Any]:
    """Extract canonical profile fields from homepage markup."""
    soup = BeautifulSoup(html, "html.parser")
    data: Dict[str, Any] = {"website": base_url}

    for attrs in ({"name": "description"}, {"property": "og:description"}):
        meta = soup.find("meta", attrs=attrs)
        if meta and meta.get("content", "").strip():
            data["description"] = meta["content"].strip()
            break

    social_links: Dict[str, str] = {}
    for link in soup.find_all("a", href=True):
        href = link["href"].strip()
        lowered = href.lower()

        if lowered.startswith("tel:") and "phone" not in data:
            data["phone"] = href[4:].strip()
            continue

        for needle, network in SOCIAL_HOSTS.items():
            if re.search(rf"(?:^|[/.]){re.escape(needle)}", lowered) and network not in social_links:
                social_links[network] = href
                break
    if social_links:
        data["social_links"] = social_links

    # Body copy sometimes states headcount / funding ("team of 250", "backed by our Series A")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    text = " ".join(soup.get_text(" ").split())

    employees = parse_employee_count(text)
    if employees:
        data["employee_count"] = employees

    stage = parse_funding_stage(text)
    if stage:
        data["funding_stage"] = stage

    match = re.search(r"(?:founded|established|since)\s+(?:in\s+)?(\d{4})", text, re.IGNORECASE)
    if match:
        data["founded_year"] = parse_founded_year(match.group(1))

    return data


class WebsiteAdapter(SourceAdapter):
    """Scrapes the company's own homepage."""

    name = "website"
    source_id = "google"

    async def _fetch(self, company_name: str, domain: Optional[str] = None) -> Optional[Dict[str, Any]]:
        host = extract_domain(domain)
        if not host:
            logger.debug(f"No domain for {company_name}, skipping website scrape")
            return None

        url = f"https://{host}"
        response = await self.client.get(
            url,
            headers=self._headers(Accept="text/html,application/xhtml+xml"),
            follow_redirects=True,
        )
        response.raise_for_status()

        data = parse_homepage(response.text, url)
        logger.info(f"Scraped {url}: {sorted(data.keys())}")
        return data
