# backend/leadscope/sources/parsing.py
"""
Text extraction helpers shared by the source adapters.

Handles the loose formats third-party pages and APIs use for headcount,
founding year, funding and revenue:
- "10,000 employees", "8,100 (2024)", "employs over 10000", "2.5K staff"
- "501-1000", "c_00501_01000", "1000+"
- "$50M", "$1.2 billion"
"""

import re
import logging
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

MIN_EMPLOYEES = 1
MAX_EMPLOYEES = 10_000_000


def slugify(company_name: str, separator: str = "-") -> str:
    """'Acme Data Inc.' -> 'acme-data-inc'"""
    slug = re.sub(r"[^a-z0-9]+", separator, (company_name or "").lower())
    return slug.strip(separator)


def extract_domain(website: Optional[str]) -> Optional[str]:
    """Normalize a website/URL to a bare host: 'https://www.acme.io/about' -> 'acme.io'"""
    if not website:
        return None

    website = website.strip()
    if not website:
        return None
    if "://" not in website:
        website = f"https://{website}"

    host = urlparse(website).netloc.lower().split(":")[0]
    if host.startswith("www."):
        host = host[4:]
    return host or None


def _plausible(count: int) -> Optional[int]:
    return count if MIN_EMPLOYEES <= count <= MAX_EMPLOYEES else None


def parse_employee_count(text: Optional[str]) -> Optional[int]:
    """
    Extract an employee count from free text.

    Ranges resolve to their lower bound so we never overstate headcount.
    """
    if not text:
        return None

    text = str(text).replace("\xa0", " ").replace("\n", " ").strip()

    # Crunchbase enum: c_00501_01000 / c_10001_max
    enum_match = re.match(r"^c_0*(\d+)_", text)
    if enum_match:
        return _plausible(int(enum_match.group(1)))

    # Ranges: "501-1000", "1,001 - 5,000", "10,001+"
    range_match = re.match(r"^(\d{1,3}(?:,\d{3})+|\d+)\s*(?:[-–]\s*(?:\d{1,3}(?:,\d{3})+|\d+)|\+)", text)
    if range_match:
        return _plausible(int(range_match.group(1).replace(",", "")))

    # Bare number, optionally followed by "(2024)"
    bare_match = re.match(r"^(\d{1,3}(?:,\d{3})+|\d+)\s*(?:\(\d{4}\))?$", text)
    if bare_match:
        return _plausible(int(bare_match.group(1).replace(",", "")))

    # Abbreviated: "10k employees", "employs 2.5K"
    abbrev_patterns = [
        r"(\d+(?:\.\d+)?)\s*[kK]\s+(?:employees|staff|people)",
        r"employs?\s+(\d+(?:\.\d+)?)\s*[kK]\b",
    ]
    for pattern in abbrev_patterns:
        match = re.search(pattern, text, re.IGNORECASE)
        if match:
            count = _plausible(int(float(match.group(1)) * 1000))
            if count:
                return count

    patterns = [
        r"(\d{1,3}(?:,\d{3})+|\d+)\s*\+?\s*(?:full[- ]time\s+)?(?:employees|staff|people|workers|team members)",
        r"employs?\s+(?:over|about|around|approximately|nearly)?\s*(\d{1,3}(?:,\d{3})+|\d+)",
        r"(?:staff|workforce|team)\s+of\s+(?:over|about|around|approximately)?\s*(\d{1,3}(?:,\d{3})+|\d+)",
    ]
    for pattern in patterns:
        match = re.search(pattern, text, re.IGNORECASE)
        if match:
            count = _plausible(int(match.group(1).replace(",", "")))
            if count:
                return count

    return None


def parse_founded_year(text) -> Optional[int]:
    """Extract a plausible founding year from '2010', '2010-01-01' or prose."""
    if text is None:
        return None
    if isinstance(text, int):
        return text if 1800 <= text <= datetime.now(timezone.utc).year else None

    text = str(text)
    patterns = [
        r"^(\d{4})(?:-\d{2}-\d{2})?$",
        r"(?:founded|established|created|formed|launched)\s+(?:in\s+)?(\d{4})",
        r"\b(1[89]\d{2}|20\d{2})\b",
    ]
    for pattern in patterns:
        match = re.search(pattern, text.strip(), re.IGNORECASE)
        if match:
            year = int(match.group(1))
            if 1800 <= year <= datetime.now(timezone.utc).year:
                return year
    return None


def parse_funding_amount(text: Optional[str]) -> Optional[float]:
    """'$50M' -> 50000000.0, '$1.2 billion' -> 1200000000.0"""
    if not text:
        return None

    match = re.search(
        r"\$?\s*(\d+(?:,\d{3})*(?:\.\d+)?)\s*(billion|million|thousand|bn|b|m|k)?\b",
        str(text),
        re.IGNORECASE,
    )
    if not match:
        return None

    amount = float(match.group(1).replace(",", ""))
    unit = (match.group(2) or "").lower()
    if unit in ("billion", "bn", "b"):
        amount *= 1_000_000_000
    elif unit in ("million", "m"):
        amount *= 1_000_000
    elif unit in ("thousand", "k"):
        amount *= 1_000
    return amount


def format_funding_amount(amount: Optional[float]) -> Optional[str]:
    """1200000000 -> '$1.2B', 50000000 -> '$50M'"""
    if not amount or amount <= 0:
        return None
    if amount >= 1_000_000_000:
        return f"${amount / 1_000_000_000:.1f}B".replace(".0B", "B")
    if amount >= 1_000_000:
        return f"${amount / 1_000_000:.1f}M".replace(".0M", "M")
    return f"${amount:,.0f}"


def parse_funding_stage(text: Optional[str]) -> Optional[str]:
    """Find a funding-stage label in free text ('raised a Series B round' -> 'Series B')."""
    if not text:
        return None

    match = re.search(r"\b(pre-seed|seed|series[\s_-]+[a-h]|ipo|public)\b", str(text), re.IGNORECASE)
    if not match:
        return None

    label = match.group(1).lower()
    if label.startswith("series"):
        return f"Series {label[-1].upper()}"
    if label == "ipo":
        return "Public"
    return label.title()


def parse_revenue(text: Optional[str]) -> Optional[str]:
    """Extract a revenue figure as a short '$NB'/'$NM' label."""
    if not text:
        return None

    patterns = [
        r"revenue\s+of\s+\$(\d+(?:\.\d+)?)\s*(billion|million|B|M)\b",
        r"\$(\d+(?:\.\d+)?)\s*(billion|million|B|M)\s+in\s+revenue",
        r"annual\s+revenue\s+\$(\d+(?:\.\d+)?)\s*(billion|million|B|M)\b",
    ]
    for pattern in patterns:
        match = re.search(pattern, text, re.IGNORECASE)
        if match:
            unit = "B" if match.group(2).lower().startswith("b") else "M"
            return f"${match.group(1)}{unit}"
    return None


def employee_range(employee_count: Optional[int]) -> str:
    """Company-size bucket label for a headcount."""
    if not employee_count or employee_count < 1:
        return "Unknown"
    if employee_count >= 1000:
        return "1000+"
    if employee_count >= 500:
        return "500-1000"
    if employee_count >= 200:
        return "200-500"
    if employee_count >= 50:
        return "50-200"
    if employee_count >= 10:
        return "10-50"
    return "1-10"
