# backend/leadscope/services/fusion.py
"""
Fusion & quality estimation

Merges per-source partial records into one EnrichedProfile:
- Scalars: first valid value in source priority order
  (crunchbase > linkedin > github > google, unknown sources after by weight)
- Lists: union, case-insensitive de-duplication, first-seen spelling kept
- Social links: per network, first source wins
- Categorical values are never averaged
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from leadscope.schemas.enrichment import DataQuality, EnrichedProfile, SourceResult, SourceStatus
from leadscope.services.scoring import round_half_up
from leadscope.sources.base import SOURCE_PRIORITY
from leadscope.sources.parsing import (
    MAX_EMPLOYEES,
    MIN_EMPLOYEES,
    parse_employee_count,
    parse_founded_year,
    parse_funding_amount,
)

logger = logging.getLogger(__name__)


SCALAR_FIELDS = [
    "description",
    "employee_count",
    "headquarters",
    "founded_year",
    "industry",
    "website",
    "phone",
    "funding_stage",
    "funding_total",
    "revenue",
    "stock_symbol",
    "public_repos",
    "news_sentiment",
]

LIST_FIELDS = ["tech_stack", "categories", "recent_news", "growth_signals"]


def source_rank(result: SourceResult) -> tuple:
    """Sort key: known sources in fixed priority, unknown after by descending weight."""
    if result.source_id in SOURCE_PRIORITY:
        return (0, SOURCE_PRIORITY.index(result.source_id), 0.0)
    return (1, len(SOURCE_PRIORITY), -result.reliability_weight)


def _validate(field: str, value: Any) -> Any:
    """Return the cleaned value, or None when it is not acceptable for this field."""
    if value is None:
        return None

    if field == "employee_count":
        if isinstance(value, bool):
            return None
        if isinstance(value, str):
            value = parse_employee_count(value)
            if value is None:
                return None
        try:
            count = int(value)
        except (TypeError, ValueError):
            return None
        return count if MIN_EMPLOYEES <= count <= MAX_EMPLOYEES else None

    if field == "founded_year":
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            return None
        return parse_founded_year(value)

    if field == "public_repos":
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value if value >= 0 else None

    # Everything else is text
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _union(values: Iterable[Iterable[Any]]) -> List[str]:
    merged: List[str] = []
    seen = set()
    for items in values:
        if isinstance(items, str):
            items = [items]
        elif not isinstance(items, (list, tuple)):
            continue
        for item in items:
            if not isinstance(item, str):
                continue
            label = item.strip()
            if label and label.lower() not in seen:
                seen.add(label.lower())
                merged.append(label)
    return merged


def merge_payloads(payloads: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Combine payloads of adapters folded into one logical source.

    Scalars keep the first adapter's value, lists are unioned, social
    links merge per network.
    """
    merged: Dict[str, Any] = {}
    for payload in payloads:
        for key, value in payload.items():
            if key == "social_links" and isinstance(value, dict):
                links = merged.setdefault("social_links", {})
                for network, url in value.items():
                    links.setdefault(network, url)
            elif isinstance(value, list):
                merged[key] = _union([merged.get(key) or [], value])
            elif key not in merged:
                merged[key] = value
    return merged


def classify_data_quality(contributing_count: int, enrichment_score: float) -> DataQuality:
    if contributing_count >= 3 and enrichment_score >= 80:
        return DataQuality.HIGH
    if contributing_count >= 2 and enrichment_score >= 60:
        return DataQuality.MEDIUM
    return DataQuality.LOW


def calculate_enrichment_score(results: List[SourceResult]) -> int:
    """Σ weight(ok sources) / attempted × 100, rounded half up; 0 when nothing was attempted."""
    if not results:
        return 0
    total = sum(r.reliability_weight for r in results if r.status == SourceStatus.OK)
    return round_half_up(total / len(results) * 100)


def determine_company_type(profile: EnrichedProfile) -> Optional[str]:
    """
    public > unicorn > startup (funded/young) > mnc > enterprise, else startup.

    Returns None when the profile has nothing to go on.
    """
    if not profile.has_enrichable_fields():
        return None

    stage = (profile.funding_stage or "").lower()
    if profile.stock_symbol or stage in ("public", "ipo"):
        return "public"

    funding = parse_funding_amount(profile.funding_total) or 0
    if funding >= 1_000_000_000:
        return "unicorn"

    if "series" in stage or "seed" in stage:
        return "startup"
    if profile.founded_year and profile.founded_year > 2015:
        return "startup"

    employees = profile.employee_count or 0
    if employees > 10_000:
        return "mnc"
    if employees > 1_000:
        return "enterprise"

    return "startup"


def fuse(results: List[SourceResult], now: Optional[datetime] = None) -> EnrichedProfile:
    """
    Merge source results into a single profile.

    Zero ok sources is a valid outcome: every enrichable field absent,
    enrichment_score 0, data_quality low.
    """
    ordered = sorted(results, key=source_rank)
    ok_results = [r for r in ordered if r.status == SourceStatus.OK]

    fields: Dict[str, Any] = {}

    for result in ok_results:
        for field in SCALAR_FIELDS:
            if field in fields or field not in result.payload:
                continue
            value = _validate(field, result.payload[field])
            if value is None:
                logger.debug(f"Discarding {field}={result.payload[field]!r} from {result.source_id}")
                continue
            fields[field] = value

    for field in LIST_FIELDS:
        merged = _union(r.payload.get(field) for r in ok_results)
        if merged:
            fields[field] = merged

    social_links: Dict[str, str] = {}
    for result in ok_results:
        links = result.payload.get("social_links") or {}
        if not isinstance(links, dict):
            continue
        for network, url in links.items():
            if not isinstance(network, str) or not isinstance(url, str) or not url.strip():
                logger.debug(f"Discarding social link {network}={url!r} from {result.source_id}")
                continue
            if network not in social_links:
                social_links[network] = url.strip()
    if social_links:
        fields["social_links"] = social_links

    enrichment_score = calculate_enrichment_score(results)
    contributing = list(dict.fromkeys(r.source_id for r in ok_results))

    profile = EnrichedProfile(
        **fields,
        enrichment_score=enrichment_score,
        data_quality=classify_data_quality(len(contributing), enrichment_score),
        contributing_sources=contributing,
        attempted_sources=[r.source_id for r in ordered],
        simulated=any(r.simulated for r in results),
        last_updated=now or datetime.now(timezone.utc),
    )
    profile.company_type = determine_company_type(profile)

    logger.info(
        f"Fused {len(contributing)}/{len(results)} sources: "
        f"score={profile.enrichment_score}, quality={profile.data_quality.value}"
    )
    return profile
