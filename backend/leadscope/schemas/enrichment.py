"""
Pydantic schemas for source results and fused enrichment profiles
"""

from enum import Enum
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SourceStatus(str, Enum):
    OK = "ok"
    UNAVAILABLE = "unavailable"
    ERROR = "error"


class DataQuality(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Priority(str, Enum):
    HOT = "hot"
    WARM = "warm"
    COLD = "cold"


class SourceResult(BaseModel):
    """Output of one logical data source for one company lookup"""
    source_id: str
    status: SourceStatus
    payload: Dict[str, Any] = Field(default_factory=dict)
    reliability_weight: float = Field(0.0, ge=0.0, le=1.0)
    reason: Optional[str] = None
    simulated: bool = False
    adapters: List[str] = Field(default_factory=list)
    
    @property
    def ok(self) -> bool:
        return self.status == SourceStatus.OK
    
    @classmethod
    def success(cls, source_id: str, weight: float, payload: Dict[str, Any], **kwargs) -> "SourceResult":
        return cls(source_id=source_id, status=SourceStatus.OK, reliability_weight=weight, payload=payload, **kwargs)
    
    @classmethod
    def unavailable(cls, source_id: str, weight: float, reason: Optional[str] = None, **kwargs) -> "SourceResult":
        return cls(source_id=source_id, status=SourceStatus.UNAVAILABLE, reliability_weight=weight, reason=reason, **kwargs)
    
    @classmethod
    def error(cls, source_id: str, weight: float, reason: str, **kwargs) -> "SourceResult":
        return cls(source_id=source_id, status=SourceStatus.ERROR, reliability_weight=weight, reason=reason, **kwargs)


class EnrichedProfile(BaseModel):
    """
    Fused view of a company across every source that answered.
    
    Always replaced wholesale on re-enrichment.
    """
    # Merged company fields
    description: Optional[str] = None
    employee_count: Optional[int] = None
    headquarters: Optional[str] = None
    founded_year: Optional[int] = None
    industry: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    funding_stage: Optional[str] = None
    funding_total: Optional[str] = None
    revenue: Optional[str] = None
    stock_symbol: Optional[str] = None
    tech_stack: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    recent_news: List[str] = Field(default_factory=list)
    growth_signals: List[str] = Field(default_factory=list)
    news_sentiment: Optional[str] = None  # positive, negative, neutral
    public_repos: Optional[int] = None
    social_links: Dict[str, str] = Field(default_factory=dict)
    company_type: Optional[str] = None
    
    # Confidence
    enrichment_score: float = Field(0.0, ge=0.0, le=100.0)
    data_quality: DataQuality = DataQuality.LOW
    contributing_sources: List[str] = Field(default_factory=list)
    attempted_sources: List[str] = Field(default_factory=list)
    simulated: bool = False
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    
    @property
    def location(self) -> Optional[str]:
        return self.headquarters
    
    def has_enrichable_fields(self) -> bool:
        """True when at least one merged company field is set."""
        data = self.model_dump(include=ENRICHABLE_FIELDS)
        return any(value not in (None, [], {}) for value in data.values())


ENRICHABLE_FIELDS = {
    "description", "employee_count", "headquarters", "founded_year", "industry",
    "website", "phone", "funding_stage", "funding_total", "revenue", "stock_symbol",
    "public_repos", "news_sentiment",
    "tech_stack", "categories", "recent_news", "growth_signals", "social_links", "company_type",
}
