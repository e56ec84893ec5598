"""
Pydantic schemas for leads
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime

from leadscope.schemas.enrichment import Priority, EnrichedProfile


class LeadBase(BaseModel):
    """Native lead fields as captured at ingestion"""
    company_name: str
    contact_name: str
    job_title: str
    email: Optional[str] = None
    phone: Optional[str] = None
    industry: str = ""
    location: str = ""
    company_size: str = "Unknown"
    employee_count: Optional[int] = None
    website: Optional[str] = None
    tech_stack: List[str] = Field(default_factory=list)
    funding_info: Optional[str] = None
    recent_activity: Optional[str] = None

    @field_validator("tech_stack", mode="before")
    @classmethod
    def _default_tech_stack(cls, v):
        return v or []

    @field_validator("industry", "location", mode="before")
    @classmethod
    def _default_text(cls, v):
        return v or ""


class LeadCreate(LeadBase):
    """Lead payload for ingestion"""
    
    class Config:
        json_schema_extra = {
            "example": {
                "company_name": "TechCorp Inc",
                "contact_name": "Jane Doe",
                "job_title": "VP Engineering",
                "industry": "SaaS",
                "location": "San Francisco, CA",
                "company_size": "1000+",
                "employee_count": 1200,
                "website": "https://techcorp.com",
                "tech_stack": ["React", "AWS"],
                "funding_info": "Series B",
                "recent_activity": "Requested product demo"
            }
        }


class LeadResponse(LeadBase):
    """Lead as stored, including derived scoring fields"""
    id: int
    score: int = 0
    priority: Priority = Priority.COLD
    is_enriched: bool = False
    enrichment_data: Optional[Dict[str, Any]] = None
    enriched_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True


class FeatureScore(BaseModel):
    """One feature's contribution to the final score"""
    feature: str
    score: float
    weight: float
    contribution: float


class ScoreBreakdown(BaseModel):
    strategy: str
    total_score: int
    priority: Priority
    features: List[FeatureScore]


class LeadScoreResponse(BaseModel):
    lead: LeadResponse
    breakdown: ScoreBreakdown


class LeadEnrichResponse(LeadResponse):
    profile: Optional[EnrichedProfile] = None


class EnrichAllResponse(BaseModel):
    enriched_count: int = Field(..., alias="enrichedCount")
    
    class Config:
        populate_by_name = True


class ProspectRequest(BaseModel):
    industry: str
    limit: int = Field(10, ge=1, le=100)
