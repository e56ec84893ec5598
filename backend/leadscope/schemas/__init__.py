"""Pydantic schemas package"""
from leadscope.schemas.enrichment import (
    SourceStatus,
    DataQuality,
    Priority,
    SourceResult,
    EnrichedProfile,
)
from leadscope.schemas.lead import (
    LeadBase,
    LeadCreate,
    LeadResponse,
    FeatureScore,
    ScoreBreakdown,
    LeadScoreResponse,
    LeadEnrichResponse,
    EnrichAllResponse,
    ProspectRequest,
)

__all__ = [
    "SourceStatus",
    "DataQuality",
    "Priority",
    "SourceResult",
    "EnrichedProfile",
    "LeadBase",
    "LeadCreate",
    "LeadResponse",
    "FeatureScore",
    "ScoreBreakdown",
    "LeadScoreResponse",
    "LeadEnrichResponse",
    "EnrichAllResponse",
    "ProspectRequest",
]
