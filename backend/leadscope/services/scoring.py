"""Lead scoring service to calculate lead quality scores."""

import math
import logging
from typing import Any, Dict, List, Mapping, Optional

from leadscope.schemas.enrichment import Priority
from leadscope.schemas.lead import FeatureScore, ScoreBreakdown

logger = logging.getLogger(__name__)


class ScoringConfigError(ValueError):
    """A scoring weight table is malformed (unknown feature or weights not summing to 1)."""


FEATURES = ("company_size", "job_title", "industry", "funding", "tech_stack", "engagement")

WEIGHT_TOLERANCE = 1e-6

HOT_THRESHOLD = 80
WARM_THRESHOLD = 60


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def _get(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


class ScoringStrategy:
    """Named, validated feature -> weight table."""

    def __init__(self, name: str, weights: Dict[str, float]):
        unknown = set(weights) - set(FEATURES)
        if unknown:
            raise ScoringConfigError(f"Strategy '{name}' names unknown features: {sorted(unknown)}")

        negative = [f for f, w in weights.items() if w < 0]
        if negative:
            raise ScoringConfigError(f"Strategy '{name}' has negative weights: {negative}")

        total = sum(weights.values())
        if abs(total - 1.0) > WEIGHT_TOLERANCE:
            raise ScoringConfigError(f"Strategy '{name}' weights sum to {total:.4f}, expected 1.0")

        self.name = name
        self.weights = dict(weights)

    def __repr__(self) -> str:
        return f"<ScoringStrategy {self.name} {self.weights}>"


class LeadScoringService:
    """
    Calculate lead quality scores (0-100).

    Weighted components ("weighted" strategy):
    - Company size: 25%
    - Job title relevance: 25%
    - Industry value: 20%
    - Funding stage: 15%
    - Tech stack compatibility: 10%
    - Engagement signals: 5%

    The "simple" strategy keeps the four-criterion table (size, title,
    industry, engagement at 25% each).
    """

    DECISION_MAKER_KEYWORDS = ['ceo', 'cto', 'cfo', 'vp', 'director', 'head', 'chief']
    TECHNICAL_KEYWORDS = ['engineer', 'developer', 'architect', 'lead']

    HIGH_VALUE_INDUSTRIES = ['saas', 'fintech', 'enterprise software', 'cybersecurity']
    MEDIUM_VALUE_INDUSTRIES = ['healthcare', 'e-commerce', 'data analytics', 'cloud services']

    # First match wins, in this order
    FUNDING_STAGE_SCORES = [
        (('series c', 'series d'), 100),
        (('series b',), 90),
        (('series a',), 80),
        (('public',), 85),
        (('seed',), 70),
    ]

    MODERN_TECH = ['react', 'typescript', 'node.js', 'python', 'aws', 'kubernetes']

    @staticmethod
    def company_size_score(employee_count: Optional[int]) -> float:
        count = employee_count or 0
        if count >= 1000:
            return 100
        if count >= 500:
            return 90
        if count >= 200:
            return 80
        if count >= 50:
            return 70
        if count >= 10:
            return 60
        return 40

    @staticmethod
    def job_title_score(job_title: Optional[str]) -> float:
        title = (job_title or '').lower()
        if any(keyword in title for keyword in LeadScoringService.DECISION_MAKER_KEYWORDS):
            return 100
        if any(keyword in title for keyword in LeadScoringService.TECHNICAL_KEYWORDS):
            return 70
        return 40

    @staticmethod
    def industry_score(industry: Optional[str]) -> float:
        industry_lower = (industry or '').lower()
        if any(ind in industry_lower for ind in LeadScoringService.HIGH_VALUE_INDUSTRIES):
            return 100
        if any(ind in industry_lower for ind in LeadScoringService.MEDIUM_VALUE_INDUSTRIES):
            return 75
        return 50

    @staticmethod
    def funding_score(funding_info: Optional[str]) -> float:
        # "Series-B", "series_b" and "Series B" are the same stage
        funding = (funding_info or '').lower().replace('-', ' ').replace('_', ' ')
        for labels, score in LeadScoringService.FUNDING_STAGE_SCORES:
            if any(label in funding for label in labels):
                return score
        return 40

    @staticmethod
    def tech_stack_score(tech_stack: Optional[List[str]]) -> float:
        modern = LeadScoringService.MODERN_TECH
        matches = sum(
            1 for tech in (tech_stack or [])
            if any(m in str(tech).lower() for m in modern)
        )
        return min(100.0, matches / len(modern) * 100)

    @staticmethod
    def engagement_score(recent_activity: Optional[str]) -> float:
        score = 50
        activity = (recent_activity or '').lower()
        if 'demo' in activity or 'trial' in activity:
            score += 30
        elif 'download' in activity:
            score += 20
        elif 'visit' in activity:
            score += 10
        return min(100, score)

    @staticmethod
    def merge_inputs(lead: Any, profile: Any = None) -> Dict[str, Any]:
        """
        Combine lead attributes with an enrichment profile.

        Profile values override the lead's employee count and funding
        stage, fill the industry only when the lead has none, and union
        into the tech stack.
        """
        tech_stack = list(_get(lead, 'tech_stack') or [])
        inputs = {
            'employee_count': _get(lead, 'employee_count'),
            'job_title': _get(lead, 'job_title'),
            'industry': _get(lead, 'industry'),
            'funding_info': _get(lead, 'funding_info'),
            'tech_stack': tech_stack,
            'recent_activity': _get(lead, 'recent_activity'),
        }

        if profile is None:
            return inputs

        if _get(profile, 'employee_count'):
            inputs['employee_count'] = _get(profile, 'employee_count')
        if _get(profile, 'funding_stage'):
            inputs['funding_info'] = _get(profile, 'funding_stage')
        if not inputs['industry'] and _get(profile, 'industry'):
            inputs['industry'] = _get(profile, 'industry')

        seen = {str(t).lower() for t in tech_stack}
        for tech in _get(profile, 'tech_stack') or []:
            if str(tech).lower() not in seen:
                seen.add(str(tech).lower())
                tech_stack.append(tech)

        return inputs

    def feature_scores(self, lead: Any, profile: Any = None) -> Dict[str, float]:
        inputs = self.merge_inputs(lead, profile)
        return {
            'company_size': self.company_size_score(inputs['employee_count']),
            'job_title': self.job_title_score(inputs['job_title']),
            'industry': self.industry_score(inputs['industry']),
            'funding': self.funding_score(inputs['funding_info']),
            'tech_stack': self.tech_stack_score(inputs['tech_stack']),
            'engagement': self.engagement_score(inputs['recent_activity']),
        }

    def breakdown(self, lead: Any, profile: Any = None, strategy: str = "weighted") -> ScoreBreakdown:
        table = get_strategy(strategy)
        scores = self.feature_scores(lead, profile)

        features = [
            FeatureScore(
                feature=feature,
                score=scores[feature],
                weight=weight,
                contribution=scores[feature] * weight,
            )
            for feature, weight in table.weights.items()
        ]
        raw = sum(f.contribution for f in features)
        total = min(max(round_half_up(raw), 0), 100)

        return ScoreBreakdown(
            strategy=table.name,
            total_score=total,
            priority=classify_priority(total),
            features=features,
        )

    def calculate_score(self, lead: Any, profile: Any = None, strategy: str = "weighted") -> int:
        return self.breakdown(lead, profile, strategy).total_score


STRATEGIES: Dict[str, ScoringStrategy] = {
    "weighted": ScoringStrategy("weighted", {
        "company_size": 0.25,
        "job_title": 0.25,
        "industry": 0.20,
        "funding": 0.15,
        "tech_stack": 0.10,
        "engagement": 0.05,
    }),
    "simple": ScoringStrategy("simple", {
        "company_size": 0.25,
        "job_title": 0.25,
        "industry": 0.25,
        "engagement": 0.25,
    }),
}


def get_strategy(name: str) -> ScoringStrategy:
    """
    Raises:
        ScoringConfigError: If no strategy is registered under name
    """
    strategy = STRATEGIES.get((name or "").lower())
    if not strategy:
        raise ScoringConfigError(
            f"Unknown scoring strategy: {name}. Available: {list(STRATEGIES.keys())}"
        )
    return strategy


def classify_priority(score: int) -> Priority:
    if score >= HOT_THRESHOLD:
        return Priority.HOT
    if score >= WARM_THRESHOLD:
        return Priority.WARM
    return Priority.COLD


# Singleton instance
scoring_service = LeadScoringService()


def score_lead(lead: Any, profile: Any = None, strategy: str = "weighted") -> int:
    """Score a lead (optionally with its enrichment profile). Pure and deterministic."""
    return scoring_service.calculate_score(lead, profile, strategy)


def score_breakdown(lead: Any, profile: Any = None, strategy: str = "weighted") -> ScoreBreakdown:
    """Every sub-score, weight and weighted contribution behind score_lead()."""
    return scoring_service.breakdown(lead, profile, strategy)
