# tests/services/test_scoring.py
"""
Tests for the lead scoring function

Coverage:
- Sub-score tables (size, title, industry, funding, tech, engagement)
- Worked example end to end
- Priority thresholds
- Range / integrality over awkward inputs
- Profile merge rules
- Strategy validation

Run with: pytest tests/services/test_scoring.py -v
"""

import pytest

from leadscope.schemas.enrichment import EnrichedProfile, Priority
from leadscope.services.scoring import (
    LeadScoringService,
    ScoringConfigError,
    ScoringStrategy,
    STRATEGIES,
    classify_priority,
    get_strategy,
    round_half_up,
    score_breakdown,
    score_lead,
)


@pytest.fixture
def example_lead():
    return {
        "employee_count": 1200,
        "job_title": "VP Engineering",
        "industry": "SaaS",
        "funding_info": "Series B",
        "tech_stack": ["React", "AWS"],
        "recent_activity": "Requested product demo",
    }


# ============================================================================
# TEST: Worked example
# ============================================================================

class TestWorkedExample:

    def test_scores_91_and_hot(self, example_lead):
        assert score_lead(example_lead) == 91
        assert classify_priority(score_lead(example_lead)) == Priority.HOT

    def test_breakdown_contributions(self, example_lead):
        breakdown = score_breakdown(example_lead)
        contributions = {f.feature: f.contribution for f in breakdown.features}

        assert contributions["company_size"] == pytest.approx(25)
        assert contributions["job_title"] == pytest.approx(25)
        assert contributions["industry"] == pytest.approx(20)
        assert contributions["funding"] == pytest.approx(13.5)
        assert contributions["tech_stack"] == pytest.approx(3.333, abs=0.01)
        assert contributions["engagement"] == pytest.approx(4)
        assert breakdown.total_score == 91
        assert breakdown.priority == Priority.HOT
        assert breakdown.strategy == "weighted"

    def test_works_on_orm_lead(self, make_lead):
        assert score_lead(make_lead()) == 91

    def test_deterministic(self, example_lead):
        profile = EnrichedProfile(employee_count=300, tech_stack=["Python"])
        first = score_lead(example_lead, profile)
        for _ in range(5):
            assert score_lead(example_lead, profile) == first


# ============================================================================
# TEST: Priority thresholds
# ============================================================================

class TestPriority:

    @pytest.mark.parametrize("score,expected", [
        (100, Priority.HOT),
        (80, Priority.HOT),
        (79, Priority.WARM),
        (60, Priority.WARM),
        (59, Priority.COLD),
        (0, Priority.COLD),
    ])
    def test_thresholds(self, score, expected):
        assert classify_priority(score) == expected


# ============================================================================
# TEST: Sub-scores
# ============================================================================

class TestSubScores:

    @pytest.mark.parametrize("count,expected", [
        (5000, 100), (1000, 100), (999, 90), (500, 90), (200, 80),
        (50, 70), (10, 60), (9, 40), (0, 40), (None, 40),
    ])
    def test_company_size(self, count, expected):
        assert LeadScoringService.company_size_score(count) == expected

    @pytest.mark.parametrize("title,expected", [
        ("CEO", 100),
        ("Head of Growth", 100),
        ("Chief Revenue Officer", 100),
        ("Senior Software Engineer", 70),
        ("Solutions Architect", 70),
        ("Marketing Coordinator", 40),
        ("", 40),
        (None, 40),
    ])
    def test_job_title(self, title, expected):
        assert LeadScoringService.job_title_score(title) == expected

    @pytest.mark.parametrize("industry,expected", [
        ("SaaS", 100),
        ("Enterprise Software", 100),
        ("Healthcare", 75),
        ("Cloud Services", 75),
        ("Retail", 50),
        ("", 50),
    ])
    def test_industry(self, industry, expected):
        assert LeadScoringService.industry_score(industry) == expected

    @pytest.mark.parametrize("funding,expected", [
        ("Series D - $425M", 100),
        ("series c", 100),
        ("Series B", 90),
        ("series-b", 90),
        ("Series A - $30M", 80),
        ("Public", 85),
        ("Seed - $6M", 70),
        ("Bootstrapped", 40),
        (None, 40),
    ])
    def test_funding(self, funding, expected):
        assert LeadScoringService.funding_score(funding) == expected

    def test_tech_stack_fraction(self):
        assert LeadScoringService.tech_stack_score(["React", "AWS"]) == pytest.approx(100 * 2 / 6)
        assert LeadScoringService.tech_stack_score([]) == 0
        assert LeadScoringService.tech_stack_score(["COBOL"]) == 0

    def test_tech_stack_capped(self):
        stack = ["React", "TypeScript", "Node.js", "Python", "AWS", "Kubernetes", "React Native", "AWS Lambda"]
        assert LeadScoringService.tech_stack_score(stack) == 100

    @pytest.mark.parametrize("activity,expected", [
        ("Requested trial access", 80),
        ("Attended virtual product demo", 80),
        ("Downloaded whitepaper", 70),
        ("Visited pricing page", 60),
        ("Signed up for newsletter", 50),
        (None, 50),
    ])
    def test_engagement(self, activity, expected):
        assert LeadScoringService.engagement_score(activity) == expected


# ============================================================================
# TEST: Range / integrality
# ============================================================================

class TestRange:

    @pytest.mark.parametrize("lead", [
        {},
        {"employee_count": None, "job_title": "", "industry": "", "tech_stack": None},
        {"employee_count": -5, "funding_info": "", "recent_activity": ""},
        {"employee_count": 10 ** 9, "tech_stack": ["react"] * 50, "recent_activity": "demo trial download visit"},
    ])
    @pytest.mark.parametrize("strategy", ["weighted", "simple"])
    def test_integer_in_range(self, lead, strategy):
        score = score_lead(lead, strategy=strategy)
        assert isinstance(score, int)
        assert 0 <= score <= 100

    def test_empty_lead_floor(self):
        # 40*.25 + 40*.25 + 50*.20 + 40*.15 + 0*.10 + 50*.05
        assert score_lead({}) == 39

    def test_round_half_up(self):
        assert round_half_up(90.5) == 91
        assert round_half_up(2.5) == 3
        assert round_half_up(90.49) == 90


# ============================================================================
# TEST: Profile merge
# ============================================================================

class TestProfileMerge:

    def test_profile_overrides_size_and_funding(self):
        lead = {"employee_count": 20, "funding_info": "Seed"}
        profile = EnrichedProfile(employee_count=1500, funding_stage="Series C")

        scores = LeadScoringService().feature_scores(lead, profile)

        assert scores["company_size"] == 100
        assert scores["funding"] == 100

    def test_profile_fills_missing_industry_only(self):
        profile = EnrichedProfile(industry="Fintech")
        service = LeadScoringService()

        assert service.feature_scores({"industry": ""}, profile)["industry"] == 100
        assert service.feature_scores({"industry": "Retail"}, profile)["industry"] == 50

    def test_tech_stack_union_is_case_insensitive(self):
        lead = {"tech_stack": ["React"]}
        profile = EnrichedProfile(tech_stack=["react", "Kubernetes"])

        merged = LeadScoringService.merge_inputs(lead, profile)

        assert merged["tech_stack"] == ["React", "Kubernetes"]

    def test_stored_profile_dict_accepted(self, example_lead):
        profile = EnrichedProfile(employee_count=30).model_dump(mode="json")
        assert score_lead(example_lead, profile) < score_lead(example_lead)

    def test_empty_profile_changes_nothing(self, example_lead):
        assert score_lead(example_lead, EnrichedProfile()) == score_lead(example_lead)


# ============================================================================
# TEST: Strategies
# ============================================================================

class TestStrategies:

    def test_registered_tables_sum_to_one(self):
        for strategy in STRATEGIES.values():
            assert sum(strategy.weights.values()) == pytest.approx(1.0)

    def test_simple_strategy_ignores_funding_and_tech(self, example_lead):
        low_funding = dict(example_lead, funding_info=None, tech_stack=[])

        assert score_lead(example_lead, strategy="simple") == score_lead(low_funding, strategy="simple")
        # 100*.25 + 100*.25 + 100*.25 + 80*.25
        assert score_lead(example_lead, strategy="simple") == 95

    def test_strategies_not_interchangeable(self, example_lead):
        assert score_breakdown(example_lead, strategy="simple").strategy == "simple"
        assert len(score_breakdown(example_lead, strategy="simple").features) == 4

    def test_unknown_strategy(self):
        with pytest.raises(ScoringConfigError):
            get_strategy("ml")

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ScoringConfigError, match="sum"):
            ScoringStrategy("broken", {"company_size": 0.5, "job_title": 0.4})

    def test_unknown_feature_rejected(self):
        with pytest.raises(ScoringConfigError, match="unknown"):
            ScoringStrategy("broken", {"company_size": 0.5, "vibes": 0.5})

    def test_config_error_is_value_error(self):
        assert issubclass(ScoringConfigError, ValueError)
