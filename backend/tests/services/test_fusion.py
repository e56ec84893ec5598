# tests/services/test_fusion.py
"""
Tests for profile fusion and data-quality estimation

Run with: pytest tests/services/test_fusion.py -v
"""

import pytest
from datetime import datetime

from leadscope.schemas.enrichment import DataQuality, EnrichedProfile, ENRICHABLE_FIELDS, SourceResult
from leadscope.services.fusion import (
    calculate_enrichment_score,
    classify_data_quality,
    determine_company_type,
    fuse,
    merge_payloads,
)


# ============================================================================
# TEST: Quality estimation
# ============================================================================

class TestQuality:

    def test_all_sources_failing(self, failed_result):
        results = [failed_result(s) for s in ("crunchbase", "linkedin", "github", "google")]

        profile = fuse(results)

        assert profile.enrichment_score == 0
        assert profile.data_quality == DataQuality.LOW
        assert profile.contributing_sources == []
        assert not profile.has_enrichable_fields()
        assert profile.company_type is None

    def test_no_sources_attempted(self):
        profile = fuse([])
        assert profile.enrichment_score == 0
        assert profile.data_quality == DataQuality.LOW

    def test_three_reliable_sources_high(self, ok_result):
        results = [ok_result("linkedin"), ok_result("crunchbase"), ok_result("github")]

        profile = fuse(results)

        # (0.9 + 0.95 + 0.8) / 3
        assert profile.enrichment_score == 88
        assert profile.data_quality == DataQuality.HIGH

    def test_two_of_three_medium(self, ok_result, failed_result):
        results = [ok_result("linkedin"), ok_result("crunchbase"), failed_result("github")]

        profile = fuse(results)

        # (0.9 + 0.95) / 3
        assert profile.enrichment_score == 62
        assert profile.data_quality == DataQuality.MEDIUM
        assert profile.contributing_sources == ["crunchbase", "linkedin"]
        assert profile.attempted_sources == ["crunchbase", "linkedin", "github"]

    def test_unavailable_counts_as_attempted(self, ok_result):
        results = [
            ok_result("linkedin"),
            SourceResult.unavailable("google", 0.7, "not configured"),
        ]
        assert calculate_enrichment_score(results) == 45

    @pytest.mark.parametrize("count,score,expected", [
        (3, 80, DataQuality.HIGH),
        (4, 79, DataQuality.MEDIUM),
        (2, 95, DataQuality.MEDIUM),
        (2, 59, DataQuality.LOW),
        (1, 95, DataQuality.LOW),
        (0, 0, DataQuality.LOW),
    ])
    def test_classification(self, count, score, expected):
        assert classify_data_quality(count, score) == expected


# ============================================================================
# TEST: Field merge
# ============================================================================

class TestFieldMerge:

    def test_registry_headquarters_wins(self, ok_result):
        results = [
            ok_result("linkedin", {"headquarters": "San Francisco, CA"}),
            ok_result("crunchbase", {"headquarters": "San Francisco, California, United States"}),
        ]

        profile = fuse(results)

        assert profile.headquarters == "San Francisco, California, United States"
        assert profile.location == profile.headquarters

    def test_lower_priority_fills_gaps(self, ok_result):
        results = [
            ok_result("google", {"phone": "+1-555-123-4567", "description": "from search"}),
            ok_result("linkedin", {"description": "from linkedin"}),
        ]

        profile = fuse(results)

        assert profile.description == "from linkedin"
        assert profile.phone == "+1-555-123-4567"

    def test_unknown_source_ranks_after_known(self, ok_result):
        results = [
            ok_result("clearbit", {"industry": "Software"}, weight=0.99),
            ok_result("google", {"industry": "Technology"}),
        ]
        assert fuse(results).industry == "Technology"

    def test_invalid_employee_count_discarded_per_source(self, ok_result):
        results = [
            ok_result("crunchbase", {"employee_count": -40}),
            ok_result("linkedin", {"employee_count": 1500}),
        ]
        assert fuse(results).employee_count == 1500

    def test_invalid_founded_year_discarded(self, ok_result):
        results = [
            ok_result("crunchbase", {"founded_year": 3020}),
            ok_result("linkedin", {"founded_year": 1750}),
            ok_result("google", {"founded_year": "2010"}),
        ]
        assert fuse(results).founded_year == 2010

    def test_empty_strings_discarded(self, ok_result):
        results = [
            ok_result("crunchbase", {"industry": "   ", "description": "x"}),
            ok_result("linkedin", {"industry": "Technology"}),
        ]
        assert fuse(results).industry == "Technology"

    def test_lists_union_case_insensitive(self, ok_result):
        results = [
            ok_result("google", {"tech_stack": ["react", "Stripe"]}),
            ok_result("github", {"tech_stack": ["TypeScript", "React"]}),
        ]

        profile = fuse(results)

        # github ranks above google, so its spelling is seen first
        assert profile.tech_stack == ["TypeScript", "React", "Stripe"]

    def test_social_links_per_network(self, ok_result):
        results = [
            ok_result("google", {"social_links": {"twitter": "https://twitter.com/g", "facebook": "https://fb.com/g"}}),
            ok_result("github", {"social_links": {"twitter": "https://twitter.com/gh", "github": "https://github.com/gh"}}),
        ]

        links = fuse(results).social_links

        assert links == {
            "twitter": "https://twitter.com/gh",
            "github": "https://github.com/gh",
            "facebook": "https://fb.com/g",
        }

    def test_wrong_typed_fields_discarded_per_source(self, ok_result):
        results = [
            ok_result("github", {
                "headquarters": 12345,
                "description": ["x"],
                "website": {"url": "https://acme.io"},
                "public_repos": "lots",
                "founded_year": [2010],
                "tech_stack": 7,
                "social_links": {"github": None, "twitter": 42, "linkedin": "https://linkedin.com/company/acme"},
            }),
            ok_result("google", {
                "headquarters": "Austin, TX",
                "description": "Acme builds data tools.",
                "tech_stack": ["React"],
            }),
        ]

        profile = fuse(results)

        assert profile.headquarters == "Austin, TX"
        assert profile.description == "Acme builds data tools."
        assert profile.website is None
        assert profile.public_repos is None
        assert profile.founded_year is None
        assert profile.tech_stack == ["React"]
        assert profile.social_links == {"linkedin": "https://linkedin.com/company/acme"}
        assert profile.contributing_sources == ["github", "google"]

    def test_news_and_repo_fields_kept(self, ok_result):
        results = [
            ok_result("github", {"public_repos": 45, "tech_stack": ["Go"]}),
            ok_result("google", {
                "recent_news": ["Acme Raises Series B Funding"],
                "growth_signals": ["Recent funding activity detected", "Recent series activity detected"],
                "news_sentiment": "positive",
            }),
        ]

        profile = fuse(results)

        assert profile.public_repos == 45
        assert profile.news_sentiment == "positive"
        assert profile.growth_signals == ["Recent funding activity detected", "Recent series activity detected"]

    def test_failed_source_payload_ignored(self, ok_result):
        broken = SourceResult.error("crunchbase", 0.95, "HTTP 500", payload={"industry": "Stale"})
        profile = fuse([broken, ok_result("linkedin", {"industry": "Technology"})])
        assert profile.industry == "Technology"

    def test_last_updated_and_simulated(self, ok_result):
        now = datetime(2024, 1, 15, 12, 0, 0)
        simulated = SourceResult.success("linkedin", 0.9, {"industry": "Tech"}, simulated=True)

        profile = fuse([simulated], now=now)

        assert profile.last_updated == now
        assert profile.simulated is True

    def test_default_timestamp_is_utc(self, ok_result):
        profile = fuse([ok_result("linkedin")])
        assert profile.last_updated.tzinfo is not None
        assert profile.last_updated.utcoffset().total_seconds() == 0

    def test_zero_ok_leaves_every_enrichable_field_empty(self, failed_result):
        data = fuse([failed_result("linkedin")]).model_dump(include=ENRICHABLE_FIELDS)
        assert all(v in (None, [], {}) for v in data.values())


# ============================================================================
# TEST: Adapter payload folding
# ============================================================================

class TestMergePayloads:

    def test_first_scalar_kept_lists_unioned(self):
        merged = merge_payloads([
            {"description": "search", "categories": ["Software"], "social_links": {"twitter": "a"}},
            {"description": "homepage", "tech_stack": ["React"], "social_links": {"twitter": "b", "github": "c"}},
            {"tech_stack": ["react", "Stripe"], "recent_news": ["Launch"]},
        ])

        assert merged["description"] == "search"
        assert merged["tech_stack"] == ["React", "Stripe"]
        assert merged["categories"] == ["Software"]
        assert merged["recent_news"] == ["Launch"]
        assert merged["social_links"] == {"twitter": "a", "github": "c"}


# ============================================================================
# TEST: Company type
# ============================================================================

class TestCompanyType:

    @pytest.mark.parametrize("fields,expected", [
        ({"stock_symbol": "ACME"}, "public"),
        ({"funding_stage": "Public", "employee_count": 50000}, "public"),
        ({"funding_total": "$1.2B", "funding_stage": "Series E"}, "unicorn"),
        ({"funding_total": "$50M", "funding_stage": "Series B", "employee_count": 5000}, "startup"),
        ({"founded_year": 2019, "employee_count": 2000}, "startup"),
        ({"founded_year": 1990, "employee_count": 25000}, "mnc"),
        ({"founded_year": 2001, "employee_count": 1500}, "enterprise"),
        ({"description": "A company"}, "startup"),
    ])
    def test_classification(self, fields, expected):
        assert determine_company_type(EnrichedProfile(**fields)) == expected

    def test_empty_profile_has_no_type(self):
        assert determine_company_type(EnrichedProfile()) is None

    def test_fuse_sets_company_type(self, ok_result):
        profile = fuse([ok_result("crunchbase", {"funding_stage": "Series B", "funding_total": "$50M"})])
        assert profile.company_type == "startup"
