# backend/leadscope/sources/simulation.py
"""
Deterministic fabricated payloads for ENRICHMENT_MODE=simulated.

Used for demos and local development without API keys. Every payload is a
pure function of (adapter name, company name, domain), so repeated runs
enrich the same company identically.
"""

from typing import Any, Callable, Dict, Optional

from leadscope.sources.news import growth_signals
from leadscope.sources.parsing import slugify, extract_domain


def _domain(company_name: str, domain: Optional[str]) -> str:
    return extract_domain(domain) or f"{slugify(company_name, '')}.com"


def _linkedin(company_name: str, domain: Optional[str]) -> Dict[str, Any]:
    return {
        "description": f"{company_name} is a leading technology company focused on innovation.",
        "industry": "Technology",
        "employee_count": 1500,
        "headquarters": "San Francisco, CA",
        "founded_year": 2010,
        "website": f"https://{_domain(company_name, domain)}",
        "categories": ["Software Development", "AI", "Machine Learning"],
        "social_links": {
            "linkedin": f"https://www.linkedin.com/company/{slugify(company_name)}",
        },
    }


def _crunchbase(company_name: str, domain: Optional[str]) -> Dict[str, Any]:
    return {
        "description": f"{company_name} develops innovative technology solutions.",
        "founded_year": 2010,
        "categories": ["Software", "Technology", "Enterprise Software"],
        "funding_total": "$50M",
        "funding_stage": "Series B",
        "headquarters": "San Francisco, California, United States",
        "employee_count": 501,
        "website": f"https://{_domain(company_name, domain)}",
    }


def _github(company_name: str, domain: Optional[str]) -> Dict[str, Any]:
    org = slugify(company_name)
    return {
        "description": f"Official GitHub organization for {company_name}",
        "headquarters": "San Francisco, CA",
        "website": f"https://{_domain(company_name, domain)}",
        "tech_stack": ["TypeScript", "Python", "Go", "React", "Node.js"],
        "social_links": {"github": f"https://github.com/{org}"},
        "public_repos": 45,
    }


def _google_search(company_name: str, domain: Optional[str]) -> Dict[str, Any]:
    handle = slugify(company_name, "")
    return {
        "description": f"{company_name} is a leading technology company providing innovative solutions.",
        "website": f"https://{_domain(company_name, domain)}",
        "headquarters": "123 Tech Street, San Francisco, CA 94105",
        "phone": "+1-555-123-4567",
        "categories": ["Software Company", "Technology", "Business Services"],
        "social_links": {
            "linkedin": f"https://linkedin.com/company/{slugify(company_name)}",
            "twitter": f"https://twitter.com/{handle}",
            "facebook": f"https://facebook.com/{handle}",
        },
    }


def _website(company_name: str, domain: Optional[str]) -> Dict[str, Any]:
    return {
        "description": f"{company_name} helps modern businesses ship faster.",
        "website": f"https://{_domain(company_name, domain)}",
    }


def _technology(company_name: str, domain: Optional[str]) -> Dict[str, Any]:
    return {"tech_stack": ["React", "Next.js", "Google Analytics"]}


def _news(company_name: str, domain: Optional[str]) -> Dict[str, Any]:
    headlines = [
        f"{company_name} Announces New Product Launch",
        f"{company_name} Raises Series B Funding",
    ]
    return {
        "recent_news": headlines,
        "growth_signals": growth_signals(headlines),
        "news_sentiment": "positive",
    }


SIMULATORS: Dict[str, Callable[[str, Optional[str]], Dict[str, Any]]] = {
    "linkedin": _linkedin,
    "crunchbase": _crunchbase,
    "github": _github,
    "google_search": _google_search,
    "website": _website,
    "technology": _technology,
    "news": _news,
}


def simulated_payload(adapter_name: str, company_name: str, domain: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """Fabricated payload for one adapter, or None when it has no simulator."""
    simulator = SIMULATORS.get(adapter_name)
    if not simulator or not company_name:
        return None
    return simulator(company_name, domain)
