# backend/leadscope/services/prospecting.py
"""
Placeholder lead generation for demos.

Companies come from a small curated catalog; contact names, titles and
recent-activity strings are randomly generated and are NOT real people.
Randomness is confined to this module (injectable random.Random) so the
scoring core stays deterministic.
"""

import random
import logging
from typing import Dict, List, Optional

from leadscope.schemas.lead import LeadCreate
from leadscope.sources.parsing import slugify

logger = logging.getLogger(__name__)


COMPANY_CATALOG: List[Dict] = [
    {
        "company_name": "Vercel",
        "industry": "SaaS",
        "location": "San Francisco, CA",
        "website": "https://vercel.com",
        "company_size": "200-500",
        "employee_count": 300,
        "tech_stack": ["Next.js", "React", "TypeScript", "Node.js"],
        "funding_info": "Series B - $150M",
    },
    {
        "company_name": "Supabase",
        "industry": "SaaS",
        "location": "San Francisco, CA",
        "website": "https://supabase.com",
        "company_size": "50-200",
        "employee_count": 85,
        "tech_stack": ["PostgreSQL", "React", "TypeScript", "Elixir"],
        "funding_info": "Series A - $30M",
    },
    {
        "company_name": "PlanetScale",
        "industry": "SaaS",
        "location": "San Francisco, CA",
        "website": "https://planetscale.com",
        "company_size": "50-200",
        "employee_count": 120,
        "tech_stack": ["MySQL", "Go", "Vitess", "Kubernetes"],
        "funding_info": "Series B - $50M",
    },
    {
        "company_name": "Railway",
        "industry": "Cloud Services",
        "location": "San Francisco, CA",
        "website": "https://railway.app",
        "company_size": "10-50",
        "employee_count": 25,
        "tech_stack": ["Docker", "Kubernetes", "Go", "React"],
        "funding_info": "Seed - $6M",
    },
    {
        "company_name": "Linear",
        "industry": "SaaS",
        "location": "San Francisco, CA",
        "website": "https://linear.app",
        "company_size": "50-200",
        "employee_count": 65,
        "tech_stack": ["React", "TypeScript", "GraphQL", "Node.js"],
        "funding_info": "Series A - $35M",
    },
    {
        "company_name": "Plaid",
        "industry": "Fintech",
        "location": "San Francisco, CA",
        "website": "https://plaid.com",
        "company_size": "1000+",
        "employee_count": 1200,
        "tech_stack": ["Go", "Python", "React", "AWS"],
        "funding_info": "Series D - $425M",
    },
    {
        "company_name": "Snyk",
        "industry": "Cybersecurity",
        "location": "Boston, MA",
        "website": "https://snyk.io",
        "company_size": "1000+",
        "employee_count": 1100,
        "tech_stack": ["TypeScript", "Node.js", "Kubernetes", "AWS"],
        "funding_info": "Series F - $196M",
    },
    {
        "company_name": "Hex",
        "industry": "Data Analytics",
        "location": "San Francisco, CA",
        "website": "https://hex.tech",
        "company_size": "50-200",
        "employee_count": 110,
        "tech_stack": ["Python", "React", "TypeScript"],
        "funding_info": "Series B - $52M",
    },
]

EXECUTIVE_TITLES = [
    "CEO", "CTO", "VP of Sales", "VP of Marketing", "VP of Engineering",
    "Chief Revenue Officer", "VP of Product", "Director of Engineering",
    "Head of Operations", "Chief Marketing Officer",
]

FIRST_NAMES = [
    "Alex", "Sarah", "Michael", "Emily", "David", "Lisa", "Robert", "Jennifer",
    "Chris", "Amanda", "Daniel", "Rachel", "Matthew", "Nicole", "Andrew", "Jessica",
]

LAST_NAMES = [
    "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis", "Rodriguez",
    "Martinez", "Wilson", "Anderson", "Thomas", "Taylor", "Moore", "Lee", "Harris",
]

RECENT_ACTIVITIES = [
    "Visited pricing page",
    "Downloaded whitepaper on industry trends",
    "Attended virtual product demo",
    "Requested trial access",
    "Viewed case studies section",
    "Signed up for newsletter",
    "Downloaded technical documentation",
    "Attended webinar on best practices",
    "Requested custom demo",
]


class LeadProspector:
    """Produces placeholder LeadCreate records for an industry."""

    def __init__(self, rng: Optional[random.Random] = None, catalog: Optional[List[Dict]] = None):
        self.rng = rng or random.Random()
        self.catalog = catalog if catalog is not None else COMPANY_CATALOG

    def _contact(self, company: Dict, used_titles: set) -> Dict[str, str]:
        available = [t for t in EXECUTIVE_TITLES if t not in used_titles] or EXECUTIVE_TITLES
        job_title = self.rng.choice(available)
        used_titles.add(job_title)

        first = self.rng.choice(FIRST_NAMES)
        last = self.rng.choice(LAST_NAMES)
        domain = f"{slugify(company['company_name'], '')}.com"
        return {
            "contact_name": f"{first} {last}",
            "job_title": job_title,
            "email": f"{first.lower()}.{last.lower()}@{domain}",
        }

    def prospect(self, industry: str, limit: int = 10) -> List[LeadCreate]:
        """
        Generate up to `limit` leads, one contact per company, cycling
        through matching companies for further contacts.

        Falls back to the whole catalog when no company matches the industry.
        """
        if limit < 1:
            return []

        needle = (industry or "").strip().lower()
        companies = [c for c in self.catalog if needle and needle in c["industry"].lower()]
        if not companies:
            logger.info(f"No catalog companies for industry '{industry}', using full catalog")
            companies = list(self.catalog)
        if not companies:
            return []

        used_titles: Dict[str, set] = {}
        leads: List[LeadCreate] = []
        for i in range(limit):
            company = companies[i % len(companies)]
            contact = self._contact(company, used_titles.setdefault(company["company_name"], set()))
            leads.append(LeadCreate(
                **company,
                **contact,
                recent_activity=self.rng.choice(RECENT_ACTIVITIES),
            ))

        logger.info(f"Prospected {len(leads)} placeholder leads for '{industry}'")
        return leads
