# backend/leadscope/sources/github.py
"""
GitHub organization lookup - tech stack from repository languages
"""

import logging
from collections import Counter
from typing import Any, Dict, Optional

from leadscope.sources.base import SourceAdapter
from leadscope.sources.parsing import extract_domain, slugify

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"
MAX_LANGUAGES = 8


def org_login(company_name: str, domain: Optional[str] = None) -> str:
    """Best guess at the org handle: domain label first, then the slugged name."""
    host = extract_domain(domain)
    if host:
        return host.split(".")[0]
    return slugify(company_name)


class GitHubAdapter(SourceAdapter):
    """
    Code-hosting organization lookup.

    Works unauthenticated at a low rate limit; GITHUB_TOKEN raises it.
    """

    name = "github"
    source_id = "github"

    def _api_headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.user_agent,
        }
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _fetch(self, company_name: str, domain: Optional[str] = None) -> Optional[Dict[str, Any]]:
        login = org_login(company_name, domain)

        response = await self.client.get(f"{API_URL}/orgs/{login}", headers=self._api_headers())
        response.raise_for_status()
        org = response.json()

        repos_response = await self.client.get(
            f"{API_URL}/orgs/{login}/repos",
            params={"per_page": 50, "sort": "pushed"},
            headers=self._api_headers(),
        )
        repos_response.raise_for_status()
        repos = repos_response.json()

        languages = Counter(repo["language"] for repo in repos if repo.get("language"))
        tech_stack = [language for language, _ in languages.most_common(MAX_LANGUAGES)]

        social = {"github": org.get("html_url") or f"https://github.com/{login}"}
        if org.get("twitter_username"):
            social["twitter"] = f"https://twitter.com/{org['twitter_username']}"

        logger.info(f"GitHub org '{login}': {org.get('public_repos', 0)} repos, languages {tech_stack}")

        return {
            "description": org.get("description"),
            "website": org.get("blog"),
            "headquarters": org.get("location"),
            "tech_stack": tech_stack,
            "social_links": social,
            "public_repos": org.get("public_repos"),
        }
