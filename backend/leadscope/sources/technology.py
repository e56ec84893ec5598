# backend/leadscope/sources/technology.py
"""
Technology fingerprinting from a company's homepage.

Looks for signature strings in the served markup (script bundles, meta
generator tags), response headers (Server, X-Powered-By) and cookie names.
Only technologies with a known signature are ever reported.
"""

import re
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from bs4 import BeautifulSoup

from leadscope.sources.base import SourceAdapter
from leadscope.sources.parsing import extract_domain

logger = logging.getLogger(__name__)


# label -> regexes matched against lowercased markup
HTML_SIGNATURES: Dict[str, List[str]] = {
    "React": [r"react(?:-dom)?(?:\.production)?(?:\.min)?\.js", r"data-reactroot", r"__react"],
    "Next.js": [r"/_next/static/", r"__next_data__"],
    "Vue.js": [r"vue(?:\.runtime)?(?:\.global)?(?:\.min)?\.js", r"data-v-[0-9a-f]{6,}"],
    "Nuxt.js": [r"/_nuxt/", r"__nuxt__"],
    "Angular": [r"ng-version=", r"angular(?:\.min)?\.js"],
    "jQuery": [r"jquery(?:[.-]\d[\d.]*)?(?:\.min)?\.js"],
    "Bootstrap": [r"bootstrap(?:\.bundle)?(?:\.min)?\.(?:js|css)"],
    "Tailwind CSS": [r"tailwind(?:css)?(?:\.min)?\.css", r"cdn\.tailwindcss\.com"],
    "WordPress": [r"/wp-content/", r"/wp-includes/"],
    "Shopify": [r"cdn\.shopify\.com", r"shopify\.theme"],
    "HubSpot": [r"js\.hs-scripts\.com", r"js\.hsforms\.net", r"hs-analytics"],
    "Salesforce": [r"force\.com", r"pardot\.com"],
    "Google Analytics": [r"google-analytics\.com", r"googletagmanager\.com/gtag", r"gtag\("],
    "Google Tag Manager": [r"googletagmanager\.com/gtm\.js"],
    "Stripe": [r"js\.stripe\.com"],
    "Segment": [r"cdn\.segment\.com"],
    "Intercom": [r"widget\.intercom\.io", r"intercomsettings"],
}

# meta generator content -> label
GENERATOR_SIGNATURES: Dict[str, str] = {
    "wordpress": "WordPress",
    "drupal": "Drupal",
    "joomla": "Joomla",
    "wix": "Wix",
    "squarespace": "Squarespace",
    "webflow": "Webflow",
    "hugo": "Hugo",
    "gatsby": "Gatsby",
    "ghost": "Ghost",
}

# Server / X-Powered-By banner substrings -> label
HEADER_SIGNATURES: Dict[str, str] = {
    "nginx": "Nginx",
    "apache": "Apache",
    "cloudflare": "Cloudflare",
    "microsoft-iis": "IIS",
    "express": "Express",
    "next.js": "Next.js",
    "php": "PHP",
    "asp.net": "ASP.NET",
    "vercel": "Vercel",
    "netlify": "Netlify",
    "amazons3": "AWS",
    "awselb": "AWS",
    "cloudfront": "AWS",
}

# cookie name prefix -> label
COOKIE_SIGNATURES: Dict[str, str] = {
    "phpsessid": "PHP",
    "jsessionid": "Java",
    "asp.net_sessionid": "ASP.NET",
    "laravel_session": "Laravel",
    "csrftoken": "Django",
    "_shopify": "Shopify",
    "__cf_bm": "Cloudflare",
    "awsalb": "AWS",
    "hubspotutk": "HubSpot",
    "_ga": "Google Analytics",
}


def _add(found: List[str], label: str) -> None:
    if label not in found:
        found.append(label)


def detect_technologies(
    html: Optional[str],
    headers: Optional[Mapping[str, str]] = None,
    cookies: Optional[Iterable[str]] = None,
) -> List[str]:
    """
    Detect technologies from homepage markup, headers and cookie names.

    Returns:
        Deduplicated labels, in detection order
    """
    found: List[str] = []

    if html:
        lowered = html.lower()
        for label, patterns in HTML_SIGNATURES.items():
            if any(re.search(pattern, lowered) for pattern in patterns):
                _add(found, label)

        soup = BeautifulSoup(html, "html.parser")
        generator = soup.find("meta", attrs={"name": re.compile("^generator$", re.I)})
        if generator and generator.get("content"):
            content = generator["content"].lower()
            for needle, label in GENERATOR_SIGNATURES.items():
                if needle in content:
                    _add(found, label)

    if headers:
        normalized = {k.lower(): str(v).lower() for k, v in headers.items()}
        banner = " ".join(
            normalized.get(name, "") for name in ("server", "x-powered-by", "via", "x-served-by")
        )
        for needle, label in HEADER_SIGNATURES.items():
            if needle in banner:
                _add(found, label)
        if "x-shopify-stage" in normalized or "x-shopid" in normalized:
            _add(found, "Shopify")
        if "x-vercel-id" in normalized:
            _add(found, "Vercel")

    for cookie in cookies or []:
        name = cookie.lower()
        for prefix, label in COOKIE_SIGNATURES.items():
            if name.startswith(prefix):
                _add(found, label)

    return found


class TechnologyAdapter(SourceAdapter):
    """Fingerprints the technologies a company's homepage is built with."""

    name = "technology"
    source_id = "google"

    async def _fetch(self, company_name: str, domain: Optional[str] = None) -> Optional[Dict[str, Any]]:
        host = extract_domain(domain)
        if not host:
            return None

        response = await self.client.get(
            f"https://{host}",
            headers=self._headers(Accept="text/html,application/xhtml+xml"),
            follow_redirects=True,
        )
        response.raise_for_status()

        technologies = detect_technologies(response.text, response.headers, response.cookies.keys())
        logger.info(f"Detected {len(technologies)} technologies on {host}")
        return {"tech_stack": technologies}
