# backend/leadscope/sources/news.py
"""
Recent company news via NewsAPI
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from leadscope.sources.base import SourceAdapter

logger = logging.getLogger(__name__)

NEWSAPI_URL = "https://newsapi.org/v2/everything"

POSITIVE_WORDS = ["growth", "success", "launch", "funding", "expansion", "partnership", "innovation"]
NEGATIVE_WORDS = ["decline", "loss", "lawsuit", "investigation", "bankruptcy", "layoffs", "controversy"]
GROWTH_KEYWORDS = ["expansion", "hiring", "funding", "launch", "partnership", "acquisition", "growth", "series"]


def analyze_sentiment(text: str) -> str:
    """positive / negative / neutral by keyword balance"""
    lowered = text.lower()
    positive = sum(1 for word in POSITIVE_WORDS if word in lowered)
    negative = sum(1 for word in NEGATIVE_WORDS if word in lowered)
    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"


def overall_sentiment(sentiments: List[str]) -> str:
    """Majority of positive vs negative headlines; ties are neutral"""
    positive = sentiments.count("positive")
    negative = sentiments.count("negative")
    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"


def growth_signals(headlines: List[str]) -> List[str]:
    signals: List[str] = []
    for headline in headlines:
        lowered = headline.lower()
        for keyword in GROWTH_KEYWORDS:
            signal = f"Recent {keyword} activity detected"
            if keyword in lowered and signal not in signals:
                signals.append(signal)
    return signals


class NewsAdapter(SourceAdapter):
    """Headlines mentioning the company from the last 30 days."""

    name = "news"
    source_id = "google"
    requires_api_key = True

    max_articles = 5

    async def _fetch(self, company_name: str, domain: Optional[str] = None) -> Optional[Dict[str, Any]]:
        since = (datetime.now(timezone.utc) - timedelta(days=30)).strftime("%Y-%m-%d")
        response = await self.client.get(
            NEWSAPI_URL,
            params={
                "q": f'"{company_name}"',
                "from": since,
                "sortBy": "publishedAt",
                "language": "en",
                "pageSize": self.max_articles,
            },
            headers={"X-Api-Key": self.api_key},
        )
        response.raise_for_status()
        data = response.json()

        if data.get("status") != "ok":
            raise ValueError(data.get("message") or "NewsAPI returned an error status")

        headlines = [a["title"] for a in data.get("articles", []) if a.get("title")]
        if not headlines:
            return None

        sentiments = [analyze_sentiment(h) for h in headlines]
        logger.info(
            f"News for {company_name}: {len(headlines)} articles, "
            f"{sentiments.count('positive')} positive / {sentiments.count('negative')} negative"
        )

        return {
            "recent_news": headlines,
            "growth_signals": growth_signals(headlines),
            "news_sentiment": overall_sentiment(sentiments),
        }
