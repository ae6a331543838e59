"""
News app service layer.

A thin proxy in front of the GNews search API so the API key never
reaches the browser.  The upstream JSON is passed through unchanged.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from django.conf import settings

from core.domain.exceptions import UpstreamError

logger = logging.getLogger(__name__)

CYBERCRIME_QUERY = {"q": "cybercrime", "lang": "en", "max": 30}


class NewsService:
    """
    Fetches cybercrime headlines from GNews.

    ``transport`` is handed to ``httpx.Client``; ``None`` means the real
    network.
    """

    transport: httpx.BaseTransport | None = None

    @classmethod
    def fetch_cybercrime_news(cls) -> Any:
        """
        Raises:
            UpstreamError: ``GNEWS_API_KEY`` is not configured, or GNews
                           could not be reached or answered with an error.
        """
        api_key = settings.GNEWS_API_KEY
        if not api_key:
            logger.error("GNews API key is not configured")
            raise UpstreamError("GNews API key is not configured.")

        params = {**CYBERCRIME_QUERY, "apikey": api_key}
        try:
            with httpx.Client(timeout=settings.GNEWS_TIMEOUT_SECONDS, transport=cls.transport) as client:
                resp = client.get(settings.GNEWS_API_URL, params=params)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "GNews answered %d: %s", exc.response.status_code, exc.response.text[:200],
            )
            raise UpstreamError("Error fetching news articles.") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("GNews request failed: %s", exc)
            raise UpstreamError("Error fetching news articles.") from exc

        articles = payload.get("articles", []) if isinstance(payload, dict) else []
        logger.info("Fetched %d cybercrime article(s) from GNews", len(articles))
        return payload
