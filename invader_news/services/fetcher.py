from __future__ import annotations

import asyncio
import logging

import httpx

from invader_news.config import settings
from invader_news.errors import FetchError

logger = logging.getLogger(__name__)

# Bypass intermediate HTTP caches so an hourly run always sees fresh news
HEADERS: dict[str, str] = {
    "User-Agent": "InvaderNews/1.0 (+https://github.com/jfix/si-rss-generator)",
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


async def fetch_news(url: str | None = None) -> str:
    """Fetch the news page and return its HTML.

    Retries transient transport and HTTP status errors with a linear
    back-off, then raises FetchError.
    """
    url = url or settings.news_url
    max_retries = settings.fetch_max_retries
    last_exc: Exception | None = None

    async with httpx.AsyncClient(
        follow_redirects=True, timeout=settings.fetch_timeout, headers=HEADERS
    ) as client:
        for attempt in range(max_retries + 1):
            try:
                resp = await client.get(url)
                resp.raise_for_status()
                html = resp.text
                logger.info("Fetched %s (%d chars)", url, len(html))
                return html
            except (httpx.TransportError, httpx.HTTPStatusError) as e:
                last_exc = e
                logger.warning(
                    "Fetch attempt %d/%d failed for %s: %s",
                    attempt + 1, max_retries + 1, url, e,
                )
                if attempt < max_retries:
                    await asyncio.sleep(0.5 * (attempt + 1))

    raise FetchError(f"Failed to fetch {url}: {last_exc}") from last_exc
