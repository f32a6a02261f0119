"""On-disk cache of the last fetched news page."""

from __future__ import annotations

import logging
from pathlib import Path

from invader_news.config import settings

logger = logging.getLogger(__name__)


def _cache_file(path: str | Path | None) -> Path:
    return Path(path or settings.cache_path)


def get_cached_news(path: str | Path | None = None) -> str | None:
    """Return the cached HTML, or None if there is no readable cache."""
    cache_file = _cache_file(path)
    if not cache_file.exists():
        logger.info("No cached news file found at %s", cache_file)
        return None

    try:
        cached = cache_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read news cache %s: %s", cache_file, e)
        return None

    logger.info("Loaded cached news (%d chars)", len(cached))
    return cached


def cache_news(html: str, path: str | Path | None = None) -> Path:
    """Write *html* to the cache file, creating its directory if needed."""
    cache_file = _cache_file(path)
    cache_file.parent.mkdir(parents=True, exist_ok=True)
    cache_file.write_text(html, encoding="utf-8")
    logger.info("Cached news to %s", cache_file)
    return cache_file
