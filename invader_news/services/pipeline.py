"""One run of the news pipeline: fetch -> detect changes -> parse -> publish."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from pathlib import Path

from invader_news.config import settings
from invader_news.errors import FetchError, GitError
from invader_news.metrics import (
    DAY_RECORDS_PARSED,
    FEED_ENTRIES_PUBLISHED,
    FETCH_ERRORS_TOTAL,
    LAST_RUN_TIMESTAMP,
    RUN_DURATION_SECONDS,
    RUN_TOTAL,
)
from invader_news.parsers.news import filter_last_n_days, parse_news
from invader_news.services import git_handler
from invader_news.services.change_detector import has_changed
from invader_news.services.fetcher import fetch_news
from invader_news.services.markdown_generator import (
    generate_html,
    generate_markdown,
    save_html,
    save_markdown,
)
from invader_news.services.news_cache import cache_news, get_cached_news
from invader_news.services.rss_generator import generate_rss, save_rss

logger = logging.getLogger(__name__)


def _output_files() -> list[str]:
    docs = Path(settings.docs_dir)
    return [
        str(Path(settings.cache_path)),
        str(docs / "feed.xml"),
        str(docs / "NEWS.md"),
        str(docs / "index.html"),
    ]


def _commit_outputs() -> None:
    """Commit the generated files. Failures are logged, the files stay on disk."""
    message = f"Update Space Invaders news - {datetime.now(timezone.utc).date().isoformat()}"
    try:
        git_handler.configure_git()
        git_handler.commit_and_push(_output_files(), message)
    except GitError as e:
        logger.warning("Failed to commit changes: %s", e)


async def run_pipeline(force: bool = False, commit: bool | None = None) -> str:
    """Run the pipeline once and return its outcome.

    Returns ``"unchanged"`` when the page matches the cache (and *force* is
    not set) or ``"completed"`` once the feed and pages were written.
    *commit* defaults to running in GitHub Actions.
    """
    if commit is None:
        commit = settings.github_actions
    started = time.monotonic()
    LAST_RUN_TIMESTAMP.set_to_current_time()

    try:
        try:
            fresh_html = await fetch_news()
        except FetchError:
            FETCH_ERRORS_TOTAL.inc()
            raise

        cached_html = get_cached_news()
        if not force and cached_html is not None and not has_changed(fresh_html, cached_html):
            logger.info("No changes detected, nothing to publish")
            RUN_TOTAL.labels(status="unchanged").inc()
            return "unchanged"

        parsed = parse_news(fresh_html)
        DAY_RECORDS_PARSED.set(len(parsed.items))

        recent = filter_last_n_days(parsed.items, settings.feed_window_days)
        logger.info(
            "Filtered to %d entries in last %d days", len(recent), settings.feed_window_days
        )
        save_rss(generate_rss(recent, settings.site_url))
        FEED_ENTRIES_PUBLISHED.set(len(recent))

        markdown = generate_markdown(parsed.items)
        save_markdown(markdown)
        save_html(generate_html(markdown))

        cache_news(fresh_html)

        if commit:
            _commit_outputs()
        else:
            logger.info("Skipping git operations (not running in GitHub Actions)")
    except Exception:
        RUN_TOTAL.labels(status="failed").inc()
        raise
    finally:
        RUN_DURATION_SECONDS.observe(time.monotonic() - started)

    RUN_TOTAL.labels(status="completed").inc()
    logger.info("Pipeline completed: %d day entries published", len(parsed.items))
    return "completed"
