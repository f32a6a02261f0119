"""Pipeline tests with the fetcher and git mocked out."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from invader_news.config import settings
from invader_news.errors import FetchError, GitError

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def workspace(tmp_path):
    with (
        patch.object(settings, "cache_path", str(tmp_path / "data" / "news-cache.html")),
        patch.object(settings, "docs_dir", str(tmp_path / "docs")),
        patch.object(settings, "site_url", "https://example.org/invaders"),
        patch.object(settings, "feed_window_days", 30),
    ):
        yield tmp_path


@pytest.fixture
def page() -> str:
    return (FIXTURES / "news.html").read_text(encoding="utf-8")


@pytest.mark.asyncio
async def test_first_run_writes_all_outputs(workspace, page):
    from invader_news.services.pipeline import run_pipeline

    with patch("invader_news.services.pipeline.fetch_news", new_callable=AsyncMock, return_value=page):
        status = await run_pipeline(commit=False)

    assert status == "completed"
    docs = workspace / "docs"
    feed = (docs / "feed.xml").read_text(encoding="utf-8")
    news = (docs / "NEWS.md").read_text(encoding="utf-8")
    assert (docs / "index.html").exists()
    assert (workspace / "data" / "news-cache.html").read_text(encoding="utf-8") == page

    # the feed keeps the trailing 30 days, the archive keeps everything
    assert "#2026-02-14" in feed
    assert "#2026-01-28" in feed
    assert "#2026-01-09" not in feed
    assert "31 December 2025" in news


@pytest.mark.asyncio
async def test_unchanged_page_stops_early(workspace, page):
    from invader_news.services.news_cache import cache_news
    from invader_news.services.pipeline import run_pipeline

    cache_news(page)
    with patch("invader_news.services.pipeline.fetch_news", new_callable=AsyncMock, return_value=page):
        status = await run_pipeline(commit=False)

    assert status == "unchanged"
    assert not (workspace / "docs" / "feed.xml").exists()


@pytest.mark.asyncio
async def test_force_publishes_unchanged_page(workspace, page):
    from invader_news.services.news_cache import cache_news
    from invader_news.services.pipeline import run_pipeline

    cache_news(page)
    with patch("invader_news.services.pipeline.fetch_news", new_callable=AsyncMock, return_value=page):
        status = await run_pipeline(force=True, commit=False)

    assert status == "completed"
    assert (workspace / "docs" / "feed.xml").exists()


@pytest.mark.asyncio
async def test_commits_generated_files(workspace, page):
    from invader_news.services.pipeline import run_pipeline

    with (
        patch("invader_news.services.pipeline.fetch_news", new_callable=AsyncMock, return_value=page),
        patch("invader_news.services.pipeline.git_handler") as git,
    ):
        await run_pipeline(commit=True)

    git.configure_git.assert_called_once()
    files, message = git.commit_and_push.call_args.args
    assert files[0].endswith("news-cache.html")
    assert [Path(f).name for f in files[1:]] == ["feed.xml", "NEWS.md", "index.html"]
    assert message.startswith("Update Space Invaders news - ")


@pytest.mark.asyncio
async def test_git_failure_does_not_fail_the_run(workspace, page):
    from invader_news.services.pipeline import run_pipeline

    git = MagicMock()
    git.commit_and_push.side_effect = GitError("git push failed")
    with (
        patch("invader_news.services.pipeline.fetch_news", new_callable=AsyncMock, return_value=page),
        patch("invader_news.services.pipeline.git_handler", git),
    ):
        status = await run_pipeline(commit=True)

    assert status == "completed"


@pytest.mark.asyncio
async def test_fetch_error_propagates(workspace):
    from invader_news.services.pipeline import run_pipeline

    with patch(
        "invader_news.services.pipeline.fetch_news",
        new_callable=AsyncMock,
        side_effect=FetchError("down"),
    ):
        with pytest.raises(FetchError):
            await run_pipeline(commit=False)


def test_main_returns_1_on_fatal_error(workspace):
    from invader_news import main as entrypoint

    with (
        patch.object(entrypoint, "configure_logging"),
        patch.object(entrypoint, "run_pipeline", new_callable=AsyncMock, side_effect=FetchError("down")),
    ):
        assert entrypoint.main([]) == 1


def test_main_passes_flags(workspace):
    from invader_news import main as entrypoint

    with (
        patch.object(entrypoint, "configure_logging"),
        patch.object(entrypoint, "run_pipeline", new_callable=AsyncMock, return_value="completed") as run,
    ):
        assert entrypoint.main(["--force", "--commit"]) == 0

    run.assert_awaited_once_with(force=True, commit=True)
