import logging
from datetime import datetime, timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from invader_news.config import settings
from invader_news.services.pipeline import run_pipeline

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


def start_scheduler(commit: bool | None = None):
    """Start the hourly pipeline job. The first run starts immediately."""
    scheduler.add_job(
        _run_pipeline_job,
        "interval",
        minutes=settings.run_interval_minutes,
        kwargs={"commit": commit},
        id="news_pipeline",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        next_run_time=datetime.now(timezone.utc),
    )
    scheduler.start()
    logger.info("Scheduler started: pipeline every %d minutes", settings.run_interval_minutes)


def stop_scheduler():
    """Shut down the scheduler."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")


async def _run_pipeline_job(commit: bool | None = None):
    """Scheduled run: failures are logged and the next run is still scheduled."""
    logger.info("Scheduled pipeline run starting")
    try:
        status = await run_pipeline(commit=commit)
    except Exception:
        logger.exception("Scheduled pipeline run failed")
        return
    logger.info("Scheduled pipeline run finished: %s", status)
