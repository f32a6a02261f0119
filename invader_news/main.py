"""Invader News entrypoint.

Usage:
    invader-news [--force] [--commit]
    invader-news --serve

Without ``--serve`` the pipeline runs once (the hourly CI job). With
``--serve`` it runs on an interval and exposes Prometheus metrics.
"""

import argparse
import asyncio
import logging
import sys

from prometheus_client import start_http_server
from pythonjsonlogger import jsonlogger

from invader_news.config import settings
from invader_news.services.pipeline import run_pipeline
from invader_news.services.scheduler import start_scheduler, stop_scheduler

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """JSON structured logging on stdout."""
    handler = logging.StreamHandler(sys.stdout)
    formatter = jsonlogger.JsonFormatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
        rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
    )
    handler.setFormatter(formatter)
    logging.root.handlers = [handler]
    logging.root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    # Suppress verbose logs from external libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="invader-news",
        description="Build an RSS feed and archive pages from the invader-spotter.art news page.",
    )
    parser.add_argument(
        "--force", action="store_true",
        help="Publish even if the page did not change since the cached copy",
    )
    parser.add_argument(
        "--commit", action="store_true", default=None,
        help="Commit and push generated files (default: only in GitHub Actions)",
    )
    parser.add_argument(
        "--serve", action="store_true",
        help="Run every RUN_INTERVAL_MINUTES and expose metrics on METRICS_PORT",
    )
    return parser


async def serve(commit: bool | None = None) -> None:
    start_http_server(settings.metrics_port)
    logger.info("Metrics exposed on port %d", settings.metrics_port)
    start_scheduler(commit=commit)
    try:
        await asyncio.Event().wait()
    finally:
        stop_scheduler()


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    configure_logging()
    logger.info("Starting Invader News (GitHub Actions: %s)", settings.github_actions)

    if args.serve:
        try:
            asyncio.run(serve(commit=args.commit))
        except KeyboardInterrupt:
            logger.info("Shutting down Invader News")
        return 0

    try:
        status = asyncio.run(run_pipeline(force=args.force, commit=args.commit))
    except Exception:
        logger.exception("Fatal error")
        return 1

    logger.info("All done: %s", status)
    return 0


if __name__ == "__main__":
    sys.exit(main())
