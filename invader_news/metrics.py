"""Prometheus metrics for Invader News.

All custom metrics use the 'invader_news_' prefix to avoid conflicts
with other applications in a shared observability stack.
"""

from prometheus_client import Counter, Gauge, Histogram, Info

# Application info
APP_INFO = Info(
    "invader_news_app",
    "Invader News application info"
)
APP_INFO.info({"version": "1.0.0", "name": "invader-news"})

# Pipeline runs
RUN_TOTAL = Counter(
    "invader_news_runs_total",
    "Total number of pipeline runs by outcome",
    ["status"],  # status: completed, unchanged, failed
)

RUN_DURATION_SECONDS = Histogram(
    "invader_news_run_duration_seconds",
    "Duration of pipeline runs in seconds",
    buckets=[0.5, 1, 2, 5, 10, 30, 60, 120],
)

LAST_RUN_TIMESTAMP = Gauge(
    "invader_news_last_run_timestamp",
    "Unix timestamp of the last pipeline run",
)

# Parsed data
DAY_RECORDS_PARSED = Gauge(
    "invader_news_day_records_parsed",
    "Number of day records parsed from the news page in the last run",
)

FEED_ENTRIES_PUBLISHED = Gauge(
    "invader_news_feed_entries_published",
    "Number of day records published in the RSS feed in the last run",
)

FETCH_ERRORS_TOTAL = Counter(
    "invader_news_fetch_errors_total",
    "News page fetches that failed after all retries",
)
