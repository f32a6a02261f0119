"""Markdown archive of the parsed news and the HTML page rendered from it.

Organised year -> month -> day, newest first.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markdown_it import MarkdownIt

from invader_news.config import settings
from invader_news.parsers.utils import month_name
from invader_news.schemas import DayRecord
from invader_news.services.rss_generator import group_events_by_type

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
INSTAGRAM_TAG_URL = "https://www.instagram.com/explore/tags/{id}"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)
_md = MarkdownIt("commonmark")


def format_type_label(action: str) -> str:
    """``status_change`` -> ``Status Change``"""
    return " ".join(word.capitalize() for word in action.split("_"))


def format_day_line(item: DayRecord) -> str:
    date_str = f"{item.day} {month_name(item.month)} {item.year}"
    groups = []
    for action, (emoji, ids) in group_events_by_type(item.events).items():
        linked = ", ".join(f"[{i}]({INSTAGRAM_TAG_URL.format(id=i)})" for i in ids)
        groups.append(f"{emoji} **{format_type_label(action)}**: {linked}")
    return f"- **{date_str}** — {' • '.join(groups)}"


def generate_markdown(items: list[DayRecord]) -> str:
    logger.info("Generating Markdown...")
    if not items:
        return "# Space Invaders News\n\nNo entries found.\n"

    by_year: dict[int, dict[int, list[DayRecord]]] = defaultdict(lambda: defaultdict(list))
    for item in items:
        by_year[item.year][item.month].append(item)

    lines = [
        "# Space Invaders News",
        "",
        "_Data sourced from [invader-spotter.art](https://www.invader-spotter.art) "
        "- a community project tracking Space Invaders worldwide._",
        "",
    ]
    for year in sorted(by_year, reverse=True):
        lines += [f"## {year}", ""]
        for month in sorted(by_year[year], reverse=True):
            lines += [f"### {month_name(month)}", ""]
            # stable sort keeps same-day records in parse order
            for item in sorted(by_year[year][month], key=lambda i: i.day, reverse=True):
                lines.append(format_day_line(item))
            lines.append("")

    logger.info("Generated Markdown with %d day entries", len(items))
    return "\n".join(lines)


def generate_html(markdown: str) -> str:
    """Render *markdown* into the standalone index page."""
    logger.info("Generating HTML from Markdown...")
    body = _md.render(markdown)
    page = _env.get_template("index.html").render(content=body, title="Space Invaders News")
    logger.info("Generated HTML page (%d chars)", len(page))
    return page


def _save(content: str, path: str | Path | None, default_name: str) -> Path:
    target = Path(path) if path else Path(settings.docs_dir) / default_name
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    logger.info("Saved %s", target)
    return target


def save_markdown(content: str, path: str | Path | None = None) -> Path:
    return _save(content, path, "NEWS.md")


def save_html(content: str, path: str | Path | None = None) -> Path:
    return _save(content, path, "index.html")
