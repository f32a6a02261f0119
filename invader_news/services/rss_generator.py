"""RSS 2.0 feed of the parsed news, one item per day, newest first."""

from __future__ import annotations

import html
import logging
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from email.utils import format_datetime
from pathlib import Path

from invader_news.config import settings
from invader_news.parsers.utils import calendar_date, month_name
from invader_news.schemas import DayRecord, SpaceInvaderEvent

logger = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
ET.register_namespace("atom", ATOM_NS)

FEED_TITLE = "Space Invaders News"
FEED_DESCRIPTION = (
    "Latest updates on Space Invaders creations, destructions, and damage. "
    "Data sourced from invader-spotter.art - a community project tracking "
    "Space Invaders worldwide."
)
FEED_TTL = 120
SOURCE_NAME = "invader-spotter.art"
SOURCE_URL = "https://www.invader-spotter.art"
FAVICON_URL = f"{SOURCE_URL}/favicon.ico"

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def group_events_by_type(events: list[SpaceInvaderEvent]) -> dict[str, tuple[str, list[str]]]:
    """Return ``{type: (emoji, ids)}`` in first-seen type order."""
    groups: dict[str, tuple[str, list[str]]] = {}
    for event in events:
        emoji, ids = groups.setdefault(event.type.value, (event.emoji, []))
        ids.append(event.id)
    return groups


def format_item_title(item: DayRecord) -> str:
    """``Monday, January 12, 2026``"""
    d = calendar_date(item.year, item.month, item.day)
    return f"{WEEKDAY_NAMES[d.weekday()]}, {month_name(d.month)} {d.day}, {d.year}"


def build_item_description(item: DayRecord) -> str:
    parts = ["<ul>"]
    for action, (emoji, ids) in group_events_by_type(item.events).items():
        label = action.replace("_", " ")
        parts.append(f"<li>{emoji} <strong>{label}</strong>: {', '.join(ids)}</li>")
    parts.append("</ul>")
    parts.append(
        f"<p><strong>Original:</strong> <em>{html.escape(item.raw_content)}</em></p>"
    )
    return "".join(parts)


def _sub(parent: ET.Element, tag: str, text: str | None = None, **attrib: str) -> ET.Element:
    el = ET.SubElement(parent, tag, attrib)
    if text is not None:
        el.text = text
    return el


def generate_rss(items: list[DayRecord], site_url: str | None = None) -> str:
    """Render *items* (oldest first, as parsed) as an RSS 2.0 document."""
    site_url = (site_url or settings.site_url).rstrip("/")
    logger.info("Generating RSS feed...")

    rss = ET.Element("rss", {"version": "2.0"})
    channel = _sub(rss, "channel")
    _sub(channel, "title", FEED_TITLE)
    _sub(channel, "link", site_url)
    _sub(channel, "description", FEED_DESCRIPTION)
    _sub(channel, "language", "en")
    _sub(channel, "lastBuildDate", format_datetime(datetime.now(timezone.utc)))
    _sub(channel, "generator", "Invader News")
    _sub(channel, "copyright", f"Data from {SOURCE_NAME} - Invader News")
    _sub(channel, "ttl", str(FEED_TTL))
    _sub(
        channel, f"{{{ATOM_NS}}}link",
        href=f"{site_url}/feed.xml", rel="self", type="application/rss+xml",
    )
    image = _sub(channel, "image")
    _sub(image, "title", FEED_TITLE)
    _sub(image, "url", FAVICON_URL)
    _sub(image, "link", site_url)

    for item in reversed(items):
        d = calendar_date(item.year, item.month, item.day)
        entry = _sub(channel, "item")
        _sub(entry, "title", format_item_title(item))
        _sub(entry, "link", f"{site_url}/#{item.date}")
        _sub(entry, "guid", f"{site_url}#{item.date}", isPermaLink="false")
        _sub(entry, "description", build_item_description(item))
        _sub(entry, "pubDate", format_datetime(datetime(d.year, d.month, d.day, tzinfo=timezone.utc)))
        _sub(entry, "author", f"noreply@invader-spotter.art ({SOURCE_NAME})")

    ET.indent(rss)
    content = '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(rss, encoding="unicode")
    logger.info("Generated RSS feed with %d entries", len(items))
    return content


def save_rss(content: str, path: str | Path | None = None) -> Path:
    rss_file = Path(path) if path else Path(settings.docs_dir) / "feed.xml"
    rss_file.parent.mkdir(parents=True, exist_ok=True)
    rss_file.write_text(content, encoding="utf-8")
    logger.info("Saved RSS feed to %s", rss_file)
    return rss_file
