"""Parser for the invader-spotter.art news page.

The page groups news by month in ``<div id="moisYYYYMM">`` containers.
Each ``<p>`` inside a container is one day and starts with the day
number::

    <div id="mois202601">
      <p>12 : Ajout de PA_1501 et PA_1502.</p>
      <p>9 : Destruction de LDN_88.</p>
    </div>

Anything that does not fit this shape is skipped without error.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from datetime import date, datetime, timedelta, timezone

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag

from invader_news.errors import NewsParseError
from invader_news.parsers.base import BaseParser
from invader_news.parsers.utils import (
    DAY_MARKER_RE,
    MONTH_ID_RE,
    calendar_date,
    format_date,
)
from invader_news.schemas import DayFragment, DayRecord, MonthSection, ParsedResult
from invader_news.services.event_classifier import EventClassifier

logger = logging.getLogger(__name__)


def _load_document(html: str | bytes) -> BeautifulSoup:
    if not isinstance(html, (str, bytes)):
        raise NewsParseError(f"Expected HTML text, got {type(html).__name__}")
    try:
        return BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        raise NewsParseError(f"HTML could not be parsed: {e}") from e


# ---------------------------------------------------------------------------
# Section locator
# ---------------------------------------------------------------------------


def parse_month_id(container_id: str | None) -> MonthSection | None:
    """Return the (year, month) encoded in a ``moisYYYYMM`` id, or None."""
    if not container_id:
        return None
    m = MONTH_ID_RE.match(container_id)
    if not m:
        return None
    year, month = int(m.group(1)), int(m.group(2))
    if year < 1 or not 1 <= month <= 12:
        return None
    return MonthSection(year=year, month=month)


def locate_month_sections(soup: BeautifulSoup) -> Iterator[tuple[MonthSection, Tag]]:
    """Yield every month container of the page with its (year, month)."""
    for container in soup.find_all("div", id=True):
        container_id = container.get("id")
        if not container_id.startswith("mois"):
            continue
        section = parse_month_id(container_id)
        if section is None:
            logger.debug("Skipping container with unrecognised id %r", container_id)
            continue
        yield section, container


# ---------------------------------------------------------------------------
# Day splitter
# ---------------------------------------------------------------------------


def match_day_marker(text: str) -> DayFragment | None:
    """Split ``"DD : body"`` into a DayFragment, or None without a day marker.

    The body is kept as written, only trimmed.
    """
    text = text.strip()
    if not text:
        return None
    m = DAY_MARKER_RE.match(text)
    if not m:
        return None
    return DayFragment(day=int(m.group(1)), body_text=m.group(2))


def paragraph_text(paragraph: Tag) -> str:
    """Text of *paragraph* without the text of <p> elements nested in it.

    html.parser nests unclosed ``<p>`` tags, so the next day ends up
    inside the previous one.
    """
    return " ".join(
        s for s in paragraph.strings if s.find_parent("p") is paragraph
    )


def split_day_fragments(container: Tag) -> Iterator[DayFragment]:
    """Yield the day fragments of a month container in document order."""
    for paragraph in container.find_all("p"):
        text = paragraph_text(paragraph)
        fragment = match_day_marker(text)
        if fragment is None:
            if text.strip():
                logger.debug("Skipping paragraph without day marker: %.60s", text.strip())
            continue
        yield fragment


# ---------------------------------------------------------------------------
# Day record assembler
# ---------------------------------------------------------------------------


def build_day_record(year: int, month: int, day: int, body: str) -> DayRecord | None:
    """Return the DayRecord for one fragment, or None if it names no invader."""
    events = EventClassifier.build_events(body)
    if not events:
        return None
    return DayRecord(
        year=year,
        month=month,
        day=day,
        date=format_date(year, month, day),
        events=events,
        raw_content=body,
    )


def _iter_records(soup: BeautifulSoup) -> Iterator[DayRecord]:
    for section, container in locate_month_sections(soup):
        logger.debug("Processing %d-%02d", section.year, section.month)
        for fragment in split_day_fragments(container):
            record = build_day_record(section.year, section.month, fragment.day, fragment.body_text)
            if record is None:
                logger.debug(
                    "No invader id on %s", format_date(section.year, section.month, fragment.day)
                )
                continue
            yield record


def iter_day_records(html: str | bytes) -> Iterator[DayRecord]:
    """Lazily yield day records in document order.

    The document is loaded up front so that unreadable input raises
    NewsParseError here rather than on first iteration. Call again to
    restart.
    """
    return _iter_records(_load_document(html))


# ---------------------------------------------------------------------------
# Sorting and filtering
# ---------------------------------------------------------------------------


def sort_day_records(items: Iterable[DayRecord]) -> list[DayRecord]:
    """Return *items* oldest first. Records on the same day keep their order."""
    return sorted(items, key=lambda item: item.sort_key)


def filter_last_n_days(items: list[DayRecord], days: int) -> list[DayRecord]:
    """Keep the records dated within *days* days of the latest record.

    *items* must already be sorted oldest first (as returned by
    ``parse_news``); the last record is taken as the anchor. The cutoff
    is inclusive. Unsorted input gives an unspecified result.
    """
    if not items:
        return []

    last = items[-1]
    anchor = calendar_date(last.year, last.month, last.day)
    try:
        cutoff = anchor - timedelta(days=days)
    except OverflowError:
        # window reaches past the calendar range
        cutoff = date.min if days > 0 else date.max
    return [
        item for item in items
        if calendar_date(item.year, item.month, item.day) >= cutoff
    ]


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def parse_news(html: str | bytes) -> ParsedResult:
    """Parse the news page into day records sorted oldest first."""
    records = iter_day_records(html)
    logger.info("Parsing news HTML (%d chars)", len(html))
    items = sort_day_records(records)
    logger.info("Parsed %d day entries", len(items))
    return ParsedResult(items=items, fetched_at=datetime.now(timezone.utc))


class NewsParser(BaseParser):
    """Parser for invader-spotter.art/news.php."""

    def parse(self, html: str | bytes) -> ParsedResult:
        return parse_news(html)

    def iter_records(self, html: str | bytes) -> Iterator[DayRecord]:
        return iter_day_records(html)
