"""Shared utilities for the news parser.

Patterns for month container ids, day markers and Space Invader ids,
the French action keyword table, and the calendar helpers used when
sorting and filtering day records.
"""

from __future__ import annotations

import re
from datetime import date, timedelta

from invader_news.schemas import ActionType

# Month containers are <div id="moisYYYYMM">
MONTH_ID_RE = re.compile(r"^mois(\d{4})(\d{2})")

# "12 : text", "3: text", "3 ： text" (full-width colon); the body may span lines
DAY_MARKER_RE = re.compile(r"^(\d{1,2})\s*[:：]\s*(.+)$", re.DOTALL)

# Space Invader ids: two or more capitals, underscore, digits (PA_1234, ROM_12)
INVADER_ID_RE = re.compile(r"[A-Z]{2,}_\d+")

# ── Action keywords ──────────────────────────────────────────────────
# Evaluated in order against the lower-cased fragment; first match wins.
ACTION_KEYWORDS: list[tuple[str, ActionType]] = [
    ("destruction", ActionType.DESTRUCTION),
    ("dégradation", ActionType.DAMAGE),
    ("ajout", ActionType.NEW),
    ("réactivation", ActionType.REACTIVATED),
    ("changement de statut", ActionType.STATUS_CHANGE),
    ("changement", ActionType.STATUS_CHANGE),
]

ACTION_EMOJI: dict[ActionType, str] = {
    ActionType.DESTRUCTION: "🔴",
    ActionType.DAMAGE: "🟡",
    ActionType.NEW: "🟢",
    ActionType.REACTIVATED: "🟢",
    ActionType.STATUS_CHANGE: "⚪",
    ActionType.UNKNOWN: "⚪",
}

MONTH_NAMES = [
    "", "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def format_date(year: int, month: int, day: int) -> str:
    """Return ``YYYY-MM-DD`` from the literal integers, without validation."""
    return f"{year}-{month:02d}-{day:02d}"


def calendar_date(year: int, month: int, day: int) -> date:
    """Return the calendar date for a (year, month, day) triple.

    Days past the end of the month roll over into the next month and day 0
    is the last day of the previous month, so ``(2026, 2, 31)`` is
    2026-03-03. Rolling past the supported calendar range clamps to
    ``date.min`` or ``date.max``.
    """
    try:
        return date(year, month, 1) + timedelta(days=day - 1)
    except OverflowError:
        return date.max if day > 1 else date.min


def month_name(month: int) -> str:
    if 1 <= month <= 12:
        return MONTH_NAMES[month]
    return "Unknown"
