from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class ActionType(str, Enum):
    DESTRUCTION = "destruction"
    DAMAGE = "damage"
    NEW = "new"
    REACTIVATED = "reactivated"
    STATUS_CHANGE = "status_change"
    UNKNOWN = "unknown"


# --- Source structure ---
class MonthSection(BaseModel):
    year: int
    month: int


class DayFragment(BaseModel):
    """One ``<p>`` of a month container that starts with a day marker.

    ``day`` is the literal number from the page and is not checked against
    the length of the month.
    """
    day: int
    body_text: str


# --- Parsed news ---
class SpaceInvaderEvent(BaseModel):
    id: str
    type: ActionType
    emoji: str


class DayRecord(BaseModel):
    """All events reported for one day of one month section.

    ``events`` is never empty and keeps first-occurrence order of the ids.
    ``raw_content`` is the original French text, kept for the feed.
    """
    year: int
    month: int
    day: int
    date: str
    events: list[SpaceInvaderEvent]
    raw_content: str

    @property
    def sort_key(self) -> tuple[int, int, int]:
        return (self.year, self.month, self.day)


class ParsedResult(BaseModel):
    items: list[DayRecord]
    fetched_at: datetime
