from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from app.core.config import DUE_SOON_DAYS

DateLike = Union[date, datetime, str, None]


class DueCategory(str, Enum):
    OVERDUE = "overdue"
    TODAY = "today"
    SOON = "soon"
    UPCOMING = "upcoming"
    NORMAL = "normal"
    NONE = "none"


@dataclass(frozen=True)
class DueInfo:
    category: DueCategory
    label: Optional[str] = None
    days: Optional[int] = None


def as_day(value: DateLike) -> Optional[date]:
    """Truncate a date, datetime or ISO string to its calendar day."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    return date.fromisoformat(text[:10])


def days_until(due: DateLike, today: DateLike) -> Optional[int]:
    due_day = as_day(due)
    if due_day is None:
        return None
    return (due_day - as_day(today)).days


def classify_due(due: DateLike, today: DateLike, window: int = DUE_SOON_DAYS) -> DueInfo:
    """
    Map a due date to an urgency category and the label shown next to it.

    Both sides are compared as calendar days, so the time of day never moves a
    task between categories. Nothing here is stored; callers recompute it on
    every read.
    """
    diff = days_until(due, today)

    if diff is None:
        return DueInfo(DueCategory.NONE)
    if diff < 0:
        return DueInfo(DueCategory.OVERDUE, f"{abs(diff)} day(s) overdue", diff)
    if diff == 0:
        return DueInfo(DueCategory.TODAY, "Today", diff)
    if diff == 1:
        return DueInfo(DueCategory.SOON, "Tomorrow", diff)
    if diff <= window:
        return DueInfo(DueCategory.UPCOMING, f"In {diff} days", diff)
    return DueInfo(DueCategory.NORMAL, None, diff)
