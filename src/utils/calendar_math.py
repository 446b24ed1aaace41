"""
Calendar helpers for annual events.

Events are stored as (day, month) with a 0-based month and no year. All
comparisons are done on plain ``date`` values so time-of-day never matters.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Union
from zoneinfo import ZoneInfo

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Leap-year month lengths; Feb 29 is a legitimate event date.
MAX_DAYS_IN_MONTH = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_valid_event_day(day: int, month: int) -> bool:
    """True if (day, month) names a real calendar day in at least a leap year."""
    if not 0 <= month <= 11:
        return False
    return 1 <= day <= MAX_DAYS_IN_MONTH[month]


def event_date_for(year: int, month: int, day: int) -> date:
    """
    Build the concrete event date for a year.

    Days past the end of the month roll forward, so Feb 29 lands on Mar 1
    in a non-leap year.
    """
    return date(year, month + 1, 1) + timedelta(days=day - 1)


def anchored_event_date(
    today: date, month: int, day: int, lead_days: int = 7, trail_days: int = 2
) -> date:
    """
    Pick the occurrence of an annual event whose milestones apply on ``today``.

    This year's date is used unless today sits in the tail of last year's
    occurrence (up to ``trail_days`` after it) or in the lead-up to next year's
    (up to ``lead_days`` before it). A Dec 31 event viewed on Jan 2 and a Jan 3
    event viewed on Dec 28 both resolve across the year boundary.
    """
    previous = event_date_for(today.year - 1, month, day)
    if 0 <= (today - previous).days <= trail_days:
        return previous
    following = event_date_for(today.year + 1, month, day)
    if 0 <= (following - today).days <= lead_days:
        return following
    return event_date_for(today.year, month, day)


def normalize_today(value: Union[date, datetime], tz_name: Optional[str] = None) -> date:
    """Strip time-of-day, converting aware datetimes to the business timezone first."""
    if isinstance(value, datetime):
        if value.tzinfo is not None and tz_name:
            value = value.astimezone(ZoneInfo(tz_name))
        return value.date()
    return value


def today_in(tz_name: str) -> date:
    """Current calendar date in the business timezone."""
    return datetime.now(ZoneInfo(tz_name)).date()


def parse_iso_date(value: str) -> date:
    """Parse ``YYYY-MM-DD`` (anything after the date part is ignored)."""
    return date.fromisoformat(value[:10])
