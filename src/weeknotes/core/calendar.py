"""ISO-8601 week arithmetic.

Only the calendar year/month/day of the input is used, so the same calendar
date yields the same week regardless of the caller's timezone.
"""

import math
from datetime import date, datetime, timedelta

from .model import WeekInfo


def as_calendar_date(value: date | datetime) -> date:
    """Reduce a date or datetime to its calendar date, dropping time of day."""
    if isinstance(value, datetime):
        return value.date()
    return date(value.year, value.month, value.day)


def _thursday_of_week(day: date) -> date:
    # isoweekday: Monday=1 .. Sunday=7
    return day + timedelta(days=4 - day.isoweekday())


def week_of_year(value: date | datetime) -> int:
    """
    Return the ISO week number (1..53) of a date.

    Week 1 is the week holding the year's first Thursday, so the last days of
    December can fall in week 1 of the next year and the first days of
    January in week 52/53 of the previous one.
    """
    thursday = _thursday_of_week(as_calendar_date(value))
    year_start = date(thursday.year, 1, 1)
    return math.ceil(((thursday - year_start).days + 1) / 7)


def iso_week_start(value: date | datetime) -> date:
    """Return the Monday of the ISO week containing the date."""
    return _thursday_of_week(as_calendar_date(value)) - timedelta(days=3)


def week_info(value: date | datetime) -> WeekInfo:
    return WeekInfo(week_number=week_of_year(value), week_start=iso_week_start(value))
