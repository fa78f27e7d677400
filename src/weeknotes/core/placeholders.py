"""Template placeholders ({{woy}}, {{date}}, ...) and their substitution."""

import re
from datetime import date, datetime

from .calendar import as_calendar_date, week_info
from .dates import format_date
from .model import PlaceholderMap

WEEK_OF_YEAR = ("{{woy}}", "{{week_of_year}}")
WEEK_START_DATE = ("{{wsd}}", "{{week_start_date}}")
DATE = "{{date}}"

NOTE_EXTENSION = ".md"


def build_placeholders(
    value: date | datetime,
    date_format: str,
    week_start_format: str,
) -> PlaceholderMap:
    """
    Build the placeholder map for one note.

    Short and long aliases map to the same string, so templates can use
    either spelling.
    """
    day = as_calendar_date(value)
    week = week_info(day)
    week_number = str(week.week_number)
    week_start = format_date(week.week_start, week_start_format)

    placeholders: PlaceholderMap = {}
    for token in WEEK_OF_YEAR:
        placeholders[token] = week_number
    for token in WEEK_START_DATE:
        placeholders[token] = week_start
    placeholders[DATE] = format_date(day, date_format)
    return placeholders


def substitute(text: str, placeholders: PlaceholderMap) -> str:
    """
    Replace every literal occurrence of every placeholder in a single pass.

    Tokens are matched as plain strings, longest first, and replacement text
    is never re-scanned, so the result does not depend on the map's order.
    """
    if not placeholders or not text:
        return text
    tokens = sorted(placeholders, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(t) for t in tokens))
    return pattern.sub(lambda m: placeholders[m.group(0)], text)


def ensure_extension(name: str, suffix: str = NOTE_EXTENSION) -> str:
    """Append the suffix unless the name already ends with it (case-sensitive)."""
    if name.endswith(suffix):
        return name
    return name + suffix
