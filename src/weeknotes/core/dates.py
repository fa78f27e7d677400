"""Token-based date formatting.

Supported tokens:

    YYYY  4-digit year           YY    last two digits of the year
    MMMM  full month name        MMM   3-letter month name
    MM    zero-padded month      M     month number
    DD    zero-padded day        D     day number
    dddd  full weekday name      ddd   3-letter weekday name

Anything else is copied through. There is no escape syntax: literal text that
happens to spell a token (the "D" in "Daily") is substituted too.
"""

import re
from datetime import date, datetime

from .calendar import as_calendar_date

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# Indexed by date.weekday(): Monday=0
WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)

# Longest token first within each letter so "YYYY" is never read as "YY" + "YY".
_TOKEN = re.compile(r"YYYY|YY|MMMM|MMM|MM|M|DD|D|dddd|ddd")


def _render(token: str, day: date) -> str:
    if token == "YYYY":
        return str(day.year)
    if token == "YY":
        return str(day.year)[-2:]
    if token == "MMMM":
        return MONTH_NAMES[day.month - 1]
    if token == "MMM":
        return MONTH_NAMES[day.month - 1][:3]
    if token == "MM":
        return f"{day.month:02d}"
    if token == "M":
        return str(day.month)
    if token == "DD":
        return f"{day.day:02d}"
    if token == "D":
        return str(day.day)
    if token == "dddd":
        return WEEKDAY_NAMES[day.weekday()]
    if token == "ddd":
        return WEEKDAY_NAMES[day.weekday()][:3]
    raise ValueError(f"Unknown date token: {token}")


def format_date(value: date | datetime, fmt: str) -> str:
    """
    Render a date using the tokens above.

    The format is scanned once from left to right, so the text a token emits
    (e.g. "March") is never re-read by a shorter token.

    Examples:
        >>> format_date(date(2024, 3, 5), "YYYY-MM-DD")
        '2024-03-05'
        >>> format_date(date(2024, 3, 5), "dddd, MMMM D")
        'Tuesday, March 5'
    """
    day = as_calendar_date(value)
    return _TOKEN.sub(lambda m: _render(m.group(0), day), fmt)
