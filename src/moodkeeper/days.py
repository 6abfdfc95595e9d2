from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta

DAY_KEY_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

TIME_BANDS = ("morning", "afternoon", "evening", "night")

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def day_key(value: date | datetime) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def parse_day_key(key: str) -> date:
    """
    Parse a canonical day-key ("YYYY-MM-DD") into a date.
    Rejects anything that is not exactly that shape or not a real calendar day.
    """
    s = str(key).strip()
    if not DAY_KEY_RE.fullmatch(s):
        raise ValueError(f"Malformed day-key {key!r}; expected YYYY-MM-DD")
    try:
        return datetime.strptime(s, "%Y-%m-%d").date()
    except ValueError as e:
        raise ValueError(f"Not a calendar day: {key!r}") from e


def is_day_key(key: str) -> bool:
    try:
        parse_day_key(key)
    except ValueError:
        return False
    return True


def days_between(earlier: str, later: str) -> int:
    """Signed number of calendar days from `earlier` to `later`."""
    return (parse_day_key(later) - parse_day_key(earlier)).days


def shift_day(key: str, days: int) -> str:
    return day_key(parse_day_key(key) + timedelta(days=days))


def days_ago(key: str, today: str) -> int:
    return days_between(key, today)


def parse_time_of_day(value: str) -> time:
    """
    Accepts "HH:MM:SS" or "HH:MM" (24h).
    """
    s = str(value).strip()
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(s, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Could not parse time of day {value!r}; expected HH:MM:SS")


def time_of_day_bucket(value: str) -> str:
    hour = parse_time_of_day(value).hour
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 21:
        return "evening"
    return "night"


# -------------------------
# Month arithmetic
# -------------------------

def month_start(today: str, months_back: int = 0) -> date:
    d = parse_day_key(today)
    index = d.year * 12 + (d.month - 1) - months_back
    return date(index // 12, index % 12 + 1, 1)


def month_end(start: date) -> date:
    if start.month == 12:
        nxt = date(start.year + 1, 1, 1)
    else:
        nxt = date(start.year, start.month + 1, 1)
    return nxt - timedelta(days=1)


# -------------------------
# Labels
# -------------------------

def daily_label(offset: int, day: date) -> str:
    if offset == 0:
        return "Today"
    if offset == 1:
        return "Yesterday"
    return _WEEKDAYS[day.weekday()]


def weekly_label(weeks_back: int) -> str:
    if weeks_back == 0:
        return "This Week"
    return f"{weeks_back} week{'s' if weeks_back > 1 else ''} ago"


def monthly_label(day: date) -> str:
    return _MONTHS[day.month - 1]


def format_day(key: str) -> str:
    d = parse_day_key(key)
    return f"{_WEEKDAYS[d.weekday()]}, {_MONTHS[d.month - 1]} {d.day}"


def relative_day_label(key: str, today: str) -> str:
    label = format_day(key)
    ago = days_ago(key, today)
    if ago == 0:
        label += " (Today)"
    elif ago == 1:
        label += " (Yesterday)"
    return label
