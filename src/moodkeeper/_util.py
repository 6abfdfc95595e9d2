"""Wall-clock helpers. The only place the journal reads the system clock."""

from __future__ import annotations

from datetime import datetime


def _now_local() -> datetime:
    return datetime.now().astimezone()


def today_key() -> str:
    return _now_local().date().isoformat()


def now_time_key() -> str:
    return _now_local().strftime("%H:%M:%S")


def _fmt_time(dt: datetime) -> str:
    # Windows-safe formatting
    try:
        return dt.strftime("%-I:%M %p")
    except ValueError:
        return dt.strftime("%I:%M %p").lstrip("0")
