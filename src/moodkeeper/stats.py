"""
Aggregates over a scope's entries.

Every function takes the entries and an explicit `today` day-key and returns
a value or NO_DATA; nothing here reads the clock or mutates the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Iterable

from .days import (
    TIME_BANDS,
    daily_label,
    day_key,
    days_between,
    month_end,
    month_start,
    monthly_label,
    parse_day_key,
    shift_day,
    time_of_day_bucket,
    weekly_label,
)
from .models import ATTRIBUTE_KEYS, ATTRIBUTE_LABELS, MOOD_MAX, NO_DATA, Maybe, MoodEntry


class Period(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class SeriesPoint:
    label: str
    value: Maybe
    start: str
    end: str


@dataclass(frozen=True)
class AttributeAverage:
    key: str
    label: str
    icon: str
    average: float

    @property
    def display(self) -> float:
        return round(self.average, 1)

    @property
    def percent(self) -> float:
        return self.average / MOOD_MAX * 100


@dataclass(frozen=True)
class StatsBundle:
    weekly_average: Maybe
    monthly_average: Maybe
    streak: int
    total: int
    attributes: list[AttributeAverage] = field(default_factory=list)
    time_of_day: dict[str, int] = field(default_factory=dict)


def _mean(values: list[int]) -> Maybe:
    if not values:
        return NO_DATA
    return sum(values) / len(values)


def _rounded(value: Maybe) -> Maybe:
    if value is NO_DATA:
        return NO_DATA
    return round(value, 1)


# -------------------------
# Streak + window averages
# -------------------------

def streak(entries: Iterable[MoodEntry], today: str) -> int:
    """Consecutive days with an entry, walking back from today. 0 if today is empty."""
    days = {e.day_key for e in entries}
    count = 0
    cur = today
    while cur in days:
        count += 1
        cur = shift_day(cur, -1)
    return count


def in_window(key: str, today: str, window_days: int) -> bool:
    age = days_between(key, today)
    return 0 <= age <= window_days


def period_average(entries: Iterable[MoodEntry], today: str, window_days: int) -> Maybe:
    """Mean overall mood for entries in [today - window_days, today]."""
    return _mean([e.overall_mood for e in entries if in_window(e.day_key, today, window_days)])


def weekly_average(entries: Iterable[MoodEntry], today: str) -> Maybe:
    return period_average(entries, today, 7)


def monthly_average(entries: Iterable[MoodEntry], today: str) -> Maybe:
    return period_average(entries, today, 30)


# -------------------------
# Whole-scope breakdowns
# -------------------------

def attribute_averages(entries: Iterable[MoodEntry]) -> list[AttributeAverage]:
    items = list(entries)
    if not items:
        return []
    out: list[AttributeAverage] = []
    for key in ATTRIBUTE_KEYS:
        total = sum(e.attributes.get(key) for e in items)
        label, icon = ATTRIBUTE_LABELS[key]
        out.append(AttributeAverage(key=key, label=label, icon=icon, average=total / len(items)))
    return out


def time_of_day_distribution(entries: Iterable[MoodEntry]) -> dict[str, int]:
    dist = {band: 0 for band in TIME_BANDS}
    for e in entries:
        # entries without a recorded time are not counted anywhere
        if not e.time_of_day:
            continue
        dist[time_of_day_bucket(e.time_of_day)] += 1
    return dist


# -------------------------
# Bucketed series
# -------------------------

def daily_series(entries: Iterable[MoodEntry], today: str, days: int = 7) -> list[SeriesPoint]:
    by_day = {e.day_key: e.overall_mood for e in entries}
    base = parse_day_key(today)
    out: list[SeriesPoint] = []
    for i in range(days - 1, -1, -1):
        d = base - timedelta(days=i)
        key = day_key(d)
        value = by_day.get(key)
        out.append(
            SeriesPoint(
                label=daily_label(i, d),
                value=float(value) if value is not None else NO_DATA,
                start=key,
                end=key,
            )
        )
    return out


def weekly_series(entries: Iterable[MoodEntry], today: str, weeks: int = 4) -> list[SeriesPoint]:
    items = list(entries)
    out: list[SeriesPoint] = []
    for i in range(weeks - 1, -1, -1):
        end = shift_day(today, -7 * i)
        start = shift_day(end, -6)
        scores = [e.overall_mood for e in items if start <= e.day_key <= end]
        out.append(SeriesPoint(label=weekly_label(i), value=_rounded(_mean(scores)), start=start, end=end))
    return out


def monthly_series(entries: Iterable[MoodEntry], today: str, months: int = 6) -> list[SeriesPoint]:
    items = list(entries)
    out: list[SeriesPoint] = []
    for i in range(months - 1, -1, -1):
        first = month_start(today, i)
        start, end = day_key(first), day_key(month_end(first))
        scores = [e.overall_mood for e in items if start <= e.day_key <= end]
        out.append(SeriesPoint(label=monthly_label(first), value=_rounded(_mean(scores)), start=start, end=end))
    return out


def period_series(entries: Iterable[MoodEntry], today: str, period: Period | str) -> list[SeriesPoint]:
    period = Period(period)
    if period is Period.DAILY:
        return daily_series(entries, today)
    if period is Period.WEEKLY:
        return weekly_series(entries, today)
    return monthly_series(entries, today)


def stats_bundle(entries: Iterable[MoodEntry], today: str) -> StatsBundle:
    items = list(entries)
    return StatsBundle(
        weekly_average=weekly_average(items, today),
        monthly_average=monthly_average(items, today),
        streak=streak(items, today),
        total=len(items),
        attributes=attribute_averages(items),
        time_of_day=time_of_day_distribution(items),
    )
