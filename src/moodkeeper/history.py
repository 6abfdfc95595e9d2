from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from .models import MoodEntry
from .stats import in_window

GOOD_MIN = 7
TOUGH_MAX = 4


class DateRange(str, Enum):
    LAST_7 = "7days"
    LAST_30 = "30days"
    LAST_90 = "90days"
    ALL = "all"

    @property
    def days(self) -> int | None:
        return {"7days": 7, "30days": 30, "90days": 90}.get(self.value)


class MoodFilter(str, Enum):
    ANY = "any"
    GOOD = "good"
    TOUGH = "tough"


class SortOrder(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    HIGHEST = "highest"
    LOWEST = "lowest"


@dataclass(frozen=True)
class HistoryQuery:
    date_range: DateRange = DateRange.ALL
    mood: MoodFilter = MoodFilter.ANY
    search: str = ""
    sort: SortOrder = SortOrder.NEWEST


Predicate = Callable[[MoodEntry], bool]


def _predicates(query: HistoryQuery, today: str) -> list[Predicate]:
    preds: list[Predicate] = []

    days = DateRange(query.date_range).days
    if days is not None:
        preds.append(lambda e: in_window(e.day_key, today, days))

    mood = MoodFilter(query.mood)
    if mood is MoodFilter.GOOD:
        preds.append(lambda e: e.overall_mood >= GOOD_MIN)
    elif mood is MoodFilter.TOUGH:
        preds.append(lambda e: e.overall_mood <= TOUGH_MAX)

    needle = (query.search or "").strip().lower()
    if needle:
        preds.append(lambda e: needle in e.notes.lower())

    return preds


def sort_entries(entries: Iterable[MoodEntry], order: SortOrder | str) -> list[MoodEntry]:
    # sorted() is stable in both directions; ties keep their incoming order
    order = SortOrder(order)
    if order is SortOrder.NEWEST:
        return sorted(entries, key=lambda e: e.day_key, reverse=True)
    if order is SortOrder.OLDEST:
        return sorted(entries, key=lambda e: e.day_key)
    if order is SortOrder.HIGHEST:
        return sorted(entries, key=lambda e: e.overall_mood, reverse=True)
    return sorted(entries, key=lambda e: e.overall_mood)


def query_history(entries: Iterable[MoodEntry], today: str, query: HistoryQuery | None = None) -> list[MoodEntry]:
    """
    Filter (all predicates ANDed) then sort. An empty list is a normal result;
    telling "nothing matched" from "nothing logged" is up to the caller.
    """
    query = query or HistoryQuery()
    preds = _predicates(query, today)
    kept = [e for e in entries if all(p(e) for p in preds)]
    return sort_entries(kept, query.sort)
