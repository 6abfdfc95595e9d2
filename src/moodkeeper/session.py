from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping

from ._util import now_time_key, today_key
from .chart import ChartGeometry, ChartLayout, map_series
from .days import parse_day_key, shift_day
from .errors import InvalidEntryError, MoodkeeperError
from .history import HistoryQuery, query_history
from .models import MoodEntry, UserProfile
from .profiles import ProfileRegistry
from .stats import Period, SeriesPoint, StatsBundle, period_series, stats_bundle
from .store import EntryStore
from .validate import build_entry

logger = logging.getLogger(__name__)


class Command(str, Enum):
    SUBMIT = "submit"
    CREATE_PROFILE = "create_profile"
    SELECT_PROFILE = "select_profile"
    DELETE_PROFILE = "delete_profile"
    TODAY = "today"
    HISTORY = "history"
    STATS = "stats"
    CHART = "chart"


@dataclass(frozen=True)
class Outcome:
    ok: bool
    value: Any = None
    error: str | None = None


class MoodSession:
    """One journal session: the store, its profiles, and an injected clock."""

    def __init__(
        self,
        store: EntryStore | None = None,
        clock: Callable[[], str] = today_key,
        time_clock: Callable[[], str] = now_time_key,
    ):
        self.store = store or EntryStore()
        self.profiles = ProfileRegistry(self.store)
        self.clock = clock
        self.time_clock = time_clock
        self._handlers: dict[Command, Callable[..., Any]] = {
            Command.SUBMIT: self.submit,
            Command.CREATE_PROFILE: self.profiles.create,
            Command.SELECT_PROFILE: self.profiles.select,
            Command.DELETE_PROFILE: self.profiles.delete,
            Command.TODAY: self.today_entry,
            Command.HISTORY: self.history,
            Command.STATS: self.stats,
            Command.CHART: self.chart,
        }

    def _today(self, today: str | None) -> str:
        key = today or self.clock()
        try:
            return parse_day_key(key).isoformat()
        except ValueError as e:
            raise InvalidEntryError("date", str(e)) from e

    def _scope_tag(self) -> str | None:
        profile = self.profiles.active
        return profile.id if profile else None

    # -------------------------
    # Write path
    # -------------------------

    def submit(
        self,
        mood: Any,
        attributes: Mapping[str, Any] | None,
        notes: str | None = "",
        time_of_day: str | None = None,
        today: str | None = None,
    ) -> MoodEntry:
        entry = build_entry(
            day_key=self._today(today),
            mood=mood,
            attributes=attributes,
            notes=notes,
            time_of_day=time_of_day or self.time_clock(),
            user_id=self._scope_tag(),
        )
        created = self.store.upsert(entry)
        logger.debug("%s entry for %s", "Saved" if created else "Updated", entry.day_key)
        return entry

    # -------------------------
    # Views
    # -------------------------

    def today_entry(self, today: str | None = None) -> MoodEntry | None:
        return self.store.get(self._today(today))

    def history(self, query: HistoryQuery | None = None, today: str | None = None) -> list[MoodEntry]:
        return query_history(self.store.all(), self._today(today), query)

    def stats(self, today: str | None = None) -> StatsBundle:
        return stats_bundle(self.store.all(), self._today(today))

    def series(self, period: Period | str = Period.DAILY, today: str | None = None) -> list[SeriesPoint]:
        return period_series(self.store.all(), self._today(today), period)

    def chart(
        self,
        period: Period | str = Period.DAILY,
        layout: ChartLayout | None = None,
        today: str | None = None,
    ) -> ChartGeometry:
        return map_series(self.series(period, today), layout)

    # -------------------------
    # Dispatch
    # -------------------------

    def dispatch(self, command: Command | str, **payload: Any) -> Outcome:
        """
        Run one command. Domain errors come back as Outcome(ok=False) and
        leave the session as it was.
        """
        try:
            handler = self._handlers[Command(command)]
        except ValueError:
            return Outcome(ok=False, error=f"Unknown command {command!r}")
        try:
            return Outcome(ok=True, value=handler(**payload))
        except MoodkeeperError as e:
            logger.warning("%s failed: %s", Command(command).value, e)
            return Outcome(ok=False, error=str(e))
        except TypeError as e:
            # payload keywords that don't fit the handler
            logger.warning("%s rejected its payload: %s", Command(command).value, e)
            return Outcome(ok=False, error=f"Bad arguments for {Command(command).value}: {e}")

    @property
    def active_profile(self) -> UserProfile | None:
        return self.profiles.active


# -------------------------
# Sample data
# -------------------------

SAMPLE_ENTRIES: list[dict[str, Any]] = [
    {
        "days_ago": 1,
        "mood": 8,
        "time": "20:15:00",
        "attributes": {"energy": 7, "sleep": 8, "stress": 3, "productivity": 9, "social": 7},
        "notes": "Great day! Finished all my tasks and had a nice walk in the evening.",
    },
    {
        "days_ago": 2,
        "mood": 6,
        "time": "13:40:00",
        "attributes": {"energy": 5, "sleep": 6, "stress": 6, "productivity": 7, "social": 5},
        "notes": "Okay day, felt a bit tired but managed to stay productive.",
    },
    {
        "days_ago": 3,
        "mood": 9,
        "time": "22:05:00",
        "attributes": {"energy": 9, "sleep": 9, "stress": 2, "productivity": 8, "social": 9},
        "notes": "Amazing day! Spent time with friends and felt really energized.",
    },
    {
        "days_ago": 4,
        "mood": 5,
        "time": "08:30:00",
        "attributes": {"energy": 4, "sleep": 5, "stress": 7, "productivity": 5, "social": 4},
        "notes": "Challenging day with some stressful moments.",
    },
    {
        "days_ago": 5,
        "mood": 7,
        "time": "18:50:00",
        "attributes": {"energy": 6, "sleep": 7, "stress": 4, "productivity": 7, "social": 6},
        "notes": "Good day overall, feeling balanced.",
    },
]


def seed_samples(session: MoodSession, today: str | None = None) -> int:
    """Add the example days (1–5 days before today) to the active scope."""
    today = session._today(today)
    for sample in SAMPLE_ENTRIES:
        session.submit(
            mood=sample["mood"],
            attributes=sample["attributes"],
            notes=sample["notes"],
            time_of_day=sample["time"],
            today=shift_day(today, -sample["days_ago"]),
        )
    return len(SAMPLE_ENTRIES)
