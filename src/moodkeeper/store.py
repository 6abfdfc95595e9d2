from __future__ import annotations

import logging

from .errors import ScopeMismatchError, ScopeNotFoundError
from .models import MoodEntry

logger = logging.getLogger(__name__)

DEFAULT_SCOPE = "default"


class EntryStore:
    """
    In-memory mood entries keyed by day-key, partitioned by scope.

    The active set is a detached working copy of one scope. Writes go to the
    working copy only; select_scope() saves it back before loading another.
    """

    def __init__(self, scope_id: str = DEFAULT_SCOPE):
        self._scopes: dict[str, dict[str, MoodEntry]] = {scope_id: {}}
        self._active_scope = scope_id
        self._active: dict[str, MoodEntry] = {}

    @property
    def active_scope(self) -> str:
        return self._active_scope

    def __len__(self) -> int:
        return len(self._active)

    def __contains__(self, day_key: object) -> bool:
        return day_key in self._active

    # -------------------------
    # Entries (active scope)
    # -------------------------

    def upsert(self, entry: MoodEntry) -> bool:
        """
        Store `entry` under its day-key, replacing any earlier entry for that day.
        Returns True when the day-key is new to the scope.
        """
        if entry.user_id is not None and entry.user_id != self._active_scope:
            raise ScopeMismatchError(
                f"Entry for {entry.day_key} belongs to {entry.user_id!r}, "
                f"not the active scope {self._active_scope!r}"
            )
        created = entry.day_key not in self._active
        # replacing an existing key keeps its position
        self._active[entry.day_key] = entry
        return created

    def get(self, day_key: str) -> MoodEntry | None:
        return self._active.get(day_key)

    def all(self) -> list[MoodEntry]:
        return list(self._active.values())

    def remove(self, day_key: str) -> bool:
        return self._active.pop(day_key, None) is not None

    def clear(self) -> None:
        self._active.clear()

    # -------------------------
    # Scopes
    # -------------------------

    def scopes(self) -> list[str]:
        return list(self._scopes)

    def has_scope(self, scope_id: str) -> bool:
        return scope_id in self._scopes

    def add_scope(self, scope_id: str) -> None:
        self._scopes.setdefault(scope_id, {})

    def drop_scope(self, scope_id: str) -> None:
        """
        Destroy a scope and all of its entries. Dropping the active scope
        falls back to an empty default scope.
        """
        if scope_id not in self._scopes:
            raise ScopeNotFoundError(scope_id)
        del self._scopes[scope_id]
        if scope_id == self._active_scope:
            self._scopes.setdefault(DEFAULT_SCOPE, {})
            self._active_scope = DEFAULT_SCOPE
            self._active = self._load(DEFAULT_SCOPE)

    def load_scope(self, scope_id: str, entries: list[MoodEntry]) -> None:
        """
        Replace a scope's table wholesale (bulk import). Later entries win on
        duplicate day-keys. Foreign-tagged entries are filtered when the scope
        is next loaded.
        """
        table: dict[str, MoodEntry] = {}
        for entry in entries:
            table[entry.day_key] = entry
        self._scopes[scope_id] = table
        if scope_id == self._active_scope:
            self._active = self._load(scope_id)

    def select_scope(self, scope_id: str) -> None:
        if scope_id not in self._scopes:
            raise ScopeNotFoundError(scope_id)
        # save before load, or the outgoing scope loses its latest writes
        self._save()
        self._active_scope = scope_id
        self._active = self._load(scope_id)
        logger.info("Switched to scope %s (%d entries)", scope_id, len(self._active))

    def _save(self) -> None:
        self._scopes[self._active_scope] = dict(self._active)

    def _load(self, scope_id: str) -> dict[str, MoodEntry]:
        loaded: dict[str, MoodEntry] = {}
        for key, entry in self._scopes[scope_id].items():
            if entry.user_id is not None and entry.user_id != scope_id:
                logger.warning(
                    "Dropping entry %s tagged for scope %r from scope %r",
                    key,
                    entry.user_id,
                    scope_id,
                )
                continue
            loaded[key] = entry
        if len(loaded) != len(self._scopes[scope_id]):
            self._scopes[scope_id] = dict(loaded)
        return loaded
