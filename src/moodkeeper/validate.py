"""Input boundary: turn raw form values into a MoodEntry or reject them."""

from __future__ import annotations

from typing import Any, Mapping

from .days import parse_day_key, parse_time_of_day
from .errors import InvalidEntryError, MissingSelectionError
from .models import ATTRIBUTE_KEYS, MOOD_MAX, MOOD_MIN, NOTES_MAX_LEN, Attributes, MoodEntry


def _parse_rating(value: Any, field: str) -> int:
    # slider values arrive as text
    if isinstance(value, bool):
        raise InvalidEntryError(field, f"must be an integer {MOOD_MIN}–{MOOD_MAX}")
    if isinstance(value, str):
        try:
            # isdigit() lets superscripts like "²" through; int() does not
            value = int(value.strip()) if value.strip().isdecimal() else value
        except ValueError as e:
            raise InvalidEntryError(field, f"must be an integer {MOOD_MIN}–{MOOD_MAX} (got {value!r})") from e
    if not isinstance(value, int):
        raise InvalidEntryError(field, f"must be an integer {MOOD_MIN}–{MOOD_MAX} (got {value!r})")
    if not (MOOD_MIN <= value <= MOOD_MAX):
        raise InvalidEntryError(field, f"must be between {MOOD_MIN} and {MOOD_MAX} (got {value})")
    return value


def _parse_attributes(raw: Mapping[str, Any] | None) -> Attributes:
    if not isinstance(raw, Mapping):
        raise InvalidEntryError("attributes", "all five attributes are required")
    unknown = sorted(set(raw) - set(ATTRIBUTE_KEYS))
    if unknown:
        raise InvalidEntryError("attributes", f"unknown attribute(s): {', '.join(unknown)}")
    missing = [k for k in ATTRIBUTE_KEYS if k not in raw]
    if missing:
        raise InvalidEntryError("attributes", f"missing attribute(s): {', '.join(missing)}")
    return Attributes(**{k: _parse_rating(raw[k], k) for k in ATTRIBUTE_KEYS})


def clamp_notes(notes: str | None) -> str:
    if notes is None:
        return ""
    if not isinstance(notes, str):
        raise InvalidEntryError("notes", f"must be text (got {type(notes).__name__})")
    return notes.strip()[:NOTES_MAX_LEN]


def build_entry(
    day_key: str,
    mood: Any,
    attributes: Mapping[str, Any] | None,
    notes: str | None = "",
    time_of_day: str | None = None,
    user_id: str | None = None,
) -> MoodEntry:
    """
    Validate one submission and return the entry to store.
    Raises MissingSelectionError when no mood was picked, InvalidEntryError
    for anything out of range or malformed.
    """
    if mood is None or (isinstance(mood, str) and not mood.strip()):
        raise MissingSelectionError("Please select a mood first")

    try:
        key = parse_day_key(day_key).isoformat()
    except ValueError as e:
        raise InvalidEntryError("date", str(e)) from e

    tod = None
    if time_of_day:
        try:
            tod = parse_time_of_day(time_of_day).strftime("%H:%M:%S")
        except ValueError as e:
            raise InvalidEntryError("time", str(e)) from e

    return MoodEntry(
        day_key=key,
        overall_mood=_parse_rating(mood, "mood"),
        attributes=_parse_attributes(attributes),
        notes=clamp_notes(notes),
        time_of_day=tod,
        user_id=user_id,
    )


def entry_from_dict(raw: Mapping[str, Any]) -> MoodEntry:
    """Inverse of MoodEntry.to_dict, with the same checks as build_entry."""
    if not isinstance(raw, Mapping):
        raise InvalidEntryError("entry", f"expected an object (got {type(raw).__name__})")
    return build_entry(
        day_key=raw.get("date", ""),
        mood=raw.get("overallMood"),
        attributes=raw.get("attributes"),
        notes=raw.get("notes", ""),
        time_of_day=raw.get("time"),
        user_id=raw.get("userId"),
    )
