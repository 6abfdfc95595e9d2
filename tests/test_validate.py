"""Tests for the submission boundary."""

from __future__ import annotations

import pytest

from moodkeeper.errors import InvalidEntryError, MissingSelectionError
from moodkeeper.models import Attributes, MoodEntry
from moodkeeper.validate import build_entry, entry_from_dict

TODAY = "2025-10-26"
ATTRS = {"energy": 7, "sleep": 8, "stress": 3, "productivity": 9, "social": 7}


# ---- happy path ----


def test_build_entry_basic():
    e = build_entry(TODAY, 8, ATTRS, notes="Great day!")
    assert e == MoodEntry(
        day_key=TODAY,
        overall_mood=8,
        attributes=Attributes(energy=7, sleep=8, stress=3, productivity=9, social=7),
        notes="Great day!",
    )


def test_slider_text_values_are_accepted():
    e = build_entry(TODAY, "6", {k: str(v) for k, v in ATTRS.items()})
    assert e.overall_mood == 6
    assert e.attributes.energy == 7


def test_notes_are_stripped_and_clamped():
    e = build_entry(TODAY, 5, ATTRS, notes="  " + "x" * 250 + "  ")
    assert e.notes == "x" * 200


def test_none_notes_become_empty():
    assert build_entry(TODAY, 5, ATTRS, notes=None).notes == ""


def test_time_of_day_is_normalized():
    assert build_entry(TODAY, 5, ATTRS, time_of_day="7:05").time_of_day == "07:05:00"


# ---- rejections ----


def test_missing_mood_is_a_selection_error():
    with pytest.raises(MissingSelectionError):
        build_entry(TODAY, None, ATTRS)


@pytest.mark.parametrize("mood", [0, 11, -3, "eleven", 7.5, True])
def test_mood_out_of_range_or_wrong_type(mood):
    with pytest.raises(InvalidEntryError) as exc:
        build_entry(TODAY, mood, ATTRS)
    assert exc.value.field == "mood"


def test_attribute_out_of_range_names_the_attribute():
    with pytest.raises(InvalidEntryError) as exc:
        build_entry(TODAY, 5, {**ATTRS, "stress": 12})
    assert exc.value.field == "stress"


def test_missing_attribute_rejected():
    attrs = dict(ATTRS)
    del attrs["social"]
    with pytest.raises(InvalidEntryError, match="social"):
        build_entry(TODAY, 5, attrs)


def test_unknown_attribute_rejected():
    with pytest.raises(InvalidEntryError, match="mood_swings"):
        build_entry(TODAY, 5, {**ATTRS, "mood_swings": 4})


def test_attributes_required():
    with pytest.raises(InvalidEntryError):
        build_entry(TODAY, 5, None)


def test_malformed_day_key_rejected():
    with pytest.raises(InvalidEntryError) as exc:
        build_entry("10/26/2025", 5, ATTRS)
    assert exc.value.field == "date"


def test_bad_time_of_day_rejected():
    with pytest.raises(InvalidEntryError):
        build_entry(TODAY, 5, ATTRS, time_of_day="25:00")


def test_invalid_entry_is_a_value_error():
    with pytest.raises(ValueError):
        build_entry(TODAY, 42, ATTRS)


# ---- entry_from_dict ----


def test_entry_from_dict_reads_to_dict_shape():
    original = build_entry(TODAY, 4, ATTRS, notes="meh", time_of_day="21:10:00", user_id="user_a")
    assert entry_from_dict(original.to_dict()) == original


def test_entry_from_dict_rejects_non_object():
    with pytest.raises(InvalidEntryError):
        entry_from_dict(["2025-10-26", 5])


# ---- malformed text ----


@pytest.mark.parametrize("mood", ["²", "٣x", "7.5", " "])
def test_non_decimal_text_rating_is_rejected(mood):
    with pytest.raises((InvalidEntryError, MissingSelectionError)):
        build_entry(TODAY, mood, ATTRS)


def test_superscript_attribute_names_the_attribute():
    with pytest.raises(InvalidEntryError) as exc:
        build_entry(TODAY, 5, {**ATTRS, "sleep": "²"})
    assert exc.value.field == "sleep"


def test_non_text_notes_rejected():
    with pytest.raises(InvalidEntryError) as exc:
        build_entry(TODAY, 5, ATTRS, notes=5)
    assert exc.value.field == "notes"
