"""Tests for the profile registry over a shared store."""

from __future__ import annotations

import pytest

from moodkeeper.errors import ProfileLimitError, ScopeNotFoundError, ValidationError
from moodkeeper.models import Attributes, MoodEntry
from moodkeeper.profiles import MAX_PROFILES, ProfileRegistry
from moodkeeper.store import DEFAULT_SCOPE, EntryStore


@pytest.fixture()
def registry() -> ProfileRegistry:
    return ProfileRegistry(EntryStore())


def _e(day: str, user: str) -> MoodEntry:
    return MoodEntry(
        day_key=day,
        overall_mood=6,
        attributes=Attributes(energy=5, sleep=5, stress=5, productivity=5, social=5),
        user_id=user,
    )


# ---- create ----


def test_create_makes_profile_and_scope(registry):
    p = registry.create("Sam", avatar="🦊", now="2025-10-26T09:00:00+00:00")
    assert p.display_name == "Sam"
    assert p.avatar == "🦊"
    assert p.id.startswith("user_")
    assert registry.store.has_scope(p.id)
    assert registry.get(p.id) == p


def test_create_strips_name_and_rejects_blank(registry):
    assert registry.create("  Alex  ").display_name == "Alex"
    with pytest.raises(ValidationError):
        registry.create("   ")


def test_ids_are_unique(registry):
    ids = {registry.create(f"u{i}").id for i in range(MAX_PROFILES)}
    assert len(ids) == MAX_PROFILES


def test_profile_cap(registry):
    for i in range(MAX_PROFILES):
        registry.create(f"u{i}")
    with pytest.raises(ProfileLimitError):
        registry.create("one too many")
    assert len(registry) == MAX_PROFILES


def test_profiles_listed_by_creation_time(registry):
    b = registry.create("B", now="2025-10-26T10:00:00+00:00")
    a = registry.create("A", now="2025-10-26T09:00:00+00:00")
    assert [p.id for p in registry.profiles()] == [a.id, b.id]


# ---- select / delete ----


def test_select_switches_active_profile(registry):
    p = registry.create("Sam")
    assert registry.active is None
    registry.select(p.id)
    assert registry.active == p
    assert registry.store.active_scope == p.id


def test_select_unknown_profile(registry):
    with pytest.raises(ScopeNotFoundError):
        registry.select("user_missing")


def test_delete_destroys_entries(registry):
    p = registry.create("Sam")
    registry.select(p.id)
    registry.store.upsert(_e("2025-10-26", p.id))

    registry.delete(p.id)

    assert registry.get(p.id) is None
    assert not registry.store.has_scope(p.id)
    assert registry.store.active_scope == DEFAULT_SCOPE
    assert registry.store.all() == []


def test_delete_other_profile_keeps_active_entries(registry):
    keep = registry.create("Keep")
    gone = registry.create("Gone")
    registry.select(keep.id)
    registry.store.upsert(_e("2025-10-26", keep.id))

    registry.delete(gone.id)

    assert registry.active == keep
    assert len(registry.store) == 1


def test_delete_unknown_profile(registry):
    with pytest.raises(ScopeNotFoundError):
        registry.delete("user_missing")
