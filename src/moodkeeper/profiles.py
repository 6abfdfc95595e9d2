from __future__ import annotations

import logging
import uuid

from ._util import _now_local
from .errors import ProfileLimitError, ScopeNotFoundError, ValidationError
from .models import UserProfile
from .store import EntryStore

logger = logging.getLogger(__name__)

MAX_PROFILES = 5


class ProfileRegistry:
    """User profiles, each owning one scope of the shared EntryStore."""

    def __init__(self, store: EntryStore, max_profiles: int = MAX_PROFILES):
        self.store = store
        self.max_profiles = max_profiles
        self._profiles: dict[str, UserProfile] = {}

    def __len__(self) -> int:
        return len(self._profiles)

    @property
    def active(self) -> UserProfile | None:
        return self._profiles.get(self.store.active_scope)

    def create(self, display_name: str, avatar: str = "🙂", now: str | None = None) -> UserProfile:
        name = str(display_name or "").strip()
        if not name:
            raise ValidationError("Profile name cannot be blank")
        if len(self._profiles) >= self.max_profiles:
            raise ProfileLimitError(f"At most {self.max_profiles} profiles are allowed")

        profile_id = f"user_{uuid.uuid4().hex[:12]}"
        while profile_id in self._profiles or self.store.has_scope(profile_id):
            profile_id = f"user_{uuid.uuid4().hex[:12]}"

        created_at = now or _now_local().isoformat(timespec="seconds")
        profile = UserProfile(id=profile_id, display_name=name, avatar=avatar or "🙂", created_at=created_at)
        self._profiles[profile_id] = profile
        self.store.add_scope(profile_id)
        logger.info("Created profile %s (%s)", profile_id, name)
        return profile

    def get(self, profile_id: str) -> UserProfile | None:
        return self._profiles.get(profile_id)

    def profiles(self) -> list[UserProfile]:
        return sorted(self._profiles.values(), key=lambda p: p.created_at)

    def select(self, profile_id: str) -> UserProfile:
        profile = self._profiles.get(profile_id)
        if profile is None:
            raise ScopeNotFoundError(profile_id)
        self.store.select_scope(profile_id)
        return profile

    def delete(self, profile_id: str) -> UserProfile:
        profile = self._profiles.get(profile_id)
        if profile is None:
            raise ScopeNotFoundError(profile_id)
        del self._profiles[profile_id]
        self.store.drop_scope(profile_id)
        logger.info("Deleted profile %s and its entries", profile_id)
        return profile
