from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

MOOD_MIN = 1
MOOD_MAX = 10
NOTES_MAX_LEN = 200

ATTRIBUTE_KEYS = ("energy", "sleep", "stress", "productivity", "social")

# key -> (display name, icon)
ATTRIBUTE_LABELS: dict[str, tuple[str, str]] = {
    "energy": ("Energy Level", "⚡"),
    "sleep": ("Sleep Quality", "😴"),
    "stress": ("Stress Level", "😰"),
    "productivity": ("Productivity", "✅"),
    "social": ("Social Connection", "💬"),
}


class NoData:
    """Marker for an aggregate that no entry contributed to. Never equal to 0."""

    _instance: NoData | None = None

    def __new__(cls) -> NoData:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DATA"

    def __bool__(self) -> bool:
        return False


NO_DATA = NoData()

Maybe = Union[float, NoData]


@dataclass(frozen=True)
class Attributes:
    energy: int
    sleep: int
    stress: int
    productivity: int
    social: int

    def get(self, key: str) -> int:
        if key not in ATTRIBUTE_KEYS:
            raise KeyError(key)
        return getattr(self, key)

    def to_dict(self) -> dict[str, int]:
        return {k: getattr(self, k) for k in ATTRIBUTE_KEYS}


@dataclass(frozen=True)
class MoodEntry:
    day_key: str
    overall_mood: int
    attributes: Attributes
    notes: str = ""
    time_of_day: str | None = None
    user_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "date": self.day_key,
            "overallMood": self.overall_mood,
            "attributes": self.attributes.to_dict(),
            "notes": self.notes,
        }
        if self.time_of_day is not None:
            d["time"] = self.time_of_day
        if self.user_id is not None:
            d["userId"] = self.user_id
        return d


@dataclass(frozen=True)
class UserProfile:
    id: str
    display_name: str
    avatar: str = "🙂"
    created_at: str = ""


# -------------------------
# Mood vocabulary
# -------------------------

def mood_label(rating: float) -> str:
    if rating <= 2:
        return "Very Difficult"
    if rating <= 4:
        return "Challenging"
    if rating <= 6:
        return "Okay"
    if rating <= 8:
        return "Good"
    return "Excellent"


def mood_emoji(rating: float) -> str:
    if rating <= 2:
        return "😢"
    if rating <= 4:
        return "😔"
    if rating <= 6:
        return "😐"
    if rating <= 8:
        return "😊"
    return "😍"


def mood_band(rating: float) -> str:
    if rating <= 4:
        return "low"
    if rating <= 7:
        return "mid"
    return "high"
