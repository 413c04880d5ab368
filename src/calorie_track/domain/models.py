"""Domain models for users and the food history."""

from dataclasses import dataclass
from datetime import datetime

from calorie_track.domain.nutrition import NutrientProfile


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: str
    email: str
    display_name: str
    calorie_goal: float


@dataclass(frozen=True)
class FoodHistoryItem:
    """A food the user has logged before, used for autocomplete."""

    id: str
    owner_id: str
    name: str
    profile: NutrientProfile
    usage_count: int
    last_used_at: datetime | None


@dataclass(frozen=True)
class AuthUser:
    """Identity yielded by a verified access token."""

    uid: str
    email: str
    display_name: str = ""
