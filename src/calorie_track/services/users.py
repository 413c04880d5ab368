"""User-related business logic."""

from dataclasses import dataclass, replace
from typing import Protocol

from calorie_track.domain.models import AuthUser, UserRecord

DEFAULT_CALORIE_GOAL = 2000.0


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: str) -> UserRecord | None:
        """Return the user, if present."""

    def create_user(
        self, user_id: str, email: str, display_name: str, calorie_goal: float
    ) -> UserRecord:
        """Create and return a new user record."""

    def update_profile(self, user_id: str, email: str, display_name: str) -> None:
        """Refresh the user's email and display name."""

    def update_calorie_goal(self, user_id: str, calorie_goal: float) -> None:
        """Persist a new daily calorie goal."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository
    default_calorie_goal: float = DEFAULT_CALORIE_GOAL

    def ensure_user(self, auth_user: AuthUser) -> UserRecord:
        """Ensure a user exists for the verified identity and return it.

        The email follows the token; a stored display name is kept, since users
        can set their own through ``update_display_name``.
        """
        existing = self.repository.get_user(auth_user.uid)
        if existing is None:
            return self.repository.create_user(
                auth_user.uid,
                email=auth_user.email,
                display_name=auth_user.display_name,
                calorie_goal=self.default_calorie_goal,
            )
        display_name = existing.display_name or auth_user.display_name
        if (existing.email, existing.display_name) != (auth_user.email, display_name):
            self.repository.update_profile(auth_user.uid, auth_user.email, display_name)
            return replace(existing, email=auth_user.email, display_name=display_name)
        return existing

    def update_display_name(self, user: UserRecord, display_name: str) -> UserRecord:
        """Store a user-chosen display name."""
        cleaned = display_name.strip()
        self.repository.update_profile(user.id, user.email, cleaned)
        return replace(user, display_name=cleaned)

    def get_calorie_goal(self, user_id: str) -> float:
        """Return the user's goal, or the default when unset."""
        user = self.repository.get_user(user_id)
        if user is None or user.calorie_goal <= 0:
            return self.default_calorie_goal
        return user.calorie_goal

    def set_calorie_goal(self, user_id: str, calorie_goal: float) -> float:
        """Update the user's daily calorie goal."""
        if calorie_goal <= 0:
            raise ValueError("calorie goal must be positive")
        self.repository.update_calorie_goal(user_id, calorie_goal)
        return calorie_goal
