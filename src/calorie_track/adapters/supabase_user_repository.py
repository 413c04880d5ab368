"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from calorie_track.domain.models import UserRecord
from calorie_track.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_user(self, user_id: str) -> UserRecord | None:
        """Return the user row, if present."""
        response = (
            self.client.table("users")
            .select("id, email, display_name, calorie_goal")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(
        self, user_id: str, email: str, display_name: str, calorie_goal: float
    ) -> UserRecord:
        """Create a new user row and return it."""
        now = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("users")
            .insert(
                {
                    "id": user_id,
                    "email": email,
                    "display_name": display_name,
                    "calorie_goal": calorie_goal,
                    "created_at": now,
                    "updated_at": now,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def update_profile(self, user_id: str, email: str, display_name: str) -> None:
        """Update email and display name for a user."""
        self.client.table("users").update(
            {
                "email": email,
                "display_name": display_name,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", user_id).execute()

    def update_calorie_goal(self, user_id: str, calorie_goal: float) -> None:
        """Update the daily calorie goal for a user."""
        self.client.table("users").update(
            {
                "calorie_goal": calorie_goal,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", user_id).execute()


def _parse_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=str(row["id"]),
        email=str(row.get("email") or ""),
        display_name=str(row.get("display_name") or ""),
        calorie_goal=float(row.get("calorie_goal") or 0.0),
    )
