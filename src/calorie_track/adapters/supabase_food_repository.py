"""Supabase repository for the per-user food history."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from calorie_track.domain.models import FoodHistoryItem
from calorie_track.domain.nutrition import NutrientProfile
from calorie_track.services.foods import FoodHistoryRepository

_FOOD_COLUMNS = (
    "id, user_id, name, calories, protein, fat, carbs, usage_count, last_used"
)


@dataclass
class SupabaseFoodRepository(FoodHistoryRepository):
    """Supabase implementation for the food history."""

    client: Client

    def find_by_name(self, owner_id: str, name: str) -> FoodHistoryItem | None:
        """Return the food with an exact name match."""
        response = (
            self.client.table("foods")
            .select(_FOOD_COLUMNS)
            .eq("user_id", owner_id)
            .eq("name", name)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def create_food(
        self, owner_id: str, name: str, profile: NutrientProfile, used_at: datetime
    ) -> FoodHistoryItem:
        """Create a food row with a usage count of one."""
        payload = _profile_payload(profile)
        payload.update(
            {
                "user_id": owner_id,
                "name": name,
                "usage_count": 1,
                "last_used": used_at.isoformat(),
            }
        )
        response = self.client.table("foods").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create food entry")
        return _parse_food(response.data[0])

    def record_use(
        self, food_id: str, profile: NutrientProfile, used_at: datetime
    ) -> None:
        """Refresh nutrients and increment the usage counter."""
        response = (
            self.client.table("foods")
            .select("usage_count")
            .eq("id", food_id)
            .limit(1)
            .execute()
        )
        current = int(response.data[0].get("usage_count") or 0) if response.data else 0
        payload = _profile_payload(profile)
        payload.update({"usage_count": current + 1, "last_used": used_at.isoformat()})
        self.client.table("foods").update(payload).eq("id", food_id).execute()

    def list_foods(self, owner_id: str) -> list[FoodHistoryItem]:
        """Return all foods for a user, most used first."""
        response = (
            self.client.table("foods")
            .select(_FOOD_COLUMNS)
            .eq("user_id", owner_id)
            .order("usage_count", desc=True)
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]

    def search_foods(self, owner_id: str, query: str) -> list[FoodHistoryItem]:
        """Return foods whose name contains the query."""
        response = (
            self.client.table("foods")
            .select(_FOOD_COLUMNS)
            .eq("user_id", owner_id)
            .ilike("name", f"%{query}%")
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]


def _profile_payload(profile: NutrientProfile) -> dict[str, object]:
    return {
        "calories": profile.calories,
        "protein": profile.protein,
        "fat": profile.fat,
        "carbs": profile.carbs,
    }


def _parse_food(row: dict[str, object]) -> FoodHistoryItem:
    last_used = row.get("last_used")
    return FoodHistoryItem(
        id=str(row["id"]),
        owner_id=str(row.get("user_id") or ""),
        name=str(row.get("name") or ""),
        profile=NutrientProfile(
            calories=float(row.get("calories") or 0.0),
            protein=float(row.get("protein") or 0.0),
            fat=float(row.get("fat") or 0.0),
            carbs=float(row.get("carbs") or 0.0),
        ),
        usage_count=int(row.get("usage_count") or 0),
        last_used_at=datetime.fromisoformat(last_used)
        if isinstance(last_used, str) and last_used
        else None,
    )
