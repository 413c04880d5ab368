"""Services for the per-user food history used by autocomplete."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from calorie_track.domain.models import FoodHistoryItem
from calorie_track.domain.nutrition import NutrientProfile

MAX_AUTOCOMPLETE = 20


class FoodHistoryRepository(Protocol):
    """Persistence interface for the food history."""

    def find_by_name(self, owner_id: str, name: str) -> FoodHistoryItem | None:
        """Return the food with this exact name, if present."""

    def create_food(
        self, owner_id: str, name: str, profile: NutrientProfile, used_at: datetime
    ) -> FoodHistoryItem:
        """Create a food with a usage count of one."""

    def record_use(
        self, food_id: str, profile: NutrientProfile, used_at: datetime
    ) -> None:
        """Refresh a food's nutrients and increment its usage count."""

    def list_foods(self, owner_id: str) -> list[FoodHistoryItem]:
        """Return all foods for a user."""

    def search_foods(self, owner_id: str, query: str) -> list[FoodHistoryItem]:
        """Return foods whose name contains the query, case-insensitively."""


@dataclass
class FoodHistoryService:
    """Application service for food history operations."""

    repository: FoodHistoryRepository

    def record(self, owner_id: str, name: str, profile: NutrientProfile) -> None:
        """Upsert a food by name and bump its usage."""
        now = datetime.now(tz=UTC)
        existing = self.repository.find_by_name(owner_id, name)
        if existing:
            self.repository.record_use(existing.id, profile, used_at=now)
            return
        self.repository.create_food(owner_id, name, profile, used_at=now)

    def autocomplete(
        self, owner_id: str, query: str | None, limit: int = 5
    ) -> list[FoodHistoryItem]:
        """Suggest foods by name, falling back to the most used ones."""
        limit = max(1, min(limit, MAX_AUTOCOMPLETE))
        cleaned = (query or "").strip().lower()
        if cleaned:
            foods = self.repository.search_foods(owner_id, cleaned)
        else:
            foods = self.repository.list_foods(owner_id)
        return self._rank(foods)[:limit]

    def list_unique(self, owner_id: str) -> list[FoodHistoryItem]:
        """Return one food per name, most used first."""
        seen: set[str] = set()
        unique = []
        for food in self._rank(self.repository.list_foods(owner_id)):
            if food.name in seen:
                continue
            seen.add(food.name)
            unique.append(food)
        return unique

    @staticmethod
    def _rank(items: list[FoodHistoryItem]) -> list[FoodHistoryItem]:
        """Rank foods by frequency then recent use."""
        return sorted(
            items,
            key=lambda item: (
                item.usage_count,
                item.last_used_at or datetime.min.replace(tzinfo=UTC),
            ),
            reverse=True,
        )
