"""Supabase repository for food entries."""

from dataclasses import dataclass
from datetime import UTC, date, datetime

from supabase import Client

from calorie_track.domain.entries import Entry, EntryDraft
from calorie_track.services.entries import EntryRepository
from calorie_track.services.stats import StatsRepository

_ENTRY_COLUMNS = (
    "id, user_id, name, quantity, calories, protein, fat, carbs, date, "
    "created_at, updated_at"
)


@dataclass
class SupabaseEntryRepository(EntryRepository, StatsRepository):
    """Supabase implementation for food entries."""

    client: Client

    def create_entry(self, owner_id: str, draft: EntryDraft) -> Entry:
        """Create an entry row and return it."""
        now = datetime.now(tz=UTC).isoformat()
        payload = _draft_payload(draft)
        payload.update({"user_id": owner_id, "created_at": now, "updated_at": now})
        response = self.client.table("entries").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create entry")
        return _parse_entry(response.data[0])

    def get_entry(self, owner_id: str, entry_id: str) -> Entry | None:
        """Return an entry owned by the user."""
        response = (
            self.client.table("entries")
            .select(_ENTRY_COLUMNS)
            .eq("id", entry_id)
            .eq("user_id", owner_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_entries_by_date(self, owner_id: str, day: date) -> list[Entry]:
        """Return the user's entries for a date, newest first."""
        response = (
            self.client.table("entries")
            .select(_ENTRY_COLUMNS)
            .eq("user_id", owner_id)
            .eq("date", day.isoformat())
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def list_entries_in_range(
        self, owner_id: str, start: date, end: date
    ) -> list[Entry]:
        """Return the user's entries in the inclusive date range."""
        response = (
            self.client.table("entries")
            .select(_ENTRY_COLUMNS)
            .eq("user_id", owner_id)
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=True)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def update_entry(self, owner_id: str, entry_id: str, draft: EntryDraft) -> Entry:
        """Overwrite an entry row and return it."""
        payload = _draft_payload(draft)
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("entries")
            .update(payload)
            .eq("id", entry_id)
            .eq("user_id", owner_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update entry")
        return _parse_entry(response.data[0])

    def delete_entry(self, owner_id: str, entry_id: str) -> None:
        """Delete an entry row."""
        self.client.table("entries").delete().eq("id", entry_id).eq(
            "user_id", owner_id
        ).execute()


def _draft_payload(draft: EntryDraft) -> dict[str, object]:
    return {
        "name": draft.name,
        "quantity": draft.quantity,
        "calories": draft.calories,
        "protein": draft.protein,
        "fat": draft.fat,
        "carbs": draft.carbs,
        "date": draft.date.isoformat(),
    }


def _parse_entry(row: dict[str, object]) -> Entry:
    return Entry(
        id=str(row["id"]),
        owner_id=str(row["user_id"]),
        name=str(row.get("name") or ""),
        quantity=str(row.get("quantity") or ""),
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        fat=float(row.get("fat") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        date=date.fromisoformat(str(row["date"])[:10]),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )


def _parse_timestamp(value: object) -> datetime:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return datetime.min.replace(tzinfo=UTC)
