"""Food entry logging service."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol

from calorie_track.domain.entries import Entry, EntryDraft, EntryInput
from calorie_track.domain.nutrition import NutrientProfile
from calorie_track.services.foods import FoodHistoryService
from calorie_track.services.nutrition import NutritionService
from calorie_track.services.scaling import scale_profile

MACRO_FIELDS = ("protein", "fat", "carbs")

_logger = logging.getLogger(__name__)


class EntryValidationError(ValueError):
    """Raised when an entry lacks the data needed to store it."""

    def __init__(self, message: str, missing_fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing_fields = missing_fields or []


class NutritionUnavailableError(LookupError):
    """Raised when a referenced FDC food has no usable nutrition data."""


class EntryRepository(Protocol):
    """Persistence interface for food entries, scoped by owner."""

    def create_entry(self, owner_id: str, draft: EntryDraft) -> Entry:
        """Create an entry and return it."""

    def get_entry(self, owner_id: str, entry_id: str) -> Entry | None:
        """Return an entry owned by the user, if present."""

    def list_entries_by_date(self, owner_id: str, day: date) -> list[Entry]:
        """Return the user's entries for one date, newest first."""

    def list_entries_in_range(
        self, owner_id: str, start: date, end: date
    ) -> list[Entry]:
        """Return the user's entries with dates in ``[start, end]``."""

    def update_entry(self, owner_id: str, entry_id: str, draft: EntryDraft) -> Entry:
        """Overwrite an entry and return it."""

    def delete_entry(self, owner_id: str, entry_id: str) -> None:
        """Delete an entry."""


@dataclass
class EntryService:
    """Service that finalizes nutrients and persists entries."""

    repository: EntryRepository
    nutrition_service: NutritionService
    food_history: FoodHistoryService

    def list_entries(self, owner_id: str, day: date) -> list[Entry]:
        """Return entries logged for a date."""
        return self.repository.list_entries_by_date(owner_id, day)

    def get_entry(self, owner_id: str, entry_id: str) -> Entry | None:
        """Return an entry if the user owns it."""
        return self.repository.get_entry(owner_id, entry_id)

    async def create_entry(self, owner_id: str, payload: EntryInput) -> Entry:
        """Finalize nutrients for a new entry and persist it."""
        if payload.fdc_id is not None:
            draft = await self._draft_from_fdc(payload, fallback_name=None)
        else:
            missing = [
                field
                for field in ("calories", *MACRO_FIELDS)
                if getattr(payload, field) is None
            ]
            if missing:
                raise EntryValidationError(
                    "Macronutrient data required. Use USDA search or enter manually.",
                    missing_fields=missing,
                )
            draft = EntryDraft(
                name=_require_name(payload.name),
                quantity=payload.quantity or "",
                calories=float(payload.calories),
                protein=float(payload.protein),
                fat=float(payload.fat),
                carbs=float(payload.carbs),
                date=payload.date or _today(),
            )
        entry = self.repository.create_entry(owner_id, draft)
        self._record_food(owner_id, entry)
        return entry

    async def update_entry(
        self, owner_id: str, entry_id: str, payload: EntryInput
    ) -> Entry | None:
        """Update an owned entry; unspecified fields keep their values."""
        current = self.repository.get_entry(owner_id, entry_id)
        if current is None:
            return None
        if payload.fdc_id is not None:
            draft = await self._draft_from_fdc(
                payload,
                fallback_name=current.name,
                fallback_quantity=current.quantity,
                fallback_date=current.date,
            )
        else:
            provided = [
                field for field in MACRO_FIELDS if getattr(payload, field) is not None
            ]
            if provided and len(provided) != len(MACRO_FIELDS):
                raise EntryValidationError(
                    "All macronutrients required (protein, fat, carbs) or none",
                    missing_fields=[
                        field for field in MACRO_FIELDS if field not in provided
                    ],
                )
            draft = EntryDraft(
                name=_require_name(
                    payload.name if payload.name is not None else current.name
                ),
                quantity=_first_set(payload.quantity, current.quantity),
                calories=float(_first_set(payload.calories, current.calories)),
                protein=float(_first_set(payload.protein, current.protein)),
                fat=float(_first_set(payload.fat, current.fat)),
                carbs=float(_first_set(payload.carbs, current.carbs)),
                date=payload.date or current.date,
            )
        return self.repository.update_entry(owner_id, entry_id, draft)

    def delete_entry(self, owner_id: str, entry_id: str) -> bool:
        """Delete an owned entry; False when the user does not own it."""
        if self.repository.get_entry(owner_id, entry_id) is None:
            return False
        self.repository.delete_entry(owner_id, entry_id)
        return True

    async def _draft_from_fdc(
        self,
        payload: EntryInput,
        *,
        fallback_name: str | None,
        fallback_quantity: str = "",
        fallback_date: date | None = None,
    ) -> EntryDraft:
        details = await self.nutrition_service.get_food(payload.fdc_id)
        if details is None:
            raise NutritionUnavailableError(
                "Food data not available - please enter nutrition manually"
            )
        quantity = _first_set(payload.quantity, fallback_quantity)
        scaled = scale_profile(details.profile, quantity)
        return EntryDraft(
            name=_require_name(payload.name or fallback_name or details.name),
            quantity=quantity,
            calories=scaled.calories,
            protein=scaled.protein,
            fat=scaled.fat,
            carbs=scaled.carbs,
            date=payload.date or fallback_date or _today(),
        )

    def _record_food(self, owner_id: str, entry: Entry) -> None:
        profile = NutrientProfile(
            calories=entry.calories,
            protein=entry.protein,
            fat=entry.fat,
            carbs=entry.carbs,
        )
        try:
            self.food_history.record(owner_id, entry.name, profile)
        except Exception:
            _logger.exception("Failed to track food", extra={"name": entry.name})


def _require_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise EntryValidationError("name is required", missing_fields=["name"])
    return cleaned


def _first_set(value: object, fallback: object) -> object:
    return fallback if value is None else value


def _today() -> date:
    return datetime.now(tz=UTC).date()
