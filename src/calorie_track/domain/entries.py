"""Domain models for food log entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class Entry:
    """A logged food entry with finalized nutrients."""

    id: str
    owner_id: str
    name: str
    quantity: str
    calories: float
    protein: float
    fat: float
    carbs: float
    date: date
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class EntryDraft:
    """Values written to the entry store on create or update."""

    name: str
    quantity: str
    calories: float
    protein: float
    fat: float
    carbs: float
    date: date


@dataclass(frozen=True)
class EntryInput:
    """User-submitted entry values; missing fields are None."""

    name: str | None = None
    quantity: str | None = None
    calories: float | None = None
    protein: float | None = None
    fat: float | None = None
    carbs: float | None = None
    date: date | None = None
    fdc_id: int | None = None
