"""Statistics service for food entries."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from calorie_track.domain.entries import Entry
from calorie_track.domain.stats import DailySummary, DayProgress, PeriodTotals
from calorie_track.services.summary import (
    aggregate_daily,
    classify_goal,
    progress_fill,
    totalize_period,
)


class StatsRepository(Protocol):
    """Read interface for entry statistics."""

    def list_entries_in_range(
        self, owner_id: str, start: date, end: date
    ) -> list[Entry]:
        """Return the user's entries with dates in ``[start, end]``."""


@dataclass
class StatsService:
    """Service for daily summaries and goal progress."""

    repository: StatsRepository

    def get_summary(self, owner_id: str, start: date, end: date) -> list[DailySummary]:
        """Return one summary per day in the range, newest first."""
        entries = self.repository.list_entries_in_range(owner_id, start, end)
        return aggregate_daily(entries, start, end)

    def get_day_progress(self, owner_id: str, day: date, goal: float) -> DayProgress:
        """Return a day's totals with calorie goal progress."""
        (summary,) = self.get_summary(owner_id, day, day)
        status = classify_goal(summary.total_calories, goal)
        return DayProgress(
            summary=summary,
            goal=goal,
            status=status,
            remaining=goal - summary.total_calories,
            fill=progress_fill(status.percentage),
        )

    def get_period_totals(self, owner_id: str, start: date, end: date) -> PeriodTotals:
        """Return totals across the range."""
        return totalize_period(self.get_summary(owner_id, start, end))
