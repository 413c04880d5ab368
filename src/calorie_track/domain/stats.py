"""Domain models for summaries and goal progress."""

from dataclasses import dataclass
from datetime import date
from typing import Literal

GoalState = Literal["under", "on-track", "over"]


@dataclass(frozen=True)
class DailySummary:
    """Totals for one calendar date."""

    date: date
    total_calories: float
    total_protein: float
    total_fat: float
    total_carbs: float
    entry_count: int


@dataclass(frozen=True)
class GoalStatus:
    """Percentage of a goal and its classification."""

    percentage: int
    status: GoalState


@dataclass(frozen=True)
class PeriodTotals:
    """Totals across a dense daily series."""

    total_calories: float
    total_protein: float
    total_fat: float
    total_carbs: float
    tracked_days: int
    total_days: int


@dataclass(frozen=True)
class DayProgress:
    """Daily totals with calorie goal progress."""

    summary: DailySummary
    goal: float
    status: GoalStatus
    remaining: float
    fill: int
