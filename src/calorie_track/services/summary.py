"""Daily aggregation, goal classification and period totals."""

import math
from collections.abc import Iterable
from datetime import date, timedelta

from calorie_track.domain.entries import Entry
from calorie_track.domain.stats import DailySummary, GoalStatus, PeriodTotals
from calorie_track.services.rounding import round_half_up

UNDER_THRESHOLD = 80
OVER_THRESHOLD = 110
MAX_FILL = 100


def aggregate_daily(
    entries: Iterable[Entry], start: date, end: date
) -> list[DailySummary]:
    """Fold entries into one summary per date in ``[start, end]``, newest first.

    Dates without entries get a zero-valued summary, so the result always has
    one item per calendar day. ``start > end`` yields an empty list.
    """
    grouped: dict[date, list[Entry]] = {}
    for entry in entries:
        if start <= entry.date <= end:
            grouped.setdefault(entry.date, []).append(entry)

    daily = []
    for offset in range((end - start).days + 1):
        day = end - timedelta(days=offset)
        daily.append(_summarize_day(day, grouped.get(day, [])))
    return daily


def classify_goal(total: float, goal: float) -> GoalStatus:
    """Classify a total against a positive goal."""
    percentage = int(round_half_up(total / goal * 100))
    if percentage < UNDER_THRESHOLD:
        return GoalStatus(percentage=percentage, status="under")
    if percentage <= OVER_THRESHOLD:
        return GoalStatus(percentage=percentage, status="on-track")
    return GoalStatus(percentage=percentage, status="over")


def progress_fill(percentage: int) -> int:
    """Progress bar fill, capped at 100."""
    return min(percentage, MAX_FILL)


def totalize_period(summaries: list[DailySummary]) -> PeriodTotals:
    """Reduce a dense daily series to one set of totals."""
    return PeriodTotals(
        total_calories=math.fsum(day.total_calories for day in summaries),
        total_protein=math.fsum(day.total_protein for day in summaries),
        total_fat=math.fsum(day.total_fat for day in summaries),
        total_carbs=math.fsum(day.total_carbs for day in summaries),
        tracked_days=sum(1 for day in summaries if day.entry_count > 0),
        total_days=len(summaries),
    )


def _summarize_day(day: date, entries: list[Entry]) -> DailySummary:
    return DailySummary(
        date=day,
        total_calories=math.fsum(entry.calories for entry in entries),
        total_protein=math.fsum(entry.protein for entry in entries),
        total_fat=math.fsum(entry.fat for entry in entries),
        total_carbs=math.fsum(entry.carbs for entry in entries),
        entry_count=len(entries),
    )
