"""JSON shapes returned by the API."""

from calorie_track.domain.entries import Entry
from calorie_track.domain.models import FoodHistoryItem, UserRecord
from calorie_track.domain.nutrition import FoodDetails, FoodSummary, NutrientProfile
from calorie_track.domain.stats import (
    DailySummary,
    DayProgress,
    GoalStatus,
    PeriodTotals,
)
from calorie_track.services.rounding import round_macro


def serialize_entry(entry: Entry) -> dict[str, object]:
    return {
        "id": entry.id,
        "ownerId": entry.owner_id,
        "name": entry.name,
        "quantity": entry.quantity,
        "calories": entry.calories,
        "protein": entry.protein,
        "fat": entry.fat,
        "carbs": entry.carbs,
        "date": entry.date.isoformat(),
        "createdAt": entry.created_at.isoformat(),
        "updatedAt": entry.updated_at.isoformat(),
    }


def serialize_daily_summary(summary: DailySummary) -> dict[str, object]:
    return {
        "date": summary.date.isoformat(),
        "totalCalories": round_macro(summary.total_calories),
        "totalProtein": round_macro(summary.total_protein),
        "totalFat": round_macro(summary.total_fat),
        "totalCarbs": round_macro(summary.total_carbs),
        "entryCount": summary.entry_count,
    }


def serialize_goal_status(status: GoalStatus) -> dict[str, object]:
    return {"percentage": status.percentage, "status": status.status}


def serialize_day_progress(progress: DayProgress) -> dict[str, object]:
    """Day totals alongside the goal status and progress bar fill."""
    return {
        **serialize_daily_summary(progress.summary),
        "calorieGoal": progress.goal,
        "remaining": round_macro(progress.remaining),
        "goalStatus": serialize_goal_status(progress.status),
        "progressFill": progress.fill,
    }


def serialize_period_totals(totals: PeriodTotals) -> dict[str, object]:
    return {
        "totalCalories": round_macro(totals.total_calories),
        "totalProtein": round_macro(totals.total_protein),
        "totalFat": round_macro(totals.total_fat),
        "totalCarbs": round_macro(totals.total_carbs),
        "trackedDays": totals.tracked_days,
        "totalDays": totals.total_days,
    }


def serialize_profile(profile: NutrientProfile) -> dict[str, object]:
    return {
        "calories": profile.calories,
        "protein": profile.protein,
        "fat": profile.fat,
        "carbs": profile.carbs,
    }


def serialize_food_summary(food: FoodSummary) -> dict[str, object]:
    return {
        "fdcId": food.fdc_id,
        "name": food.name,
        "dataType": food.data_type,
        "brandOwner": food.brand_owner,
        "publishedDate": food.published_date,
        **serialize_profile(food.profile),
        "hasNutrients": food.has_nutrients,
    }


def serialize_food_details(
    food: FoodDetails, scaled: NutrientProfile, quantity: str | None
) -> dict[str, object]:
    """FDC food with its reference profile and the profile for the quantity."""
    return {
        "fdcId": food.fdc_id,
        "name": food.name,
        "dataType": food.data_type,
        "per100g": serialize_profile(food.profile),
        "quantity": quantity,
        **serialize_profile(scaled),
    }


def serialize_food_history(food: FoodHistoryItem) -> dict[str, object]:
    return {"name": food.name, **serialize_profile(food.profile)}


def serialize_user(user: UserRecord) -> dict[str, object]:
    return {
        "uid": user.id,
        "email": user.email,
        "displayName": user.display_name,
        "calorieGoal": user.calorie_goal,
    }
