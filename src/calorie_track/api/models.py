"""Pydantic models for API request payloads."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class EntryPayload(BaseModel):
    """Body for creating or updating an entry."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    quantity: str | None = None
    calories: float | None = Field(default=None, ge=0)
    protein: float | None = Field(default=None, ge=0)
    fat: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    entry_date: date | None = Field(default=None, alias="date")
    fdc_id: int | None = Field(default=None, alias="fdcId")


class CalorieGoalPayload(BaseModel):
    """Body for updating the daily calorie goal."""

    model_config = ConfigDict(populate_by_name=True)

    calorie_goal: float = Field(gt=0, alias="calorieGoal")


class UserProfilePayload(BaseModel):
    """Body for updating the user's profile."""

    model_config = ConfigDict(populate_by_name=True)

    display_name: str = Field(default="", max_length=100, alias="displayName")
