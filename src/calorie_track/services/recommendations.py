"""Nutrition recommendations generated by an LLM."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from calorie_track.domain.stats import PeriodTotals

PROMPT_TEMPLATE = """You are a nutritionist. You are given a summary of a user's \
nutrition data between {start} and {end}.
Provide a personalized recommendation based on the data.
Daily averages over {tracked_days} tracked day(s) out of {total_days}:
- Calories: {calories:.0f} kcal (goal: {goal:.0f} kcal)
- Protein: {protein:.1f} g
- Fat: {fat:.1f} g
- Carbs: {carbs:.1f} g
Requirements:
- Suggest 3-5 foods.
- Use fewer than 75 words.
- Plain text only, no asterisks or other formatting.
- Mention that the figures are daily averages over the period, not just today."""


class RecommendationClient(Protocol):
    """Interface for text generation."""

    async def generate(self, *, model: str, prompt: str) -> str:
        """Return generated text for the prompt."""


@dataclass
class RecommendationService:
    """Builds recommendation prompts from period totals."""

    client: RecommendationClient
    model: str

    async def suggest(
        self, totals: PeriodTotals, calorie_goal: float, start: date, end: date
    ) -> str:
        """Return recommendations for the period."""
        return await self.client.generate(
            model=self.model,
            prompt=build_prompt(totals, calorie_goal, start, end),
        )


def build_prompt(
    totals: PeriodTotals, calorie_goal: float, start: date, end: date
) -> str:
    """Render the prompt with per-day averages over tracked days."""
    days = max(totals.tracked_days, 1)
    return PROMPT_TEMPLATE.format(
        start=start.isoformat(),
        end=end.isoformat(),
        tracked_days=totals.tracked_days,
        total_days=totals.total_days,
        calories=totals.total_calories / days,
        goal=calorie_goal,
        protein=totals.total_protein / days,
        fat=totals.total_fat / days,
        carbs=totals.total_carbs / days,
    )
