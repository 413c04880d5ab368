"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutrientProfile:
    """Calories and macronutrients, per 100 g unless scaled."""

    calories: float
    protein: float
    fat: float
    carbs: float

    @classmethod
    def empty(cls) -> "NutrientProfile":
        """Return the all-zero profile used for missing nutrition data."""
        return cls(calories=0, protein=0, fat=0, carbs=0)

    @property
    def is_empty(self) -> bool:
        """True when no nutrition data is available."""
        return not (self.calories or self.protein or self.fat or self.carbs)


@dataclass(frozen=True)
class FoodSummary:
    """Search hit from FDC with its per-100 g profile."""

    fdc_id: int
    name: str
    data_type: str | None
    brand_owner: str | None
    published_date: str | None
    profile: NutrientProfile

    @property
    def has_nutrients(self) -> bool:
        return not self.profile.is_empty


@dataclass(frozen=True)
class FoodDetails:
    """A single FDC food with its per-100 g profile."""

    fdc_id: int
    name: str
    data_type: str | None
    profile: NutrientProfile
