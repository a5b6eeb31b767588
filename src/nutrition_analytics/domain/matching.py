"""Models for food match suggestions."""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class NutritionAnalysis(BaseModel):
    """Nutrition analysis produced for a new, not yet logged food."""

    keywords: list[str]
    calories: float = Field(ge=0)
    protein_g: float = Field(ge=0)
    carbs_g: float = Field(ge=0)
    fat_g: float = Field(ge=0)

    @field_validator("keywords")
    @classmethod
    def _normalize_keywords(cls, value: list[str]) -> list[str]:
        return [cleaned for cleaned in map(_clean_keyword, value) if cleaned]

    @field_validator("calories", "protein_g", "carbs_g", "fat_g")
    @classmethod
    def _require_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("must be a finite number")
        return value

    def nutrients(self) -> "NutrientValues":
        """Return the macro snapshot of this analysis."""
        return NutrientValues(
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
        )


def normalize_keywords(keywords: Iterable[str]) -> frozenset[str]:
    """Return keywords stripped and lower-cased, without empty tokens."""
    return frozenset(cleaned for cleaned in map(_clean_keyword, keywords) if cleaned)


def _clean_keyword(keyword: str) -> str:
    return keyword.strip().lower()


@dataclass(frozen=True)
class NutrientValues:
    """Macronutrient values compared during matching."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class FoodMatch:
    """A previously logged custom food suggested for reuse."""

    custom_food_id: int
    food_name: str
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    fitbit_food_id: int | None
    match_ratio: float
    last_logged_at: datetime
    amount: float
    unit_id: int
