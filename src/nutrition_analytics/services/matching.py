"""Suggest previously logged custom foods for a new nutrition analysis."""

import logging
from collections.abc import Collection
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrition_analytics.domain.food_log import MatchCandidate
from nutrition_analytics.domain.matching import (
    FoodMatch,
    NutrientValues,
    NutritionAnalysis,
    normalize_keywords,
)

MIN_MATCH_RATIO = 0.5
MAX_MATCHES = 3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NutrientTolerance:
    """Allowed deviation for one nutrient: a percentage with an absolute floor."""

    attribute: str
    relative: float
    absolute: float

    def allows(self, new_value: float, existing_value: float) -> bool:
        limit = max(existing_value * self.relative, self.absolute)
        return abs(new_value - existing_value) <= limit


NUTRIENT_TOLERANCES = (
    NutrientTolerance("calories", relative=0.20, absolute=25),
    NutrientTolerance("protein_g", relative=0.25, absolute=3),
    NutrientTolerance("carbs_g", relative=0.25, absolute=5),
    NutrientTolerance("fat_g", relative=0.25, absolute=3),
)


class CustomFoodRepository(Protocol):
    """Read access to a user's reusable custom foods."""

    def list_match_candidates(self, user_id: UUID) -> list[MatchCandidate]:
        """Return foods with keywords and a Fitbit link, with last log time."""


@dataclass
class FoodMatchService:
    """Ranks a user's custom foods against a fresh analysis."""

    repository: CustomFoodRepository

    def find_matches(
        self, user_id: UUID, analysis: NutritionAnalysis
    ) -> list[FoodMatch]:
        """Return up to three likely duplicates, best match first."""
        candidates = self.repository.list_match_candidates(user_id)
        new_nutrients = analysis.nutrients()
        matches = []
        for candidate in candidates:
            if not candidate.keywords or candidate.fitbit_food_id is None:
                continue
            ratio = compute_match_ratio(analysis.keywords, candidate.keywords)
            if ratio < MIN_MATCH_RATIO:
                continue
            if not check_nutrient_tolerance(new_nutrients, _nutrients_of(candidate)):
                continue
            matches.append(_to_match(candidate, ratio))

        ranked = sorted(
            matches,
            key=lambda match: (match.match_ratio, match.last_logged_at),
            reverse=True,
        )[:MAX_MATCHES]
        logger.debug(
            "Matched %d of %d candidates, returning %d",
            len(matches),
            len(candidates),
            len(ranked),
        )
        return ranked


def compute_match_ratio(
    new_keywords: Collection[str], existing_keywords: Collection[str]
) -> float:
    """Share of the new keywords that also describe the existing food.

    Keywords compare case-insensitively. Extra keywords on the existing food
    do not lower the ratio.
    """
    new_set = normalize_keywords(new_keywords)
    if not new_set:
        return 0.0
    existing_set = normalize_keywords(existing_keywords)
    found = sum(1 for keyword in new_set if keyword in existing_set)
    return found / len(new_set)


def check_nutrient_tolerance(new: NutrientValues, existing: NutrientValues) -> bool:
    """Return True when every macro of ``new`` is close enough to ``existing``."""
    return all(
        tolerance.allows(
            getattr(new, tolerance.attribute), getattr(existing, tolerance.attribute)
        )
        for tolerance in NUTRIENT_TOLERANCES
    )


def _nutrients_of(candidate: MatchCandidate) -> NutrientValues:
    return NutrientValues(
        calories=candidate.calories,
        protein_g=candidate.protein_g,
        carbs_g=candidate.carbs_g,
        fat_g=candidate.fat_g,
    )


def _to_match(candidate: MatchCandidate, ratio: float) -> FoodMatch:
    return FoodMatch(
        custom_food_id=candidate.id,
        food_name=candidate.food_name,
        calories=candidate.calories,
        protein_g=candidate.protein_g,
        carbs_g=candidate.carbs_g,
        fat_g=candidate.fat_g,
        fitbit_food_id=candidate.fitbit_food_id,
        match_ratio=ratio,
        last_logged_at=candidate.effective_last_logged_at,
        amount=candidate.amount,
        unit_id=candidate.unit_id,
    )
