"""Domain models for logged meals and custom foods."""

from dataclasses import dataclass
from datetime import date, datetime, time


@dataclass(frozen=True)
class FoodLogEntry:
    """A single logged meal, in the user's local date and time."""

    date: date
    time: time
    custom_food_id: int


@dataclass(frozen=True)
class MatchCandidate:
    """Custom food eligible for reuse, with its most recent log timestamp."""

    id: int
    food_name: str
    keywords: frozenset[str]
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    fitbit_food_id: int | None
    amount: float
    unit_id: int
    created_at: datetime
    last_logged_at: datetime | None = None

    @property
    def effective_last_logged_at(self) -> datetime:
        """Latest log time, or the creation time for never-logged foods."""
        return self.last_logged_at or self.created_at
