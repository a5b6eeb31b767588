"""Domain models for fasting windows."""

from dataclasses import dataclass
from datetime import date, time


@dataclass(frozen=True)
class FastingWindow:
    """Fast ending on ``date``.

    ``first_meal_time`` and ``duration_minutes`` are ``None`` while the fast
    is still ongoing, i.e. nothing has been logged on ``date`` yet.
    """

    date: date
    last_meal_time: time
    first_meal_time: time | None
    duration_minutes: int | None

    @property
    def is_ongoing(self) -> bool:
        return self.first_meal_time is None


@dataclass(frozen=True)
class LiveFast:
    """An ongoing fast that started on ``start_date``."""

    last_meal_time: time
    start_date: date


@dataclass(frozen=True)
class FastingStatus:
    """Fasting window for a day plus its live state."""

    window: FastingWindow | None
    live: LiveFast | None
