"""Fasting window computation from logged meal times."""

import logging
import re
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from nutrition_analytics.domain.fasting import FastingStatus, FastingWindow, LiveFast
from nutrition_analytics.domain.food_log import FoodLogEntry
from nutrition_analytics.errors import InvalidDateError, InvalidDateRangeError

MINUTES_PER_DAY = 24 * 60

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
# Earliest day that has a representable previous day.
_FIRST_COMPARABLE_DAY = date.min + timedelta(days=1)

logger = logging.getLogger(__name__)


class FoodLogRepository(Protocol):
    """Read access to a user's food log."""

    def entries_in_date_range(
        self, user_id: UUID, start: date, end: date
    ) -> list[FoodLogEntry]:
        """Return the user's entries with start <= date <= end."""


@dataclass
class FastingService:
    """Derives fasting windows from a user's food log."""

    repository: FoodLogRepository

    def window_for_date(self, user_id: UUID, day: date) -> FastingWindow | None:
        """Return the fast ending on ``day``, or None without a previous-day meal."""
        if day == date.min:
            return None
        previous = day - timedelta(days=1)
        entries = self.repository.entries_in_date_range(user_id, previous, day)
        window = _compute_window(day, _group_times(entries))
        if window is None:
            logger.debug("No previous day meals for %s", day.isoformat())
        else:
            logger.debug(
                "Fasting window for %s: %s minutes",
                day.isoformat(),
                window.duration_minutes,
            )
        return window

    def windows_for_range(
        self, user_id: UUID, start: date, end: date
    ) -> list[FastingWindow]:
        """Return windows for each day in [start, end] that has a baseline."""
        if start > end:
            raise InvalidDateRangeError
        entries = self.repository.entries_in_date_range(
            user_id, max(start, _FIRST_COMPARABLE_DAY) - timedelta(days=1), end
        )
        if not entries:
            logger.debug("No entries between %s and %s", start, end)
            return []

        times_by_date = _group_times(entries)
        windows = []
        for day in _iter_days(start, end):
            window = _compute_window(day, times_by_date)
            if window is not None:
                windows.append(window)
        logger.debug(
            "Computed %d fasting windows between %s and %s", len(windows), start, end
        )
        return windows

    def fasting_status(self, user_id: UUID, day: date, today: date) -> FastingStatus:
        """Return the window for ``day`` and, when it is today, its live state."""
        window = self.window_for_date(user_id, day)
        live = None
        if window is not None and day == today and window.is_ongoing:
            live = LiveFast(
                last_meal_time=window.last_meal_time,
                start_date=day - timedelta(days=1),
            )
        return FastingStatus(window=window, live=live)


def parse_log_date(raw: str, field: str = "date") -> date:
    """Parse a strict YYYY-MM-DD string into a date."""
    if not _DATE_PATTERN.match(raw):
        raise InvalidDateError(raw, field)
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise InvalidDateError(raw, field) from exc


def today_in_timezone(timezone_name: str) -> date:
    """Return the current calendar date in the given timezone."""
    return datetime.now(tz=ZoneInfo(timezone_name)).date()


def minutes_since_midnight(value: time) -> int:
    """Return whole minutes since midnight; seconds are ignored."""
    return value.hour * 60 + value.minute


def fasting_duration_minutes(last_meal: time, first_meal: time) -> int:
    """Minutes from ``last_meal`` on one day to ``first_meal`` on the next."""
    return (
        minutes_since_midnight(first_meal)
        + MINUTES_PER_DAY
        - minutes_since_midnight(last_meal)
    )


def _group_times(entries: Iterable[FoodLogEntry]) -> dict[date, list[time]]:
    times_by_date: dict[date, list[time]] = defaultdict(list)
    for entry in entries:
        times_by_date[entry.date].append(entry.time)
    return times_by_date


def _compute_window(
    day: date, times_by_date: dict[date, list[time]]
) -> FastingWindow | None:
    if day == date.min:
        return None
    previous_times = times_by_date.get(day - timedelta(days=1))
    if not previous_times:
        return None
    last_meal = max(previous_times)

    current_times = times_by_date.get(day)
    if not current_times:
        return FastingWindow(
            date=day,
            last_meal_time=last_meal,
            first_meal_time=None,
            duration_minutes=None,
        )

    first_meal = min(current_times)
    return FastingWindow(
        date=day,
        last_meal_time=last_meal,
        first_meal_time=first_meal,
        duration_minutes=fasting_duration_minutes(last_meal, first_meal),
    )


def _iter_days(start: date, end: date) -> Iterable[date]:
    for offset in range((end - start).days + 1):
        yield start + timedelta(days=offset)
