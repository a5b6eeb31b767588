"""Supabase repository for food log entries."""

from dataclasses import dataclass
from datetime import date, time
from uuid import UUID

from supabase import Client

from nutrition_analytics.domain.food_log import FoodLogEntry
from nutrition_analytics.services.fasting import FoodLogRepository


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase implementation for food log reads."""

    client: Client

    def entries_in_date_range(
        self, user_id: UUID, start: date, end: date
    ) -> list[FoodLogEntry]:
        """Return the user's entries logged between start and end, inclusive."""
        response = (
            self.client.table("food_log_entries")
            .select("date, time, custom_food_id")
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]


def _parse_entry(row: dict[str, object]) -> FoodLogEntry:
    return FoodLogEntry(
        date=date.fromisoformat(str(row["date"])),
        time=time.fromisoformat(str(row["time"])),
        custom_food_id=int(row["custom_food_id"]),
    )
