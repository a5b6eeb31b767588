"""Supabase repository for reusable custom foods."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrition_analytics.domain.food_log import MatchCandidate
from nutrition_analytics.domain.matching import normalize_keywords
from nutrition_analytics.services.matching import CustomFoodRepository

_CANDIDATE_COLUMNS = (
    "id, food_name, keywords, calories, protein_g, carbs_g, fat_g, "
    "fitbit_food_id, amount, unit_id, created_at, food_log_entries(logged_at)"
)


@dataclass
class SupabaseCustomFoodRepository(CustomFoodRepository):
    """Supabase implementation for match candidate reads."""

    client: Client

    def list_match_candidates(self, user_id: UUID) -> list[MatchCandidate]:
        """Return keyworded, Fitbit-linked foods with their latest log time."""
        response = (
            self.client.table("custom_foods")
            .select(_CANDIDATE_COLUMNS)
            .eq("user_id", str(user_id))
            .not_.is_("keywords", "null")
            .not_.is_("fitbit_food_id", "null")
            .order("logged_at", desc=True, foreign_table="food_log_entries")
            .limit(1, foreign_table="food_log_entries")
            .execute()
        )
        return [_parse_candidate(row) for row in response.data or []]


def _parse_candidate(row: dict[str, object]) -> MatchCandidate:
    """Parse a custom food row with embedded log entries."""
    fitbit_food_id = row.get("fitbit_food_id")
    return MatchCandidate(
        id=int(row["id"]),
        food_name=str(row.get("food_name", "")),
        keywords=normalize_keywords(row.get("keywords") or ()),
        calories=int(row.get("calories", 0)),
        protein_g=float(row.get("protein_g", 0.0)),
        carbs_g=float(row.get("carbs_g", 0.0)),
        fat_g=float(row.get("fat_g", 0.0)),
        fitbit_food_id=int(fitbit_food_id) if fitbit_food_id is not None else None,
        amount=float(row.get("amount", 0.0)),
        unit_id=int(row.get("unit_id", 0)),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        last_logged_at=_latest_logged_at(row.get("food_log_entries")),
    )


def _latest_logged_at(entries: object) -> datetime | None:
    if not isinstance(entries, list):
        return None
    timestamps = [
        datetime.fromisoformat(entry["logged_at"])
        for entry in entries
        if isinstance(entry, dict) and entry.get("logged_at")
    ]
    return max(timestamps, default=None)
