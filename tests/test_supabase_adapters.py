"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from uuid import uuid4

from nutrition_analytics.adapters.supabase_custom_food_repository import (
    SupabaseCustomFoodRepository,
)
from nutrition_analytics.adapters.supabase_food_log_repository import (
    SupabaseFoodLogRepository,
)
from nutrition_analytics.domain.food_log import FoodLogEntry


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: list[list[dict[str, object]]] = field(default_factory=list)
    selected: str | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    modifiers: list[tuple[object, ...]] = field(default_factory=list)
    _negate: bool = False

    def queue(self, data: list[dict[str, object]]) -> None:
        self.response_queue.append(data)

    def select(self, columns: str) -> "FakeTable":
        self.selected = columns
        return self

    @property
    def not_(self) -> "FakeTable":
        self._negate = True
        return self

    def _filter(self, operator: str, column: str, value: object) -> "FakeTable":
        if self._negate:
            operator = f"not.{operator}"
            self._negate = False
        self.last_filters.append((operator, column, value))
        return self

    def eq(self, column: str, value: object) -> "FakeTable":
        return self._filter("eq", column, value)

    def gte(self, column: str, value: object) -> "FakeTable":
        return self._filter("gte", column, value)

    def lte(self, column: str, value: object) -> "FakeTable":
        return self._filter("lte", column, value)

    def is_(self, column: str, value: object) -> "FakeTable":
        return self._filter("is", column, value)

    def order(
        self, column: str, *, desc: bool = False, foreign_table: str | None = None
    ) -> "FakeTable":
        self.modifiers.append(("order", column, desc, foreign_table))
        return self

    def limit(self, size: int, *, foreign_table: str | None = None) -> "FakeTable":
        self.modifiers.append(("limit", size, foreign_table))
        return self

    def execute(self) -> FakeResponse:
        data = self.response_queue.pop(0) if self.response_queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_food_log_repository_filters_by_user_and_dates() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_log_entries")
    table.queue(
        [
            {"date": "2026-02-10", "time": "20:30:00", "custom_food_id": 4},
            {"date": "2026-02-11", "time": "07:05:00", "custom_food_id": 9},
        ]
    )
    user_id = uuid4()

    repository = SupabaseFoodLogRepository(client)
    entries = repository.entries_in_date_range(
        user_id, date(2026, 2, 10), date(2026, 2, 11)
    )

    assert entries == [
        FoodLogEntry(date=date(2026, 2, 10), time=time(20, 30), custom_food_id=4),
        FoodLogEntry(date=date(2026, 2, 11), time=time(7, 5), custom_food_id=9),
    ]
    assert table.last_filters == [
        ("eq", "user_id", str(user_id)),
        ("gte", "date", "2026-02-10"),
        ("lte", "date", "2026-02-11"),
    ]


def test_food_log_repository_handles_empty_response() -> None:
    client = FakeSupabaseClient()

    repository = SupabaseFoodLogRepository(client)

    assert repository.entries_in_date_range(
        uuid4(), date(2026, 2, 10), date(2026, 2, 11)
    ) == []


def test_custom_food_repository_takes_latest_log_time() -> None:
    client = FakeSupabaseClient()
    table = client.table("custom_foods")
    table.queue(
        [
            {
                "id": 12,
                "food_name": "Flat white",
                "keywords": ["Coffee", " milk", "flat-white"],
                "calories": 120,
                "protein_g": "6.50",
                "carbs_g": "9.00",
                "fat_g": "6.00",
                "fitbit_food_id": 812345,
                "amount": "240",
                "unit_id": 209,
                "created_at": "2026-01-05T09:00:00+00:00",
                "food_log_entries": [
                    {"logged_at": "2026-02-01T08:10:00+00:00"},
                    {"logged_at": "2026-02-09T07:45:00+00:00"},
                    {"logged_at": "2026-01-20T10:00:00+00:00"},
                ],
            }
        ]
    )
    user_id = uuid4()

    repository = SupabaseCustomFoodRepository(client)
    candidates = repository.list_match_candidates(user_id)

    assert len(candidates) == 1
    candidate = candidates[0]
    assert candidate.keywords == frozenset({"coffee", "milk", "flat-white"})
    assert candidate.protein_g == 6.5
    assert candidate.amount == 240.0
    assert candidate.last_logged_at == datetime(2026, 2, 9, 7, 45, tzinfo=timezone.utc)
    assert "food_log_entries(logged_at)" in (table.selected or "")
    assert table.last_filters == [
        ("eq", "user_id", str(user_id)),
        ("not.is", "keywords", "null"),
        ("not.is", "fitbit_food_id", "null"),
    ]
    assert table.modifiers == [
        ("order", "logged_at", True, "food_log_entries"),
        ("limit", 1, "food_log_entries"),
    ]


def test_custom_food_repository_never_logged_food() -> None:
    client = FakeSupabaseClient()
    client.table("custom_foods").queue(
        [
            {
                "id": 3,
                "food_name": "Greek yogurt",
                "keywords": ["yogurt", "greek"],
                "calories": 90,
                "protein_g": 15,
                "carbs_g": 5,
                "fat_g": 0,
                "fitbit_food_id": 77,
                "amount": 170,
                "unit_id": 147,
                "created_at": "2026-01-05T09:00:00-05:00",
                "food_log_entries": [],
            }
        ]
    )

    candidate = SupabaseCustomFoodRepository(client).list_match_candidates(uuid4())[0]

    assert candidate.last_logged_at is None
    assert candidate.effective_last_logged_at == datetime(
        2026, 1, 5, 9, 0, tzinfo=timezone(timedelta(hours=-5))
    )
