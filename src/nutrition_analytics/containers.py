"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutrition_analytics.adapters.supabase_custom_food_repository import (
    SupabaseCustomFoodRepository,
)
from nutrition_analytics.adapters.supabase_food_log_repository import (
    SupabaseFoodLogRepository,
)
from nutrition_analytics.config import Settings
from nutrition_analytics.services.fasting import FastingService
from nutrition_analytics.services.matching import FoodMatchService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    fasting_service: FastingService
    food_match_service: FoodMatchService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_log_repository = SupabaseFoodLogRepository(supabase_client)
    custom_food_repository = SupabaseCustomFoodRepository(supabase_client)
    return AppContainer(
        settings=resolved_settings,
        fasting_service=FastingService(food_log_repository),
        food_match_service=FoodMatchService(custom_food_repository),
    )
