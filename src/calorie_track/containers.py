"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from calorie_track.adapters.fdc_client import HttpxFdcClient
from calorie_track.adapters.openai_recommendation_client import (
    OpenAIRecommendationClient,
)
from calorie_track.adapters.supabase_entry_repository import SupabaseEntryRepository
from calorie_track.adapters.supabase_food_repository import SupabaseFoodRepository
from calorie_track.adapters.supabase_token_verifier import SupabaseTokenVerifier
from calorie_track.adapters.supabase_user_repository import SupabaseUserRepository
from calorie_track.config import Settings
from calorie_track.services.auth import TokenVerifier
from calorie_track.services.cache import InMemoryCache
from calorie_track.services.entries import EntryService
from calorie_track.services.foods import FoodHistoryService
from calorie_track.services.nutrition import NutritionService
from calorie_track.services.recommendations import RecommendationService
from calorie_track.services.stats import StatsService
from calorie_track.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    token_verifier: TokenVerifier
    user_service: UserService
    nutrition_service: NutritionService
    food_history_service: FoodHistoryService
    entry_service: EntryService
    stats_service: StatsService
    recommendation_service: RecommendationService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    entry_repository = SupabaseEntryRepository(supabase_client)
    user_service = UserService(
        SupabaseUserRepository(supabase_client),
        default_calorie_goal=resolved_settings.default_calorie_goal,
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
    )
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        cache=InMemoryCache(max_entries=resolved_settings.food_cache_size),
    )
    food_history_service = FoodHistoryService(SupabaseFoodRepository(supabase_client))
    entry_service = EntryService(
        repository=entry_repository,
        nutrition_service=nutrition_service,
        food_history=food_history_service,
    )
    stats_service = StatsService(entry_repository)
    openai_client = OpenAIRecommendationClient.create(resolved_settings.openai_api_key)
    recommendation_service = RecommendationService(
        client=openai_client,
        model=resolved_settings.openai_model,
    )

    async def close_resources() -> None:
        await fdc_client.close()
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        token_verifier=SupabaseTokenVerifier(supabase_client),
        user_service=user_service,
        nutrition_service=nutrition_service,
        food_history_service=food_history_service,
        entry_service=entry_service,
        stats_service=stats_service,
        recommendation_service=recommendation_service,
        close_resources=close_resources,
    )
