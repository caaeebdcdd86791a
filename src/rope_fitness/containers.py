"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from rope_fitness.adapters.openai_chat_client import OpenAIChatClient
from rope_fitness.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from rope_fitness.adapters.supabase_weight_repository import SupabaseWeightRepository
from rope_fitness.adapters.supabase_workout_repository import (
    SupabaseWorkoutRepository,
)
from rope_fitness.config import Settings, resolve_openai_key
from rope_fitness.services.chat import NutritionChatService
from rope_fitness.services.profiles import ProfileService
from rope_fitness.services.weights import WeightService
from rope_fitness.services.workouts import WorkoutService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    workout_service: WorkoutService
    weight_service: WeightService
    chat_service: NutritionChatService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    workout_repository = SupabaseWorkoutRepository(supabase_client)
    weight_repository = SupabaseWeightRepository(supabase_client)

    api_key = resolve_openai_key(resolved_settings.openai_api_key)
    chat_client = OpenAIChatClient.create(api_key) if api_key else None
    chat_service = NutritionChatService(
        client=chat_client,
        profile_repository=profile_repository,
        model=resolved_settings.openai_model,
        temperature=resolved_settings.openai_temperature,
        max_tokens=resolved_settings.openai_max_tokens,
    )

    async def close_resources() -> None:
        if chat_client is not None:
            await chat_client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=ProfileService(
            repository=profile_repository, weight_repository=weight_repository
        ),
        workout_service=WorkoutService(
            profile_repository=profile_repository,
            repository=workout_repository,
            default_workouts_per_week=resolved_settings.default_workouts_per_week,
        ),
        weight_service=WeightService(weight_repository),
        chat_service=chat_service,
        close_resources=close_resources,
    )
