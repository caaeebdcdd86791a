"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date
from uuid import UUID, uuid4

import pytest

from rope_fitness.config import Settings
from rope_fitness.containers import AppContainer
from rope_fitness.domain.profiles import ProfileRecord
from rope_fitness.domain.weights import WeightEntry
from rope_fitness.domain.workouts import WorkoutLogRecord
from rope_fitness.services.chat import ChatClient, NutritionChatService
from rope_fitness.services.profiles import ProfileRepository, ProfileService
from rope_fitness.services.weights import WeightRepository, WeightService
from rope_fitness.services.workouts import WorkoutRepository, WorkoutService


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, ProfileRecord] = field(default_factory=dict)
    fail: bool = False

    def add(self, **overrides: object) -> ProfileRecord:
        values: dict[str, object] = {
            "id": uuid4(),
            "name": "Dana",
            "age": 34,
            "gender": "female",
            "height_cm": 165.0,
            "weight_kg": 70.0,
            "target_weight_kg": 62.0,
            "workouts_per_week": 4,
            "current_level": "beginner",
            "preferred_intensity": "medium",
        }
        values.update(overrides)
        profile = ProfileRecord(**values)
        self.profiles[profile.id] = profile
        return profile

    def get_profile(self, user_id: UUID) -> ProfileRecord | None:
        if self.fail:
            raise RuntimeError("database unavailable")
        return self.profiles.get(user_id)

    def list_profiles(self) -> list[ProfileRecord]:
        return list(reversed(self.profiles.values()))

    def create_profile(self, values: dict[str, object]) -> ProfileRecord:
        return self.add(**values)

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> None:
        self.profiles[user_id] = replace(self.profiles[user_id], **changes)


@dataclass
class InMemoryWorkoutRepository(WorkoutRepository):
    """In-memory workout repository for tests."""

    logs: dict[UUID, WorkoutLogRecord] = field(default_factory=dict)

    def create_workout_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        workout_date: date,
        work_minutes: float,
        intensity: str,
        calories_burned: float,
        sets_completed: int,
        plan_id: int | None,
        session_id: int | None,
        notes: str,
    ) -> WorkoutLogRecord:
        record = WorkoutLogRecord(
            id=uuid4(),
            user_id=user_id,
            workout_date=workout_date,
            work_minutes=work_minutes,
            intensity=intensity,
            calories_burned=calories_burned,
            sets_completed=sets_completed,
            plan_id=plan_id,
            session_id=session_id,
            notes=notes,
        )
        self.logs[record.id] = record
        return record

    def get_workout_log(self, workout_id: UUID) -> WorkoutLogRecord | None:
        return self.logs.get(workout_id)

    def update_workout_log(self, workout_id: UUID, changes: dict[str, object]) -> None:
        values = dict(changes)
        if isinstance(values.get("workout_date"), str):
            values["workout_date"] = date.fromisoformat(values["workout_date"])
        self.logs[workout_id] = replace(self.logs[workout_id], **values)

    def list_workout_logs(self, user_id: UUID) -> list[WorkoutLogRecord]:
        return sorted(
            (log for log in self.logs.values() if log.user_id == user_id),
            key=lambda log: log.workout_date,
            reverse=True,
        )

    def delete_workout_log(self, workout_id: UUID) -> None:
        del self.logs[workout_id]


@dataclass
class InMemoryWeightRepository(WeightRepository):
    """In-memory weight repository for tests."""

    entries: list[WeightEntry] = field(default_factory=list)

    def add_weight_entry(
        self, user_id: UUID, weight_kg: float, measurement_date: date, notes: str
    ) -> WeightEntry:
        entry = WeightEntry(
            id=uuid4(),
            user_id=user_id,
            weight_kg=weight_kg,
            measurement_date=measurement_date,
            notes=notes,
        )
        self.entries.append(entry)
        return entry

    def list_weight_entries(self, user_id: UUID) -> list[WeightEntry]:
        return sorted(
            (entry for entry in self.entries if entry.user_id == user_id),
            key=lambda entry: entry.measurement_date,
            reverse=True,
        )


@dataclass
class FakeChatClient(ChatClient):
    """Fake chat client that records calls and returns a fixed reply."""

    reply: str | None = "Eat more vegetables."
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete(
        self,
        *,
        model: str,
        messages: list[dict[str, str]],
        temperature: float,
        max_tokens: int,
    ) -> str | None:
        self.calls.append(
            {
                "model": model,
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if self.error:
            raise self.error
        return self.reply


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        openai_api_key="openai-key",
    )


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def workout_repository() -> InMemoryWorkoutRepository:
    return InMemoryWorkoutRepository()


@pytest.fixture
def weight_repository() -> InMemoryWeightRepository:
    return InMemoryWeightRepository()


@pytest.fixture
def chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def container(
    settings: Settings,
    profile_repository: InMemoryProfileRepository,
    workout_repository: InMemoryWorkoutRepository,
    weight_repository: InMemoryWeightRepository,
    chat_client: FakeChatClient,
) -> AppContainer:
    chat_service = NutritionChatService(
        client=chat_client,
        profile_repository=profile_repository,
        model=settings.openai_model,
        temperature=settings.openai_temperature,
        max_tokens=settings.openai_max_tokens,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        profile_service=ProfileService(
            repository=profile_repository, weight_repository=weight_repository
        ),
        workout_service=WorkoutService(
            profile_repository=profile_repository,
            repository=workout_repository,
        ),
        weight_service=WeightService(weight_repository),
        chat_service=chat_service,
        close_resources=close_resources,
    )
