"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID, uuid4

import pytest

from rope_fitness.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from rope_fitness.adapters.supabase_weight_repository import SupabaseWeightRepository
from rope_fitness.adapters.supabase_workout_repository import (
    SupabaseWorkoutRepository,
)


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _workout_row(user_id: str, **overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": str(uuid4()),
        "user_id": user_id,
        "workout_date": "2024-05-15",
        "work_minutes": 30,
        "intensity": "medium",
        "calories_burned": 433.65,
        "sets_completed": 10,
        "plan_id": 2,
        "session_id": None,
        "notes": None,
    }
    row.update(overrides)
    return row


def test_supabase_profile_repository_parses_row() -> None:
    client = FakeSupabaseClient()
    profiles_table = client.table("profiles")
    user_id = str(uuid4())
    profiles_table.queue(
        "select",
        [
            {
                "id": user_id,
                "name": "Dana",
                "age": 34,
                "gender": "female",
                "height_cm": 165,
                "weight_kg": "70.5",
                "target_weight_kg": None,
                "workouts_per_week": 3,
                "current_level": "beginner",
                "preferred_intensity": "easy",
            }
        ],
    )

    repository = SupabaseProfileRepository(client)
    profile = repository.get_profile(UUID(user_id))

    assert profile is not None
    assert profile.id == UUID(user_id)
    assert profile.height_cm == 165.0
    assert profile.weight_kg == 70.5
    assert profile.target_weight_kg is None
    assert profiles_table.last_filters == [("id", user_id)]


def test_supabase_profile_repository_missing() -> None:
    repository = SupabaseProfileRepository(FakeSupabaseClient())

    assert repository.get_profile(uuid4()) is None


def test_supabase_workout_repository_create_and_get() -> None:
    client = FakeSupabaseClient()
    logs_table = client.table("workout_logs")
    user_id = str(uuid4())
    row = _workout_row(user_id)
    logs_table.queue("insert", [row])
    logs_table.queue("select", [row])

    repository = SupabaseWorkoutRepository(client)
    created = repository.create_workout_log(
        user_id=UUID(user_id),
        workout_date=date(2024, 5, 15),
        work_minutes=30,
        intensity="medium",
        calories_burned=433.65,
        sets_completed=10,
        plan_id=2,
        session_id=None,
        notes="",
    )
    fetched = repository.get_workout_log(created.id)

    assert isinstance(logs_table.last_payload, dict)
    assert logs_table.last_payload["workout_date"] == "2024-05-15"
    assert logs_table.last_payload["completed"] is True
    assert created.calories_burned == 433.65
    assert created.notes == ""
    assert fetched == created


def test_supabase_workout_repository_create_failure() -> None:
    repository = SupabaseWorkoutRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError):
        repository.create_workout_log(
            user_id=uuid4(),
            workout_date=date(2024, 5, 15),
            work_minutes=30,
            intensity="easy",
            calories_burned=100.0,
            sets_completed=0,
            plan_id=None,
            session_id=None,
            notes="",
        )


def test_supabase_workout_repository_update_and_list() -> None:
    client = FakeSupabaseClient()
    logs_table = client.table("workout_logs")
    user_id = str(uuid4())
    logs_table.queue(
        "select",
        [
            _workout_row(user_id, workout_date="2024-05-15"),
            _workout_row(user_id, workout_date="2024-05-10", calories_burned=None),
        ],
    )

    repository = SupabaseWorkoutRepository(client)
    workout_id = uuid4()
    repository.update_workout_log(workout_id, {"work_minutes": 20})
    logs = repository.list_workout_logs(UUID(user_id))

    assert logs_table.last_payload == {"work_minutes": 20}
    assert ("id", str(workout_id)) in logs_table.last_filters
    assert [log.workout_date for log in logs] == [date(2024, 5, 15), date(2024, 5, 10)]
    assert logs[1].calories_burned == 0.0


def _profile_row(user_id: str, **overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": user_id,
        "name": "Dana",
        "age": 34,
        "gender": "female",
        "height_cm": 165,
        "weight_kg": 70,
        "target_weight_kg": 62,
        "workouts_per_week": 4,
        "current_level": "beginner",
        "preferred_intensity": "medium",
    }
    row.update(overrides)
    return row


def test_supabase_profile_repository_writes() -> None:
    client = FakeSupabaseClient()
    profiles_table = client.table("profiles")
    user_id = str(uuid4())
    profiles_table.queue("insert", [_profile_row(user_id)])
    profiles_table.queue(
        "select", [_profile_row(user_id), _profile_row(str(uuid4()), name="Noa")]
    )

    repository = SupabaseProfileRepository(client)
    created = repository.create_profile({"name": "Dana", "weight_kg": 70.0})
    listed = repository.list_profiles()
    repository.update_profile(created.id, {"weight_kg": 68.0})

    assert created.id == UUID(user_id)
    assert [profile.name for profile in listed] == ["Dana", "Noa"]
    assert profiles_table.last_payload == {"weight_kg": 68.0}
    assert ("id", user_id) in profiles_table.last_filters


def test_supabase_profile_repository_create_failure() -> None:
    repository = SupabaseProfileRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError):
        repository.create_profile({"name": "Dana"})


def test_supabase_workout_repository_delete() -> None:
    client = FakeSupabaseClient()
    logs_table = client.table("workout_logs")
    workout_id = uuid4()

    SupabaseWorkoutRepository(client).delete_workout_log(workout_id)

    assert logs_table.last_filters == [("id", str(workout_id))]


def test_supabase_weight_repository_add_and_list() -> None:
    client = FakeSupabaseClient()
    weights_table = client.table("weight_tracking")
    user_id = str(uuid4())
    row = {
        "id": str(uuid4()),
        "user_id": user_id,
        "weight_kg": "71.5",
        "measurement_date": "2024-05-15",
        "notes": None,
    }
    weights_table.queue("insert", [row])
    weights_table.queue("select", [row])

    repository = SupabaseWeightRepository(client)
    created = repository.add_weight_entry(
        UUID(user_id), 71.5, date(2024, 5, 15), notes="Weight update"
    )
    listed = repository.list_weight_entries(UUID(user_id))

    assert weights_table.last_payload == {
        "user_id": user_id,
        "weight_kg": 71.5,
        "measurement_date": "2024-05-15",
        "notes": "Weight update",
    }
    assert created.weight_kg == 71.5
    assert created.notes == ""
    assert listed == [created]
    assert ("user_id", user_id) in weights_table.last_filters


def test_supabase_weight_repository_add_failure() -> None:
    repository = SupabaseWeightRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError):
        repository.add_weight_entry(uuid4(), 70.0, date(2024, 5, 15), notes="")
