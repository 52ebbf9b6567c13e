"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from diet_tracker.config import Settings
from diet_tracker.containers import AppContainer
from diet_tracker.domain.logs import (
    DEFAULT_GOAL,
    Goal,
    LogSnapshot,
    MealEntry,
    WeightEntry,
    WorkoutEntry,
)
from diet_tracker.services.catalog import CatalogService
from diet_tracker.services.clock import fixed_today
from diet_tracker.services.log_model import IdGenerator, LogModel
from diet_tracker.services.storage import (
    InMemoryKeyValueStore,
    KeyValueStore,
    StorageService,
)

TODAY = date(2024, 1, 10)


@dataclass
class RecordingKeyValueStore(KeyValueStore):
    """In-memory store that keeps every write in order."""

    values: dict[str, str] = field(default_factory=dict)
    writes: list[tuple[str, str]] = field(default_factory=list)

    async def get(self, key: str) -> str | None:
        return self.values.get(key)

    async def set(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        self.values[key] = value


@dataclass
class FailingKeyValueStore(KeyValueStore):
    """Store whose every call raises."""

    calls: int = 0

    async def get(self, key: str) -> str | None:
        self.calls += 1
        raise ConnectionError("store unavailable")

    async def set(self, key: str, value: str) -> None:
        self.calls += 1
        raise ConnectionError("store unavailable")


@dataclass
class SteppedClock:
    """Millisecond clock that only moves when told to."""

    now_ms: int = 1_700_000_000_000

    def __call__(self) -> int:
        return self.now_ms


def make_snapshot(  # noqa: PLR0913
    meals: list[MealEntry] | None = None,
    workouts: list[WorkoutEntry] | None = None,
    weights: list[WeightEntry] | None = None,
    water: dict[date, int] | None = None,
    goal: Goal = DEFAULT_GOAL,
    today: date = TODAY,
) -> LogSnapshot:
    return LogSnapshot(
        meals=tuple(meals or ()),
        workouts=tuple(workouts or ()),
        weights=tuple(weights or ()),
        water=dict(water or {}),
        goal=goal,
        today=today,
    )


@pytest.fixture
def store() -> RecordingKeyValueStore:
    return RecordingKeyValueStore()


@pytest.fixture
def storage(store: RecordingKeyValueStore) -> StorageService:
    return StorageService(store)


@pytest.fixture
def log_model(storage: StorageService) -> LogModel:
    return LogModel(
        storage=storage,
        today=fixed_today(TODAY),
        ids=IdGenerator(clock_ms=SteppedClock()),
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(storage_backend="memory", data_dir=tmp_path, log_level="DEBUG")


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    today = fixed_today(TODAY)
    storage = StorageService(InMemoryKeyValueStore())
    log_model = LogModel(storage=storage, today=today)

    async def close_resources() -> None:
        await log_model.flush()

    return AppContainer(
        settings=settings,
        today=today,
        storage=storage,
        log_model=log_model,
        catalog_service=CatalogService(),
        close_resources=close_resources,
    )
