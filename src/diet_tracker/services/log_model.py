"""In-memory log state with best-effort background persistence."""

import asyncio
import logging
import math
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Annotated, TypeVar

from pydantic import Field, TypeAdapter

from diet_tracker.domain.catalog import ExerciseItem, FoodItem
from diet_tracker.domain.logs import (
    DEFAULT_GOAL,
    WATER_STEP_ML,
    Goal,
    LogSnapshot,
    MealEntry,
    MealType,
    WeightEntry,
    WorkoutCategory,
    WorkoutEntry,
)
from diet_tracker.services.clock import Today
from diet_tracker.services.storage import StorageKey, StorageService

_logger = logging.getLogger(__name__)

E = TypeVar("E", MealType, WorkoutCategory)

_WEIGHTS = TypeAdapter(tuple[WeightEntry, ...])
_MEALS = TypeAdapter(tuple[MealEntry, ...])
_WORKOUTS = TypeAdapter(tuple[WorkoutEntry, ...])
_GOAL = TypeAdapter(Goal)
_WATER = TypeAdapter(
    dict[date, Annotated[int, Field(ge=0, multiple_of=WATER_STEP_ML)]]
)


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass
class IdGenerator:
    """Strictly increasing integer ids derived from the wall clock."""

    clock_ms: Callable[[], int] = _wall_clock_ms
    last: int = 0

    def seed(self, existing: Iterable[int]) -> None:
        """Make future ids larger than every id already in use."""
        self.last = max([self.last, *existing])

    def next_id(self) -> int:
        """Return a new id, bumping past the previous one within a clock tick."""
        self.last = max(self.clock_ms(), self.last + 1)
        return self.last


@dataclass
class LogModel:
    """Owns the meal, workout, weight and water logs and the goal.

    Mutations update memory synchronously and then schedule a write of the
    whole affected collection. Writes for one key run in order and always
    carry the newest value. Invalid input leaves state untouched.
    """

    storage: StorageService
    today: Today = date.today
    ids: IdGenerator = field(default_factory=IdGenerator)
    _meals: tuple[MealEntry, ...] = field(default=(), init=False, repr=False)
    _workouts: tuple[WorkoutEntry, ...] = field(default=(), init=False, repr=False)
    _weights: tuple[WeightEntry, ...] = field(default=(), init=False, repr=False)
    _water: dict[date, int] = field(default_factory=dict, init=False, repr=False)
    _goal: Goal = field(default=DEFAULT_GOAL, init=False, repr=False)
    _unsaved: dict[StorageKey, tuple[TypeAdapter, object]] = field(
        default_factory=dict, init=False, repr=False
    )
    _locks: dict[StorageKey, asyncio.Lock] = field(
        default_factory=dict, init=False, repr=False
    )
    _tasks: set[asyncio.Task[None]] = field(
        default_factory=set, init=False, repr=False
    )

    @property
    def meals(self) -> tuple[MealEntry, ...]:
        return self._meals

    @property
    def workouts(self) -> tuple[WorkoutEntry, ...]:
        return self._workouts

    @property
    def weights(self) -> tuple[WeightEntry, ...]:
        return self._weights

    @property
    def water(self) -> MappingProxyType[date, int]:
        return MappingProxyType(self._water)

    @property
    def goal(self) -> Goal:
        return self._goal

    async def load(self) -> None:
        """Load every collection, substituting defaults for unreadable values."""
        weights, meals, workouts, goal, water = await asyncio.gather(
            self.storage.load(StorageKey.WEIGHTS, _WEIGHTS, ()),
            self.storage.load(StorageKey.MEALS, _MEALS, ()),
            self.storage.load(StorageKey.WORKOUTS, _WORKOUTS, ()),
            self.storage.load(StorageKey.GOAL, _GOAL, DEFAULT_GOAL),
            self.storage.load(StorageKey.WATER, _WATER, {}),
        )
        self._weights = _sorted_unique_weights(weights)
        self._meals = meals
        self._workouts = workouts
        self._goal = goal
        self._water = dict(water)
        self.ids.seed(entry.id for entry in (*meals, *workouts))
        _logger.info(
            "Loaded logs: meals=%s workouts=%s weights=%s water_days=%s",
            len(self._meals),
            len(self._workouts),
            len(self._weights),
            len(self._water),
        )

    def snapshot(self) -> LogSnapshot:
        """Return an immutable view of the current state."""
        return LogSnapshot(
            meals=self._meals,
            workouts=self._workouts,
            weights=self._weights,
            water=MappingProxyType(self._water),
            goal=self._goal,
            today=self.today(),
        )

    def add_meal(
        self, day: date | None, meal_type: MealType | str, food: FoodItem
    ) -> MealEntry | None:
        """Log a catalog food."""
        resolved_type = _parse_enum(MealType, meal_type)
        if resolved_type is None:
            _logger.debug("Rejected meal: meal_type=%r", meal_type)
            return None
        entry = MealEntry(
            id=self.ids.next_id(),
            date=day or self.today(),
            meal_type=resolved_type,
            name=food.name,
            calories=food.calories,
            carbs_g=food.carbs_g,
            protein_g=food.protein_g,
            fat_g=food.fat_g,
        )
        self._set_meals((*self._meals, entry))
        return entry

    def add_custom_meal(  # noqa: PLR0913
        self,
        day: date | None,
        meal_type: MealType | str,
        name: str | None,
        calories: object,
        carbs_g: object = None,
        protein_g: object = None,
        fat_g: object = None,
    ) -> MealEntry | None:
        """Log a manually entered food; requires a name and positive calories."""
        label = (name or "").strip()
        kcal = _to_calories(calories)
        if not label or kcal is None:
            _logger.debug("Rejected custom meal: name=%r calories=%r", name, calories)
            return None
        food = FoodItem(
            name=label,
            calories=kcal,
            carbs_g=_to_grams(carbs_g),
            protein_g=_to_grams(protein_g),
            fat_g=_to_grams(fat_g),
        )
        return self.add_meal(day, meal_type, food)

    def delete_meal(self, entry_id: int) -> bool:
        """Remove a meal entry by id."""
        remaining = tuple(entry for entry in self._meals if entry.id != entry_id)
        if len(remaining) == len(self._meals):
            return False
        self._set_meals(remaining)
        return True

    def add_workout(self, day: date | None, exercise: ExerciseItem) -> WorkoutEntry:
        """Log a catalog exercise."""
        entry = WorkoutEntry(
            id=self.ids.next_id(),
            date=day or self.today(),
            name=exercise.name,
            calories=exercise.calories,
            category=exercise.category,
        )
        self._set_workouts((*self._workouts, entry))
        return entry

    def add_custom_workout(  # noqa: PLR0913
        self,
        day: date | None,
        name: str | None,
        calories: object,
        category: WorkoutCategory | str | None = None,
        duration_minutes: object = None,
    ) -> WorkoutEntry | None:
        """Log a manually entered workout; requires a name and positive calories."""
        label = (name or "").strip()
        kcal = _to_calories(calories)
        if not label or kcal is None:
            _logger.debug(
                "Rejected custom workout: name=%r calories=%r", name, calories
            )
            return None
        minutes = _to_number(duration_minutes)
        if minutes is not None and minutes > 0:
            label = f"{label} {minutes:g} min"
        resolved = _parse_enum(WorkoutCategory, category) or WorkoutCategory.CARDIO
        return self.add_workout(day, ExerciseItem(label, kcal, resolved))

    def delete_workout(self, entry_id: int) -> bool:
        """Remove a workout entry by id."""
        remaining = tuple(entry for entry in self._workouts if entry.id != entry_id)
        if len(remaining) == len(self._workouts):
            return False
        self._set_workouts(remaining)
        return True

    def record_weight(
        self, day: date | None, weight: object, note: str | None = None
    ) -> WeightEntry | None:
        """Insert or replace the weight for a date, keeping dates ascending."""
        kilograms = _to_number(weight)
        if kilograms is None or kilograms <= 0:
            _logger.debug("Rejected weight: weight=%r", weight)
            return None
        entry = WeightEntry(date=day or self.today(), weight=kilograms, note=note or "")
        if any(existing.date == entry.date for existing in self._weights):
            updated = tuple(
                entry if existing.date == entry.date else existing
                for existing in self._weights
            )
        else:
            updated = tuple(
                sorted((*self._weights, entry), key=lambda item: item.date)
            )
        self._set_weights(updated)
        return entry

    def delete_weight(self, day: date) -> bool:
        """Remove the weight entry for a date."""
        remaining = tuple(entry for entry in self._weights if entry.date != day)
        if len(remaining) == len(self._weights):
            return False
        self._set_weights(remaining)
        return True

    def adjust_water(self, day: date | None, delta_ml: int) -> int:
        """Add whole steps of water; a change that would go below zero is refused."""
        resolved_day = day or self.today()
        current = self._water.get(resolved_day, 0)
        if delta_ml == 0 or delta_ml % WATER_STEP_ML != 0:
            _logger.debug("Rejected water change: delta_ml=%r", delta_ml)
            return current
        updated = current + delta_ml
        if updated < 0:
            return current
        self._water = {**self._water, resolved_day: updated}
        self._persist(StorageKey.WATER, _WATER, self._water)
        return updated

    def add_water(self, day: date | None = None) -> int:
        return self.adjust_water(day, WATER_STEP_ML)

    def remove_water(self, day: date | None = None) -> int:
        return self.adjust_water(day, -WATER_STEP_ML)

    def set_goal(self, goal: Goal) -> Goal:
        """Replace the goal; non-positive values leave the current goal in place."""
        values = [goal.start_weight, goal.target_weight, goal.daily_calorie_target]
        if goal.height_m is not None:
            values.append(goal.height_m)
        if any(value <= 0 for value in values):
            _logger.debug("Rejected goal: %s", goal)
            return self._goal
        self._goal = goal
        self._persist(StorageKey.GOAL, _GOAL, goal)
        return goal

    async def flush(self) -> None:
        """Wait for scheduled writes and write anything still pending."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks))
        for key in list(self._unsaved):
            await self._write(key)

    def _set_meals(self, meals: tuple[MealEntry, ...]) -> None:
        self._meals = meals
        self._persist(StorageKey.MEALS, _MEALS, meals)

    def _set_workouts(self, workouts: tuple[WorkoutEntry, ...]) -> None:
        self._workouts = workouts
        self._persist(StorageKey.WORKOUTS, _WORKOUTS, workouts)

    def _set_weights(self, weights: tuple[WeightEntry, ...]) -> None:
        self._weights = weights
        self._persist(StorageKey.WEIGHTS, _WEIGHTS, weights)

    def _persist(self, key: StorageKey, adapter: TypeAdapter, value: object) -> None:
        self._unsaved[key] = (adapter, value)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Written on the next flush().
            return
        task = loop.create_task(self._write(key))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _write(self, key: StorageKey) -> None:
        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            pending = self._unsaved.pop(key, None)
            if pending is None:
                return
            adapter, value = pending
            await self.storage.save(key, adapter, value)


def _sorted_unique_weights(
    weights: Iterable[WeightEntry],
) -> tuple[WeightEntry, ...]:
    by_date = {entry.date: entry for entry in weights}
    return tuple(by_date[day] for day in sorted(by_date))


def _parse_enum(enum_type: type[E], value: object) -> E | None:
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        try:
            return enum_type(value.strip().lower())
        except ValueError:
            return None
    return None


def _to_number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _to_calories(value: object) -> int | None:
    """Round to the nearest kcal (12.7 becomes 13, not 12); None unless positive."""
    number = _to_number(value)
    if number is None:
        return None
    kcal = round(number)
    return kcal if kcal > 0 else None


def _to_grams(value: object) -> float:
    number = _to_number(value)
    if number is None or number < 0:
        return 0.0
    return number
