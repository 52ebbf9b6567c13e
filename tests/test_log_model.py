"""Tests for the log model."""

import asyncio
import json
from datetime import date, timedelta

from diet_tracker.domain.catalog import EXERCISE_CATALOG, FOOD_CATALOG
from diet_tracker.domain.logs import (
    DEFAULT_GOAL,
    Goal,
    MealType,
    WorkoutCategory,
)
from diet_tracker.services import metrics
from diet_tracker.services.clock import fixed_today
from diet_tracker.services.log_model import IdGenerator, LogModel
from diet_tracker.services.storage import InMemoryKeyValueStore, StorageService
from tests.conftest import (
    TODAY,
    FailingKeyValueStore,
    RecordingKeyValueStore,
    SteppedClock,
)

JAN_1 = date(2024, 1, 1)


def test_add_and_delete_meals_updates_intake(log_model: LogModel) -> None:
    rice = FOOD_CATALOG[0]
    first = log_model.add_meal(TODAY, MealType.BREAKFAST, rice)
    second = log_model.add_custom_meal(TODAY, "dinner", "Pasta", 450)
    log_model.add_custom_meal(JAN_1, "lunch", "Soup", 120)
    assert first is not None
    assert second is not None

    assert metrics.daily_intake(log_model.snapshot(), TODAY) == rice.calories + 450

    assert log_model.delete_meal(first.id) is True
    assert log_model.delete_meal(first.id) is False
    assert metrics.daily_intake(log_model.snapshot(), TODAY) == 450


def test_add_meal_copies_catalog_macros(log_model: LogModel) -> None:
    chicken = FOOD_CATALOG[2]

    entry = log_model.add_meal(None, "lunch", chicken)

    assert entry is not None
    assert entry.date == TODAY
    assert entry.meal_type is MealType.LUNCH
    assert entry.protein_g == chicken.protein_g


def test_add_custom_meal_rejects_invalid_input(log_model: LogModel) -> None:
    assert log_model.add_custom_meal(TODAY, "lunch", "", 300) is None
    assert log_model.add_custom_meal(TODAY, "lunch", "   ", 300) is None
    assert log_model.add_custom_meal(TODAY, "lunch", "Toast", "abc") is None
    assert log_model.add_custom_meal(TODAY, "lunch", "Toast", 0) is None
    assert log_model.add_custom_meal(TODAY, "lunch", "Toast", -50) is None
    assert log_model.add_custom_meal(TODAY, "brunch", "Toast", 200) is None
    assert log_model.meals == ()


def test_add_custom_meal_defaults_missing_macros(log_model: LogModel) -> None:
    entry = log_model.add_custom_meal(
        TODAY, "snack", " Cookie ", "120", carbs_g="18", protein_g="", fat_g=None
    )

    assert entry is not None
    assert entry.name == "Cookie"
    assert entry.calories == 120
    assert entry.carbs_g == 18
    assert entry.protein_g == 0
    assert entry.fat_g == 0


def test_ids_unique_within_one_clock_tick(storage: StorageService) -> None:
    model = LogModel(
        storage=storage,
        today=fixed_today(TODAY),
        ids=IdGenerator(clock_ms=SteppedClock()),
    )

    ids = [model.add_custom_meal(TODAY, "snack", "Nut", 10).id for _ in range(50)]
    ids.append(model.add_workout(TODAY, EXERCISE_CATALOG[0]).id)

    assert len(set(ids)) == len(ids)
    assert ids == sorted(ids)


def test_workouts_default_to_cardio(log_model: LogModel) -> None:
    entry = log_model.add_custom_workout(TODAY, "Stairs", 180, category="dancing")

    assert entry is not None
    assert entry.category is WorkoutCategory.CARDIO


def test_custom_workout_appends_duration(log_model: LogModel) -> None:
    entry = log_model.add_custom_workout(
        TODAY, "Rowing", "220", category="strength", duration_minutes="25"
    )

    assert entry is not None
    assert entry.name == "Rowing 25 min"
    assert entry.category is WorkoutCategory.STRENGTH
    assert log_model.add_custom_workout(TODAY, "", 220) is None


def test_delete_workout(log_model: LogModel) -> None:
    entry = log_model.add_workout(TODAY, EXERCISE_CATALOG[1])

    assert log_model.delete_workout(entry.id) is True
    assert log_model.workouts == ()
    assert log_model.delete_workout(entry.id) is False


def test_record_weight_upserts_by_date(log_model: LogModel) -> None:
    log_model.record_weight(TODAY, 74.0)
    log_model.record_weight(JAN_1, 75.0, "start")
    log_model.record_weight(TODAY, "73.4", "after holidays")

    weights = log_model.weights
    assert [entry.date for entry in weights] == [JAN_1, TODAY]
    assert weights[-1].weight == 73.4
    assert weights[-1].note == "after holidays"


def test_record_weight_keeps_dates_sorted(log_model: LogModel) -> None:
    for offset in (5, 1, 3, 0, 4):
        log_model.record_weight(JAN_1 + timedelta(days=offset), 70 + offset)

    dates = [entry.date for entry in log_model.weights]
    assert dates == sorted(dates)
    assert len(dates) == 5


def test_record_weight_rejects_invalid_weight(log_model: LogModel) -> None:
    assert log_model.record_weight(TODAY, "") is None
    assert log_model.record_weight(TODAY, "heavy") is None
    assert log_model.record_weight(TODAY, None) is None
    assert log_model.record_weight(TODAY, 0) is None
    assert log_model.weights == ()


def test_delete_weight(log_model: LogModel) -> None:
    log_model.record_weight(TODAY, 74.0)

    assert log_model.delete_weight(TODAY) is True
    assert log_model.delete_weight(TODAY) is False
    assert log_model.weights == ()


def test_water_steps(log_model: LogModel) -> None:
    for _ in range(3):
        log_model.adjust_water(TODAY, 250)
    assert log_model.water[TODAY] == 750

    assert log_model.adjust_water(TODAY, -250) == 500
    assert log_model.remove_water(TODAY) == 250
    assert log_model.add_water(TODAY) == 500


def test_water_decrement_below_zero_is_refused(log_model: LogModel) -> None:
    assert log_model.adjust_water(TODAY, -250) == 0
    assert TODAY not in log_model.water

    log_model.add_water(TODAY)
    assert log_model.adjust_water(TODAY, -500) == 250


def test_water_rejects_partial_steps(log_model: LogModel) -> None:
    assert log_model.adjust_water(TODAY, 100) == 0
    assert log_model.adjust_water(TODAY, 0) == 0
    assert log_model.adjust_water(TODAY, 500) == 500


def test_set_goal_replaces_and_validates(log_model: LogModel) -> None:
    goal = Goal(start_weight=90, target_weight=80, daily_calorie_target=2200)

    assert log_model.set_goal(goal) == goal
    invalid = Goal(start_weight=90, target_weight=0, daily_calorie_target=2200)
    assert log_model.set_goal(invalid) == goal
    assert log_model.goal == goal


def test_mutations_persist_in_background(store: RecordingKeyValueStore) -> None:
    async def scenario() -> None:
        model = LogModel(storage=StorageService(store), today=fixed_today(TODAY))
        model.add_custom_meal(TODAY, "lunch", "Bibimbap", 550)
        model.add_custom_meal(TODAY, "dinner", "Salad", 150)
        model.record_weight(TODAY, 72.5)
        model.add_water(TODAY)
        model.set_goal(
            Goal(start_weight=80, target_weight=70, daily_calorie_target=1900)
        )
        await model.flush()

    asyncio.run(scenario())

    meals = json.loads(store.values["diet_meal_logs"])
    assert [meal["name"] for meal in meals] == ["Bibimbap", "Salad"]
    assert meals[0]["date"] == "2024-01-10"
    assert meals[0]["meal_type"] == "lunch"
    assert json.loads(store.values["diet_water"]) == {"2024-01-10": 250}
    assert json.loads(store.values["diet_weight_logs"])[0]["weight"] == 72.5
    assert json.loads(store.values["diet_goal"])["daily_calorie_target"] == 1900
    assert "diet_workout_logs" not in store.values


def test_last_write_wins_for_a_key(store: RecordingKeyValueStore) -> None:
    async def scenario() -> None:
        model = LogModel(storage=StorageService(store), today=fixed_today(TODAY))
        for _ in range(5):
            model.add_water(TODAY)
        await model.flush()

    asyncio.run(scenario())

    assert json.loads(store.values["diet_water"]) == {"2024-01-10": 1250}
    water_writes = [value for key, value in store.writes if key == "diet_water"]
    assert 1 <= len(water_writes) <= 5


def test_mutations_without_event_loop_are_written_on_flush(
    log_model: LogModel, store: RecordingKeyValueStore
) -> None:
    log_model.add_custom_workout(TODAY, "Hike", 400)
    assert store.writes == []

    asyncio.run(log_model.flush())

    workouts = json.loads(store.values["diet_workout_logs"])
    assert workouts[0]["name"] == "Hike"
    assert workouts[0]["category"] == "cardio"


def test_load_restores_saved_state(store: RecordingKeyValueStore) -> None:
    async def scenario() -> LogModel:
        writer = LogModel(storage=StorageService(store), today=fixed_today(TODAY))
        writer.add_custom_meal(TODAY, "lunch", "Bibimbap", 550)
        writer.add_workout(TODAY, EXERCISE_CATALOG[2])
        writer.record_weight(JAN_1, 75)
        writer.record_weight(TODAY, 73)
        writer.add_water(TODAY)
        await writer.flush()

        reader = LogModel(storage=StorageService(store), today=fixed_today(TODAY))
        await reader.load()
        assert reader.meals == writer.meals
        assert reader.workouts == writer.workouts
        assert reader.weights == writer.weights
        assert dict(reader.water) == dict(writer.water)
        assert reader.goal == DEFAULT_GOAL
        return reader

    reader = asyncio.run(scenario())

    newest = max(entry.id for entry in (*reader.meals, *reader.workouts))
    assert reader.add_custom_meal(TODAY, "snack", "Plum", 30).id > newest


def test_load_falls_back_on_corrupt_values() -> None:
    store = InMemoryKeyValueStore(
        {
            "diet_meal_logs": "[{broken",
            "diet_goal": '{"start_weight": "heavy"}',
            "diet_water": '{"not-a-date": 250}',
            "diet_weight_logs": (
                '[{"date": "2024-01-10", "weight": 73},'
                ' {"date": "2024-01-01", "weight": 75}]'
            ),
        }
    )
    model = LogModel(storage=StorageService(store), today=fixed_today(TODAY))

    asyncio.run(model.load())

    assert model.meals == ()
    assert model.goal == DEFAULT_GOAL
    assert dict(model.water) == {}
    assert [entry.date for entry in model.weights] == [JAN_1, TODAY]


def test_load_falls_back_on_non_positive_goal() -> None:
    store = InMemoryKeyValueStore(
        {
            "diet_goal": (
                '{"start_weight": -1, "target_weight": 0,'
                ' "daily_calorie_target": -5}'
            ),
        }
    )
    model = LogModel(storage=StorageService(store), today=fixed_today(TODAY))

    asyncio.run(model.load())

    assert model.goal == DEFAULT_GOAL


def test_load_falls_back_on_out_of_range_values() -> None:
    store = InMemoryKeyValueStore(
        {
            "diet_meal_logs": (
                '[{"id": 1, "date": "2024-01-10", "meal_type": "lunch",'
                ' "name": "Soup", "calories": -120}]'
            ),
            "diet_workout_logs": (
                '[{"id": 2, "date": "2024-01-10", "name": "Run",'
                ' "calories": 300, "category": "cardio"},'
                ' {"id": 3, "date": "2024-01-10", "name": "Walk",'
                ' "calories": -10, "category": "cardio"}]'
            ),
            "diet_weight_logs": '[{"date": "2024-01-10", "weight": 0}]',
            "diet_water": '{"2024-01-10": 100}',
        }
    )
    model = LogModel(storage=StorageService(store), today=fixed_today(TODAY))

    asyncio.run(model.load())

    assert model.meals == ()
    assert model.workouts == ()
    assert model.weights == ()
    assert dict(model.water) == {}
    assert model.add_water(TODAY) == 250


def test_custom_calories_round_to_nearest(log_model: LogModel) -> None:
    entry = log_model.add_custom_meal(TODAY, "snack", "Cracker", "12.7")

    assert entry is not None
    assert entry.calories == 13


def test_failing_store_keeps_memory_state() -> None:
    async def scenario() -> LogModel:
        model = LogModel(
            storage=StorageService(FailingKeyValueStore()),
            today=fixed_today(TODAY),
        )
        await model.load()
        model.add_custom_meal(TODAY, "lunch", "Noodles", 480)
        model.add_water(TODAY)
        await model.flush()
        return model

    model = asyncio.run(scenario())

    assert model.goal == DEFAULT_GOAL
    assert metrics.daily_intake(model.snapshot(), TODAY) == 480
    assert model.water[TODAY] == 250
