"""Derived daily and weekly figures computed from a log snapshot."""

from collections import Counter
from datetime import date, timedelta

from diet_tracker.domain.logs import (
    DEFAULT_HEIGHT_M,
    WATER_TARGET_ML,
    LogSnapshot,
    MealEntry,
    MealType,
    WeightEntry,
    WorkoutCategory,
    WorkoutEntry,
)
from diet_tracker.domain.metrics import (
    CategoryShare,
    DailySummary,
    DayCalories,
    MacroTotals,
    StatsSummary,
    WeightProgress,
)

WEEK_DAYS = 7
RECENT_WEIGHTS = 14


def meals_on(snapshot: LogSnapshot, day: date) -> list[MealEntry]:
    """Return the meals logged for a day in insertion order."""
    return [entry for entry in snapshot.meals if entry.date == day]


def meals_by_type(
    snapshot: LogSnapshot, day: date
) -> dict[MealType, list[MealEntry]]:
    """Group a day's meals by meal slot, omitting empty slots."""
    day_meals = meals_on(snapshot, day)
    groups: dict[MealType, list[MealEntry]] = {}
    for meal_type in MealType:
        entries = [entry for entry in day_meals if entry.meal_type == meal_type]
        if entries:
            groups[meal_type] = entries
    return groups


def workouts_on(snapshot: LogSnapshot, day: date) -> list[WorkoutEntry]:
    """Return the workouts logged for a day in insertion order."""
    return [entry for entry in snapshot.workouts if entry.date == day]


def daily_intake(snapshot: LogSnapshot, day: date) -> int:
    return sum(entry.calories for entry in meals_on(snapshot, day))


def daily_burn(snapshot: LogSnapshot, day: date) -> int:
    return sum(entry.calories for entry in workouts_on(snapshot, day))


def net_calories(snapshot: LogSnapshot, day: date) -> int:
    return daily_intake(snapshot, day) - daily_burn(snapshot, day)


def remaining_calories(snapshot: LogSnapshot, day: date) -> int:
    """Calories left in the daily budget after exercise, never negative."""
    return max(snapshot.goal.daily_calorie_target - net_calories(snapshot, day), 0)


def calorie_progress(snapshot: LogSnapshot, day: date) -> float:
    """Share of the daily target eaten so far, capped at 1."""
    target = snapshot.goal.daily_calorie_target
    if target <= 0:
        return 0.0
    return min(daily_intake(snapshot, day) / target, 1.0)


def macro_totals(snapshot: LogSnapshot, day: date) -> MacroTotals:
    entries = meals_on(snapshot, day)
    return MacroTotals(
        carbs_g=sum(entry.carbs_g for entry in entries),
        protein_g=sum(entry.protein_g for entry in entries),
        fat_g=sum(entry.fat_g for entry in entries),
    )


def water_ml(snapshot: LogSnapshot, day: date) -> int:
    return snapshot.water.get(day, 0)


def water_progress(snapshot: LogSnapshot, day: date) -> float:
    return min(water_ml(snapshot, day) / WATER_TARGET_ML, 1.0)


def latest_weight(snapshot: LogSnapshot) -> float | None:
    return snapshot.weights[-1].weight if snapshot.weights else None


def first_weight(snapshot: LogSnapshot) -> float | None:
    return snapshot.weights[0].weight if snapshot.weights else None


def body_mass_index(snapshot: LogSnapshot) -> float | None:
    """BMI from the latest weight and the goal height (1.70 m when unset)."""
    weight = latest_weight(snapshot)
    if weight is None:
        return None
    height = snapshot.goal.height_m or DEFAULT_HEIGHT_M
    return weight / (height * height)


def weekly_series(snapshot: LogSnapshot, reference: date) -> list[DayCalories]:
    """Intake and burn for the seven days ending at reference, oldest first."""
    series = []
    for offset in range(WEEK_DAYS - 1, -1, -1):
        day = reference - timedelta(days=offset)
        series.append(
            DayCalories(
                date=day,
                intake=daily_intake(snapshot, day),
                burn=daily_burn(snapshot, day),
            )
        )
    return series


def average_daily_intake(snapshot: LogSnapshot) -> float:
    """Total calories eaten divided by the number of days with any meal.

    Returned unrounded; callers pick the display precision.
    """
    days = {entry.date for entry in snapshot.meals}
    if not days:
        return 0.0
    return sum(entry.calories for entry in snapshot.meals) / len(days)


def logging_streak(snapshot: LogSnapshot, reference: date) -> int:
    """Count consecutive days ending at reference with a meal, workout or weight."""
    active = {
        *(entry.date for entry in snapshot.meals),
        *(entry.date for entry in snapshot.workouts),
        *(entry.date for entry in snapshot.weights),
    }
    streak = 0
    day = reference
    while day in active:
        streak += 1
        day -= timedelta(days=1)
    return streak


def total_workouts(snapshot: LogSnapshot) -> int:
    return len(snapshot.workouts)


def workout_category_distribution(snapshot: LogSnapshot) -> list[CategoryShare]:
    """Workout counts per category with their percentage of all workouts."""
    total = total_workouts(snapshot)
    if total == 0:
        return []
    counts = Counter(entry.category for entry in snapshot.workouts)
    return [
        CategoryShare(
            category=category,
            count=counts[category],
            percent=counts[category] / total * 100,
        )
        for category in WorkoutCategory
        if counts[category]
    ]


def weight_delta(snapshot: LogSnapshot) -> float | None:
    """Latest minus first weight; negative means weight lost."""
    latest = latest_weight(snapshot)
    first = first_weight(snapshot)
    if latest is None or first is None:
        return None
    return latest - first


def distance_to_goal(snapshot: LogSnapshot) -> float | None:
    latest = latest_weight(snapshot)
    if latest is None:
        return None
    return abs(latest - snapshot.goal.target_weight)


def recent_weights(
    snapshot: LogSnapshot, limit: int = RECENT_WEIGHTS
) -> list[WeightEntry]:
    """Most recent weight entries for the trend chart, oldest first."""
    if limit <= 0:
        return []
    return list(snapshot.weights[-limit:])


def weight_progress(snapshot: LogSnapshot) -> WeightProgress:
    return WeightProgress(
        first_weight=first_weight(snapshot),
        latest_weight=latest_weight(snapshot),
        delta=weight_delta(snapshot),
        target_weight=snapshot.goal.target_weight,
        distance_to_goal=distance_to_goal(snapshot),
    )


def daily_summary(snapshot: LogSnapshot, day: date | None = None) -> DailySummary:
    """Dashboard figures for a day, defaulting to the snapshot's today."""
    resolved = day or snapshot.today
    intake = daily_intake(snapshot, resolved)
    burn = daily_burn(snapshot, resolved)
    return DailySummary(
        date=resolved,
        intake=intake,
        burn=burn,
        net=intake - burn,
        remaining=remaining_calories(snapshot, resolved),
        calorie_target=snapshot.goal.daily_calorie_target,
        calorie_progress=calorie_progress(snapshot, resolved),
        macros=macro_totals(snapshot, resolved),
        water_ml=water_ml(snapshot, resolved),
        water_target_ml=WATER_TARGET_ML,
        water_progress=water_progress(snapshot, resolved),
        latest_weight=latest_weight(snapshot),
        bmi=body_mass_index(snapshot),
    )


def stats_summary(snapshot: LogSnapshot, reference: date | None = None) -> StatsSummary:
    """Statistics view figures, defaulting to the snapshot's today."""
    resolved = reference or snapshot.today
    return StatsSummary(
        reference_date=resolved,
        weekly=weekly_series(snapshot, resolved),
        average_daily_intake=average_daily_intake(snapshot),
        streak=logging_streak(snapshot, resolved),
        total_workouts=total_workouts(snapshot),
        categories=workout_category_distribution(snapshot),
        weight=weight_progress(snapshot),
    )
