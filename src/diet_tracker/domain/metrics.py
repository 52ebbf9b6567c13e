"""Result records for derived metrics."""

from dataclasses import dataclass
from datetime import date

from diet_tracker.domain.logs import WorkoutCategory


@dataclass(frozen=True)
class MacroTotals:
    """Macronutrient grams for a day."""

    carbs_g: float
    protein_g: float
    fat_g: float


@dataclass(frozen=True)
class DayCalories:
    """Calories in and out for one day of a series."""

    date: date
    intake: int
    burn: int


@dataclass(frozen=True)
class CategoryShare:
    """Workout count for a category and its share of all workouts."""

    category: WorkoutCategory
    count: int
    percent: float


@dataclass(frozen=True)
class DailySummary:
    """Dashboard figures for a single day."""

    date: date
    intake: int
    burn: int
    net: int
    remaining: int
    calorie_target: int
    calorie_progress: float
    macros: MacroTotals
    water_ml: int
    water_target_ml: int
    water_progress: float
    latest_weight: float | None
    bmi: float | None


@dataclass(frozen=True)
class WeightProgress:
    """Weight change since the first entry and gap to the target."""

    first_weight: float | None
    latest_weight: float | None
    delta: float | None
    target_weight: float
    distance_to_goal: float | None


@dataclass(frozen=True)
class StatsSummary:
    """Figures for the statistics view."""

    reference_date: date
    weekly: list[DayCalories]
    average_daily_intake: float
    streak: int
    total_workouts: int
    categories: list[CategoryShare]
    weight: WeightProgress
