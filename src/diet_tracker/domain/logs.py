"""Domain models for the personal log.

Field constraints are enforced when stored JSON is decoded; values that
break them make the whole record fall back to its default.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from pydantic import NonNegativeFloat, NonNegativeInt, PositiveFloat, PositiveInt

WATER_STEP_ML = 250
WATER_TARGET_ML = 2000
DEFAULT_HEIGHT_M = 1.70


class MealType(StrEnum):
    """Meal slot a food entry belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class WorkoutCategory(StrEnum):
    """Kind of exercise."""

    CARDIO = "cardio"
    STRENGTH = "strength"
    FLEXIBILITY = "flexibility"


@dataclass(frozen=True)
class MealEntry:
    """A logged food item."""

    id: int
    date: date
    meal_type: MealType
    name: str
    calories: NonNegativeInt
    carbs_g: NonNegativeFloat = 0.0
    protein_g: NonNegativeFloat = 0.0
    fat_g: NonNegativeFloat = 0.0


@dataclass(frozen=True)
class WorkoutEntry:
    """A logged workout with calories burned."""

    id: int
    date: date
    name: str
    calories: NonNegativeInt
    category: WorkoutCategory = WorkoutCategory.CARDIO


@dataclass(frozen=True)
class WeightEntry:
    """Body weight for a single day, in kilograms."""

    date: date
    weight: PositiveFloat
    note: str = ""


@dataclass(frozen=True)
class Goal:
    """Target weight and daily calorie budget."""

    start_weight: PositiveFloat
    target_weight: PositiveFloat
    daily_calorie_target: PositiveInt
    height_m: PositiveFloat | None = None


DEFAULT_GOAL = Goal(start_weight=75.0, target_weight=65.0, daily_calorie_target=1800)


@dataclass(frozen=True)
class LogSnapshot:
    """Point-in-time view of every log plus the current date."""

    meals: tuple[MealEntry, ...]
    workouts: tuple[WorkoutEntry, ...]
    weights: tuple[WeightEntry, ...]
    water: Mapping[date, int]
    goal: Goal
    today: date
