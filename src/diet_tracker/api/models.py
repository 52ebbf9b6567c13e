"""Pydantic request bodies for the HTTP API."""

from datetime import date

from pydantic import BaseModel, Field

from diet_tracker.domain.logs import WATER_STEP_ML, MealType

# Free-form numbers are accepted as text too; the log model rejects bad values.
LooseNumber = float | str | None


class CatalogMealRequest(BaseModel):
    """Log a catalog food."""

    day: date | None = None
    meal_type: str = MealType.BREAKFAST.value
    food_name: str


class CustomMealRequest(BaseModel):
    """Log a manually entered food."""

    day: date | None = None
    meal_type: str = MealType.BREAKFAST.value
    name: str | None = None
    calories: LooseNumber = None
    carbs_g: LooseNumber = None
    protein_g: LooseNumber = None
    fat_g: LooseNumber = None


class CatalogWorkoutRequest(BaseModel):
    """Log a catalog exercise."""

    day: date | None = None
    exercise_name: str


class CustomWorkoutRequest(BaseModel):
    """Log a manually entered workout."""

    day: date | None = None
    name: str | None = None
    calories: LooseNumber = None
    category: str | None = None
    duration_minutes: LooseNumber = None


class WeightRequest(BaseModel):
    """Record the weight for a day."""

    day: date | None = None
    weight: LooseNumber = None
    note: str | None = None


class WaterRequest(BaseModel):
    """Change the water total for a day by whole steps."""

    day: date | None = None
    delta_ml: int = WATER_STEP_ML


class GoalRequest(BaseModel):
    """Replace the goal."""

    start_weight: float = Field(gt=0)
    target_weight: float = Field(gt=0)
    daily_calorie_target: int = Field(gt=0)
    height_m: float | None = Field(default=None, gt=0)
