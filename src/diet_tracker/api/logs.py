"""Endpoints for the meal, workout, weight, water and goal views."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from diet_tracker.api.models import (
    CatalogMealRequest,
    CatalogWorkoutRequest,
    CustomMealRequest,
    CustomWorkoutRequest,
    GoalRequest,
    WaterRequest,
    WeightRequest,
)
from diet_tracker.domain.logs import WATER_TARGET_ML, Goal
from diet_tracker.services import metrics

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(tags=["logs"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/meals")
async def list_meals(request: Request, day: date | None = None) -> dict[str, object]:
    """Return a day's meals grouped by meal slot with totals."""
    snapshot = _container(request).log_model.snapshot()
    resolved = day or snapshot.today
    return {
        "date": resolved,
        "total_calories": metrics.daily_intake(snapshot, resolved),
        "macros": metrics.macro_totals(snapshot, resolved),
        "groups": metrics.meals_by_type(snapshot, resolved),
    }


@router.post("/meals")
async def add_catalog_meal(
    payload: CatalogMealRequest, request: Request
) -> dict[str, object]:
    """Log a food picked from the catalog."""
    container = _container(request)
    food = container.catalog_service.get_food(payload.food_name)
    if food is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    entry = container.log_model.add_meal(payload.day, payload.meal_type, food)
    return {"entry": entry}


@router.post("/meals/custom")
async def add_custom_meal(
    payload: CustomMealRequest, request: Request
) -> dict[str, object]:
    """Log a manually entered food."""
    entry = _container(request).log_model.add_custom_meal(
        payload.day,
        payload.meal_type,
        payload.name,
        payload.calories,
        carbs_g=payload.carbs_g,
        protein_g=payload.protein_g,
        fat_g=payload.fat_g,
    )
    return {"entry": entry}


@router.delete("/meals/{entry_id}")
async def delete_meal(entry_id: int, request: Request) -> dict[str, object]:
    """Delete a meal entry."""
    return {"deleted": _container(request).log_model.delete_meal(entry_id)}


@router.get("/workouts")
async def list_workouts(
    request: Request, day: date | None = None
) -> dict[str, object]:
    """Return a day's workouts with calories burned."""
    snapshot = _container(request).log_model.snapshot()
    resolved = day or snapshot.today
    return {
        "date": resolved,
        "total_calories": metrics.daily_burn(snapshot, resolved),
        "entries": metrics.workouts_on(snapshot, resolved),
    }


@router.post("/workouts")
async def add_catalog_workout(
    payload: CatalogWorkoutRequest, request: Request
) -> dict[str, object]:
    """Log an exercise picked from the catalog."""
    container = _container(request)
    exercise = container.catalog_service.get_exercise(payload.exercise_name)
    if exercise is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"entry": container.log_model.add_workout(payload.day, exercise)}


@router.post("/workouts/custom")
async def add_custom_workout(
    payload: CustomWorkoutRequest, request: Request
) -> dict[str, object]:
    """Log a manually entered workout."""
    entry = _container(request).log_model.add_custom_workout(
        payload.day,
        payload.name,
        payload.calories,
        category=payload.category,
        duration_minutes=payload.duration_minutes,
    )
    return {"entry": entry}


@router.delete("/workouts/{entry_id}")
async def delete_workout(entry_id: int, request: Request) -> dict[str, object]:
    """Delete a workout entry."""
    return {"deleted": _container(request).log_model.delete_workout(entry_id)}


@router.get("/weights")
async def list_weights(request: Request) -> dict[str, object]:
    """Return the weight log with trend data and progress."""
    snapshot = _container(request).log_model.snapshot()
    return {
        "entries": list(reversed(snapshot.weights)),
        "recent": metrics.recent_weights(snapshot),
        "progress": metrics.weight_progress(snapshot),
    }


@router.post("/weights")
async def record_weight(payload: WeightRequest, request: Request) -> dict[str, object]:
    """Record or replace the weight for a day."""
    entry = _container(request).log_model.record_weight(
        payload.day, payload.weight, payload.note
    )
    return {"entry": entry}


@router.delete("/weights/{day}")
async def delete_weight(day: date, request: Request) -> dict[str, object]:
    """Delete the weight entry for a day."""
    return {"deleted": _container(request).log_model.delete_weight(day)}


@router.get("/water")
async def get_water(request: Request, day: date | None = None) -> dict[str, object]:
    """Return the water total for a day."""
    snapshot = _container(request).log_model.snapshot()
    resolved = day or snapshot.today
    return {
        "date": resolved,
        "water_ml": metrics.water_ml(snapshot, resolved),
        "target_ml": WATER_TARGET_ML,
        "progress": metrics.water_progress(snapshot, resolved),
    }


@router.post("/water")
async def adjust_water(payload: WaterRequest, request: Request) -> dict[str, object]:
    """Add or remove water in whole steps."""
    container = _container(request)
    resolved = payload.day or container.today()
    total = container.log_model.adjust_water(resolved, payload.delta_ml)
    return {"date": resolved, "water_ml": total}


@router.get("/goal")
async def get_goal(request: Request) -> dict[str, object]:
    """Return the current goal."""
    return {"goal": _container(request).log_model.goal}


@router.put("/goal")
async def set_goal(payload: GoalRequest, request: Request) -> dict[str, object]:
    """Replace the goal."""
    goal = Goal(
        start_weight=payload.start_weight,
        target_weight=payload.target_weight,
        daily_calorie_target=payload.daily_calorie_target,
        height_m=payload.height_m,
    )
    return {"goal": _container(request).log_model.set_goal(goal)}
