"""Endpoints for searching the food and exercise catalogs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/foods")
async def search_foods(request: Request, query: str = "") -> dict[str, object]:
    """Return catalog foods matching the query."""
    container: AppContainer = request.app.state.container
    return {"foods": container.catalog_service.search_foods(query)}


@router.get("/exercises")
async def search_exercises(request: Request, query: str = "") -> dict[str, object]:
    """Return catalog exercises matching the query by name or category."""
    container: AppContainer = request.app.state.container
    return {"exercises": container.catalog_service.search_exercises(query)}
