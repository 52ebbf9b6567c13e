"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, Request

from diet_tracker.api.catalog import router as catalog_router
from diet_tracker.api.logs import router as logs_router
from diet_tracker.app_logging import configure_logging
from diet_tracker.containers import AppContainer
from diet_tracker.services import metrics


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await app.state.container.log_model.load()
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to flush logs on shutdown")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(logs_router)
    app.include_router(catalog_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/dashboard")
    async def dashboard(request: Request, day: date | None = None) -> dict[str, object]:
        """Return the day's calorie, macro, water and weight figures."""
        state_container: AppContainer = request.app.state.container
        snapshot = state_container.log_model.snapshot()
        resolved = day or snapshot.today
        return {
            "summary": metrics.daily_summary(snapshot, resolved),
            "meals": metrics.meals_on(snapshot, resolved),
            "workouts": metrics.workouts_on(snapshot, resolved),
        }

    @app.get("/stats")
    async def stats(request: Request, day: date | None = None) -> dict[str, object]:
        """Return weekly calories, averages, streak and workout mix."""
        state_container: AppContainer = request.app.state.container
        snapshot = state_container.log_model.snapshot()
        return {"stats": metrics.stats_summary(snapshot, day)}

    return app
