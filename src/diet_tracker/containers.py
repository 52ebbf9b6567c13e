"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from diet_tracker.adapters.file_store import FileKeyValueStore
from diet_tracker.adapters.supabase_store import SupabaseKeyValueStore
from diet_tracker.config import Settings, parse_storage_backend
from diet_tracker.services.catalog import CatalogService
from diet_tracker.services.clock import Today, local_today
from diet_tracker.services.log_model import LogModel
from diet_tracker.services.storage import (
    InMemoryKeyValueStore,
    KeyValueStore,
    StorageService,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    today: Today
    storage: StorageService
    log_model: LogModel
    catalog_service: CatalogService
    close_resources: Callable[[], Awaitable[None]]


def build_store(settings: Settings) -> KeyValueStore:
    """Create the key-value store selected by the settings."""
    backend = parse_storage_backend(settings.storage_backend)
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "supabase_url and supabase_service_key are required "
                "for the supabase storage backend"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client, table=settings.supabase_table)
    return FileKeyValueStore(settings.data_dir)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    today = local_today(resolved_settings.timezone)
    storage = StorageService(build_store(resolved_settings))
    log_model = LogModel(storage=storage, today=today)

    async def close_resources() -> None:
        await log_model.flush()

    return AppContainer(
        settings=resolved_settings,
        today=today,
        storage=storage,
        log_model=log_model,
        catalog_service=CatalogService(),
        close_resources=close_resources,
    )
