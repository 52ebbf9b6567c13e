"""Best-effort JSON persistence over a key-value store."""

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class StorageKey(StrEnum):
    """Keys of the five independently persisted records."""

    WEIGHTS = "diet_weight_logs"
    MEALS = "diet_meal_logs"
    WORKOUTS = "diet_workout_logs"
    GOAL = "diet_goal"
    WATER = "diet_water"


class KeyValueStore(Protocol):
    """Host-provided string store."""

    async def get(self, key: str) -> str | None:
        """Return the raw value stored under key, if any."""

    async def set(self, key: str, value: str) -> None:
        """Store a raw value under key."""


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store, used when nothing should touch disk."""

    _values: dict[str, str]

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values = dict(values or {})

    async def get(self, key: str) -> str | None:
        """Return the stored value."""
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        """Store a value."""
        self._values[key] = value


@dataclass
class StorageService:
    """Loads and saves whole JSON values, never raising to the caller."""

    store: KeyValueStore

    async def load(self, key: str, adapter: TypeAdapter[T], fallback: T) -> T:
        """Read and decode the value under key, or return fallback on any failure."""
        try:
            raw = await self.store.get(key)
        except Exception:
            _logger.warning("Storage read failed: key=%s", key, exc_info=True)
            return fallback
        if raw is None:
            return fallback
        try:
            return adapter.validate_json(raw)
        except ValidationError as exc:
            _logger.warning(
                "Discarding unreadable stored value: key=%s errors=%s",
                key,
                exc.error_count(),
            )
            return fallback

    async def save(self, key: str, adapter: TypeAdapter[T], value: T) -> bool:
        """Encode and write value under key. Returns False when the write failed."""
        try:
            payload = adapter.dump_json(value).decode("utf-8")
            await self.store.set(key, payload)
        except Exception:
            _logger.warning("Storage write failed: key=%s", key, exc_info=True)
            return False
        return True
