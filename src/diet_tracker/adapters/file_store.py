"""Key-value store backed by JSON files in a local directory."""

import asyncio
import os
import re
from dataclasses import dataclass
from pathlib import Path

from diet_tracker.services.storage import KeyValueStore

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass
class FileKeyValueStore(KeyValueStore):
    """Stores each key as `<key>.json` under a data directory."""

    directory: Path

    async def get(self, key: str) -> str | None:
        """Return the file contents for key, or None when the file is missing."""
        path = self._path(key)
        return await asyncio.to_thread(_read_text, path)

    async def set(self, key: str, value: str) -> None:
        """Replace the file for key with value."""
        path = self._path(key)
        await asyncio.to_thread(_write_text, path, value)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Unsupported storage key: {key!r}")
        return self.directory / f"{key}.json"


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None


def _write_text(path: Path, value: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(".json.tmp")
    tmp_path.write_text(value, encoding="utf-8")
    os.replace(tmp_path, path)
