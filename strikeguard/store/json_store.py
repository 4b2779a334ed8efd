"""File-based JSON user-record store.

All records live in a single ``users.json`` mapping user id to document,
under ``~/.strikeguard/users/`` by default.  Writes go to a temporary file
that is atomically renamed over the original, and the store lock is held
for the whole read-modify-write.  The lock is per process; hosts running
several processes against one directory need a store with its own
atomic primitives.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from strikeguard.errors import StoreError
from strikeguard.store.base import UserRecordStore


class JsonFileUserStore(UserRecordStore):
    """Persist moderation records to ``<base_dir>/users.json``."""

    def __init__(self, base_dir: str | Path | None = None) -> None:
        super().__init__()
        self._base = Path(base_dir) if base_dir else Path.home() / ".strikeguard" / "users"
        self._base.mkdir(parents=True, exist_ok=True)
        self._path = self._base / "users.json"

    @property
    def path(self) -> Path:
        return self._path

    # -- persistence ---------------------------------------------------------

    def _load_all(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            raise StoreError(f"Cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"{self._path} does not contain a mapping of user records")
        return data

    def _save_all(self, data: dict[str, Any]) -> None:
        try:
            fd, tmp = tempfile.mkstemp(dir=self._base, prefix=".users-", suffix=".json")
            with os.fdopen(fd, "w") as fh:
                json.dump(data, fh, indent=2)
            os.replace(tmp, self._path)
        except OSError as e:
            raise StoreError(f"Cannot write {self._path}: {e}") from e

    def _load(self, user_id: str) -> Optional[dict[str, Any]]:
        return self._load_all().get(user_id)

    def _save(self, user_id: str, doc: dict[str, Any]) -> None:
        data = self._load_all()
        data[user_id] = doc
        self._save_all(data)

    def user_ids(self) -> list[str]:
        with self._lock:
            return sorted(self._load_all())
