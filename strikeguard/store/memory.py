"""In-process user-record store."""

from __future__ import annotations

import copy
from typing import Any, Optional

from strikeguard.store.base import UserRecordStore


class InMemoryUserStore(UserRecordStore):
    """Dictionary-backed store for tests and single-process hosts."""

    def __init__(self, initial: Optional[dict[str, dict[str, Any]]] = None) -> None:
        super().__init__()
        self._docs: dict[str, dict[str, Any]] = copy.deepcopy(initial) if initial else {}

    def _load(self, user_id: str) -> Optional[dict[str, Any]]:
        doc = self._docs.get(user_id)
        return copy.deepcopy(doc) if doc is not None else None

    def _save(self, user_id: str, doc: dict[str, Any]) -> None:
        self._docs[user_id] = copy.deepcopy(doc)

    def user_ids(self) -> list[str]:
        with self._lock:
            return sorted(self._docs)
