"""Interface for the user-record store.

Stores expose atomic primitives instead of whole-document writes so that
concurrent moderation of the same user never loses a history entry or a
strike increment:

- ``append_to_list`` appends one entry to a history list
- ``increment_numeric`` adds a delta to the strike total
- ``set_fields`` overwrites scalar fields (last writer wins)
- ``update`` applies all three kinds of change in one atomic step

Subclasses supply ``_load`` / ``_save`` for a single user document; the base
class serializes every read-modify-write under one re-entrant lock.
"""

from __future__ import annotations

import copy
import threading
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from strikeguard.moderation.models import (
    LIST_FIELDS,
    NUMERIC_FIELDS,
    SCALAR_FIELDS,
    UserModerationRecord,
)


class UserRecordStore(ABC):
    """Document store keyed by user id."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    # -- storage hooks -------------------------------------------------------

    @abstractmethod
    def _load(self, user_id: str) -> Optional[dict[str, Any]]:
        """Return the raw document for *user_id*, or None if absent."""

    @abstractmethod
    def _save(self, user_id: str, doc: dict[str, Any]) -> None:
        """Persist the raw document for *user_id*."""

    # -- reads ---------------------------------------------------------------

    def get(self, user_id: str) -> Optional[UserModerationRecord]:
        with self._lock:
            doc = self._load(user_id)
        if doc is None:
            return None
        return UserModerationRecord.from_dict(user_id, doc)

    def get_or_default(self, user_id: str) -> UserModerationRecord:
        """Return the stored record, or a fresh zeroed one."""
        return self.get(user_id) or UserModerationRecord(user_id=user_id)

    # -- atomic writes -------------------------------------------------------

    def update(
        self,
        user_id: str,
        *,
        increments: Optional[Mapping[str, float]] = None,
        appends: Optional[Mapping[str, list[dict[str, Any]]]] = None,
        sets: Optional[Mapping[str, Any]] = None,
    ) -> UserModerationRecord:
        """Apply increments, list appends and field sets atomically.

        Returns the committed record.
        """
        increments = increments or {}
        appends = appends or {}
        sets = sets or {}
        _check_fields(increments, NUMERIC_FIELDS, "increment")
        _check_fields(appends, LIST_FIELDS, "append to")
        _check_fields(sets, SCALAR_FIELDS, "set")

        with self._lock:
            doc = self._load(user_id)
            if doc is None:
                doc = UserModerationRecord(user_id=user_id).to_dict()
            for name, delta in increments.items():
                doc[name] = float(doc.get(name, 0.0)) + float(delta)
            for name, entries in appends.items():
                doc.setdefault(name, []).extend(copy.deepcopy(entries))
            for name, value in sets.items():
                doc[name] = value
            self._save(user_id, doc)
            return UserModerationRecord.from_dict(user_id, doc)

    def append_to_list(self, user_id: str, field: str, entry: dict[str, Any]) -> None:
        self.update(user_id, appends={field: [entry]})

    def increment_numeric(self, user_id: str, field: str, delta: float) -> float:
        """Add *delta* to *field* and return the new value."""
        record = self.update(user_id, increments={field: delta})
        return getattr(record, field)

    def set_fields(self, user_id: str, fields: Mapping[str, Any]) -> None:
        self.update(user_id, sets=fields)


def _check_fields(changes: Mapping[str, Any], allowed: frozenset[str], verb: str) -> None:
    unknown = set(changes) - allowed
    if unknown:
        raise ValueError(f"Cannot {verb} field(s): {', '.join(sorted(unknown))}")
