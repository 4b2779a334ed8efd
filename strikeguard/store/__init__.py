"""User-record stores holding cumulative moderation state."""

from strikeguard.store.base import UserRecordStore
from strikeguard.store.json_store import JsonFileUserStore
from strikeguard.store.memory import InMemoryUserStore

__all__ = ["InMemoryUserStore", "JsonFileUserStore", "UserRecordStore"]
