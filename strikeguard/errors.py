"""Exception hierarchy for the moderation engine."""

from __future__ import annotations


class StrikeguardError(Exception):
    """Base class for all engine errors."""


class ModerationError(StrikeguardError):
    """Content could not be scanned."""


class ContentTooLargeError(ModerationError):
    """Content exceeds the configured length ceiling."""

    def __init__(self, length: int, limit: int) -> None:
        super().__init__(f"Content length {length} exceeds the limit of {limit} characters")
        self.length = length
        self.limit = limit


class CatalogError(StrikeguardError):
    """A rule catalog file is malformed."""


class StoreError(StrikeguardError):
    """The user-record store could not be read or written."""


class PersistenceError(StrikeguardError):
    """A moderation decision was computed but could not be recorded.

    ``result`` holds the decision so callers can report it without treating
    it as applied.
    """

    def __init__(self, user_id: str, result: object, cause: Exception) -> None:
        super().__init__(f"Failed to record moderation outcome for user {user_id}: {cause}")
        self.user_id = user_id
        self.result = result
        self.cause = cause
