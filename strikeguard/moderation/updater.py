"""Persist moderation outcomes to the user-record store.

A strike is recorded with one atomic ``update`` that increments the total,
appends to both histories and sets the action flags.  When the committed
total shows that another scan for the same user landed in between, the tier
is re-derived from the committed total and the flags are reconciled with a
second write.  History is therefore always written before, or together
with, any escalation it justifies.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, replace
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from strikeguard.catalog.models import WarningLevel
from strikeguard.errors import PersistenceError
from strikeguard.moderation.escalation import DEFAULT_THRESHOLDS, EscalationThresholds, tier_for
from strikeguard.moderation.models import (
    LAST_ACTION_DATE,
    LAST_ACTION_TAKEN,
    RESTRICTED,
    STRIKE_HISTORY,
    STRIKES,
    SUSPENDED,
    WARNING_HISTORY,
    ActionTier,
    ModerationResult,
    StrikeEntry,
    WarningEntry,
)
from strikeguard.store.base import UserRecordStore

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def flag_changes(tier: ActionTier) -> dict[str, bool]:
    """Flags raised by *tier*.  Lower tiers leave existing flags untouched."""
    if tier == ActionTier.SUSPENSION:
        return {SUSPENDED: True}
    if tier == ActionTier.RESTRICTION:
        return {RESTRICTED: True}
    return {}


class AccountStateUpdater:
    """Writes strikes, warnings and action flags for one moderation result."""

    def __init__(
        self,
        store: UserRecordStore,
        thresholds: EscalationThresholds = DEFAULT_THRESHOLDS,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.store = store
        self.thresholds = thresholds
        self._clock = clock or _utcnow

    def apply(self, user_id: str, content: str, result: ModerationResult) -> ModerationResult:
        """Persist *result* and return it as committed.

        Raises PersistenceError if the store rejects any write.
        """
        if result.warning_level == WarningLevel.NONE:
            return result

        timestamp = self._clock().isoformat()
        warning = asdict(
            WarningEntry(
                timestamp=timestamp,
                level=result.warning_level.value,
                content=content,
                violations=result.descriptions,
            )
        )

        try:
            if not result.strike_added:
                self.store.append_to_list(user_id, WARNING_HISTORY, warning)
                return result
            return self._record_strike(user_id, content, result, timestamp, warning)
        except PersistenceError:
            raise
        except Exception as e:
            logger.error("Could not persist moderation outcome for user %s: %s", user_id, e)
            raise PersistenceError(user_id, result, e) from e

    def _record_strike(
        self,
        user_id: str,
        content: str,
        result: ModerationResult,
        timestamp: str,
        warning: dict[str, Any],
    ) -> ModerationResult:
        strike = asdict(
            StrikeEntry(
                timestamp=timestamp,
                count=result.strike_weight,
                violations=result.descriptions,
                content=content,
            )
        )
        sets: dict[str, Any] = {
            LAST_ACTION_TAKEN: result.action_taken.value,
            LAST_ACTION_DATE: timestamp,
        }
        sets.update(flag_changes(result.action_taken))

        record = self.store.update(
            user_id,
            increments={STRIKES: result.strike_weight},
            appends={STRIKE_HISTORY: [strike], WARNING_HISTORY: [warning]},
            sets=sets,
        )

        if math.isclose(record.strikes, result.total_strikes):
            return result

        committed_tier = tier_for(record.strikes, self.thresholds)
        logger.info(
            "Concurrent update for user %s: expected %.1f strikes, committed %.1f",
            user_id,
            result.total_strikes,
            record.strikes,
        )
        reconcile: dict[str, Any] = {LAST_ACTION_TAKEN: committed_tier.value}
        reconcile.update(flag_changes(committed_tier))
        self.store.set_fields(user_id, reconcile)
        return replace(result, total_strikes=record.strikes, action_taken=committed_tier)
