"""Time-based lifting of restrictions and suspensions.

Only the two boolean gates are cleared.  Strike totals and history are left
alone, so running the sweep again is a no-op.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from strikeguard.errors import StoreError
from strikeguard.moderation.models import RESTRICTED, SUSPENDED, UserModerationRecord

if TYPE_CHECKING:
    from strikeguard.store.base import UserRecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpiryWindows:
    restriction_days: int = 3
    suspension_days: int = 7


@dataclass
class SweepOutcome:
    lifted_restriction: bool = False
    lifted_suspension: bool = False

    @property
    def changed(self) -> bool:
        return self.lifted_restriction or self.lifted_suspension


def elapsed_days(since: str, now: datetime) -> int:
    """Whole days between the ISO timestamp *since* and *now*."""
    try:
        then = datetime.fromisoformat(since)
    except (TypeError, ValueError) as e:
        raise StoreError(f"Stored last action date {since!r} is not an ISO timestamp") from e
    if then.tzinfo is None:
        then = then.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now - then).days


def expired_flags(
    record: UserModerationRecord,
    now: datetime,
    windows: ExpiryWindows = ExpiryWindows(),
) -> SweepOutcome:
    """Decide which flags on *record* have outlived their window."""
    outcome = SweepOutcome()
    if not record.last_action_date or not (record.restricted or record.suspended):
        return outcome
    days = elapsed_days(record.last_action_date, now)
    outcome.lifted_restriction = record.restricted and days > windows.restriction_days
    outcome.lifted_suspension = record.suspended and days > windows.suspension_days
    return outcome


def sweep_expired(
    store: UserRecordStore,
    user_id: str,
    now: Optional[datetime] = None,
    windows: ExpiryWindows = ExpiryWindows(),
) -> SweepOutcome:
    """Clear expired restriction/suspension flags for *user_id*."""
    now = now or datetime.now(timezone.utc)
    record = store.get_or_default(user_id)
    outcome = expired_flags(record, now, windows)
    if not outcome.changed:
        return outcome

    fields: dict[str, bool] = {}
    if outcome.lifted_restriction:
        fields[RESTRICTED] = False
    if outcome.lifted_suspension:
        fields[SUSPENDED] = False
    store.set_fields(user_id, fields)
    logger.info(
        "Lifted %s for user %s",
        " and ".join(k for k in (RESTRICTED, SUSPENDED) if k in fields),
        user_id,
    )
    return outcome
