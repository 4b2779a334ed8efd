"""Moderation engine: the single entry point for content submissions."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from strikeguard.catalog.loader import load_catalog
from strikeguard.catalog.models import RuleCatalog, WarningLevel
from strikeguard.config import Settings
from strikeguard.errors import StoreError
from strikeguard.log import snippet
from strikeguard.moderation.escalation import tier_for
from strikeguard.moderation.expiry import SweepOutcome, sweep_expired
from strikeguard.moderation.models import ActionTier, ModerationResult, UserModerationRecord
from strikeguard.moderation.scanner import ContentScanner, apply_recidivism
from strikeguard.moderation.strikes import strike_weight
from strikeguard.moderation.updater import AccountStateUpdater
from strikeguard.security.audit_log import AuditLogger
from strikeguard.store.base import UserRecordStore

logger = logging.getLogger(__name__)


class ModerationEngine:
    """Scan content, weigh strikes, escalate and record the outcome.

    The scan and the strike arithmetic are pure; the only blocking calls are
    the store read before scanning and the store write afterwards.  A failed
    write raises ``PersistenceError`` instead of reporting the content as
    clean.
    """

    def __init__(
        self,
        store: UserRecordStore,
        catalog: Optional[RuleCatalog] = None,
        settings: Optional[Settings] = None,
        audit: Optional[AuditLogger] = None,
    ) -> None:
        self.settings = settings or Settings()
        if catalog is None and self.settings.catalog_path:
            catalog = load_catalog(self.settings.catalog_path)
        self.store = store
        self.scanner = ContentScanner(catalog, max_content_length=self.settings.max_content_length)
        self.catalog = self.scanner.catalog
        self.updater = AccountStateUpdater(store, thresholds=self.settings.thresholds)
        self.audit = audit

    # -- decisions -----------------------------------------------------------

    def evaluate(self, content: str, record: UserModerationRecord) -> ModerationResult:
        """Decide the outcome for *content* given the user's current record."""
        outcome = self.scanner.scan(content)
        if apply_recidivism(outcome, len(record.warning_history), self.settings.recidivism_threshold):
            logger.info(
                "User %s has %d prior warnings; escalating to high",
                record.user_id,
                len(record.warning_history),
            )

        if outcome.warning_level != WarningLevel.HIGH:
            return ModerationResult(
                violations=outcome.violations,
                warning_level=outcome.warning_level,
                strike_added=False,
                strike_weight=0.0,
                total_strikes=record.strikes,
                action_taken=ActionTier.NONE,
            )

        weight = strike_weight(outcome.violations, self.catalog, cap=self.settings.strike_cap)
        total = record.strikes + weight
        return ModerationResult(
            violations=outcome.violations,
            warning_level=outcome.warning_level,
            strike_added=True,
            strike_weight=weight,
            total_strikes=total,
            action_taken=tier_for(total, self.settings.thresholds),
        )

    def preview(self, content: str, user_id: Optional[str] = None) -> ModerationResult:
        """Compute the decision without recording anything."""
        record = self.store.get_or_default(user_id) if user_id else UserModerationRecord(user_id="")
        return self.evaluate(content, record)

    def moderate(self, content: str, user_id: str) -> ModerationResult:
        """Moderate a content submission and persist the outcome."""
        record = self.store.get_or_default(user_id)
        result = self.evaluate(content, record)
        result = self.updater.apply(user_id, content, result)

        if result.strike_added:
            logger.info(
                "Strike for user %s: +%.1f (total %.1f, action %s)",
                user_id,
                result.strike_weight,
                result.total_strikes,
                result.action_taken.value,
            )
            self._audit("moderation.strike", user_id, content, result)
        elif result.warning_level != WarningLevel.NONE:
            logger.info("Warning for user %s: level %s", user_id, result.warning_level.value)
            self._audit("moderation.warning", user_id, content, result)
        return result

    # -- account state -------------------------------------------------------

    def status(self, user_id: str) -> UserModerationRecord:
        return self.store.get_or_default(user_id)

    def has_repeated_warnings(self, user_id: str) -> bool:
        record = self.store.get_or_default(user_id)
        return len(record.warning_history) >= self.settings.recidivism_threshold

    def sweep(self, user_id: str, now: Optional[datetime] = None) -> SweepOutcome:
        """Lift expired restriction/suspension flags for *user_id*."""
        outcome = sweep_expired(self.store, user_id, now=now, windows=self.settings.windows)
        if outcome.changed:
            self._record_event(
                "moderation.sweep",
                user_id,
                {
                    "lifted_restriction": outcome.lifted_restriction,
                    "lifted_suspension": outcome.lifted_suspension,
                },
            )
        return outcome

    def _audit(self, action: str, user_id: str, content: str, result: ModerationResult) -> None:
        details = result.to_dict()
        details["content"] = snippet(content, 100)
        self._record_event(action, user_id, details)

    def _record_event(self, action: str, user_id: str, details: dict[str, Any]) -> None:
        """Write an audit entry for a change the store has already committed.

        The change stands even if the audit write fails, so the failure is
        logged rather than raised.
        """
        if self.audit is None:
            return
        try:
            self.audit.record(action, user_id, details)
        except StoreError as e:
            logger.error("Audit entry %s for user %s was not written: %s", action, user_id, e)
