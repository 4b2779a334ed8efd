"""Content scanner: runs a rule catalog against a piece of content.

Every matching pattern contributes one violation tagged with its category.
Lexicon categories contribute a single violation carrying the number of
distinct words found.  The warning level is the highest level raised by any
category that fired, whatever order the categories are checked in.
"""

from __future__ import annotations

import logging
from typing import Optional

from strikeguard.catalog.defaults import default_catalog
from strikeguard.catalog.models import CategoryRules, RuleCatalog, WarningLevel
from strikeguard.errors import ContentTooLargeError, ModerationError
from strikeguard.log import snippet
from strikeguard.moderation.models import ScanOutcome, Violation

logger = logging.getLogger(__name__)

RECIDIVISM_VIOLATION = "User has multiple previous warnings"


class ContentScanner:
    """Stateless scanner bound to one catalog."""

    def __init__(self, catalog: Optional[RuleCatalog] = None, max_content_length: int = 20_000) -> None:
        self.catalog = catalog or default_catalog()
        self.max_content_length = max_content_length

    def scan(self, content: str) -> ScanOutcome:
        """Scan *content* and return its violations and warning level."""
        if not isinstance(content, str):
            raise ModerationError(f"Content must be a string, got {type(content).__name__}")
        if len(content) > self.max_content_length:
            raise ContentTooLargeError(len(content), self.max_content_length)

        outcome = ScanOutcome()
        if not content:
            return outcome

        lowered = content.lower()
        for rules in self.catalog.rules:
            if rules.is_lexicon:
                self._check_lexicon(rules, lowered, outcome)
            else:
                self._check_patterns(rules, content, outcome)

        logger.debug(
            "Scanned %r: level=%s violations=%d",
            snippet(content),
            outcome.warning_level.value,
            len(outcome.violations),
        )
        return outcome

    @staticmethod
    def _check_patterns(rules: CategoryRules, content: str, outcome: ScanOutcome) -> None:
        for pattern in rules.patterns:
            if pattern.search(content):
                outcome.violations.append(Violation(rules.description, rules.category))
                outcome.warning_level = outcome.warning_level.escalate(rules.level)

    @staticmethod
    def _check_lexicon(rules: CategoryRules, lowered: str, outcome: ScanOutcome) -> None:
        count = sum(1 for word in rules.words if word in lowered)
        if count == 0:
            return
        outcome.violations.append(Violation(rules.description.format(count=count), rules.category))
        level = rules.level
        if rules.escalated_level is not None and rules.escalate_at and count >= rules.escalate_at:
            level = rules.escalated_level
        outcome.warning_level = outcome.warning_level.escalate(level)


def apply_recidivism(outcome: ScanOutcome, prior_warnings: int, threshold: int = 3) -> bool:
    """Force a High level when the user already has *threshold* warnings.

    Returns True when the escalation was applied.
    """
    if prior_warnings < threshold:
        return False
    outcome.warning_level = WarningLevel.HIGH
    outcome.violations.append(Violation(RECIDIVISM_VIOLATION))
    return True
