"""Tests for strike weighting and the escalation policy."""

from strikeguard.catalog import ViolationCategory, default_catalog
from strikeguard.moderation.escalation import (
    EscalationThresholds,
    meter_percent,
    standing_for,
    tier_for,
)
from strikeguard.moderation.models import ActionTier, Violation
from strikeguard.moderation.strikes import strike_weight


def test_weight_sums_by_severity():
    violations = [
        Violation("Potential fraudulent activity detected", ViolationCategory.FRAUD),
        Violation("Contains 1 potentially harmful words", ViolationCategory.WARNING_WORD),
    ]
    assert strike_weight(violations, default_catalog()) == 2.5


def test_harmful_plus_warning_word_caps_at_three():
    violations = [
        Violation("Harmful content detected", ViolationCategory.HARMFUL),
        Violation("Contains 1 potentially harmful words", ViolationCategory.WARNING_WORD),
    ]
    assert strike_weight(violations, default_catalog()) == 3.0


def test_cap_applies_after_sum():
    violations = [Violation("Harmful content detected", ViolationCategory.HARMFUL)] * 5
    assert strike_weight(violations, default_catalog()) == 3.0


def test_synthetic_violation_weighs_one():
    assert strike_weight([Violation("User has multiple previous warnings")], default_catalog()) == 1.0


def test_custom_cap():
    violations = [Violation("x", ViolationCategory.CYBERCRIME)] * 3
    assert strike_weight(violations, default_catalog(), cap=5.0) == 5.0


def test_tier_boundaries():
    assert tier_for(0) == ActionTier.NONE
    assert tier_for(2.99) == ActionTier.NONE
    assert tier_for(3) == ActionTier.WARNING
    assert tier_for(5.99) == ActionTier.WARNING
    assert tier_for(6) == ActionTier.RESTRICTION
    assert tier_for(8.99) == ActionTier.RESTRICTION
    assert tier_for(9) == ActionTier.SUSPENSION
    assert tier_for(40) == ActionTier.SUSPENSION


def test_tier_custom_thresholds():
    thresholds = EscalationThresholds(warning=1, restriction=2, suspension=4)
    assert tier_for(1.5, thresholds) == ActionTier.WARNING
    assert tier_for(4, thresholds) == ActionTier.SUSPENSION


def test_standing_labels():
    assert standing_for(0) == "Good Standing"
    assert standing_for(3) == "Warning"
    assert standing_for(7) == "Serious"
    assert standing_for(9.5) == "Critical"


def test_meter_percent_is_capped():
    assert meter_percent(6) == 50.0
    assert meter_percent(30) == 100.0
