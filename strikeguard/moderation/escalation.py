"""Escalation policy: cumulative strike total to account action tier."""

from __future__ import annotations

from dataclasses import dataclass

from strikeguard.moderation.models import ActionTier

# Full length of the strike meter shown to users.
POINTS_SCALE = 12


@dataclass(frozen=True)
class EscalationThresholds:
    warning: float = 3.0
    restriction: float = 6.0
    suspension: float = 9.0


DEFAULT_THRESHOLDS = EscalationThresholds()


def tier_for(total: float, thresholds: EscalationThresholds = DEFAULT_THRESHOLDS) -> ActionTier:
    """Map a post-increment strike total to its action tier."""
    if total >= thresholds.suspension:
        return ActionTier.SUSPENSION
    if total >= thresholds.restriction:
        return ActionTier.RESTRICTION
    if total >= thresholds.warning:
        return ActionTier.WARNING
    return ActionTier.NONE


def standing_for(total: float, thresholds: EscalationThresholds = DEFAULT_THRESHOLDS) -> str:
    """Human-readable account standing for a strike total."""
    return {
        ActionTier.SUSPENSION: "Critical",
        ActionTier.RESTRICTION: "Serious",
        ActionTier.WARNING: "Warning",
        ActionTier.NONE: "Good Standing",
    }[tier_for(total, thresholds)]


def meter_percent(total: float) -> float:
    return min(total / POINTS_SCALE * 100, 100.0)
