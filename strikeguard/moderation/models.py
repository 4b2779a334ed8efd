"""Data models for moderation results and per-user moderation state."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional

from strikeguard.catalog.models import ViolationCategory, WarningLevel


class ActionTier(str, Enum):
    """Account-level consequence derived from the cumulative strike total."""

    NONE = "none"
    WARNING = "warning"
    RESTRICTION = "restriction"
    SUSPENSION = "suspension"


@dataclass(frozen=True)
class Violation:
    """A single rule match.  ``category`` is None for synthetic entries."""

    description: str
    category: Optional[ViolationCategory] = None

    def __str__(self) -> str:
        return self.description


@dataclass
class ScanOutcome:
    """What the scanner found in one piece of content."""

    violations: list[Violation] = field(default_factory=list)
    warning_level: WarningLevel = WarningLevel.NONE


@dataclass
class ModerationResult:
    """Fully populated outcome of moderating one piece of content.

    When no strike is added, ``strike_weight`` is 0, ``total_strikes`` equals
    the user's prior total and ``action_taken`` is ``ActionTier.NONE``.
    """

    violations: list[Violation]
    warning_level: WarningLevel
    strike_added: bool
    strike_weight: float
    total_strikes: float
    action_taken: ActionTier

    @property
    def descriptions(self) -> list[str]:
        return [v.description for v in self.violations]

    @property
    def is_approved(self) -> bool:
        return self.warning_level != WarningLevel.HIGH

    def to_dict(self) -> dict[str, Any]:
        return {
            "violations": self.descriptions,
            "warning_level": self.warning_level.value,
            "strike_added": self.strike_added,
            "strike_weight": self.strike_weight,
            "total_strikes": self.total_strikes,
            "action_taken": self.action_taken.value,
            "is_approved": self.is_approved,
        }


@dataclass
class StrikeEntry:
    timestamp: str
    count: float
    violations: list[str]
    content: str


@dataclass
class WarningEntry:
    timestamp: str
    level: str
    content: str
    violations: list[str]


# Store field names.
STRIKES = "strikes"
SUSPENDED = "suspended"
RESTRICTED = "restricted"
STRIKE_HISTORY = "strike_history"
WARNING_HISTORY = "warning_history"
LAST_ACTION_TAKEN = "last_action_taken"
LAST_ACTION_DATE = "last_action_date"

NUMERIC_FIELDS = frozenset({STRIKES})
LIST_FIELDS = frozenset({STRIKE_HISTORY, WARNING_HISTORY})
SCALAR_FIELDS = frozenset({SUSPENDED, RESTRICTED, LAST_ACTION_TAKEN, LAST_ACTION_DATE})


@dataclass
class UserModerationRecord:
    """Cumulative moderation state for one user."""

    user_id: str
    strikes: float = 0.0
    suspended: bool = False
    restricted: bool = False
    strike_history: list[StrikeEntry] = field(default_factory=list)
    warning_history: list[WarningEntry] = field(default_factory=list)
    last_action_taken: ActionTier = ActionTier.NONE
    last_action_date: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.last_action_taken, str):
            self.last_action_taken = ActionTier(self.last_action_taken)

    @classmethod
    def from_dict(cls, user_id: str, d: dict[str, Any]) -> UserModerationRecord:
        return cls(
            user_id=user_id,
            strikes=float(d.get(STRIKES, 0.0)),
            suspended=bool(d.get(SUSPENDED, False)),
            restricted=bool(d.get(RESTRICTED, False)),
            strike_history=[StrikeEntry(**e) for e in d.get(STRIKE_HISTORY, [])],
            warning_history=[WarningEntry(**e) for e in d.get(WARNING_HISTORY, [])],
            last_action_taken=ActionTier(d.get(LAST_ACTION_TAKEN) or ActionTier.NONE.value),
            last_action_date=d.get(LAST_ACTION_DATE),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            STRIKES: self.strikes,
            SUSPENDED: self.suspended,
            RESTRICTED: self.restricted,
            STRIKE_HISTORY: [asdict(e) for e in self.strike_history],
            WARNING_HISTORY: [asdict(e) for e in self.warning_history],
            LAST_ACTION_TAKEN: self.last_action_taken.value,
            LAST_ACTION_DATE: self.last_action_date,
        }
