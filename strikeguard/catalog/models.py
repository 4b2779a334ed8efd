"""Data models for the rule catalog."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ViolationCategory(str, Enum):
    """Kinds of policy violation the scanner can detect."""

    HARMFUL = "harmful"
    MISINFORMATION = "misinformation"
    FRAUD = "fraud"
    CYBERCRIME = "cybercrime"
    ADULT_CONTENT = "adult_content"
    VIOLENCE = "violence"
    WARNING_WORD = "warning_word"


class SeverityClass(str, Enum):
    """Strike weight class of a category."""

    SEVERE = "severe"
    SERIOUS = "serious"
    STANDARD = "standard"

    @property
    def weight(self) -> float:
        return {
            SeverityClass.SEVERE: 2.0,
            SeverityClass.SERIOUS: 1.5,
            SeverityClass.STANDARD: 1.0,
        }[self]


class WarningLevel(str, Enum):
    """Per-scan severity: none < low < medium < high."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return {
            WarningLevel.NONE: 0,
            WarningLevel.LOW: 1,
            WarningLevel.MEDIUM: 2,
            WarningLevel.HIGH: 3,
        }[self]

    def escalate(self, other: WarningLevel) -> WarningLevel:
        """Return the higher of the two levels."""
        return other if other.rank > self.rank else self


@dataclass(frozen=True)
class CategoryRules:
    """Detection rules for one category.

    Pattern categories emit one violation per matching pattern.  Lexicon
    categories (``words`` non-empty) count distinct words found in the
    content and emit a single violation; ``level`` applies below
    ``escalate_at`` distinct words and ``escalated_level`` at or above it.
    """

    category: ViolationCategory
    severity: SeverityClass
    level: WarningLevel
    description: str
    patterns: tuple[re.Pattern[str], ...] = ()
    words: tuple[str, ...] = ()
    escalate_at: int = 0
    escalated_level: Optional[WarningLevel] = None

    @property
    def is_lexicon(self) -> bool:
        return bool(self.words)

    @property
    def weight(self) -> float:
        return self.severity.weight


@dataclass(frozen=True)
class RuleCatalog:
    """Immutable, versioned collection of category rules."""

    name: str = "default"
    version: str = "1.0.0"
    rules: tuple[CategoryRules, ...] = field(default_factory=tuple)

    def categories(self) -> list[ViolationCategory]:
        return [r.category for r in self.rules]

    def get(self, category: ViolationCategory) -> CategoryRules:
        """Return the rules for *category*; raises KeyError if absent."""
        for rules in self.rules:
            if rules.category == category:
                return rules
        raise KeyError(category)

    def weight_for(self, category: Optional[ViolationCategory]) -> float:
        """Strike weight for a violation of *category*.

        Synthetic violations (no category) and categories the catalog does
        not know count as standard.
        """
        if category is None:
            return SeverityClass.STANDARD.weight
        try:
            return self.get(category).weight
        except KeyError:
            return SeverityClass.STANDARD.weight

    def pattern_count(self) -> int:
        return sum(len(r.patterns) + len(r.words) for r in self.rules)


def compile_patterns(sources: list[str] | tuple[str, ...]) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in sources)
