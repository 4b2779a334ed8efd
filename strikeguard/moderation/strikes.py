"""Strike weighting for a single scan."""

from __future__ import annotations

from typing import Iterable

from strikeguard.catalog.models import RuleCatalog
from strikeguard.moderation.models import Violation

MAX_STRIKE_PER_SCAN = 3.0


def strike_weight(
    violations: Iterable[Violation],
    catalog: RuleCatalog,
    cap: float = MAX_STRIKE_PER_SCAN,
) -> float:
    """Sum the severity weight of every violation, then cap the total.

    Only meaningful for scans that reached the High level; callers gate on
    that themselves.
    """
    total = sum(catalog.weight_for(v.category) for v in violations)
    return min(total, cap)
