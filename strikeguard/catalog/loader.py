"""Load rule catalogs from YAML.

A catalog file looks like::

    name: community
    version: 2.0.0
    categories:
      - category: fraud
        severity: serious
        level: high
        description: Potential fraudulent activity detected
        patterns:
          - send\\s+money
      - category: warning_word
        severity: standard
        level: low
        escalate_at: 3
        escalated_level: medium
        description: Contains {count} potentially harmful words
        words: [hate, idiot]
"""

from __future__ import annotations

import re
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from strikeguard.catalog.models import (
    CategoryRules,
    RuleCatalog,
    SeverityClass,
    ViolationCategory,
    WarningLevel,
    compile_patterns,
)
from strikeguard.errors import CatalogError


def load_catalog(path: str | Path) -> RuleCatalog:
    """Load a rule catalog from a YAML file."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise CatalogError(f"Cannot read catalog {path}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogError(f"Catalog {path} must contain a mapping")

    rules = tuple(_parse_category(entry) for entry in data.get("categories", []))
    seen: set[ViolationCategory] = set()
    for r in rules:
        if r.category in seen:
            raise CatalogError(f"Category '{r.category.value}' is declared twice")
        seen.add(r.category)

    return RuleCatalog(
        name=data.get("name", "unnamed"),
        version=str(data.get("version", "1.0.0")),
        rules=rules,
    )


def extend_catalog(base: RuleCatalog, additions: list[CategoryRules], version: str | None = None) -> RuleCatalog:
    """Return a new catalog with *additions* merged into *base*.

    Rules for a category already present are appended after its existing
    patterns and words; new categories go at the end.
    """
    merged = list(base.rules)
    for addition in additions:
        for i, existing in enumerate(merged):
            if existing.category == addition.category:
                merged[i] = replace(
                    existing,
                    patterns=existing.patterns + addition.patterns,
                    words=existing.words + tuple(w for w in addition.words if w not in existing.words),
                )
                break
        else:
            merged.append(addition)
    return RuleCatalog(name=base.name, version=version or base.version, rules=tuple(merged))


def _parse_category(entry: Any) -> CategoryRules:
    if not isinstance(entry, dict) or "category" not in entry:
        raise CatalogError(f"Invalid category entry: {entry!r}")
    try:
        category = ViolationCategory(entry["category"])
        severity = SeverityClass(entry.get("severity", "standard"))
        level = WarningLevel(entry.get("level", "high"))
        escalated = entry.get("escalated_level")
        escalated_level = WarningLevel(escalated) if escalated else None
    except ValueError as e:
        raise CatalogError(str(e)) from e

    try:
        patterns = compile_patterns(entry.get("patterns", []) or [])
    except re.error as e:
        raise CatalogError(f"Invalid pattern in category '{category.value}': {e}") from e

    description = str(entry.get("description") or f"{category.value.replace('_', ' ').capitalize()} detected")
    words = tuple(str(w).lower() for w in entry.get("words", []) or [])
    if words:
        # Lexicon descriptions are formatted with the matched word count.
        try:
            description.format(count=0)
        except (KeyError, IndexError, ValueError) as e:
            raise CatalogError(
                f"Description of category '{category.value}' may only use the {{count}} field: {e!r}"
            ) from e

    return CategoryRules(
        category=category,
        severity=severity,
        level=level,
        description=description,
        patterns=patterns,
        words=words,
        escalate_at=int(entry.get("escalate_at", 0)),
        escalated_level=escalated_level,
    )
