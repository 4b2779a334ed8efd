"""Rule catalog: data-driven detection rules grouped by violation category."""

from strikeguard.catalog.defaults import default_catalog
from strikeguard.catalog.loader import extend_catalog, load_catalog
from strikeguard.catalog.models import (
    CategoryRules,
    RuleCatalog,
    SeverityClass,
    ViolationCategory,
    WarningLevel,
)

__all__ = [
    "CategoryRules",
    "RuleCatalog",
    "SeverityClass",
    "ViolationCategory",
    "WarningLevel",
    "default_catalog",
    "extend_catalog",
    "load_catalog",
]
