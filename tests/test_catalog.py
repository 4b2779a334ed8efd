"""Tests for the rule catalog."""

import tempfile
from pathlib import Path

import pytest
import yaml

from strikeguard.catalog import (
    CategoryRules,
    RuleCatalog,
    SeverityClass,
    ViolationCategory,
    WarningLevel,
    default_catalog,
    extend_catalog,
    load_catalog,
)
from strikeguard.catalog.models import compile_patterns
from strikeguard.errors import CatalogError


def _write_yaml(data: dict) -> str:
    f = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False)
    yaml.dump(data, f)
    f.close()
    return f.name


def test_default_catalog_has_every_category():
    catalog = default_catalog()
    assert set(catalog.categories()) == set(ViolationCategory)


def test_severity_weights():
    catalog = default_catalog()
    assert catalog.weight_for(ViolationCategory.HARMFUL) == 2.0
    assert catalog.weight_for(ViolationCategory.CYBERCRIME) == 2.0
    assert catalog.weight_for(ViolationCategory.ADULT_CONTENT) == 2.0
    assert catalog.weight_for(ViolationCategory.FRAUD) == 1.5
    assert catalog.weight_for(ViolationCategory.VIOLENCE) == 1.5
    assert catalog.weight_for(ViolationCategory.MISINFORMATION) == 1.5
    assert catalog.weight_for(ViolationCategory.WARNING_WORD) == 1.0
    assert catalog.weight_for(None) == 1.0


def test_get_returns_ordered_patterns():
    rules = default_catalog().get(ViolationCategory.HARMFUL)
    assert rules.patterns[0].pattern == r"kill\s+yourself"
    assert rules.severity == SeverityClass.SEVERE
    assert rules.level == WarningLevel.HIGH


def test_get_unknown_category_raises():
    trimmed = RuleCatalog(name="x", rules=default_catalog().rules[:1])
    with pytest.raises(KeyError):
        trimmed.get(ViolationCategory.FRAUD)


def test_warning_level_escalate_never_downgrades():
    assert WarningLevel.HIGH.escalate(WarningLevel.LOW) == WarningLevel.HIGH
    assert WarningLevel.LOW.escalate(WarningLevel.MEDIUM) == WarningLevel.MEDIUM
    assert WarningLevel.NONE.escalate(WarningLevel.NONE) == WarningLevel.NONE


def test_load_catalog_from_yaml():
    path = _write_yaml(
        {
            "name": "community",
            "version": "2.0.0",
            "categories": [
                {
                    "category": "fraud",
                    "severity": "serious",
                    "level": "high",
                    "description": "Scam detected",
                    "patterns": [r"wire\s+transfer"],
                },
                {
                    "category": "warning_word",
                    "words": ["Jerk", "clown"],
                    "level": "low",
                    "escalate_at": 2,
                    "escalated_level": "medium",
                },
            ],
        }
    )
    catalog = load_catalog(path)
    assert catalog.name == "community"
    assert catalog.version == "2.0.0"
    fraud = catalog.get(ViolationCategory.FRAUD)
    assert fraud.description == "Scam detected"
    assert fraud.patterns[0].search("WIRE  TRANSFER now")
    words = catalog.get(ViolationCategory.WARNING_WORD)
    assert words.words == ("jerk", "clown")
    assert words.escalated_level == WarningLevel.MEDIUM
    assert words.severity == SeverityClass.STANDARD


def test_load_catalog_rejects_bad_regex():
    path = _write_yaml({"categories": [{"category": "fraud", "patterns": ["(unclosed"]}]})
    with pytest.raises(CatalogError):
        load_catalog(path)


def test_load_catalog_rejects_unknown_category():
    path = _write_yaml({"categories": [{"category": "gossip", "patterns": ["tea"]}]})
    with pytest.raises(CatalogError):
        load_catalog(path)


def test_load_catalog_rejects_duplicate_category():
    path = _write_yaml(
        {"categories": [{"category": "fraud", "patterns": ["a"]}, {"category": "fraud", "patterns": ["b"]}]}
    )
    with pytest.raises(CatalogError):
        load_catalog(path)


def test_load_catalog_missing_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(CatalogError):
            load_catalog(Path(tmpdir) / "missing.yaml")


def test_extend_catalog_appends_rules():
    base = default_catalog()
    extra = CategoryRules(
        category=ViolationCategory.FRAUD,
        severity=SeverityClass.SERIOUS,
        level=WarningLevel.HIGH,
        description="ignored",
        patterns=compile_patterns([r"gift\s+card\s+code"]),
    )
    extended = extend_catalog(base, [extra], version="1.3.0")
    fraud = extended.get(ViolationCategory.FRAUD)
    assert len(fraud.patterns) == len(base.get(ViolationCategory.FRAUD).patterns) + 1
    assert fraud.description == "Potential fraudulent activity detected"
    assert extended.version == "1.3.0"
    # The base catalog is untouched.
    assert len(base.get(ViolationCategory.FRAUD).patterns) == 12


def test_load_catalog_rejects_unknown_description_field():
    path = _write_yaml(
        {"categories": [{"category": "warning_word", "description": "Contains {n} words", "words": ["idiot"]}]}
    )
    with pytest.raises(CatalogError, match="count"):
        load_catalog(path)


def test_load_catalog_accepts_count_description():
    path = _write_yaml(
        {"categories": [{"category": "warning_word", "description": "Contains {count} rude words", "words": ["idiot"]}]}
    )
    words = load_catalog(path).get(ViolationCategory.WARNING_WORD)
    assert words.description.format(count=2) == "Contains 2 rude words"
