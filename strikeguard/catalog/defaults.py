"""Built-in rule sets."""

from __future__ import annotations

from strikeguard.catalog.models import (
    CategoryRules,
    RuleCatalog,
    SeverityClass,
    ViolationCategory,
    WarningLevel,
    compile_patterns,
)

CATALOG_VERSION = "1.2.0"

HARMFUL_PATTERNS = [
    r"kill\s+yourself",
    r"you\s+should\s+die",
    r"go\s+die",
    r"i\s+hate\s+you",
    r"you're\s+ugly",
    r"you're\s+stupid",
    r"you're\s+worthless",
    r"nobody\s+loves\s+you",
    r"you're\s+pathetic",
    r"you're\s+a\s+loser",
]

MISINFORMATION_PATTERNS = [
    r"covid\s+vaccine\s+causes\s+(autism|cancer)",
    r"5g\s+causes\s+(cancer|covid)",
    r"flat\s+earth",
    r"moon\s+landing\s+hoax",
    r"climate\s+change\s+hoax",
    r"vaccines\s+cause\s+autism",
    r"government\s+cover\s+up",
    r"secret\s+society",
    r"illuminati",
    r"deep\s+state",
]

FRAUD_PATTERNS = [
    r"send\s+money",
    r"bitcoin\s+investment",
    r"crypto\s+investment",
    r"get\s+rich\s+quick",
    r"earn\s+money\s+fast",
    r"work\s+from\s+home\s+scam",
    r"lottery\s+winner",
    r"inheritance\s+scam",
    r"prince\s+scam",
    r"bank\s+account\s+details",
    r"credit\s+card\s+number",
    r"social\s+security\s+number",
]

CYBERCRIME_PATTERNS = [
    r"hack\s+account",
    r"password\s+stealing",
    r"phishing\s+link",
    r"malware",
    r"ransomware",
    r"ddos\s+attack",
    r"botnet",
    r"exploit",
    r"bypass\s+security",
    r"crack\s+password",
]

ADULT_CONTENT_PATTERNS = [
    r"send\s+nudes",
    r"\bnudes\b",
    r"\bporn",
    r"\bxxx\b",
    r"sexually\s+explicit",
    r"explicit\s+(photos|pics|videos)",
    r"onlyfans\s+link",
    r"hook\s*up\s+tonight",
]

VIOLENCE_PATTERNS = [
    r"i(\s+will|'ll)\s+kill\s+you",
    r"i(\s+will|'ll)\s+hurt\s+you",
    r"beat\s+you\s+up",
    r"stab\s+(you|him|her|them)",
    r"shoot\s+(you|him|her|them|up)",
    r"bomb\s+threat",
    r"blow\s+up\s+the",
    r"going\s+to\s+attack",
]

WARNING_WORDS = [
    "hate", "kill", "die", "stupid", "ugly", "worthless", "pathetic", "loser", "idiot", "moron",
]


def default_catalog() -> RuleCatalog:
    """Return the built-in catalog."""
    return RuleCatalog(
        name="default",
        version=CATALOG_VERSION,
        rules=(
            CategoryRules(
                category=ViolationCategory.HARMFUL,
                severity=SeverityClass.SEVERE,
                level=WarningLevel.HIGH,
                description="Harmful content detected",
                patterns=compile_patterns(HARMFUL_PATTERNS),
            ),
            CategoryRules(
                category=ViolationCategory.MISINFORMATION,
                severity=SeverityClass.SERIOUS,
                level=WarningLevel.MEDIUM,
                description="Potential misinformation detected",
                patterns=compile_patterns(MISINFORMATION_PATTERNS),
            ),
            CategoryRules(
                category=ViolationCategory.FRAUD,
                severity=SeverityClass.SERIOUS,
                level=WarningLevel.HIGH,
                description="Potential fraudulent activity detected",
                patterns=compile_patterns(FRAUD_PATTERNS),
            ),
            CategoryRules(
                category=ViolationCategory.CYBERCRIME,
                severity=SeverityClass.SEVERE,
                level=WarningLevel.HIGH,
                description="Potential cybercrime detected",
                patterns=compile_patterns(CYBERCRIME_PATTERNS),
            ),
            CategoryRules(
                category=ViolationCategory.ADULT_CONTENT,
                severity=SeverityClass.SEVERE,
                level=WarningLevel.HIGH,
                description="Adult content detected",
                patterns=compile_patterns(ADULT_CONTENT_PATTERNS),
            ),
            CategoryRules(
                category=ViolationCategory.VIOLENCE,
                severity=SeverityClass.SERIOUS,
                level=WarningLevel.HIGH,
                description="Violent content detected",
                patterns=compile_patterns(VIOLENCE_PATTERNS),
            ),
            CategoryRules(
                category=ViolationCategory.WARNING_WORD,
                severity=SeverityClass.STANDARD,
                level=WarningLevel.LOW,
                description="Contains {count} potentially harmful words",
                words=tuple(WARNING_WORDS),
                escalate_at=3,
                escalated_level=WarningLevel.MEDIUM,
            ),
        ),
    )
