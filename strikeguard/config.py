"""Engine settings and the published community guidelines.

Settings come from ``~/.strikeguard/settings.yaml`` when present, then from
environment variables.  Every numeric policy value the engine applies lives
here so it can be audited in one place.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from strikeguard.errors import StrikeguardError
from strikeguard.moderation.escalation import EscalationThresholds
from strikeguard.moderation.expiry import ExpiryWindows

DEFAULT_MAX_CONTENT_LENGTH = 20_000
DEFAULT_STRIKE_CAP = 3.0
DEFAULT_RECIDIVISM_THRESHOLD = 3


def default_data_dir() -> Path:
    env = os.getenv("STRIKEGUARD_HOME")
    return Path(env) if env else Path.home() / ".strikeguard"


@dataclass
class Settings:
    """Runtime configuration for the moderation engine."""

    data_dir: Path = field(default_factory=default_data_dir)
    log_level: str = "INFO"
    max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH
    strike_cap: float = DEFAULT_STRIKE_CAP
    recidivism_threshold: int = DEFAULT_RECIDIVISM_THRESHOLD
    thresholds: EscalationThresholds = field(default_factory=EscalationThresholds)
    windows: ExpiryWindows = field(default_factory=ExpiryWindows)
    catalog_path: Optional[str] = None

    @property
    def users_dir(self) -> Path:
        return self.data_dir / "users"

    @property
    def audit_dir(self) -> Path:
        return self.data_dir / "audit_logs"


def load_settings(path: str | Path | None = None, data_dir: str | Path | None = None) -> Settings:
    """Build settings from an optional YAML file plus environment overrides.

    An explicit ``data_dir`` is where ``settings.yaml`` is looked up and wins
    over both the file and ``STRIKEGUARD_HOME``.
    """
    settings = Settings()
    if data_dir is not None:
        settings.data_dir = Path(data_dir).expanduser()

    if path is None:
        candidate = settings.data_dir / "settings.yaml"
        path = candidate if candidate.exists() else None

    if path is not None:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise StrikeguardError(f"Settings file {path} must contain a mapping")
        _apply_file(settings, data)

    _apply_env(settings)
    if data_dir is not None:
        settings.data_dir = Path(data_dir).expanduser()
    return settings


def _apply_file(settings: Settings, data: dict[str, Any]) -> None:
    if "data_dir" in data:
        settings.data_dir = Path(data["data_dir"]).expanduser()
    if "log_level" in data:
        settings.log_level = str(data["log_level"])
    if "max_content_length" in data:
        settings.max_content_length = int(data["max_content_length"])
    if "strike_cap" in data:
        settings.strike_cap = float(data["strike_cap"])
    if "recidivism_threshold" in data:
        settings.recidivism_threshold = int(data["recidivism_threshold"])
    if "catalog" in data:
        settings.catalog_path = str(data["catalog"])

    thresholds = data.get("thresholds") or {}
    settings.thresholds = EscalationThresholds(
        warning=float(thresholds.get("warning", settings.thresholds.warning)),
        restriction=float(thresholds.get("restriction", settings.thresholds.restriction)),
        suspension=float(thresholds.get("suspension", settings.thresholds.suspension)),
    )

    expiry = data.get("expiry_days") or {}
    settings.windows = ExpiryWindows(
        restriction_days=int(expiry.get("restriction", settings.windows.restriction_days)),
        suspension_days=int(expiry.get("suspension", settings.windows.suspension_days)),
    )


def _apply_env(settings: Settings) -> None:
    if os.getenv("STRIKEGUARD_HOME"):
        settings.data_dir = Path(os.environ["STRIKEGUARD_HOME"]).expanduser()
    if os.getenv("STRIKEGUARD_LOG_LEVEL"):
        settings.log_level = os.environ["STRIKEGUARD_LOG_LEVEL"]
    if os.getenv("STRIKEGUARD_MAX_CONTENT_LENGTH"):
        settings.max_content_length = int(os.environ["STRIKEGUARD_MAX_CONTENT_LENGTH"])


# ---------------------------------------------------------------------------
# Community guidelines
# ---------------------------------------------------------------------------

GUIDELINES: dict[str, Any] = {
    "title": "Community Guidelines",
    "rules": [
        "Be respectful and kind to others",
        "No hate speech or harassment",
        "No threats or violent content",
        "No spreading of misinformation",
        "No fraudulent activities or scams",
        "No cybercrime or hacking attempts",
        "No sexually explicit content",
        "Keep it fun and lighthearted",
        "Report inappropriate content",
        "Respect different opinions",
        "No personal attacks",
        "Use shade and sarcasm responsibly",
    ],
    "strike_points": {
        "standard": "Standard violations: 1 strike point",
        "serious": "Serious violations (misinformation, fraud, violence): 1.5 strike points",
        "severe": "Severe violations (harmful content, cybercrime, adult content): 2 strike points",
        "cap": "No single post adds more than 3 strike points",
    },
    "consequences": [
        "3+ points: Warning and educational resources",
        "6+ points: Temporary feature restrictions for 3 days",
        "9+ points: Account suspension for 7 days",
    ],
    "appeals": (
        "If you believe a strike was issued in error, contact support. "
        "Appeals are reviewed manually."
    ),
}


def get_guidelines() -> dict[str, Any]:
    """Return a copy of the published guidelines."""
    return {
        key: (list(value) if isinstance(value, list) else dict(value) if isinstance(value, dict) else value)
        for key, value in GUIDELINES.items()
    }
