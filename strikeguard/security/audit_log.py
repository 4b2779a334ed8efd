"""Audit trail for moderation decisions.

Each strike, warning and expiry sweep is appended as one JSON line to a
daily file under ``~/.strikeguard/audit_logs/``, so the reasoning behind
every account action can be reviewed after the fact.
"""

from __future__ import annotations

import csv
import io
import json
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, Optional

from strikeguard.errors import StoreError

SYSTEM_ACTOR = "system"

# Detail keys flattened into CSV columns, in order.
CSV_DETAIL_COLUMNS = ("warning_level", "strike_weight", "action_taken")


@dataclass
class AuditEvent:
    """One moderation action taken against a user account."""

    id: str
    timestamp: str
    action: str
    user_id: str
    actor: str = SYSTEM_ACTOR
    details: dict[str, Any] = field(default_factory=dict)


class AuditLogger:
    """Append-only JSONL audit log, one file per UTC day."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = Path(base_dir) if base_dir else Path.home() / ".strikeguard" / "audit_logs"
        self._base_dir.mkdir(parents=True, exist_ok=True)

    def _day_file(self, when: datetime) -> Path:
        return self._base_dir / f"{when:%Y-%m-%d}.jsonl"

    def _iter_events(self) -> Iterator[AuditEvent]:
        for path in sorted(self._base_dir.glob("*.jsonl")):
            with path.open(encoding="utf-8") as fh:
                for lineno, line in enumerate(fh, 1):
                    if not line.strip():
                        continue
                    try:
                        yield AuditEvent(**json.loads(line))
                    except (ValueError, TypeError) as e:
                        raise StoreError(f"Unreadable audit entry at {path.name}:{lineno}: {e}") from e

    def record(
        self,
        action: str,
        user_id: str,
        details: Optional[dict[str, Any]] = None,
        actor: str = SYSTEM_ACTOR,
    ) -> AuditEvent:
        """Append an event for ``user_id`` and return it."""
        now = datetime.now(timezone.utc)
        event = AuditEvent(
            id=uuid.uuid4().hex[:16],
            timestamp=now.isoformat(),
            action=action,
            user_id=user_id,
            actor=actor,
            details=details or {},
        )
        try:
            with self._day_file(now).open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(asdict(event)) + "\n")
        except OSError as e:
            raise StoreError(f"Cannot write audit log: {e}") from e
        return event

    def events(
        self,
        *,
        user_id: Optional[str] = None,
        action: Optional[str] = None,
        actor: Optional[str] = None,
        limit: int = 200,
    ) -> list[AuditEvent]:
        """Return matching events, newest first."""
        matched = [
            e
            for e in self._iter_events()
            if (user_id is None or e.user_id == user_id)
            and (action is None or e.action == action)
            and (actor is None or e.actor == actor)
        ]
        matched.sort(key=lambda e: e.timestamp, reverse=True)
        return matched[:limit]

    def export(self, fmt: str = "json", **filters: Any) -> str:
        """Render matching events as ``json`` or ``csv``."""
        matched = self.events(**filters)
        if fmt == "json":
            return json.dumps([asdict(e) for e in matched], indent=2)
        if fmt != "csv":
            raise ValueError(f"Unsupported export format: {fmt}")

        buf = io.StringIO()
        writer = csv.writer(buf)
        writer.writerow(["id", "timestamp", "actor", "action", "user_id", *CSV_DETAIL_COLUMNS])
        for e in matched:
            writer.writerow([e.id, e.timestamp, e.actor, e.action, e.user_id, *(e.details.get(k, "") for k in CSV_DETAIL_COLUMNS)])
        return buf.getvalue()
