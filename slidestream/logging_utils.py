"""Structured JSONL logging helpers."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def log_event(log_path: Path, event_type: str, payload: Dict[str, Any]) -> None:
    """Append a structured event to a JSONL log."""
    record = {
        "timestamp": _utc_timestamp(),
        "event_type": event_type,
        "payload": payload,
    }
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(record, ensure_ascii=False) + "\n")


class EventLog:
    """Optional JSONL sink bound to one parser instance.

    Without a path every call is a no-op, so the parser can log unconditionally.
    """

    def __init__(self, log_path: Optional[Path] = None) -> None:
        self.log_path = Path(log_path) if log_path is not None else None

    @property
    def enabled(self) -> bool:
        return self.log_path is not None

    def emit(self, event_type: str, **payload: Any) -> None:
        if self.log_path is None:
            return
        log_event(self.log_path, event_type, payload)


def read_events(log_path: Path) -> list[Dict[str, Any]]:
    """Load every record from a JSONL log, oldest first."""
    if not log_path.exists():
        return []
    with log_path.open("r", encoding="utf-8") as handle:
        return [json.loads(line) for line in handle if line.strip()]
