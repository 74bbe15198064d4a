"""Append-only JSONL event log for run observability."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from quiz_integrity.contracts import RunEvent


class EventLog:
    """JSONL-backed event log for a single check run.

    Usable directly as a pipeline observer: ``checker.run_check(...,
    observers=[log])``.
    """

    _FILENAME = "events.jsonl"

    def __init__(self, log_dir: str | Path, run_id: str) -> None:
        self._dir = Path(log_dir) / run_id
        self._dir.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._dir / self._FILENAME

    def __call__(self, event: dict[str, Any]) -> None:
        payload = {k: v for k, v in event.items() if k != "kind"}
        self.emit(self.make_event(kind=event.get("kind", "unknown"), payload=payload))

    def emit(self, event: RunEvent) -> None:
        """Append a single event as a JSON line."""
        line = json.dumps(event, ensure_ascii=False)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")

    def read_all(self) -> list[RunEvent]:
        """Read all events. Skips corrupt lines, returns [] on missing file."""
        if not self.path.exists():
            return []
        events: list[RunEvent] = []
        try:
            for line in self.path.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if not line:
                    continue
                try:
                    events.append(json.loads(line))
                except json.JSONDecodeError:
                    continue
        except OSError:
            return []
        return events

    @staticmethod
    def make_event(*, kind: str, payload: dict[str, Any] | None = None) -> RunEvent:
        """Factory for creating a RunEvent with timestamp."""
        return RunEvent(
            kind=kind,
            ts=datetime.now(timezone.utc).isoformat(),
            payload=payload or {},
        )
