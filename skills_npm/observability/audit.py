"""Audit logging interfaces and implementations for skills-npm.

Scanning, linking and cleanup report what they did through an AuditSink.
Components take the sink as an optional constructor argument; passing None
disables auditing.
"""

import json
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any

from skills_npm.models import AuditEvent


class AuditSink(ABC):
    """Abstract interface for audit logging.

    Implementations can write to different backends (files, stdout, memory).
    """

    @abstractmethod
    def log(self, event: AuditEvent) -> None:
        """Record an audit event.

        Args:
            event: The AuditEvent to record.
        """
        pass


class JSONLAuditSink(AuditSink):
    """Appends audit events to a JSON Lines file.

    Example log file content:
        {"ts": "2026-01-01T12:00:00", "kind": "scan", "subject": "/repo", ...}
        {"ts": "2026-01-01T12:00:01", "kind": "link", "subject": "npm-eslint-lint", ...}
    """

    def __init__(self, log_path: Path):
        """Initialize JSONLAuditSink with log file path.

        Args:
            log_path: Path to the JSONL log file. Parent directories are
                     created if they don't exist.
        """
        self.log_path = Path(log_path)
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def log(self, event: AuditEvent) -> None:
        """Append audit event as a JSON line to the log file."""
        json_line = json.dumps(event.to_dict(), separators=(',', ':'))
        with open(self.log_path, 'a', encoding='utf-8') as f:
            f.write(json_line + '\n')


class StdoutAuditSink(AuditSink):
    """Writes audit events to stdout, one JSON object per line."""

    def log(self, event: AuditEvent) -> None:
        """Print audit event as a JSON line to stdout."""
        print(json.dumps(event.to_dict(), separators=(',', ':')))


class MemoryAuditSink(AuditSink):
    """Keeps audit events in a list. Useful for tests and embedding."""

    def __init__(self):
        self.events: list[AuditEvent] = []

    def log(self, event: AuditEvent) -> None:
        self.events.append(event)

    def kinds(self) -> list[str]:
        """Return the kinds of all recorded events, in order."""
        return [event.kind for event in self.events]


def emit(
    sink: AuditSink | None,
    kind: str,
    subject: str,
    path: str | Path | None = None,
    **detail: Any,
) -> None:
    """Build an AuditEvent and hand it to ``sink`` if one is configured."""
    if sink is None:
        return
    sink.log(
        AuditEvent(
            ts=datetime.now(),
            kind=kind,
            subject=subject,
            path=str(path) if path is not None else None,
            detail=detail,
        )
    )
