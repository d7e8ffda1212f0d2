"""Audit logging interfaces and implementations for lazy-resources.

This module provides the AuditSink abstract interface for recording catalog
and resolution operations, along with concrete implementations for different
logging backends.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from lazy_resources.models import AuditEvent


class AuditSink(ABC):
    """Abstract interface for audit logging.

    Accessors report two kinds of events through a sink: ``catalog`` once
    when the catalog of an accessor has been enumerated, and ``resolve``
    each time a member is resolved successfully. Failed resolutions are
    raised to the caller and never reported here.
    """

    @abstractmethod
    def log(self, event: AuditEvent) -> None:
        """Record an audit event.

        Args:
            event: The AuditEvent to record.

        Raises:
            Implementation-specific exceptions for logging failures.
        """
        pass


class JSONLAuditSink(AuditSink):
    """Writes audit events to a JSONL (JSON Lines) file.

    Each audit event is serialized as a single JSON line and appended to the
    log file.

    Example log file content:
        {"ts":"2024-01-01T12:00:00","kind":"catalog","member":null,...}
        {"ts":"2024-01-01T12:00:01","kind":"resolve","member":"Greeting",...}
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
    """Prints audit events to stdout as JSON lines."""

    def log(self, event: AuditEvent) -> None:
        print(json.dumps(event.to_dict(), separators=(',', ':')))
