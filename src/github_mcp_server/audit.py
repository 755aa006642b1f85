"""Structured audit logging.

Exactly one event is written per tool invocation. Events never contain the
bearer token or tool output, only the operation, its target and the outcome.
"""

from __future__ import annotations

import json
import logging
import sys
import time
import uuid
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def new_correlation_id() -> str:
    """Generate a random correlation id for traceability."""
    return uuid.uuid4().hex


def _now_rfc3339() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True, slots=True)
class AuditEvent:
    """A single audit event."""

    timestamp: str
    correlation_id: str
    operation: str
    target: str
    outcome: str
    reason: str | None
    duration_ms: int | None


def target_from_args(arguments: dict[str, Any]) -> str:
    """Summarize what a call is about: ``owner/repo``, a username, or ``-``."""
    owner = arguments.get("owner")
    repo = arguments.get("repo")
    if isinstance(owner, str) and isinstance(repo, str) and owner and repo:
        return f"{owner}/{repo}"
    username = arguments.get("username")
    if isinstance(username, str) and username:
        return username
    return "-"


class AuditLogger:
    """Writes audit events as JSONL to stderr and optionally to a rotated file."""

    def __init__(
        self,
        *,
        sink_path: Path | None,
        max_bytes: int = 5 * 1024 * 1024,
        max_backups: int = 2,
    ) -> None:
        """Create an audit logger.

        The file sink is best-effort: it is opened on first write, and I/O failures
        are reported by logging's ``handleError`` without breaking tool execution.
        """
        self._file_handler: RotatingFileHandler | None = None
        if sink_path is not None:
            try:
                sink_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError:
                logger.warning("Audit log directory could not be created; file sink may fail")
            handler = RotatingFileHandler(
                sink_path, maxBytes=max_bytes, backupCount=max_backups, encoding="utf-8", delay=True
            )
            handler.setFormatter(logging.Formatter("%(message)s"))
            self._file_handler = handler

    def write_event(self, event: AuditEvent) -> None:
        """Write an audit event to stderr and, when configured, to the file sink."""
        payload = {k: v for k, v in asdict(event).items() if v is not None}
        line = json.dumps(payload, sort_keys=True, separators=(",", ":"))
        print(line, file=sys.stderr)
        if self._file_handler is not None:
            self._file_handler.handle(logging.makeLogRecord({"msg": line, "levelno": logging.INFO}))

    def close(self) -> None:
        """Release the file sink, if any."""
        if self._file_handler is not None:
            self._file_handler.close()

    def measure_start(self) -> float:
        """Return a monotonic start timestamp for duration measurement."""
        return time.monotonic()

    def measure_duration_ms(self, start: float) -> int:
        return int((time.monotonic() - start) * 1000)


def build_event(
    *,
    correlation_id: str,
    operation: str,
    target: str,
    outcome: str,
    reason: str | None = None,
    duration_ms: int | None = None,
) -> AuditEvent:
    """Construct an audit event."""
    return AuditEvent(
        timestamp=_now_rfc3339(),
        correlation_id=correlation_id,
        operation=operation,
        target=target,
        outcome=outcome,
        reason=reason,
        duration_ms=duration_ms,
    )
