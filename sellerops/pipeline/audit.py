"""
Audit recorder - append-only, session-scoped log of confirmed executions.
"""
import logging
import threading
from collections import Counter
from datetime import datetime, timezone
from typing import Any

from ..models.audit import ExecutionResult, LogEntry
from ..models.command import ParsedCommand


logger = logging.getLogger(__name__)


class AuditLog:
    """
    Holds one LogEntry per confirmed execution attempt for the lifetime of a
    session. Entries are frozen once created; nothing is ever rewritten,
    merged or deduplicated.
    """

    def __init__(self):
        self._entries: list[LogEntry] = []
        self._lock = threading.Lock()

    def record(
        self,
        command: ParsedCommand,
        raw_input: str,
        result: ExecutionResult,
    ) -> LogEntry:
        """
        Append a record of a confirmed execution.

        Args:
            command: The command as it was executed
            raw_input: The seller's original text
            result: What the execution engine returned

        Returns:
            The new LogEntry
        """
        entry = LogEntry(
            raw_input=raw_input,
            intent=command.intent,
            confidence=command.confidence,
            status="success" if result.success else "failed",
            details=result.message,
            item_logs=tuple(result.item_logs) if result.item_logs is not None else None,
        )
        with self._lock:
            self._entries.append(entry)
        logger.info(f"Audit {entry.id}: {entry.intent.value} {entry.status}")
        return entry

    def list(self) -> list[LogEntry]:
        """All entries, most recent first."""
        with self._lock:
            return list(reversed(self._entries))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def summary(self) -> dict[str, int]:
        """Entry counts by status."""
        with self._lock:
            entries = list(self._entries)
        counts = Counter(entry.status for entry in entries)
        return {"total": len(entries), **counts}

    def to_export(self) -> dict[str, Any]:
        """JSON-serializable snapshot of the session log."""
        return {
            "exported_at": datetime.now(timezone.utc).isoformat(),
            "summary": self.summary(),
            "entries": [entry.model_dump(mode="json") for entry in self.list()],
        }
