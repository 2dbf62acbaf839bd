"""
Command session - runs the resolve -> preview -> confirm -> execute -> record flow.
"""
import logging
from typing import Any, Optional

from ..ai.resolver import IntentResolver
from ..client.base import SellerPlatform
from ..client.platform import PlatformClient
from ..errors import NoPendingCommandError
from ..models.audit import ExecutionResult, LogEntry
from ..models.command import ParsedCommand
from ..models.preview import PreviewResult
from ..registry import coerce_value, get_schema
from .audit import AuditLog
from .executor import ExecutionEngine
from .preview import DiffPreviewer


logger = logging.getLogger(__name__)


class CommandSession:
    """
    One seller session. Holds at most one command awaiting confirmation and
    owns the session's AuditLog.

    Only confirm() touches platform state. Cancelling, previewing or
    submitting a new command never produces a log entry.
    """

    def __init__(
        self,
        resolver: IntentResolver,
        previewer: DiffPreviewer,
        engine: ExecutionEngine,
        audit: Optional[AuditLog] = None,
    ):
        self.resolver = resolver
        self.previewer = previewer
        self.engine = engine
        self.audit = audit if audit is not None else AuditLog()
        self.pending: Optional[ParsedCommand] = None
        self.raw_input: str = ""

    def submit(self, raw_text: str) -> ParsedCommand:
        """Classify seller text and hold the result for confirmation."""
        command = self.resolver.resolve(raw_text)
        self.pending = command
        self.raw_input = raw_text
        logger.info(f"Pending {command.intent.value} ({command.confidence:.2f})")
        return command

    def _require_pending(self) -> ParsedCommand:
        if self.pending is None:
            raise NoPendingCommandError("No command awaiting confirmation")
        return self.pending

    def update_field(self, name: str, value: Any) -> ParsedCommand:
        """
        Apply a manual correction to the pending command.

        Raises:
            NoPendingCommandError: If nothing is pending
            ValueError: If the field is not defined for the intent or the
                value cannot be coerced to its type
        """
        command = self._require_pending()
        schema = get_schema(command.intent)
        if name not in schema:
            raise ValueError(f"'{name}' is not a field of {command.intent.value}")

        if isinstance(value, str) and not value.strip():
            value = None
        self.pending = command.with_field(name, coerce_value(schema[name], value))
        return self.pending

    def preview(self) -> PreviewResult:
        """Read-only projection of the pending command."""
        return self.previewer.preview(self._require_pending())

    def confirm(self) -> LogEntry:
        """
        Execute the pending command exactly once and record the outcome.

        Returns:
            The LogEntry for this execution attempt
        """
        command = self._require_pending()
        raw_input = self.raw_input
        self.pending = None
        self.raw_input = ""

        try:
            result = self.engine.execute(command)
        except Exception as e:
            logger.exception(f"Execution of {command.intent.value} raised")
            result = ExecutionResult(success=False, message=f"Execution error: {e}")

        return self.audit.record(command, raw_input, result)

    def cancel(self) -> None:
        """Discard the pending command. No side effects, no log entry."""
        if self.pending is not None:
            logger.info(f"Cancelled {self.pending.intent.value}")
        self.pending = None
        self.raw_input = ""


def create_session(platform: Optional[SellerPlatform] = None) -> CommandSession:
    """Wire a session against the configured backend and classifier."""
    platform = platform or PlatformClient()
    return CommandSession(
        resolver=IntentResolver(),
        previewer=DiffPreviewer(platform),
        engine=ExecutionEngine(platform),
    )
