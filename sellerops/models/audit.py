"""
Execution and audit models - per-item outcomes, execution results and log entries.
"""
import uuid
from datetime import datetime, timezone
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .intent import Intent


Value = Union[float, str, None]

LogStatus = Literal["success", "failed", "pending", "requires_confirmation"]

BulkOutcome = Literal["fully_succeeded", "partially_succeeded", "fully_failed"]


class ItemLog(BaseModel):
    """Outcome for one target of a single or bulk execution."""
    model_config = ConfigDict(frozen=True)

    item_id: str
    title: str
    old_value: Value = None
    new_value: Value = None
    success: bool
    error: Optional[str] = None


class ExecutionResult(BaseModel):
    """What the execution engine returns for a confirmed command."""
    success: bool
    message: str
    item_logs: Optional[list[ItemLog]] = None

    @property
    def succeeded(self) -> int:
        return sum(1 for log in self.item_logs or [] if log.success)

    @property
    def failed(self) -> int:
        return sum(1 for log in self.item_logs or [] if not log.success)

    @property
    def total(self) -> int:
        return len(self.item_logs or [])

    @property
    def outcome(self) -> Optional[BulkOutcome]:
        """Bulk outcome classification, None when there are no item logs."""
        if not self.item_logs:
            return None
        if self.failed == 0:
            return "fully_succeeded"
        if self.succeeded == 0:
            return "fully_failed"
        return "partially_succeeded"


class LogEntry(BaseModel):
    """Immutable audit record of one confirmed execution attempt."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    raw_input: str
    intent: Intent
    confidence: float
    status: LogStatus
    details: str
    item_logs: Optional[tuple[ItemLog, ...]] = None
