"""Pipeline modules for command preview, execution and audit."""

from .filter import TargetFilter
from .preview import DiffPreviewer
from .executor import ExecutionEngine
from .audit import AuditLog
from .summary import generate_summary
from .session import CommandSession, create_session

__all__ = [
    "TargetFilter",
    "DiffPreviewer",
    "ExecutionEngine",
    "AuditLog",
    "generate_summary",
    "CommandSession",
    "create_session",
]
