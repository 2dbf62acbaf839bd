"""
Pydantic models for SellerOps.
All data contracts are defined here for strict validation.
"""

from .intent import Intent, IntentMeta, INTENT_META
from .fields import FIELD_MODELS, IntentFields
from .command import ParsedCommand
from .listing import ActiveItem, PlatformOutcome
from .preview import DiffLine, PreviewResult
from .audit import ExecutionResult, ItemLog, LogEntry

__all__ = [
    # Intent
    "Intent",
    "IntentMeta",
    "INTENT_META",
    # Fields
    "FIELD_MODELS",
    "IntentFields",
    # Command
    "ParsedCommand",
    # Listing
    "ActiveItem",
    "PlatformOutcome",
    # Preview
    "DiffLine",
    "PreviewResult",
    # Audit
    "ExecutionResult",
    "ItemLog",
    "LogEntry",
]
