"""UI components package."""

from .command_bar import render_command_bar
from .execution_panel import render_execution_panel
from .audit_log import render_audit_log
from .debug_panel import render_debug_panel

__all__ = [
    "render_command_bar",
    "render_execution_panel",
    "render_audit_log",
    "render_debug_panel",
]
