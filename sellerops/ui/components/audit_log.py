"""
Audit log component - console-style list of executed commands.
"""
import html
from datetime import datetime

import streamlit as st

from ...models.audit import LogEntry


STATUS_ICONS = {
    "success": "✅",
    "failed": "❌",
    "pending": "⏳",
    "requires_confirmation": "⚠️",
}


def render_audit_log(entries: list[LogEntry]):
    """
    Render executed commands, most recent first.

    Args:
        entries: Log entries as returned by AuditLog.list()
    """
    if not entries:
        return

    st.markdown("### Console Output")
    for entry in entries:
        render_log_entry(entry)


def render_log_entry(entry: LogEntry):
    """Render a single log entry with its per-item detail."""
    icon = STATUS_ICONS.get(entry.status, "")
    time_str = datetime.fromisoformat(entry.timestamp).strftime("%H:%M:%S")
    st.markdown(
        f'<div class="log-entry {entry.status}">'
        f"{icon} <strong>{entry.intent.value}</strong> <small>{time_str}</small><br/>"
        f"// {html.escape(entry.raw_input)}<br/>"
        f"{html.escape(entry.details)}"
        f"</div>",
        unsafe_allow_html=True,
    )

    if entry.item_logs:
        with st.expander(f"{len(entry.item_logs)} items"):
            st.dataframe(
                [
                    {
                        "item": log.item_id,
                        "title": log.title,
                        "before": log.old_value,
                        "after": log.new_value,
                        "ok": log.success,
                        "error": log.error or "",
                    }
                    for log in entry.item_logs
                ],
                use_container_width=True,
            )
