"""
Debug panel component - transparency view for developers.
"""
import json
from typing import Optional

import streamlit as st

from ...models.command import ParsedCommand
from ...pipeline.audit import AuditLog


def render_debug_panel(
    command: Optional[ParsedCommand] = None,
    audit: Optional[AuditLog] = None,
):
    """
    Render the debug/transparency panel.
    Shows internal state for debugging and understanding the system.
    """
    st.markdown("---")
    st.markdown("### 🔧 Debug Panel")

    tabs = st.tabs(["Pending Command", "Audit Export"])

    with tabs[0]:
        if command is None:
            st.info("No pending command")
        else:
            st.code(command.model_dump_json(indent=2), language="json")

    with tabs[1]:
        if audit is None or len(audit) == 0:
            st.info("No executions yet")
        else:
            export_json = json.dumps(audit.to_export(), indent=2, ensure_ascii=False)
            st.download_button(
                label="📥 Download session log",
                data=export_json,
                file_name="sellerops_audit.json",
                mime="application/json",
            )
            st.code(export_json, language="json")
