"""
SellerOps Control Plane - natural-language commands for marketplace sellers.

Streamlit UI: command bar, execution panel with preview diff, and the
session's console output.
"""
import sys
from pathlib import Path

# Add project root to path for imports when running via streamlit
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import logging

import streamlit as st

from sellerops.config import get_config
from sellerops.pipeline import create_session

from sellerops.ui.styles import inject_custom_css
from sellerops.ui.components.command_bar import render_command_bar
from sellerops.ui.components.execution_panel import render_execution_panel
from sellerops.ui.components.audit_log import render_audit_log
from sellerops.ui.components.debug_panel import render_debug_panel


logger = logging.getLogger(__name__)


def init_session_state():
    """Initialize session state variables."""
    defaults = {
        "session": None,
        "preview": None,
        "field_edits": {},
        "command_nonce": 0,
        "last_entry": None,
        "show_debug": False,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def main():
    """Main application entry point."""
    config = get_config()

    st.set_page_config(
        page_title=config.ui.page_title,
        page_icon=config.ui.page_icon,
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    inject_custom_css()
    init_session_state()

    if st.session_state.session is None:
        st.session_state.session = create_session()

    render_header()
    render_command_step()

    session = st.session_state.session
    if session.pending is not None:
        render_pending_step()

    render_last_result()
    render_audit_log(session.audit.list())

    if config.enable_debug_panel and st.session_state.show_debug:
        render_debug_panel(command=session.pending, audit=session.audit)


def render_header():
    """Render the app header."""
    col1, col2, col3 = st.columns([1, 2, 1])

    with col2:
        st.markdown(f"""
        <div class="app-header">
            <h1>⚡ {get_config().ui.page_title}</h1>
            <p class="subtitle">Tell it what to change. Review the diff. Confirm.</p>
        </div>
        """, unsafe_allow_html=True)

    with col3:
        if get_config().enable_debug_panel:
            st.session_state.show_debug = st.checkbox(
                "🔧 Debug",
                value=st.session_state.show_debug,
                key="debug_toggle"
            )


def render_command_step():
    """Classify a new command and hold it for confirmation."""
    session = st.session_state.session
    text, submitted = render_command_bar()

    if not submitted:
        return
    if not text.strip():
        st.warning("Type a command first")
        return

    with st.spinner("Parsing intent..."):
        session.submit(text)
    st.session_state.command_nonce += 1
    st.session_state.field_edits = {}
    refresh_preview()
    st.session_state.last_entry = None
    st.rerun()


def refresh_preview():
    """Recompute the preview for the pending command."""
    session = st.session_state.session
    if session.pending is None or not get_config().enable_preview:
        st.session_state.preview = None
        return
    with st.spinner("Fetching listing data..."):
        st.session_state.preview = session.preview()


def apply_field_edits() -> bool:
    """Push edited field values into the pending command. Returns False on a bad value."""
    session = st.session_state.session
    for name, value in st.session_state.field_edits.items():
        try:
            session.update_field(name, value)
        except ValueError as e:
            st.error(f"Invalid value for {name}: {e}")
            return False
    st.session_state.field_edits = {}
    return True


def render_pending_step():
    """Render the execution panel and act on its buttons."""
    session = st.session_state.session
    action = render_execution_panel(
        session.pending,
        st.session_state.preview,
        nonce=st.session_state.command_nonce,
    )

    if action == "cancel":
        session.cancel()
        st.session_state.preview = None
        st.rerun()
    elif action == "refresh":
        if apply_field_edits():
            refresh_preview()
            st.rerun()
    elif action == "confirm":
        if not apply_field_edits():
            return
        with st.spinner("Executing..."):
            entry = session.confirm()
        st.session_state.preview = None
        st.session_state.last_entry = entry
        st.rerun()


def render_last_result():
    """Banner for the most recent execution."""
    entry = st.session_state.last_entry
    if entry is None:
        return
    if entry.status == "success":
        st.success(entry.details)
    else:
        st.error(entry.details)


if __name__ == "__main__":
    main()
