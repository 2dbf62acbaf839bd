"""
Execution panel component - fields, summary, preview diff and confirm/cancel.
"""
import html
from typing import Optional

import streamlit as st

from ...models.command import ParsedCommand
from ...models.preview import PreviewResult
from ...pipeline.summary import generate_summary
from ...registry import get_schema


def render_execution_panel(
    command: ParsedCommand,
    preview: Optional[PreviewResult],
    nonce: int = 0,
) -> Optional[str]:
    """
    Render the pending command.

    Args:
        command: The pending command
        preview: Preview for the command, if one was computed
        nonce: Identifies the submitted command; scopes the field widgets

    Returns:
        "confirm", "cancel", "refresh" or None
    """
    if command.is_unknown:
        st.error(
            "**Intent not recognized.** Try being more specific, e.g. "
            "\"Update listing 12345 price to $50\" or \"End listing 12345, out of stock\"."
        )
        return "cancel" if st.button("Try again") else None

    meta = command.meta
    badge_class = "intent-badge destructive" if meta.destructive else "intent-badge"
    st.markdown(
        f'<span class="{badge_class}">{meta.category}</span>'
        f"<strong>{meta.label}</strong> "
        f"<small>{command.confidence * 100:.0f}% conf</small>",
        unsafe_allow_html=True,
    )
    if meta.destructive:
        st.caption("⚠️ Destructive action, confirm required")
    st.markdown(generate_summary(command))

    render_field_editors(command, nonce)

    if preview is not None:
        render_preview(preview)

    col1, col2, col3 = st.columns([1, 1, 1])
    with col1:
        if st.button("Cancel", use_container_width=True):
            return "cancel"
    with col2:
        if st.button("Refresh preview", use_container_width=True):
            return "refresh"
    with col3:
        label = "Confirm & Execute" if meta.destructive else "Execute Command"
        if st.button(label, type="primary", use_container_width=True):
            return "confirm"
    return None


def editor_rows(command: ParsedCommand) -> list[tuple[str, str]]:
    """(field name, current text) for every schema field, including optional ones the classifier omitted."""
    rows = []
    for name in get_schema(command.intent):
        value = command.fields.get(name)
        rows.append((name, "" if value is None else str(value)))
    return rows


def editor_key(nonce: int, name: str) -> str:
    """Widget key scoped to one submitted command."""
    return f"field_{nonce}_{name}"


def render_field_editors(command: ParsedCommand, nonce: int = 0):
    """Editable text inputs for every field; edits land in session_state['field_edits']."""
    edits = {}
    cols = st.columns(2)
    for i, (name, current) in enumerate(editor_rows(command)):
        with cols[i % 2]:
            new_value = st.text_input(
                name.replace("_", " "),
                value=current,
                key=editor_key(nonce, name),
            )
            if new_value != current:
                edits[name] = new_value
    st.session_state.field_edits = edits


def render_preview(preview: PreviewResult):
    """Render the preview diff."""
    st.markdown("##### Preview Diff")
    if preview.loading:
        st.caption("Fetching listing data...")
        return
    if preview.error:
        st.warning(f"Preview unavailable: {preview.error}")
        return
    if not preview.lines:
        st.caption("No preview available for this command.")
        return

    rows = []
    for line in preview.lines:
        right = ""
        if line.before and line.after:
            right = (
                f'<span class="before">{html.escape(line.before)}</span> → '
                f'<span class="after">{html.escape(line.after)}</span>'
            )
        elif line.warning:
            right = f'<span class="warning">⚠ {html.escape(line.warning)}</span>'
        elif line.info:
            right = f'<span class="info">{html.escape(line.info)}</span>'
        rows.append(f'<div class="diff-line"><span>{html.escape(line.label)}</span><span>{right}</span></div>')
    st.markdown("".join(rows), unsafe_allow_html=True)
