"""
Command bar component.
"""
import streamlit as st


EXAMPLES = [
    "Update listing 12345 price to $19.99",
    "Decrease all used listings by 10%",
    "End listing 12345, out of stock",
    "Send 15% off to watchers on listing 98765",
    "End all listings older than 90 days priced below $10",
]


def render_command_bar() -> tuple[str, bool]:
    """
    Render the command input.

    Returns:
        Tuple of (command_text, submitted)
    """
    with st.form("command_form", clear_on_submit=False):
        text = st.text_input(
            "Command",
            placeholder="e.g. 'Decrease all prices by 5%'",
            key="command_text",
            label_visibility="collapsed",
        )
        submitted = st.form_submit_button("Run", type="primary", use_container_width=True)

    with st.expander("Examples", expanded=False):
        for example in EXAMPLES:
            st.code(example, language=None)

    return text, submitted
