"""
Custom CSS styles for the SellerOps control plane.
Dark console theme.
"""
import streamlit as st


# Color palette
COLORS = {
    "primary": "#3B82F6",
    "primary_hover": "#2563EB",
    "accent": "#F59E0B",
    "background": "#0A0E17",
    "surface": "#111827",
    "surface_hover": "#1F2937",
    "text": "#E5E7EB",
    "text_muted": "#6B7280",
    "success": "#10B981",
    "warning": "#F59E0B",
    "error": "#EF4444",
    "border": "#1F2937",
}


def inject_custom_css():
    """Inject custom CSS into the Streamlit app."""
    st.markdown(f"""
    <style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&family=JetBrains+Mono&display=swap');

    :root {{
        --primary: {COLORS['primary']};
        --accent: {COLORS['accent']};
        --bg: {COLORS['background']};
        --surface: {COLORS['surface']};
        --text: {COLORS['text']};
        --text-muted: {COLORS['text_muted']};
        --success: {COLORS['success']};
        --error: {COLORS['error']};
        --border: {COLORS['border']};
    }}

    .stApp {{
        font-family: 'Inter', -apple-system, sans-serif;
        background: var(--bg);
    }}

    .app-header {{
        text-align: center;
        padding: 1.5rem 0 1rem;
    }}

    .app-header h1 {{
        font-size: 2rem;
        font-weight: 700;
        color: var(--text);
    }}

    .intent-badge {{
        display: inline-block;
        font-family: 'JetBrains Mono', monospace;
        font-size: 0.7rem;
        text-transform: uppercase;
        padding: 0.2rem 0.5rem;
        border: 1px solid var(--primary);
        border-radius: 4px;
        color: var(--primary);
        margin-right: 0.5rem;
    }}

    .intent-badge.destructive {{
        border-color: var(--error);
        color: var(--error);
    }}

    .diff-line {{
        font-family: 'JetBrains Mono', monospace;
        font-size: 0.8rem;
        padding: 0.4rem 0.75rem;
        border-bottom: 1px solid var(--border);
        display: flex;
        justify-content: space-between;
    }}

    .diff-line .before {{
        color: var(--text-muted);
        text-decoration: line-through;
    }}

    .diff-line .after {{
        color: var(--success);
        font-weight: 700;
    }}

    .diff-line .warning {{
        color: var(--error);
    }}

    .diff-line .info {{
        color: var(--text-muted);
    }}

    .log-entry {{
        font-family: 'JetBrains Mono', monospace;
        font-size: 0.75rem;
        padding: 0.5rem;
        border-left: 2px solid var(--border);
        margin-bottom: 0.5rem;
    }}

    .log-entry.success {{ border-left-color: var(--success); }}
    .log-entry.failed {{ border-left-color: var(--error); }}
    </style>
    """, unsafe_allow_html=True)
