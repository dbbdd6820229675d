"""Minimal styling for the Data Alchemist Streamlit UI.

Design principles:
- Clean neutral design with white/light background
- Muted slate accent, red/amber only for issue severity
"""

import streamlit as st

from dataalchemist.models import Severity

# Color palette
COLORS = {
    "primary": "#475569",  # Slate-600
    "success": "#059669",  # Emerald-600
    "text": "#1e293b",  # Slate-800
    "text_muted": "#64748b",  # Slate-500
    "border": "#e2e8f0",  # Slate-200
    "surface": "#f8fafc",  # Slate-50
}

SEVERITY_COLORS = {
    Severity.ERROR: "#dc2626",  # Red-600
    Severity.WARNING: "#d97706",  # Amber-600
}


def confidence_label(confidence: float) -> str:
    """Bucket a recommendation confidence for display."""
    if confidence >= 0.8:
        return "high"
    if confidence >= 0.6:
        return "medium"
    return "low"


def severity_badge(severity: Severity) -> str:
    """Inline HTML badge for an issue severity."""
    color = SEVERITY_COLORS[severity]
    return (
        f'<span style="color: {color}; border: 1px solid {color}; border-radius: 4px; '
        f'padding: 0 6px; font-size: 0.75rem;">{severity.value.upper()}</span>'
    )


def apply_custom_css() -> None:
    """Apply minimal custom CSS."""
    st.markdown(
        f"""
        <style>
        .block-container {{ padding-top: 2rem; max-width: 1200px; }}
        h1, h2, h3 {{ color: {COLORS['text']}; }}
        [data-testid="stMetricValue"] {{ font-size: 1.5rem; }}
        [data-testid="stExpander"] {{ border-color: {COLORS['border']}; }}
        </style>
        """,
        unsafe_allow_html=True,
    )
