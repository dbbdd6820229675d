"""Data Alchemist Streamlit UI module.

Run the app with: streamlit run app.py
"""

from dataalchemist.ui.state import (
    get_workspace,
    init_session_state,
    is_reset_requested,
    reset_session,
)
from dataalchemist.ui.views import (
    configure_page,
    render_header,
    render_main_content,
    render_sidebar,
)

__all__ = [
    "configure_page",
    "get_workspace",
    "init_session_state",
    "is_reset_requested",
    "render_header",
    "render_main_content",
    "render_sidebar",
    "reset_session",
]
