"""Data Alchemist - validation and rule configuration for resource-allocation data.

Main entry point. Run with: streamlit run app.py
"""

import streamlit as st

from dataalchemist.config import settings
from dataalchemist.logging_config import setup_logging
from dataalchemist.ui import (
    configure_page,
    init_session_state,
    is_reset_requested,
    render_header,
    render_main_content,
    render_sidebar,
    reset_session,
)


def main() -> None:
    """Main application entry point."""
    setup_logging(settings.log_level)

    # Must be the first Streamlit call
    configure_page()

    init_session_state()

    if is_reset_requested():
        reset_session()
        st.rerun()

    render_header()
    render_sidebar()
    render_main_content()


if __name__ == "__main__":
    main()
