"""Session state management for the Data Alchemist Streamlit UI.

Centralizes all st.session_state access. The domain state lives in a single
Workspace; the remaining keys are UI bookkeeping.
"""

import logging
from typing import Any

import streamlit as st

from dataalchemist.analysis import QueryResult
from dataalchemist.models import EntityType
from dataalchemist.workspace import Workspace

logger = logging.getLogger(__name__)

# Session state keys with their defaults (callables are factories)
_STATE_DEFAULTS: dict[str, Any] = {
    "workspace": Workspace,
    # {entity_type value: {"name": ..., "size": ...}} prevents reprocessing on rerun
    "last_uploaded_files": dict,
    "query_result": None,
    "rule_text_feedback": None,
    # Error from a button callback, shown once on the next run
    "action_message": None,
    # Incrementing clears the upload widgets
    "file_upload_key_counter": 0,
    "reset_requested": False,
}


def init_session_state() -> None:
    """Initialize session state with default values if not already set."""
    for key, default in _STATE_DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = default() if callable(default) else default
    logger.debug("Session state initialized")


# --- Workspace ---


def get_workspace() -> Workspace:
    workspace = st.session_state.get("workspace")
    if workspace is None:
        workspace = Workspace()
        st.session_state.workspace = workspace
    return workspace


# --- File Upload Tracking ---


def is_file_already_processed(entity_type: EntityType, name: str, size: int) -> bool:
    """Check if the same file was already loaded for this entity type."""
    last = st.session_state.get("last_uploaded_files", {}).get(entity_type.value)
    return last is not None and last["name"] == name and last["size"] == size


def set_last_uploaded_file(entity_type: EntityType, name: str, size: int) -> None:
    files = st.session_state.get("last_uploaded_files", {})
    files[entity_type.value] = {"name": name, "size": size}
    st.session_state.last_uploaded_files = files


def get_file_upload_key() -> int:
    return st.session_state.get("file_upload_key_counter", 0)


# --- Query ---


def get_query_result() -> QueryResult | None:
    return st.session_state.get("query_result")


def set_query_result(result: QueryResult | None) -> None:
    st.session_state.query_result = result


# --- Natural-language rule feedback ---


def get_rule_text_feedback() -> tuple[str, str] | None:
    """(level, message) from the last natural-language rule attempt."""
    return st.session_state.get("rule_text_feedback")


def set_rule_text_feedback(level: str, message: str) -> None:
    st.session_state.rule_text_feedback = (level, message)


# --- Callback errors ---


def set_action_message(message: str) -> None:
    st.session_state.action_message = message


def pop_action_message() -> str | None:
    """Return the pending callback error and clear it."""
    message = st.session_state.get("action_message")
    st.session_state.action_message = None
    return message


# --- Reset ---


def request_reset() -> None:
    st.session_state.reset_requested = True


def is_reset_requested() -> bool:
    return st.session_state.get("reset_requested", False)


def reset_session() -> None:
    """Start over with an empty workspace; upload widgets are cleared too."""
    counter = get_file_upload_key() + 1
    for key in _STATE_DEFAULTS:
        if key in st.session_state:
            del st.session_state[key]
    init_session_state()
    st.session_state.file_upload_key_counter = counter
    logger.info("Session reset")
