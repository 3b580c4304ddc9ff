"""Session state helpers for the lookup dashboard."""

from __future__ import annotations

from typing import Any

import streamlit as st

from infofinder.lookup import LookupService, LookupSession


@st.cache_resource
def lookup_service() -> LookupService:
    """Reuse a single LookupService (and its HTTP connection pool) across reruns."""

    return LookupService()


def ensure_session_defaults() -> None:
    """Populate Streamlit session state with the dashboard defaults."""

    defaults: dict[str, Any] = {
        "search_input": "",
        "input_error": None,
        "lookup_error": None,
        "busy": False,
    }
    for key, value in defaults.items():
        st.session_state.setdefault(key, value)
    if "lookup_session" not in st.session_state:
        st.session_state["lookup_session"] = lookup_service().new_session()


def current_session() -> LookupSession:
    ensure_session_defaults()
    return st.session_state["lookup_session"]


def clear_messages() -> None:
    st.session_state["input_error"] = None
    st.session_state["lookup_error"] = None


__all__ = ["clear_messages", "current_session", "ensure_session_defaults", "lookup_service"]
