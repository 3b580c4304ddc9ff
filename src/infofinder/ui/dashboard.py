"""Streamlit lookup dashboard.

Run:
    streamlit run src/infofinder/ui/dashboard.py

The page lets a user pick an identifier category, search it, follow the
linked Aadhaar lookup after a mobile search, and start over.
"""

from __future__ import annotations

import streamlit as st

from infofinder.lookup import (
    CategoryId,
    InputValidationError,
    LookupServiceError,
    PresentationModel,
    definition_for,
    list_categories,
)
from infofinder.lookup.location import approximate_location
from infofinder.observability import configure_logging
from infofinder.ui.state import clear_messages, current_session, ensure_session_defaults, lookup_service

CATEGORY_OPTIONS = [definition.id for definition in list_categories()]


def _category_label(category: CategoryId) -> str:
    definition = definition_for(category)
    return f"{definition.icon} {definition.display_name}"


def _on_category_change() -> None:
    current_session().select_category(st.session_state["category_choice"])
    st.session_state["search_input"] = ""
    st.session_state.pop("map_pin", None)
    clear_messages()


def _on_search() -> None:
    session = current_session()
    clear_messages()
    st.session_state.pop("map_pin", None)
    with st.spinner("Searching..."):
        try:
            lookup_service().search(session, st.session_state.get("search_input"))
        except InputValidationError as exc:
            st.session_state["input_error"] = str(exc)
        except LookupServiceError as exc:
            st.session_state["lookup_error"] = exc.user_message


def _on_fetch_chained() -> None:
    clear_messages()
    with st.spinner("Fetching Aadhaar details..."):
        try:
            lookup_service().fetch_chained(current_session())
        except LookupServiceError as exc:
            st.session_state["input_error"] = f"Failed to fetch Aadhaar details: {exc}"


def _on_reset() -> None:
    session = current_session()
    session.reset()
    st.session_state["category_choice"] = session.category
    st.session_state["search_input"] = ""
    st.session_state.pop("map_pin", None)
    clear_messages()


@st.dialog("No result found")
def _lookup_error_dialog(message: str) -> None:
    st.write(message)
    if st.button("Try Again", width="stretch"):
        st.session_state["lookup_error"] = None
        st.rerun()


def _render_results(model: PresentationModel) -> None:
    definition = definition_for(model.category)
    st.subheader(f"{definition.icon} {definition.display_name} results")
    columns = st.columns(min(len(model.sections), 3) or 1)
    for index, section in enumerate(model.sections):
        with columns[index % len(columns)]:
            with st.container(border=True):
                st.markdown(f"**{section.heading}**")
                for item in section.items:
                    st.markdown(f"{item.label}: `{item.value or '-'}`")


def _render_map(location_hint: str) -> None:
    pin = st.session_state.get("map_pin")
    if pin is None or pin.label != location_hint:
        pin = approximate_location(location_hint)
        st.session_state["map_pin"] = pin
    st.caption(f"📍 Approximate location: {pin.label}")
    st.map({"lat": [pin.latitude], "lon": [pin.longitude]}, zoom=pin.zoom)


def main() -> None:
    configure_logging()
    st.set_page_config(page_title="InfoFinder", page_icon="🔍", layout="wide")
    ensure_session_defaults()
    session = current_session()
    st.session_state.setdefault("category_choice", session.category)

    st.title("🔍 InfoFinder")
    st.radio(
        "Search type",
        options=CATEGORY_OPTIONS,
        format_func=_category_label,
        key="category_choice",
        horizontal=True,
        on_change=_on_category_change,
    )

    definition = definition_for(session.category)
    st.text_input(
        definition.hint,
        key="search_input",
        placeholder=definition.placeholder,
        max_chars=definition.max_length,
        on_change=clear_messages,
    )
    if st.session_state.get("input_error"):
        st.warning(st.session_state["input_error"])

    col_search, col_reset = st.columns([1, 1])
    with col_search:
        st.button("Search", type="primary", width="stretch", on_click=_on_search)
    with col_reset:
        st.button("New Search", width="stretch", on_click=_on_reset)

    if st.session_state.get("lookup_error"):
        _lookup_error_dialog(st.session_state["lookup_error"])

    if session.result is None:
        return

    _render_results(session.result)
    if session.chained_id:
        st.button("🆔 Fetch Aadhaar Details", on_click=_on_fetch_chained)
    if session.location_hint:
        _render_map(session.location_hint)


main()
