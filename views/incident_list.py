from typing import List

import streamlit as st

from config.app_metadata import INCIDENT_TYPES, INJURY_OPTIONS, LEASH_OPTIONS, SORT_OPTIONS
from src.records import Incident, format_display_date
from src.selection import filter_options
from src.state import IncidentState
from views.map_view import clear_map_selection


def render_filter_bar(state: IncidentState) -> None:
    sort_keys = list(SORT_OPTIONS.keys())
    current_sort = (state.sort_field, state.sort_order)
    sort_choice = st.selectbox(
        "Sort by",
        options=sort_keys,
        index=sort_keys.index(current_sort) if current_sort in sort_keys else 0,
        format_func=lambda key: SORT_OPTIONS[key],
        key="filters_sort",
    )
    state.set_sort_field(sort_choice[0])
    state.set_sort_order(sort_choice[1])

    filters = dict(state.filters)
    col_leash, col_type = st.columns(2)
    with col_leash:
        leash_keys = list(LEASH_OPTIONS.keys())
        current_leash = filters.get("was_leashed") or ""
        filters["was_leashed"] = st.selectbox(
            "Leash status",
            options=leash_keys,
            index=leash_keys.index(current_leash) if current_leash in leash_keys else 0,
            format_func=lambda key: LEASH_OPTIONS[key],
            key="filters_was_leashed",
        ) or None
    with col_type:
        type_options = [""] + sorted(set(INCIDENT_TYPES) | set(filter_options(state.incidents, "incident_type")))
        current_type = filters.get("incident_type") or ""
        filters["incident_type"] = st.selectbox(
            "Incident type",
            options=type_options,
            index=type_options.index(current_type) if current_type in type_options else 0,
            format_func=lambda key: key or "All Incident Types",
            key="filters_incident_type",
        ) or None

    with st.expander("More filters", expanded=False):
        breed_options = [""] + filter_options(state.incidents, "dog_breed")
        current_breed = filters.get("dog_breed") or ""
        filters["dog_breed"] = st.selectbox(
            "Dog breed",
            options=breed_options,
            index=breed_options.index(current_breed) if current_breed in breed_options else 0,
            format_func=lambda key: key or "All Breeds",
            key="filters_dog_breed",
        ) or None
        injury_keys = list(INJURY_OPTIONS.keys())
        current_injury = filters.get("dog_injured") or ""
        filters["dog_injured"] = st.selectbox(
            "Dog injured",
            options=injury_keys,
            index=injury_keys.index(current_injury) if current_injury in injury_keys else 0,
            format_func=lambda key: INJURY_OPTIONS[key],
            key="filters_dog_injured",
        ) or None
    state.set_filters(filters)


def _render_card(state: IncidentState, incident: Incident) -> None:
    is_selected = state.selected_incident_id == incident.id
    with st.container(border=True):
        st.markdown(f"**{incident.location or 'Unknown location'}**")
        st.caption(" · ".join(part for part in [format_display_date(incident.date), incident.time] if part))
        if incident.incident_type:
            st.write(incident.incident_type)
        if is_selected:
            st.caption("Details are shown beside the map.")
        label = "Hide details" if is_selected else "View details"
        if st.button(label, key=f"incident_card_{incident.id}"):
            if is_selected:
                clear_map_selection(state, st.session_state)
            else:
                state.set_selected_incident_id(incident.id)
            st.rerun()


def render_incident_list(state: IncidentState, incidents: List[Incident]) -> None:
    st.caption(f"{len(incidents)} of {len(state.incidents)} incidents")
    if not incidents:
        st.info("No results.")
        return
    for incident in incidents:
        _render_card(state, incident)
