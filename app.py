import os
from typing import List

import streamlit as st
from dotenv import load_dotenv

from config.app_metadata import APP_TITLE, REPORT_INCIDENT_URL
from src.airtable_client import fetch_incidents
from src.records import Incident
from src.state import QUERY_PARAM_INCIDENT, apply_deep_link, deep_link_params, get_state
from views.admin import render_admin
from views.details import render_incident_details
from views.incident_list import render_filter_bar, render_incident_list
from views.map_view import clear_map_selection, render_map
from views.stats import render_frequency
from views.table_view import render_table


load_dotenv(dotenv_path=os.path.join("config", "secrets.env"))

st.set_page_config(page_title=APP_TITLE, layout="wide")


@st.cache_data(ttl=300, show_spinner=False)
def load_incidents() -> List[Incident]:
    return fetch_incidents()


def _sync_query_params(params: dict) -> None:
    incident_id = params.get(QUERY_PARAM_INCIDENT)
    if incident_id:
        if st.query_params.get(QUERY_PARAM_INCIDENT) != incident_id:
            st.query_params[QUERY_PARAM_INCIDENT] = incident_id
    elif QUERY_PARAM_INCIDENT in st.query_params:
        del st.query_params[QUERY_PARAM_INCIDENT]


state = get_state(st.session_state)
if not state.loaded:
    with st.spinner("Loading incidents..."):
        state.set_incidents(load_incidents())
    apply_deep_link(state, st.query_params.get(QUERY_PARAM_INCIDENT))

with st.sidebar:
    st.header("View")
    active_view = st.radio(
        "Page",
        ["Map", "Table", "Frequency", "Admin"],
        key="active_view",
    )
    dark_map = st.toggle("Dark map", value=False, key="map_dark")
    grouped_markers = st.radio(
        "Markers",
        ["Grouped", "Pins"],
        horizontal=True,
        key="map_marker_mode",
    ) == "Grouped"
    if st.button("Reload incidents"):
        load_incidents.clear()
        state.set_incidents(load_incidents())
        if state.selected_incident() is None:
            clear_map_selection(state, st.session_state)
        st.rerun()

st.title(APP_TITLE)
st.link_button("Report an incident →", REPORT_INCIDENT_URL)

if active_view == "Map":
    list_col, map_col = st.columns(2)
    with list_col:
        render_filter_bar(state)
        visible = state.visible_incidents()
        render_incident_list(state, visible)
    with map_col:
        render_map(state, visible, dark=dark_map, grouped=grouped_markers)
        selected = state.selected_incident()
        if selected is not None:
            with st.container(border=True):
                render_incident_details(selected)
                if st.button("Close", key="close_details"):
                    clear_map_selection(state, st.session_state)
                    st.rerun()

elif active_view == "Table":
    render_table(state)

elif active_view == "Frequency":
    render_frequency(state.incidents)

else:
    render_admin()

_sync_query_params(deep_link_params(state))
