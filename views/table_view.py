from typing import Any, MutableMapping, Optional

import pandas as pd
import streamlit as st

from config.app_metadata import SELECTED_MAP_ZOOM
from src.markers import map_center
from src.state import IncidentState
from src.viz import TABLE_COLUMNS, build_incident_map, incidents_frame, markers_frame
from views.details import render_incident_details

DEFAULT_VISIBLE_COLUMNS = [
    "date",
    "time",
    "location",
    "incident_type",
    "dog_breed",
    "was_leashed",
    "num_coyotes",
    "dog_injured",
]

LAST_ROW_KEY = "incident_table_last_row"


def selected_row_id(event: Any, df: pd.DataFrame) -> Optional[str]:
    selection = getattr(event, "selection", None)
    if selection is None and isinstance(event, dict):
        selection = event.get("selection")
    if not selection:
        return None
    rows = selection.get("rows", []) if isinstance(selection, dict) else getattr(selection, "rows", [])
    for position in rows or []:
        if 0 <= int(position) < len(df):
            return str(df.iloc[int(position)]["id"])
    return None


def apply_row_selection(
    state: IncidentState,
    row_id: Optional[str],
    session_state: MutableMapping[str, Any],
) -> bool:
    # Dataframe selections persist across reruns; only act when the row changes.
    if row_id == session_state.get(LAST_ROW_KEY):
        return False
    session_state[LAST_ROW_KEY] = row_id
    state.set_selected_incident_id(row_id)
    return True


def _column_config() -> dict:
    return {
        TABLE_COLUMNS["date"]: st.column_config.DateColumn(TABLE_COLUMNS["date"], format="MMM DD, YYYY"),
        TABLE_COLUMNS["dog_weight_lb"]: st.column_config.NumberColumn(
            TABLE_COLUMNS["dog_weight_lb"], format="%g lbs"
        ),
        TABLE_COLUMNS["num_coyotes"]: st.column_config.NumberColumn(TABLE_COLUMNS["num_coyotes"], format="%d"),
    }


def _render_row_details(state: IncidentState) -> None:
    incident = state.selected_incident()
    if incident is None:
        return
    with st.container(border=True):
        render_incident_details(incident)
        df = markers_frame([incident], grouped=False, selected_id=incident.id)
        if df.empty:
            st.caption("No coordinates recorded for this incident.")
            return
        fig = build_incident_map(
            df,
            center=map_center([incident]),
            zoom=SELECTED_MAP_ZOOM,
            grouped=False,
            height=260,
        )
        st.plotly_chart(fig, use_container_width=True, key="incident_table_map")


def render_table(state: IncidentState) -> None:
    search = st.text_input(
        "Search all columns",
        value=state.search,
        key="table_search",
        placeholder="Filter incidents...",
    )
    if search != state.search:
        state.set_search(search)
        st.rerun()

    visible = st.multiselect(
        "Columns",
        options=list(TABLE_COLUMNS.keys()),
        default=DEFAULT_VISIBLE_COLUMNS,
        format_func=lambda key: TABLE_COLUMNS[key],
        key="table_columns",
    )
    incidents = state.table_incidents()
    if not incidents:
        st.info("No results.")
        return
    df = incidents_frame(incidents)
    event = st.dataframe(
        df.rename(columns=TABLE_COLUMNS),
        column_order=[TABLE_COLUMNS[key] for key in visible],
        column_config=_column_config(),
        hide_index=True,
        use_container_width=True,
        on_select="rerun",
        selection_mode="single-row",
        key="incident_table",
    )
    st.caption(f"{len(incidents)} row(s). Select a row to see its details.")
    if apply_row_selection(state, selected_row_id(event, df), st.session_state):
        st.rerun()
    _render_row_details(state)
