from typing import Any, List, MutableMapping, Optional

import streamlit as st

from config.app_metadata import DEFAULT_MAP_ZOOM, SELECTED_MAP_ZOOM
from src.markers import map_center
from src.records import Incident
from src.state import IncidentState
from src.viz import build_incident_map, markers_frame

LAST_CLICK_KEY = "incident_map_last_click"
CHART_VERSION_KEY = "incident_map_version"


def _clicked_incident_id(event: object) -> Optional[str]:
    selection = getattr(event, "selection", None)
    if selection is None and isinstance(event, dict):
        selection = event.get("selection")
    if not selection:
        return None
    points = selection.get("points", []) if isinstance(selection, dict) else getattr(selection, "points", [])
    for point in points or []:
        custom = point.get("customdata") or []
        if custom:
            return str(custom[0])
    return None


def apply_map_click(
    state: IncidentState,
    clicked: Optional[str],
    session_state: MutableMapping[str, Any],
) -> bool:
    # Plotly selections persist across reruns; only act on a new click.
    if clicked == session_state.get(LAST_CLICK_KEY):
        return False
    session_state[LAST_CLICK_KEY] = clicked
    if clicked and clicked != state.selected_incident_id:
        state.set_selected_incident_id(clicked)
        return True
    return False


def clear_map_selection(state: IncidentState, session_state: MutableMapping[str, Any]) -> None:
    state.set_selected_incident_id(None)
    session_state.pop(LAST_CLICK_KEY, None)
    # A new chart key drops the plotly selection held by the old widget.
    session_state[CHART_VERSION_KEY] = session_state.get(CHART_VERSION_KEY, 0) + 1


def render_map(
    state: IncidentState,
    incidents: List[Incident],
    dark: bool = False,
    grouped: bool = True,
) -> None:
    df = markers_frame(incidents, grouped=grouped, selected_id=state.selected_incident_id)
    if df.empty:
        st.info("No incidents with coordinates to map.")
        return
    center = map_center(incidents, state.selected_incident_id)
    zoom = SELECTED_MAP_ZOOM if state.selected_incident() else DEFAULT_MAP_ZOOM
    fig = build_incident_map(df, center=center, zoom=zoom, dark=dark, grouped=grouped)
    if not grouped:
        st.plotly_chart(fig, use_container_width=True, key="incident_map_pins")
        return
    event = st.plotly_chart(
        fig,
        use_container_width=True,
        on_select="rerun",
        selection_mode="points",
        key=f"incident_map_{st.session_state.get(CHART_VERSION_KEY, 0)}",
    )
    if apply_map_click(state, _clicked_incident_id(event), st.session_state):
        st.rerun()
