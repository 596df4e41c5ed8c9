from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, MutableMapping, Optional

from src.markers import PositionedIncident, group_for_map
from src.records import Incident
from src.selection import DEFAULT_SORT_FIELD, DEFAULT_SORT_ORDER, select

SESSION_KEY = "incident_state"
QUERY_PARAM_INCIDENT = "incident"


@dataclass
class IncidentState:
    incidents: List[Incident] = field(default_factory=list)
    selected_incident_id: Optional[str] = None
    sort_field: str = DEFAULT_SORT_FIELD
    sort_order: str = DEFAULT_SORT_ORDER
    filters: Dict[str, Any] = field(default_factory=dict)
    search: str = ""
    loaded: bool = False

    def set_incidents(self, incidents: List[Incident]) -> None:
        self.incidents = list(incidents)
        self.loaded = True

    def set_selected_incident_id(self, incident_id: Optional[str]) -> None:
        self.selected_incident_id = incident_id or None

    def set_sort_field(self, sort_field: str) -> None:
        self.sort_field = sort_field

    def set_sort_order(self, sort_order: str) -> None:
        self.sort_order = sort_order

    def set_filters(self, filters: Dict[str, Any]) -> None:
        self.filters = dict(filters or {})

    def set_search(self, search: str) -> None:
        self.search = search or ""

    def visible_incidents(self) -> List[Incident]:
        return select(self.incidents, self.sort_field, self.sort_order, self.filters)

    def table_incidents(self) -> List[Incident]:
        # Search text belongs to the table view only.
        return select(
            self.incidents,
            self.sort_field,
            self.sort_order,
            self.filters,
            self.search,
        )

    def marker_groups(self) -> Dict[str, List[PositionedIncident]]:
        return group_for_map(self.visible_incidents())

    def selected_incident(self) -> Optional[Incident]:
        if not self.selected_incident_id:
            return None
        for incident in self.incidents:
            if incident.id == self.selected_incident_id:
                return incident
        return None


def get_state(session_state: MutableMapping[str, Any]) -> IncidentState:
    state = session_state.get(SESSION_KEY)
    if not isinstance(state, IncidentState):
        state = IncidentState()
        session_state[SESSION_KEY] = state
    return state


def apply_deep_link(state: IncidentState, incident_id: Optional[str]) -> bool:
    if not incident_id:
        return False
    if any(incident.id == incident_id for incident in state.incidents):
        state.set_selected_incident_id(incident_id)
        return True
    return False


def deep_link_params(state: IncidentState) -> Dict[str, str]:
    if state.selected_incident_id:
        return {QUERY_PARAM_INCIDENT: state.selected_incident_id}
    return {}
