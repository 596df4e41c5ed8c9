import streamlit as st

from src.records import Incident, format_display_date, format_weight


def _detail_line(label: str, value: object) -> None:
    if value is None or value == "":
        value = "Unknown"
    st.markdown(f"**{label}:** {value}")


def render_incident_details(incident: Incident) -> None:
    st.subheader(incident.location or "Unknown location")
    if incident.incident_type:
        st.caption(incident.incident_type)
    left, right = st.columns(2)
    with left:
        _detail_line("Date", format_display_date(incident.date))
        _detail_line("Dog Breed", incident.dog_breed)
        _detail_line("Was Leashed", incident.was_leashed)
        _detail_line("Dog Injured", incident.dog_injured)
    with right:
        _detail_line("Time", incident.time)
        _detail_line("Dog Weight", format_weight(incident.dog_weight_lb))
        _detail_line("Coyotes Involved", incident.num_coyotes)
        _detail_line("Source", incident.source)
    if incident.notes:
        st.markdown("**Notes**")
        st.text(incident.notes)
