from typing import List

import streamlit as st

from src.records import Incident
from src.viz import FREQUENCY_GROUPINGS, build_frequency_chart, incident_frequency


def render_frequency(incidents: List[Incident]) -> None:
    st.subheader("Incident Frequency")
    grouping = st.selectbox(
        "Group by",
        options=list(FREQUENCY_GROUPINGS.keys()),
        index=0,
        format_func=str.title,
        key="filters_frequency_grouping",
    )
    df = incident_frequency(incidents, grouping)
    if df.empty:
        st.info("No dated incidents available.")
        return
    st.plotly_chart(build_frequency_chart(df), use_container_width=True)

    st.markdown("**About this visualization**")
    st.markdown(
        "- Shows the frequency of different types of coyote incidents over time.\n"
        "- Incidents are stacked to show both individual type frequencies and total incidents.\n"
        "- Toggle between daily, monthly, and yearly views.\n"
        "- Click legend items to toggle visibility of incident types."
    )
