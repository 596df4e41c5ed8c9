import pandas as pd
import streamlit as st

from config.app_metadata import (
    AIRTABLE_EDIT_URL,
    ADDING_INCIDENT_STEPS,
    DATA_QUALITY_GUIDELINES,
    TABLE_STRUCTURE,
)


def table_structure_frame() -> pd.DataFrame:
    rows = [
        {
            "Column Name": entry["column"],
            "Required": "Yes" if entry["required"] else "No",
            "Format": entry["format"],
            "Example": entry["example"],
        }
        for entry in TABLE_STRUCTURE
    ]
    return pd.DataFrame(rows)


def render_admin() -> None:
    st.header("Adding or editing incidents")

    st.subheader("Table structure")
    st.write("The Airtable base contains the following data:")
    st.dataframe(table_structure_frame(), hide_index=True, use_container_width=True)

    st.subheader("Adding new incidents")
    for idx, step in enumerate(ADDING_INCIDENT_STEPS, start=1):
        st.markdown(f"{idx}. {step}")
    st.link_button("Open Airtable", AIRTABLE_EDIT_URL)

    st.subheader("Data quality guidelines")
    for guideline in DATA_QUALITY_GUIDELINES:
        st.markdown(f"- {guideline}")
