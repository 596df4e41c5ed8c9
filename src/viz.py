from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from config.app_metadata import (
    DEFAULT_INCIDENT_COLOR,
    DEFAULT_MAP_ZOOM,
    INCIDENT_COLORS,
    MAP_STYLE_DARK,
    MAP_STYLE_LIGHT,
    MARKER_COLOR,
    SELECTED_MARKER_COLOR,
)
from src.markers import flatten_groups, group_for_map
from src.records import Incident, format_display_date, parse_coordinates

TABLE_COLUMNS = {
    "date": "Date",
    "time": "Time",
    "location": "Location",
    "incident_type": "Incident Type",
    "dog_breed": "Dog Breed",
    "dog_weight_lb": "Dog Weight",
    "was_leashed": "Leashed",
    "num_coyotes": "Coyotes",
    "dog_injured": "Dog Injured",
    "source": "Source",
    "notes": "Notes",
}

MARKER_COLUMNS = ["id", "lat", "lng", "location", "date_label", "time", "incident_type", "status"]

FREQUENCY_GROUPINGS = {
    "day": ("D", "%Y-%m-%d"),
    "month": ("M", "%Y-%m"),
    "year": ("Y", "%Y"),
}


def incidents_frame(incidents: Iterable[Incident]) -> pd.DataFrame:
    records = []
    for incident in incidents:
        records.append(
            {
                "id": incident.id,
                "date": incident.date,
                "time": incident.time,
                "location": incident.location,
                "incident_type": incident.incident_type,
                "dog_breed": incident.dog_breed,
                "dog_weight_lb": incident.dog_weight_lb,
                "was_leashed": incident.was_leashed,
                "num_coyotes": incident.num_coyotes,
                "dog_injured": incident.dog_injured,
                "source": incident.source,
                "notes": incident.notes,
            }
        )
    df = pd.DataFrame(records, columns=["id", *TABLE_COLUMNS.keys()])
    df["date"] = pd.to_datetime(df["date"], format="%Y-%m-%d", errors="coerce")
    df["dog_weight_lb"] = pd.to_numeric(df["dog_weight_lb"], errors="coerce")
    return df


def markers_frame(
    incidents: Sequence[Incident],
    grouped: bool = True,
    selected_id: Optional[str] = None,
) -> pd.DataFrame:
    rows = []
    if grouped:
        positions = [
            (member.incident, member.lat, member.lng)
            for member in flatten_groups(group_for_map(incidents))
        ]
    else:
        positions = []
        for incident in incidents:
            parsed = parse_coordinates(incident.coordinates)
            if parsed:
                positions.append((incident, parsed[0], parsed[1]))
    for incident, lat, lng in positions:
        rows.append(
            {
                "id": incident.id,
                "lat": lat,
                "lng": lng,
                "location": incident.location,
                "date_label": format_display_date(incident.date),
                "time": incident.time,
                "incident_type": incident.incident_type or "",
                "status": "Selected" if incident.id == selected_id else "Incident",
            }
        )
    return pd.DataFrame(rows, columns=MARKER_COLUMNS)


def build_incident_map(
    df: pd.DataFrame,
    center: Dict[str, float],
    zoom: float = DEFAULT_MAP_ZOOM,
    dark: bool = False,
    grouped: bool = True,
    height: int = 600,
) -> go.Figure:
    fig = px.scatter_map(
        df,
        lat="lat",
        lon="lng",
        color="status",
        color_discrete_map={"Incident": MARKER_COLOR, "Selected": SELECTED_MARKER_COLOR},
        hover_name="location",
        hover_data={
            "date_label": True,
            "time": True,
            "incident_type": True,
            "lat": False,
            "lng": False,
            "status": False,
        },
        custom_data=["id"],
        zoom=zoom,
        center=center,
        height=height,
    )
    if grouped:
        fig.update_traces(marker={"size": 14, "opacity": 0.9})
    else:
        fig.update_traces(marker={"size": 10, "opacity": 1.0})
    fig.update_layout(
        map_style=MAP_STYLE_DARK if dark else MAP_STYLE_LIGHT,
        margin={"l": 0, "r": 0, "t": 0, "b": 0},
        showlegend=False,
        clickmode="event+select",
    )
    return fig


def incident_frequency(incidents: Iterable[Incident], grouping: str = "day") -> pd.DataFrame:
    freq, label_format = FREQUENCY_GROUPINGS.get(grouping, FREQUENCY_GROUPINGS["day"])
    df = pd.DataFrame(
        [{"date": incident.date, "incident_type": incident.incident_type} for incident in incidents],
        columns=["date", "incident_type"],
    )
    df["date"] = pd.to_datetime(df["date"], format="%Y-%m-%d", errors="coerce")
    df = df.dropna(subset=["date"])
    if df.empty:
        return pd.DataFrame(columns=["period", "incident_type", "count"])

    df["period"] = df["date"].dt.to_period(freq)
    periods = pd.period_range(df["period"].min(), df["period"].max(), freq=freq)
    typed = df.dropna(subset=["incident_type"])
    types: List[str] = list(dict.fromkeys(typed["incident_type"].tolist()))
    if not types:
        return pd.DataFrame(
            {"period": [p.strftime(label_format) for p in periods], "incident_type": None, "count": 0}
        )

    counts = (
        typed.groupby(["period", "incident_type"]).size().unstack(fill_value=0)
        .reindex(index=periods, columns=types, fill_value=0)
    )
    counts.index = [period.strftime(label_format) for period in counts.index]
    counts.index.name = "period"
    long_df = counts.reset_index().melt(id_vars="period", var_name="incident_type", value_name="count")
    long_df["count"] = long_df["count"].astype(int)
    return long_df.sort_values(["period"], kind="stable").reset_index(drop=True)


def build_frequency_chart(df: pd.DataFrame) -> go.Figure:
    if df.empty or df["incident_type"].isna().all():
        return go.Figure()
    types = df["incident_type"].dropna().unique().tolist()
    color_map = {t: INCIDENT_COLORS.get(t, DEFAULT_INCIDENT_COLOR) for t in types}
    fig = px.bar(
        df,
        x="period",
        y="count",
        color="incident_type",
        color_discrete_map=color_map,
        labels={"period": "Date", "count": "Number of Incidents", "incident_type": "Incident type"},
    )
    fig.update_layout(barmode="stack", legend_title_text="Incident type", height=600)
    fig.update_xaxes(type="category")
    return fig
