from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from config.app_metadata import DEFAULT_MAP_CENTER
from src.records import Incident, parse_coordinates

# Roughly 10m at Toronto's latitude; enough to separate markers when zoomed in.
OFFSET_RADIUS_DEGREES = 1e-4


@dataclass(frozen=True)
class PositionedIncident:
    incident: Incident
    index: int
    group_size: int
    offset_lat: float
    offset_lng: float
    lat: float
    lng: float


def _offset(index: int, group_size: int, radius: float) -> tuple[float, float]:
    if group_size <= 1:
        return 0.0, 0.0
    angle = 2 * math.pi * index / group_size
    return math.sin(angle) * radius, math.cos(angle) * radius


def group_for_map(
    incidents: Iterable[Incident],
    radius: float = OFFSET_RADIUS_DEGREES,
) -> Dict[str, List[PositionedIncident]]:
    buckets: Dict[str, List[tuple[Incident, float, float]]] = {}
    for incident in incidents:
        parsed = parse_coordinates(incident.coordinates)
        if parsed is None:
            continue
        buckets.setdefault(incident.coordinates, []).append((incident, parsed[0], parsed[1]))

    grouped: Dict[str, List[PositionedIncident]] = {}
    for key, members in buckets.items():
        size = len(members)
        positioned = []
        for index, (incident, lat, lng) in enumerate(members):
            offset_lat, offset_lng = _offset(index, size, radius)
            positioned.append(
                PositionedIncident(
                    incident=incident,
                    index=index,
                    group_size=size,
                    offset_lat=offset_lat,
                    offset_lng=offset_lng,
                    lat=lat + offset_lat,
                    lng=lng + offset_lng,
                )
            )
        grouped[key] = positioned
    return grouped


def flatten_groups(groups: Dict[str, List[PositionedIncident]]) -> List[PositionedIncident]:
    return [member for members in groups.values() for member in members]


def map_center(incidents: Sequence[Incident], selected_id: Optional[str] = None) -> Dict[str, float]:
    if selected_id:
        for incident in incidents:
            if incident.id == selected_id:
                parsed = parse_coordinates(incident.coordinates)
                if parsed:
                    return {"lat": parsed[0], "lon": parsed[1]}
                break
    for incident in incidents:
        parsed = parse_coordinates(incident.coordinates)
        if parsed:
            return {"lat": parsed[0], "lon": parsed[1]}
    return dict(DEFAULT_MAP_CENTER)
