import math

import pytest

from config.app_metadata import DEFAULT_MAP_CENTER
from src.markers import OFFSET_RADIUS_DEGREES, flatten_groups, group_for_map, map_center
from src.records import Incident


def test_single_incident_has_zero_offset():
    groups = group_for_map([Incident(id="a", coordinates="43.65,-79.38")])
    (member,) = groups["43.65,-79.38"]
    assert member.offset_lat == 0.0
    assert member.offset_lng == 0.0
    assert (member.lat, member.lng) == (43.65, -79.38)
    assert member.group_size == 1


def test_co_located_incidents_get_distinct_positions():
    incidents = [
        Incident(id="a", coordinates="43.65,-79.38"),
        Incident(id="b", coordinates="43.65,-79.38"),
    ]
    first, second = group_for_map(incidents)["43.65,-79.38"]
    assert (first.incident.id, second.incident.id) == ("a", "b")
    assert (first.lat, first.lng) != (second.lat, second.lng)
    # index 0 sits at angle 0, index 1 at angle pi
    assert first.offset_lat == pytest.approx(0.0)
    assert first.offset_lng == pytest.approx(OFFSET_RADIUS_DEGREES)
    assert second.offset_lng == pytest.approx(-OFFSET_RADIUS_DEGREES)


def test_offsets_lie_on_circle():
    incidents = [Incident(id=str(i), coordinates="43.6,-79.4") for i in range(5)]
    members = group_for_map(incidents)["43.6,-79.4"]
    assert [m.index for m in members] == list(range(5))
    for member in members:
        assert math.hypot(member.offset_lat, member.offset_lng) == pytest.approx(OFFSET_RADIUS_DEGREES)
        angle = 2 * math.pi * member.index / 5
        assert member.offset_lat == pytest.approx(math.sin(angle) * OFFSET_RADIUS_DEGREES)


def test_grouping_uses_exact_coordinate_text():
    incidents = [
        Incident(id="a", coordinates="43.65,-79.38"),
        Incident(id="b", coordinates="43.65, -79.38"),
    ]
    groups = group_for_map(incidents)
    assert set(groups) == {"43.65,-79.38", "43.65, -79.38"}
    assert all(len(members) == 1 for members in groups.values())


def test_missing_and_malformed_coordinates_are_excluded():
    incidents = [
        Incident(id="a", coordinates=None),
        Incident(id="b", coordinates="not,a,number"),
        Incident(id="c", coordinates="43.65"),
        Incident(id="d", coordinates="43.65,-79.38"),
    ]
    members = flatten_groups(group_for_map(incidents))
    assert [m.incident.id for m in members] == ["d"]


def test_grouping_does_not_touch_stored_coordinates():
    incident = Incident(id="a", coordinates="43.65,-79.38")
    group_for_map([incident, Incident(id="b", coordinates="43.65,-79.38")])
    assert incident.coordinates == "43.65,-79.38"


def test_empty_input_gives_empty_groups():
    assert group_for_map([]) == {}


def test_map_center_prefers_selected_then_first_mappable():
    incidents = [
        Incident(id="a", coordinates=None),
        Incident(id="b", coordinates="43.1,-79.1"),
        Incident(id="c", coordinates="43.2,-79.2"),
    ]
    assert map_center(incidents, "c") == {"lat": 43.2, "lon": -79.2}
    assert map_center(incidents, "missing") == {"lat": 43.1, "lon": -79.1}
    assert map_center(incidents) == {"lat": 43.1, "lon": -79.1}
    assert map_center([Incident(id="a")]) == DEFAULT_MAP_CENTER
