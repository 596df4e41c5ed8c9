"""Shared fixtures: dict-backed rows and an isolated debug log."""

import pytest

from src.records import DictRow, Incident


@pytest.fixture(autouse=True)
def isolate_debug_log(tmp_path, monkeypatch):
    log_path = tmp_path / "debug.log"
    monkeypatch.setenv("INCIDENTS_DEBUG_LOG", str(log_path))
    return log_path


@pytest.fixture
def make_row():
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        row_id = fields.pop("row_id", f"rec{counter['n']:03d}")
        fields.setdefault("Publish", True)
        return DictRow(id=row_id, fields=fields)

    return _make


@pytest.fixture
def sample_incidents():
    return [
        Incident(
            id="a",
            date="2025-02-20",
            time="02:30 PM",
            location="Canoe Landing Park",
            coordinates="43.6395,-79.3960",
            dog_breed="Labrador",
            dog_weight_lb=60.0,
            was_leashed="Yes",
            num_coyotes=1,
            incident_type="Coyote attack on a dog (attempt)",
        ),
        Incident(
            id="b",
            date="2025-02-21",
            time="09:00 AM",
            location="June Callwood Park",
            coordinates="43.6367,-79.4040",
            dog_breed="terrier mix",
            dog_weight_lb=15.0,
            was_leashed="No",
            num_coyotes=2,
            incident_type="Stalked by a coyote",
        ),
        Incident(
            id="c",
            date="",
            time="",
            location="Trillium Park",
            coordinates=None,
            dog_breed=None,
            was_leashed="Unknown",
            incident_type="Coyote attack on a human",
        ),
        Incident(
            id="d",
            date="2024-12-03",
            time="",
            location="Trillium Park",
            coordinates="43.6301,-79.4098",
            dog_breed="Ébène Husky",
            dog_weight_lb=45.0,
            was_leashed="Yes",
            num_coyotes=None,
            incident_type="Coyote attack on a dog (successful)",
        ),
    ]
