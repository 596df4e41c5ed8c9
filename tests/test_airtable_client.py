import json

import pytest
import requests

from src import airtable_client
from src.airtable_client import AirtableConfig, AirtableRow, fetch_incidents, fetch_records, load_config


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


CONFIG = AirtableConfig(api_key="key", base_id="app123", table_id="tbl456")


def _record(record_id, **fields):
    fields.setdefault("Publish", True)
    return {"id": record_id, "createdTime": "2025-02-11T22:33:39.000Z", "fields": fields}


def test_load_config_reads_environment(monkeypatch):
    monkeypatch.setenv("AIRTABLE_API_KEY", ' "key" ')
    monkeypatch.setenv("AIRTABLE_BASE_ID", "app123")
    monkeypatch.setenv("AIRTABLE_TABLE_ID", "tbl456")
    assert load_config() == CONFIG


def test_missing_config_returns_empty_without_request(monkeypatch, isolate_debug_log):
    def fail(*args, **kwargs):
        raise AssertionError("no request expected")

    monkeypatch.setattr(airtable_client.requests, "get", fail)
    for name in ("AIRTABLE_API_KEY", "AIRTABLE_BASE_ID", "AIRTABLE_TABLE_ID"):
        monkeypatch.delenv(name, raising=False)
    assert fetch_incidents() == []
    assert fetch_incidents(AirtableConfig(api_key="", base_id="", table_id="")) == []
    entries = [json.loads(line) for line in isolate_debug_log.read_text().splitlines()]
    assert entries[-1]["message"] == "airtable config missing"


def test_fetch_records_follows_offset(monkeypatch):
    calls = []
    pages = [
        {"records": [_record("rec1", Location="A")], "offset": "page2"},
        {"records": [_record("rec2", Location="B")]},
    ]

    def fake_get(url, headers=None, params=None, timeout=None):
        calls.append({"url": url, "headers": headers, "params": dict(params)})
        return FakeResponse(pages[len(calls) - 1])

    monkeypatch.setattr(airtable_client.requests, "get", fake_get)
    rows = fetch_records(CONFIG)
    assert [row.id for row in rows] == ["rec1", "rec2"]
    assert rows[0].get("Location") == "A"
    assert calls[0]["url"] == "https://api.airtable.com/v0/app123/tbl456"
    assert calls[0]["headers"] == {"Authorization": "Bearer key"}
    assert "offset" not in calls[0]["params"]
    assert calls[1]["params"]["offset"] == "page2"


def test_fetch_incidents_decodes_published_rows(monkeypatch):
    payload = {
        "records": [
            _record("rec1", Date="2025-02-20", Time="2:30 PM", Location="Park A", Leashed="Yes"),
            _record("rec2", Date="2025-02-21", Time="9:00 AM", Location="Park B", Publish=False),
        ]
    }
    monkeypatch.setattr(airtable_client.requests, "get", lambda *a, **k: FakeResponse(payload))
    incidents = fetch_incidents(CONFIG)
    assert [(i.id, i.location, i.time) for i in incidents] == [("rec1", "Park A", "02:30 PM")]


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse({}, status_code=500),
        FakeResponse(ValueError("bad json")),
        FakeResponse({"records": [{"fields": {"Publish": True}}]}),
        FakeResponse(["not", "a", "mapping"]),
    ],
)
def test_transport_and_payload_failures_resolve_to_empty(monkeypatch, isolate_debug_log, response):
    monkeypatch.setattr(airtable_client.requests, "get", lambda *a, **k: response)
    assert fetch_incidents(CONFIG) == []
    entries = [json.loads(line) for line in isolate_debug_log.read_text().splitlines()]
    assert entries[-1]["message"] == "airtable fetch error"


def test_connection_error_resolves_to_empty(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(airtable_client.requests, "get", boom)
    assert fetch_incidents(CONFIG) == []


def test_airtable_row_get_missing_column():
    row = AirtableRow(id="rec1", fields={"Location": "A"})
    assert row.get("Location") == "A"
    assert row.get("Renamed column") is None
