import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from src.debug_log import debug_log
from src.records import Incident, decode

AIRTABLE_API_URL = "https://api.airtable.com/v0"
PAGE_SIZE = 100


@dataclass(frozen=True)
class AirtableConfig:
    api_key: str
    base_id: str
    table_id: str

    def is_complete(self) -> bool:
        return bool(self.api_key and self.base_id and self.table_id)


@dataclass(frozen=True)
class AirtableRow:
    id: str
    fields: Dict[str, Any] = field(default_factory=dict)
    created_time: Optional[str] = None

    def get(self, column_name: str) -> Any:
        return self.fields.get(column_name)


def _get_env(name: str) -> str:
    return (os.getenv(name) or "").strip().strip("\"'").strip()


def load_config() -> AirtableConfig:
    return AirtableConfig(
        api_key=_get_env("AIRTABLE_API_KEY"),
        base_id=_get_env("AIRTABLE_BASE_ID"),
        table_id=_get_env("AIRTABLE_TABLE_ID"),
    )


def fetch_records(config: AirtableConfig, timeout_s: int = 20) -> List[AirtableRow]:
    url = f"{AIRTABLE_API_URL}/{config.base_id}/{config.table_id}"
    headers = {"Authorization": f"Bearer {config.api_key}"}
    rows: List[AirtableRow] = []
    offset = None
    while True:
        params: Dict[str, Any] = {"pageSize": PAGE_SIZE}
        if offset:
            params["offset"] = offset
        resp = requests.get(url, headers=headers, params=params, timeout=timeout_s)
        resp.raise_for_status()
        data = resp.json()
        for record in data.get("records", []):
            rows.append(
                AirtableRow(
                    id=str(record["id"]),
                    fields=record.get("fields") or {},
                    created_time=record.get("createdTime"),
                )
            )
        offset = data.get("offset")
        if not offset:
            break
    return rows


def fetch_incidents(config: Optional[AirtableConfig] = None) -> List[Incident]:
    config = config or load_config()
    if not config.is_complete():
        debug_log(
            "airtable config missing",
            {
                "api_key": bool(config.api_key),
                "base_id": bool(config.base_id),
                "table_id": bool(config.table_id),
            },
            "airtable_client.py:fetch_incidents",
        )
        return []
    debug_log(
        "airtable fetch",
        {"base_id": config.base_id, "table_id": config.table_id},
        "airtable_client.py:fetch_incidents",
    )
    try:
        rows = fetch_records(config)
        incidents = decode(rows)
    except (requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as exc:
        debug_log(
            "airtable fetch error",
            {"error": str(exc), "error_type": type(exc).__name__},
            "airtable_client.py:fetch_incidents",
        )
        return []
    debug_log(
        "airtable fetch complete",
        {"rows": len(rows), "published": len(incidents)},
        "airtable_client.py:fetch_incidents",
    )
    return incidents
