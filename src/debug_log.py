import json
import os
from pathlib import Path
from typing import Dict

import pandas as pd

DEFAULT_DEBUG_LOG_PATH = Path(__file__).resolve().parents[1] / "logs" / "debug.log"


def _log_path() -> Path:
    override = os.getenv("INCIDENTS_DEBUG_LOG", "").strip()
    return Path(override) if override else DEFAULT_DEBUG_LOG_PATH


def debug_log(message: str, data: Dict[str, object], location: str) -> None:
    payload = {
        "message": message,
        "location": location,
        "data": data,
        "timestamp": int(pd.Timestamp.now(tz="UTC").timestamp() * 1000),
    }
    path = _log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as log_file:
            log_file.write(json.dumps(payload, default=str) + "\n")
    except OSError:
        pass
