from __future__ import annotations

import datetime as dt
import math
import warnings
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

import pandas as pd

from config.app_metadata import (
    COLUMN_COORDINATES,
    COLUMN_DATE,
    COLUMN_DOG_BREED,
    COLUMN_DOG_INJURED,
    COLUMN_DOG_WEIGHT,
    COLUMN_INCIDENT_TYPE,
    COLUMN_LEASHED,
    COLUMN_LOCATION,
    COLUMN_NOTES,
    COLUMN_NUM_COYOTES,
    COLUMN_PUBLISH,
    COLUMN_SOURCE,
    COLUMN_TIME,
)

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%I:%M %p"

# Day-first wins for ambiguous slash dates; the store is maintained in Canada.
DATE_INPUT_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %d %Y",
    "%B %d %Y",
    "%d %b %Y",
    "%d %B %Y",
    "%d/%m/%Y",
    "%m/%d/%Y",
    "%d-%m-%Y",
)

TIME_INPUT_FORMATS = (
    "%I:%M %p",
    "%I:%M%p",
    "%I:%M:%S %p",
    "%I %p",
    "%I%p",
    "%H:%M",
    "%H:%M:%S",
)


class RowLike(Protocol):
    id: str

    def get(self, column_name: str) -> Any:
        ...


@dataclass(frozen=True)
class DictRow:
    """Row backed by a plain ``{column: value}`` mapping."""

    id: str
    fields: Dict[str, Any]

    def get(self, column_name: str) -> Any:
        return self.fields.get(column_name)


@dataclass(frozen=True)
class Incident:
    id: str
    date: str = ""
    time: str = ""
    location: str = ""
    coordinates: Optional[str] = None
    dog_breed: Optional[str] = None
    dog_weight_lb: Optional[float] = None
    was_leashed: Optional[str] = None
    num_coyotes: Optional[int] = None
    notes: Optional[str] = None
    source: Optional[str] = None
    dog_injured: Optional[str] = None
    publish: bool = True
    incident_type: Optional[str] = None


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def normalize_date(value: Any) -> str:
    if _is_blank(value):
        return ""
    if isinstance(value, (dt.date, dt.datetime, pd.Timestamp)):
        return value.strftime(DATE_FORMAT)
    text = " ".join(str(value).split())
    for fmt in DATE_INPUT_FORMATS:
        try:
            return dt.datetime.strptime(text, fmt).strftime(DATE_FORMAT)
        except ValueError:
            continue
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            parsed = pd.to_datetime(text, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return ""
    if pd.isna(parsed):
        return ""
    return parsed.strftime(DATE_FORMAT)


def normalize_time(value: Any) -> str:
    if _is_blank(value):
        return ""
    if isinstance(value, (dt.time, dt.datetime, pd.Timestamp)):
        return value.strftime(TIME_FORMAT)
    text = " ".join(str(value).split()).upper()
    for fmt in TIME_INPUT_FORMATS:
        try:
            return dt.datetime.strptime(text, fmt).strftime(TIME_FORMAT)
        except ValueError:
            continue
    return ""


def parse_coordinates(value: Any) -> Optional[Tuple[float, float]]:
    if not isinstance(value, str):
        return None
    parts = value.split(",")
    if len(parts) != 2:
        return None
    try:
        lat, lng = float(parts[0]), float(parts[1])
    except ValueError:
        return None
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return None
    return lat, lng


def _text(value: Any) -> Optional[str]:
    if _is_blank(value):
        return None
    return str(value).strip()


def _number(value: Any) -> Optional[float]:
    if _is_blank(value) or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _count(value: Any) -> Optional[int]:
    number = _number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def _notes(value: Any) -> Optional[str]:
    text = _text(value)
    if text is None:
        return None
    return text.replace("\\n", "\n")


def decode_row(row: RowLike) -> Incident:
    coordinates = _text(row.get(COLUMN_COORDINATES))
    if coordinates is not None and parse_coordinates(coordinates) is None:
        coordinates = None
    return Incident(
        id=str(row.id),
        date=normalize_date(row.get(COLUMN_DATE)),
        time=normalize_time(row.get(COLUMN_TIME)),
        location=_text(row.get(COLUMN_LOCATION)) or "",
        coordinates=coordinates,
        dog_breed=_text(row.get(COLUMN_DOG_BREED)),
        dog_weight_lb=_number(row.get(COLUMN_DOG_WEIGHT)),
        was_leashed=_text(row.get(COLUMN_LEASHED)),
        num_coyotes=_count(row.get(COLUMN_NUM_COYOTES)),
        notes=_notes(row.get(COLUMN_NOTES)),
        source=_text(row.get(COLUMN_SOURCE)),
        dog_injured=_text(row.get(COLUMN_DOG_INJURED)),
        publish=row.get(COLUMN_PUBLISH) is True,
        incident_type=_text(row.get(COLUMN_INCIDENT_TYPE)),
    )


def decode(raw_rows: Iterable[RowLike]) -> List[Incident]:
    return [decode_row(row) for row in raw_rows if row.get(COLUMN_PUBLISH) is True]


def format_display_date(value: str) -> str:
    if not value:
        return ""
    try:
        return dt.datetime.strptime(value, DATE_FORMAT).strftime("%b %d, %Y")
    except ValueError:
        return value


def format_weight(value: Optional[float]) -> str:
    if value is None:
        return ""
    return f"{value:g} lbs"
