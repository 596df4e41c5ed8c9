from __future__ import annotations

import datetime as dt
import math
import unicodedata
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from src.records import DATE_FORMAT, TIME_FORMAT, Incident

SORT_FIELDS = ("datetime", "dog_breed", "dog_weight_lb", "num_coyotes")
SORT_ORDERS = ("asc", "desc")
DEFAULT_SORT_FIELD = "datetime"
DEFAULT_SORT_ORDER = "desc"

TEXT_SORT_FIELDS = {"dog_breed"}

SEARCH_FIELDS = (
    "date",
    "time",
    "location",
    "dog_breed",
    "was_leashed",
    "notes",
    "source",
    "dog_injured",
    "incident_type",
)


def _fold(value: Any) -> str:
    decomposed = unicodedata.normalize("NFKD", str(value))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def _exact(value: Any, wanted: Any) -> bool:
    return value == wanted


def _contains(value: Any, wanted: Any) -> bool:
    if value is None:
        return False
    return _fold(wanted) in _fold(value)


# filter key -> (incident attribute, predicate)
FILTERS: Dict[str, Tuple[str, Callable[[Any, Any], bool]]] = {
    "was_leashed": ("was_leashed", _exact),
    "incident_type": ("incident_type", _exact),
    "dog_breed": ("dog_breed", _contains),
    "dog_injured": ("dog_injured", _exact),
}


def incident_datetime(incident: Incident) -> Optional[dt.datetime]:
    try:
        day = dt.datetime.strptime(incident.date, DATE_FORMAT)
    except (TypeError, ValueError):
        return None
    if not incident.time:
        return day
    try:
        clock = dt.datetime.strptime(incident.time, TIME_FORMAT)
    except (TypeError, ValueError):
        return None
    return day.replace(hour=clock.hour, minute=clock.minute)


def _sort_key(incident: Incident, field: str) -> Optional[Any]:
    if field == "datetime":
        return incident_datetime(incident)
    value = getattr(incident, field, None)
    if field in TEXT_SORT_FIELDS:
        if value is None or not str(value).strip():
            return None
        return (_fold(value), str(value))
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _matches_filters(incident: Incident, filters: Optional[Mapping[str, Any]]) -> bool:
    if not filters:
        return True
    for key, wanted in filters.items():
        if wanted is None or wanted == "":
            continue
        entry = FILTERS.get(key)
        if entry is None:
            continue
        attribute, predicate = entry
        if not predicate(getattr(incident, attribute, None), wanted):
            return False
    return True


def _matches_search(incident: Incident, search: Optional[str]) -> bool:
    if not search or not str(search).strip():
        return True
    needle = _fold(str(search).strip())
    for field in SEARCH_FIELDS:
        value = getattr(incident, field, None)
        if value and needle in _fold(value):
            return True
    return False


def select(
    incidents: Iterable[Incident],
    sort_field: str = DEFAULT_SORT_FIELD,
    sort_order: str = DEFAULT_SORT_ORDER,
    filters: Optional[Mapping[str, Any]] = None,
    search: Optional[str] = None,
) -> List[Incident]:
    field = sort_field if sort_field in SORT_FIELDS else DEFAULT_SORT_FIELD
    order = sort_order if sort_order in SORT_ORDERS else DEFAULT_SORT_ORDER

    present: List[Tuple[Any, Incident]] = []
    missing: List[Incident] = []
    for incident in incidents:
        if not (_matches_filters(incident, filters) and _matches_search(incident, search)):
            continue
        key = _sort_key(incident, field)
        if key is None:
            missing.append(incident)
        else:
            present.append((key, incident))

    present.sort(key=lambda pair: pair[0], reverse=order == "desc")
    return [incident for _, incident in present] + missing


def filter_options(incidents: Iterable[Incident], field: str) -> List[str]:
    values = {
        str(getattr(incident, field))
        for incident in incidents
        if getattr(incident, field, None) not in (None, "")
    }
    return sorted(values, key=lambda value: (_fold(value), value))
