"""
Conversion between JSON-style dicts and dayplanner dataclasses.

Activity wire format (snake_case, ISO 8601 datetimes):

    {
        "id": "louvre",
        "title": "Louvre",
        "location": {"name": "Louvre", "lat": 48.8606, "lng": 2.3376, "address": ""},
        "start": "2025-06-01T09:00:00",
        "end": "2025-06-01T11:30:00",
        "category": "sightseeing",
        "cost": 22.0,
        "anchored": false,
        "notes": ""
    }

Segment-keyed hints use "from_id->to_id" string keys.
"""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from typing import Any

from .geo_math import parse_iso_datetime
from .routing.traffic import Segment, TravelHints
from .types import (
    Activity,
    Coordinate,
    EnhancedRouteOptimizationResult,
    Location,
    RouteOptimizationResult,
    TimeWindow,
    ValidationError,
)

SEGMENT_SEPARATOR = "->"


def _require(data: dict[str, Any], key: str, activity_id: str | None = None) -> Any:
    if key not in data:
        raise ValidationError(f"Missing required field '{key}'", activity_id=activity_id, field=key)
    return data[key]


def _parse_datetime(value: str, activity_id: str | None, field_name: str) -> datetime:
    try:
        return parse_iso_datetime(value)
    except (TypeError, ValueError):
        raise ValidationError(
            f"Invalid ISO datetime {value!r}", activity_id=activity_id, field=field_name
        ) from None


def _parse_float(value: Any, activity_id: str | None, field_name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(
            f"Expected a number, got {value!r}", activity_id=activity_id, field=field_name
        ) from None


# =============================================================================
# Parsing
# =============================================================================


def coordinate_from_dict(data: dict[str, Any], activity_id: str | None = None) -> Coordinate:
    return Coordinate(
        lat=_parse_float(_require(data, "lat", activity_id), activity_id, "lat"),
        lng=_parse_float(_require(data, "lng", activity_id), activity_id, "lng"),
    )


def location_from_dict(data: dict[str, Any], activity_id: str | None = None) -> Location:
    return Location(
        name=data.get("name", ""),
        coordinates=coordinate_from_dict(data, activity_id),
        address=data.get("address", ""),
    )


def activity_from_dict(data: dict[str, Any]) -> Activity:
    """Parse one activity; missing or malformed fields raise ValidationError."""
    activity_id = str(_require(data, "id"))
    start = _parse_datetime(_require(data, "start", activity_id), activity_id, "start")
    end = _parse_datetime(_require(data, "end", activity_id), activity_id, "end")

    try:
        time_window = TimeWindow(start=start, end=end)
    except ValidationError as e:
        raise ValidationError(e.reason, activity_id=activity_id, field=e.field) from None

    cost = data.get("cost")
    return Activity(
        id=activity_id,
        title=data.get("title", activity_id),
        location=location_from_dict(_require(data, "location", activity_id), activity_id),
        time_window=time_window,
        category=data.get("category", "sightseeing"),
        cost=_parse_float(cost, activity_id, "cost") if cost is not None else None,
        anchored=bool(data.get("anchored", False)),
        notes=data.get("notes", ""),
    )


def activities_from_list(data: list[dict[str, Any]]) -> list[Activity]:
    return [activity_from_dict(item) for item in data]


def parse_segment(key: str) -> Segment:
    """Parse "from_id->to_id"."""
    from_id, separator, to_id = key.partition(SEGMENT_SEPARATOR)
    if not separator or not from_id or not to_id:
        raise ValidationError(f"Segment key must look like 'from{SEGMENT_SEPARATOR}to', got {key!r}", field="hints")
    return from_id, to_id


def hints_from_dict(data: dict[str, Any] | None) -> TravelHints:
    """Parse travel hints. Severity and cost values are checked later, by the optimizer."""
    if not data:
        return TravelHints()
    return TravelHints(
        segment_traffic={parse_segment(k): v for k, v in data.get("segment_traffic", {}).items()},
        hourly_traffic={int(k): v for k, v in data.get("hourly_traffic", {}).items()},
        tolls={parse_segment(k): _parse_float(v, None, "hints") for k, v in data.get("tolls", {}).items()},
        parking={str(k): _parse_float(v, None, "hints") for k, v in data.get("parking", {}).items()},
    )


# =============================================================================
# Output
# =============================================================================


def activity_to_dict(activity: Activity) -> dict[str, Any]:
    """Inverse of activity_from_dict()."""
    return {
        "id": activity.id,
        "title": activity.title,
        "location": {
            "name": activity.location.name,
            "lat": activity.coordinates.lat,
            "lng": activity.coordinates.lng,
            "address": activity.location.address,
        },
        "start": activity.start.isoformat(),
        "end": activity.end.isoformat(),
        "category": activity.category,
        "cost": activity.cost,
        "anchored": activity.anchored,
        "notes": activity.notes,
    }


def to_dict(obj: object) -> object:
    """Convert dataclass instances to JSON-safe values recursively."""
    if isinstance(obj, Activity):
        return activity_to_dict(obj)
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_dict(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, (list, tuple)):
        return [to_dict(item) for item in obj]
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    return obj


def result_to_dict(result: RouteOptimizationResult) -> dict[str, Any]:
    """Optimizer result as a dict, with derived totals included."""
    data = to_dict(result)
    data["activity_ids"] = result.activity_ids
    if isinstance(result, EnhancedRouteOptimizationResult):
        data["cost"]["total"] = result.cost.total
        data["degraded"] = result.degraded
    return data
