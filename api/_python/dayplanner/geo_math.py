"""
Geospatial and time helpers.

Great-circle distance, mode-dependent travel time, and the small time
parsing/formatting helpers shared by the detectors and optimizers.
"""

import math
from datetime import datetime

import pytz

from .types import Coordinate, TravelMode, ValidationError

EARTH_RADIUS_KM = 6371.0

# Average door-to-door speeds (km/h)
TRAVEL_SPEEDS_KMH: dict[TravelMode, float] = {
    "walking": 5.0,
    "driving": 25.0,  # City average with typical congestion
    "public_transport": 20.0,  # Including waiting time
}


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """
    Great-circle distance between two coordinates (haversine).

    Identical points return 0; antipodal points return half the
    Earth's circumference (~20015 km).
    """
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lam = math.radians(b.lng - a.lng)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lam / 2) ** 2
    # Rounding can push h a hair outside [0, 1] for antipodal points
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def travel_time_minutes(
    distance: float, mode: TravelMode = "driving", traffic_factor: float = 1.0
) -> float:
    """
    Estimate travel time for a distance.

    Args:
        distance: Distance in kilometers (non-negative)
        mode: Travel mode, selects the average speed
        traffic_factor: Congestion multiplier, 1.0 = free flowing

    Returns:
        Minutes (unrounded; round for display only)

    Raises:
        ValidationError: Unknown travel mode
        ValueError: Negative distance or traffic factor below 1.0
    """
    if mode not in TRAVEL_SPEEDS_KMH:
        raise ValidationError(f"Unknown travel mode '{mode}'", field="mode")
    if distance < 0:
        raise ValueError(f"Distance must be non-negative, got {distance}")
    if traffic_factor < 1.0:
        raise ValueError(f"Traffic factor must be >= 1.0, got {traffic_factor}")
    speed = TRAVEL_SPEEDS_KMH[mode]
    return distance / speed * 60 * traffic_factor


def centroid(points: list[Coordinate]) -> Coordinate:
    """Arithmetic mean of coordinates (fine at city scale)."""
    if not points:
        raise ValueError("Cannot compute centroid of no points")
    lat = sum(p.lat for p in points) / len(points)
    lng = sum(p.lng for p in points) / len(points)
    return Coordinate(lat=lat, lng=lng)


def minutes_between(earlier: datetime, later: datetime) -> float:
    """Signed minutes from earlier to later (negative if later is before earlier)."""
    return (later - earlier).total_seconds() / 60


def parse_iso_datetime(dt_str: str) -> datetime:
    """Parse ISO datetime string ("2025-06-01T09:30" or with offset/"Z")."""
    if dt_str.endswith("Z"):
        dt_str = dt_str[:-1] + "+00:00"
    return datetime.fromisoformat(dt_str)


def format_duration(minutes: float) -> str:
    """Format minutes as "45m" or "2h 05m"."""
    total = int(round(minutes))
    if total < 60:
        return f"{total}m"
    return f"{total // 60}h {total % 60:02d}m"


def get_current_datetime_in_tz(tz_name: str, aware: bool = False) -> datetime:
    """
    Get current datetime in the specified timezone.

    Args:
        tz_name: IANA timezone name (e.g., "Europe/Paris")
        aware: Return a timezone-aware datetime instead of naive local time

    Returns:
        Current local datetime (naive by default, for comparison with
        naive activity times)
    """
    tz = pytz.timezone(tz_name)
    now_local = datetime.now(pytz.UTC).astimezone(tz)
    if aware:
        return now_local
    return now_local.replace(tzinfo=None)


def to_local(dt: datetime, tz_name: str | None) -> datetime:
    """
    Express an activity time in the plan's local timezone.

    Naive datetimes are already local and returned unchanged.
    """
    if dt.tzinfo is None or tz_name is None:
        return dt
    return dt.astimezone(pytz.timezone(tz_name))
