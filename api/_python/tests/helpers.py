"""
Test helper functions for building day plans.

These functions can be imported by test modules to build activities
at known distances and times.
"""

import math
import sys
from datetime import date, datetime, time
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dayplanner.geo_math import EARTH_RADIUS_KM, distance_km, travel_time_minutes
from dayplanner.types import Activity, Coordinate, Location, TimeWindow, TravelMode

BASE_DATE = date(2025, 6, 1)

# Reference point (central Paris); offsets are measured due north of it
ORIGIN = Coordinate(lat=48.8566, lng=2.3522)

KM_PER_DEGREE_LAT = EARTH_RADIUS_KM * math.pi / 180


def at(hhmm: str, day: date = BASE_DATE) -> datetime:
    """Naive local datetime on the test day, e.g. at("09:30")."""
    hour, minute = (int(part) for part in hhmm.split(":"))
    return datetime.combine(day, time(hour, minute))


def north_of_origin(km: float) -> Coordinate:
    """
    Coordinate km kilometers due north of ORIGIN.

    Points on the same meridian make distances exact: two points at
    offsets a and b are |a - b| km apart.
    """
    return Coordinate(lat=ORIGIN.lat + km / KM_PER_DEGREE_LAT, lng=ORIGIN.lng)


def make_activity(
    activity_id: str,
    start: str = "09:00",
    end: str = "10:00",
    km: float = 0.0,
    coordinates: Coordinate | None = None,
    title: str | None = None,
    category: str = "sightseeing",
    cost: float | None = None,
    anchored: bool = False,
    day: date = BASE_DATE,
) -> Activity:
    """
    Build an activity from short-hand arguments.

    Args:
        activity_id: Unique id (also the default title)
        start: Start time "HH:MM" on the test day
        end: End time "HH:MM" on the test day
        km: Offset north of ORIGIN (ignored when coordinates is given)
        coordinates: Explicit location
        title: Display title (defaults to activity_id)
        category: Activity category
        cost: Optional cost
        anchored: Whether the time slot is fixed
        day: Date of the activity

    Returns:
        Activity instance
    """
    point = coordinates or north_of_origin(km)
    return Activity(
        id=activity_id,
        title=title or activity_id,
        location=Location(name=title or activity_id, coordinates=point),
        time_window=TimeWindow(start=at(start, day), end=at(end, day)),
        category=category,
        cost=cost,
        anchored=anchored,
    )


def route_minutes(activities: list[Activity], mode: TravelMode = "driving") -> float:
    """Total travel time visiting activities in the given order (no traffic)."""
    return sum(
        travel_time_minutes(distance_km(a.coordinates, b.coordinates), mode)
        for a, b in zip(activities, activities[1:])
    )


def ids(activities) -> list[str]:
    return [a.id for a in activities]
